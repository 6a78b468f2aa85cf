"""HTML rendering of the comparison event stream."""

from html import escape

from apidiff.api_change import ADDED, MODIFIED, REMOVED, ApiChange, DiffChunk
from apidiff.comparison_events import (
    AttributesModified,
    MemberModified,
    MembersAdded,
    MembersRemoved,
    RenderedMember,
    TypeAdded,
    TypeRemoved,
)
from apidiff.formatter import Formatter, collapse_spaces, member_label


def _breaking_attrs(css: str, breaking: bool) -> str:
    """Render the class and data attributes marking a change as (non-)breaking."""
    if breaking:
        return f"class='{css} breaking' data-is-breaking"
    return f"class='{css}' data-is-non-breaking"


def _span(css: str, text: str, breaking: bool) -> str:
    """Render escaped text inside a change span."""
    return f"<span {_breaking_attrs(css, breaking)}>{escape(text)}</span>"


class HtmlFormatter(Formatter):
    """Renders sections as headings and declarations as ``<pre>`` blocks."""

    name = "html"

    def document_header(self, title: str) -> list[str]:
        """Render the report title."""
        return [f"<h1>{escape(title)}</h1>"]

    def assembly_header(self, name: str) -> list[str]:
        """Render an assembly heading."""
        return [f"<h2>Assembly: {escape(name)}</h2>"]

    def namespace_header(self, name: str, action: str) -> list[str]:
        """Render a namespace heading, prefixed with its action."""
        return [f"<h3>{escape(action)}Namespace {escape(name)}</h3>"]

    def type_modification_header(self, namespace: str, type_name: str) -> list[str]:
        """Open the div of a modified type."""
        full_name = escape(f"{namespace}.{type_name}")
        return [f"<div id='{full_name}'>", f"<h3>Type Changed: {full_name}</h3>"]

    def type_modification_footer(self) -> list[str]:
        """Close the div of a modified type."""
        return ["</div>"]

    def type_added(self, event: TypeAdded) -> list[str]:
        """Render a new type with its declaration in a pre block."""
        full_name = escape(f"{event.namespace}.{event.type_name}")
        return [
            f"<div id='{full_name}'>",
            f"<h3>New Type: {full_name}</h3>",
            f"<pre {_breaking_attrs('added', event.breaking)}>",
            *(escape(line) for line in event.declaration),
            "</pre>",
            "</div>",
        ]

    def type_removed(self, event: TypeRemoved) -> list[str]:
        """Render a removed type heading."""
        full_name = f"{event.namespace}.{event.type_name}"
        return [f"<h3>Removed Type {_span('removed', full_name, event.breaking)}</h3>"]

    def _member_block(
        self, action: str, css: str, label: str, element: str, members: tuple[RenderedMember, ...]
    ) -> list[str]:
        """Render a labelled pre block of member spans."""
        lines = [f"<p>{action} {escape(label)}:</p>", "<pre>"]
        for member in members:
            if member.obsolete:
                lines.append(escape(member.obsolete))
            lines.append(_span(f"{css} {css}-{element}", member.description, member.breaking))
        lines.append("</pre>")
        return lines

    def members_added(self, event: MembersAdded) -> list[str]:
        return self._member_block(
            "Added", "added", member_label(event), event.element_name, event.members
        )

    def members_removed(self, event: MembersRemoved) -> list[str]:
        return self._member_block(
            "Removed", "removed", member_label(event), event.element_name, event.members
        )

    def member_modified(self, event: MemberModified) -> list[str]:
        """Render the changes of one member group."""
        lines = [f"<p>{escape(event.section_name)}:</p>", "<pre>"]
        for change in event.changes:
            lines.extend(self.render_diff(change))
        lines.append("</pre>")
        return lines

    def attributes_modified(self, event: AttributesModified) -> list[str]:
        """Render type attribute changes."""
        return ["<p>Modified attributes:</p>", "<pre>", *self.render_diff(event.change), "</pre>"]

    def render_diff(self, change: ApiChange) -> list[str]:
        """Changes are rendered inline as removed/added spans."""
        return [collapse_spaces("".join(self._chunk(c) for c in line)) for line in change.lines()]

    def _chunk(self, chunk: DiffChunk) -> str:
        """Render one diff chunk as inline HTML."""
        if chunk.kind == ADDED:
            return _span("added added-inline", chunk.new, chunk.breaking)
        if chunk.kind == REMOVED:
            return _span("removed removed-inline", chunk.old, chunk.breaking)
        if chunk.kind == MODIFIED:
            return (
                _span("removed removed-inline", chunk.old, chunk.breaking)
                + " "
                + _span("added added-inline", chunk.new, chunk.breaking)
            )
        return escape(chunk.old)
