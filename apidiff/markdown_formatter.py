"""Markdown rendering of the comparison event stream."""

from apidiff.api_change import ApiChange
from apidiff.comparison_events import (
    AttributesModified,
    MemberModified,
    MembersAdded,
    MembersRemoved,
    RenderedMember,
    TypeAdded,
    TypeRemoved,
)
from apidiff.formatter import Formatter, has_markers, member_label, split_line
from apidiff.md_codeblock import md_codeblock


class MarkdownFormatter(Formatter):
    """Renders ```csharp blocks for declarations and ```diff blocks for changes."""

    name = "markdown"

    def document_header(self, title: str) -> list[str]:
        """Render the report title."""
        return [f"# {title}", ""]

    def assembly_header(self, name: str) -> list[str]:
        """Render an assembly heading."""
        # serves as a table of content entry, so no "Assembly:" prefix
        return [f"## {name}.dll", ""]

    def namespace_header(self, name: str, action: str) -> list[str]:
        """Render a namespace heading, prefixed with its action."""
        return [f"### {action}Namespace {name}", ""]

    def type_modification_header(self, namespace: str, type_name: str) -> list[str]:
        """Render the heading of a modified type."""
        return [f"#### Type Changed: {namespace}.{type_name}", ""]

    def type_added(self, event: TypeAdded) -> list[str]:
        """Render a new type with its declaration in a csharp block."""
        return [
            f"#### New Type: {event.namespace}.{event.type_name}",
            "",
            *md_codeblock("csharp", list(event.declaration)),
        ]

    def type_removed(self, event: TypeRemoved) -> list[str]:
        """Render a removed type heading."""
        return [f"#### Removed Type {event.namespace}.{event.type_name}", ""]

    def _member_block(self, action: str, label: str, members: tuple[RenderedMember, ...]) -> list[str]:
        """Render a labelled csharp block of members."""
        lines: list[str] = []
        for member in members:
            if member.obsolete:
                lines.append(member.obsolete)
            lines.append(member.description)
        return [f"{action} {label}:", "", *md_codeblock("csharp", lines)]

    def members_added(self, event: MembersAdded) -> list[str]:
        return self._member_block("Added", member_label(event), event.members)

    def members_removed(self, event: MembersRemoved) -> list[str]:
        return self._member_block("Removed", member_label(event), event.members)

    def member_modified(self, event: MemberModified) -> list[str]:
        """Render the changes of one member group as a diff block."""
        lines: list[str] = []
        for change in event.changes:
            lines.extend(self.render_diff(change))
        return [f"{event.section_name}:", "", *md_codeblock("diff", lines)]

    def attributes_modified(self, event: AttributesModified) -> list[str]:
        """Render type attribute changes as a diff block."""
        return ["Modified attributes:", "", *md_codeblock("diff", self.render_diff(event.change))]

    def render_diff(self, change: ApiChange) -> list[str]:
        """A line carrying a change is split into ``-old`` and ``+new``."""
        out: list[str] = []
        for line in change.lines():
            old, new = split_line(line)
            if not has_markers(line):
                out.append(f" {old}")
                continue
            if old.strip():
                out.append(f"-{old}")
            if new.strip():
                out.append(f"+{new}")
        return out
