"""Plain text rendering of the comparison event stream."""

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

INDENT = "    "
BREAKING_TAG = " [breaking]"


def _tag(breaking: bool) -> str:
    """Render the breaking tag, or nothing."""
    return BREAKING_TAG if breaking else ""


class PlainTextFormatter(Formatter):
    """Renders an indented text report with ``+``/``-`` markers and ``[breaking]`` tags."""

    name = "text"

    def document_header(self, title: str) -> list[str]:
        """Render the title underlined with ``=``."""
        return [title, "=" * len(title), ""]

    def assembly_header(self, name: str) -> list[str]:
        """Render an assembly heading."""
        return [f"Assembly: {name}", ""]

    def namespace_header(self, name: str, action: str) -> list[str]:
        """Render a namespace heading, prefixed with its action."""
        return [f"{action}Namespace {name}", ""]

    def type_modification_header(self, namespace: str, type_name: str) -> list[str]:
        """Render the heading line of a modified type."""
        return [f"Type Changed: {namespace}.{type_name}"]

    def type_modification_footer(self) -> list[str]:
        """Separate modified types by a blank line."""
        return [""]

    def type_added(self, event: TypeAdded) -> list[str]:
        """Render a new type with its indented declaration."""
        return [
            f"New Type: {event.namespace}.{event.type_name}{_tag(event.breaking)}",
            *(INDENT + line.replace("\t", INDENT) for line in event.declaration),
            "",
        ]

    def type_removed(self, event: TypeRemoved) -> list[str]:
        """Render a removed type line."""
        return [f"Removed Type: {event.namespace}.{event.type_name}{_tag(event.breaking)}", ""]

    def _member_block(self, action: str, sign: str, label: str, members: tuple[RenderedMember, ...]) -> list[str]:
        """Render a labelled list of signed members."""
        lines = [f"  {action} {label}:"]
        for member in members:
            if member.obsolete:
                lines.append(f"{INDENT}{sign} {member.obsolete}")
            lines.append(f"{INDENT}{sign} {member.description}{_tag(member.breaking)}")
        return lines

    def members_added(self, event: MembersAdded) -> list[str]:
        """Render added members with a ``+`` sign."""
        return self._member_block("Added", "+", member_label(event), event.members)

    def members_removed(self, event: MembersRemoved) -> list[str]:
        """Render removed members with a ``-`` sign."""
        return self._member_block("Removed", "-", member_label(event), event.members)

    def member_modified(self, event: MemberModified) -> list[str]:
        """Render the changes of one member group."""
        lines = [f"  {event.section_name}:"]
        for change in event.changes:
            lines.extend(self.render_diff(change))
        return lines

    def attributes_modified(self, event: AttributesModified) -> list[str]:
        """Render type attribute changes."""
        return ["  Modified attributes:", *self.render_diff(event.change)]

    def render_diff(self, change: ApiChange) -> list[str]:
        """Render each changed line as a ``-``/``+`` pair, unchanged lines as context."""
        out = []
        for line in change.lines():
            old, new = split_line(line)
            if not has_markers(line):
                out.append(f"{INDENT}  {old}")
                continue
            breaking = any(c.breaking for c in line)
            if old.strip():
                out.append(f"{INDENT}- {old}")
            if new.strip():
                out.append(f"{INDENT}+ {new}{_tag(breaking)}")
        return out
