"""Base class for rendering comparison events into a change report."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from apidiff.api_change import TEXT, ApiChange, DiffChunk
from apidiff.comparison_events import (
    AssemblyFinished,
    AssemblyStarted,
    AttributesModified,
    ComparisonEvent,
    DocumentFinished,
    DocumentStarted,
    MemberModified,
    MembersAdded,
    MembersRemoved,
    NamespaceFinished,
    NamespaceStarted,
    TypeAdded,
    TypeModificationFinished,
    TypeModificationStarted,
    TypeRemoved,
)

SPACES_RE = re.compile(r" {2,}")


@dataclass
class Section:
    """An open assembly, namespace or type section and its buffered output."""

    heading: list[str]
    footer: list[str]
    body: list[str] = field(default_factory=list)


def member_label(event: MembersAdded | MembersRemoved) -> str:
    """``method``/``methods``, or ``value``/``values`` for enum fields."""
    plural = len(event.members) > 1
    if event.enum_values:
        return "values" if plural else "value"
    return event.group_name if plural else event.element_name


def collapse_spaces(text: str) -> str:
    """Collapse runs of spaces left by empty diff fragments."""
    return SPACES_RE.sub(" ", text)


def has_markers(line: list[DiffChunk]) -> bool:
    """Check whether a diff line carries any change."""
    return any(chunk.kind != TEXT for chunk in line)


def split_line(line: list[DiffChunk]) -> tuple[str, str]:
    """Return the source and target rendering of one diff line."""
    old = collapse_spaces("".join(c.old for c in line))
    new = collapse_spaces("".join(c.new for c in line))
    return old, new


class Formatter(ABC):
    """Renders the comparison event stream into one output format.

    Every assembly, namespace and type-modification section is buffered
    while open and only written to its parent when something was rendered
    inside it, so a visited but unchanged type produces no heading.
    """

    name = ""

    def __init__(self) -> None:
        self._sections: list[Section] = [Section(heading=[], footer=[])]

    def handle(self, event: ComparisonEvent) -> None:
        """Render one event into the innermost open section."""
        if isinstance(event, DocumentStarted):
            self._write(self.document_header(event.title))
        elif isinstance(event, DocumentFinished):
            self._write(self.document_footer())
        elif isinstance(event, AssemblyStarted):
            self._open(self.assembly_header(event.name), self.assembly_footer())
        elif isinstance(event, NamespaceStarted):
            self._open(self.namespace_header(event.name, event.action), self.namespace_footer())
        elif isinstance(event, TypeModificationStarted):
            self._open(
                self.type_modification_header(event.namespace, event.type_name),
                self.type_modification_footer(),
            )
        elif isinstance(event, AssemblyFinished | NamespaceFinished | TypeModificationFinished):
            self._close()
        elif isinstance(event, TypeAdded):
            self._write(self.type_added(event))
        elif isinstance(event, TypeRemoved):
            self._write(self.type_removed(event))
        elif isinstance(event, MembersAdded):
            self._write(self.members_added(event))
        elif isinstance(event, MembersRemoved):
            self._write(self.members_removed(event))
        elif isinstance(event, MemberModified):
            self._write(self.member_modified(event))
        elif isinstance(event, AttributesModified):
            self._write(self.attributes_modified(event))
        else:
            msg = f"Unsupported comparison event: {event!r}"
            raise TypeError(msg)

    def getvalue(self) -> str:
        """Return the report rendered so far."""
        return "\n".join(self._sections[0].body).rstrip() + "\n"

    @property
    def depth(self) -> int:
        """Number of currently open sections."""
        return len(self._sections) - 1

    def _open(self, heading: list[str], footer: list[str]) -> None:
        """Open a buffered section."""
        self._sections.append(Section(heading=heading, footer=footer))

    def _close(self) -> None:
        """Close the innermost section, flushing it only if it has content."""
        if len(self._sections) == 1:
            msg = "Section closed without being opened"
            raise RuntimeError(msg)
        section = self._sections.pop()
        if section.body:
            self._write(section.heading + section.body + section.footer)

    def _write(self, lines: list[str]) -> None:
        """Write lines into the innermost open section."""
        self._sections[-1].body.extend(lines)

    # -----------------------------
    # Rendering hooks
    # -----------------------------

    @abstractmethod
    def document_header(self, title: str) -> list[str]: ...

    def document_footer(self) -> list[str]:
        """Render the end of the report."""
        return []

    @abstractmethod
    def assembly_header(self, name: str) -> list[str]: ...

    def assembly_footer(self) -> list[str]:
        """Render the end of an assembly section."""
        return []

    @abstractmethod
    def namespace_header(self, name: str, action: str) -> list[str]: ...

    def namespace_footer(self) -> list[str]:
        """Render the end of a namespace section."""
        return []

    @abstractmethod
    def type_modification_header(self, namespace: str, type_name: str) -> list[str]: ...

    def type_modification_footer(self) -> list[str]:
        """Render the end of a modified type section."""
        return []

    @abstractmethod
    def type_added(self, event: TypeAdded) -> list[str]: ...

    @abstractmethod
    def type_removed(self, event: TypeRemoved) -> list[str]: ...

    @abstractmethod
    def members_added(self, event: MembersAdded) -> list[str]: ...

    @abstractmethod
    def members_removed(self, event: MembersRemoved) -> list[str]: ...

    @abstractmethod
    def member_modified(self, event: MemberModified) -> list[str]: ...

    @abstractmethod
    def attributes_modified(self, event: AttributesModified) -> list[str]: ...

    @abstractmethod
    def render_diff(self, change: ApiChange) -> list[str]:
        """Render one change as format specific diff lines."""
