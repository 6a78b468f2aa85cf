"""Events emitted by the comparers and consumed by every attached formatter.

Events arrive in strict nesting order: document, assembly, namespace, type,
member. ``*Started`` / ``*Finished`` pairs open and close a section; the
remaining events write content into the innermost open section.
"""

from dataclasses import dataclass

from apidiff.api_change import ApiChange


@dataclass(frozen=True)
class DocumentStarted:
    """Opens the report."""

    title: str


@dataclass(frozen=True)
class DocumentFinished:
    """Closes the report."""


@dataclass(frozen=True)
class AssemblyStarted:
    """Opens an assembly section."""

    name: str


@dataclass(frozen=True)
class AssemblyFinished:
    name: str


@dataclass(frozen=True)
class NamespaceStarted:
    """Opens a namespace section; action marks new and removed namespaces."""

    name: str
    action: str = ""  # "", "New " or "Removed "


@dataclass(frozen=True)
class NamespaceFinished:
    name: str


@dataclass(frozen=True)
class TypeAdded:
    """A type present only in the target, with its synthetic declaration."""

    namespace: str
    type_name: str
    declaration: tuple[str, ...]
    breaking: bool = False


@dataclass(frozen=True)
class TypeRemoved:
    """A type present only in the source; breaking unless it was experimental."""

    namespace: str
    type_name: str
    breaking: bool = True


@dataclass(frozen=True)
class TypeModificationStarted:
    """Opens the section of a paired type that differs."""

    namespace: str
    type_name: str


@dataclass(frozen=True)
class TypeModificationFinished:
    namespace: str
    type_name: str


@dataclass(frozen=True)
class RenderedMember:
    """One added or removed member as rendered C# text."""

    description: str
    obsolete: str = ""  # rendered [Obsolete] line, if any
    breaking: bool = False


@dataclass(frozen=True)
class MembersAdded:
    """Members of one group present only in the target."""

    group_name: str
    element_name: str
    members: tuple[RenderedMember, ...]
    enum_values: bool = False


@dataclass(frozen=True)
class MembersRemoved:
    """Members of one group present only in the source."""

    group_name: str
    element_name: str
    members: tuple[RenderedMember, ...]
    enum_values: bool = False


@dataclass(frozen=True)
class MemberModified:
    """Paired members of one group (or the base type) that differ."""

    section_name: str  # "Modified methods", "Modified base type"
    changes: tuple[ApiChange, ...]


@dataclass(frozen=True)
class AttributesModified:
    """Attribute changes of the type being compared."""

    change: ApiChange


ComparisonEvent = (
    DocumentStarted
    | DocumentFinished
    | AssemblyStarted
    | AssemblyFinished
    | NamespaceStarted
    | NamespaceFinished
    | TypeAdded
    | TypeRemoved
    | TypeModificationStarted
    | TypeModificationFinished
    | MembersAdded
    | MembersRemoved
    | MemberModified
    | AttributesModified
)
