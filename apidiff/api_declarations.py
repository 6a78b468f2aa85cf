"""Data models for representing a serialized API surface."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AttributeDeclaration:
    """Represents a custom attribute applied to a type or member."""

    name: str  # e.g. System.FlagsAttribute
    properties: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ObsoleteMarker:
    """Represents an [Obsolete] marker on a type or member."""

    message: str | None = None
    is_error: bool = False


@dataclass(frozen=True)
class MemberModifiers:
    """Decoded modifier flags of a member."""

    visibility: str = "public"  # public/protected/internal/private
    is_static: bool = False
    is_abstract: bool = False
    is_virtual: bool = False
    is_final: bool = False
    is_new_slot: bool = False
    is_readonly: bool = False
    is_const: bool = False


@dataclass(frozen=True)
class ParameterDeclaration:
    """Represents a single method, constructor or indexer parameter."""

    name: str
    type_name: str
    direction: str = ""  # "", ref, out, in, params


@dataclass(frozen=True)
class MemberDeclaration:
    """Represents a constructor, field, property, event or method."""

    kind: str  # constructor/field/property/event/method
    name: str
    modifiers: MemberModifiers = MemberModifiers()
    type_name: str | None = None  # return/field/property/event type
    parameters: tuple[ParameterDeclaration, ...] = ()
    generic_parameters: tuple[str, ...] = ()
    value: str | None = None  # constant and enum values
    has_getter: bool = False
    has_setter: bool = False
    # accessor visibility; differs from modifiers.visibility for e.g. `protected set;`
    getter_visibility: str | None = None
    setter_visibility: str | None = None
    attributes: tuple[AttributeDeclaration, ...] = ()
    obsolete: ObsoleteMarker | None = None


@dataclass(frozen=True)
class TypeDeclaration:
    """Represents a class, struct, interface, enum or delegate."""

    name: str
    kind: str
    base: str | None = None
    is_sealed: bool = False
    is_abstract: bool = False
    is_serializable: bool = False
    is_experimental: bool = False
    interfaces: tuple[str, ...] | None = None
    attributes: tuple[AttributeDeclaration, ...] = ()
    obsolete: ObsoleteMarker | None = None
    # None means the group element is absent from the document.
    constructors: tuple[MemberDeclaration, ...] | None = None
    fields: tuple[MemberDeclaration, ...] | None = None
    properties: tuple[MemberDeclaration, ...] | None = None
    events: tuple[MemberDeclaration, ...] | None = None
    methods: tuple[MemberDeclaration, ...] | None = None
    nested_types: tuple["TypeDeclaration", ...] | None = None

    @property
    def is_enum(self) -> bool:
        """True for enum declarations."""
        return self.kind == "enum"

    @property
    def is_interface(self) -> bool:
        """True for interface declarations."""
        return self.kind == "interface"


@dataclass(frozen=True)
class NamespaceDeclaration:
    """Represents a namespace and the types it declares."""

    name: str
    types: tuple[TypeDeclaration, ...] = ()


@dataclass(frozen=True)
class AssemblyDeclaration:
    """Represents one assembly of an API document."""

    name: str
    version: str | None = None
    namespaces: tuple[NamespaceDeclaration, ...] = ()


@dataclass(frozen=True)
class ApiDocument:
    """A loaded API surface: assemblies, namespaces, types and members."""

    assemblies: tuple[AssemblyDeclaration, ...] = ()
