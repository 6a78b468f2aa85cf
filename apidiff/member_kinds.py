"""Per-kind rules for identifying, rendering and diffing members.

Each kind of member (constructor, field, property, event, method) is
described by a ``MemberKind``: how two members are paired across documents,
how a member is rendered as a C# declaration, and how a paired member is
diffed. The pairing algorithm itself lives in ``compare_members``.
"""

from collections.abc import Callable, Hashable
from dataclasses import dataclass

from apidiff.api_change import ApiChange
from apidiff.api_declarations import MemberDeclaration, ParameterDeclaration, TypeDeclaration
from apidiff.member_flags import VISIBILITY_RANK, is_modifier_change_breaking, modifier_keywords
from apidiff.pretty_type_name import pretty_type_name
from apidiff.render_attributes import diff_attribute_lines, render_attribute_lines


@dataclass(frozen=True)
class MemberKind:
    """Identity, rendering and diffing rules for one kind of member."""

    group_name: str  # "methods"
    element_name: str  # "method"
    identity: Callable[[MemberDeclaration], Hashable]
    describe: Callable[[MemberDeclaration, TypeDeclaration], str]
    diff: Callable[[ApiChange, MemberDeclaration, MemberDeclaration, TypeDeclaration], None]

    def members_of(self, type_decl: TypeDeclaration) -> tuple[MemberDeclaration, ...] | None:
        """Return this group of the type; None when the group is absent."""
        return getattr(type_decl, self.group_name)

    def is_breaking_addition(self, member: MemberDeclaration, type_decl: TypeDeclaration) -> bool:
        """Adding an abstract member forces every implementer to change."""
        modifiers = member.modifiers
        if modifiers.is_abstract:
            return True
        return (
            type_decl.is_interface
            and self.element_name != "field"
            and not modifiers.is_static
            and not modifiers.is_virtual
        )


# -----------------------------
# Rendering
# -----------------------------


def _keywords(member: MemberDeclaration, type_decl: TypeDeclaration) -> str:
    """Render the modifier keywords of a member inside its type."""
    return " ".join(modifier_keywords(member.modifiers, in_interface=type_decl.is_interface))


def render_parameter(param: ParameterDeclaration) -> str:
    """Render one parameter, e.g. ``ref int count``."""
    prefix = f"{param.direction} " if param.direction else ""
    return f"{prefix}{pretty_type_name(param.type_name)} {param.name}"


def _parameter_list(member: MemberDeclaration) -> str:
    """Render a comma separated parameter list."""
    return ", ".join(render_parameter(p) for p in member.parameters)


def _generic_suffix(member: MemberDeclaration) -> str:
    """Render the generic parameter list of a method, if any."""
    if not member.generic_parameters:
        return ""
    return f"<{', '.join(member.generic_parameters)}>"


def constructor_name(type_decl: TypeDeclaration) -> str:
    """Return the name a constructor is declared with."""
    return type_decl.name.rsplit(".", 1)[-1].split("`", 1)[0]


def _render_value(member: MemberDeclaration) -> str:
    """Render the `` = value`` suffix of a constant or enum value."""
    if member.value is None:
        return ""
    if member.type_name == "System.String":
        return f' = "{member.value}"'
    if member.type_name == "System.Char":
        return f" = '{member.value}'"
    return f" = {member.value}"


def _accessor_text(member: MemberDeclaration, visibility: str | None, keyword: str) -> str:
    """Render one accessor, prefixed by its visibility when it is narrower."""
    if visibility and visibility != member.modifiers.visibility:
        return f"{visibility} {keyword};"
    return f"{keyword};"


def _accessors(member: MemberDeclaration) -> str:
    """Render the accessor block of a property, e.g. ``{ get; protected set; }``."""
    parts = []
    if member.has_getter:
        parts.append(_accessor_text(member, member.getter_visibility, "get"))
    if member.has_setter:
        parts.append(_accessor_text(member, member.setter_visibility, "set"))
    return "{ " + " ".join(parts) + " }"


def describe_constructor(member: MemberDeclaration, type_decl: TypeDeclaration) -> str:
    """Render a constructor declaration."""
    return (
        f"{_keywords(member, type_decl)} {constructor_name(type_decl)} "
        f"({_parameter_list(member)});"
    )


def describe_field(member: MemberDeclaration, type_decl: TypeDeclaration) -> str:
    """Render a field declaration, or an enum value."""
    if type_decl.is_enum:
        return f"{member.name}{_render_value(member)},"
    value = _render_value(member) if member.modifiers.is_const else ""
    return (
        f"{_keywords(member, type_decl)} {pretty_type_name(member.type_name)} "
        f"{member.name}{value};"
    )


def _property_name(member: MemberDeclaration) -> str:
    """Render a property name; indexers render as ``this [params]``."""
    if member.parameters:
        return f"this [{_parameter_list(member)}]"
    return member.name


def describe_property(member: MemberDeclaration, type_decl: TypeDeclaration) -> str:
    """Render a property declaration with its accessors."""
    return (
        f"{_keywords(member, type_decl)} {pretty_type_name(member.type_name)} "
        f"{_property_name(member)} {_accessors(member)}"
    )


def describe_event(member: MemberDeclaration, type_decl: TypeDeclaration) -> str:
    """Render an event declaration."""
    return (
        f"{_keywords(member, type_decl)} event {pretty_type_name(member.type_name)} "
        f"{member.name};"
    )


def describe_method(member: MemberDeclaration, type_decl: TypeDeclaration) -> str:
    """Render a method declaration."""
    return (
        f"{_keywords(member, type_decl)} {pretty_type_name(member.type_name)} "
        f"{member.name}{_generic_suffix(member)} ({_parameter_list(member)});"
    )


# -----------------------------
# Diffing
# -----------------------------


def _diff_attributes(change: ApiChange, source: MemberDeclaration, target: MemberDeclaration) -> None:
    """Diff the attribute lines above a member."""
    diff_attribute_lines(
        change,
        render_attribute_lines(source.attributes, source.obsolete),
        render_attribute_lines(target.attributes, target.obsolete),
        source_obsolete=source.obsolete,
        target_obsolete=target.obsolete,
    )


def _diff_text(change: ApiChange, old: str, new: str, *, breaking: bool) -> None:
    """Append shared text, or a modification when the two sides differ."""
    if old == new:
        change.append(old)
    else:
        change.append_modified(old, new, breaking=breaking)


def _diff_modifiers(
    change: ApiChange,
    source: MemberDeclaration,
    target: MemberDeclaration,
    type_decl: TypeDeclaration,
) -> None:
    """Diff the modifier keywords of a paired member."""
    _diff_text(
        change,
        _keywords(source, type_decl),
        _keywords(target, type_decl),
        breaking=is_modifier_change_breaking(source.modifiers, target.modifiers),
    )
    change.append(" ")


def _diff_type(change: ApiChange, source: MemberDeclaration, target: MemberDeclaration) -> None:
    """Diff the member type; any change is breaking."""
    _diff_text(
        change,
        pretty_type_name(source.type_name),
        pretty_type_name(target.type_name),
        breaking=True,
    )
    change.append(" ")


def _diff_parameters(change: ApiChange, source: MemberDeclaration, target: MemberDeclaration) -> None:
    """Diff parameter directions and names of a paired member."""
    for i, (s, t) in enumerate(zip(source.parameters, target.parameters, strict=False)):
        if i:
            change.append(", ")
        if s.direction != t.direction:
            old = f"{s.direction} " if s.direction else ""
            new = f"{t.direction} " if t.direction else ""
            change.append_modified(old, new, breaking=True)
        elif s.direction:
            change.append(f"{s.direction} ")
        change.append(pretty_type_name(t.type_name) + " ")
        # parameter names are not part of the binary contract
        _diff_text(change, s.name, t.name, breaking=False)


def _accessor_states(member: MemberDeclaration) -> tuple[tuple[bool, str | None], ...]:
    """Return (present, visibility) for the getter and the setter."""
    return (
        (member.has_getter, member.getter_visibility),
        (member.has_setter, member.setter_visibility),
    )


def _diff_accessors(change: ApiChange, source: MemberDeclaration, target: MemberDeclaration) -> None:
    """Diff the accessor block; removing or narrowing an accessor is breaking."""
    change.append("{ ")
    for keyword, (old_present, old_visibility), (new_present, new_visibility) in zip(
        ("get", "set"), _accessor_states(source), _accessor_states(target), strict=True
    ):
        old = _accessor_text(source, old_visibility, keyword) + " "
        new = _accessor_text(target, new_visibility, keyword) + " "
        if old_present and new_present:
            narrowed = (
                VISIBILITY_RANK[new_visibility or target.modifiers.visibility]
                < VISIBILITY_RANK[old_visibility or source.modifiers.visibility]
            )
            _diff_text(change, old, new, breaking=narrowed)
        elif old_present:
            change.append_removed(old, breaking=True)
        elif new_present:
            change.append_added(new, breaking=False)
    change.append("}")


def diff_constructor(
    change: ApiChange,
    source: MemberDeclaration,
    target: MemberDeclaration,
    type_decl: TypeDeclaration,
) -> None:
    """Diff a paired constructor."""
    _diff_attributes(change, source, target)
    _diff_modifiers(change, source, target, type_decl)
    change.append(f"{constructor_name(type_decl)} (")
    _diff_parameters(change, source, target)
    change.append(");")


def diff_field(
    change: ApiChange,
    source: MemberDeclaration,
    target: MemberDeclaration,
    type_decl: TypeDeclaration,
) -> None:
    """Diff a paired field; enum values and constants are compared by value."""
    _diff_attributes(change, source, target)
    if type_decl.is_enum:
        change.append(source.name)
        _diff_text(change, _render_value(source), _render_value(target), breaking=True)
        change.append(",")
        return
    _diff_modifiers(change, source, target, type_decl)
    _diff_type(change, source, target)
    change.append(source.name)
    if source.modifiers.is_const or target.modifiers.is_const:
        old = _render_value(source) if source.modifiers.is_const else ""
        new = _render_value(target) if target.modifiers.is_const else ""
        _diff_text(change, old, new, breaking=True)
    change.append(";")


def diff_property(
    change: ApiChange,
    source: MemberDeclaration,
    target: MemberDeclaration,
    type_decl: TypeDeclaration,
) -> None:
    """Diff a paired property or indexer."""
    _diff_attributes(change, source, target)
    _diff_modifiers(change, source, target, type_decl)
    _diff_type(change, source, target)
    if source.parameters:
        change.append("this [")
        _diff_parameters(change, source, target)
        change.append("] ")
    else:
        change.append(f"{source.name} ")
    _diff_accessors(change, source, target)


def diff_event(
    change: ApiChange,
    source: MemberDeclaration,
    target: MemberDeclaration,
    type_decl: TypeDeclaration,
) -> None:
    """Diff a paired event."""
    _diff_attributes(change, source, target)
    _diff_modifiers(change, source, target, type_decl)
    change.append("event ")
    _diff_type(change, source, target)
    change.append(f"{source.name};")


def diff_method(
    change: ApiChange,
    source: MemberDeclaration,
    target: MemberDeclaration,
    type_decl: TypeDeclaration,
) -> None:
    """Diff a paired method."""
    _diff_attributes(change, source, target)
    _diff_modifiers(change, source, target, type_decl)
    _diff_type(change, source, target)
    change.append(f"{source.name}{_generic_suffix(target)} (")
    _diff_parameters(change, source, target)
    change.append(");")


def _parameter_types(member: MemberDeclaration) -> tuple[str, ...]:
    """Return the parameter types that identify an overload."""
    return tuple(p.type_name for p in member.parameters)


CONSTRUCTORS = MemberKind(
    group_name="constructors",
    element_name="constructor",
    identity=_parameter_types,
    describe=describe_constructor,
    diff=diff_constructor,
)

FIELDS = MemberKind(
    group_name="fields",
    element_name="field",
    identity=lambda m: m.name,
    describe=describe_field,
    diff=diff_field,
)

PROPERTIES = MemberKind(
    group_name="properties",
    element_name="property",
    identity=lambda m: (m.name, _parameter_types(m)),
    describe=describe_property,
    diff=diff_property,
)

EVENTS = MemberKind(
    group_name="events",
    element_name="event",
    identity=lambda m: m.name,
    describe=describe_event,
    diff=diff_event,
)

METHODS = MemberKind(
    group_name="methods",
    element_name="method",
    identity=lambda m: (m.name, len(m.generic_parameters), _parameter_types(m)),
    describe=describe_method,
    diff=diff_method,
)

# Comparison order of the member groups of a type.
MEMBER_KINDS = (CONSTRUCTORS, FIELDS, PROPERTIES, EVENTS, METHODS)
