"""Comparison of type declarations: attributes, base type, interfaces, members.

Nested types are compared recursively; while a type is being compared the
comparison state qualifies nested names with their declaring type, so a
nested type is reported as ``Namespace.Outer.Inner``.
"""

import logging

from apidiff.api_change import ApiChange
from apidiff.api_declarations import TypeDeclaration
from apidiff.class_hierarchy_map import is_base_change_compatible
from apidiff.compare_members import compare_members
from apidiff.comparison_events import (
    AttributesModified,
    MemberModified,
    MembersAdded,
    MembersRemoved,
    RenderedMember,
    TypeAdded,
    TypeModificationFinished,
    TypeModificationStarted,
    TypeRemoved,
)
from apidiff.comparison_state import ComparisonState
from apidiff.member_kinds import FIELDS, MEMBER_KINDS
from apidiff.pretty_type_name import pretty_type_name
from apidiff.render_attributes import (
    diff_attribute_lines,
    render_attribute_lines,
    render_obsolete,
)

logger = logging.getLogger(__name__)

IMPLICIT_BASE = "System.Object"
SERIALIZABLE = "[Serializable]"


def compare_types(
    state: ComparisonState,
    source_types: tuple[TypeDeclaration, ...],
    target_types: tuple[TypeDeclaration, ...],
) -> None:
    """Pair types by name and report modified, removed and added types."""
    by_name = {t.name: t for t in target_types}
    for source in source_types:
        target = by_name.pop(source.name, None)
        if target is None:
            removed_type(state, source)
        else:
            compare_type(state, source, target)
    for target in target_types:
        if target.name in by_name:
            added_type(state, target)


def compare_type(state: ComparisonState, source: TypeDeclaration, target: TypeDeclaration) -> None:
    """Report every change between two declarations of the same type."""
    if source == target:
        return
    with state.entering_type(target):
        namespace, type_name = state.namespace, state.type_name
        state.emit(TypeModificationStarted(namespace, type_name))
        _compare_attributes(state, source, target)
        _compare_base_type(state, source, target)
        _compare_interfaces(state, source, target)
        for kind in MEMBER_KINDS:
            compare_members(state, kind, source, target)
        if source.nested_types is not None or target.nested_types is not None:
            compare_types(state, source.nested_types or (), target.nested_types or ())
        state.emit(TypeModificationFinished(namespace, type_name))


def added_type(state: ComparisonState, type_decl: TypeDeclaration) -> None:
    """Report a type present only in the target with its full declaration."""
    with state.entering_type(type_decl):
        if state.is_ignored_new(f"{state.qualified_type_name}: Added type"):
            return
        state.emit(
            TypeAdded(
                state.namespace,
                state.type_name,
                tuple(render_type_declaration(type_decl)),
            )
        )


def removed_type(state: ComparisonState, type_decl: TypeDeclaration) -> None:
    """Report a type present only in the source; members are not listed."""
    with state.entering_type(type_decl):
        if state.is_ignored_removed(f"{state.qualified_type_name}: Removed type"):
            return
        if state.ignore_nonbreaking and type_decl.is_experimental:
            return
        state.emit(
            TypeRemoved(
                state.namespace,
                state.type_name,
                breaking=not type_decl.is_experimental,
            )
        )


# -----------------------------
# Modified types
# -----------------------------


def _type_attribute_lines(type_decl: TypeDeclaration) -> list[str]:
    """Render the attribute lines of a type, ``[Serializable]`` first."""
    lines = [SERIALIZABLE] if type_decl.is_serializable else []
    return lines + render_attribute_lines(type_decl.attributes, type_decl.obsolete)


def _compare_attributes(state: ComparisonState, source: TypeDeclaration, target: TypeDeclaration) -> None:
    """Report attribute changes of a paired type."""
    source_lines = _type_attribute_lines(source)
    target_lines = _type_attribute_lines(target)
    if source_lines == target_lines:
        return
    change = diff_attribute_lines(
        ApiChange(header=state.qualified_type_name),
        source_lines,
        target_lines,
        source_obsolete=source.obsolete,
        target_obsolete=target.obsolete,
    )
    if change.any_change and not (state.ignore_nonbreaking and not change.breaking):
        state.emit(AttributesModified(change))


def _effective_base(base: str | None) -> str | None:
    """Treat an implicit ``System.Object`` base as no base."""
    return None if base == IMPLICIT_BASE else base


def _compare_base_type(state: ComparisonState, source: TypeDeclaration, target: TypeDeclaration) -> None:
    """Report a base type change, classified through the hierarchy map."""
    sb, tb = source.base, target.base
    if _effective_base(sb) == _effective_base(tb):
        return
    description = f"{state.qualified_type_name}: Modified base type: '{sb}' to '{tb}'"
    if state.is_ignored_removed(description):
        return
    compatible = is_base_change_compatible(state.class_hierarchy_map, sb, tb)
    if state.ignore_nonbreaking and compatible:
        logger.debug("Compatible base type change of %s ignored", state.qualified_type_name)
        return
    change = ApiChange(header=state.qualified_type_name).append_modified(
        pretty_type_name(sb), pretty_type_name(tb), breaking=not compatible
    )
    state.emit(MemberModified("Modified base type", (change,)))


def _compare_interfaces(state: ComparisonState, source: TypeDeclaration, target: TypeDeclaration) -> None:
    """Report removed (breaking) and added interfaces."""
    if target.is_enum:
        return
    source_ifaces = source.interfaces or ()
    target_ifaces = target.interfaces or ()
    removed = []
    for name in source_ifaces:
        if name in target_ifaces:
            continue
        description = pretty_type_name(name)
        if state.is_ignored_removed(f"{state.qualified_type_name}: Removed interface: {description}"):
            continue
        removed.append(RenderedMember(description, breaking=True))
    if removed:
        state.emit(MembersRemoved("interfaces", "interface", tuple(removed)))

    added = []
    for name in target_ifaces:
        if name in source_ifaces or state.ignore_nonbreaking:
            continue
        description = pretty_type_name(name)
        if state.is_ignored_new(f"{state.qualified_type_name}: Added interface: {description}"):
            continue
        added.append(RenderedMember(description))
    if added:
        state.emit(MembersAdded("interfaces", "interface", tuple(added)))


# -----------------------------
# Added types
# -----------------------------


def _type_modifiers(type_decl: TypeDeclaration) -> str:
    """Render the type modifiers of a synthetic declaration."""
    kind = type_decl.kind
    if kind == "enum":
        return ""
    if type_decl.is_sealed and type_decl.is_abstract:
        return " static"
    if type_decl.is_sealed and kind not in ("struct", "delegate"):
        return " sealed"
    if type_decl.is_abstract and kind != "interface":
        return " abstract"
    return ""


def _type_header(type_decl: TypeDeclaration) -> str:
    """Render the opening line of a synthetic declaration."""
    kind = type_decl.kind
    header = f"public{_type_modifiers(type_decl)} {kind} {type_decl.name}"
    supertypes = []
    if kind not in ("enum", "struct", "delegate") and _effective_base(type_decl.base):
        supertypes.append(pretty_type_name(type_decl.base))
    # interfaces of enums are implied by System.Enum, not declared by the user
    if kind != "enum" and type_decl.interfaces:
        supertypes.extend(pretty_type_name(i) for i in type_decl.interfaces)
    if supertypes:
        header += " : " + ", ".join(supertypes)
    return header + " {"


def render_type_declaration(type_decl: TypeDeclaration, indent: int = 0) -> list[str]:
    """Render a synthetic C# declaration with every member of the type."""
    pad = "\t" * indent
    inner = pad + "\t"
    lines = [pad + line for line in _type_attribute_lines(type_decl)]
    lines.append(pad + _type_header(type_decl))

    for kind in MEMBER_KINDS:
        members = kind.members_of(type_decl)
        if members is None:
            continue
        if not (kind is FIELDS and type_decl.is_enum):
            lines.append(f"{inner}// {kind.group_name}")
        for member in members:
            if member.obsolete:
                lines.append(inner + render_obsolete(member.obsolete))
            lines.append(inner + kind.describe(member, type_decl))

    if type_decl.nested_types is not None:
        lines.append("")
        lines.append(f"{inner}// inner types")
        for nested in type_decl.nested_types:
            lines.extend(render_type_declaration(nested, indent + 1))

    lines.append(pad + "}")
    return lines
