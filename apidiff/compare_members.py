"""Collection diff of one member group between a source and a target type."""

import logging
from collections import deque
from collections.abc import Hashable

from apidiff.api_change import ApiChange
from apidiff.api_declarations import MemberDeclaration, TypeDeclaration
from apidiff.comparison_events import MemberModified, MembersAdded, MembersRemoved, RenderedMember
from apidiff.comparison_state import ComparisonState
from apidiff.member_kinds import MemberKind
from apidiff.render_attributes import render_obsolete

logger = logging.getLogger(__name__)

ENUM_BASE = "System.Enum"


def render_member(
    kind: MemberKind, member: MemberDeclaration, type_decl: TypeDeclaration, breaking: bool = False
) -> RenderedMember:
    """Render one member for an added or removed list."""
    return RenderedMember(
        description=kind.describe(member, type_decl),
        obsolete=render_obsolete(member.obsolete) if member.obsolete else "",
        breaking=breaking,
    )


def pair_members(
    kind: MemberKind,
    source: tuple[MemberDeclaration, ...],
    target: tuple[MemberDeclaration, ...],
) -> tuple[
    list[tuple[MemberDeclaration, MemberDeclaration]],
    list[MemberDeclaration],
    list[MemberDeclaration],
]:
    """Pair members by identity; return (paired, removed, added).

    Members sharing an identity within one document are paired in
    declaration order.
    """
    pending: dict[Hashable, deque[int]] = {}
    for index, member in enumerate(target):
        pending.setdefault(kind.identity(member), deque()).append(index)
    _warn_duplicates(kind, source, "source")
    _warn_duplicates(kind, target, "target")

    paired: list[tuple[MemberDeclaration, MemberDeclaration]] = []
    removed: list[MemberDeclaration] = []
    used: set[int] = set()
    for member in source:
        queue = pending.get(kind.identity(member))
        if queue:
            index = queue.popleft()
            used.add(index)
            paired.append((member, target[index]))
        else:
            removed.append(member)
    added = [m for i, m in enumerate(target) if i not in used]
    return paired, removed, added


def _warn_duplicates(kind: MemberKind, members: tuple[MemberDeclaration, ...], side: str) -> None:
    """Log members whose identity is not unique within one document."""
    seen: set[Hashable] = set()
    for member in members:
        identity = kind.identity(member)
        if identity in seen:
            logger.warning(
                "Ambiguous %s '%s' in %s document; pairing in declaration order",
                kind.element_name,
                member.name,
                side,
            )
        seen.add(identity)


def compare_members(
    state: ComparisonState,
    kind: MemberKind,
    source_type: TypeDeclaration,
    target_type: TypeDeclaration,
) -> None:
    """Report modified, removed and added members of one group."""
    source = kind.members_of(source_type) or ()
    target = kind.members_of(target_type) or ()
    if source == target:
        return

    paired, removed, added = pair_members(kind, source, target)
    _report_modified(state, kind, paired, target_type)
    _report_removed(state, kind, removed, source_type)
    _report_added(state, kind, added, target_type)


def _report_modified(
    state: ComparisonState,
    kind: MemberKind,
    paired: list[tuple[MemberDeclaration, MemberDeclaration]],
    target_type: TypeDeclaration,
) -> None:
    """Emit one combined change for every modified member of the group."""
    changes = []
    for source, target in paired:
        if source == target:
            continue
        change = ApiChange(header=f"{state.qualified_type_name}.{source.name}")
        kind.diff(change, source, target, target_type)
        if not change.any_change:
            continue
        if state.ignore_nonbreaking and not change.breaking:
            continue
        changes.append(change)
    if changes:
        state.emit(MemberModified(f"Modified {kind.group_name}", tuple(changes)))


def _report_removed(
    state: ComparisonState,
    kind: MemberKind,
    removed: list[MemberDeclaration],
    source_type: TypeDeclaration,
) -> None:
    """Emit the removed members of the group; removals are breaking."""
    rendered = []
    for member in removed:
        item = render_member(kind, member, source_type, breaking=True)
        description = f"{state.qualified_type_name}: Removed {kind.element_name}: {item.description}"
        if state.is_ignored_removed(description):
            continue
        rendered.append(item)
    if rendered:
        enum_values = state.base_type == ENUM_BASE
        state.emit(
            MembersRemoved(kind.group_name, kind.element_name, tuple(rendered), enum_values=enum_values)
        )


def _report_added(
    state: ComparisonState,
    kind: MemberKind,
    added: list[MemberDeclaration],
    target_type: TypeDeclaration,
) -> None:
    """Emit the added members of the group, classified by the addition rule."""
    rendered = []
    for member in added:
        breaking = kind.is_breaking_addition(member, target_type)
        if state.ignore_nonbreaking and not breaking:
            continue
        item = render_member(kind, member, target_type, breaking=breaking)
        description = f"{state.qualified_type_name}: Added {kind.element_name}: {item.description}"
        if state.is_ignored_new(description):
            continue
        rendered.append(item)
    if rendered:
        enum_values = state.base_type == ENUM_BASE
        state.emit(
            MembersAdded(kind.group_name, kind.element_name, tuple(rendered), enum_values=enum_values)
        )
