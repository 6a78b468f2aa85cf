"""Walk two API documents in parallel: assemblies, namespaces, then types."""

import logging

from apidiff.api_declarations import ApiDocument, AssemblyDeclaration, NamespaceDeclaration
from apidiff.class_comparer import added_type, compare_types, removed_type
from apidiff.comparison_events import (
    AssemblyFinished,
    AssemblyStarted,
    DocumentFinished,
    DocumentStarted,
    NamespaceFinished,
    NamespaceStarted,
)
from apidiff.comparison_state import ComparisonState

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "API diff"


def compare_documents(
    state: ComparisonState,
    source: ApiDocument,
    target: ApiDocument,
    title: str = DEFAULT_TITLE,
) -> None:
    """Compare ``source`` (old) with ``target`` (new) and emit the report events."""
    state.emit(DocumentStarted(title))
    target_by_name = {a.name: a for a in target.assemblies}
    for assembly in source.assemblies:
        counterpart = target_by_name.pop(assembly.name, None)
        compare_assemblies(state, assembly, counterpart or AssemblyDeclaration(assembly.name))
    for assembly in target.assemblies:
        if assembly.name in target_by_name:
            compare_assemblies(state, AssemblyDeclaration(assembly.name), assembly)
    state.emit(DocumentFinished())


def compare_assemblies(
    state: ComparisonState, source: AssemblyDeclaration, target: AssemblyDeclaration
) -> None:
    """Compare two assemblies namespace by namespace."""
    if source == target:
        return
    logger.info("Comparing assembly %s (%s -> %s)", target.name, source.version, target.version)
    state.emit(AssemblyStarted(target.name))
    target_by_name = {ns.name: ns for ns in target.namespaces}
    for ns in source.namespaces:
        counterpart = target_by_name.pop(ns.name, None)
        if counterpart is None:
            removed_namespace(state, ns)
        else:
            compare_namespaces(state, ns, counterpart)
    for ns in target.namespaces:
        if ns.name in target_by_name:
            added_namespace(state, ns)
    state.emit(AssemblyFinished(target.name))


def compare_namespaces(
    state: ComparisonState, source: NamespaceDeclaration, target: NamespaceDeclaration
) -> None:
    """Compare the types of two namespaces with the same name."""
    if source == target:
        return
    with state.entering_namespace(target.name):
        state.emit(NamespaceStarted(target.name))
        compare_types(state, source.types, target.types)
        state.emit(NamespaceFinished(target.name))


def added_namespace(state: ComparisonState, ns: NamespaceDeclaration) -> None:
    """Report a namespace only in the target with every type added."""
    with state.entering_namespace(ns.name):
        if state.is_ignored_new(f"{ns.name}: Added namespace"):
            return
        state.emit(NamespaceStarted(ns.name, "New "))
        for type_decl in ns.types:
            added_type(state, type_decl)
        state.emit(NamespaceFinished(ns.name))


def removed_namespace(state: ComparisonState, ns: NamespaceDeclaration) -> None:
    """Report a namespace only in the source with every type removed."""
    with state.entering_namespace(ns.name):
        if state.is_ignored_removed(f"{ns.name}: Removed namespace"):
            return
        state.emit(NamespaceStarted(ns.name, "Removed "))
        for type_decl in ns.types:
            removed_type(state, type_decl)
        state.emit(NamespaceFinished(ns.name))
