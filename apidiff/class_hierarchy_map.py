"""Lookup from type name to declared base type, used to trace hierarchy changes."""

import logging

from apidiff.api_declarations import ApiDocument, TypeDeclaration
from apidiff.api_diff_error import HierarchyMapError

logger = logging.getLogger(__name__)


def build_class_hierarchy_map(document: ApiDocument) -> dict[str, str | None]:
    """Map every type of ``document`` to its declared base type.

    Namespaced types are keyed ``Namespace.Name``; nested types are keyed
    ``Declaring/Nested``, the way base type references spell them.
    """
    hierarchy: dict[str, str | None] = {}
    for assembly in document.assemblies:
        for ns in assembly.namespaces:
            for type_decl in ns.types:
                key = f"{ns.name}.{type_decl.name}" if ns.name else type_decl.name
                _map_type(hierarchy, ns.name, key, type_decl)
    logger.debug("Built class hierarchy map with %d types", len(hierarchy))
    return hierarchy


def _map_type(
    hierarchy: dict[str, str | None], ns: str, key: str, type_decl: TypeDeclaration
) -> None:
    """Record one type and, recursively, its nested types."""
    if key in hierarchy:
        msg = f"type '{key}' is declared more than once"
        raise HierarchyMapError(msg, namespace=ns, type_name=type_decl.name)
    hierarchy[key] = type_decl.base
    for nested in type_decl.nested_types or ():
        _map_type(hierarchy, ns, f"{key}/{nested.name}", nested)


def is_base_change_compatible(
    hierarchy: dict[str, str | None], source_base: str | None, target_base: str | None
) -> bool:
    """Check whether ``target_base`` was inserted above ``source_base``.

    Changing ``class UIPointerStyle : NSObject`` into
    ``class UIPointerStyle : UIHoverStyle`` with ``UIHoverStyle : NSObject``
    keeps every existing base type in the chain, so it is compatible.

    Known limitation: an inserted type that adds abstract members or changes
    the behavior of the existing types is not detected.
    """
    if source_base is None or target_base is None:
        return False
    seen = {target_base}
    current = target_base
    while current in hierarchy:
        base = hierarchy[current]
        if base == source_base:
            return True
        if base is None or base in seen:
            return False
        seen.add(base)
        current = base
    return False
