"""Logic for loading serialized API surface documents (XML)."""

import logging
from pathlib import Path

from lxml import etree

from apidiff.api_declarations import (
    ApiDocument,
    AssemblyDeclaration,
    AttributeDeclaration,
    MemberDeclaration,
    MemberModifiers,
    NamespaceDeclaration,
    ObsoleteMarker,
    ParameterDeclaration,
    TypeDeclaration,
)
from apidiff.api_diff_error import MalformedDocumentError
from apidiff.member_flags import (
    VISIBILITY_RANK,
    decode_field_modifiers,
    decode_method_modifiers,
    parse_attrib,
)

logger = logging.getLogger(__name__)

OBSOLETE_ATTRIBUTE = "System.ObsoleteAttribute"
EXPERIMENTAL_ATTRIBUTE = "System.Diagnostics.CodeAnalysis.ExperimentalAttribute"

# (group element, member element, kind)
MEMBER_GROUPS = (
    ("constructors", "constructor", "constructor"),
    ("fields", "field", "field"),
    ("properties", "property", "property"),
    ("events", "event", "event"),
    ("methods", "method", "method"),
)


def load_api_document(path: Path) -> ApiDocument:
    """Load and parse an API surface XML file."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise MalformedDocumentError(f"unable to read '{path}': {exc}") from exc
    document = parse_api_document(raw)
    logger.info("Loaded %s (%d assemblies)", path, len(document.assemblies))
    return document


def parse_api_document(xml: str | bytes) -> ApiDocument:
    """Parse API surface XML into an immutable ApiDocument."""
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    try:
        root = etree.fromstring(xml)
    except etree.XMLSyntaxError as exc:
        msg = f"invalid XML: {exc}"
        raise MalformedDocumentError(msg) from exc

    if root.tag != "assemblies":
        msg = f"expected root element <assemblies>, found <{root.tag}>"
        raise MalformedDocumentError(msg)

    return ApiDocument(
        assemblies=tuple(_load_assembly(a) for a in root.iterchildren("assembly"))
    )


def _required(element: etree._Element, name: str, **where: str | None) -> str:
    """Return a required XML attribute or fail naming its location."""
    value = element.get(name)
    if value is None:
        msg = f"missing attribute '{name}' on <{element.tag}> (line {element.sourceline})"
        raise MalformedDocumentError(msg, **where)
    return value


def _is_true(element: etree._Element, name: str) -> bool:
    """Read a boolean XML attribute."""
    return (element.get(name) or "").lower() == "true"


def _load_assembly(element: etree._Element) -> AssemblyDeclaration:
    """Load one assembly element with its namespaces."""
    name = _required(element, "name")
    namespaces = []
    for group in element.iterchildren("namespaces"):
        namespaces.extend(_load_namespace(ns) for ns in group.iterchildren("namespace"))
    return AssemblyDeclaration(
        name=name, version=element.get("version"), namespaces=tuple(namespaces)
    )


def _load_namespace(element: etree._Element) -> NamespaceDeclaration:
    """Load one namespace element with its types."""
    ns = _required(element, "name")
    types = _load_types(element, ns, None) or ()
    return NamespaceDeclaration(name=ns, types=types)


def _load_types(
    element: etree._Element, ns: str, parent: str | None
) -> tuple[TypeDeclaration, ...] | None:
    """Load the nested classes group; None when the group is absent."""
    group = element.find("classes")
    if group is None:
        return None
    types = []
    seen: set[str] = set()
    for child in group.iterchildren("class"):
        decl = _load_type(child, ns, parent)
        if decl.name in seen:
            msg = "duplicate type declaration"
            raise MalformedDocumentError(msg, namespace=ns, type_name=_qualify(parent, decl.name))
        seen.add(decl.name)
        types.append(decl)
    return tuple(types)


def _qualify(parent: str | None, name: str) -> str:
    """Qualify a nested type name with its declaring type."""
    return f"{parent}.{name}" if parent else name


def _load_type(element: etree._Element, ns: str, parent: str | None) -> TypeDeclaration:
    """Load one class element, member groups and nested types included."""
    name = _required(element, "name", namespace=ns, type_name=parent)
    where = {"namespace": ns, "type_name": _qualify(parent, name)}
    kind = _required(element, "type", **where)
    attributes = _load_attributes(element)

    groups: dict[str, tuple[MemberDeclaration, ...] | None] = {}
    for group_name, element_name, member_kind in MEMBER_GROUPS:
        group = element.find(group_name)
        if group is None:
            groups[group_name] = None
            continue
        groups[group_name] = tuple(
            _load_member(m, member_kind, where) for m in group.iterchildren(element_name)
        )

    interfaces = None
    iface_group = element.find("interfaces")
    if iface_group is not None:
        interfaces = tuple(
            _required(i, "name", **where) for i in iface_group.iterchildren("interface")
        )

    return TypeDeclaration(
        name=name,
        kind=kind,
        base=element.get("base"),
        is_sealed=_is_true(element, "sealed"),
        is_abstract=_is_true(element, "abstract"),
        is_serializable=_is_true(element, "serializable"),
        is_experimental=any(a.name == EXPERIMENTAL_ATTRIBUTE for a in attributes),
        interfaces=interfaces,
        attributes=tuple(a for a in attributes if a.name != OBSOLETE_ATTRIBUTE),
        obsolete=_obsolete_marker(attributes),
        constructors=groups["constructors"],
        fields=groups["fields"],
        properties=groups["properties"],
        events=groups["events"],
        methods=groups["methods"],
        nested_types=_load_types(element, ns, _qualify(parent, name)),
    )


def _load_attributes(element: etree._Element) -> tuple[AttributeDeclaration, ...]:
    """Load the custom attributes applied to a type or member."""
    group = element.find("attributes")
    if group is None:
        return ()
    attributes = []
    for attr in group.iterchildren("attribute"):
        name = attr.get("name")
        if not name:
            continue
        props = tuple(
            (p.get("name", ""), p.get("value", ""))
            for p in attr.iterfind("properties/property")
        )
        attributes.append(AttributeDeclaration(name=name, properties=props))
    return tuple(attributes)


def _obsolete_marker(attributes: tuple[AttributeDeclaration, ...]) -> ObsoleteMarker | None:
    """Extract the obsolete marker from an attribute list."""
    for attr in attributes:
        if attr.name != OBSOLETE_ATTRIBUTE:
            continue
        props = dict(attr.properties)
        return ObsoleteMarker(
            message=props.get("Message") or None,
            is_error=props.get("IsError", "").lower() == "true",
        )
    return None


def _attrib(element: etree._Element, where: dict[str, str]) -> int:
    """Read the ``attrib`` flags of a member or accessor element."""
    value = element.get("attrib")
    try:
        return parse_attrib(value)
    except ValueError as exc:
        msg = f"invalid attrib '{value}' on <{element.tag}> (line {element.sourceline})"
        raise MalformedDocumentError(msg, **where) from exc


def _widest(modifiers: list[MemberModifiers]) -> MemberModifiers:
    """Pick the accessor whose visibility is the property's declared one."""
    return max(modifiers, key=lambda m: VISIBILITY_RANK[m.visibility])


def _load_member(
    element: etree._Element, kind: str, where: dict[str, str]
) -> MemberDeclaration:
    """Load one constructor, field, property, event or method element."""
    raw_name = _required(element, "name", **where)
    attributes = _load_attributes(element)
    common = {
        "kind": kind,
        "name": raw_name.split("(", 1)[0],
        "attributes": tuple(a for a in attributes if a.name != OBSOLETE_ATTRIBUTE),
        "obsolete": _obsolete_marker(attributes),
    }

    if kind == "field":
        return MemberDeclaration(
            modifiers=decode_field_modifiers(_attrib(element, where)),
            type_name=element.get("fieldtype"),
            value=element.get("value"),
            **common,
        )

    if kind in ("property", "event"):
        accessors = [
            (m.get("name", ""), decode_method_modifiers(_attrib(m, where)))
            for m in element.iterfind("methods/method")
        ]
        getter = next((mods for n, mods in accessors if n.startswith("get_")), None)
        setter = next((mods for n, mods in accessors if n.startswith("set_")), None)
        modifiers = _widest([mods for _, mods in accessors]) if accessors else MemberModifiers()
        type_attr = "ptype" if kind == "property" else "eventtype"
        return MemberDeclaration(
            modifiers=modifiers,
            type_name=element.get(type_attr),
            parameters=_index_parameters(element),
            has_getter=getter is not None,
            has_setter=setter is not None,
            getter_visibility=getter.visibility if getter else None,
            setter_visibility=setter.visibility if setter else None,
            **common,
        )

    generics = tuple(
        g.get("name", "") for g in element.iterfind("generic-parameters/generic-parameter")
    )
    return MemberDeclaration(
        modifiers=decode_method_modifiers(_attrib(element, where)),
        type_name=element.get("returntype") if kind == "method" else None,
        parameters=_load_parameters(element),
        generic_parameters=generics,
        **common,
    )


def _load_parameters(element: etree._Element) -> tuple[ParameterDeclaration, ...]:
    """Load the parameters of a method, constructor or indexer."""
    params = []
    for p in element.iterfind("parameters/parameter"):
        type_name = p.get("type", "")
        direction = p.get("direction", "")
        if direction == "" and type_name.endswith("&"):
            direction = "ref"
        if _is_true(p, "params"):
            direction = "params"
        params.append(
            ParameterDeclaration(name=p.get("name", ""), type_name=type_name, direction=direction)
        )
    return tuple(params)


def _index_parameters(element: etree._Element) -> tuple[ParameterDeclaration, ...]:
    """Load indexer parameters, falling back to the params attribute."""
    params = _load_parameters(element)
    if params:
        return params
    # indexers serialize their parameter types as a comma separated list
    raw = element.get("params") or ""
    return tuple(
        ParameterDeclaration(name=f"arg{i}", type_name=t.strip())
        for i, t in enumerate(raw.split(","))
        if t.strip()
    )
