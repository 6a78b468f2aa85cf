"""Rendering and diffing of custom attributes as comparable text."""

from apidiff.api_change import ApiChange
from apidiff.api_declarations import AttributeDeclaration, ObsoleteMarker

# Compiler and tooling attributes that never describe API surface.
IGNORED_ATTRIBUTES = {
    "System.Runtime.CompilerServices.CompilerGeneratedAttribute",
    "System.Runtime.CompilerServices.NullableAttribute",
    "System.Runtime.CompilerServices.NullableContextAttribute",
    "System.Runtime.CompilerServices.IsReadOnlyAttribute",
    "System.Runtime.CompilerServices.AsyncStateMachineAttribute",
    "System.Runtime.CompilerServices.IteratorStateMachineAttribute",
    "System.Diagnostics.DebuggerBrowsableAttribute",
    "System.Diagnostics.DebuggerHiddenAttribute",
    "System.Diagnostics.DebuggerStepThroughAttribute",
    "System.Diagnostics.DebuggerDisplayAttribute",
}

ATTRIBUTE_SUFFIX = "Attribute"


def attribute_short_name(name: str) -> str:
    """``System.ObsoleteAttribute`` -> ``Obsolete``."""
    short = name.rsplit(".", 1)[-1]
    if short.endswith(ATTRIBUTE_SUFFIX) and short != ATTRIBUTE_SUFFIX:
        short = short[: -len(ATTRIBUTE_SUFFIX)]
    return short


def _render_argument(value: str) -> str:
    """Render an attribute argument: booleans lowered, numbers bare, text quoted."""
    if value in ("True", "False"):
        return value.lower()
    try:
        float(value)
    except ValueError:
        return f'"{value}"'
    return value


def render_attribute(attribute: AttributeDeclaration) -> str:
    """Render an attribute the way C# source spells it."""
    name = attribute_short_name(attribute.name)
    if not attribute.properties:
        return f"[{name}]"
    args = ", ".join(_render_argument(v) for _, v in attribute.properties)
    return f"[{name} ({args})]"


def render_obsolete(marker: ObsoleteMarker) -> str:
    """Render an obsolete marker, e.g. ``[Obsolete ("Use Bar", true)]``."""
    args = []
    if marker.message:
        args.append(f'"{marker.message}"')
    if marker.is_error:
        args.append("true")
    if not args:
        return "[Obsolete]"
    return f"[Obsolete ({', '.join(args)})]"


def render_attribute_lines(
    attributes: tuple[AttributeDeclaration, ...],
    obsolete: ObsoleteMarker | None = None,
) -> list[str]:
    """Render the reportable attributes of a declaration, one per line."""
    lines = [render_obsolete(obsolete)] if obsolete else []
    lines.extend(
        render_attribute(a) for a in attributes if a.name not in IGNORED_ATTRIBUTES
    )
    return lines


def diff_attribute_lines(
    change: ApiChange,
    source_lines: list[str],
    target_lines: list[str],
    *,
    source_obsolete: ObsoleteMarker | None = None,
    target_obsolete: ObsoleteMarker | None = None,
) -> ApiChange:
    """Append the attribute differences of two declarations to ``change``.

    Unchanged attributes are kept as context. Only an error-level obsolete
    marker that was not present before breaks callers.
    """
    became_error = bool(
        target_obsolete
        and target_obsolete.is_error
        and not (source_obsolete and source_obsolete.is_error)
    )
    error_line = render_obsolete(target_obsolete) if became_error and target_obsolete else None
    for line in source_lines:
        if line in target_lines:
            change.append(line + "\n")
        else:
            change.append_removed(line + "\n", breaking=False)
    for line in target_lines:
        if line in source_lines:
            continue
        change.append_added(line + "\n", breaking=line == error_line)
    return change
