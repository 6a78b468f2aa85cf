"""Utility for rendering serialized type names the way C# source spells them."""

import re

CSHARP_KEYWORDS = {
    "System.Void": "void",
    "System.Object": "object",
    "System.String": "string",
    "System.Boolean": "bool",
    "System.Char": "char",
    "System.Byte": "byte",
    "System.SByte": "sbyte",
    "System.Int16": "short",
    "System.UInt16": "ushort",
    "System.Int32": "int",
    "System.UInt32": "uint",
    "System.Int64": "long",
    "System.UInt64": "ulong",
    "System.Single": "float",
    "System.Double": "double",
    "System.Decimal": "decimal",
}

ARITY_RE = re.compile(r"`\d+")


def pretty_type_name(name: str | None) -> str:
    """Render a type name, e.g. ``System.Collections.Generic.List`1[System.Int32]``.

    Keywords replace their System aliases, generic arity markers are dropped,
    generic arguments use angle brackets, ``Nullable<T>`` becomes ``T?`` and the
    by-ref ``&`` suffix is removed (directions are rendered by the parameter).
    """
    if not name:
        return ""
    rendered, _ = _parse(name.strip().replace("/", "."), 0)
    return rendered


def _parse(text: str, pos: int) -> tuple[str, int]:
    """Parse one type name starting at ``pos``; return it rendered and the end position."""
    base = ""
    while True:
        start = pos
        while pos < len(text) and text[pos] not in "[]<>,&*`":
            pos += 1
        base += text[start:pos].strip()
        if pos < len(text) and text[pos] == "`":
            match = ARITY_RE.match(text, pos)
            pos = match.end() if match else pos + 1
            continue
        break
    args: list[str] = []

    if pos < len(text) and text[pos] in "<[" and not _is_array_suffix(text, pos):
        closing = ">" if text[pos] == "<" else "]"
        pos += 1
        while pos < len(text):
            arg, pos = _parse(text, pos)
            args.append(arg)
            if pos < len(text) and text[pos] == ",":
                pos += 1
                continue
            if pos < len(text) and text[pos] == closing:
                pos += 1
            break

    rendered = _apply_args(base, args)
    while pos < len(text) and text[pos] in "[*&":
        if text[pos] == "[":
            end = text.find("]", pos)
            if end == -1:
                break
            rendered += text[pos : end + 1]
            pos = end + 1
        elif text[pos] == "*":
            rendered += "*"
            pos += 1
        else:
            pos += 1
    return rendered, pos


def _is_array_suffix(text: str, pos: int) -> bool:
    """Check whether the bracket at ``pos`` opens an array rank, not generic arguments."""
    if text[pos] != "[":
        return False
    end = text.find("]", pos)
    return end != -1 and set(text[pos + 1 : end]) <= {","}


def _apply_args(base: str, args: list[str]) -> str:
    """Render a base name with its generic arguments."""
    if base == "System.Nullable" and len(args) == 1:
        return f"{args[0]}?"
    base = CSHARP_KEYWORDS.get(base, base)
    if not args:
        return base
    return f"{base}<{', '.join(args)}>"
