"""Decoding of .NET metadata attribute flags into member modifiers."""

from enum import IntFlag

from apidiff.api_declarations import MemberModifiers

ACCESS_MASK = 0x0007

# Shared by MethodAttributes and FieldAttributes.
VISIBILITY_BY_ACCESS = {
    0: "private",  # compiler controlled
    1: "private",
    2: "internal",  # family and assembly
    3: "internal",
    4: "protected",
    5: "protected",  # family or assembly
    6: "public",
}

VISIBILITY_RANK = {"private": 0, "internal": 1, "protected": 2, "public": 3}


class MethodAttributes(IntFlag):
    """MethodAttributes bits that decode to C# modifiers."""

    STATIC = 0x0010
    FINAL = 0x0020
    VIRTUAL = 0x0040
    HIDE_BY_SIG = 0x0080
    NEW_SLOT = 0x0100
    ABSTRACT = 0x0400
    SPECIAL_NAME = 0x0800


class FieldAttributes(IntFlag):
    """FieldAttributes bits that decode to C# modifiers."""

    STATIC = 0x0010
    INIT_ONLY = 0x0020
    LITERAL = 0x0040


def parse_attrib(value: str | None) -> int:
    """Parse an ``attrib`` value; missing values decode as plain public."""
    if not value:
        return 6
    return int(value)


def decode_method_modifiers(attrib: int) -> MemberModifiers:
    """Decode MethodAttributes flags (also used for accessor methods)."""
    flags = MethodAttributes(attrib & 0x0DF0)
    return MemberModifiers(
        visibility=VISIBILITY_BY_ACCESS.get(attrib & ACCESS_MASK, "private"),
        is_static=MethodAttributes.STATIC in flags,
        is_abstract=MethodAttributes.ABSTRACT in flags,
        is_virtual=MethodAttributes.VIRTUAL in flags,
        is_final=MethodAttributes.FINAL in flags,
        is_new_slot=MethodAttributes.NEW_SLOT in flags,
    )


def decode_field_modifiers(attrib: int) -> MemberModifiers:
    """Decode FieldAttributes flags."""
    flags = FieldAttributes(attrib & 0x0070)
    return MemberModifiers(
        visibility=VISIBILITY_BY_ACCESS.get(attrib & ACCESS_MASK, "private"),
        is_static=FieldAttributes.STATIC in flags,
        is_readonly=FieldAttributes.INIT_ONLY in flags,
        is_const=FieldAttributes.LITERAL in flags,
    )


def modifier_keywords(modifiers: MemberModifiers, *, in_interface: bool = False) -> list[str]:
    """Render modifiers as C# keywords, e.g. ``["public", "virtual"]``."""
    words = [modifiers.visibility]
    if modifiers.is_const:
        words.append("const")
        return words
    if modifiers.is_static:
        words.append("static")
    if modifiers.is_readonly:
        words.append("readonly")
    if in_interface:
        return words
    if modifiers.is_abstract:
        words.append("abstract")
    elif modifiers.is_virtual:
        if modifiers.is_new_slot:
            # final new-slot virtuals are interface implementations
            if not modifiers.is_final:
                words.append("virtual")
        elif modifiers.is_final:
            words.extend(["sealed", "override"])
        else:
            words.append("override")
    return words


def is_overridable(modifiers: MemberModifiers) -> bool:
    """Check whether derived types can still override the member."""
    return (modifiers.is_virtual or modifiers.is_abstract) and not modifiers.is_final


def is_modifier_change_breaking(old: MemberModifiers, new: MemberModifiers) -> bool:
    """Classify a modifier change of a paired member."""
    if VISIBILITY_RANK[new.visibility] < VISIBILITY_RANK[old.visibility]:
        return True
    if old.is_static != new.is_static:
        return True
    if new.is_abstract and not old.is_abstract:
        return True
    if is_overridable(old) and not is_overridable(new):
        return True
    if (new.is_readonly and not old.is_readonly) or old.is_const != new.is_const:
        return True
    return False
