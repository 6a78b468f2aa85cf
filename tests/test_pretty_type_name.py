"""Tests for C# type name rendering."""

from apidiff.pretty_type_name import pretty_type_name


def test_keywords() -> None:
    """Verify that System aliases render as C# keywords."""
    assert pretty_type_name("System.Int32") == "int"
    assert pretty_type_name("System.Void") == "void"
    assert pretty_type_name("System.String") == "string"
    assert pretty_type_name("Foundation.NSObject") == "Foundation.NSObject"
    assert pretty_type_name(None) == ""


def test_arrays_and_by_ref() -> None:
    """Verify array suffixes are kept and by-ref markers dropped."""
    assert pretty_type_name("System.Int32[]") == "int[]"
    assert pretty_type_name("System.Byte[,]") == "byte[,]"
    assert pretty_type_name("System.Int32&") == "int"
    assert pretty_type_name("System.Byte*") == "byte*"


def test_generics() -> None:
    """Verify generic arity markers and argument lists."""
    assert (
        pretty_type_name("System.Collections.Generic.List`1[System.String]")
        == "System.Collections.Generic.List<string>"
    )
    assert (
        pretty_type_name("System.Collections.Generic.Dictionary`2[System.String,System.Int32[]]")
        == "System.Collections.Generic.Dictionary<string, int[]>"
    )
    assert pretty_type_name("System.Action<T>") == "System.Action<T>"


def test_nullable_and_nested() -> None:
    """Verify Nullable<T> shorthand and nested type separators."""
    assert pretty_type_name("System.Nullable`1[System.Int32]") == "int?"
    assert pretty_type_name("UIKit.UIView/Appearance") == "UIKit.UIView.Appearance"
