"""Tests for custom attribute rendering and diffing."""

from apidiff.api_change import ApiChange
from apidiff.api_declarations import AttributeDeclaration, ObsoleteMarker
from apidiff.render_attributes import (
    attribute_short_name,
    diff_attribute_lines,
    render_attribute,
    render_attribute_lines,
    render_obsolete,
)


def test_attribute_short_name() -> None:
    """Verify namespace and Attribute suffix removal."""
    assert attribute_short_name("System.FlagsAttribute") == "Flags"
    assert attribute_short_name("Attribute") == "Attribute"
    assert attribute_short_name("Custom") == "Custom"


def test_render_attribute_arguments() -> None:
    """Verify argument quoting."""
    attr = AttributeDeclaration(
        "System.Runtime.Versioning.SupportedOSPlatformAttribute",
        (("PlatformName", "ios13.0"),),
    )
    assert render_attribute(attr) == '[SupportedOSPlatform ("ios13.0")]'
    assert render_attribute(AttributeDeclaration("System.FlagsAttribute")) == "[Flags]"
    assert (
        render_attribute(AttributeDeclaration("N.Custom", (("A", "True"), ("B", "3"))))
        == "[Custom (true, 3)]"
    )


def test_render_obsolete() -> None:
    """Verify obsolete marker rendering."""
    assert render_obsolete(ObsoleteMarker()) == "[Obsolete]"
    assert render_obsolete(ObsoleteMarker("Use Bar")) == '[Obsolete ("Use Bar")]'
    assert render_obsolete(ObsoleteMarker("Use Bar", is_error=True)) == '[Obsolete ("Use Bar", true)]'


def test_render_attribute_lines_skips_noise() -> None:
    """Verify compiler generated attributes are not reported."""
    attrs = (
        AttributeDeclaration("System.Runtime.CompilerServices.CompilerGeneratedAttribute"),
        AttributeDeclaration("System.FlagsAttribute"),
    )
    assert render_attribute_lines(attrs, ObsoleteMarker("x")) == ['[Obsolete ("x")]', "[Flags]"]


def test_diff_attribute_lines() -> None:
    """Verify that attribute changes are non-breaking except error obsoletes."""
    change = diff_attribute_lines(ApiChange("N.T"), ["[Flags]"], ["[Flags]", '[Obsolete ("x")]'])
    assert change.any_change
    assert not change.breaking
    assert change.target_text == '[Flags]\n[Obsolete ("x")]\n'

    error = ObsoleteMarker("x", is_error=True)
    change = diff_attribute_lines(
        ApiChange("N.T"),
        ['[Obsolete ("x")]'],
        [render_obsolete(error)],
        source_obsolete=ObsoleteMarker("x"),
        target_obsolete=error,
    )
    assert change.breaking
