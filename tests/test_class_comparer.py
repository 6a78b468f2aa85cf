"""Tests for type level comparison: declarations, base types, nesting."""

from apidiff.comparison_events import (
    AttributesModified,
    MemberModified,
    MembersAdded,
    MembersRemoved,
    NamespaceStarted,
    TypeAdded,
    TypeModificationStarted,
    TypeRemoved,
)
from apidiff.class_comparer import render_type_declaration
from apidiff.load_api_document import parse_api_document
from tests._fixtures.api_xml import (
    PUBLIC_CONST,
    PUBLIC_VIRTUAL,
    document,
    field,
    group,
    klass,
    method,
    namespace,
    prop,
)

HOVER = klass("UIHoverStyle", base="Foundation.NSObject")
NSOBJECT = klass("NSObject", base=None)


def test_identical_documents_emit_no_type_events(record) -> None:
    """Verify that comparing a document with itself reports nothing."""
    xml = document(
        namespace("Lib", klass("Foo", group("methods", method("Bar"))), klass("Baz")),
    )
    events = record(xml, xml)
    assert [type(e).__name__ for e in events.events] == ["DocumentStarted", "DocumentFinished"]


def test_unchanged_type_is_not_visited(record) -> None:
    """Verify that an equal type inside a changed namespace emits no section."""
    events = record(
        document(namespace("Lib", klass("Foo"))),
        document(namespace("Lib", klass("Foo"), klass("Bar"))),
    )
    assert not events.of_type(TypeModificationStarted)
    assert [e.type_name for e in events.of_type(TypeAdded)] == ["Bar"]


def test_added_type_lists_every_member(render) -> None:
    """Verify the declaration block of a new type."""
    report = render(
        document(namespace("Lib")),
        document(
            namespace(
                "Lib",
                klass(
                    "Widget",
                    group("constructors"),
                    group("properties", prop("Size")),
                    group("methods", method("Draw", attrib=PUBLIC_VIRTUAL)),
                    base="Lib.Control",
                    sealed=True,
                ),
            )
        ),
    )
    assert report == (
        "# API diff\n\n"
        "## Sample.dll\n\n"
        "### Namespace Lib\n\n"
        "#### New Type: Lib.Widget\n\n"
        "```csharp\n"
        "public sealed class Widget : Lib.Control {\n"
        "\t// constructors\n"
        "\t// properties\n"
        "\tpublic int Size { get; }\n"
        "\t// methods\n"
        "\tpublic virtual void Draw ();\n"
        "}\n"
        "```\n"
    )


def test_removed_type_has_no_members(record, render) -> None:
    """Verify that a removed type is one breaking event without a member list."""
    source = document(namespace("Lib", klass("Foo", group("methods", method("Bar"))), klass("Keep")))
    target = document(namespace("Lib", klass("Keep")))

    removed = record(source, target).of_type(TypeRemoved)
    assert len(removed) == 1
    assert removed[0].breaking
    report = render(source, target)
    assert "#### Removed Type Lib.Foo" in report
    assert "Bar" not in report


def test_removed_experimental_type_is_not_breaking(record) -> None:
    """Verify that experimental types may disappear without breaking callers."""
    experimental = klass("Preview").replace(
        "></class>",
        '><attributes><attribute name="System.Diagnostics.CodeAnalysis.ExperimentalAttribute" />'
        "</attributes></class>",
    )
    source = document(namespace("Lib", experimental, klass("Keep")))
    target = document(namespace("Lib", klass("Keep")))
    assert not record(source, target).of_type(TypeRemoved)[0].breaking
    assert not record(source, target, ignore_nonbreaking=True).of_type(TypeRemoved)


def test_object_to_object_is_not_a_base_change(record) -> None:
    """Verify that an implicit and explicit System.Object base are equal."""
    events = record(
        document(namespace("Lib", klass("Foo", base="System.Object"))),
        document(namespace("Lib", klass("Foo", group("fields"), base=None))),
    )
    assert not events.of_type(MemberModified)


def test_inserted_base_type_is_compatible(record, render) -> None:
    """Verify that inserting a class into the hierarchy is reported as non-breaking."""
    source = document(
        namespace("UIKit", klass("UIPointerStyle", base="Foundation.NSObject")),
        namespace("Foundation", NSOBJECT),
    )
    target = document(
        namespace("UIKit", klass("UIPointerStyle", base="UIKit.UIHoverStyle"), HOVER),
        namespace("Foundation", NSOBJECT),
    )

    base_change = record(source, target).of_type(MemberModified)[0]
    assert base_change.section_name == "Modified base type"
    assert not base_change.changes[0].breaking
    assert (
        "Modified base type:\n\n```diff\n-Foundation.NSObject\n+UIKit.UIHoverStyle\n```"
        in render(source, target)
    )

    quiet = render(source, target, ignore_nonbreaking=True)
    assert "UIPointerStyle" not in quiet


def test_unrelated_base_type_is_breaking(record) -> None:
    """Verify that a base outside the old chain breaks callers."""
    events = record(
        document(namespace("Lib", klass("Foo", base="Lib.A"), klass("A"), klass("B"))),
        document(namespace("Lib", klass("Foo", base="Lib.B"), klass("A"), klass("B"))),
    )
    assert events.of_type(MemberModified)[0].changes[0].breaking


def test_interfaces_added_and_removed(record) -> None:
    """Verify interface removals break and additions do not."""
    events = record(
        document(namespace("Lib", klass("Foo", group("interfaces", '<interface name="System.IDisposable" />')))),
        document(
            namespace(
                "Lib",
                klass("Foo", group("interfaces", '<interface name="System.Collections.IEnumerable" />')),
            )
        ),
    )
    removed = events.of_type(MembersRemoved)[0]
    added = events.of_type(MembersAdded)[0]
    assert [(m.description, m.breaking) for m in removed.members] == [("System.IDisposable", True)]
    assert [(m.description, m.breaking) for m in added.members] == [
        ("System.Collections.IEnumerable", False)
    ]


def test_type_attributes_modified(record) -> None:
    """Verify that serializable and attribute changes are reported on the type."""
    events = record(
        document(namespace("Lib", klass("Foo"))),
        document(namespace("Lib", klass("Foo", serializable=True))),
    )
    change = events.of_type(AttributesModified)[0].change
    assert change.target_text == "[Serializable]\n"
    assert not change.breaking


def test_nested_types_are_qualified(record, render) -> None:
    """Verify that nested types are reported as Outer.Inner."""
    source = document(namespace("Lib", klass("Outer", group("classes", klass("Inner")))))
    target = document(
        namespace(
            "Lib",
            klass("Outer", group("classes", klass("Inner", group("methods", method("Run"))), klass("Extra"))),
        )
    )
    events = record(source, target)
    started = [e.type_name for e in events.of_type(TypeModificationStarted)]
    assert started == ["Outer", "Outer.Inner"]
    assert [e.type_name for e in events.of_type(TypeAdded)] == ["Outer.Extra"]

    report = render(source, target)
    assert "#### Type Changed: Lib.Outer.Inner" in report
    assert "#### New Type: Lib.Outer.Extra" in report


def test_swapping_documents_swaps_additions_and_removals(record) -> None:
    """Verify that the comparison is symmetric up to direction."""
    old = document(namespace("Lib", klass("Foo", group("methods", method("A")))))
    new = document(namespace("Lib", klass("Foo", group("methods", method("B")))))

    forward = record(old, new)
    backward = record(new, old)
    added = [m.description for m in forward.of_type(MembersAdded)[0].members]
    assert added == [m.description for m in backward.of_type(MembersRemoved)[0].members]
    assert forward.of_type(MembersRemoved)[0].members[0].description == "public void A ();"
    assert backward.of_type(MembersAdded)[0].members[0].description == "public void A ();"


def test_ignore_patterns_for_types(record) -> None:
    """Verify type level ignore patterns."""
    source = document(namespace("Lib", klass("Old"), klass("Keep")))
    target = document(namespace("Lib", klass("New"), klass("Keep")))
    events = record(source, target, ignore_new=["Lib.New: Added type"], ignore_removed=["Removed type"])
    assert not events.of_type(TypeAdded)
    assert not events.of_type(TypeRemoved)


def test_namespace_actions(record) -> None:
    """Verify new and removed namespaces are labelled."""
    events = record(
        document(namespace("Gone", klass("A"))),
        document(namespace("Fresh", klass("B"))),
    )
    actions = [(e.name, e.action) for e in events.of_type(NamespaceStarted)]
    assert actions == [("Gone", "Removed "), ("Fresh", "New ")]


def test_render_enum_and_static_declarations() -> None:
    """Verify declaration rendering rules for enums, static classes and delegates."""
    xml = document(
        namespace(
            "Lib",
            klass(
                "Color",
                group("fields", field("Red", "Lib.Color", attrib=PUBLIC_CONST, value="1")),
                kind="enum",
                base="System.Enum",
            ),
            klass("Helpers", sealed=True, abstract=True),
            klass("Handler", kind="delegate", base="System.MulticastDelegate", sealed=True),
        )
    )
    color, helpers, handler = parse_api_document(xml).assemblies[0].namespaces[0].types
    assert render_type_declaration(color) == ["public enum Color {", "\tRed = 1,", "}"]
    assert render_type_declaration(helpers) == ["public static class Helpers {", "}"]
    assert render_type_declaration(handler) == ["public delegate Handler {", "}"]
