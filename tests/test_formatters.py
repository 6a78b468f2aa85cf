"""Tests for the Markdown, HTML and plain text formatters."""

import pytest

from apidiff.api_change import ApiChange
from apidiff.comparison_events import (
    AssemblyFinished,
    AssemblyStarted,
    DocumentStarted,
    MemberModified,
    MembersAdded,
    NamespaceFinished,
    NamespaceStarted,
    RenderedMember,
    TypeAdded,
    TypeModificationFinished,
    TypeModificationStarted,
    TypeRemoved,
)
from apidiff.html_formatter import HtmlFormatter
from apidiff.markdown_formatter import MarkdownFormatter
from apidiff.plain_text_formatter import PlainTextFormatter
from tests._fixtures.api_xml import document, group, klass, method, namespace


def _signature_change() -> ApiChange:
    return ApiChange("N.T").append_modified("public void Foo()", "public void Foo(int x)")


def test_markdown_splits_modified_line() -> None:
    """Verify that a modified line becomes a -old/+new pair in a diff block."""
    assert MarkdownFormatter().render_diff(_signature_change()) == [
        "-public void Foo()",
        "+public void Foo(int x)",
    ]

    formatter = MarkdownFormatter()
    formatter.handle(MemberModified("Modified methods", (_signature_change(),)))
    assert formatter.getvalue() == (
        "Modified methods:\n\n```diff\n-public void Foo()\n+public void Foo(int x)\n```\n"
    )


def test_markdown_keeps_unchanged_lines_as_context() -> None:
    """Verify that unmarked lines are prefixed with a space and pure additions lose the - side."""
    change = ApiChange("N.T").append("[Flags]\n").append_added("[Obsolete]\n").append("public enum E")
    assert MarkdownFormatter().render_diff(change) == [" [Flags]", "+[Obsolete]", " public enum E"]


def test_unchanged_sections_emit_no_heading() -> None:
    """Verify that an assembly, namespace and type with no content vanish."""
    formatter = MarkdownFormatter()
    for event in (
        DocumentStarted("API diff"),
        AssemblyStarted("Sample"),
        NamespaceStarted("Lib"),
        TypeModificationStarted("Lib", "Foo"),
        TypeModificationFinished("Lib", "Foo"),
        NamespaceFinished("Lib"),
        AssemblyFinished("Sample"),
    ):
        formatter.handle(event)
    assert formatter.depth == 0
    assert formatter.getvalue() == "# API diff\n"


def test_nested_sections_flush_into_parents() -> None:
    """Verify that content inside a nested type pulls in every enclosing heading."""
    formatter = MarkdownFormatter()
    for event in (
        AssemblyStarted("Sample"),
        NamespaceStarted("Lib"),
        TypeModificationStarted("Lib", "Outer"),
        TypeModificationStarted("Lib", "Outer.Inner"),
        TypeRemoved("Lib", "Outer.Inner.Gone"),
        TypeModificationFinished("Lib", "Outer.Inner"),
        TypeModificationFinished("Lib", "Outer"),
        NamespaceFinished("Lib"),
        AssemblyFinished("Sample"),
    ):
        formatter.handle(event)
    assert formatter.getvalue() == (
        "## Sample.dll\n\n"
        "### Namespace Lib\n\n"
        "#### Type Changed: Lib.Outer\n\n"
        "#### Type Changed: Lib.Outer.Inner\n\n"
        "#### Removed Type Lib.Outer.Inner.Gone\n"
    )


def test_closing_unopened_section_fails() -> None:
    """Verify that an unbalanced event stream is a programming error."""
    with pytest.raises(RuntimeError, match="without being opened"):
        MarkdownFormatter().handle(AssemblyFinished("Sample"))


def test_unknown_event_is_rejected() -> None:
    """Verify that formatters refuse events they do not know."""
    with pytest.raises(TypeError, match="Unsupported comparison event"):
        MarkdownFormatter().handle("not an event")  # type: ignore[arg-type]


def test_member_labels() -> None:
    """Verify singular, plural and enum value labels."""
    formatter = MarkdownFormatter()
    one = (RenderedMember("public void A ();"),)
    two = (*one, RenderedMember("public void B ();"))
    assert formatter.members_added(MembersAdded("methods", "method", one))[0] == "Added method:"
    assert formatter.members_added(MembersAdded("methods", "method", two))[0] == "Added methods:"
    assert formatter.members_added(MembersAdded("fields", "field", two, enum_values=True))[0] == "Added values:"


def test_markdown_obsolete_precedes_member() -> None:
    """Verify that an obsolete marker is printed above its member."""
    lines = MarkdownFormatter().members_added(
        MembersAdded("methods", "method", (RenderedMember("public void A ();", obsolete="[Obsolete]"),))
    )
    assert lines == ["Added method:", "", "```csharp", "[Obsolete]", "public void A ();", "```", ""]


def test_html_escapes_and_marks_breaking() -> None:
    """Verify HTML escaping and breaking markers."""
    formatter = HtmlFormatter()
    change = ApiChange("N.T").append_modified("List<int> Foo ()", "List<long> Foo ()")
    assert formatter.render_diff(change) == [
        "<span class='removed removed-inline breaking' data-is-breaking>List&lt;int&gt; Foo ()</span> "
        "<span class='added added-inline breaking' data-is-breaking>List&lt;long&gt; Foo ()</span>"
    ]

    lines = formatter.members_added(
        MembersAdded("methods", "method", (RenderedMember("void A<T> ();"),))
    )
    assert "<span class='added added-method' data-is-non-breaking>void A&lt;T&gt; ();</span>" in lines


def test_html_type_sections() -> None:
    """Verify that type sections are wrapped in a div named after the type."""
    formatter = HtmlFormatter()
    formatter.handle(TypeModificationStarted("Lib", "Foo"))
    formatter.handle(TypeRemoved("Lib", "Foo.Gone"))
    formatter.handle(TypeModificationFinished("Lib", "Foo"))
    assert formatter.getvalue().splitlines() == [
        "<div id='Lib.Foo'>",
        "<h3>Type Changed: Lib.Foo</h3>",
        "<h3>Removed Type <span class='removed breaking' data-is-breaking>Lib.Foo.Gone</span></h3>",
        "</div>",
    ]


def test_plain_text_report(render) -> None:
    """Verify the plain text rendering of a full comparison."""
    report = render(
        document(namespace("Lib", klass("Foo", group("methods", method("A"), method("Old"))))),
        document(namespace("Lib", klass("Foo", group("methods", method("A", "System.Int32"), method("New"))))),
        formatter=PlainTextFormatter(),
    )
    assert report == (
        "API diff\n"
        "========\n"
        "\n"
        "Assembly: Sample\n"
        "\n"
        "Namespace Lib\n"
        "\n"
        "Type Changed: Lib.Foo\n"
        "  Modified methods:\n"
        "    - public void A ();\n"
        "    + public int A (); [breaking]\n"
        "  Removed method:\n"
        "    - public void Old (); [breaking]\n"
        "  Added method:\n"
        "    + public void New ();\n"
    )


def test_plain_text_added_type_is_indented() -> None:
    """Verify that declaration tabs are expanded in plain text."""
    lines = PlainTextFormatter().type_added(
        TypeAdded("Lib", "Foo", ("public class Foo {", "\tpublic Foo ();", "}"))
    )
    assert lines == [
        "New Type: Lib.Foo",
        "    public class Foo {",
        "        public Foo ();",
        "    }",
        "",
    ]
