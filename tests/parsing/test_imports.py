"""Tests for package and import parsing."""

from __future__ import annotations

from sourcepilot.models import ImportStatement
from sourcepilot.parsing.imports import (
    is_import_line,
    parse_import_package,
    parse_imports,
)
from tests._fixtures.documents import MAIN_ACTIVITY, make_document


def test_parse_imports_keeps_source_order_and_aliases() -> None:
    parsed = parse_imports(make_document(MAIN_ACTIVITY).full_text)

    assert parsed.package_name == "com.app.main"
    assert [statement.fully_qualified_name for statement in parsed.statements] == [
        "android.os.Bundle",
        "android.view.View",
        "com.app.ui.Home",
        "com.app.data.Repo",
        "com.app.databinding.ActivityMainBinding",
    ]
    assert parsed.statements[3] == ImportStatement("com.app.data.Repo", alias="Store")


def test_parse_imports_handles_java_syntax() -> None:
    text = "package com.app;\n\nimport java.util.List;\nimport static com.app.Util.run;\n"
    parsed = parse_imports(text)

    assert parsed.package_name == "com.app"
    assert [s.fully_qualified_name for s in parsed.statements] == [
        "java.util.List",
        "com.app.Util.run",
    ]


def test_parse_imports_without_package_or_imports() -> None:
    parsed = parse_imports("fun main() {\n}\n")

    assert parsed.package_name == ""
    assert not parsed


def test_import_line_detection_is_whole_line() -> None:
    assert is_import_line("import com.app.ui.Home")
    assert is_import_line("import com.app.ui.*")
    assert not is_import_line("// import com.app.ui.Home")
    assert not is_import_line("val imported = importer.import()")
    assert parse_import_package("import com.app.ui.Home as Screen") == "com.app.ui.Home"
    assert parse_import_package("val x = 1") is None


def test_matching_prefers_suffix_and_alias() -> None:
    parsed = parse_imports("import a.b.Foo\nimport x.y.Bar as Foo\nimport a.b.FooBar\n")

    matches = parsed.matching("Foo")

    assert [m.fully_qualified_name for m in matches] == ["a.b.Foo", "x.y.Bar"]
