"""Tests for type-name classification and resolution."""

from __future__ import annotations

import pytest

from cmdlint.domain import typenames
from cmdlint.domain.typenames import TypeResolver


class TestNormalize:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("string", "System.String"),
            ("[string]", "System.String"),
            ("Int", "System.Int32"),
            ("switch", typenames.SWITCH),
            ("My.Widget", "My.Widget"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert typenames.normalize(raw) == expected

    def test_element_type_strips_arrays(self) -> None:
        assert typenames.element_type("string[]") == "System.String"
        assert typenames.element_type("System.Int32[][]") == "System.Int32"


class TestClassification:
    def test_strings(self) -> None:
        assert typenames.is_string("System.String")
        assert typenames.is_string("string[]")
        assert not typenames.is_string("int")

    def test_switch_is_not_boolean(self) -> None:
        assert typenames.is_switch("System.Management.Automation.SwitchParameter")
        assert not typenames.is_boolean("switch")
        assert typenames.is_boolean("bool")

    def test_numeric(self) -> None:
        assert typenames.is_numeric("long")
        assert typenames.is_numeric("System.UInt16")
        assert not typenames.is_numeric("double")

    def test_catch_all(self) -> None:
        assert typenames.is_catch_all("PSObject")
        assert typenames.is_catch_all("System.Object[]")
        assert not typenames.is_catch_all("System.String")


class TestTypeResolver:
    def test_builtin_names_resolve(self) -> None:
        resolver = TypeResolver()
        assert resolver.resolves("string")
        assert resolver.resolves("System.IO.FileInfo")
        assert resolver.resolves("System.String[]")

    def test_unknown_name(self) -> None:
        assert not TypeResolver().resolves("Contoso.Widget")

    def test_extra_names(self) -> None:
        assert TypeResolver(["Contoso.Widget"]).resolves("contoso.widget")

    def test_generics(self) -> None:
        resolver = TypeResolver()
        assert resolver.resolves("System.Collections.Generic.List[System.String]")
        assert not resolver.resolves("System.Collections.Generic.List[Contoso.Widget]")

    def test_garbage(self) -> None:
        resolver = TypeResolver()
        assert not resolver.resolves("")
        assert not resolver.resolves("not a type!")
