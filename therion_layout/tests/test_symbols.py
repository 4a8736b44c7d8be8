"""Tests for symbol override directives.

Validates directive order (assign, color, hide), symbol-set resolution
against the global default and the DEFAULT sentinel, and that no-op
overrides produce nothing.
"""

from __future__ import annotations

import pytest

from therion_layout.generator.symbols import (
    compile_override,
    compile_symbol_directives,
    resolve_symbol_set,
)
from therion_layout.settings.model import DEFAULT_SYMBOL_SET, SymbolOverride


def _ov(type_: str = "wall", category: str = "line", **kw) -> SymbolOverride:
    return SymbolOverride(type=type_, category=category, **kw)


# ---------------------------------------------------------------------------
# Symbol-set resolution
# ---------------------------------------------------------------------------


class TestResolveSymbolSet:
    @pytest.mark.parametrize("symbol_set", [None, "", DEFAULT_SYMBOL_SET])
    def test_defers_to_global(self, symbol_set: str | None) -> None:
        assert resolve_symbol_set(_ov(symbol_set=symbol_set), "UIS") == "UIS"

    def test_explicit_set_wins(self) -> None:
        assert resolve_symbol_set(_ov(symbol_set="SKBB"), "UIS") == "SKBB"


# ---------------------------------------------------------------------------
# Single override
# ---------------------------------------------------------------------------


class TestCompileOverride:
    def test_noop_override_emits_nothing(self) -> None:
        ov = _ov(visible=True, color=None, symbol_set=DEFAULT_SYMBOL_SET)
        assert compile_override("wall", ov, DEFAULT_SYMBOL_SET) == []

    def test_all_three_in_order(self) -> None:
        ov = _ov(visible=False, color="#4a3728", symbol_set="UIS")
        assert compile_override("wall", ov, "AUT") == [
            "symbol-assign line wall UIS",
            "symbol-color line wall [29 22 16]",
            "symbol-hide line wall",
        ]

    def test_global_default_is_assigned(self) -> None:
        ov = _ov(type_="stalactite", category="point", symbol_set=DEFAULT_SYMBOL_SET)
        assert compile_override("stalactite", ov, "AUT") == [
            "symbol-assign point stalactite AUT",
        ]

    def test_hidden_always_emits_hide(self) -> None:
        ov = _ov(type_="water", category="area", visible=False)
        lines = compile_override("water", ov, DEFAULT_SYMBOL_SET)
        assert lines == ["symbol-hide area water"]

    def test_malformed_color_falls_back(self) -> None:
        ov = _ov(color="red")
        lines = compile_override("wall", ov, DEFAULT_SYMBOL_SET)
        assert lines == ["symbol-color line wall [100 100 100]"]


# ---------------------------------------------------------------------------
# Whole table
# ---------------------------------------------------------------------------


class TestCompileTable:
    def test_preserves_mapping_order(self) -> None:
        overrides = {
            "wall": _ov("wall", "line", color="#000000"),
            "stalactite": _ov("stalactite", "point", visible=False),
            "sand": _ov("sand", "area", color="#ffffff"),
        }
        assert compile_symbol_directives(overrides, DEFAULT_SYMBOL_SET) == [
            "symbol-color line wall [0 0 0]",
            "symbol-hide point stalactite",
            "symbol-color area sand [100 100 100]",
        ]

    def test_empty_table(self) -> None:
        assert compile_symbol_directives({}, "AUT") == []

    def test_key_names_the_symbol(self) -> None:
        overrides = {"u:bat": _ov("u:bat", "point", visible=False)}
        assert compile_symbol_directives(overrides, DEFAULT_SYMBOL_SET) == [
            "symbol-hide point u:bat",
        ]
