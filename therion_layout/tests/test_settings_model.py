"""Tests for settings records: construction checks and normalization."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace

import pytest

from therion_layout.generator.layout import generate_layout
from therion_layout.settings.model import Settings, SymbolOverride


class TestSymbolOverride:
    def test_valid(self) -> None:
        ov = SymbolOverride("wall", "line")
        assert ov.visible is True
        assert ov.color is None

    def test_empty_type_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            SymbolOverride("", "line")

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(ValueError, match="category"):
            SymbolOverride("wall", "volume")  # type: ignore[arg-type]


class TestSettings:
    def test_defaults_constructible(self) -> None:
        s = Settings()
        assert s.paper_size == "A4"
        assert s.symbol_overrides == {}

    def test_enabled_modules_deduplicated(self) -> None:
        s = Settings(enabled_modules=("a", "b", "a", "c", "b"))
        assert s.enabled_modules == ("a", "b", "c")

    def test_lists_become_tuples(self) -> None:
        s = Settings(export_types=["map", "model"], enabled_modules=["x"])  # type: ignore[arg-type]
        assert s.export_types == ("map", "model")
        assert s.enabled_modules == ("x",)

    def test_frozen(self) -> None:
        with pytest.raises(FrozenInstanceError):
            Settings().scale = 500  # type: ignore[misc]

    def test_unknown_paper_rejected(self) -> None:
        with pytest.raises(ValueError, match="paper_size"):
            Settings(paper_size="Letter")  # type: ignore[arg-type]

    def test_unknown_survey_style_rejected(self) -> None:
        with pytest.raises(ValueError, match="survey_style"):
            Settings(survey_style="wavy")  # type: ignore[arg-type]


class TestSnapshotIndependence:
    def test_override_table_read_only(self) -> None:
        s = Settings(symbol_overrides={"wall": SymbolOverride("wall", "line")})
        with pytest.raises(TypeError):
            s.symbol_overrides["bat"] = SymbolOverride("bat", "point")  # type: ignore[index]

    def test_derived_snapshot_does_not_leak(self) -> None:
        a = Settings(symbol_overrides={"wall": SymbolOverride("wall", "line")})
        b = replace(a, print_mode=True)
        with pytest.raises(TypeError):
            b.symbol_overrides["bat"] = SymbolOverride("bat", "point", visible=False)  # type: ignore[index]
        assert "symbol-hide point bat" not in generate_layout(a)
        assert list(a.symbol_overrides) == ["wall"]

    def test_source_dict_copied(self) -> None:
        table = {"wall": SymbolOverride("wall", "line")}
        s = Settings(symbol_overrides=table)
        table["bat"] = SymbolOverride("bat", "point", visible=False)
        assert list(s.symbol_overrides) == ["wall"]

    def test_hashable(self) -> None:
        s = Settings(symbol_overrides={"wall": SymbolOverride("wall", "line")})
        assert hash(s) == hash(replace(s))
        assert s == replace(s)
        assert len({Settings(), Settings()}) == 1
