"""Tests for color theme templates."""

from __future__ import annotations

import re

import pytest

from therion_layout.generator.layout import generate_layout
from therion_layout.settings.model import Settings
from therion_layout.settings.themes import (
    THEME_TEMPLATES,
    UnknownThemeError,
    apply_theme,
    get_theme,
)

HEX = re.compile(r"#[0-9a-fA-F]{6}")


class TestTemplates:
    def test_eight_unique_themes(self) -> None:
        ids = [t.id for t in THEME_TEMPLATES]
        assert len(ids) == 8
        assert len(set(ids)) == 8

    @pytest.mark.parametrize("theme", THEME_TEMPLATES, ids=lambda t: t.id)
    def test_colors_well_formed(self, theme) -> None:
        for color in (theme.bg_color, theme.fg_color, theme.survey_color):
            assert HEX.fullmatch(color)

    def test_lookup(self) -> None:
        assert get_theme("heatmap").survey_color == "#d84315"

    def test_unknown(self) -> None:
        with pytest.raises(UnknownThemeError, match="neon"):
            get_theme("neon")


class TestApply:
    def test_sets_colors_and_scheme(self) -> None:
        s0 = Settings()
        s1 = apply_theme(s0, get_theme("blueprint_light"))
        assert s1.color_scheme == "blueprint_light"
        assert (s1.map_bg_color, s1.map_fg_color, s1.survey_color) == (
            "#f7faff", "#e3f2fd", "#0d47a1",
        )
        assert s0.color_scheme == "custom"

    def test_other_fields_untouched(self) -> None:
        s0 = Settings(cave_name="X", scale=200)
        s1 = apply_theme(s0, get_theme("pastel_gray"))
        assert s1.cave_name == "X"
        assert s1.scale == 200

    def test_theme_reaches_layout(self) -> None:
        layout = generate_layout(apply_theme(Settings(), get_theme("hc_gray")))
        # #000000 survey line
        assert "withcolor (0.000, 0.000, 0.000);" in layout
