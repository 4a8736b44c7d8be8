"""Tests for hex color conversions.

Validates the percentage ``[R G B]`` and fractional ``(r, g, b)`` forms,
round-half-away-from-zero rounding, and the neutral fallbacks for
malformed input.
"""

from __future__ import annotations

import re

import pytest

from therion_layout.generator.color import (
    NEUTRAL_FRACTIONAL,
    NEUTRAL_PERCENTAGE,
    contrast_color,
    parse_hex,
    to_fractional_triplet,
    to_percentage_triplet,
)

SAMPLE_COLORS = [
    "#000000", "#ffffff", "#FFFFFF", "#4a3728", "#7f7f7f", "#808080",
    "#010203", "#fdfcf9", "#0d47a1", "#d84315", "#2E7D32",
]

MALFORMED_COLORS = [
    "", "#", "4a3728", "#4a372", "#4a37288", "#4g3728", "#zzzzzz",
    "rgb(1,2,3)", " #4a3728", "#4a3728 ", "##4a372",
]


# ---------------------------------------------------------------------------
# Concrete values
# ---------------------------------------------------------------------------


class TestKnownValues:
    def test_survey_brown_percentage(self) -> None:
        assert to_percentage_triplet("#4a3728") == "[29 22 16]"

    def test_survey_brown_fractional(self) -> None:
        assert to_fractional_triplet("#4a3728") == "(0.290, 0.216, 0.157)"

    def test_black_and_white(self) -> None:
        assert to_percentage_triplet("#000000") == "[0 0 0]"
        assert to_percentage_triplet("#ffffff") == "[100 100 100]"
        assert to_fractional_triplet("#000000") == "(0.000, 0.000, 0.000)"
        assert to_fractional_triplet("#ffffff") == "(1.000, 1.000, 1.000)"

    def test_uppercase_hex_accepted(self) -> None:
        assert to_percentage_triplet("#4A3728") == "[29 22 16]"

    def test_half_rounds_up(self) -> None:
        # 0x80 = 128 -> 50.196 -> 50; 0x7f = 127 -> 49.80 -> 50
        assert to_percentage_triplet("#808080") == "[50 50 50]"
        assert to_percentage_triplet("#7f7f7f") == "[50 50 50]"


# ---------------------------------------------------------------------------
# Properties over valid colors
# ---------------------------------------------------------------------------


class TestValidColors:
    @pytest.mark.parametrize("hex_color", SAMPLE_COLORS)
    def test_fractional_matches_channels(self, hex_color: str) -> None:
        out = to_fractional_triplet(hex_color)
        assert re.fullmatch(r"\(\d\.\d{3}, \d\.\d{3}, \d\.\d{3}\)", out)
        values = [float(v) for v in out.strip("()").split(", ")]
        channels = parse_hex(hex_color)
        assert channels is not None
        for value, channel in zip(values, channels):
            assert 0.0 <= value <= 1.0
            assert abs(value - channel / 255) <= 0.0005

    @pytest.mark.parametrize("hex_color", SAMPLE_COLORS)
    def test_percentage_in_range(self, hex_color: str) -> None:
        out = to_percentage_triplet(hex_color)
        assert re.fullmatch(r"\[\d{1,3} \d{1,3} \d{1,3}\]", out)
        for value in out.strip("[]").split():
            assert 0 <= int(value) <= 100


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformedColors:
    @pytest.mark.parametrize("bad", MALFORMED_COLORS)
    def test_percentage_fallback(self, bad: str) -> None:
        assert to_percentage_triplet(bad) == NEUTRAL_PERCENTAGE == "[100 100 100]"

    @pytest.mark.parametrize("bad", MALFORMED_COLORS)
    def test_fractional_fallback(self, bad: str) -> None:
        assert to_fractional_triplet(bad) == NEUTRAL_FRACTIONAL == "(0.0, 0.0, 0.0)"

    def test_parse_hex_returns_none(self) -> None:
        assert parse_hex("#12345") is None
        assert parse_hex(None) is None  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Contrast helper
# ---------------------------------------------------------------------------


class TestContrastColor:
    def test_light_background_gets_black(self) -> None:
        assert contrast_color("#fdfcf9") == "#000000"

    def test_dark_background_gets_white(self) -> None:
        assert contrast_color("#0d47a1") == "#ffffff"

    def test_malformed_gets_black(self) -> None:
        assert contrast_color("blue") == "#000000"
