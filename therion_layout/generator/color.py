"""Color conversions for the layout document.

Therion and MetaPost expect different color notations:

* Therion ``color`` / ``symbol-color`` directives take a percentage
  triplet ``[R G B]`` with integer components in 0..100.
* MetaPost ``withcolor`` takes a fractional triplet ``(r, g, b)`` with
  components in 0..1.

Input is a ``#RRGGBB`` string.  Anything else (wrong length, missing
``#``, non-hex digits) maps to a fixed neutral value; these functions
never raise.
"""

from __future__ import annotations

import math
import re

NEUTRAL_PERCENTAGE = "[100 100 100]"
NEUTRAL_FRACTIONAL = "(0.0, 0.0, 0.0)"

_HEX_RE = re.compile(r"#[0-9a-fA-F]{6}")


def parse_hex(hex_color: str) -> tuple[int, int, int] | None:
    """Return the ``(R, G, B)`` channels of a ``#RRGGBB`` string.

    Returns ``None`` for malformed input.
    """
    if not isinstance(hex_color, str) or not _HEX_RE.fullmatch(hex_color):
        return None
    return (
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


def _percent(channel: int) -> int:
    # Round half away from zero; channels are never negative.
    return math.floor(channel / 255 * 100 + 0.5)


def to_percentage_triplet(hex_color: str) -> str:
    """Convert ``#RRGGBB`` to Therion's ``[R G B]`` percentage form.

    >>> to_percentage_triplet("#4a3728")
    '[29 22 16]'
    """
    rgb = parse_hex(hex_color)
    if rgb is None:
        return NEUTRAL_PERCENTAGE
    return "[{} {} {}]".format(*(_percent(c) for c in rgb))


def to_fractional_triplet(hex_color: str) -> str:
    """Convert ``#RRGGBB`` to MetaPost's ``(r, g, b)`` form, 3 decimals.

    >>> to_fractional_triplet("#4a3728")
    '(0.290, 0.216, 0.157)'
    """
    rgb = parse_hex(hex_color)
    if rgb is None:
        return NEUTRAL_FRACTIONAL
    return "({:.3f}, {:.3f}, {:.3f})".format(*(c / 255 for c in rgb))


def contrast_color(hex_color: str) -> str:
    """Pick black or white text for a swatch of *hex_color*.

    Uses perceived brightness ``(299 R + 587 G + 114 B) / 1000``; anything
    brighter than 128 gets black text.  Malformed input gets black.
    """
    rgb = parse_hex(hex_color)
    if rgb is None:
        return "#000000"
    r, g, b = rgb
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return "#000000" if brightness > 128 else "#ffffff"
