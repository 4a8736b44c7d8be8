"""Layout document generator -- settings to Therion ``layout.thl`` text.

The document is assembled from independent sections joined by one blank
line.  Every section is well-formed on its own, so an omitted section (no
symbol overrides, debug off, no enabled modules) simply drops out of the
list and leaves no stray separator behind.

Two layout blocks are written:

``custom_layout``
    Map styling: colors, symbol sets, survey rendering, header/legend
    placement, TeX legend content, MetaPost modules.
``<paper>_Layout``
    Physical page geometry for the selected paper size.

Both names are referenced by the ``export map`` task of the config
document (:mod:`therion_layout.generator.thconfig`).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from therion_layout.generator.color import (
    NEUTRAL_PERCENTAGE,
    to_fractional_triplet,
    to_percentage_triplet,
)
from therion_layout.generator.modules import BUILTIN_MODULES, resolve_enabled
from therion_layout.generator.symbols import compile_symbol_directives
from therion_layout.settings.model import (
    DEFAULT_SYMBOL_SET,
    FALLBACK_SYMBOL_SET,
    PaperSize,
    Settings,
    SurveyStyle,
)

logger = logging.getLogger(__name__)

LAYOUT_NAME = "custom_layout"
"""Name of the styling layout block."""

INDENT = "  "

PRINT_BACKGROUND = NEUTRAL_PERCENTAGE
"""Background forced in print mode; printed maps carry no tinted paper."""

SURVEY_TEAM_LABEL = "Meranie"
CARTO_TEAM_LABEL = "Kartografia"


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageGeometry:
    """Page and printable area in centimeters, plus left/top margins."""

    width_cm: float
    height_cm: float
    print_width_cm: float
    print_height_cm: float
    margin_left_cm: float
    margin_top_cm: float

    def directive(self) -> str:
        values = (
            self.width_cm,
            self.height_cm,
            self.print_width_cm,
            self.print_height_cm,
            self.margin_left_cm,
            self.margin_top_cm,
        )
        return "page-setup " + " ".join(_num(v) for v in values) + " cm"


PAGE_PRESETS: dict[PaperSize, PageGeometry] = {
    "A4": PageGeometry(21, 29.7, 19, 27.7, 1, 1),
    "A3": PageGeometry(29.7, 42, 27.7, 40, 1, 1),
    "A2": PageGeometry(42, 59.4, 40, 57.4, 1, 1),
    "A1": PageGeometry(59.4, 84.1, 56.4, 81.1, 1.5, 1),
    "A0": PageGeometry(84.1, 118.9, 81.1, 115.9, 1.5, 1),
}

SURVEY_DASH_MODIFIERS: dict[SurveyStyle, str] = {
    "solid": "",
    "dashed": " dashed evenly",
    "dotted": " dashed withdots",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _num(value: float) -> str:
    """Render a number the way it would be typed: ``5``, ``0.5``, ``0.00001``.

    Never uses exponent notation, which Therion does not read.
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float) and math.isfinite(value):
        return format(Decimal(repr(value)), "f")
    return str(value)


def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


def _indent(lines: list[str], depth: int = 1) -> list[str]:
    prefix = INDENT * depth
    return [prefix + line if line else "" for line in lines]


def page_layout_name(paper_size: PaperSize) -> str:
    """Name of the page-geometry layout block for *paper_size*."""
    return f"{paper_size}_Layout"


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _preamble_section(settings: Settings) -> list[str]:
    return ["encoding utf-8"]


def _open_section(settings: Settings) -> list[str]:
    return [
        f"layout {LAYOUT_NAME}",
        *_indent([
            f'doc-author "{settings.author}"',
            f"scale 1 {_num(settings.scale)}",
            f"language {settings.language}",
        ]),
    ]


def _colors_section(settings: Settings) -> list[str]:
    if settings.print_mode:
        background = PRINT_BACKGROUND
    else:
        background = to_percentage_triplet(settings.map_bg_color)
    foreground = to_percentage_triplet(settings.map_fg_color)
    return _indent([
        f"color map-bg {background}",
        f"color map-fg {foreground}",
    ])


def _symbol_set_section(settings: Settings) -> list[str]:
    symbol_set = settings.default_symbol_set
    if not symbol_set or symbol_set == DEFAULT_SYMBOL_SET:
        symbol_set = FALLBACK_SYMBOL_SET
    return _indent([f"symbol-set {symbol_set}"])


def _symbol_overrides_section(settings: Settings) -> list[str]:
    return _indent(
        compile_symbol_directives(
            settings.symbol_overrides, settings.default_symbol_set
        )
    )


def _survey_section(settings: Settings) -> list[str]:
    if not settings.show_survey:
        return _indent(["symbol-hide line survey"])

    color = to_fractional_triplet(settings.survey_color)
    dash = SURVEY_DASH_MODIFIERS[settings.survey_style]
    return _indent([
        "code metapost",
        *_indent([
            "def l_survey_cave (expr P) =",
            *_indent([
                "T:=identity;",
                "pair zz[];",
                "pickup PenC;",
                "for t = 0 upto length P - 1:",
                *_indent([
                    "zz1 := point t of P;",
                    "zz2 := point t+1 of P;",
                    f"draw zz1 -- zz2 withcolor {color}{dash};",
                ]),
                "endfor;",
            ]),
            "enddef;",
        ]),
        "endcode",
    ])


def _presentation_section(settings: Settings) -> list[str]:
    return _indent([
        f"rotate {_num(settings.rotation)}",
        f"transparency {_on_off(settings.transparency)}",
        f"overlap {_num(settings.overlap)} cm",
        f"scale-bar {_num(settings.scale_bar_length)} m",
    ])


def _header_section(settings: Settings) -> list[str]:
    return _indent([
        f"map-header {_num(settings.header_x)} {_num(settings.header_y)} "
        f"{settings.header_anchor}",
        f"map-header-bg {_on_off(settings.header_bg)}",
        f"legend {_on_off(settings.show_legend)}",
        f"legend-width {_num(settings.legend_width)} cm",
        f"legend-columns {settings.legend_columns}",
    ])


def _legend_content(settings: Settings) -> list[str]:
    """Body of ``\\legendcontent``; TeX decides on the empty team fields."""
    lines = [
        r"\hsize=\legendwidth",
        r"\ifnortharrow\vbox to 0pt{\line{\hfil\northarrow}\vss}\fi",
    ]
    if settings.logo_path:
        lines.append(
            r"\vbox{\externalfigure[" + settings.logo_path + "][width="
            + _num(settings.logo_width) + r"cm]}\vskip0.5cm"
        )
    lines += [
        r"\edef\tmp{\the\cavename} \ifx\tmp\empty \else",
        INDENT + r"{\size[" + _num(settings.cave_name_font_size)
        + r"]\the\cavename} \vskip1cm",
        r"\fi",
        r"\ifscalebar\scalebar\vskip1cm\fi",
        r"{\ss",
    ]
    team_lines = [r"\edef\tmp{\the\comment} \ifx\tmp\empty \else \tmp \vskip0.5cm \fi"]
    if settings.explo_title or settings.explo_team:
        team_lines.append(
            r"{\bf " + settings.explo_title + ":} " + settings.explo_team
            + r" \vskip0.2cm"
        )
    team_lines += [
        r"\edef\tmp{\the\topoteam} \ifx\tmp\empty \else {\bf "
        + SURVEY_TEAM_LABEL + r":} \the\topoteam \vskip0.2cm \fi",
        r"\edef\tmp{\the\cartoteam} \ifx\tmp\empty \else {\bf "
        + CARTO_TEAM_LABEL + r":} \the\cartoteam \vskip0.2cm \fi",
    ]
    lines += _indent(team_lines)
    lines += [
        "}",
        r"\vskip1cm",
        r"\formattedlegend",
    ]
    return lines


def _typesetting_section(settings: Settings) -> list[str]:
    body = [
        r"\newtoks\topoteam \newtoks\cartoteam",
        "",
        r"\cavename={" + settings.cave_name + "}",
        r"\comment={" + settings.comment + "}",
        r"\topoteam={" + settings.topo_team + "}",
        r"\cartoteam={" + settings.carto_team + "}",
        "",
        r"\legendcontent={%",
        *_indent(_legend_content(settings)),
        "}",
        "",
        r"\framethickness=" + _num(settings.border_thickness) + "mm",
    ]
    return _indent([
        "# Custom TeX legend",
        "code tex-map",
        *_indent(body),
        "endcode",
    ])


def _debug_section(settings: Settings) -> list[str]:
    if not settings.debug_station_names:
        return []
    return _indent([
        "debug station-names",
        "code tex-map",
        INDENT + r"\def\printstationlabel#1{\size["
        + _num(settings.station_label_size) + r"]\ss #1}",
        "endcode",
    ])


def _modules_section(settings: Settings) -> list[str]:
    code = resolve_enabled(
        BUILTIN_MODULES, settings.custom_modules, settings.enabled_modules
    )
    code = code.strip("\n")
    return code.split("\n") if code else []


def _close_section(settings: Settings) -> list[str]:
    return ["endlayout"]


def _page_section(settings: Settings) -> list[str]:
    geometry = PAGE_PRESETS[settings.paper_size]
    return [
        f"layout {page_layout_name(settings.paper_size)}",
        INDENT + geometry.directive(),
        "endlayout",
    ]


SECTIONS = (
    _preamble_section,
    _open_section,
    _colors_section,
    _symbol_set_section,
    _symbol_overrides_section,
    _survey_section,
    _presentation_section,
    _header_section,
    _typesetting_section,
    _debug_section,
    _modules_section,
    _close_section,
    _page_section,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_layout(settings: Settings) -> str:
    """Generate the complete layout document for *settings*.

    Parameters
    ----------
    settings : Settings
        Settings snapshot; read only.

    Returns
    -------
    str
        Layout document, newline-terminated.  Identical input always
        yields identical output.
    """
    blocks = []
    for section in SECTIONS:
        lines = section(settings)
        if lines:
            blocks.append("\n".join(lines))
    logger.debug("Layout document assembled from %d sections", len(blocks))
    return "\n\n".join(blocks) + "\n"
