"""Settings model -- the single input of both document generators.

Every record is a frozen dataclass.  A :class:`Settings` value is a
snapshot: callers never mutate it, they derive the next snapshot with
``dataclasses.replace`` (see :mod:`therion_layout.settings.session`).

Enumerations are ``Literal`` aliases paired with a tuple of their allowed
values, so lookup tables keyed by them can be checked for completeness.

Colors are ``#RRGGBB`` strings.  The model does not check them; the color
codec falls back to neutral values for anything malformed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

ExportType = Literal["map", "model", "atlas"]
EXPORT_TYPES: tuple[ExportType, ...] = ("map", "model", "atlas")

PaperSize = Literal["A4", "A3", "A2", "A1", "A0"]
PAPER_SIZES: tuple[PaperSize, ...] = ("A4", "A3", "A2", "A1", "A0")

SymbolCategory = Literal["point", "line", "area"]
SYMBOL_CATEGORIES: tuple[SymbolCategory, ...] = ("point", "line", "area")

FileKind = Literal["source", "drawing", "config", "text", "other"]
FILE_KINDS: tuple[FileKind, ...] = ("source", "drawing", "config", "text", "other")

ModuleCategory = Literal["drawing", "typesetting", "core"]
MODULE_CATEGORIES: tuple[ModuleCategory, ...] = ("drawing", "typesetting", "core")

SurveyStyle = Literal["solid", "dashed", "dotted"]
SURVEY_STYLES: tuple[SurveyStyle, ...] = ("solid", "dashed", "dotted")

# ---------------------------------------------------------------------------
# Symbol sets and header anchors
# ---------------------------------------------------------------------------

DEFAULT_SYMBOL_SET = "DEFAULT"
"""Sentinel: "use whatever the enclosing level says"."""

FALLBACK_SYMBOL_SET = "AUT"
"""Symbol set written when the global default is the sentinel."""

SYMBOL_SETS: tuple[str, ...] = ("AUT", "UIS", "SKBB", "BCRA", "NSS", "NZSS", "ASF")

HEADER_ANCHORS: tuple[str, ...] = ("nw", "n", "ne", "w", "center", "e", "sw", "s", "se")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UploadedFile:
    """A survey file supplied by the user.

    Parameters
    ----------
    id : str
        Stable identity; generated by the caller.
    file_name : str
        Name written into ``source`` lines of the config document.
    kind : FileKind
        ``"source"`` (``.th``), ``"drawing"`` (``.th2``), ``"config"``,
        ``"text"`` or ``"other"``.
    content : str
        File text, immutable once created.
    path : str | None
        Where the file was read from, if it came from disk.  Used when the
        settings are saved so the file can be found again on reload.
    """

    id: str
    file_name: str
    kind: FileKind
    content: str = ""
    path: str | None = None


@dataclass(frozen=True)
class SymbolOverride:
    """Per-symbol customization of visibility, color and symbol set.

    Parameters
    ----------
    type : str
        Therion symbol type, e.g. ``"wall"`` or ``"stalactite"``.
    category : SymbolCategory
        ``"point"``, ``"line"`` or ``"area"``.
    visible : bool
        ``False`` hides the symbol in the rendered map.
    color : str | None
        ``#RRGGBB`` color, or ``None`` to keep the symbol-set color.
    symbol_set : str | None
        Symbol set for this type; ``None`` or ``"DEFAULT"`` follows the
        global default.
    """

    type: str
    category: SymbolCategory
    visible: bool = True
    color: str | None = None
    symbol_set: str | None = None

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("symbol override type must be non-empty")
        if self.category not in SYMBOL_CATEGORIES:
            raise ValueError(
                f"category must be one of {SYMBOL_CATEGORIES}, "
                f"got {self.category!r}"
            )


@dataclass(frozen=True)
class Module:
    """A named MetaPost/TeX snippet appended to the layout block."""

    id: str
    display_name: str
    description: str
    code: str
    category: ModuleCategory = "drawing"
    is_custom: bool = False


@dataclass(frozen=True)
class Settings:
    """Complete generator settings snapshot.

    All fields carry defaults, so ``Settings()`` is a valid, empty project.
    Lengths are in the units written next to them in the layout document:
    ``legend_width``/``overlap``/``logo_width`` in cm, ``scale_bar_length``
    in m, ``border_thickness`` in mm, ``rotation`` in degrees.
    """

    # -- project ------------------------------------------------------------
    cave_name: str = ""
    select_name: str = ""
    author: str = ""
    scale: float = 100
    language: str = "sk"
    export_types: tuple[ExportType, ...] = ("map",)

    # -- colors -------------------------------------------------------------
    color_scheme: str = "custom"
    map_bg_color: str = "#f5f2e8"
    map_fg_color: str = "#e8e2d0"
    print_mode: bool = False
    paper_size: PaperSize = "A4"

    # -- header & legend ----------------------------------------------------
    show_legend: bool = True
    legend_width: float = 60
    legend_columns: int = 3
    header_x: float = 5
    header_y: float = 5
    header_anchor: str = "nw"
    header_bg: bool = True
    default_symbol_set: str = "AUT"

    # -- logo ---------------------------------------------------------------
    logo_path: str = ""
    logo_width: float = 4

    # -- TeX legend content -------------------------------------------------
    topo_team: str = ""
    carto_team: str = ""
    explo_team: str = ""
    explo_title: str = ""
    comment: str = ""
    cave_name_font_size: float = 30
    border_thickness: float = 0.5

    # -- survey / centreline ------------------------------------------------
    show_survey: bool = True
    survey_color: str = "#4a3728"
    survey_style: SurveyStyle = "solid"
    debug_station_names: bool = False
    station_label_size: float = 8

    # -- presentation -------------------------------------------------------
    rotation: float = 0
    transparency: bool = True
    overlap: float = 5
    scale_bar_length: float = 20

    # -- composites ---------------------------------------------------------
    uploaded_files: tuple[UploadedFile, ...] = ()
    enabled_modules: tuple[str, ...] = ()
    custom_modules: tuple[Module, ...] = ()
    # Read-only view over a private copy; not part of the hash.
    symbol_overrides: Mapping[str, SymbolOverride] = field(
        default_factory=dict, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "symbol_overrides", MappingProxyType(dict(self.symbol_overrides))
        )
        # First occurrence wins; order is irrelevant to resolution.
        object.__setattr__(
            self, "enabled_modules", tuple(dict.fromkeys(self.enabled_modules))
        )
        object.__setattr__(self, "export_types", tuple(self.export_types))
        object.__setattr__(self, "uploaded_files", tuple(self.uploaded_files))
        object.__setattr__(self, "custom_modules", tuple(self.custom_modules))
        if self.paper_size not in PAPER_SIZES:
            raise ValueError(
                f"paper_size must be one of {PAPER_SIZES}, got {self.paper_size!r}"
            )
        if self.survey_style not in SURVEY_STYLES:
            raise ValueError(
                f"survey_style must be one of {SURVEY_STYLES}, "
                f"got {self.survey_style!r}"
            )

    @property
    def source_files(self) -> tuple[UploadedFile, ...]:
        """Uploaded files of kind ``"source"``, in upload order."""
        return tuple(f for f in self.uploaded_files if f.kind == "source")
