"""YAML schema validation for settings files.

Settings files are grouped into sections; every key inside a section is the
name of the :class:`~therion_layout.settings.model.Settings` field it sets.
All keys are optional -- anything left out keeps the model default.

Example::

    schema: therion_layout.settings.v1
    theme: natural_earth
    project:
      cave_name: Hacavska jaskyna
      scale: 200
      export_types: [map, model]
    survey:
      survey_style: dashed
    modules:
      enabled: [a_sand_wiki]
      custom:
        - name: Red walls
          code: |
            code metapost
            ...
            endcode
    symbols:
      wall: {category: line, color: "#aa0000"}
    sources: [cave.th, cave.th2]

Validation is fail-fast: the first file that does not match raises a
pydantic ``ValidationError`` listing every offending key, which the loader
wraps in ``SettingsError``.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from therion_layout.settings.model import (
    HEADER_ANCHORS,
    ExportType,
    PaperSize,
    SurveyStyle,
    SymbolCategory,
)
from therion_layout.settings.themes import THEME_TEMPLATES

SCHEMA_VERSION = "therion_layout.settings.v1"


def _check_hex(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if len(v) != 7 or not v.startswith("#"):
        raise ValueError(f"Color must be '#RRGGBB', got '{v}'")
    try:
        int(v[1:], 16)
    except ValueError:
        raise ValueError(f"Color must be '#RRGGBB', got '{v}'") from None
    return v


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ProjectSection(_Section):
    """Project identity, scale and exports."""
    cave_name: Optional[str] = None
    select_name: Optional[str] = None
    author: Optional[str] = None
    scale: Optional[float] = Field(None, gt=0, description="Scale denominator (1 : scale)")
    language: Optional[str] = Field(None, min_length=1, description="Therion language code")
    export_types: Optional[List[ExportType]] = None
    paper_size: Optional[PaperSize] = None


class ColorsSection(_Section):
    """Map paper and passage colors."""
    color_scheme: Optional[str] = None
    map_bg_color: Optional[str] = None
    map_fg_color: Optional[str] = None
    print_mode: Optional[bool] = None

    @field_validator('map_bg_color', 'map_fg_color')
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        return _check_hex(v)


class HeaderSection(_Section):
    """Map header and legend placement."""
    show_legend: Optional[bool] = None
    legend_width: Optional[float] = Field(None, gt=0, description="Legend width (cm)")
    legend_columns: Optional[int] = Field(None, ge=1, description="Legend columns")
    header_x: Optional[float] = None
    header_y: Optional[float] = None
    header_anchor: Optional[str] = None
    header_bg: Optional[bool] = None
    default_symbol_set: Optional[str] = Field(None, min_length=1)

    @field_validator('header_anchor')
    @classmethod
    def validate_anchor(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in HEADER_ANCHORS:
            raise ValueError(f"header_anchor must be one of {list(HEADER_ANCHORS)}, got '{v}'")
        return v


class LogoSection(_Section):
    logo_path: Optional[str] = None
    logo_width: Optional[float] = Field(None, gt=0, description="Logo width (cm)")


class LegendTextSection(_Section):
    """Text typeset into the map legend."""
    topo_team: Optional[str] = None
    carto_team: Optional[str] = None
    explo_team: Optional[str] = None
    explo_title: Optional[str] = None
    comment: Optional[str] = None
    cave_name_font_size: Optional[float] = Field(None, gt=0, description="Cave name size (pt)")
    border_thickness: Optional[float] = Field(None, ge=0, description="Frame thickness (mm)")


class SurveySection(_Section):
    """Centreline rendering."""
    show_survey: Optional[bool] = None
    survey_color: Optional[str] = None
    survey_style: Optional[SurveyStyle] = None
    debug_station_names: Optional[bool] = None
    station_label_size: Optional[float] = Field(None, gt=0, description="Station label size (pt)")

    @field_validator('survey_color')
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        return _check_hex(v)


class PresentationSection(_Section):
    rotation: Optional[float] = None
    transparency: Optional[bool] = None
    overlap: Optional[float] = Field(None, ge=0, description="Page overlap (cm)")
    scale_bar_length: Optional[float] = Field(None, ge=0, description="Scale bar length (m)")


class CustomModuleEntry(_Section):
    """User-supplied MetaPost snippet."""
    id: Optional[str] = None
    name: str = Field(..., description="Display name")
    code: str = Field(..., description="Raw MetaPost/TeX code block")
    description: str = "User MetaPost code"
    enabled: bool = True

    @field_validator('name', 'code')
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"Custom module {info.field_name} must not be empty")
        return v


class ModulesSection(_Section):
    enabled: List[str] = Field(default_factory=list)
    custom: List[CustomModuleEntry] = Field(default_factory=list)


class SymbolEntry(_Section):
    """Override for one symbol type; the mapping key is the type."""
    type: Optional[str] = None
    category: SymbolCategory
    visible: bool = True
    color: Optional[str] = None
    symbol_set: Optional[str] = None

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        return _check_hex(v)


class SettingsFileV1(BaseModel):
    """Settings file schema v1."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field(SCHEMA_VERSION, alias="schema", description="Schema version")
    theme: Optional[str] = None
    project: ProjectSection = Field(default_factory=ProjectSection)
    colors: ColorsSection = Field(default_factory=ColorsSection)
    header: HeaderSection = Field(default_factory=HeaderSection)
    logo: LogoSection = Field(default_factory=LogoSection)
    legend_text: LegendTextSection = Field(default_factory=LegendTextSection)
    survey: SurveySection = Field(default_factory=SurveySection)
    presentation: PresentationSection = Field(default_factory=PresentationSection)
    modules: ModulesSection = Field(default_factory=ModulesSection)
    symbols: Dict[str, SymbolEntry] = Field(default_factory=dict)
    sources: List[str] = Field(default_factory=list, description="Survey files, relative to the settings file")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != SCHEMA_VERSION:
            raise ValueError(f"Expected schema '{SCHEMA_VERSION}', got '{v}'")
        return v

    @field_validator('theme')
    @classmethod
    def validate_theme(cls, v: Optional[str]) -> Optional[str]:
        known = [t.id for t in THEME_TEMPLATES]
        if v is not None and v not in known:
            raise ValueError(f"theme must be one of {known}, got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_symbol_keys(self) -> 'SettingsFileV1':
        for key, entry in self.symbols.items():
            if not key:
                raise ValueError("Symbol type keys must be non-empty")
            if entry.type is not None and entry.type != key:
                raise ValueError(
                    f"Symbol entry '{key}' declares a different type '{entry.type}'"
                )
        return self

    def scalar_fields(self) -> Dict[str, object]:
        """Flatten the scalar sections into ``Settings`` keyword arguments."""
        fields: Dict[str, object] = {}
        for section in (
            self.project, self.colors, self.header, self.logo,
            self.legend_text, self.survey, self.presentation,
        ):
            fields.update(section.model_dump(exclude_none=True))
        return fields
