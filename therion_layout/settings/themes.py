"""Color theme templates.

A theme sets the paper (background), passage fill (foreground) and survey
line colors in one step.  Applying a theme returns a new settings snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from therion_layout.settings.model import Settings


class UnknownThemeError(KeyError):
    """Raised when a theme id is not in :data:`THEME_TEMPLATES`."""

    pass


@dataclass(frozen=True)
class ThemeTemplate:
    id: str
    name: str
    bg_color: str
    fg_color: str
    survey_color: str
    description: str


THEME_TEMPLATES: tuple[ThemeTemplate, ...] = (
    ThemeTemplate(
        id="natural_earth",
        name="Natural Earth",
        bg_color="#fdfcf9",
        fg_color="#f7f4eb",
        survey_color="#4a3728",
        description="Very light natural paper with a brown survey line.",
    ),
    ThemeTemplate(
        id="pastel_brown",
        name="Pastel Brown",
        bg_color="#fcfaf9",
        fg_color="#f5f0ed",
        survey_color="#5d4037",
        description="Soft cream paper for limestone caves.",
    ),
    ThemeTemplate(
        id="pastel_gray",
        name="Pastel Gray",
        bg_color="#fafafa",
        fg_color="#f2f2f2",
        survey_color="#212121",
        description="Neutral light gray look for technical documentation.",
    ),
    ThemeTemplate(
        id="pastel_green",
        name="Pastel Green",
        bg_color="#f9fbf7",
        fg_color="#f1f6eb",
        survey_color="#2e7d32",
        description="Fresh light green tint for karst areas.",
    ),
    ThemeTemplate(
        id="hc_brown",
        name="High Contrast Brown",
        bg_color="#fdfbfb",
        fg_color="#f4ecea",
        survey_color="#3e2723",
        description="Dark brown on almost white paper.",
    ),
    ThemeTemplate(
        id="hc_gray",
        name="High Contrast Gray",
        bg_color="#f8f9fa",
        fg_color="#e9ecef",
        survey_color="#000000",
        description="Clean white paper with anthracite elements.",
    ),
    ThemeTemplate(
        id="heatmap",
        name="High Contrast Heatmap",
        bg_color="#fffcfc",
        fg_color="#fbe9e7",
        survey_color="#d84315",
        description="Light paper with a strong orange-red survey line.",
    ),
    ThemeTemplate(
        id="blueprint_light",
        name="Technical Blue",
        bg_color="#f7faff",
        fg_color="#e3f2fd",
        survey_color="#0d47a1",
        description="Slightly bluish paper for technical-looking maps.",
    ),
)


def get_theme(theme_id: str) -> ThemeTemplate:
    """Return the theme named *theme_id* or raise ``UnknownThemeError``."""
    for theme in THEME_TEMPLATES:
        if theme.id == theme_id:
            return theme
    raise UnknownThemeError(
        f"Unknown theme '{theme_id}'. "
        f"Available: {[t.id for t in THEME_TEMPLATES]}"
    )


def apply_theme(settings: Settings, theme: ThemeTemplate) -> Settings:
    """New snapshot with the theme's colors and ``color_scheme = theme.id``."""
    return replace(
        settings,
        color_scheme=theme.id,
        map_bg_color=theme.bg_color,
        map_fg_color=theme.fg_color,
        survey_color=theme.survey_color,
    )
