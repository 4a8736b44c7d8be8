"""Settings model, YAML loading and validation, themes and snapshot commands."""

from therion_layout.settings.loader import (
    SettingsError,
    dump_settings,
    load_settings,
)
from therion_layout.settings.model import (
    DEFAULT_SYMBOL_SET,
    Module,
    Settings,
    SymbolOverride,
    UploadedFile,
)
from therion_layout.settings.session import ModuleError
from therion_layout.settings.themes import (
    THEME_TEMPLATES,
    ThemeTemplate,
    UnknownThemeError,
    apply_theme,
    get_theme,
)

__all__ = [
    "DEFAULT_SYMBOL_SET",
    "Module",
    "ModuleError",
    "Settings",
    "SettingsError",
    "SymbolOverride",
    "THEME_TEMPLATES",
    "ThemeTemplate",
    "UnknownThemeError",
    "UploadedFile",
    "apply_theme",
    "dump_settings",
    "get_theme",
    "load_settings",
]
