"""
Therion document generation.

Pure functions from a settings snapshot to the text of the layout and
config documents.  Nothing here performs I/O or mutates its input.
"""

from therion_layout.generator.color import (
    contrast_color,
    to_fractional_triplet,
    to_percentage_triplet,
)
from therion_layout.generator.layout import (
    LAYOUT_NAME,
    PAGE_PRESETS,
    generate_layout,
    page_layout_name,
)
from therion_layout.generator.modules import (
    BUILTIN_MODULES,
    all_modules,
    enabled_modules,
    resolve_enabled,
)
from therion_layout.generator.symbols import compile_symbol_directives
from therion_layout.generator.thconfig import generate_config

__all__ = [
    "BUILTIN_MODULES",
    "LAYOUT_NAME",
    "PAGE_PRESETS",
    "all_modules",
    "compile_symbol_directives",
    "contrast_color",
    "enabled_modules",
    "generate_config",
    "generate_layout",
    "page_layout_name",
    "resolve_enabled",
    "to_fractional_triplet",
    "to_percentage_triplet",
]
