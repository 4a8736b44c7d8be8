"""
Therion Layout Package.

Compiles an immutable settings snapshot describing a cave-survey map into the
two text files read by the Therion cartography tool: a layout definition
(``layout.thl``) and a project configuration (``thconfig``).

Subpackages:
    generator: Pure text generation (colors, symbol directives, MetaPost modules,
        layout and config documents)
    settings: Settings model, YAML loading/validation, themes, snapshot commands
    utils: Filesystem and logging helpers
    scripts: Command-line entry points
"""

__all__ = ["generator", "settings", "utils", "scripts"]

__version__ = "0.1.0"
