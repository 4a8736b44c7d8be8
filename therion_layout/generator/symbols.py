"""Per-symbol override directives.

Each :class:`~therion_layout.settings.model.SymbolOverride` compiles to at
most three layout directives, always in this order::

    symbol-assign <category> <type> <set>
    symbol-color <category> <type> [R G B]
    symbol-hide <category> <type>

An override that keeps the default symbol set, has no color and stays
visible produces nothing.
"""

from __future__ import annotations

from collections.abc import Mapping

from therion_layout.generator.color import to_percentage_triplet
from therion_layout.settings.model import DEFAULT_SYMBOL_SET, SymbolOverride


def resolve_symbol_set(override: SymbolOverride, default_symbol_set: str) -> str:
    """Return the symbol set *override* ends up with.

    ``None``, ``""`` and the ``DEFAULT`` sentinel defer to the global default.
    """
    if not override.symbol_set or override.symbol_set == DEFAULT_SYMBOL_SET:
        return default_symbol_set
    return override.symbol_set


def compile_override(
    symbol_type: str,
    override: SymbolOverride,
    default_symbol_set: str,
) -> list[str]:
    """Directives for a single symbol type (unindented)."""
    lines: list[str] = []
    target = f"{override.category} {symbol_type}"

    symbol_set = resolve_symbol_set(override, default_symbol_set)
    if symbol_set and symbol_set != DEFAULT_SYMBOL_SET:
        lines.append(f"symbol-assign {target} {symbol_set}")

    if override.color:
        lines.append(f"symbol-color {target} {to_percentage_triplet(override.color)}")

    if not override.visible:
        lines.append(f"symbol-hide {target}")

    return lines


def compile_symbol_directives(
    overrides: Mapping[str, SymbolOverride],
    default_symbol_set: str,
) -> list[str]:
    """Compile the whole override table, in mapping order.

    Parameters
    ----------
    overrides : Mapping[str, SymbolOverride]
        Symbol type -> override.  The key is the type written in the
        directive.
    default_symbol_set : str
        Global default set; may itself be the ``DEFAULT`` sentinel, in which
        case no ``symbol-assign`` is emitted for deferring overrides.

    Returns
    -------
    list[str]
        Directive lines without indentation.
    """
    lines: list[str] = []
    for symbol_type, override in overrides.items():
        lines.extend(compile_override(symbol_type, override, default_symbol_set))
    return lines
