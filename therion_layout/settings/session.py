"""Snapshot-producing commands for interactive callers.

Every function takes a :class:`Settings` snapshot and returns a new one;
nothing is mutated.  A UI or CLI keeps the latest snapshot and feeds it to
the generators after each command.

Id generation is injectable (``id_factory``) so tests and scripted callers
get stable ids.  Ids only serve as keys and never show up in generated
documents.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from pathlib import PurePath

from therion_layout.settings.model import (
    DEFAULT_SYMBOL_SET,
    FileKind,
    Module,
    Settings,
    SymbolOverride,
    UploadedFile,
)

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]

_KINDS_BY_SUFFIX: dict[str, FileKind] = {
    ".th": "source",
    ".th2": "drawing",
    ".thconfig": "config",
    ".txt": "text",
}

_SCANNED_COLOR = "#000000"


class ModuleError(ValueError):
    """Raised when a custom module cannot be registered."""

    pass


def random_id() -> str:
    """Short random identifier for uploads and custom modules."""
    return uuid.uuid4().hex[:9]


# ---------------------------------------------------------------------------
# Uploaded files
# ---------------------------------------------------------------------------


def classify_file(file_name: str) -> FileKind:
    """Map a file name to its kind by extension (case-insensitive)."""
    name = PurePath(file_name).name.lower()
    if name == "thconfig":
        return "config"
    return _KINDS_BY_SUFFIX.get(PurePath(name).suffix, "other")


def scan_drawing_symbols(content: str) -> dict[str, SymbolOverride]:
    """Collect symbol types used in a ``.th2`` drawing.

    Recognizes ``point <x> <y> <type> ...``, ``line <type> ...`` and
    ``area <type> ...`` lines.  The first occurrence of a type wins.  Each
    type gets a visible, black override following the default symbol set.
    """
    found: dict[str, SymbolOverride] = {}
    for raw in content.splitlines():
        parts = raw.split()
        if len(parts) < 2 or parts[0] not in ("point", "line", "area"):
            continue
        category = parts[0]
        index = 3 if category == "point" else 1
        if len(parts) <= index:
            continue
        symbol_type = parts[index]
        if symbol_type not in found:
            found[symbol_type] = SymbolOverride(
                type=symbol_type,
                category=category,
                visible=True,
                color=_SCANNED_COLOR,
                symbol_set=DEFAULT_SYMBOL_SET,
            )
    return found


def add_uploaded_files(
    settings: Settings,
    files: Iterable[tuple[str, ...]],
    id_factory: IdFactory = random_id,
) -> Settings:
    """Append ``(file_name, content)`` or ``(file_name, content, path)`` uploads.

    ``path`` records where a file was read from on disk.  Symbol types found
    in drawings are merged into ``symbol_overrides``; existing overrides are
    kept as they are.
    """
    uploads = list(settings.uploaded_files)
    overrides = dict(settings.symbol_overrides)

    for file_name, content, *rest in files:
        kind = classify_file(file_name)
        uploads.append(
            UploadedFile(
                id=id_factory(),
                file_name=file_name,
                kind=kind,
                content=content,
                path=str(rest[0]) if rest else None,
            )
        )
        if kind == "drawing":
            scanned = scan_drawing_symbols(content)
            new_types = [t for t in scanned if t not in overrides]
            for symbol_type in new_types:
                overrides[symbol_type] = scanned[symbol_type]
            logger.info(
                "Scanned %s: %d symbol type(s), %d new",
                file_name, len(scanned), len(new_types),
            )

    return replace(settings, uploaded_files=tuple(uploads), symbol_overrides=overrides)


def remove_uploaded_file(settings: Settings, file_id: str) -> Settings:
    """Drop the upload with *file_id*; symbol overrides are kept."""
    uploads = tuple(f for f in settings.uploaded_files if f.id != file_id)
    return replace(settings, uploaded_files=uploads)


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------


def add_custom_module(
    settings: Settings,
    name: str,
    code: str,
    description: str = "User MetaPost code",
    id_factory: IdFactory = random_id,
) -> Settings:
    """Register a custom module and enable it.

    Raises
    ------
    ModuleError
        If *name* or *code* is empty or whitespace only.
    """
    if not name or not name.strip():
        raise ModuleError("Custom module name must not be empty")
    if not code or not code.strip():
        raise ModuleError(f"Custom module '{name}' has no code")

    module = Module(
        id=f"custom_{id_factory()}",
        display_name=name.strip(),
        description=description,
        code=code,
        category="drawing",
        is_custom=True,
    )
    logger.info("Registered custom module %s (%s)", module.id, module.display_name)
    return replace(
        settings,
        custom_modules=(*settings.custom_modules, module),
        enabled_modules=(*settings.enabled_modules, module.id),
    )


def remove_custom_module(settings: Settings, module_id: str) -> Settings:
    """Remove a custom module from both the module list and the enabled set."""
    return replace(
        settings,
        custom_modules=tuple(m for m in settings.custom_modules if m.id != module_id),
        enabled_modules=tuple(i for i in settings.enabled_modules if i != module_id),
    )


def set_module_enabled(settings: Settings, module_id: str, enabled: bool) -> Settings:
    """Enable or disable a module by id (built-in or custom)."""
    ids = tuple(i for i in settings.enabled_modules if i != module_id)
    if enabled:
        ids = (*ids, module_id)
    return replace(settings, enabled_modules=ids)


# ---------------------------------------------------------------------------
# Symbol overrides
# ---------------------------------------------------------------------------


def update_symbol_override(settings: Settings, symbol_type: str, **changes) -> Settings:
    """Partially update the override for *symbol_type*.

    Raises
    ------
    KeyError
        If no override exists for *symbol_type*.
    """
    if symbol_type not in settings.symbol_overrides:
        raise KeyError(f"No symbol override for '{symbol_type}'")
    overrides = dict(settings.symbol_overrides)
    overrides[symbol_type] = replace(overrides[symbol_type], **changes)
    return replace(settings, symbol_overrides=overrides)


def apply_suggested_colors(
    settings: Settings,
    suggestions: Iterable[Mapping[str, str]],
) -> Settings:
    """Recolor existing overrides from ``{"type": ..., "color": ...}`` records.

    Suggestions for unknown types, or without a type/color, are ignored.
    """
    overrides = dict(settings.symbol_overrides)
    applied = 0
    for suggestion in suggestions:
        symbol_type = suggestion.get("type")
        color = suggestion.get("color")
        if not symbol_type or not color or symbol_type not in overrides:
            continue
        overrides[symbol_type] = replace(overrides[symbol_type], color=color)
        applied += 1
    logger.info("Applied %d suggested color(s)", applied)
    return replace(settings, symbol_overrides=overrides)
