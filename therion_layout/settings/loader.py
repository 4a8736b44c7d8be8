"""Settings loader.

Loads a settings YAML file, validates it against
:class:`~therion_layout.settings.schema.SettingsFileV1` and builds the frozen
:class:`~therion_layout.settings.model.Settings` snapshot.

Order of application:

1. model defaults;
2. scalar sections of the file;
3. ``theme`` (overrides the three map colors);
4. modules and symbol overrides;
5. ``sources`` -- read from disk relative to the settings file and added as
   uploads, so symbols found in ``.th2`` drawings join the override table
   without replacing overrides declared in the file.

Usage::

    from therion_layout.settings.loader import load_settings
    settings = load_settings()                      # shipped defaults.yaml
    settings = load_settings("project/layout.yaml") # explicit path
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from therion_layout.settings.model import Module, Settings, SymbolOverride, UploadedFile
from therion_layout.settings.schema import SCHEMA_VERSION, SettingsFileV1
from therion_layout.settings.session import add_uploaded_files
from therion_layout.settings.themes import apply_theme, get_theme
from therion_layout.utils.fs import atomic_yaml_dump, load_yaml, read_text

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "defaults.yaml"


class SettingsError(Exception):
    """Raised when a settings file is missing data or fails validation."""

    pass


# ---------------------------------------------------------------------------
# Internal builders
# ---------------------------------------------------------------------------


def _module_id(name: str, index: int) -> str:
    slug = re.sub(r"[^0-9a-z]+", "_", name.lower()).strip("_")
    return f"custom_{slug or index}"


def _build_custom_modules(doc: SettingsFileV1) -> tuple[Module, ...]:
    modules = []
    seen: set[str] = set()
    for index, entry in enumerate(doc.modules.custom):
        module_id = entry.id or _module_id(entry.name, index)
        if module_id in seen:
            raise SettingsError(f"Duplicate custom module id '{module_id}'")
        seen.add(module_id)
        modules.append(
            Module(
                id=module_id,
                display_name=entry.name.strip(),
                description=entry.description,
                code=entry.code,
                category="drawing",
                is_custom=True,
            )
        )
    return tuple(modules)


def _build_symbol_overrides(doc: SettingsFileV1) -> dict[str, SymbolOverride]:
    return {
        key: SymbolOverride(
            type=key,
            category=entry.category,
            visible=entry.visible,
            color=entry.color,
            symbol_set=entry.symbol_set,
        )
        for key, entry in doc.symbols.items()
    }


def build_settings(doc: SettingsFileV1, base_dir: Path | None = None) -> Settings:
    """Turn a validated settings document into a ``Settings`` snapshot.

    Parameters
    ----------
    doc : SettingsFileV1
        Validated document.
    base_dir : Path | None
        Directory that relative ``sources`` are resolved against.  ``None``
        uses the current working directory.

    Raises
    ------
    SettingsError
        If a source file is missing or a record is rejected.
    """
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    try:
        settings = Settings(**doc.scalar_fields())
        if doc.theme is not None:
            settings = apply_theme(settings, get_theme(doc.theme))

        custom_modules = _build_custom_modules(doc)
        enabled = (
            *doc.modules.enabled,
            *(m.id for m, entry in zip(custom_modules, doc.modules.custom) if entry.enabled),
        )
        settings = replace(
            settings,
            custom_modules=custom_modules,
            enabled_modules=enabled,
            symbol_overrides=_build_symbol_overrides(doc),
        )
    except (TypeError, ValueError, KeyError) as exc:
        raise SettingsError(f"Invalid settings value: {exc}") from exc

    files = []
    for source in doc.sources:
        source_path = Path(source)
        if not source_path.is_absolute():
            source_path = base_dir / source_path
        try:
            files.append((source_path.name, read_text(source_path), source_path.resolve()))
        except FileNotFoundError as exc:
            raise SettingsError(f"Source file not found: {source_path}") from exc

    if files:
        settings = add_uploaded_files(settings, files)
    return settings


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_settings(path: str | Path | None = None) -> Settings:
    """Load and validate settings from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to the settings file.  ``None`` loads the ``defaults.yaml``
        shipped alongside this module.

    Returns
    -------
    Settings
        Frozen settings snapshot.

    Raises
    ------
    SettingsError
        If the file is empty, malformed or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_SETTINGS_PATH if path is None else Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    logger.info("Loading settings from %s", path)

    try:
        data = load_yaml(path)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Cannot parse settings file {path}: {exc}") from exc
    if data is None:
        raise SettingsError(f"Empty settings file: {path}")
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")

    try:
        doc = SettingsFileV1.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Settings validation failed at {path}: {exc}") from exc

    settings = build_settings(doc, base_dir=path.parent)
    logger.info(
        "Settings loaded: %d source file(s), %d symbol override(s), %d enabled module(s)",
        len(settings.source_files),
        len(settings.symbol_overrides),
        len(settings.enabled_modules),
    )
    return settings


def settings_to_dict(
    settings: Settings, base_dir: Path | None = None
) -> dict[str, Any]:
    """Serialize a snapshot into the settings-file layout.

    Uploaded file contents are not stored.  Source and drawing files are
    listed under ``sources``: files read from disk by their path (relative
    to *base_dir* when given), others by name.
    """
    sections: dict[str, Any] = {"schema": SCHEMA_VERSION}
    for section_name, model in SettingsFileV1.model_fields.items():
        if section_name in ("schema_version", "theme", "modules", "symbols", "sources"):
            continue
        section_type = model.annotation
        sections[section_name] = {
            key: _plain(getattr(settings, key))
            for key in section_type.model_fields
        }

    custom_ids = {m.id for m in settings.custom_modules}
    sections["modules"] = {
        "enabled": [i for i in settings.enabled_modules if i not in custom_ids],
        "custom": [
            {
                "id": m.id,
                "name": m.display_name,
                "code": m.code,
                "description": m.description,
                "enabled": m.id in settings.enabled_modules,
            }
            for m in settings.custom_modules
        ],
    }
    sections["symbols"] = {
        key: {
            k: v
            for k, v in (
                ("category", o.category),
                ("visible", o.visible),
                ("color", o.color),
                ("symbol_set", o.symbol_set),
            )
            if v is not None
        }
        for key, o in settings.symbol_overrides.items()
    }
    sections["sources"] = [
        _source_entry(f, base_dir)
        for f in settings.uploaded_files
        if f.kind in ("source", "drawing")
    ]
    return sections


def _plain(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


def _source_entry(upload: UploadedFile, base_dir: Path | None) -> str:
    """Path of *upload* as the loader will resolve it from *base_dir*."""
    if upload.path is None:
        return upload.file_name
    if base_dir is None:
        return upload.path
    try:
        return Path(os.path.relpath(upload.path, base_dir)).as_posix()
    except ValueError:
        # Different drive on Windows
        return upload.path


def dump_settings(settings: Settings, path: str | Path) -> None:
    """Write *settings* to *path* as a settings file, atomically.

    Source paths are written relative to the directory of *path*, so the
    file reloads from wherever it is saved.
    """
    path = Path(path)
    base_dir = path.parent.resolve()
    atomic_yaml_dump(settings_to_dict(settings, base_dir), path)
    logger.info("Settings written to %s", path)
