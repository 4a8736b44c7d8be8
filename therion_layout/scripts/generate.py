#!/usr/bin/env python3
"""
Generate Script.

Build a Therion layout file and thconfig from a settings YAML file.

Usage:
    python -m therion_layout.scripts.generate --settings cave.yaml -o build/
    python -m therion_layout.scripts.generate -s cave.th -s cave.th2 --theme heatmap --dry-run
    python -m therion_layout.scripts.generate --paper A1 --export map --export model -o out/
    python -m therion_layout.scripts.generate --list-modules

Without --settings the shipped defaults are used.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from therion_layout.generator.layout import generate_layout
from therion_layout.generator.modules import BUILTIN_MODULES, all_modules
from therion_layout.generator.thconfig import generate_config
from therion_layout.settings.loader import SettingsError, dump_settings, load_settings
from therion_layout.settings.model import EXPORT_TYPES, PAPER_SIZES
from therion_layout.settings.session import add_uploaded_files, set_module_enabled
from therion_layout.settings.themes import THEME_TEMPLATES, apply_theme, get_theme
from therion_layout.utils.fs import atomic_write_text, read_text
from therion_layout.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="therion-layout",
        description="Generate a Therion layout and thconfig from settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Available themes: {', '.join(t.id for t in THEME_TEMPLATES)}",
    )
    parser.add_argument(
        "--settings",
        "-c",
        type=str,
        help="Settings YAML file (default: shipped defaults)",
    )
    parser.add_argument(
        "--source",
        "-s",
        action="append",
        default=[],
        metavar="FILE",
        help="Survey file to add (.th source, .th2 drawing); repeatable",
    )
    parser.add_argument(
        "--theme",
        type=str,
        choices=[t.id for t in THEME_TEMPLATES],
        help="Apply a color theme",
    )
    parser.add_argument(
        "--print-mode",
        action="store_true",
        help="Force a neutral background for printing",
    )
    parser.add_argument(
        "--paper",
        type=str,
        choices=list(PAPER_SIZES),
        help="Paper size override",
    )
    parser.add_argument(
        "--export",
        action="append",
        choices=list(EXPORT_TYPES),
        help="Export task; repeatable, replaces the configured list",
    )
    parser.add_argument(
        "--enable-module",
        action="append",
        default=[],
        metavar="ID",
        help="Enable a MetaPost module by id; repeatable",
    )

    # Output
    parser.add_argument(
        "--out-dir",
        "-o",
        type=str,
        default=".",
        help="Output directory (default: current directory)",
    )
    parser.add_argument(
        "--layout-name",
        type=str,
        default="layout.thl",
        help="Layout file name (default: layout.thl)",
    )
    parser.add_argument(
        "--config-name",
        type=str,
        default="thconfig",
        help="Config file name (default: thconfig)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print both documents instead of writing them",
    )
    parser.add_argument(
        "--save-settings",
        type=str,
        metavar="PATH",
        help="Also write the effective settings to a YAML file",
    )

    # Listings
    parser.add_argument(
        "--list-modules",
        action="store_true",
        help="List available MetaPost modules and exit",
    )
    parser.add_argument(
        "--list-themes",
        action="store_true",
        help="List color themes and exit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Also write log records to this file",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write the log file as JSON lines",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        args.log_level,
        args.log_file,
        json=args.log_json,
        color=False,
        context={"app": "therion-layout"},
    )

    # Load settings
    try:
        settings = load_settings(args.settings)
    except (SettingsError, FileNotFoundError) as e:
        print(f"Error loading settings: {e}")
        return 1

    if args.list_modules:
        for module in all_modules(BUILTIN_MODULES, settings.custom_modules):
            state = "on " if module.id in settings.enabled_modules else "off"
            print(f"[{state}] {module.id:24s} {module.display_name} - {module.description}")
        return 0

    if args.list_themes:
        for theme in THEME_TEMPLATES:
            print(f"{theme.id:18s} {theme.name} - {theme.description}")
        return 0

    # Apply command-line overrides as successive snapshots
    if args.theme:
        settings = apply_theme(settings, get_theme(args.theme))
    if args.print_mode:
        settings = replace(settings, print_mode=True)
    if args.paper:
        settings = replace(settings, paper_size=args.paper)
    if args.export:
        settings = replace(settings, export_types=tuple(args.export))
    for module_id in args.enable_module:
        settings = set_module_enabled(settings, module_id, True)

    if args.source:
        try:
            files = [(Path(p).name, read_text(p), Path(p).resolve()) for p in args.source]
        except FileNotFoundError as e:
            print(f"Error: {e}")
            return 1
        settings = add_uploaded_files(settings, files)

    layout_text = generate_layout(settings)
    config_text = generate_config(settings, args.layout_name)

    if args.dry_run:
        print(f"--- {args.layout_name} ---")
        print(layout_text, end="")
        print(f"--- {args.config_name} ---")
        print(config_text, end="")
        print("--- End ---")
    else:
        out_dir = Path(args.out_dir)
        try:
            atomic_write_text(out_dir / args.layout_name, layout_text)
            atomic_write_text(out_dir / args.config_name, config_text)
        except RuntimeError as e:
            print(f"Error: {e}")
            logger.exception("Writing output failed")
            return 1
        logger.info("Wrote %s and %s to %s", args.layout_name, args.config_name, out_dir)

    if args.save_settings:
        try:
            dump_settings(settings, args.save_settings)
        except RuntimeError as e:
            print(f"Error: {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
