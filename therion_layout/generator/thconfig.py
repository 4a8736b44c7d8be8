"""Config document generator -- settings to Therion ``thconfig`` text.

Output blocks, separated by a blank line::

    encoding utf-8

    source cave.th            (one per uploaded .th file, else main.th)

    select <selection>

    input <layout file>

    export map -layout custom_layout -layout A4_Layout -o map.pdf

Export kinds without a task template are skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from therion_layout.generator.layout import LAYOUT_NAME, page_layout_name
from therion_layout.settings.model import ExportType, Settings

logger = logging.getLogger(__name__)

FALLBACK_SOURCE = "main.th"
MAP_OUTPUT = "map.pdf"
MODEL_OUTPUT = "model.lox"


def _map_task(settings: Settings) -> str:
    return (
        f"export map -layout {LAYOUT_NAME} "
        f"-layout {page_layout_name(settings.paper_size)} -o {MAP_OUTPUT}"
    )


def _model_task(settings: Settings) -> str:
    return f"export model -o {MODEL_OUTPUT}"


EXPORT_TASKS: dict[ExportType, Callable[[Settings], str] | None] = {
    "map": _map_task,
    "model": _model_task,
    "atlas": None,
}


def export_lines(settings: Settings) -> list[str]:
    """One task line per requested export kind that has a template."""
    lines = []
    for export_type in settings.export_types:
        task = EXPORT_TASKS.get(export_type)
        if task is None:
            logger.warning("No export template for '%s'; skipped", export_type)
            continue
        lines.append(task(settings))
    return lines


def generate_config(settings: Settings, layout_file_name: str) -> str:
    """Generate the project config document.

    Parameters
    ----------
    settings : Settings
        Settings snapshot; read only.
    layout_file_name : str
        File name of the layout document, written into the ``input`` line.

    Returns
    -------
    str
        Config document, newline-terminated.
    """
    sources = [f"source {f.file_name}" for f in settings.source_files]
    if not sources:
        sources = [f"source {FALLBACK_SOURCE}"]

    blocks = [
        "encoding utf-8",
        "\n".join(sources),
        f"select {settings.select_name}",
        f"input {layout_file_name}",
    ]
    tasks = export_lines(settings)
    if tasks:
        blocks.append("\n".join(tasks))
    return "\n\n".join(blocks) + "\n"
