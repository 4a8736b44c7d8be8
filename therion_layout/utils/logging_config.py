"""Unified logging configuration for all entrypoints.

Provides consistent logging for the command-line generator and for callers
embedding the generator in a larger application:
    - Console and optional file handler
    - JSON output mode for ingestion
    - Contextual fields (project, run)
    - Warning capture (Python warnings → logging)

Public API:
    setup_logging(log_level="INFO", context={"app": "therion-layout"})
    push_context(project="hacava")
    pop_context(keys=["project"])

Format examples:
    Human: 2026-03-01T10:12:44.120Z | INFO     | app=therion-layout | Message
    JSON: {"t":"2026-03-01T10:12:44.120+00:00","lvl":"INFO","msg":"..."}

Context uses contextvars for thread isolation.
Idempotent: repeated setup_logging() calls don't duplicate handlers.
"""

import contextvars
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('logging_context', default={})

_configured = False


class ContextFormatter(logging.Formatter):
    """Formatter that includes contextual fields.

    Supports a human-readable format with optional ANSI colors and a JSON
    line format for machine ingestion.
    """

    def __init__(
        self,
        fmt_mode: str = "human",
        use_color: bool = True,
    ):
        super().__init__()
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

        self.colors = {
            'DEBUG': '\033[36m',
            'INFO': '\033[32m',
            'WARNING': '\033[33m',
            'ERROR': '\033[31m',
            'CRITICAL': '\033[35m',
            'RESET': '\033[0m'
        }

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})

        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)

        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: dict
    ) -> str:
        log_dict = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
            'msg': record.getMessage()
        }
        log_dict.update(context)

        if record.exc_info:
            log_dict['exc'] = self.formatException(record.exc_info)

        return json.dumps(log_dict)

    def _format_human(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: dict
    ) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = record.levelname
        if self.use_color:
            level = f"{self.colors.get(level, '')}{level:8s}{self.colors['RESET']}"
        else:
            level = f"{level:8s}"

        context_str = ' '.join(f"{k}={v}" for k, v in context.items())

        parts = [ts_str, '|', level, '|']
        if context_str:
            parts.append(f"{context_str} |")
        parts.append(record.getMessage())

        line = ' '.join(parts)

        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)

        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    capture_warnings: bool = True,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Configure root logger (idempotent).

    Parameters
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
    log_file : str, optional
        Log file path; None for no file logging
    json : bool
        Use JSON format for the file handler, default False
    color : bool
        Use ANSI colors in console output, default True
    to_stderr : bool
        Log to stderr (console), default True
    capture_warnings : bool
        Capture Python warnings to logging, default True
    context : dict, optional
        Initial contextual fields (e.g., {"app": "therion-layout"})

    Returns
    -------
    dict
        Configuration info: {"handlers": [...]}

    Raises
    ------
    ValueError
        If *log_level* is not a known level name.
    """
    global _configured

    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    root = logging.getLogger()
    if _configured:
        for handler in list(root.handlers):
            if isinstance(handler.formatter, ContextFormatter):
                root.removeHandler(handler)
                handler.close()

    root.setLevel(level)

    handlers = []
    if to_stderr:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ContextFormatter("human", color))
        root.addHandler(console_handler)
        handlers.append(console_handler)

    if log_file:
        file_handler = _create_file_handler(log_file, json)
        root.addHandler(file_handler)
        handlers.append(file_handler)

    if context:
        push_context(**context)

    if capture_warnings:
        logging.captureWarnings(True)
        logging.getLogger('py.warnings').setLevel(logging.WARNING)

    _configured = True

    return {'handlers': handlers}


def _create_file_handler(
    log_file: str,
    json_format: bool,
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    fmt_mode = "json" if json_format else "human"
    handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
    return handler


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(app="therion-layout", project="hacava")
    >>> logger.info("Started")  # → "... | app=therion-layout project=hacava | Started"
    """
    current = _context_var.get({})
    _context_var.set({**current, **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; ``None`` clears all context."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)
