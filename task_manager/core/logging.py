"""Logging setup for the API server and the console CLI."""

from __future__ import annotations

import logging
import sys


class _NoiseFilter(logging.Filter):
    """
    Keep our own logs, drop chatty third-party INFO output:
    - task_manager.* passes through at the configured level
    - uvicorn access/error logs pass through
    - anything else only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("task_manager") or name.startswith("uvicorn"):
            return True
        return record.levelno >= logging.WARNING


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Configure the root logger with one stderr handler.

    Call this ONCE, early (app lifespan or CLI entry point).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler.addFilter(_NoiseFilter())
    root.addHandler(handler)

    logging.captureWarnings(True)
