"""Dated release log file.

Each release run appends its console output to
``<log_dir>/<log_name>-YYYY-MM-DD.log`` so a failed run can be inspected
after the terminal is gone.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol, Style

__all__ = ["TeeConsole", "close_release_log", "log_path_for", "open_release_log"]

_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"


def log_path_for(log_dir: Path, log_name: str, day: date) -> Path:
    return log_dir / f"{log_name}-{day.isoformat()}.log"


def open_release_log(path: Path) -> Result[logging.Logger, str]:
    """Return a logger appending to ``path``, creating its directory."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as e:
        return Err(f"cannot open log file {path}: {e}")

    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger = logging.getLogger(f"relkit.release.{path.stem}")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    close_release_log(logger)
    logger.addHandler(handler)
    return Ok(logger)


def close_release_log(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TeeConsole:
    """Forward to an inner console and record every line in a logger."""

    def __init__(self, inner: ConsoleProtocol, logger: logging.Logger) -> None:
        self._inner = inner
        self._logger = logger

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._inner.print(message, style)
        if message:
            self._logger.info(message)

    def success(self, message: str) -> None:
        self._inner.success(message)
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._inner.error(message)
        self._logger.error(message)

    def warning(self, message: str) -> None:
        self._inner.warning(message)
        self._logger.warning(message)

    def info(self, message: str) -> None:
        self._inner.info(message)
        self._logger.info(message)

    def header(self, message: str) -> None:
        self._inner.header(message)
        self._logger.info(message)
