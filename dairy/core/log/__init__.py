"""Process-wide logging: a rich console on stderr plus one log file per day."""
from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import ContextFilter, log_context
from .timing import timeit

if TYPE_CHECKING:
    from dairy.core.config import Settings

__all__ = [
    "configure_logging",
    "init_logging",
    "get_logger",
    "shutdown_logging",
    "log_context",
    "timeit",
]

ROOT_LOGGER_NAME = "dairy"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s"

_context_filter = ContextFilter()
_handlers: list[logging.Handler] = []
_configured = False


class DailyFileHandler(logging.FileHandler):
    """Appends to ``<dir>/<app>-YYYY-MM-DD.log``, reopening when the date changes."""

    def __init__(self, directory: Path, app_name: str) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        self.directory = directory
        self.app_name = app_name
        self.day = date.today()
        super().__init__(self.path_for(self.day), mode="a", encoding="utf-8")

    def path_for(self, day: date) -> Path:
        return self.directory / f"{self.app_name}-{day.isoformat()}.log"

    def emit(self, record: logging.LogRecord) -> None:
        day = datetime.fromtimestamp(record.created).date()
        if day != self.day:
            self.day = day
            if self.stream:
                self.stream.close()
                self.stream = None  # type: ignore[assignment]
            self.baseFilename = str(self.path_for(day).resolve())
        # FileHandler opens the stream lazily when it is None
        super().emit(record)


def init_logging(
    level: str | int = "INFO",
    *,
    log_dir: str | Path | None = None,
    app_name: str = ROOT_LOGGER_NAME,
    console: bool = True,
    rich_tracebacks: bool = True,
) -> None:
    """Replace the root handlers with a console and an optional daily file.

    Calling it again reconfigures logging from scratch, so the API factory,
    the scripts and the test suite can each pick their own level and target.
    """

    global _configured
    shutdown_logging()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if console:
        if rich_tracebacks:
            install_rich_traceback(show_locals=False)
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=rich_tracebacks,
            show_path=False,
            markup=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
        _handlers.append(handler)

    if log_dir:
        handler = DailyFileHandler(Path(log_dir), app_name)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        _handlers.append(handler)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in _handlers:
        handler.addFilter(_context_filter)
        root.addHandler(handler)
    _configured = True


def configure_logging(settings: Settings, *, app_name: str = ROOT_LOGGER_NAME) -> None:
    """Apply the ``LOG_LEVEL`` and ``LOG_DIR`` settings."""

    init_logging(settings.log_level, log_dir=settings.log_dir, app_name=app_name)


def shutdown_logging() -> None:
    """Detach and close the handlers installed by :func:`init_logging`."""

    global _configured
    _configured = False
    root = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.close()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    # Console-only defaults until the entry point configures logging.
    if not _configured:
        init_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
