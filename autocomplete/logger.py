import logging
import logging.handlers
import os
import queue
import sys
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from autocomplete.utils.helper import platformdir, private_folder

ACCESS_LOGGER: Final = "autocomplete.access"
LOG_FILE: Final = "autocomplete.log"
ACCESS_LOG_FILE: Final = "access.log"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FORMAT = logging.Formatter("[%(asctime)s] [%(levelname)-8s] %(name)s: %(message)s", DATE_FORMAT)
ACCESS_FORMAT = logging.Formatter("[%(asctime)s] %(message)s", DATE_FORMAT)

_RESET = "\x1b[0m"
_NAME_COLORS = {True: "\x1b[36m", False: "\x1b[35m"}


@runtime_checkable
class TTYStream(Protocol):
    def write(self, s: str, /) -> object: ...

    def isatty(self) -> bool: ...


class AnsiFormatter(logging.Formatter):
    """Colours the level name by severity and dims the timestamp; tracebacks are printed red."""

    LEVEL_COLORS: Final = {
        logging.DEBUG: "\x1b[40;1m",
        logging.INFO: "\x1b[34;1m",
        logging.WARNING: "\x1b[33;1m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[41m",
    }

    FORMATS: Final = {
        (level, access): logging.Formatter(
            f"\x1b[30;1m%(asctime)s{_RESET} {color}%(levelname)-8s{_RESET} {name_color}%(name)s{_RESET}: %(message)s",
            DATE_FORMAT,
        )
        for level, color in LEVEL_COLORS.items()
        for access, name_color in _NAME_COLORS.items()
    }

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelno if record.levelno in self.LEVEL_COLORS else logging.DEBUG
        formatter = self.FORMATS[level, record.name == ACCESS_LOGGER]
        if record.exc_info:
            record.exc_text = f"\x1b[31m{formatter.formatException(record.exc_info)}{_RESET}"
        try:
            return formatter.format(record)
        finally:
            record.exc_text = None


def use_color_formatting(stream: object) -> bool:
    if "NO_COLOR" in os.environ or not isinstance(stream, TTYStream) or not stream.isatty():
        return False
    if os.environ.get("TERM_PROGRAM") == "vscode":
        return True
    return sys.platform != "win32" or "WT_SESSION" in os.environ


def _rotating_handler(folder: Path, name: str, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(folder / name, maxBytes=2_000_000, backupCount=5, encoding="utf-8")
    handler.setFormatter(formatter)
    return handler


class _ExcludeAccess(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.name != ACCESS_LOGGER


class _OnlyAccess(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.name == ACCESS_LOGGER


@contextmanager
def with_logging(log_level: int = logging.INFO, *, log_dir: Path | None = None) -> Generator[Path]:
    """Route every record through a queue to stderr and rotating files under ``log_dir``.

    Application records land in ``autocomplete.log``; request lines from the access
    logger go to ``access.log`` instead. Yields the folder holding both files.
    """
    folder = private_folder(platformdir.user_log_path if log_dir is None else log_dir)

    q: queue.SimpleQueue[Any] = queue.SimpleQueue()
    q_handler = logging.handlers.QueueHandler(q)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(AnsiFormatter() if use_color_formatting(sys.stderr) else FORMAT)

    app_file = _rotating_handler(folder, LOG_FILE, FORMAT)
    app_file.addFilter(_ExcludeAccess())
    access_file = _rotating_handler(folder, ACCESS_LOG_FILE, ACCESS_FORMAT)
    access_file.addFilter(_OnlyAccess())

    q_listener = logging.handlers.QueueListener(
        q, stream_handler, app_file, access_file, respect_handler_level=True
    )
    root_logger = logging.getLogger()
    previous_level = root_logger.level
    root_logger.setLevel(log_level)
    root_logger.addHandler(q_handler)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger(ACCESS_LOGGER).setLevel(logging.INFO)

    try:
        q_listener.start()
        yield folder
    finally:
        q_listener.stop()
        root_logger.removeHandler(q_handler)
        root_logger.setLevel(previous_level)
        for handler in (app_file, access_file):
            handler.close()
