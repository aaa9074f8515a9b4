"""
Logging configuration for the comment board service.

``setup_logging`` attaches a console handler and, when ``LOG_FILE`` is
set, a size‑rotated file handler to the root logger.  The handlers it
installs are named, so repeated calls (tests, several ``create_app``
calls) do not stack duplicates while handlers installed by others,
such as pytest's capture handler, are left alone.  Uvicorn's loggers
are aligned to the same level so ``serve`` output is consistent.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "comment_board.console"
FILE_HANDLER_NAME = "comment_board.file"

# Rotate the demo log at 1 MiB, keeping three old files.
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 3

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _installed(logger: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in logger.handlers)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names mean ``INFO``.
    logfile : Optional[str]
        Path of a log file.  Parent directories are created.  A file
        handler is added once; a later call with another path does not
        replace it.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    for name in UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _installed(root, CONSOLE_HANDLER_NAME):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile and not _installed(root, FILE_HANDLER_NAME):
        log_path = Path(logfile).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
