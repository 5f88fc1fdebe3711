from __future__ import annotations

import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys


_LOGGER: logging.Logger | None = None


def new_session_id() -> str:
    """Return the timestamp tag shared by the log files of one run."""

    return datetime.now().strftime("%Y%m%d_%H%M%S")


def get_logger(
    log_dir: Path | None = None,
    session_id: str | None = None,
    *,
    detailed: bool = False,
) -> logging.Logger:
    """Return the configured application logger.

    The first call installs a stdout handler and, when ``log_dir`` is given, a
    rotating file handler writing ``console_<session>.log``. Later calls return
    the same logger untouched.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    logger = logging.getLogger("spoolcsv")
    logger.setLevel(logging.DEBUG if detailed else logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_dir is not None:
        base = Path(log_dir)
        base.mkdir(parents=True, exist_ok=True)
        log_path = base / f"console_{session_id or new_session_id()}.log"
        file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger


def reset_logger() -> None:
    """Detach handlers so the next ``get_logger`` call reconfigures logging."""
    global _LOGGER
    logger = logging.getLogger("spoolcsv")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _LOGGER = None
