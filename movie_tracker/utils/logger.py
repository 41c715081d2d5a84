"""Logger factory: stdout handler plus an optional dated log file."""

import logging
import sys
from datetime import date
from pathlib import Path

from movie_tracker.settings import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_configured: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Return the named logger, configuring it on first use.

    Later calls with the same name return the cached logger unchanged.

    Args:
        name: Logger name (e.g., 'database.store').
        level: Logging level. Defaults to LOG_LEVEL.
        log_dir: Directory for a dated log file. Defaults to LOG_DIR when
            LOG_TO_FILE is enabled, otherwise no file is written.

    Returns:
        Configured logger instance.
    """
    if name in _configured:
        return _configured[name]

    level = level or settings.logging.level
    if log_dir is None and settings.logging.to_file:
        log_dir = settings.logging.log_path

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        file_handler = _open_log_file(name, log_dir)
        if file_handler is not None:
            handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _configured[name] = logger
    return logger


def _open_log_file(name: str, log_dir: Path) -> logging.FileHandler | None:
    """Open ``<log_dir>/<name>_<YYYYMMDD>.log``, None if it cannot be created."""
    safe_name = name.replace(".", "_").replace("/", "_")
    path = log_dir / f"{safe_name}_{date.today():%Y%m%d}.log"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None


def set_log_level(level: int | str) -> None:
    """Change the level of every logger configured so far, handlers included."""
    for logger in _configured.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
