from __future__ import annotations

import logging
import os
import sys
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "Sway.EasyFocus"
LOG_DIR_NAME = "sway-easyfocus"
LOG_FILENAME = "easyfocus.log"
LOG_MAX_BYTES = 128 * 1024
LOG_BACKUPS = 2
PROPAGATE_ENV_VAR = "SWAY_EASYFOCUS_PROPAGATE_LOGS"
LOG_DIR_ENV_VAR = "SWAY_EASYFOCUS_LOG_DIR"

_TRUTHY = {"1", "true", "yes", "on"}


def get_logger() -> logging.Logger:
    """Return the shared easyfocus logger with propagation resolved from the environment."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = os.environ.get(PROPAGATE_ENV_VAR, "").strip().lower() in _TRUTHY
    return logger


def resolve_logs_dir(log_dir_name: str = LOG_DIR_NAME) -> Path:
    """
    Resolve the directory to store easyfocus logs.

    Strategy:
    - Use SWAY_EASYFOCUS_LOG_DIR if set.
    - Fall back to XDG state/cache locations.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / log_dir_name)
    candidates.append(cache_home / log_dir_name)

    for target in candidates:
        try:
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_file_handler(log_dir: Path, formatter: logging.Formatter) -> logging.Handler:
    """Rotate at LOG_MAX_BYTES, keeping LOG_BACKUPS old files."""
    handler = RotatingFileHandler(
        log_dir / LOG_FILENAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def configure_logging(debug_enabled: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Attach the file and stderr handlers once per process."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
    if getattr(logger, "_easyfocus_configured", False):
        return logger

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    target_dir = log_dir if log_dir is not None else resolve_logs_dir()
    logger.addHandler(build_file_handler(target_dir, formatter))

    # Operator-facing failures still reach the terminal when the file log is unread.
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("sway-easyfocus: %(message)s"))
    logger.addHandler(console)

    logger._easyfocus_configured = True  # type: ignore[attr-defined]
    logger.debug("Logging to %s (level=%s)", target_dir, logging.getLevelName(logger.level))
    return logger
