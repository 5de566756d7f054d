"""Centralized logging configuration for userstore."""

import logging
import os
from logging.handlers import RotatingFileHandler

from .config import load_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers that also write to their own rotating file
FILE_LOGGERS = ["userstore.database.users_db"]


def setup_logging(settings=None, level=None):
    """Configure logging from Settings (loaded from the environment if omitted).

    - Root logger: console handler at `level`, else settings.log_level
    - One RotatingFileHandler (5 MB, 3 backups) per FILE_LOGGERS entry,
      written to settings.log_dir; skipped when log_dir is None

    An unknown level name raises ValueError. Safe to call multiple times;
    skips if handlers are already attached.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    if settings is None:
        settings = load_settings()
    level = level or settings.log_level
    if isinstance(level, str):
        level = level.upper()

    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.log_dir is None:
        return

    os.makedirs(settings.log_dir, exist_ok=True)
    for name in FILE_LOGGERS:
        handler = RotatingFileHandler(
            os.path.join(settings.log_dir, f"{name.replace('.', '_')}.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
        )
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logging.getLogger(name).addHandler(handler)
