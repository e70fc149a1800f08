from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ccard_activation.config import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_file_logging(log_path: Path, config: LoggingConfig) -> None:
    """Attach a rotating file handler to the root logger, once per process."""

    root = logging.getLogger()
    root.setLevel(config.level.upper())
    # Avoid adding duplicate handlers if reloaded
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.max_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
