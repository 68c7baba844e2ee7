"""Logging configuration for secboot."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False,
    level: str = "WARNING",
    log_file: str | Path | None = None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the ``secboot`` logger.

    Args:
        verbose: If True, log at DEBUG with timestamps and paths.
                 If False, use ``level`` and keep the shell output clean.
        level: Level name used when not verbose. Unknown names fall back to WARNING.
        log_file: Optional path for a rotating file log (always DEBUG)
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        The configured ``secboot`` logger
    """
    logging.getLogger().setLevel(logging.WARNING)

    secboot_logger = logging.getLogger("secboot")
    if verbose:
        secboot_logger.setLevel(logging.DEBUG)
    else:
        secboot_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Reconfiguration replaces earlier handlers
    for handler in list(secboot_logger.handlers):
        secboot_logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    secboot_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        secboot_logger.addHandler(file_handler)
        # File always gets DEBUG; console handler filters by its own level
        console_handler.setLevel(secboot_logger.level)
        secboot_logger.setLevel(logging.DEBUG)

    secboot_logger.propagate = False
    return secboot_logger
