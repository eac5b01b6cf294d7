"""Logging configuration using Loguru."""

import sys

from loguru import logger

from harvestguard.utils.config import get_project_root, settings

_configured = False


def setup_logging(force: bool = False) -> None:
    global _configured
    if _configured and not force:
        return

    logger.remove()

    # Console
    logger.add(
        sys.stderr,
        format=settings.logging.format,
        level=settings.logging.level,
        colorize=True,
    )

    if settings.logging.to_file:
        log_dir = get_project_root() / "logs"
        log_dir.mkdir(exist_ok=True)

        # File
        logger.add(
            log_dir / "harvestguard.log",
            format=settings.logging.format,
            level=settings.logging.level,
            rotation=settings.logging.rotation,
            retention=settings.logging.retention,
            compression="zip",
        )

        # Errors only
        logger.add(
            log_dir / "errors.log",
            format=settings.logging.format,
            level="ERROR",
            rotation=settings.logging.rotation,
            retention=settings.logging.retention,
            compression="zip",
        )

    _configured = True
    logger.info(f"Logging initialized - Level: {settings.logging.level}")
