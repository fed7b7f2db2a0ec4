"""Rich logging utilities."""

from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler

PACKAGE_LOGGER = "tycoonsim"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logger with Rich handler."""

    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
    else:
        numeric_level = level
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
        force=True,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace, ensuring setup has been applied."""

    if not logging.getLogger().handlers:
        setup_logging()
    if name is None or name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name or PACKAGE_LOGGER)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


__all__ = ["setup_logging", "get_logger"]
