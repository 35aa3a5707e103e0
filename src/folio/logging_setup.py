"""Centralized logging configuration for Folio."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "FOLIO_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)

if TYPE_CHECKING:

    class _ManagedRichHandler(RichHandler):
        _folio_managed: bool
else:
    _ManagedRichHandler = RichHandler


def _resolve_level(override: str | None = None) -> int:
    """Return the logging level from the override or the environment."""
    level_name = (override or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None) -> None:
    """Configure logging once with a Rich handler.

    Calling this again only updates the level; it never stacks handlers.
    """
    root_logger = logging.getLogger()

    managed_handler: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_folio_managed", False):
            managed_handler = cast(_ManagedRichHandler, handler)
            break

    if managed_handler is None:
        root_logger.handlers.clear()
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._folio_managed = True
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(level))
    logging.captureWarnings(True)
