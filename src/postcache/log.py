"""Logging setup with stderr discipline.

postcache modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves.  Applications call :func:`configure_logging`
once at startup to route the ``postcache`` logger hierarchy to stderr via a
:class:`rich.logging.RichHandler`.  Colour follows clig.dev conventions: it
is disabled when ``NO_COLOR`` is set (any value) or ``TERM=dumb``.
"""

from __future__ import annotations

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "postcache"


def _should_disable_color() -> bool:
    """Return True when NO_COLOR is set or TERM=dumb."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


def configure_logging(level: str | int = "WARNING", no_color: bool = False) -> logging.Logger:
    """Attach a stderr :class:`~rich.logging.RichHandler` to the package logger.

    Calling it again replaces the handler installed by the previous call
    instead of stacking a second one.

    Args:
        level: Level name (``"DEBUG"``) or number for the ``postcache`` logger.
        no_color: Disable colour regardless of the environment.

    Returns:
        The configured ``postcache`` logger.

    Raises:
        ValueError: If *level* is not a known level name.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_postcache", False):
            logger.removeHandler(handler)

    console = Console(
        file=sys.stderr,
        stderr=True,
        no_color=no_color or _should_disable_color(),
    )
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=False)
    handler._postcache = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else level.upper())
    return logger
