"""Logging setup shared by every oapi_rust module.

Modules obtain their logger with ``get_logger(__name__)``; nothing is emitted
until the application (usually the CLI) calls ``configure_logging``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "oapi_rust"

_HANDLER_MARKER = "_oapi_rust_handler"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package's logger hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        The module logger.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.WARNING,
    use_rich: bool = True,
    console: Console | None = None,
) -> logging.Logger:
    """Attach a single handler to the package logger.

    Calling this more than once replaces the previously installed handler
    instead of stacking a second one.

    Args:
        level: Logging level (name or number).
        use_rich: Render records with rich; plain stderr output otherwise.
        console: Console for the rich handler (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )

    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger
