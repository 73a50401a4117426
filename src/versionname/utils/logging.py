"""Logging configuration with Rich formatting.

Library modules get their logger from :func:`configure_module_logger`;
applications that want the same look for their own records can call
:func:`setup_logging` once at startup.
"""

import logging
import sys
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _rich_handler(console: Console, level: int, rich_tracebacks: bool) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_path=False,
        show_time=True,
        rich_tracebacks=rich_tracebacks,
        markup=False,
        show_level=True,
        level=level,
        omit_repeated_times=False,
        keywords=["resource", "manifest", "properties"],
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def setup_logging(
    level: int = logging.INFO,
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Configure the root logger with a single Rich handler.

    Args:
        level: Logging level (default: INFO).
        rich_tracebacks: Use Rich for traceback formatting (default: True).
        console: Optional Rich Console instance (default: stderr console).
    """
    if console is None:
        console = Console(stderr=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(_rich_handler(console, level, rich_tracebacks))


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger, setting up Rich logging on the root logger if needed.

    Args:
        name: Logger name (typically __name__).
        level: Optional logging level override.

    Returns:
        Logger instance.
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    root_logger = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root_logger.handlers):
        setup_logging()

    return logger


def configure_module_logger(
    module_name: str,
    level: int = logging.INFO,
    use_colors: bool = True,
) -> logging.Logger:
    """
    Configure a module-specific logger writing to stderr.

    Calling this again for the same module replaces the previous handler.

    Args:
        module_name: Module name (typically __name__).
        level: Logging level.
        use_colors: Use a Rich handler; a plain StreamHandler otherwise.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(level)
    logger.handlers.clear()

    handler: Union[RichHandler, logging.Handler]
    if use_colors:
        console = Console(stderr=True, legacy_windows=False)
        handler = _rich_handler(console, logging.NOTSET, rich_tracebacks=True)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    logger.addHandler(handler)
    logger.propagate = False

    return logger
