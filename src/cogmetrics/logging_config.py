"""Logging setup for the CLI and the HTTP service.

Records go to stderr through rich, so ``cogmetrics analyze --json`` keeps
stdout clean for the JSON payload. The level follows the configured
verbosity; a log file, when configured, receives the same records in plain
text.

Modules get their logger through :func:`get_logger`, which keeps every
logger under the ``cogmetrics`` namespace.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "cogmetrics"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# Libraries that log every multipart chunk or request at DEBUG.
_CHATTY_LOGGERS = ("multipart", "python_multipart", "httpx", "httpcore")

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """Install handlers on the root logger for *verbosity*.

    Args:
        verbosity: "quiet", "normal" or "verbose"
        log_file: Optional path that also receives every record

    Returns:
        The ``cogmetrics`` logger
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.WARNING)
    verbose = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    # Parser internals stay at WARNING unless asked for
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for *name* under the ``cogmetrics`` namespace.

    ``get_logger(__name__)`` inside the package returns the module logger
    unchanged; other names are prefixed, and None gives the package logger.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
