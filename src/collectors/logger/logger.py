"""Logger configuration for the collectors package.

Records go to stderr by default. The demo owns stdout, so the two streams can
be redirected independently.
"""

import logging
import os
import sys
import typing as tp

__all__ = ["logger", "setup_logger", "DEFAULT_FORMAT"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _CurrentStderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time.

    A plain ``StreamHandler(sys.stderr)`` keeps the stream it saw at import,
    which misses later redirection of ``sys.stderr``.
    """

    @property
    def stream(self) -> tp.TextIO:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: tp.TextIO) -> None:
        pass


def setup_logger(
    name: str = "collectors",
    level: tp.Optional[str] = None,
    format_string: tp.Optional[str] = None,
    stream: tp.Optional[tp.TextIO] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (typically project name)
        level: Log level name; falls back to ``LOG_LEVEL``, then INFO
        format_string: Custom format string
        stream: Fixed output stream. Defaults to the current ``sys.stderr``

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Configure once per logger name
    if logger.handlers:
        return logger

    level = level or os.getenv("LOG_LEVEL", "INFO")
    handler = (
        logging.StreamHandler(stream) if stream is not None else _CurrentStderrHandler()
    )
    handler.setFormatter(
        logging.Formatter(fmt=format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False
    return logger


logger = setup_logger()
