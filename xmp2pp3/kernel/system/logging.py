import logging
import sys
from typing import Optional, TextIO


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Sets up the global logging configuration for the application.
    Logs go to stderr so that profile text printed on stdout stays clean.
    """
    logger = logging.getLogger("xmp2pp3")
    logger.setLevel(level)

    # Prevent duplicate handlers if called multiple times
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Helper to get a sub-logger for a specific module.
    """
    if name and name.startswith("xmp2pp3"):
        return logging.getLogger(name)
    if name:
        return logging.getLogger(f"xmp2pp3.{name}")
    return logging.getLogger("xmp2pp3")
