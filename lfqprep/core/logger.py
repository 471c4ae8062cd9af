"""
Logging helpers for the lfqprep package.

All modules obtain their logger through :func:`get_logger` so that every
message lives under the ``lfqprep`` namespace and can be configured at once.
"""

import functools
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

PACKAGE_LOGGER = "lfqprep"
DEFAULT_FORMAT = "%(asctime)s [%(funcName)s] - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger inside the package namespace.

    Parameters
    ----------
    name : str
        Dotted logger name. Names outside ``lfqprep`` are prefixed with it.

    Returns
    -------
    logging.Logger
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def initialize_logging() -> None:
    """Attach a NullHandler so library use stays silent unless configured."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the package logger with a stream handler and an optional file handler.

    Parameters
    ----------
    level : int or str, optional
        Logging level, e.g. ``logging.DEBUG`` or ``"debug"``.
    log_file : str or Path, optional
        Also write log records to this file.
    fmt : str, optional
        Format string for both handlers.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    formatter = logging.Formatter(fmt)

    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    return package_logger


def log_execution_time(logger: logging.Logger, level: int = logging.DEBUG) -> Callable:
    """
    Decorator logging how long the wrapped function took.

    Parameters
    ----------
    logger : logging.Logger
        Logger to report to.
    level : int, optional
        Level of the timing message.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                logger.log(level, "%s finished in %.3fs", fn.__name__, time.perf_counter() - start)

        return wrapper

    return decorator
