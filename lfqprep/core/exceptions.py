"""
Exception types raised by lfqprep.
"""

from typing import Optional


class LfqPrepError(Exception):
    """Base class for all lfqprep errors."""


class ConfigurationError(LfqPrepError, ValueError):
    """
    Invalid pipeline configuration.

    Raised before any data is touched: unknown method names, missing
    columns, invalid numeric parameters.

    Attributes
    ----------
    parameter : str, optional
        Name of the offending parameter.
    """

    def __init__(self, message: str, parameter: Optional[str] = None):
        self.parameter = parameter
        if parameter is not None:
            message = f"{parameter}: {message}"
        super().__init__(message)


class AnnotationError(LfqPrepError, ValueError):
    """The experiment annotation could not be matched to the measurement table."""
