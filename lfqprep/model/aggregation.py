"""
Aggregation function enumeration for the lfqprep package.

This module provides the closed set of functions that can be used to reduce
the quantitative values of duplicate measurement rows into one value.
"""

from enum import Enum, auto

from lfqprep.core.exceptions import ConfigurationError


class AggregationFunction(Enum):
    """
    Enumeration of quantitative-value aggregation functions.

    These functions define how the quantitative values of rows sharing the
    same (aggregation key, filter columns, run) are merged.

    Attributes
    ----------
    SUM : auto
        Sum of the values (the default for peak areas).
    MEAN : auto
        Arithmetic mean of the values.
    MEDIAN : auto
        Median of the values.
    MAX : auto
        Largest value.
    MIN : auto
        Smallest value.
    """

    SUM = auto()
    MEAN = auto()
    MEDIAN = auto()
    MAX = auto()
    MIN = auto()

    @classmethod
    def from_str(cls, name: str) -> "AggregationFunction":
        """
        Convert a string to an AggregationFunction.

        Parameters
        ----------
        name : str
            The name of the aggregation function (case-insensitive).

        Returns
        -------
        AggregationFunction

        Raises
        ------
        ConfigurationError
            If the name does not match any aggregation function.
        """
        if isinstance(name, cls):
            return name
        name_ = str(name).strip().lower()
        for k, v in cls._member_map_.items():
            if k.lower() == name_:
                return v
        raise ConfigurationError(
            f"unknown aggregation function {name!r}, expected one of "
            f"{', '.join(m.label for m in cls)}",
            parameter="aggr_function",
        )

    @property
    def label(self) -> str:
        """Lower-case name used in configuration files."""
        return self.name.lower()

    @property
    def pandas_agg_func(self) -> str:
        """Name of the equivalent pandas groupby aggregation."""
        return self.label
