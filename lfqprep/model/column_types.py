"""
Column type tags for long-format tables.

Aggregation reduces duplicate rows through their string forms, so every
column's logical type is recorded beforehand and restored afterwards. The
same tags let users force column types on input tables.
"""

from enum import Enum, auto

import pandas as pd
from pandas.api import types as ptypes

from lfqprep.core.exceptions import ConfigurationError

_TRUE_STRINGS = {"true", "t", "yes", "1"}
_FALSE_STRINGS = {"false", "f", "no", "0"}


class ColumnType(Enum):
    """
    Logical column types.

    Attributes
    ----------
    NUMERIC : auto
        Floating point values.
    INTEGER : auto
        Whole numbers (nullable when missing values are present).
    LOGICAL : auto
        Booleans, parsed from ``True``/``False``-like strings.
    TEXT : auto
        Free text.
    CATEGORICAL : auto
        Labels stored as a pandas categorical.
    DATE : auto
        Calendar dates (time of day dropped).
    DATETIME : auto
        Timestamps.
    """

    NUMERIC = auto()
    INTEGER = auto()
    LOGICAL = auto()
    TEXT = auto()
    CATEGORICAL = auto()
    DATE = auto()
    DATETIME = auto()

    @classmethod
    def from_str(cls, name: str) -> "ColumnType":
        """Convert a string (``numeric``, ``factor``, ``character``...) to a ColumnType."""
        if isinstance(name, cls):
            return name
        aliases = {
            "float": cls.NUMERIC,
            "double": cls.NUMERIC,
            "int": cls.INTEGER,
            "bool": cls.LOGICAL,
            "boolean": cls.LOGICAL,
            "str": cls.TEXT,
            "string": cls.TEXT,
            "character": cls.TEXT,
            "category": cls.CATEGORICAL,
            "factor": cls.CATEGORICAL,
        }
        name_ = str(name).strip().lower()
        if name_ in aliases:
            return aliases[name_]
        for k, v in cls._member_map_.items():
            if k.lower() == name_:
                return v
        raise ConfigurationError(f"unknown column type {name!r}", parameter="column_types")

    @classmethod
    def infer(cls, series: pd.Series) -> "ColumnType":
        """Infer the type tag of an existing column from its dtype."""
        dtype = series.dtype
        if isinstance(dtype, pd.CategoricalDtype):
            return cls.CATEGORICAL
        if ptypes.is_bool_dtype(dtype):
            return cls.LOGICAL
        if ptypes.is_integer_dtype(dtype):
            return cls.INTEGER
        if ptypes.is_numeric_dtype(dtype):
            return cls.NUMERIC
        if ptypes.is_datetime64_any_dtype(dtype):
            return cls.DATETIME
        return cls.TEXT

    def coerce(self, series: pd.Series) -> pd.Series:
        """
        Convert a column to this type.

        Parameters
        ----------
        series : pd.Series
            Column to convert.

        Returns
        -------
        pd.Series

        Raises
        ------
        ValueError, TypeError
            If the values cannot be represented in this type.
        """
        missing = series.isna()

        if self == ColumnType.NUMERIC:
            return pd.to_numeric(series, errors="raise").astype(float)

        if self == ColumnType.INTEGER:
            numeric = pd.to_numeric(series, errors="raise")
            present = numeric[~missing]
            if not (present % 1 == 0).all():
                raise ValueError(f"column {series.name!r} holds non-integral values")
            return numeric.astype("Int64" if missing.any() else "int64")

        if self == ColumnType.LOGICAL:
            if ptypes.is_bool_dtype(series.dtype):
                return series

            def parse(value):
                if pd.isna(value):
                    return pd.NA
                if isinstance(value, bool):
                    return value
                text = str(value).strip().lower()
                if text in _TRUE_STRINGS:
                    return True
                if text in _FALSE_STRINGS:
                    return False
                raise ValueError(f"{value!r} is not a logical value")

            parsed = series.map(parse)
            return parsed.astype("boolean" if missing.any() else bool)

        if self == ColumnType.TEXT:
            return series.astype(object).where(missing, series.astype(str))

        if self == ColumnType.CATEGORICAL:
            return series.astype("category")

        if self == ColumnType.DATE:
            return pd.to_datetime(series, errors="raise").dt.normalize()

        if self == ColumnType.DATETIME:
            return pd.to_datetime(series, errors="raise")

        raise ValueError(f"Unknown column type: {self}")
