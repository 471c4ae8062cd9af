"""
Applying and restoring column type tags on DataFrames.
"""

from typing import Dict, Mapping, Union

import pandas as pd

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.core.logger import get_logger
from lfqprep.model.column_types import ColumnType

logger = get_logger("lfqprep.preprocessing.column_types")


def snapshot_column_types(df: pd.DataFrame) -> Dict[str, ColumnType]:
    """Record the type tag of every column."""
    return {column: ColumnType.infer(df[column]) for column in df.columns}


def restore_column_types(df: pd.DataFrame, types: Mapping[str, ColumnType]) -> pd.DataFrame:
    """
    Convert columns back to their recorded types.

    A column whose values no longer fit its type (for instance charges joined
    into ``"2/3"`` by aggregation) becomes categorical instead; this is not
    an error.

    Parameters
    ----------
    df : pd.DataFrame
        Table to convert in place.
    types : mapping of str to ColumnType
        Type tag per column; columns without a tag are left alone.

    Returns
    -------
    pd.DataFrame
        The same DataFrame.
    """
    for column, column_type in types.items():
        if column not in df.columns:
            continue
        try:
            df[column] = column_type.coerce(df[column])
        except (ValueError, TypeError) as e:
            logger.debug(
                "Column '%s' cannot be restored to %s (%s); using categorical",
                column,
                column_type.name,
                e,
            )
            df[column] = df[column].astype("category")
    return df


def apply_column_types(
    df: pd.DataFrame, column_types: Mapping[str, Union[str, ColumnType]]
) -> pd.DataFrame:
    """
    Force user-specified types onto input columns.

    Parameters
    ----------
    df : pd.DataFrame
        Table to convert; a converted copy is returned.
    column_types : mapping of str to str or ColumnType
        Type per column, e.g. ``{"PrecursorCharge": "integer"}``.

    Returns
    -------
    pd.DataFrame

    Raises
    ------
    ConfigurationError
        If a column is missing, a type is unknown, or values do not fit.
    """
    result = df.copy()
    for column, column_type in column_types.items():
        if column not in result.columns:
            raise ConfigurationError(f"column {column!r} not found in table", parameter="column_types")
        column_type = ColumnType.from_str(column_type)
        try:
            result[column] = column_type.coerce(result[column])
        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"column {column!r} cannot be converted to {column_type.name.lower()}: {e}",
                parameter="column_types",
            ) from e
    return result
