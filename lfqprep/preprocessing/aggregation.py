"""
Aggregation of redundant measurement rows.

Rows sharing the same aggregation key, filter column values and run (for
instance the charge states and modification forms of one peptide in one run)
are merged into a single row.
"""

from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from lfqprep.core.constants import KEY_SEPARATOR, PROTEIN_GROUP_SPLIT
from lfqprep.core.exceptions import ConfigurationError
from lfqprep.core.logger import get_logger, log_execution_time
from lfqprep.model.aggregation import AggregationFunction
from lfqprep.preprocessing.column_types import restore_column_types, snapshot_column_types

logger = get_logger("lfqprep.preprocessing.aggregation")


def composite_key(df: pd.DataFrame, columns: Sequence[str], separator: str = KEY_SEPARATOR) -> pd.Series:
    """
    Concatenate the string forms of several columns into one key per row.

    Values must not contain ``separator``, otherwise distinct keys may fuse.
    """
    if not columns:
        raise ConfigurationError("at least one key column is required", parameter="aggr_by")
    key = df[columns[0]].astype(str)
    for column in columns[1:]:
        key = key + separator + df[column].astype(str)
    return key


def _join_distinct(values: pd.Series, split: str):
    """Join the distinct non-missing string forms of ``values`` in encounter order."""
    distinct = pd.unique(values.dropna().astype(str))
    if len(distinct) == 0:
        return np.nan
    return split.join(distinct)


@log_execution_time(logger)
def aggregate_duplicates(
    df: pd.DataFrame,
    aggr_by: str,
    filter_columns: Optional[Sequence[str]],
    run_column: str,
    quant_column: str,
    aggr_function: Union[str, AggregationFunction] = AggregationFunction.SUM,
    split: str = PROTEIN_GROUP_SPLIT,
    key_separator: str = KEY_SEPARATOR,
) -> pd.DataFrame:
    """
    Merge rows sharing (aggregation key, filter columns, run).

    Rows with a unique key are returned untouched, followed by one merged row
    per duplicated key (in order of first appearance). In a merged row every
    non-quantitative column holds the distinct values of the group joined by
    ``split``, and the quantitative column holds ``aggr_function`` applied to
    the group's values. Column types are restored afterwards; a column that
    no longer fits its type becomes categorical.

    Parameters
    ----------
    df : pd.DataFrame
        Long-format table without missing quantitative values.
    aggr_by : str
        Aggregation key column, e.g. the peptide sequence.
    filter_columns : sequence of str, optional
        Filter columns; they are part of the key so flagged and unflagged rows
        are never merged.
    run_column : str
        Run column; data is never aggregated across runs.
    quant_column : str
        Quantitative column.
    aggr_function : str or AggregationFunction, optional
        Reduction of the quantitative values, ``sum`` by default.
    split : str, optional
        Separator used when joining non-quantitative values.
    key_separator : str, optional
        Separator used to build the composite key; must differ from ``split``.

    Returns
    -------
    pd.DataFrame
        Table in which the composite key is unique.
    """
    function = AggregationFunction.from_str(aggr_function)
    if key_separator == split:
        raise ConfigurationError("must differ from the protein group separator", parameter="key_separator")

    key_columns: List[str] = [aggr_by, *(filter_columns or []), run_column]
    key = composite_key(df, key_columns, key_separator)
    duplicated = key.duplicated(keep=False).to_numpy()

    if not duplicated.any():
        logger.debug("No duplicate rows to aggregate")
        return df.copy()

    types = snapshot_column_types(df)
    types.pop(quant_column, None)

    grouped = df[duplicated].groupby(key[duplicated].to_numpy(), sort=False)
    merged = {}
    for column in df.columns:
        if column == quant_column:
            merged[column] = grouped[column].agg(function.pandas_agg_func)
        else:
            merged[column] = grouped[column].agg(_join_distinct, split=split)
    merged_df = pd.DataFrame(merged, columns=df.columns).reset_index(drop=True)

    logger.debug(
        "Aggregated %d duplicate rows into %d rows using %s",
        int(duplicated.sum()),
        len(merged_df),
        function.label,
    )

    if duplicated.all():
        result = merged_df
    else:
        result = pd.concat([df[~duplicated], merged_df], ignore_index=True)
    restore_column_types(result, types)
    result[quant_column] = pd.to_numeric(result[quant_column], errors="coerce").astype(float)
    return result
