"""
Column projection of a long-format table.
"""

from typing import List, Sequence

import pandas as pd

from lfqprep.core.exceptions import ConfigurationError


def projected_columns(
    useful_properties: Sequence[str],
    accession: str,
    aggr_by: str,
    run_column: str,
    quant_column: str,
) -> List[str]:
    """
    Column list retained by :func:`project_columns`.

    The accession, aggregation key, run and quantitative columns are placed
    in front of the whitelist when it does not already name them, giving
    ``[quant, run, aggr_by, accession, *useful_properties]`` when none are
    listed. Duplicates are dropped.
    """
    columns = list(useful_properties or [])
    for required in (accession, aggr_by, run_column, quant_column):
        if required not in columns:
            columns.insert(0, required)
    return list(dict.fromkeys(columns))


def project_columns(
    df: pd.DataFrame,
    useful_properties: Sequence[str],
    accession: str,
    aggr_by: str,
    run_column: str,
    quant_column: str,
) -> pd.DataFrame:
    """
    Restrict a table to the useful columns plus its key columns.

    Parameters
    ----------
    df : pd.DataFrame
        Long-format table.
    useful_properties : sequence of str
        Columns worth keeping for later analysis or inspection.
    accession, aggr_by, run_column, quant_column : str
        Key columns, always retained.

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with exactly the projected columns, rows in order.

    Raises
    ------
    ConfigurationError
        If a listed column is not in the table.
    """
    columns = projected_columns(useful_properties, accession, aggr_by, run_column, quant_column)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ConfigurationError(
            f"columns not found in table: {', '.join(map(repr, missing))}",
            parameter="useful_properties",
        )
    return df.loc[:, columns].copy()
