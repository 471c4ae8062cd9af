"""
Identification-count filter.
"""

from typing import Tuple

import pandas as pd

from lfqprep.core.constants import DEFAULT_MIN_IDENTIFIED, PEPTIDE_SEQUENCE
from lfqprep.preprocessing.filters.base import BaseFilter
from lfqprep.preprocessing.filters.enums import FilterLevel


class MinIdentifiedFilter(BaseFilter):
    """
    Keep aggregation keys identified at least ``min_identified`` times.

    Rows are counted per key over the whole table, not per run. A peptide
    seen only once cannot support a per-peptide effect downstream, as it would
    be perfectly confounded with it.
    """

    def __init__(self, column: str = PEPTIDE_SEQUENCE, min_identified: int = DEFAULT_MIN_IDENTIFIED):
        """
        Initialize the filter.

        Parameters
        ----------
        column : str, optional
            Aggregation key column, typically the peptide sequence.
        min_identified : int, optional
            Minimal number of rows per key.
        """
        self.column = column
        self.min_identified = min_identified

    @property
    def name(self) -> str:
        return "MinIdentifiedFilter"

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.PEPTIDE

    def keep_mask(self, df: pd.DataFrame) -> Tuple[pd.Series, dict]:
        # rows without a key are not counted
        counts = (
            df.groupby(self.column, dropna=True, sort=False, observed=True)[self.column]
            .transform("size")
            .fillna(0)
        )
        mask = counts >= self.min_identified
        return mask, {
            "min_identified": self.min_identified,
            "keys_removed": int(df.loc[~mask, self.column].nunique(dropna=False)),
        }

    def __repr__(self) -> str:
        return f"MinIdentifiedFilter(column={self.column!r}, min_identified={self.min_identified})"
