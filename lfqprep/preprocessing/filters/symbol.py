"""
Sentinel-column row filter (decoys, contaminants, reverse sequences...).
"""

from typing import List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from lfqprep.core.constants import DEFAULT_FILTER_SYMBOL, IS_DECOY
from lfqprep.core.logger import get_logger
from lfqprep.preprocessing.filters.base import BaseFilter
from lfqprep.preprocessing.filters.enums import FilterLevel


logger = get_logger("lfqprep.preprocessing.filters.symbol")


class FilterColumnFilter(BaseFilter):
    """
    Remove rows flagged in any of a set of filter columns.

    A row is removed when at least one filter column, converted to text and
    stripped of surrounding whitespace, equals the filter symbol. Missing
    values read as an empty string, so rows are kept when a filter column is
    empty (e.g. a dataset without contaminants).
    """

    def __init__(
        self,
        columns: Union[str, Sequence[str]] = (IS_DECOY,),
        symbol=DEFAULT_FILTER_SYMBOL,
    ):
        """
        Initialize the filter.

        Parameters
        ----------
        columns : str or sequence of str, optional
            Filter columns.
        symbol : optional
            Value marking a row for removal. Compared as text, so ``True``
            matches both a boolean column and the string ``"True"``.
        """
        if isinstance(columns, str):
            columns = [columns]
        self.columns: List[str] = list(columns or [])
        self.symbol = str(symbol).strip()

    @property
    def name(self) -> str:
        return "FilterColumnFilter"

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.FEATURE

    def keep_mask(self, df: pd.DataFrame) -> Tuple[pd.Series, dict]:
        flagged = pd.Series(np.zeros(len(df), dtype=bool), index=df.index)
        per_column = {}
        for column in self.columns:
            values = df[column]
            text = values.astype(object).where(values.notna(), "").astype(str).str.strip()
            hit = text == self.symbol
            per_column[column] = int(hit.sum())
            flagged |= hit

        logger.debug("%s: flagged rows per column %s", self.name, per_column)
        return ~flagged, {"symbol": self.symbol, "flagged_per_column": per_column}

    def __repr__(self) -> str:
        return f"FilterColumnFilter(columns={self.columns!r}, symbol={self.symbol!r})"
