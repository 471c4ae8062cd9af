"""
Column schema of a long-format measurement table.
"""

from dataclasses import dataclass, field
from typing import List

import pandas as pd
from pandas.api import types as ptypes

from lfqprep.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class ColumnSchema:
    """
    Names of the logical columns of a measurement table.

    Attributes
    ----------
    accession : str
        Protein (group) identifier column.
    aggr_by : str
        Aggregation key column, typically the peptide sequence.
    run : str
        Mass spec run column.
    quant : str
        Quantitative value column.
    filters : list[str]
        Columns holding a sentinel value that marks rows for removal.
    useful_properties : list[str]
        Extra columns retained in the output.
    """

    accession: str
    aggr_by: str
    run: str
    quant: str
    filters: List[str] = field(default_factory=list)
    useful_properties: List[str] = field(default_factory=list)

    def validate(self, df: pd.DataFrame) -> None:
        """
        Check that every configured column (whitelisted ones included) exists
        and that quant is numeric.

        Raises
        ------
        ConfigurationError
            Naming the parameter whose column is missing or mistyped.
        """
        checks = [
            ("accession", self.accession),
            ("aggr_by", self.aggr_by),
            ("run_col", self.run),
            ("quant_col", self.quant),
        ] + [("filter", col) for col in self.filters]

        for parameter, column in checks:
            if column not in df.columns:
                raise ConfigurationError(f"column {column!r} not found in table", parameter=parameter)

        missing = [col for col in self.useful_properties if col not in df.columns]
        if missing:
            raise ConfigurationError(
                f"columns not found in table: {', '.join(map(repr, missing))}",
                parameter="useful_properties",
            )

        quant = df[self.quant]
        if not ptypes.is_numeric_dtype(quant.dtype) or ptypes.is_bool_dtype(quant.dtype):
            try:
                pd.to_numeric(quant, errors="raise")
            except (ValueError, TypeError) as e:
                raise ConfigurationError(
                    f"column {self.quant!r} is not numeric ({e})", parameter="quant_col"
                ) from e
