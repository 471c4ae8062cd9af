"""
Normalization of the quantitative column of a long-format table across runs.
"""

from typing import Union

import numpy as np
import pandas as pd

from lfqprep.core.logger import get_logger
from lfqprep.model.normalization import NormalizationMethod
from lfqprep.normalization.matrix import RunMatrixIndex

# register the matrix implementations
from lfqprep.normalization import quantile, vsn  # noqa: F401

logger = get_logger("lfqprep.normalization.runs")


def normalize_long(
    df: pd.DataFrame,
    run_column: str,
    quant_column: str,
    method: Union[str, NormalizationMethod] = NormalizationMethod.QUANTILES,
    **options,
) -> pd.DataFrame:
    """
    Normalize the quantitative values of a long table across runs.

    Values are gathered into a run-indexed matrix (see :class:`RunMatrixIndex`),
    normalized with the selected method and scattered back to the rows they
    came from.

    Parameters
    ----------
    df : pd.DataFrame
        Long-format table.
    run_column : str
        Column with the run labels.
    quant_column : str
        Column with the quantitative values.
    method : str or NormalizationMethod, optional
        Normalization method, ``quantiles`` by default.
    **options
        Options of the normalization method.

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with the normalized quantitative column.
    """
    method = NormalizationMethod.from_str(method)
    result = df.copy()
    if method == NormalizationMethod.NONE and not options:
        return result
    if len(result) == 0:
        return result

    index = RunMatrixIndex.from_runs(result[run_column])
    matrix = index.gather(result[quant_column].to_numpy(dtype=float, na_value=np.nan))
    logger.debug(
        "Normalizing %d values in a %dx%d run matrix with '%s'",
        index.n_rows,
        matrix.shape[0],
        matrix.shape[1],
        method.label,
    )
    normalized = method.normalize_matrix(matrix, **options)
    result[quant_column] = index.scatter(normalized)
    return result
