"""
Log transformation of the quantitative column.
"""

import numpy as np
import pandas as pd

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.core.logger import get_logger

logger = get_logger("lfqprep.preprocessing.transform")


def log_transform(df: pd.DataFrame, quant_column: str, base: float = 2.0) -> pd.DataFrame:
    """
    Replace the quantitative column by its logarithm.

    Non-finite results (the log of zero or of a negative value) become NaN.

    Parameters
    ----------
    df : pd.DataFrame
        Long-format table.
    quant_column : str
        Quantitative column.
    base : float, optional
        Base of the logarithm, 2 by default.

    Returns
    -------
    pd.DataFrame
        Transformed copy of ``df``.
    """
    try:
        base = float(base)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{base!r} is not a number", parameter="base") from None
    if base <= 0 or base == 1 or not np.isfinite(base):
        raise ConfigurationError("must be positive and different from 1", parameter="base")

    result = df.copy()
    values = result[quant_column].to_numpy(dtype=float, na_value=np.nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        logged = np.log(values) / np.log(base)
    non_finite = ~np.isfinite(logged)
    logged[non_finite] = np.nan

    newly_missing = int((non_finite & ~np.isnan(values)).sum())
    if newly_missing:
        logger.debug("log%g produced %d non-finite values, set to missing", base, newly_missing)
    result[quant_column] = logged
    return result
