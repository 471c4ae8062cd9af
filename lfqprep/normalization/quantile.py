"""
Quantile normalization of run matrices.

Columns of the matrix are runs and may hold different numbers of values
(missing cells are NaN). Each run's sorted values are interpolated onto a
common grid of ``n_rows`` quantiles; the reference distribution is the
(weighted) average of these, and every value is replaced by the reference
value at its own quantile. Tied values share the average of their ranks.
"""

import warnings
from typing import Optional, Sequence

import numpy as np
from scipy.stats import rankdata

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.core.logger import get_logger
from lfqprep.model.normalization import NormalizationMethod

logger = get_logger("lfqprep.normalization.quantile")

REMOVE_EXTREME_OPTIONS = ("variance", "mean", "both", "none")


def _interpolate_sorted(values: np.ndarray, n_points: int) -> np.ndarray:
    """Interpolate sorted values onto ``n_points`` evenly spaced quantiles."""
    n = len(values)
    if n == 0:
        return np.full(n_points, np.nan)
    if n == 1:
        return np.full(n_points, values[0])
    grid = np.linspace(0, n - 1, n_points)
    return np.interp(grid, np.arange(n), values)


def sorted_quantiles(matrix: np.ndarray) -> np.ndarray:
    """
    Sorted, quantile-interpolated copy of every column.

    Parameters
    ----------
    matrix : np.ndarray
        Run matrix, NaN-padded.

    Returns
    -------
    np.ndarray
        Matrix of the same shape; column *j* holds run *j*'s distribution
        evaluated at ``n_rows`` evenly spaced quantiles (all NaN for an
        empty run).
    """
    n_rows, n_cols = matrix.shape
    out = np.empty((n_rows, n_cols))
    for j in range(n_cols):
        column = matrix[:, j]
        out[:, j] = _interpolate_sorted(np.sort(column[np.isfinite(column)]), n_rows)
    return out


def _assign_reference(matrix: np.ndarray, reference: np.ndarray, ties: bool) -> np.ndarray:
    """Replace every finite value by the reference value at its quantile."""
    n_rows, n_cols = matrix.shape
    grid = np.arange(n_rows)
    out = np.full(matrix.shape, np.nan)
    for j in range(n_cols):
        present = np.isfinite(matrix[:, j])
        n = int(present.sum())
        if n == 0:
            continue
        ranks = rankdata(matrix[present, j], method="average" if ties else "ordinal")
        if n == 1:
            # a lone value has no spread; use the reference median
            positions = np.array([(n_rows - 1) / 2.0])
        else:
            positions = (ranks - 1.0) / (n - 1.0) * (n_rows - 1.0)
        out[present, j] = np.interp(positions, grid, reference)
    return out


@NormalizationMethod.QUANTILES.register_matrix_fn
def quantile_normalize(matrix: np.ndarray, ties: bool = True) -> np.ndarray:
    """
    Standard quantile normalization.

    Parameters
    ----------
    matrix : np.ndarray
        Run matrix, NaN-padded; missing cells are excluded from ranking.
    ties : bool, optional
        Give tied values the reference value of their average rank.

    Returns
    -------
    np.ndarray
        Matrix whose runs all share the same value distribution.
    """
    if matrix.size == 0:
        return matrix.copy()
    quantiles = sorted_quantiles(matrix)
    reference = np.nanmean(quantiles, axis=1) if np.isfinite(quantiles).any() else None
    if reference is None:
        return matrix.copy()
    return _assign_reference(matrix, reference, ties)


def robust_weights(
    quantiles: np.ndarray, remove_extreme: str = "variance", n_remove: int = 1
) -> np.ndarray:
    """
    Run weights that exclude the most outlying runs.

    Parameters
    ----------
    quantiles : np.ndarray
        Output of :func:`sorted_quantiles`.
    remove_extreme : str, optional
        ``variance`` drops the runs whose spread differs most from the median
        spread, ``mean`` the runs whose location differs most from the median
        location, ``both`` applies both rules, ``none`` keeps every run.
    n_remove : int, optional
        Number of runs dropped by each rule.

    Returns
    -------
    np.ndarray
        One weight (0 or 1) per run.
    """
    if remove_extreme not in REMOVE_EXTREME_OPTIONS:
        raise ConfigurationError(
            f"expected one of {', '.join(REMOVE_EXTREME_OPTIONS)}", parameter="remove_extreme"
        )
    n_cols = quantiles.shape[1]
    present = np.isfinite(quantiles).all(axis=0)
    weights = present.astype(float)

    rules = {"variance": ["variance"], "mean": ["mean"], "both": ["variance", "mean"], "none": []}
    rules = rules[remove_extreme]
    if n_remove <= 0 or n_cols - len(rules) * n_remove < 1 or not rules:
        return weights

    with np.errstate(divide="ignore", invalid="ignore"):
        for rule in rules:
            candidates = np.flatnonzero(weights > 0)
            if len(candidates) <= n_remove:
                break
            if rule == "variance":
                spread = np.var(quantiles[:, candidates], axis=0, ddof=1)
                score = np.abs(np.log(spread / np.median(spread)))
            else:
                location = np.mean(quantiles[:, candidates], axis=0)
                score = np.abs(location - np.median(location))
            score = np.nan_to_num(score, nan=np.inf, posinf=np.inf)
            dropped = candidates[np.argsort(-score, kind="stable")[:n_remove]]
            weights[dropped] = 0.0
    return weights


@NormalizationMethod.QUANTILES_ROBUST.register_matrix_fn
def quantile_normalize_robust(
    matrix: np.ndarray,
    weights: Optional[Sequence[float]] = None,
    remove_extreme: str = "variance",
    n_remove: int = 1,
    use_median: bool = False,
    use_log2: bool = False,
    ties: bool = True,
) -> np.ndarray:
    """
    Quantile normalization robust to outlying runs.

    The reference distribution is built only from well-behaved runs (or from
    user supplied weights) and then imposed on every run.

    Parameters
    ----------
    matrix : np.ndarray
        Run matrix, NaN-padded.
    weights : sequence of float, optional
        Non-negative weight per run. Overrides ``remove_extreme``.
    remove_extreme : str, optional
        Rule used to derive weights, see :func:`robust_weights`.
    n_remove : int, optional
        Number of runs dropped by each rule.
    use_median : bool, optional
        Use the median of the retained runs instead of the weighted mean.
    use_log2 : bool, optional
        Build the reference on the log2 scale and transform it back.
    ties : bool, optional
        Give tied values the reference value of their average rank.

    Returns
    -------
    np.ndarray
    """
    if matrix.size == 0:
        return matrix.copy()
    quantiles = sorted_quantiles(matrix)
    n_cols = matrix.shape[1]

    if weights is None:
        weights = robust_weights(quantiles, remove_extreme=remove_extreme, n_remove=n_remove)
    else:
        weights = np.asarray(weights, dtype=float)
        if weights.shape != (n_cols,) or (weights < 0).any() or not (weights > 0).any():
            raise ConfigurationError(
                f"expected {n_cols} non-negative values with at least one positive",
                parameter="weights",
            )
        weights = np.where(np.isfinite(quantiles).all(axis=0), weights, 0.0)

    if not (weights > 0).any():
        return matrix.copy()

    if use_log2:
        with np.errstate(divide="ignore", invalid="ignore"):
            quantiles = np.log2(quantiles)
        quantiles[~np.isfinite(quantiles)] = np.nan

    kept = quantiles[:, weights > 0]
    if use_median:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", category=RuntimeWarning)
            reference = np.nanmedian(kept, axis=1)
    else:
        w = weights[weights > 0]
        finite = np.isfinite(kept)
        with np.errstate(divide="ignore", invalid="ignore"):
            reference = np.where(finite, kept, 0.0) @ w / (finite @ w)

    if use_log2:
        reference = np.exp2(reference)

    logger.debug("Robust quantile reference built from %d of %d runs", int((weights > 0).sum()), n_cols)
    return _assign_reference(matrix, reference, ties)
