"""
Variance-stabilizing normalization (VSN) of run matrices.

Each run *j* gets an affine calibration ``a_j + b_j * y`` followed by the
arsinh (generalized log) transformation. The parameters are fitted by profile
maximum likelihood of the model ``h(y_kj) = mu_k + eps_kj`` with
``eps ~ N(0, sigma^2)``, using least trimmed squares: after each fit only the
``lts_quantile`` fraction of matrix rows with the smallest residuals is kept
for the next fit.

References
----------
- Huber et al. (2002). Variance stabilization applied to microarray data
  calibration and to the quantification of differential expression.
  Bioinformatics 18, S96-S104.
"""

import warnings

import numpy as np
from scipy.optimize import minimize

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.core.logger import get_logger
from lfqprep.model.normalization import NormalizationMethod

logger = get_logger("lfqprep.normalization.vsn")

LN2 = np.log(2.0)


def _negative_log_likelihood(params: np.ndarray, y: np.ndarray, mask: np.ndarray) -> float:
    """Profile negative log-likelihood of the VSN model over the masked cells."""
    n_cols = y.shape[1]
    a = params[:n_cols]
    log_b = params[n_cols:]
    z = a + np.exp(log_b) * y
    h = np.where(mask, np.arcsinh(z), np.nan)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        mu = np.nanmean(h, axis=1, keepdims=True)
    residuals = np.where(mask, h - mu, 0.0)

    n = mask.sum()
    sigma2 = (residuals**2).sum() / n
    if not np.isfinite(sigma2) or sigma2 <= 0:
        return np.inf

    log_jacobian = np.where(mask, log_b - np.log(np.hypot(1.0, z)), 0.0).sum()
    return 0.5 * n * np.log(sigma2) - log_jacobian


def _row_residuals(params: np.ndarray, y: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Mean squared residual of every matrix row."""
    n_cols = y.shape[1]
    h = np.where(mask, np.arcsinh(params[:n_cols] + np.exp(params[n_cols:]) * y), np.nan)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        mu = np.nanmean(h, axis=1, keepdims=True)
        return np.nanmean((h - mu) ** 2, axis=1)


def _start_parameters(y: np.ndarray) -> np.ndarray:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        scale = np.nanmedian(np.abs(y), axis=0)
    scale = np.where(np.isfinite(scale) & (scale > 0), scale, 1.0)
    return np.concatenate([np.zeros(y.shape[1]), -np.log(scale)])


def fit_vsn(
    matrix: np.ndarray,
    lts_quantile: float = 0.9,
    n_iter: int = 4,
    max_fun_iter: int = 500,
) -> np.ndarray:
    """
    Fit the VSN calibration parameters.

    Parameters
    ----------
    matrix : np.ndarray
        Run matrix, NaN-padded.
    lts_quantile : float, optional
        Fraction of rows kept after each trimming iteration (0.5-1).
    n_iter : int, optional
        Number of fit/trim iterations.
    max_fun_iter : int, optional
        Iteration cap of every optimizer call.

    Returns
    -------
    np.ndarray
        ``[a_1..a_m, log b_1..log b_m]``.
    """
    if not 0.5 <= lts_quantile <= 1.0:
        raise ConfigurationError("must lie between 0.5 and 1", parameter="lts_quantile")
    if n_iter < 1:
        raise ConfigurationError("must be at least 1", parameter="n_iter")

    finite = np.isfinite(matrix)
    params = _start_parameters(matrix)
    rows = finite.sum(axis=1) >= 2

    if matrix.shape[1] < 2 or rows.sum() < 3:
        logger.warning(
            "VSN needs at least two runs sharing three rows; using the starting calibration only"
        )
        return params

    y = np.where(finite, matrix, 0.0)
    for iteration in range(n_iter):
        mask = finite & rows[:, np.newaxis]
        result = minimize(
            _negative_log_likelihood,
            params,
            args=(y, mask),
            method="L-BFGS-B",
            options={"maxiter": max_fun_iter},
        )
        if np.all(np.isfinite(result.x)):
            params = result.x
        if not result.success:
            logger.debug("VSN iteration %d did not converge: %s", iteration, result.message)

        if lts_quantile >= 1.0:
            break
        residuals = _row_residuals(params, y, finite)
        usable = finite.sum(axis=1) >= 2
        threshold = np.quantile(residuals[usable], lts_quantile)
        trimmed = usable & (residuals <= threshold)
        if trimmed.sum() < 3 or np.array_equal(trimmed, rows):
            break
        rows = trimmed

    return params


@NormalizationMethod.VSN.register_matrix_fn
def vsn_normalize(
    matrix: np.ndarray,
    lts_quantile: float = 0.9,
    n_iter: int = 4,
    max_fun_iter: int = 500,
) -> np.ndarray:
    """
    Variance-stabilizing normalization.

    Returns the calibrated, arsinh-transformed values on a generalized log2
    scale: for large intensities the result approaches ``log2(a_j + b_j * y)``.

    Parameters
    ----------
    matrix : np.ndarray
        Run matrix of untransformed intensities, NaN-padded.
    lts_quantile : float, optional
        Fraction of rows kept after each trimming iteration.
    n_iter : int, optional
        Number of fit/trim iterations.
    max_fun_iter : int, optional
        Iteration cap of every optimizer call.

    Returns
    -------
    np.ndarray
    """
    if matrix.size == 0:
        return matrix.copy()
    params = fit_vsn(matrix, lts_quantile=lts_quantile, n_iter=n_iter, max_fun_iter=max_fun_iter)
    n_cols = matrix.shape[1]
    z = params[:n_cols] + np.exp(params[n_cols:]) * matrix
    return (np.arcsinh(z) - LN2) / LN2
