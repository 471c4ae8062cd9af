"""
Normalization implementations for the lfqprep package.

This module provides the run matrix index used to move a long table's
quantitative column into a run-indexed matrix and back, and the matrix
normalization methods (quantile, robust quantile, VSN).
"""

from lfqprep.normalization.matrix import RunMatrixIndex
from lfqprep.normalization.quantile import (
    quantile_normalize,
    quantile_normalize_robust,
    robust_weights,
    sorted_quantiles,
)
from lfqprep.normalization.vsn import fit_vsn, vsn_normalize
from lfqprep.normalization.runs import normalize_long

__all__ = [
    "RunMatrixIndex",
    "quantile_normalize",
    "quantile_normalize_robust",
    "robust_weights",
    "sorted_quantiles",
    "fit_vsn",
    "vsn_normalize",
    "normalize_long",
]
