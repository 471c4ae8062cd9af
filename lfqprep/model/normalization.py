"""
Normalization method enumeration for the lfqprep package.

This module provides the enumeration of run normalization methods together
with a registry mapping each method to a function operating on the
run-indexed intensity matrix (rows = position within run, columns = runs,
NaN-padded).
"""

import inspect
import warnings
from enum import Enum, auto
from typing import Callable

import numpy as np

from lfqprep.core.exceptions import ConfigurationError

MatrixFn = Callable[..., np.ndarray]

_method_registry: dict["NormalizationMethod", MatrixFn] = {}


class NormalizationMethod(Enum):
    """
    Enumeration of run normalization methods.

    Names are matched case-insensitively and ``.``, ``-`` and ``_`` are
    interchangeable, so ``"center.median"`` selects ``CENTER_MEDIAN``.

    Attributes
    ----------
    NONE : auto
        No normalization.
    QUANTILES : auto
        Quantile normalization.
    QUANTILES_ROBUST : auto
        Weighted quantile normalization down-weighting outlying runs.
    VSN : auto
        Variance-stabilizing normalization.
    CENTER_MEAN : auto
        Subtract each run's mean.
    CENTER_MEDIAN : auto
        Subtract each run's median.
    MAX : auto
        Divide each matrix row by its maximum across runs.
    SUM : auto
        Divide each matrix row by its sum across runs.
    """

    NONE = auto()
    QUANTILES = auto()
    QUANTILES_ROBUST = auto()
    VSN = auto()
    CENTER_MEAN = auto()
    CENTER_MEDIAN = auto()
    MAX = auto()
    SUM = auto()

    @classmethod
    def from_str(cls, name: str) -> "NormalizationMethod":
        """
        Get the normalization method from a string.

        Parameters
        ----------
        name : str
            The name of the normalization method.

        Returns
        -------
        NormalizationMethod

        Raises
        ------
        ConfigurationError
            If the name does not match any normalization method.
        """
        if name is None:
            raise ConfigurationError("no normalisation given", parameter="normalisation")
        if isinstance(name, cls):
            return name
        name_ = str(name).strip().lower().replace(".", "_").replace("-", "_")
        for k, v in cls._member_map_.items():
            if k.lower() == name_:
                return v
        raise ConfigurationError(
            f"unknown normalisation {name!r}, expected one of "
            f"{', '.join(m.label for m in cls)}",
            parameter="normalisation",
        )

    @property
    def label(self) -> str:
        """Dotted lower-case name, e.g. ``quantiles.robust``."""
        return self.name.lower().replace("_", ".")

    def register_matrix_fn(self, fn: MatrixFn) -> MatrixFn:
        """
        Register the matrix function implementing this method.

        Parameters
        ----------
        fn : Callable[..., np.ndarray]
            Function taking the run matrix (and method options) and returning
            a matrix of the same shape.

        Returns
        -------
        Callable[..., np.ndarray]
            The registered function.
        """
        _method_registry[self] = fn
        return fn

    def normalize_matrix(self, matrix: np.ndarray, **kwargs) -> np.ndarray:
        """
        Normalize a run matrix with the registered function.

        Parameters
        ----------
        matrix : np.ndarray
            Rows are positions within a run, columns are runs, NaN-padded.
        **kwargs
            Method specific options.

        Returns
        -------
        np.ndarray
            Normalized matrix with the same shape; non-finite values are NaN.
        """
        try:
            fn = _method_registry[self]
        except KeyError:
            raise ConfigurationError(
                f"no implementation registered for {self.label!r}", parameter="normalisation"
            ) from None
        accepted = list(inspect.signature(fn).parameters)[1:]
        unknown = sorted(set(kwargs) - set(accepted))
        if unknown:
            raise ConfigurationError(
                f"{self.label!r} does not accept {', '.join(unknown)}",
                parameter="normalisation_options",
            )
        result = np.asarray(fn(np.asarray(matrix, dtype=float), **kwargs), dtype=float)
        result[~np.isfinite(result)] = np.nan
        return result

    def __call__(self, matrix: np.ndarray, **kwargs) -> np.ndarray:
        return self.normalize_matrix(matrix, **kwargs)


@NormalizationMethod.NONE.register_matrix_fn
def no_normalization(matrix):
    """No normalization is performed on the data."""
    return matrix.copy()


@NormalizationMethod.CENTER_MEAN.register_matrix_fn
def center_mean(matrix):
    """Subtract the NaN-ignoring mean of every run."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        center = np.nanmean(matrix, axis=0)
    return matrix - center


@NormalizationMethod.CENTER_MEDIAN.register_matrix_fn
def center_median(matrix):
    """Subtract the NaN-ignoring median of every run."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        center = np.nanmedian(matrix, axis=0)
    return matrix - center


@NormalizationMethod.MAX.register_matrix_fn
def max_scale(matrix):
    """Divide every matrix row by its maximum across runs."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        div = np.nanmax(matrix, axis=1)
    with np.errstate(divide="ignore", invalid="ignore"):
        return matrix / div[:, np.newaxis]


@NormalizationMethod.SUM.register_matrix_fn
def sum_scale(matrix):
    """Divide every matrix row by its sum across runs."""
    div = np.nansum(matrix, axis=1)
    with np.errstate(divide="ignore", invalid="ignore"):
        return matrix / div[:, np.newaxis]
