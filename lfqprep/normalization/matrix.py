"""
Run-indexed matrix view of a long-format quantitative column.

Normalization methods work on a rectangular matrix with one column per run.
Runs hold different numbers of rows, so the matrix is NaN-padded to the
longest run. Row *j* of column *i* is the *j*-th row (in table order) of
run *i*; the same index is used to scatter normalized values back.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class RunMatrixIndex:
    """
    Mapping between table rows and run matrix cells.

    Attributes
    ----------
    runs : pd.Index
        Run labels in order of first appearance; matrix column order.
    run_codes : np.ndarray
        Matrix column of every table row.
    row_in_run : np.ndarray
        Matrix row of every table row (its position within its run).
    counts : np.ndarray
        Number of table rows per run.
    """

    runs: pd.Index
    run_codes: np.ndarray
    row_in_run: np.ndarray
    counts: np.ndarray

    @classmethod
    def from_runs(cls, runs: pd.Series) -> "RunMatrixIndex":
        """
        Build the index from the run column of a table.

        Missing run labels form a run of their own.
        """
        codes, labels = pd.factorize(runs, sort=False, use_na_sentinel=False)
        codes = np.asarray(codes, dtype=np.int64)
        counts = np.bincount(codes, minlength=len(labels))

        order = np.argsort(codes, kind="stable")
        starts = np.cumsum(counts) - counts
        row_in_run = np.empty(len(codes), dtype=np.int64)
        row_in_run[order] = np.arange(len(codes)) - np.repeat(starts, counts)

        return cls(runs=pd.Index(labels), run_codes=codes, row_in_run=row_in_run, counts=counts)

    @property
    def n_rows(self) -> int:
        return len(self.run_codes)

    @property
    def shape(self) -> tuple:
        """Matrix shape: (longest run, number of runs)."""
        return (int(self.counts.max()) if len(self.counts) else 0, len(self.runs))

    def gather(self, values) -> np.ndarray:
        """
        Arrange a column of table values into the NaN-padded run matrix.

        Parameters
        ----------
        values : array-like
            One value per table row, in table order.

        Returns
        -------
        np.ndarray
            Matrix of shape :attr:`shape`.
        """
        values = np.asarray(values, dtype=float)
        if len(values) != self.n_rows:
            raise ValueError(f"expected {self.n_rows} values, got {len(values)}")
        matrix = np.full(self.shape, np.nan)
        matrix[self.row_in_run, self.run_codes] = values
        return matrix

    def scatter(self, matrix: np.ndarray) -> np.ndarray:
        """
        Read table values back out of a run matrix.

        Parameters
        ----------
        matrix : np.ndarray
            Matrix of shape :attr:`shape`, typically a normalized copy of the
            gathered matrix.

        Returns
        -------
        np.ndarray
            One value per table row, in table order. Padding cells are never read.
        """
        matrix = np.asarray(matrix, dtype=float)
        if matrix.shape != self.shape:
            raise ValueError(f"expected matrix of shape {self.shape}, got {matrix.shape}")
        return matrix[self.row_in_run, self.run_codes]
