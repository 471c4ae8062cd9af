"""
Input/Output utilities for the lfqprep package.

This module provides readers and writers for long-format tables
(Parquet, CSV, TSV, Excel) and experiment annotation files.
"""

from lfqprep.io.annotation import find_run_column, load_annotation, trim_whitespace
from lfqprep.io.tables import read_table, write_table

__all__ = [
    "find_run_column",
    "load_annotation",
    "trim_whitespace",
    "read_table",
    "write_table",
]
