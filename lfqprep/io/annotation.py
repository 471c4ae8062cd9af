"""
Loading of experiment annotation tables.

An experiment annotation maps mass spec runs to covariates (condition,
biological replicate, batch, ...). Exactly one of its columns must hold the
run names found in the measurement table.
"""

from pathlib import Path
from typing import Iterable, Mapping, Optional, Tuple, Union

import pandas as pd

from lfqprep.core.constants import EXCEL_SUFFIXES
from lfqprep.core.exceptions import AnnotationError, ConfigurationError
from lfqprep.core.logger import get_logger
from lfqprep.model.column_types import ColumnType

logger = get_logger("lfqprep.io.annotation")

AnnotationSource = Union[str, Path, pd.DataFrame]


def _read_annotation_file(path: Path, type_annot: Optional[str]) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Annotation file not found: {path}")

    if type_annot is None:
        type_annot = "xlsx" if path.suffix.lower() in EXCEL_SUFFIXES else "tab-delim"

    if type_annot == "xlsx":
        return pd.read_excel(path)
    if type_annot == "tab-delim":
        return pd.read_csv(path, sep="\t", na_values=["NA", "#N/A"])
    raise ConfigurationError(
        f"unsupported annotation type {type_annot!r}, expected 'tab-delim', 'xlsx' or None",
        parameter="type_annot",
    )


def trim_whitespace(df: pd.DataFrame) -> pd.DataFrame:
    """Strip leading and trailing spaces from column names and string cells."""
    result = df.copy()
    result.columns = [c.strip() if isinstance(c, str) else c for c in result.columns]
    for column in result.columns:
        if result[column].dtype == object or pd.api.types.is_string_dtype(result[column]):
            result[column] = result[column].map(lambda v: v.strip() if isinstance(v, str) else v)
    return result


def find_run_column(annotation: pd.DataFrame, run_values: Iterable) -> str:
    """
    Name of the single annotation column containing every observed run.

    Raises
    ------
    AnnotationError
        If no column, or more than one column, contains all runs.
    """
    runs = {str(r).strip() for r in pd.unique(pd.Series(list(run_values)).dropna())}
    candidates = []
    for column in annotation.columns:
        values = set(annotation[column].dropna().astype(str).str.strip())
        if runs <= values:
            candidates.append(column)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise AnnotationError(
            "no column of the experiment annotation contains all the mass spec run names"
        )
    raise AnnotationError(
        "more than one column of the experiment annotation contains all the mass spec "
        f"run names: {', '.join(map(str, candidates))}"
    )


def load_annotation(
    source: AnnotationSource,
    run_values: Iterable,
    type_annot: Optional[str] = None,
    column_types: Optional[Mapping[str, Union[str, ColumnType]]] = None,
) -> Tuple[pd.DataFrame, str]:
    """
    Load and check an experiment annotation.

    Parameters
    ----------
    source : str, Path or pd.DataFrame
        Annotation table, or the path to a tab-delimited or Excel file.
    run_values : iterable
        Run names observed in the measurement table.
    type_annot : str, optional
        ``"tab-delim"`` or ``"xlsx"``; when ``None`` the type follows the
        file extension, defaulting to tab-delimited.
    column_types : mapping, optional
        Forced types for annotation columns, e.g. ``{"replicate": "factor"}``.

    Returns
    -------
    tuple of (pd.DataFrame, str)
        The whitespace-trimmed annotation and the name of its run column.

    Raises
    ------
    AnnotationError
        If not exactly one column contains all observed runs.
    """
    if isinstance(source, pd.DataFrame):
        annotation = source
    else:
        path = Path(source)
        annotation = _read_annotation_file(path, type_annot)
        logger.info("Loaded experiment annotation from %s (%d rows)", path, len(annotation))

    annotation = trim_whitespace(annotation)

    for column, column_type in (column_types or {}).items():
        if column not in annotation.columns:
            raise ConfigurationError(
                f"column {column!r} not found in annotation", parameter="annotation_column_types"
            )
        column_type = ColumnType.from_str(column_type)
        try:
            annotation[column] = column_type.coerce(annotation[column])
        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"annotation column {column!r} cannot be converted to {column_type.name.lower()}: {e}",
                parameter="annotation_column_types",
            ) from e

    run_column = find_run_column(annotation, run_values)
    logger.debug("Experiment annotation run column: %s", run_column)
    return annotation, run_column
