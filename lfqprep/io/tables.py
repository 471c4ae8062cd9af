"""
Reading and writing long-format tables.
"""

from pathlib import Path
from typing import Union

import pandas as pd

from lfqprep.core.constants import EXCEL_SUFFIXES, TABLE_SUFFIXES, is_parquet
from lfqprep.core.logger import get_logger

logger = get_logger("lfqprep.io.tables")


def read_table(path: Union[str, Path], **kwargs) -> pd.DataFrame:
    """
    Read a long-format table from Parquet, Excel, CSV or TSV.

    Parquet files are recognized by their magic bytes, Excel files by their
    extension; other files are delimited text, comma-separated for ``.csv``
    and tab-separated otherwise.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if is_parquet(str(path)):
        df = pd.read_parquet(path, engine="pyarrow", **kwargs)
    elif path.suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(path, **kwargs)
    else:
        sep = TABLE_SUFFIXES.get(path.suffix.lower(), "\t")
        kwargs.setdefault("na_values", ["NA", "#N/A"])
        df = pd.read_csv(path, sep=sep, **kwargs)

    logger.info("Read %d rows and %d columns from %s", len(df), df.shape[1], path)
    return df


def write_table(df: pd.DataFrame, path: Union[str, Path]) -> None:
    """
    Write a table, choosing Parquet, CSV or TSV by extension (TSV by default).
    """
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    suffix = path.suffix.lower()
    if suffix == ".parquet":
        # attrs hold an annotation DataFrame which parquet metadata cannot store
        out = df.copy()
        out.attrs = {}
        out.to_parquet(path, engine="pyarrow", index=False)
    else:
        sep = TABLE_SUFFIXES.get(suffix, "\t")
        df.to_csv(path, sep=sep, index=False)

    logger.info("Wrote %d rows to %s", len(df), path)
