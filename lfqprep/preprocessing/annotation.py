"""
Attaching the experiment annotation to a processed table.
"""

from typing import Optional

import pandas as pd

from lfqprep.core.constants import EXP_ANNOTATION_ATTR


def attach_annotation(df: pd.DataFrame, annotation: Optional[pd.DataFrame]) -> pd.DataFrame:
    """
    Attach an experiment annotation as table metadata.

    The annotation is stored in ``df.attrs["exp_annotation"]``, the rows of
    ``df`` are not touched. Passing ``None`` leaves the table as it is.
    """
    if annotation is not None:
        df.attrs[EXP_ANNOTATION_ATTR] = annotation
    return df


def get_annotation(df: pd.DataFrame) -> Optional[pd.DataFrame]:
    """Experiment annotation attached to ``df``, if any."""
    return df.attrs.get(EXP_ANNOTATION_ATTR)
