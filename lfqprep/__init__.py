"""
lfqprep - Preprocessing of label-free LC-MS proteomics data.

This package turns long-format peptide quantification tables (one row per
peptide measurement per run) into cleaned, normalized and annotated tables:
aggregation of redundant rows, log transformation, run normalization
(quantile, robust quantile, VSN, centering, scaling), protein group
resolution and row filtering.
"""

__version__ = "0.1.0"

from lfqprep.core.logger import initialize_logging

# Library use stays silent until logging is configured
initialize_logging()

from lfqprep.model.config import PreprocessConfig
from lfqprep.pipeline import (
    PreprocessPipeline,
    preprocess_long,
    preprocess_skyline,
    preprocess_spectronaut,
)

__all__ = [
    "__version__",
    "PreprocessConfig",
    "PreprocessPipeline",
    "preprocess_long",
    "preprocess_skyline",
    "preprocess_spectronaut",
]
