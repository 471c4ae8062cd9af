"""
Core modules for the lfqprep package.

This module provides fundamental utilities including constants, logging
and the exception hierarchy.
"""

from lfqprep.core.constants import (
    PROTEIN_NAME,
    PROTEIN_DESCRIPTION,
    PROTEIN_ACCESSION,
    PEPTIDE_SEQUENCE,
    RUN,
    QUANT_VALUE,
    IS_DECOY,
    PROTEIN_GROUP_SPLIT,
    KEY_SEPARATOR,
    DEFAULT_FILTER_SYMBOL,
    DEFAULT_MIN_IDENTIFIED,
    EXP_ANNOTATION_ATTR,
    SKYLINE_USEFUL_PROPERTIES,
    is_parquet,
)
from lfqprep.core.exceptions import LfqPrepError, ConfigurationError, AnnotationError
from lfqprep.core.logger import (
    get_logger,
    configure_logging,
    initialize_logging,
    log_execution_time,
)

__all__ = [
    # Constants
    "PROTEIN_NAME",
    "PROTEIN_DESCRIPTION",
    "PROTEIN_ACCESSION",
    "PEPTIDE_SEQUENCE",
    "RUN",
    "QUANT_VALUE",
    "IS_DECOY",
    "PROTEIN_GROUP_SPLIT",
    "KEY_SEPARATOR",
    "DEFAULT_FILTER_SYMBOL",
    "DEFAULT_MIN_IDENTIFIED",
    "EXP_ANNOTATION_ATTR",
    "SKYLINE_USEFUL_PROPERTIES",
    "is_parquet",
    # Exceptions
    "LfqPrepError",
    "ConfigurationError",
    "AnnotationError",
    # Logger
    "get_logger",
    "configure_logging",
    "initialize_logging",
    "log_execution_time",
]
