"""
Data models and enumerations for the lfqprep package.

This module provides enumerations and data classes for:
- Aggregation functions
- Normalization methods
- Column type tags and the table column schema
- Pipeline configuration
"""

from lfqprep.model.aggregation import AggregationFunction
from lfqprep.model.normalization import NormalizationMethod
from lfqprep.model.column_types import ColumnType
from lfqprep.model.schema import ColumnSchema
from lfqprep.model.config import (
    PreprocessConfig,
    DEFAULT_CONFIG,
    SKYLINE_CONFIG,
    SPECTRONAUT_CONFIG,
)

__all__ = [
    "AggregationFunction",
    "NormalizationMethod",
    "ColumnType",
    "ColumnSchema",
    "PreprocessConfig",
    "DEFAULT_CONFIG",
    "SKYLINE_CONFIG",
    "SPECTRONAUT_CONFIG",
]
