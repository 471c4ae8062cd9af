"""
Preprocessing pipelines for long-format proteomics tables.

This module provides high-level pipelines that chain every preprocessing
stage into single, easy-to-use functions.
"""

from lfqprep.pipeline.preprocess_long import (
    PreprocessPipeline,
    preprocess_file,
    preprocess_long,
    preprocess_skyline,
    preprocess_spectronaut,
    resolve_config,
)

__all__ = [
    "PreprocessPipeline",
    "preprocess_file",
    "preprocess_long",
    "preprocess_skyline",
    "preprocess_spectronaut",
    "resolve_config",
]
