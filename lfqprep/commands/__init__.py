"""
CLI commands for the lfqprep package.

This module provides Click commands for the lfqprep CLI.
"""

from lfqprep.commands.preprocess import preprocess
from lfqprep.commands.example_config import example_config

__all__ = [
    "preprocess",
    "example_config",
]
