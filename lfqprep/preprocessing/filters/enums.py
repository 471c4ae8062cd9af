"""
Enumeration types for preprocessing filters.
"""

from enum import Enum, auto


class FilterLevel(Enum):
    """Levels at which filtering can be applied."""

    FEATURE = auto()
    PEPTIDE = auto()
    PROTEIN = auto()
