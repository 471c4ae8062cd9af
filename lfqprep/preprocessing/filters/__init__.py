"""
Row filters for long-format tables.

- Protein-group filtering (smallest unique groups)
- Sentinel-column filtering (decoys, contaminants)
- Identification-count filtering
"""

from lfqprep.preprocessing.filters.base import BaseFilter, FilterResult
from lfqprep.preprocessing.filters.enums import FilterLevel
from lfqprep.preprocessing.filters.pipeline import FilterPipeline
from lfqprep.preprocessing.filters.protein import (
    SmallestUniqueGroupsFilter,
    protein_group_members,
    smallest_unique_groups,
)
from lfqprep.preprocessing.filters.symbol import FilterColumnFilter
from lfqprep.preprocessing.filters.identification import MinIdentifiedFilter

__all__ = [
    "BaseFilter",
    "FilterResult",
    "FilterLevel",
    "FilterPipeline",
    "SmallestUniqueGroupsFilter",
    "protein_group_members",
    "smallest_unique_groups",
    "FilterColumnFilter",
    "MinIdentifiedFilter",
]
