"""
Preprocessing stages of the long-format pipeline.
"""

from lfqprep.preprocessing.aggregation import aggregate_duplicates, composite_key
from lfqprep.preprocessing.annotation import attach_annotation, get_annotation
from lfqprep.preprocessing.column_types import (
    apply_column_types,
    restore_column_types,
    snapshot_column_types,
)
from lfqprep.preprocessing.config_io import (
    generate_example_config,
    load_config,
    save_config,
)
from lfqprep.preprocessing.filters import (
    BaseFilter,
    FilterColumnFilter,
    FilterLevel,
    FilterPipeline,
    FilterResult,
    MinIdentifiedFilter,
    SmallestUniqueGroupsFilter,
    smallest_unique_groups,
)
from lfqprep.preprocessing.projection import project_columns, projected_columns
from lfqprep.preprocessing.transform import log_transform

__all__ = [
    "aggregate_duplicates",
    "composite_key",
    "attach_annotation",
    "get_annotation",
    "apply_column_types",
    "restore_column_types",
    "snapshot_column_types",
    "generate_example_config",
    "load_config",
    "save_config",
    "BaseFilter",
    "FilterColumnFilter",
    "FilterLevel",
    "FilterPipeline",
    "FilterResult",
    "MinIdentifiedFilter",
    "SmallestUniqueGroupsFilter",
    "smallest_unique_groups",
    "project_columns",
    "projected_columns",
    "log_transform",
]
