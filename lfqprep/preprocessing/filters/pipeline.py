"""
Filter pipeline for applying row filters to a long-format table in sequence.
"""

from typing import Iterable, List, Tuple

import pandas as pd

from lfqprep.core.logger import get_logger
from lfqprep.preprocessing.filters.base import BaseFilter, FilterResult


logger = get_logger("lfqprep.preprocessing.filters.pipeline")


class FilterPipeline:
    """
    Ordered sequence of row filters.

    Every filter receives the output of the previous one; the result of each
    step is collected so callers can report how many rows every stage removed.
    """

    def __init__(self, name: str = "default", filters: Iterable[BaseFilter] = ()):
        """
        Parameters
        ----------
        name : str, optional
            Name for the pipeline (for logging).
        filters : iterable of BaseFilter, optional
            Initial filters.
        """
        self.name = name
        self.filters: List[BaseFilter] = list(filters)

    def add_filter(self, filter_obj: BaseFilter) -> "FilterPipeline":
        """Append a filter; returns self for chaining."""
        self.filters.append(filter_obj)
        return self

    def add_filters(self, filters: Iterable[BaseFilter]) -> "FilterPipeline":
        """Append several filters; returns self for chaining."""
        self.filters.extend(filters)
        return self

    def apply(self, df: pd.DataFrame, **kwargs) -> Tuple[pd.DataFrame, List[FilterResult]]:
        """
        Apply all filters in order.

        Parameters
        ----------
        df : pd.DataFrame
            Input DataFrame.
        **kwargs
            Passed on to each filter.

        Returns
        -------
        Tuple[pd.DataFrame, List[FilterResult]]
            Filtered DataFrame and one result per filter.
        """
        results = []
        current_df = df

        logger.debug("Starting filter pipeline '%s' with %d filters", self.name, len(self.filters))

        for filter_obj in self.filters:
            try:
                current_df, result = filter_obj.apply(current_df, **kwargs)
            except Exception as e:
                logger.error(
                    "Pipeline '%s': error in filter '%s': %s", self.name, filter_obj.name, e
                )
                raise
            results.append(result)
            logger.debug(
                "Pipeline '%s': %s removed %d/%d rows (%.1f%%)",
                self.name,
                result.filter_name,
                result.removed_count,
                result.input_count,
                result.removal_rate * 100,
            )

        return current_df, results

    @staticmethod
    def summary(results: List[FilterResult]) -> dict:
        """
        Summarize the results of :meth:`apply`.

        Returns
        -------
        dict
            Total rows in and out plus the rows removed by each filter.
        """
        if not results:
            return {"total_input": 0, "total_output": 0, "total_removed": 0, "filters": []}

        total_input = results[0].input_count
        total_output = results[-1].output_count
        return {
            "total_input": total_input,
            "total_output": total_output,
            "total_removed": total_input - total_output,
            "filters": [
                {"name": r.filter_name, "removed": r.removed_count, "removal_rate": r.removal_rate}
                for r in results
            ],
        }

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        filter_names = [f.name for f in self.filters]
        return f"FilterPipeline(name='{self.name}', filters={filter_names})"
