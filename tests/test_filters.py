"""
Tests for the row filters and the filter pipeline.
"""

import numpy as np
import pandas as pd
import pytest

from lfqprep.preprocessing.filters import (
    FilterColumnFilter,
    FilterLevel,
    FilterPipeline,
    FilterResult,
    MinIdentifiedFilter,
    SmallestUniqueGroupsFilter,
    protein_group_members,
    smallest_unique_groups,
)


class TestSmallestUniqueGroups:
    """Tests for the protein group resolver."""

    def test_members(self):
        assert protein_group_members("P1/P2") == frozenset({"P1", "P2"})
        assert protein_group_members("P1;P2", split=";") == frozenset({"P1", "P2"})

    def test_superset_removed(self):
        kept = smallest_unique_groups(["A/B", "A", "B/C", "C/D"])
        assert kept == ["A", "B/C", "C/D"]

    def test_equal_size_overlap_kept(self):
        assert smallest_unique_groups(["A/B", "B/C"]) == ["A/B", "B/C"]

    def test_identical_groups_kept(self):
        assert smallest_unique_groups(["A/B", "B/A", "A/B"]) == ["A/B", "B/A"]

    def test_nested_chain(self):
        kept = smallest_unique_groups(["A/B/C", "A/B", "A", "D"])
        assert kept == ["A", "D"]

    def test_singletons_never_removed(self):
        accessions = ["A", "B", "C", "A/B/C"]
        assert smallest_unique_groups(accessions) == ["A", "B", "C"]

    def test_adding_group_only_removes_supersets(self):
        base = ["A/B", "C/D", "E"]
        assert smallest_unique_groups(base) == base
        assert smallest_unique_groups(base + ["C"]) == ["A/B", "E", "C"]

    def test_custom_split(self):
        assert smallest_unique_groups(["A;B", "A"], split=";") == ["A"]

    def test_missing_accession_is_own_group(self):
        kept = smallest_unique_groups([np.nan, "A"])
        assert len(kept) == 2

    def test_filter(self):
        df = pd.DataFrame(
            {
                "ProteinName": ["P1", "P1/P2", "P3", "P1/P2"],
                "quant_value": [1.0, 2.0, 3.0, 4.0],
            }
        )
        filtered, result = SmallestUniqueGroupsFilter("ProteinName").apply(df)

        assert filtered["ProteinName"].tolist() == ["P1", "P3"]
        assert isinstance(result, FilterResult)
        assert result.removed_count == 2
        assert result.filter_level == FilterLevel.PROTEIN
        assert result.details["groups_kept"] == 2


class TestFilterColumnFilter:
    """Tests for the sentinel-column filter."""

    @pytest.fixture
    def df(self):
        return pd.DataFrame(
            {
                "IsDecoy": [False, True, False, np.nan, False],
                "Contaminant": ["", "", " True ", "", np.nan],
                "quant_value": [1.0, 2.0, 3.0, 4.0, 5.0],
            }
        )

    def test_boolean_column(self, df):
        filtered, result = FilterColumnFilter("IsDecoy").apply(df)
        assert filtered["quant_value"].tolist() == [1.0, 3.0, 4.0, 5.0]
        assert result.removed_count == 1

    def test_whitespace_trimmed(self, df):
        filtered, _ = FilterColumnFilter(["Contaminant"]).apply(df)
        assert filtered["quant_value"].tolist() == [1.0, 2.0, 4.0, 5.0]

    def test_any_column_removes(self, df):
        filtered, result = FilterColumnFilter(["IsDecoy", "Contaminant"]).apply(df)
        assert filtered["quant_value"].tolist() == [1.0, 4.0, 5.0]
        assert result.details["flagged_per_column"] == {"IsDecoy": 1, "Contaminant": 1}

    def test_boolean_symbol(self, df):
        filtered, _ = FilterColumnFilter("IsDecoy", symbol=True).apply(df)
        assert len(filtered) == 4

    def test_custom_symbol(self):
        df = pd.DataFrame({"Reverse": ["+", "", "+"], "quant_value": [1.0, 2.0, 3.0]})
        filtered, _ = FilterColumnFilter("Reverse", symbol="+").apply(df)
        assert filtered["quant_value"].tolist() == [2.0]

    def test_no_columns(self, df):
        filtered, result = FilterColumnFilter([]).apply(df)
        pd.testing.assert_frame_equal(filtered, df)
        assert result.removed_count == 0


class TestMinIdentifiedFilter:
    """Tests for the identification-count filter."""

    @pytest.fixture
    def df(self):
        return pd.DataFrame(
            {
                "PeptideSequence": ["A", "A", "B", "C", "C", "C"],
                "Run": ["R1", "R2", "R1", "R1", "R2", "R3"],
            }
        )

    def test_counts_over_whole_table(self, df):
        filtered, result = MinIdentifiedFilter("PeptideSequence", 2).apply(df)
        assert filtered["PeptideSequence"].tolist() == ["A", "A", "C", "C", "C"]
        assert result.details["keys_removed"] == 1

    def test_threshold(self, df):
        filtered, _ = MinIdentifiedFilter("PeptideSequence", 3).apply(df)
        assert set(filtered["PeptideSequence"]) == {"C"}

    def test_missing_keys_not_counted(self):
        df = pd.DataFrame(
            {
                "PeptideSequence": [np.nan, np.nan, "A", "A"],
                "Run": ["R1", "R2", "R1", "R2"],
            }
        )
        filtered, _ = MinIdentifiedFilter("PeptideSequence", 2).apply(df)
        assert filtered["PeptideSequence"].tolist() == ["A", "A"]

    def test_zero_keeps_everything(self, df):
        filtered, _ = MinIdentifiedFilter("PeptideSequence", 0).apply(df)
        assert len(filtered) == len(df)

    def test_empty_table(self, df):
        filtered, result = MinIdentifiedFilter("PeptideSequence", 2).apply(df.iloc[:0])
        assert filtered.empty
        assert result.removal_rate == 0.0


class TestFilterPipeline:
    """Tests for FilterPipeline."""

    @pytest.fixture
    def df(self):
        return pd.DataFrame(
            {
                "ProteinName": ["P1", "P1/P2", "P1", "P3", "P3"],
                "PeptideSequence": ["A", "B", "A", "C", "D"],
                "IsDecoy": [False, False, False, True, False],
            }
        )

    def test_apply_in_order(self, df):
        pipeline = FilterPipeline("test").add_filters(
            [
                SmallestUniqueGroupsFilter("ProteinName"),
                FilterColumnFilter("IsDecoy"),
                MinIdentifiedFilter("PeptideSequence", 2),
            ]
        )
        filtered, results = pipeline.apply(df)

        assert len(pipeline) == 3
        assert filtered["PeptideSequence"].tolist() == ["A", "A"]
        assert [r.removed_count for r in results] == [1, 1, 1]

    def test_summary(self, df):
        pipeline = FilterPipeline("test", [FilterColumnFilter("IsDecoy")])
        _, results = pipeline.apply(df)
        summary = FilterPipeline.summary(results)

        assert summary["total_input"] == 5
        assert summary["total_output"] == 4
        assert summary["filters"][0]["name"] == "FilterColumnFilter"

    def test_empty_summary(self):
        assert FilterPipeline.summary([])["total_removed"] == 0

    def test_errors_propagate(self, df):
        pipeline = FilterPipeline("test", [FilterColumnFilter("Missing")])
        with pytest.raises(KeyError):
            pipeline.apply(df)
