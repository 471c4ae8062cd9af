"""
Tests for the log transformation stage.
"""

import numpy as np
import pandas as pd
import pytest

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.preprocessing.transform import log_transform


class TestLogTransform:
    """Tests for log_transform."""

    @pytest.fixture
    def df(self):
        return pd.DataFrame(
            {
                "Run": ["R1", "R1", "R2", "R2", "R2", "R3"],
                "quant_value": [1.0, 8.0, 1024.0, 0.0, -4.0, np.nan],
            }
        )

    def test_log2(self, df):
        result = log_transform(df, "quant_value")
        np.testing.assert_allclose(
            result["quant_value"].to_numpy(), [0.0, 3.0, 10.0, np.nan, np.nan, np.nan]
        )

    def test_log10(self):
        df = pd.DataFrame({"quant_value": [10.0, 1000.0]})
        result = log_transform(df, "quant_value", base=10)
        np.testing.assert_allclose(result["quant_value"], [1.0, 3.0])

    def test_no_infinite_values(self, df):
        result = log_transform(df, "quant_value")
        assert not np.isinf(result["quant_value"]).any()

    def test_missing_values_conserved(self, df):
        result = log_transform(df, "quant_value")
        was_missing = df["quant_value"].isna()
        assert result.loc[was_missing, "quant_value"].isna().all()
        positive = df["quant_value"] > 0
        assert result.loc[positive, "quant_value"].notna().all()

    def test_input_not_modified(self, df):
        before = df.copy()
        log_transform(df, "quant_value")
        pd.testing.assert_frame_equal(df, before)

    @pytest.mark.parametrize("base", [1, 0, -2, "e"])
    def test_invalid_base(self, df, base):
        with pytest.raises(ConfigurationError, match="base"):
            log_transform(df, "quant_value", base=base)
