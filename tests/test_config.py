"""
Tests for the preprocessing configuration and its file I/O.
"""

import json

import pytest
import yaml

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.model.aggregation import AggregationFunction
from lfqprep.model.column_types import ColumnType
from lfqprep.model.config import PreprocessConfig
from lfqprep.model.normalization import NormalizationMethod
from lfqprep.preprocessing.config_io import generate_example_config, load_config, save_config


class TestPresets:
    """Tests for the registered presets."""

    def test_default(self):
        config = PreprocessConfig.from_preset("default")
        assert config.accession == "ProteinName"
        assert config.run_col == "Run"
        assert config.filter == ["IsDecoy"]
        assert config.normalization_method == NormalizationMethod.QUANTILES
        assert config.aggregation_function == AggregationFunction.SUM
        assert config.min_identified == 2

    def test_skyline(self):
        config = PreprocessConfig.from_preset("Skyline")
        assert config.run_col == "ReplicateName"
        assert config.useful_properties == [
            "ProteinName",
            "ProteinDescription",
            "ProteinAccession",
            "PeptideSequence",
        ]

    def test_spectronaut(self):
        config = PreprocessConfig.from_preset("spectronaut", normalisation="vsn")
        assert config.accession == "EG.ProteinId"
        assert config.run_col == "R.FileName"
        assert config.aggr_by == "EG.StrippedSequence"
        assert config.filter == ["EG.IsDecoy"]
        assert config.useful_properties == ["species"]
        assert config.normalisation == "vsn"

    def test_default_keeps_no_extra_columns(self):
        assert PreprocessConfig.from_preset("default").useful_properties == []

    def test_named_instance_does_not_replace_preset(self):
        PreprocessConfig(name="default", run_col="Sample")
        PreprocessConfig.from_dict({"name": "spectronaut", "run_col": "Sample"})

        assert PreprocessConfig.get("default").run_col == "Run"
        assert PreprocessConfig.get("spectronaut").run_col == "R.FileName"

    def test_register(self):
        config = PreprocessConfig(
            name="MaxQuant", run_col="Raw file", filter=["Reverse"], filter_symbol="+"
        )
        PreprocessConfig.register(config)
        config.run_col = "Experiment"
        try:
            assert PreprocessConfig.from_preset("maxquant").run_col == "Raw file"
        finally:
            PreprocessConfig.registry.pop("maxquant")

    def test_get_returns_copy(self):
        config = PreprocessConfig.get("skyline")
        config.useful_properties.append("Extra")
        assert "Extra" not in PreprocessConfig.get("skyline").useful_properties

    def test_unknown_preset(self):
        with pytest.raises(ConfigurationError, match="preset"):
            PreprocessConfig.from_preset("maxquant")


class TestPreprocessConfig:
    """Tests for PreprocessConfig construction and validation."""

    def test_from_dict_with_preset(self):
        config = PreprocessConfig.from_dict({"preset": "skyline", "min_identified": 3})
        assert config.run_col == "ReplicateName"
        assert config.min_identified == 3
        assert config.name == "custom"

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError, match="unknown configuration keys"):
            PreprocessConfig.from_dict({"normalization": "none"})

    def test_string_filter_wrapped(self):
        config = PreprocessConfig(name="wrapped", filter="Reverse")
        assert config.filter == ["Reverse"]

    def test_apply_overrides_ignores_none(self):
        config = PreprocessConfig.from_preset("default")
        config.apply_overrides({"normalisation": None, "base": 10})
        assert config.normalisation == "quantiles"
        assert config.base == 10

    def test_typed_columns(self):
        config = PreprocessConfig(name="typed", column_types={"PrecursorCharge": "integer"})
        assert config.typed_columns == {"PrecursorCharge": ColumnType.INTEGER}

    def test_valid(self):
        config = PreprocessConfig.from_preset("default")
        assert config.validate() is config

    @pytest.mark.parametrize(
        "overrides, parameter",
        [
            ({"normalisation": "loess"}, "normalisation"),
            ({"aggr_function": "mode"}, "aggr_function"),
            ({"base": 1}, "base"),
            ({"base": -2}, "base"),
            ({"key_separator": "/"}, "key_separator"),
            ({"min_identified": -1}, "min_identified"),
            ({"min_identified": 1.5}, "min_identified"),
            ({"type_annot": "csv"}, "type_annot"),
            ({"column_types": {"x": "blob"}}, "column_types"),
            ({"annotation_column_types": {"x": "blob"}}, "annotation_column_types"),
        ],
    )
    def test_invalid(self, overrides, parameter):
        config = PreprocessConfig.from_preset("default", **overrides)
        with pytest.raises(ConfigurationError) as excinfo:
            config.validate()
        assert excinfo.value.parameter == parameter

    def test_null_normalisation_rejected(self):
        config = PreprocessConfig(name="null_normalisation", normalisation=None)
        with pytest.raises(ConfigurationError) as excinfo:
            config.validate()
        assert excinfo.value.parameter == "normalisation"

    def test_base_ignored_without_log(self):
        config = PreprocessConfig.from_preset("default", logtransform=False, base=1)
        config.validate()


class TestConfigIO:
    """Tests for configuration file I/O."""

    def test_yaml_round_trip(self, tmp_path):
        config = PreprocessConfig.from_preset("spectronaut", normalisation="center.median")
        config.name = "yaml_round_trip"
        path = tmp_path / "config.yaml"
        save_config(config, path)

        loaded = load_config(path)
        assert loaded.to_dict() == config.to_dict()

    def test_json_round_trip(self, tmp_path):
        config = PreprocessConfig.from_preset("default", normalisation_options={"ties": False})
        config.name = "json_round_trip"
        path = tmp_path / "config.json"
        save_config(config, path)

        with open(path) as f:
            assert json.load(f)["normalisation_options"] == {"ties": False}
        assert load_config(path).normalisation_options == {"ties": False}

    def test_preset_key(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("preset: skyline\nnormalisation: none\n")

        config = load_config(path)
        assert config.run_col == "ReplicateName"
        assert config.normalisation == "none"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).run_col == "Run"

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("")
        with pytest.raises(ConfigurationError, match="unsupported config format"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    @pytest.mark.parametrize("suffix", [".yaml", ".json"])
    def test_example_config_loads(self, tmp_path, suffix):
        path = tmp_path / f"example{suffix}"
        generate_example_config(path)

        config = load_config(path)
        assert config.name == "example_config"
        assert config.validate() is config

    def test_example_yaml_documents_every_field(self, tmp_path):
        path = tmp_path / "example.yaml"
        generate_example_config(path)
        with open(path) as f:
            data = yaml.safe_load(f)
        expected = set(PreprocessConfig.from_preset("default").to_dict()) - {"key_separator"}
        assert expected <= set(data)
