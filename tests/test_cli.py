"""
Tests for the lfqprep command line interface.
"""

import pandas as pd
import pytest
from click.testing import CliRunner

import lfqprep
from lfqprep.lfqprep_cli import cli
from lfqprep.preprocessing.config_io import load_config


@pytest.fixture
def input_table(tmp_path):
    rows = []
    for run, scale in [("R1", 1.0), ("R2", 2.0), ("R3", 4.0)]:
        rows += [
            ("P1", "kinase", "Q1", "PEPA", 2, run, False, 100.0 * scale),
            ("P1", "kinase", "Q1", "PEPA", 3, run, False, 50.0 * scale),
            ("P1", "kinase", "Q1", "PEPB", 2, run, False, 400.0 * scale),
            ("P2", "ligase", "Q2", "PEPC", 2, run, False, 800.0 * scale),
            ("P2", "ligase", "Q2", "PEPD", 2, run, True, 200.0 * scale),
        ]
    df = pd.DataFrame(
        rows,
        columns=[
            "ProteinName",
            "ProteinDescription",
            "ProteinAccession",
            "PeptideSequence",
            "PrecursorCharge",
            "Run",
            "IsDecoy",
            "quant_value",
        ],
    )
    path = tmp_path / "input.tsv"
    df.to_csv(path, sep="\t", index=False)
    return path


class TestCli:
    """Tests for the lfqprep command group."""

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert lfqprep.__version__ in result.output

    def test_help_lists_commands(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "preprocess" in result.output
        assert "example-config" in result.output


class TestPreprocessCommand:
    """Tests for lfqprep preprocess."""

    def test_preprocess(self, input_table, tmp_path):
        output = tmp_path / "peptides.tsv"
        result = CliRunner().invoke(
            cli, ["preprocess", "-i", str(input_table), "-o", str(output), "--normalisation", "none"]
        )

        assert result.exit_code == 0, result.output
        df = pd.read_csv(output, sep="\t")
        assert len(df) == 9
        assert "PEPD" not in set(df["PeptideSequence"])
        assert df.columns[0] == "quant_value"

    def test_overrides(self, input_table, tmp_path):
        output = tmp_path / "peptides.csv"
        result = CliRunner().invoke(
            cli,
            [
                "-v",
                "warn",
                "preprocess",
                "-i",
                str(input_table),
                "-o",
                str(output),
                "--normalisation",
                "center.median",
                "--no-log",
                "--no-filter",
                "--useful-property",
                "PrecursorCharge",
                "--min-identified",
                "3",
            ],
        )

        assert result.exit_code == 0, result.output
        df = pd.read_csv(output)
        assert "PEPD" in set(df["PeptideSequence"])
        assert "PrecursorCharge" in df.columns
        assert "ProteinDescription" not in df.columns

    def test_config_file(self, input_table, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("preset: default\nnormalisation: none\nlogtransform: false\n")
        output = tmp_path / "peptides.tsv"

        result = CliRunner().invoke(
            cli, ["preprocess", "-i", str(input_table), "-o", str(output), "--config", str(config_path)]
        )

        assert result.exit_code == 0, result.output
        df = pd.read_csv(output, sep="\t")
        pepb = df[df["PeptideSequence"] == "PEPB"].sort_values("Run")
        assert pepb["quant_value"].tolist() == [400.0, 800.0, 1600.0]

    def test_annotation_written(self, input_table, tmp_path):
        annotation = tmp_path / "annotation.tsv"
        pd.DataFrame({"Run": ["R1", "R2", "R3"], "Condition": ["a", "b", "b"]}).to_csv(
            annotation, sep="\t", index=False
        )
        output = tmp_path / "peptides.tsv"

        result = CliRunner().invoke(
            cli,
            ["preprocess", "-i", str(input_table), "-o", str(output), "--annotation", str(annotation)],
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "peptides.annotation.tsv").exists()

    def test_column_types(self, input_table, tmp_path):
        annotation = tmp_path / "annotation.tsv"
        pd.DataFrame({"Run": ["R1", "R2", "R3"], "Batch": [1, 1, 2]}).to_csv(
            annotation, sep="\t", index=False
        )
        output = tmp_path / "peptides.tsv"

        result = CliRunner().invoke(
            cli,
            [
                "preprocess",
                "-i",
                str(input_table),
                "-o",
                str(output),
                "--annotation",
                str(annotation),
                "--annotation-column-type",
                "Batch=factor",
                "--column-type",
                "PrecursorCharge=text",
                "--useful-property",
                "PrecursorCharge",
            ],
        )

        assert result.exit_code == 0, result.output
        df = pd.read_csv(output, sep="\t", dtype={"PrecursorCharge": str})
        assert set(df["PrecursorCharge"]) == {"2", "2/3"}

    def test_column_type_format(self, input_table, tmp_path):
        result = CliRunner().invoke(
            cli,
            [
                "preprocess",
                "-i",
                str(input_table),
                "-o",
                str(tmp_path / "out.tsv"),
                "--column-type",
                "PrecursorCharge",
            ],
        )
        assert result.exit_code == 2
        assert "COLUMN=TYPE" in result.output

    def test_missing_column_reported(self, input_table, tmp_path):
        result = CliRunner().invoke(
            cli,
            ["preprocess", "-i", str(input_table), "-o", str(tmp_path / "out.tsv"), "--run-col", "Sample"],
        )

        assert result.exit_code == 1
        assert "run_col" in result.output

    def test_invalid_normalisation(self, input_table, tmp_path):
        result = CliRunner().invoke(
            cli,
            ["preprocess", "-i", str(input_table), "-o", str(tmp_path / "out.tsv"), "--normalisation", "loess"],
        )
        assert result.exit_code == 2

    def test_filter_conflict(self, input_table, tmp_path):
        result = CliRunner().invoke(
            cli,
            [
                "preprocess",
                "-i",
                str(input_table),
                "-o",
                str(tmp_path / "out.tsv"),
                "--filter",
                "IsDecoy",
                "--no-filter",
            ],
        )
        assert result.exit_code == 2


class TestExampleConfigCommand:
    """Tests for lfqprep example-config."""

    @pytest.mark.parametrize("name", ["example.yaml", "example.json"])
    def test_example_config(self, tmp_path, name):
        output = tmp_path / name
        result = CliRunner().invoke(cli, ["example-config", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert load_config(output).name == "example_config"
