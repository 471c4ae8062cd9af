"""
Configuration file I/O for the preprocessing pipeline.
"""

import json
from pathlib import Path
from typing import Optional, Union

import yaml

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.core.logger import get_logger
from lfqprep.model.config import PreprocessConfig

logger = get_logger("lfqprep.preprocessing.config_io")

YAML_SUFFIXES = (".yaml", ".yml")


def _format_from_suffix(path: Path, default: Optional[str] = "yaml") -> Optional[str]:
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return "yaml"
    if suffix == ".json":
        return "json"
    return default


def load_config(config_path: Union[str, Path]) -> PreprocessConfig:
    """
    Load a preprocessing configuration from a YAML or JSON file.

    The file holds a mapping of :class:`PreprocessConfig` fields; a ``preset``
    key selects the registered configuration the other keys override.

    Parameters
    ----------
    config_path : Union[str, Path]
        Path to configuration file (.yaml, .yml, or .json).

    Returns
    -------
    PreprocessConfig
        Loaded configuration.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ConfigurationError
        If the format is not supported or the content is not a mapping.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    file_format = _format_from_suffix(config_path, default=None)
    with open(config_path, "r") as f:
        if file_format == "yaml":
            data = yaml.safe_load(f)
        elif file_format == "json":
            data = json.load(f)
        else:
            raise ConfigurationError(
                f"unsupported config format {config_path.suffix!r}, use .yaml, .yml or .json",
                parameter="config",
            )

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} does not hold a mapping", parameter="config")

    logger.info("Loaded preprocessing configuration from %s", config_path)
    return PreprocessConfig.from_dict(data)


def save_config(
    config: PreprocessConfig,
    output_path: Union[str, Path],
    format: Optional[str] = None,
) -> None:
    """
    Save a preprocessing configuration to a YAML or JSON file.

    Parameters
    ----------
    config : PreprocessConfig
        Configuration to save.
    output_path : Union[str, Path]
        Output file path.
    format : str, optional
        Output format ('yaml' or 'json'). Inferred from extension if not provided.
    """
    output_path = Path(output_path)
    if format is None:
        format = _format_from_suffix(output_path)

    data = config.to_dict()
    if data.get("exp_annotation") is not None and not isinstance(data["exp_annotation"], str):
        # in-memory annotation tables are not serializable
        data["exp_annotation"] = None
    data["base"] = float(data["base"])

    with open(output_path, "w") as f:
        if format == "yaml":
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)

    logger.info("Saved preprocessing configuration to %s", output_path)


def generate_example_config(
    output_path: Union[str, Path],
    format: Optional[str] = None,
) -> None:
    """
    Generate an example configuration file with default values and comments.

    Parameters
    ----------
    output_path : Union[str, Path]
        Output file path.
    format : str, optional
        Output format ('yaml' or 'json').
    """
    output_path = Path(output_path)
    if format is None:
        format = _format_from_suffix(output_path)

    if format == "yaml":
        yaml_content = '''# lfqprep preprocessing configuration
# Keys left out fall back to the preset (or to the generic defaults).

name: example_config
# preset: skyline               # Start from a registered preset: default, skyline, spectronaut

# Column names
accession: ProteinName          # Protein (group) identifiers
split: /                        # Separator between the members of a protein group
run_col: Run                    # Mass spec run names
quant_col: quant_value          # Quantitative values (intensities or areas)
aggr_by: PeptideSequence        # Key by which duplicate rows are aggregated within a run

# Aggregation and transformation
aggr_function: sum              # sum, mean, median, max, min
logtransform: true              # Log-transform the quantitative values
base: 2                         # Base of the logarithm

# Normalization: none, quantiles, quantiles.robust, vsn,
# center.mean, center.median, max, sum
normalisation: quantiles
normalisation_options: {}       # e.g. {remove_extreme: variance, n_remove: 1} for quantiles.robust

# Protein groups
smallest_unique_groups: true    # Drop groups that contain a smaller observed group

# Row filtering
filter:                         # Columns flagging rows to remove
  - IsDecoy
filter_symbol: "True"           # Value marking a row for removal
min_identified: 2               # Minimal number of rows per aggregation key

# Output columns kept besides the key columns
useful_properties: []           # e.g. [ProteinDescription, ProteinAccession]

# Forced input column types: numeric, integer, logical, text, categorical, date, datetime
column_types: {}

# Experiment annotation
exp_annotation: null            # Path to a tab-delimited or Excel annotation file
type_annot: null                # tab-delim, xlsx, or null to use the file extension
annotation_column_types: {}     # Forced annotation column types, e.g. {replicate: factor}
'''
        with open(output_path, "w") as f:
            f.write(yaml_content)
    else:
        config = PreprocessConfig.from_preset("default")
        config.name = "example_config"
        save_config(config, output_path, format="json")

    logger.info("Generated example preprocessing configuration at %s", output_path)
