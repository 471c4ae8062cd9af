"""
Preprocessing configuration model.

This module provides the dataclass holding every parameter of the long-format
preprocessing pipeline, plus the registered presets for common exports.
"""

import copy
from dataclasses import dataclass, field, asdict, fields
from typing import Any, ClassVar, Dict, List, Optional

from lfqprep.core.constants import (
    DEFAULT_FILTER_SYMBOL,
    DEFAULT_MIN_IDENTIFIED,
    SKYLINE_USEFUL_PROPERTIES,
    IS_DECOY,
    KEY_SEPARATOR,
    PEPTIDE_SEQUENCE,
    PROTEIN_GROUP_SPLIT,
    PROTEIN_NAME,
    QUANT_VALUE,
    RUN,
    SKYLINE_REPLICATE,
    SPECTRONAUT_DECOY,
    SPECTRONAUT_PROTEIN,
    SPECTRONAUT_RUN,
    SPECTRONAUT_SEQUENCE,
    SPECTRONAUT_SPECIES,
)
from lfqprep.core.exceptions import ConfigurationError
from lfqprep.model.aggregation import AggregationFunction
from lfqprep.model.column_types import ColumnType
from lfqprep.model.normalization import NormalizationMethod
from lfqprep.model.schema import ColumnSchema

ANNOTATION_TYPES = ("tab-delim", "xlsx")


@dataclass
class PreprocessConfig:
    """
    Configuration of the long-format preprocessing pipeline.

    Attributes
    ----------
    accession : str
        Column with the protein (group) identifiers inference is done on.
    split : str
        Separator between the members of a protein group.
    run_col : str
        Column with the mass spec run names.
    quant_col : str
        Column with the quantitative values (intensities or areas).
    aggr_by : str
        Column by which duplicate rows are aggregated (never across runs).
    aggr_function : str
        Aggregation function for the quantitative values.
    logtransform : bool
        Whether to log-transform the quantitative values.
    base : float
        Base of the logarithm.
    normalisation : str
        Normalization method, see :class:`NormalizationMethod`.
    normalisation_options : dict
        Extra keyword arguments passed to the normalization method.
    smallest_unique_groups : bool
        Whether to drop protein groups containing a smaller observed group.
    useful_properties : list[str]
        Columns retained in the output besides the key columns.
    filter : list[str]
        Columns holding ``filter_symbol`` for rows to remove.
    filter_symbol : str
        Value marking a row for removal.
    min_identified : int
        Minimal number of rows an aggregation key needs to be kept.
    column_types : dict[str, str]
        Forced types for input columns, e.g. ``{"PrecursorCharge": "integer"}``.
    exp_annotation : str, optional
        Path to an experiment annotation file.
    type_annot : str, optional
        Annotation file type: ``tab-delim``, ``xlsx`` or ``None`` (by extension).
    annotation_column_types : dict[str, str]
        Forced types for annotation columns, e.g. ``{"replicate": "factor"}``.
    key_separator : str
        Separator used when building composite aggregation keys. Values in
        the key columns must not contain it, or keys may fuse.
    """

    registry: ClassVar[Dict[str, "PreprocessConfig"]] = {}

    name: str = "custom"
    accession: str = PROTEIN_NAME
    split: str = PROTEIN_GROUP_SPLIT
    run_col: str = RUN
    quant_col: str = QUANT_VALUE
    aggr_by: str = PEPTIDE_SEQUENCE
    aggr_function: str = "sum"
    logtransform: bool = True
    base: float = 2.0
    normalisation: str = "quantiles"
    normalisation_options: Dict[str, Any] = field(default_factory=dict)
    smallest_unique_groups: bool = True
    useful_properties: List[str] = field(default_factory=list)
    filter: List[str] = field(default_factory=lambda: [IS_DECOY])
    filter_symbol: str = DEFAULT_FILTER_SYMBOL
    min_identified: int = DEFAULT_MIN_IDENTIFIED
    column_types: Dict[str, str] = field(default_factory=dict)
    exp_annotation: Optional[str] = None
    type_annot: Optional[str] = None
    annotation_column_types: Dict[str, str] = field(default_factory=dict)
    key_separator: str = KEY_SEPARATOR

    @classmethod
    def get(cls, name: str, default=None) -> "Optional[PreprocessConfig]":
        """Retrieve a copy of a registered configuration."""
        config = cls.registry.get(name.lower())
        if config is None:
            return default
        return copy.deepcopy(config)

    @classmethod
    def from_preset(cls, preset: str, **overrides) -> "PreprocessConfig":
        """
        Build a configuration from a registered preset.

        Raises
        ------
        ConfigurationError
            If no preset of that name is registered.
        """
        config = cls.get(preset)
        if config is None:
            raise ConfigurationError(
                f"unknown preset {preset!r}, expected one of {', '.join(sorted(cls.registry))}",
                parameter="preset",
            )
        config.apply_overrides(overrides)
        return config

    @classmethod
    def from_dict(cls, data: dict) -> "PreprocessConfig":
        """Create configuration from a dictionary, starting from its ``preset`` if given."""
        data = dict(data)
        preset = data.pop("preset", None)
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"unknown configuration keys: {', '.join(sorted(unknown))}", parameter="config"
            )
        if preset is not None:
            config = cls.from_preset(preset, **data)
            if "name" not in data:
                config.name = "custom"
            return config
        return cls(**data)

    def __post_init__(self):
        if isinstance(self.filter, str):
            self.filter = [self.filter]
        if isinstance(self.useful_properties, str):
            self.useful_properties = [self.useful_properties]

    @classmethod
    def register(cls, config: "PreprocessConfig") -> "PreprocessConfig":
        """
        Register a copy of ``config`` as a preset under its name.

        Instances are not registered on construction, so configurations built
        by users or loaded from files never replace a preset.
        """
        cls.registry[config.name.lower()] = copy.deepcopy(config)
        return config

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    def apply_overrides(self, overrides: dict) -> None:
        """
        Apply overrides to the configuration, ignoring ``None`` values.

        Parameters
        ----------
        overrides : dict
            Mapping of field name to new value.
        """
        known = {f.name for f in fields(self)}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigurationError(f"unknown configuration key {key!r}", parameter=key)
            if value is None:
                continue
            if key in ("filter", "useful_properties") and isinstance(value, str):
                value = [value]
            setattr(self, key, value)

    @property
    def schema(self) -> ColumnSchema:
        """Column schema described by this configuration."""
        return ColumnSchema(
            accession=self.accession,
            aggr_by=self.aggr_by,
            run=self.run_col,
            quant=self.quant_col,
            filters=list(self.filter or []),
            useful_properties=list(self.useful_properties or []),
        )

    @property
    def aggregation_function(self) -> AggregationFunction:
        return AggregationFunction.from_str(self.aggr_function)

    @property
    def normalization_method(self) -> NormalizationMethod:
        return NormalizationMethod.from_str(self.normalisation)

    @property
    def typed_columns(self) -> Dict[str, ColumnType]:
        return {col: ColumnType.from_str(t) for col, t in (self.column_types or {}).items()}

    def validate(self) -> "PreprocessConfig":
        """
        Check every parameter without touching any data.

        Returns
        -------
        PreprocessConfig
            Self, for chaining.

        Raises
        ------
        ConfigurationError
            Naming the first invalid parameter.
        """
        _ = self.aggregation_function
        _ = self.normalization_method
        _ = self.typed_columns
        for column, column_type in (self.annotation_column_types or {}).items():
            try:
                ColumnType.from_str(column_type)
            except ConfigurationError:
                raise ConfigurationError(
                    f"unknown column type {column_type!r} for column {column!r}",
                    parameter="annotation_column_types",
                ) from None

        if not self.split:
            raise ConfigurationError("must be a non-empty string", parameter="split")
        if not self.key_separator:
            raise ConfigurationError("must be a non-empty string", parameter="key_separator")
        if self.key_separator == self.split:
            raise ConfigurationError(
                "must differ from the protein group separator", parameter="key_separator"
            )
        if self.logtransform:
            try:
                base = float(self.base)
            except (TypeError, ValueError):
                raise ConfigurationError(f"{self.base!r} is not a number", parameter="base") from None
            if base <= 0 or base == 1:
                raise ConfigurationError("must be positive and different from 1", parameter="base")
        if isinstance(self.min_identified, bool) or not isinstance(self.min_identified, int):
            raise ConfigurationError("must be an integer", parameter="min_identified")
        if self.min_identified < 0:
            raise ConfigurationError("must not be negative", parameter="min_identified")
        if self.type_annot is not None and self.type_annot not in ANNOTATION_TYPES:
            raise ConfigurationError(
                f"expected one of {', '.join(ANNOTATION_TYPES)} or None", parameter="type_annot"
            )
        if not isinstance(self.normalisation_options, dict):
            raise ConfigurationError("must be a mapping", parameter="normalisation_options")
        return self


DEFAULT_CONFIG = PreprocessConfig.register(PreprocessConfig(name="default"))

SKYLINE_CONFIG = PreprocessConfig.register(
    PreprocessConfig(
        name="skyline",
        accession=PROTEIN_NAME,
        run_col=SKYLINE_REPLICATE,
        aggr_by=PEPTIDE_SEQUENCE,
        useful_properties=list(SKYLINE_USEFUL_PROPERTIES),
        filter=[IS_DECOY],
        filter_symbol="True",
    )
)

SPECTRONAUT_CONFIG = PreprocessConfig.register(
    PreprocessConfig(
        name="spectronaut",
        accession=SPECTRONAUT_PROTEIN,
        run_col=SPECTRONAUT_RUN,
        aggr_by=SPECTRONAUT_SEQUENCE,
        useful_properties=[SPECTRONAUT_SPECIES],
        filter=[SPECTRONAUT_DECOY],
        filter_symbol="True",
    )
)
