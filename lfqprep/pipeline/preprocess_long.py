"""
Preprocessing pipeline for long-format LC-MS quantification tables.

This module provides the `preprocess_long` function and the
`PreprocessPipeline` class turning a long table (one row per peptide
measurement per run) into a cleaned, normalized and annotated table ready for
protein-level modelling.

The stages run strictly in this order:
- Aggregation of rows sharing (aggregation key, filter columns, run)
- Log transformation
- Normalization across runs
- Removal of protein groups containing a smaller observed group
- Removal of rows flagged in the filter columns
- Column projection
- Removal of aggregation keys identified too few times
- Attachment of the experiment annotation
"""

import copy
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd

from lfqprep.core.exceptions import ConfigurationError
from lfqprep.core.logger import get_logger, log_execution_time
from lfqprep.io.annotation import load_annotation
from lfqprep.io.tables import read_table, write_table
from lfqprep.model.config import PreprocessConfig
from lfqprep.model.normalization import NormalizationMethod
from lfqprep.normalization.runs import normalize_long
from lfqprep.preprocessing.aggregation import aggregate_duplicates
from lfqprep.preprocessing.annotation import attach_annotation, get_annotation
from lfqprep.preprocessing.column_types import apply_column_types
from lfqprep.preprocessing.filters import (
    FilterColumnFilter,
    FilterPipeline,
    FilterResult,
    MinIdentifiedFilter,
    SmallestUniqueGroupsFilter,
)
from lfqprep.preprocessing.projection import project_columns
from lfqprep.preprocessing.transform import log_transform

logger = get_logger("lfqprep.pipeline")

ConfigLike = Union[PreprocessConfig, str, dict, None]


def resolve_config(config: ConfigLike = None, **overrides) -> PreprocessConfig:
    """
    Build a validated configuration.

    Parameters
    ----------
    config : PreprocessConfig, str, dict or None
        A configuration, the name of a registered preset, a mapping of
        configuration fields, or ``None`` for the generic defaults.
    **overrides
        Field values replacing those of ``config``; ``None`` values are ignored.

    Returns
    -------
    PreprocessConfig
        A fresh configuration; the one passed in is never modified.
    """
    if config is None:
        resolved = PreprocessConfig.from_preset("default")
    elif isinstance(config, str):
        resolved = PreprocessConfig.from_preset(config)
    elif isinstance(config, dict):
        resolved = PreprocessConfig.from_dict(config)
    else:
        resolved = copy.deepcopy(config)
    resolved.apply_overrides(overrides)
    return resolved.validate()


class PreprocessPipeline:
    """
    Long-format preprocessing pipeline.

    The configuration is validated when the pipeline is built, so an invalid
    method name or parameter fails before any data is touched.

    Examples
    --------
    >>> pipeline = PreprocessPipeline(PreprocessConfig(normalisation="none"))
    >>> processed = pipeline.run(df)
    >>> pipeline.results
    [FilterResult(SmallestUniqueGroupsFilter: ...), ...]
    """

    def __init__(self, config: ConfigLike = None, **overrides):
        self.config = resolve_config(config, **overrides)
        self.results: List[FilterResult] = []

    def _validate_input(self, df: pd.DataFrame) -> None:
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"expected a pandas DataFrame, got {type(df).__name__}")
        cfg = self.config
        cfg.schema.validate(df)
        missing_typed = [col for col in (cfg.column_types or {}) if col not in df.columns]
        if missing_typed:
            raise ConfigurationError(
                f"columns not found in table: {', '.join(map(repr, missing_typed))}",
                parameter="column_types",
            )

    def _prepare(self, df: pd.DataFrame) -> pd.DataFrame:
        """Coerce the quant column and drop rows without a value."""
        cfg = self.config
        df = df.copy()
        df[cfg.quant_col] = pd.to_numeric(df[cfg.quant_col], errors="raise").astype(float)

        missing = df[cfg.quant_col].isna().to_numpy()
        if missing.any():
            logger.debug("Removing %d rows without a quantitative value", int(missing.sum()))
            df = df[~missing]
        return df.reset_index(drop=True)

    def _protein_filters(self) -> FilterPipeline:
        cfg = self.config
        pipeline = FilterPipeline(name="protein_groups")
        if cfg.smallest_unique_groups:
            pipeline.add_filter(SmallestUniqueGroupsFilter(cfg.accession, split=cfg.split))
        if cfg.filter:
            pipeline.add_filter(FilterColumnFilter(cfg.filter, symbol=cfg.filter_symbol))
        return pipeline

    def _load_annotation(self, df: pd.DataFrame) -> Optional[pd.DataFrame]:
        cfg = self.config
        if cfg.exp_annotation is None:
            return None
        annotation, run_column = load_annotation(
            cfg.exp_annotation,
            df[cfg.run_col].unique(),
            type_annot=cfg.type_annot,
            column_types=cfg.annotation_column_types or None,
        )
        logger.info("Attaching experiment annotation (run column '%s')", run_column)
        return annotation

    @log_execution_time(logger)
    def run(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Run every preprocessing stage on ``df``.

        Parameters
        ----------
        df : pd.DataFrame
            Long-format table; it is not modified.

        Returns
        -------
        pd.DataFrame
            Preprocessed table. The experiment annotation, if any, is in
            ``attrs["exp_annotation"]``.
        """
        cfg = self.config
        self._validate_input(df)
        self.results = []
        logger.info("Preprocessing %d rows with configuration '%s'", len(df), cfg.name)

        df = self._prepare(df)

        df = aggregate_duplicates(
            df,
            aggr_by=cfg.aggr_by,
            filter_columns=cfg.filter,
            run_column=cfg.run_col,
            quant_column=cfg.quant_col,
            aggr_function=cfg.aggregation_function,
            split=cfg.split,
            key_separator=cfg.key_separator,
        )
        logger.debug("After aggregation: %d rows", len(df))

        if cfg.column_types:
            # forced types win over the types restored after aggregation
            df = apply_column_types(df, cfg.column_types)

        if cfg.logtransform:
            df = log_transform(df, cfg.quant_col, base=cfg.base)
            logger.debug("Applied log%g transformation", float(cfg.base))

        method = cfg.normalization_method
        if method != NormalizationMethod.NONE or cfg.normalisation_options:
            df = normalize_long(
                df, cfg.run_col, cfg.quant_col, method=method, **cfg.normalisation_options
            )
            logger.debug("Applied '%s' normalization", method.label)

        df, results = self._protein_filters().apply(df)
        self.results.extend(results)

        df = project_columns(
            df,
            cfg.useful_properties,
            accession=cfg.accession,
            aggr_by=cfg.aggr_by,
            run_column=cfg.run_col,
            quant_column=cfg.quant_col,
        )
        logger.debug("Projected onto %d columns", df.shape[1])

        df, results = FilterPipeline(
            "identification", [MinIdentifiedFilter(cfg.aggr_by, cfg.min_identified)]
        ).apply(df)
        self.results.extend(results)
        df = df.reset_index(drop=True)

        attach_annotation(df, self._load_annotation(df))

        logger.info("Preprocessing complete: %d rows", len(df))
        return df


def preprocess_long(
    df: pd.DataFrame,
    config: ConfigLike = None,
    return_results: bool = False,
    **overrides,
) -> Union[pd.DataFrame, Tuple[pd.DataFrame, List[FilterResult]]]:
    """
    Preprocess a long-format quantification table.

    Peptides are aggregated by ``aggr_by`` within each run, intensities are
    log-transformed and normalized, protein groups that contain a smaller
    observed group are removed, flagged rows (decoys, contaminants) are
    removed, irrelevant columns are dropped, peptides identified fewer than
    ``min_identified`` times are removed and the experiment annotation is
    attached.

    Parameters
    ----------
    df : pd.DataFrame
        Long-format table.
    config : PreprocessConfig, str, dict, optional
        Configuration, preset name (``default``, ``skyline``, ``spectronaut``)
        or mapping of configuration fields.
    return_results : bool, optional
        Also return the :class:`FilterResult` of each filtering stage.
    **overrides
        Configuration fields overriding ``config``, e.g.
        ``normalisation="none"`` or ``exp_annotation="annotation.xlsx"``.

    Returns
    -------
    pd.DataFrame or tuple of (pd.DataFrame, list of FilterResult)

    Raises
    ------
    ConfigurationError
        If a parameter is invalid or a configured column is missing.
    AnnotationError
        If the experiment annotation does not match the runs.

    Examples
    --------
    >>> processed = preprocess_long(df, accession="ProteinName", run_col="Run")

    >>> processed, results = preprocess_long(
    ...     df, "spectronaut", normalisation="center.median", return_results=True
    ... )
    """
    pipeline = PreprocessPipeline(config, **overrides)
    processed = pipeline.run(df)
    if return_results:
        return processed, pipeline.results
    return processed


def preprocess_skyline(df: pd.DataFrame, **overrides) -> pd.DataFrame:
    """
    Preprocess a Skyline export.

    Defaults: accession ``ProteinName``, run ``ReplicateName``, aggregation by
    ``PeptideSequence``, decoys flagged ``True`` in ``IsDecoy``. See
    :func:`preprocess_long` for the stages and the accepted overrides.
    """
    return preprocess_long(df, "skyline", **overrides)


def preprocess_spectronaut(df: pd.DataFrame, **overrides) -> pd.DataFrame:
    """
    Preprocess a Spectronaut export.

    Defaults: accession ``EG.ProteinId``, run ``R.FileName``, aggregation by
    ``EG.StrippedSequence``, decoys flagged ``True`` in ``EG.IsDecoy`` and
    ``species`` kept as useful property.
    """
    return preprocess_long(df, "spectronaut", **overrides)


def preprocess_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    config: ConfigLike = None,
    **overrides,
) -> pd.DataFrame:
    """
    Read a table, preprocess it and optionally write the result.

    When an experiment annotation is attached it is written next to the
    output as ``<stem>.annotation.tsv``.
    """
    processed = preprocess_long(read_table(input_path), config, **overrides)
    if output_path is not None:
        output_path = Path(output_path)
        write_table(processed, output_path)
        annotation = get_annotation(processed)
        if annotation is not None:
            annotation_path = output_path.with_name(f"{output_path.stem}.annotation.tsv")
            write_table(annotation, annotation_path)
            logger.info("Experiment annotation saved to %s", annotation_path)
    return processed
