"""
CLI command for the long-format preprocessing pipeline.
"""

import click

from lfqprep.core.exceptions import LfqPrepError
from lfqprep.model.aggregation import AggregationFunction
from lfqprep.model.normalization import NormalizationMethod

PRESET_CHOICES = ["default", "skyline", "spectronaut"]
NORMALISATION_CHOICES = [m.label for m in NormalizationMethod]
AGGREGATION_CHOICES = [f.label for f in AggregationFunction]


def _parse_column_types(ctx, param, values):
    """Turn repeated ``COLUMN=TYPE`` values into a mapping."""
    column_types = {}
    for value in values:
        column, sep, column_type = value.partition("=")
        if not sep or not column.strip() or not column_type.strip():
            raise click.BadParameter(f"expected COLUMN=TYPE, got {value!r}", ctx=ctx, param=param)
        column_types[column.strip()] = column_type.strip()
    return column_types or None


@click.command("preprocess", short_help="Preprocess a long-format quantification table.")
@click.option(
    "-i",
    "--input",
    "input_path",
    help="Long-format table (parquet, csv, tsv or xlsx)",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "-o",
    "--output",
    help="Output table; parquet, csv or tsv by extension",
    required=True,
    type=click.Path(dir_okay=False),
)
@click.option(
    "--config",
    "config_path",
    help="YAML or JSON configuration file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
)
@click.option(
    "--preset",
    help="Registered configuration to start from (ignored with --config)",
    type=click.Choice(PRESET_CHOICES, case_sensitive=False),
    default="default",
    show_default=True,
)
# Column options
@click.option("--accession", help="Protein (group) identifier column", default=None)
@click.option("--split", help="Separator between the members of a protein group", default=None)
@click.option("--run-col", "run_col", help="Mass spec run column", default=None)
@click.option("--quant-col", "quant_col", help="Quantitative value column", default=None)
@click.option("--aggr-by", "aggr_by", help="Column by which rows are aggregated within a run", default=None)
# Aggregation, transformation and normalization
@click.option(
    "--aggr-function",
    "aggr_function",
    help="Aggregation function for the quantitative values",
    type=click.Choice(AGGREGATION_CHOICES, case_sensitive=False),
    default=None,
)
@click.option("--no-log", "no_log", help="Do not log-transform the quantitative values", is_flag=True)
@click.option("--base", help="Base of the logarithm", type=float, default=None)
@click.option(
    "--normalisation",
    help="Normalization method",
    type=click.Choice(NORMALISATION_CHOICES, case_sensitive=False),
    default=None,
)
# Filtering
@click.option(
    "--no-smallest-unique-groups",
    "no_smallest_unique_groups",
    help="Keep protein groups that contain a smaller observed group",
    is_flag=True,
)
@click.option(
    "--filter",
    "filter_columns",
    help="Column flagging rows to remove (repeatable)",
    multiple=True,
)
@click.option("--no-filter", "no_filter", help="Do not filter on any column", is_flag=True)
@click.option("--filter-symbol", "filter_symbol", help="Value marking a row for removal", default=None)
@click.option(
    "--useful-property",
    "useful_properties",
    help="Column to keep in the output (repeatable)",
    multiple=True,
)
@click.option(
    "--min-identified",
    "min_identified",
    help="Minimal number of identifications per aggregation key",
    type=click.IntRange(min=0),
    default=None,
)
@click.option(
    "--column-type",
    "column_types",
    help="Forced column type as COLUMN=TYPE, e.g. PrecursorCharge=integer (repeatable)",
    multiple=True,
    callback=_parse_column_types,
)
# Annotation
@click.option(
    "--annotation",
    "exp_annotation",
    help="Experiment annotation file (tab-delimited or xlsx)",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
)
@click.option(
    "--type-annot",
    "type_annot",
    help="Annotation file type; inferred from the extension by default",
    type=click.Choice(["tab-delim", "xlsx"]),
    default=None,
)
@click.option(
    "--annotation-column-type",
    "annotation_column_types",
    help="Forced annotation column type as COLUMN=TYPE, e.g. replicate=factor (repeatable)",
    multiple=True,
    callback=_parse_column_types,
)
def preprocess(
    input_path: str,
    output: str,
    config_path: str,
    preset: str,
    accession: str,
    split: str,
    run_col: str,
    quant_col: str,
    aggr_by: str,
    aggr_function: str,
    no_log: bool,
    base: float,
    normalisation: str,
    no_smallest_unique_groups: bool,
    filter_columns: tuple,
    no_filter: bool,
    filter_symbol: str,
    useful_properties: tuple,
    min_identified: int,
    column_types: dict,
    exp_annotation: str,
    type_annot: str,
    annotation_column_types: dict,
) -> None:
    """
    Preprocess a long-format LC-MS quantification table.

    Rows are aggregated by --aggr-by within each run, quantitative values are
    log-transformed and normalized across runs, protein groups containing a
    smaller observed group are removed, rows flagged in the filter columns are
    removed, unneeded columns are dropped and peptides identified fewer than
    --min-identified times are removed.

    \b
    NORMALIZATION:
      none, quantiles, quantiles.robust, vsn,
      center.mean, center.median, max, sum

    \b
    EXAMPLES:
      # Skyline export with the default quantile normalization
      lfqprep preprocess -i skyline.csv -o peptides.tsv --preset skyline

      # Spectronaut export, median centering, with an experiment annotation
      lfqprep preprocess -i report.tsv -o peptides.parquet --preset spectronaut \\
        --normalisation center.median --annotation annotation.xlsx

      # Settings from a configuration file
      lfqprep preprocess -i data.tsv -o peptides.tsv --config preprocess.yaml
    """
    from lfqprep.pipeline import preprocess_file
    from lfqprep.preprocessing.config_io import load_config

    if no_filter and filter_columns:
        raise click.UsageError("--no-filter cannot be combined with --filter")

    overrides = dict(
        accession=accession,
        split=split,
        run_col=run_col,
        quant_col=quant_col,
        aggr_by=aggr_by,
        aggr_function=aggr_function,
        logtransform=False if no_log else None,
        base=base,
        normalisation=normalisation,
        smallest_unique_groups=False if no_smallest_unique_groups else None,
        filter=[] if no_filter else (list(filter_columns) or None),
        filter_symbol=filter_symbol,
        useful_properties=list(useful_properties) or None,
        min_identified=min_identified,
        column_types=column_types,
        exp_annotation=exp_annotation,
        type_annot=type_annot,
        annotation_column_types=annotation_column_types,
    )

    try:
        config = load_config(config_path) if config_path else preset.lower()
        processed = preprocess_file(input_path, output, config, **overrides)
    except LfqPrepError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Preprocessed table ({len(processed)} rows) saved to: {output}")
