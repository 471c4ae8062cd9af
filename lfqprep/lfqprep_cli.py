"""
CLI entry point for the lfqprep package.
"""

import logging
from pathlib import Path

import click

from lfqprep.commands.example_config import example_config
from lfqprep.commands.preprocess import preprocess
from lfqprep.core.logger import DEFAULT_FORMAT

import lfqprep

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

LOG_LEVELS = ["debug", "info", "warn"]
LOG_LEVELS_TO_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARN,
}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(
    version=lfqprep.__version__,
    package_name="lfqprep",
    message="%(package)s %(version)s",
)
@click.option(
    "-v",
    "--log-level",
    type=click.Choice(LOG_LEVELS, False),
    default="info",
    help="Set the logging level.",
)
@click.option(
    "--log-file",
    type=click.Path(writable=True, path_type=Path),
    required=False,
    help="Write log to this file.",
)
def cli(log_level: str, log_file: Path):
    """
    lfqprep - Preprocessing of label-free LC-MS proteomics data.

    Aggregate, log-transform, normalize and filter long-format peptide
    quantification tables (Skyline, Spectronaut or generic exports) before
    protein-level statistical modelling.
    """
    logging.basicConfig(
        format=DEFAULT_FORMAT,
        level=LOG_LEVELS_TO_LEVELS[log_level.lower()],
    )
    logging.captureWarnings(True)

    if log_file:
        if not log_file.parent.exists():
            log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)
        handler.setLevel(LOG_LEVELS_TO_LEVELS[log_level.lower()])
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logging.getLogger().addHandler(handler)


cli.add_command(preprocess)
cli.add_command(example_config)


def main():
    """
    Main function to run the CLI.
    """
    try:
        cli()
    except SystemExit as e:
        if e.code != 0:
            raise


if __name__ == "__main__":
    main()
