"""
CLI command writing an example configuration file.
"""

import click


@click.command("example-config", short_help="Write an example configuration file.")
@click.option(
    "-o",
    "--output",
    help="Output file (.yaml, .yml or .json)",
    required=True,
    type=click.Path(dir_okay=False),
)
@click.option(
    "--format",
    "file_format",
    help="File format; inferred from the extension by default",
    type=click.Choice(["yaml", "json"], case_sensitive=False),
    default=None,
)
def example_config(output: str, file_format: str) -> None:
    """
    Write an example preprocessing configuration with every parameter.

    The file can be edited and passed to ``lfqprep preprocess --config``.
    """
    from lfqprep.preprocessing.config_io import generate_example_config

    generate_example_config(output, format=file_format.lower() if file_format else None)
    click.echo(f"Example configuration saved to: {output}")
