"""
Command‑line interface for recountmeta.
Reads a sample metadata table and splits its GEO characteristics into columns.
"""

import click
import logging
import sys
import typing

from stairval.notepad import create_notepad

from .characteristics import (
    DefaultCharacteristicsParser,
    InputValidationError,
    add_characteristics,
    combine_rows,
)
from .expressions import MalformedExpressionError
from .loader import load_metadata_table


@click.group()
def main():
    """recountmeta: structure GEO sample characteristics from metadata tables."""
    pass


@main.command(name="parse-characteristics")
@click.option(
    "-i",
    "--input-path",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="sample metadata table (.tsv, .txt, .csv or .xlsx) with a 'characteristics' column",
)
@click.option(
    "-o",
    "--output-path",
    "output_path",
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help="where to write the TSV result (default: stdout)",
)
@click.option(
    "--delimiter",
    default=None,
    type=str,
    help="treat characteristics as plain text split on this delimiter instead of list literals",
)
@click.option("--append/--no-append", default=False, help="Keep the original columns next to the parsed ones.")
@click.option("--verbose", is_flag=True, help="Log parsing steps to stderr")
@click.option(
    "--log-file",
    "log_file_path",
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help="append log messages to this file",
)
def parse_characteristics(
    input_path: str,
    output_path: typing.Optional[str],
    delimiter: typing.Optional[str],
    append: bool,
    verbose: bool,
    log_file_path: typing.Optional[str],
):
    """
    Load the table, split each sample's characteristics on ": " and write one
    column per characteristic key. Samples without "key: value" structure keep
    their text in a single 'characteristics' column.
    """
    _configure_logging(verbose, log_file_path)
    logging.info(f"Beginning parse of '{input_path}'")

    try:
        table = load_metadata_table(input_path)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    logging.debug(f"Loaded {len(table)} samples with columns {list(table.columns)}")

    parser = DefaultCharacteristicsParser(delimiter)
    notepad = create_notepad("characteristics")
    try:
        if append:
            result = add_characteristics(table, parser, notepad)
        else:
            result = combine_rows(parser.parse(table, notepad), index=table.index)
    except (InputValidationError, MalformedExpressionError) as e:
        logging.error(f"Failed to parse '{input_path}': {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _report_issues(notepad)

    tsv = result.to_csv(sep="\t", index=False)
    if output_path:
        with open(output_path, "w", encoding="utf-8") as out_f:
            out_f.write(tsv)
    else:
        click.echo(tsv, nl=False)

    derived_columns = len(result.columns) - (len(table.columns) if append else 0)
    click.echo(
        f"Parsed {len(result)} samples into {derived_columns} columns",
        err=output_path is None,
    )


def _configure_logging(verbose: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )


def _report_issues(notepad):
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo(click.style("Warnings found while parsing:", fg="yellow"), err=True)
        for w in notepad.warnings():
            click.echo(f"- {w.message}", err=True)


if __name__ == "__main__":
    main()
