"""Command-line interface for the docbook2adoc converter.

Examples
--------
Convert a book, writing ``book.adoc`` next to it:
    $ docbook2adoc book.xml

Choose the output file:
    $ docbook2adoc book.xml --out manual.adoc

Print to standard output with one sentence per line:
    $ docbook2adoc chapter.xml --stdout --sentence-per-line

Declare document attributes:
    $ docbook2adoc book.xml -a sourcedir=src/main/java -a experimental

Convert several files and show a summary:
    $ docbook2adoc docs/*.xml --rich

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from docbook2adoc.api import convert, convert_file
from docbook2adoc.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_USAGE_ERROR,
    build_options,
    create_parser,
)
from docbook2adoc.exceptions import Docbook2AdocError, FileAccessError, FileNotFoundError
from docbook2adoc.logging_utils import configure_logging
from docbook2adoc.options import DocBookOptions

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _print_to_stdout(input_path: Path, options: DocBookOptions) -> None:
    if not input_path.is_file():
        raise FileNotFoundError(str(input_path))
    try:
        source = input_path.read_bytes()
    except OSError as e:
        raise FileAccessError(str(input_path), original_error=e) from e
    print(convert(source, options, base_dir=input_path.parent))


def _print_summary(results: list[tuple[str, str, Optional[str]]]) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console(stderr=True)
    table = Table(title="Conversion Summary")
    table.add_column("Input", style="cyan", no_wrap=False)
    table.add_column("Output", style="green", no_wrap=False)
    table.add_column("Status", style="white")

    for input_name, output_name, error in results:
        status = f"[red][X] {error}[/red]" if error else "[green][OK][/green]"
        table.add_row(input_name, output_name, status)

    console.print(table)


def main(args: list[str] | None = None) -> int:
    """Run the ``docbook2adoc`` command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        0 on success, 1 when any conversion failed, 2 on invalid usage

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.out and len(parsed_args.input) > 1:
        print("Error: --out can only be used with a single input file", file=sys.stderr)
        return EXIT_USAGE_ERROR

    _setup_logging_level(parsed_args)

    try:
        options = build_options(parsed_args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    results: list[tuple[str, str, Optional[str]]] = []
    exit_code = EXIT_SUCCESS
    for input_name in parsed_args.input:
        input_path = Path(input_name)
        try:
            if parsed_args.stdout:
                _print_to_stdout(input_path, options)
                output_name = "<stdout>"
            else:
                output_name = str(convert_file(input_path, options, output_path=parsed_args.out))
        except Docbook2AdocError as e:
            logger.error("Failed to convert %s: %s", input_path, e)
            results.append((input_name, "", e.message))
            exit_code = EXIT_ERROR
        else:
            results.append((input_name, output_name, None))

    if parsed_args.rich:
        _print_summary(results)

    return exit_code


__all__ = ["main", "create_parser"]
