#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/cli/builder.py
"""Build the argument parser from the DocBookOptions field metadata.

Each dataclass field becomes one command line option. The field's
``metadata`` supplies the help text and, where the flag differs from the
field name, the ``cli_name`` (and optional ``cli_short``) to use.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import Any, Mapping

from docbook2adoc import __version__
from docbook2adoc.cli.custom_actions import (
    TrackingAppendAction,
    TrackingStoreAction,
    TrackingStoreFalseAction,
    TrackingStoreTrueAction,
)
from docbook2adoc.options import DocBookOptions

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_attribute(value: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` document attribute argument.

    A bare ``NAME`` declares the attribute with an empty value.

    Raises
    ------
    argparse.ArgumentTypeError
        If the name is empty or contains whitespace

    Examples
    --------
        >>> parse_attribute("sourcedir=src/main")
        ('sourcedir', 'src/main')
        >>> parse_attribute("experimental")
        ('experimental', '')

    """
    name, _, attr_value = value.partition("=")
    name = name.strip()
    if not name or any(ch.isspace() for ch in name):
        raise argparse.ArgumentTypeError(f"invalid document attribute {value!r}, expected NAME=VALUE")
    return name, attr_value.strip()


def _add_option_argument(parser: argparse.ArgumentParser, field: dataclasses.Field) -> None:
    metadata: Mapping[str, Any] = field.metadata
    flag = "--" + metadata.get("cli_name", field.name.replace("_", "-"))
    option_strings = [metadata["cli_short"], flag] if "cli_short" in metadata else [flag]
    help_text = metadata.get("help")

    if field.type in (bool, "bool"):
        if field.default is True:
            parser.add_argument(
                *option_strings, dest=field.name, action=TrackingStoreFalseAction, default=True, help=help_text
            )
        else:
            parser.add_argument(
                *option_strings, dest=field.name, action=TrackingStoreTrueAction, default=False, help=help_text
            )
    elif field.name == "attributes":
        parser.add_argument(
            *option_strings,
            dest=field.name,
            action=TrackingAppendAction,
            type=parse_attribute,
            metavar="NAME=VALUE",
            help=help_text,
        )
    else:
        parser.add_argument(
            *option_strings,
            dest=field.name,
            action=TrackingStoreAction,
            default=field.default,
            choices=metadata.get("choices"),
            help=f"{help_text} (default: {field.default!r})",
        )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``docbook2adoc`` command.

    Returns
    -------
    argparse.ArgumentParser
        Parser whose conversion option destinations match the
        DocBookOptions field names

    """
    parser = argparse.ArgumentParser(
        prog="docbook2adoc",
        description="Convert DocBook XML documents to AsciiDoc.",
        epilog="Every option can also be set with a DOCBOOK2ADOC_<OPTION> environment variable.",
    )
    parser.add_argument("input", nargs="+", help="DocBook XML file(s) to convert")
    parser.add_argument(
        "-o",
        "--out",
        action=TrackingStoreAction,
        help="Output file (single input only); defaults to the input path with an .adoc suffix",
    )
    parser.add_argument(
        "--stdout", action=TrackingStoreTrueAction, help="Write the converted text to standard output"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    core = parser.add_argument_group("Conversion options")
    advanced = parser.add_argument_group("Advanced conversion options")
    for field in dataclasses.fields(DocBookOptions):
        group = advanced if field.metadata.get("importance") == "advanced" else core
        _add_option_argument(group, field)

    output = parser.add_argument_group("Logging and output")
    output.add_argument(
        "--log-level",
        action=TrackingStoreAction,
        default="WARNING",
        choices=_LOG_LEVELS,
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    output.add_argument("--log-file", action=TrackingStoreAction, help="Also write log messages to this file")
    output.add_argument(
        "--trace", action=TrackingStoreTrueAction, help="Debug logging with timestamps and logger names"
    )
    output.add_argument("--rich", action=TrackingStoreTrueAction, help="Print a summary table of the conversions")
    return parser


def build_options(parsed_args: argparse.Namespace) -> DocBookOptions:
    """Create DocBookOptions from parsed arguments.

    Raises
    ------
    ValueError
        If an option value is rejected by DocBookOptions validation

    """
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(DocBookOptions):
        value = getattr(parsed_args, field.name, None)
        if field.name == "attributes":
            value = dict(value or [])
        if value is not None:
            kwargs[field.name] = value
    return DocBookOptions(**kwargs)
