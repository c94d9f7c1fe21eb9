"""The major exported API functions for DocBook conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/docbook2adoc/api.py
import logging
from pathlib import Path
from typing import Optional, Union

from docbook2adoc.constants import ASCIIDOC_EXTENSION
from docbook2adoc.exceptions import FileAccessError, FileNotFoundError, InvalidOptionsError, OutputWriteError
from docbook2adoc.options import DocBookOptions
from docbook2adoc.utils.decorators import debug_timer
from docbook2adoc.utils.tree import parse_xml
from docbook2adoc.visitor import DocBookVisitor

logger = logging.getLogger(__name__)


def _validate_options(options: Optional[DocBookOptions]) -> DocBookOptions:
    if options is None:
        return DocBookOptions()
    if not isinstance(options, DocBookOptions):
        raise InvalidOptionsError(DocBookOptions, type(options))
    return options


def convert(
    source: Union[str, bytes],
    options: Optional[DocBookOptions] = None,
    base_dir: Union[str, Path, None] = None,
) -> str:
    """Convert a DocBook document to AsciiDoc text.

    Parameters
    ----------
    source : str or bytes
        DocBook XML document
    options : DocBookOptions, optional
        Conversion options; defaults are used when omitted
    base_dir : str or Path, optional
        Directory against which ``xi:include`` references are resolved.
        Relative references are resolved against the working directory
        when omitted.

    Returns
    -------
    str
        The AsciiDoc document, lines joined with ``"\\n"``

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a DocBookOptions instance
    ParsingError
        If the source holds no root element

    Examples
    --------
        >>> print(convert("<section><title>Intro</title><para>Hello</para></section>"))
        <BLANKLINE>
        = Intro
        <BLANKLINE>
        Hello

    """
    options = _validate_options(options)

    with debug_timer(logger, "Parsing (docbook)"):
        root = parse_xml(source)

    visitor = DocBookVisitor(options, base_dir=Path(base_dir) if base_dir is not None else None)
    with debug_timer(logger, "Rendering (asciidoc)"):
        return visitor.render(root)


def convert_file(
    input_path: Union[str, Path],
    options: Optional[DocBookOptions] = None,
    output_path: Union[str, Path, None] = None,
) -> Path:
    """Convert a DocBook file and write the AsciiDoc next to it.

    Parameters
    ----------
    input_path : str or Path
        DocBook source file
    options : DocBookOptions, optional
        Conversion options
    output_path : str or Path, optional
        Destination file. Defaults to the input path with its suffix
        replaced by ``.adoc`` (or ``.adoc`` appended when it has none).

    Returns
    -------
    Path
        The file that was written

    Raises
    ------
    FileNotFoundError
        If the input file does not exist
    FileAccessError
        If the input file cannot be read
    ParsingError
        If the input holds no root element
    OutputWriteError
        If the output file cannot be written

    """
    input_path = Path(input_path)
    if not input_path.is_file():
        raise FileNotFoundError(str(input_path))

    try:
        source = input_path.read_bytes()
    except OSError as e:
        raise FileAccessError(str(input_path), original_error=e) from e

    logger.info("Converting %s", input_path)
    text = convert(source, options, base_dir=input_path.parent)

    if output_path is None:
        output_path = input_path.with_suffix(ASCIIDOC_EXTENSION)
    output_path = Path(output_path)

    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(
            f"Failed to write output file: {output_path}", output_path=str(output_path), original_error=e
        ) from e

    logger.debug("Wrote %s", output_path)
    return output_path
