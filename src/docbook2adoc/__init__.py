"""docbook2adoc - Convert DocBook XML documents to AsciiDoc.

docbook2adoc walks a DocBook 4 or DocBook 5 tree in a single depth-first
pass and writes the equivalent AsciiDoc: document headers, sections,
lists, tables, admonitions, program listings, inline formatting, index
terms, manual page synopses and ``condition`` attributes (as ``ifdef``
blocks). Cross-document ``xi:include`` references are converted into
separate ``.adoc`` files and included from the parent document.

Elements without an AsciiDoc counterpart are kept in the output as
comment blocks and reported as warnings through :mod:`logging`.

Requirements
------------
- Python 3.10+
- lxml

Examples
--------
Convert a string:

    >>> from docbook2adoc import convert
    >>> print(convert("<article><info><title>Notes</title></info><para>Hi</para></article>"))
    = Notes
    <BLANKLINE>
    Hi

Convert a file, writing ``guide.adoc`` next to it:

    >>> from docbook2adoc import DocBookOptions, convert_file
    >>> convert_file("guide.xml", DocBookOptions(sentence_per_line=True))
    PosixPath('guide.adoc')

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from docbook2adoc.api import convert, convert_file
from docbook2adoc.exceptions import (
    Docbook2AdocError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from docbook2adoc.options import DocBookOptions
from docbook2adoc.visitor import DocBookVisitor

__all__ = [
    "__version__",
    "convert",
    "convert_file",
    "DocBookOptions",
    "DocBookVisitor",
    # Exceptions
    "Docbook2AdocError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "FileNotFoundError",
    "FileAccessError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
]
