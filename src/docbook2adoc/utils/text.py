#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/utils/text.py
"""Text normalization helpers shared by the DocBook visitor.

DocBook sources frequently contain typographic characters (curly quotes,
dashes, arrows) that AsciiDoc would generate itself from plain ASCII
replacement syntax. These helpers turn such characters back into that
syntax and manage the whitespace of text nodes.
"""

from __future__ import annotations

import re

from docbook2adoc.constants import ENTITY_TABLE, REPLACEMENT_TABLE

# Whitespace as understood by the converter; non-breaking spaces are content.
ASCII_WHITESPACE = " \t\n\v\f\r\0"

_LEADING_ENDLINES_RE = re.compile(r"\A\n+ *")
_WRAPPED_INDENT_RE = re.compile(r"\n[ \t]*")
_TRAILING_ENDLINES_RE = re.compile(r"\n+\Z")
_SENTENCE_END_RE = re.compile(r"(?:^|\b)\.[ \t]+(?!\n?\Z)", re.MULTILINE)
_LEADING_DOTS_RE = re.compile(r"\A(\.+)")


def rstrip(text: str) -> str:
    """Strip trailing ASCII whitespace."""
    return text.rstrip(ASCII_WHITESPACE)


def lstrip(text: str) -> str:
    """Strip leading ASCII whitespace."""
    return text.lstrip(ASCII_WHITESPACE)


def strip(text: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return text.strip(ASCII_WHITESPACE)


def is_blank(text: str | None) -> bool:
    """Return True when ``text`` is None or holds only whitespace."""
    return not text or not rstrip(text)


def reverse_subs(text: str) -> str:
    """Undo the character replacements AsciiDoc applies when rendering.

    Parameters
    ----------
    text : str
        Raw text content from the source document

    Returns
    -------
    str
        Text with typographic characters mapped back to AsciiDoc
        replacement syntax and reserved sequences escaped

    Examples
    --------
        >>> reverse_subs("Wait… “quoted”")
        'Wait... "`quoted`"'

    """
    if not text:
        return text

    text = text.translate(ENTITY_TABLE)
    for sequence, replacement in REPLACEMENT_TABLE.items():
        text = text.replace(sequence, replacement)
    return text


def strip_whitespace(text: str, preserve_line_wrap: bool = False) -> str:
    """Collapse the indentation and line breaks of a text node.

    Leading newlines are dropped, every newline together with the
    indentation that follows it becomes a single space (or stays a plain
    newline when ``preserve_line_wrap`` is set) and trailing newlines are
    removed. Text made only of whitespace becomes empty.

    Parameters
    ----------
    text : str
        Text node content
    preserve_line_wrap : bool, default False
        Keep line breaks instead of joining lines with spaces

    Returns
    -------
    str
        Normalized text

    """
    if not strip(text):
        return ""
    text = _LEADING_ENDLINES_RE.sub("", text)
    text = _WRAPPED_INDENT_RE.sub("\n" if preserve_line_wrap else " ", text)
    return _TRAILING_ENDLINES_RE.sub("", text)


def unwrap_text(text: str) -> str:
    """Join a wrapped string into a single line, dropping the indentation."""
    return _WRAPPED_INDENT_RE.sub("", text)


def split_sentences(text: str) -> str:
    """Break text after each sentence-ending period."""
    return _SENTENCE_END_RE.sub(".\n", text)


def lazy_quote(text: str | None, seek: str = ",") -> str | None:
    """Wrap ``text`` in double quotes when it contains ``seek``.

    Examples
    --------
        >>> lazy_quote("Apples, Oranges")
        '"Apples, Oranges"'
        >>> lazy_quote("Apples")
        'Apples'

    """
    if text and seek in text:
        return f'"{text}"'
    return text


def escape_table_cell(text: str) -> str:
    r"""Escape the AsciiDoc cell separator.

    Examples
    --------
        >>> escape_table_cell("a|b")
        'a\\|b'

    """
    return text.replace("|", "\\|")


def split_lines(text: str) -> list[str]:
    r"""Split text into lines, dropping trailing empty lines.

    Examples
    --------
        >>> split_lines("a\n\nb\n\n")
        ['a', '', 'b']
        >>> split_lines("")
        []

    """
    lines = text.split("\n")
    while lines and not lines[-1]:
        lines.pop()
    return lines


def strip_indentation(line: str) -> str:
    """Remove the leading blanks of a single line."""
    return line.lstrip(" \t")


def passthrough_leading_dots(text: str) -> str:
    """Protect dots at the start of a line from being read as a block title."""
    return _LEADING_DOTS_RE.sub(r"$$\1$$", text, count=1)
