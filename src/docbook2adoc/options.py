#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/docbook2adoc/options.py
"""Configuration options for DocBook to AsciiDoc conversion.

A single immutable snapshot of these options is read by every handler
during a conversion run. Use :meth:`CloneFrozenMixin.create_updated` to
derive a modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from docbook2adoc.constants import (
    DEFAULT_COMPAT_MODE,
    DEFAULT_DELIMIT_SOURCE,
    DEFAULT_EMPHASIS_QUOTE_CHAR,
    DEFAULT_ID_PREFIX,
    DEFAULT_ID_SEPARATOR,
    DEFAULT_NORMALIZE_IDS,
    DEFAULT_PRESERVE_LINE_WRAP,
    DEFAULT_SENTENCE_PER_LINE,
    EmphasisQuoteChar,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DocBookOptions(CloneFrozenMixin):
    """Configuration options for DocBook-to-AsciiDoc conversion.

    Parameters
    ----------
    id_prefix : str, default "_"
        Prefix prepended to normalized explicit ids. Also emitted as the
        ``:idprefix:`` document attribute when it differs from the default.
    id_separator : str, default "_"
        Word separator used in generated and normalized ids. Emitted as
        ``:idseparator:`` when it differs from the default.
    normalize_ids : bool, default True
        Whether explicit ``id``/``xml:id`` values are lowercased, have their
        separators translated and receive the id prefix.
    compat_mode : bool, default False
        Emit ``:compat-mode:`` in the book header.
    attributes : Mapping[str, str], default {}
        Extra document attributes. Each one is written to the header, and a
        link whose URL equals an attribute value is rewritten to ``{name}``.
    sentence_per_line : bool, default False
        Break paragraph text after each sentence.
    preserve_line_wrap : bool, default False
        Keep the source line breaks of paragraph text instead of joining
        lines with spaces. Ignored when ``sentence_per_line`` is set.
    delimit_source : bool, default True
        Always wrap program listings in ``----`` delimiters.
    emphasis_quote_char : {"_", "*"}, default "_"
        Marker used for plain (non-strong) emphasis.

    """

    id_prefix: str = field(
        default=DEFAULT_ID_PREFIX,
        metadata={"help": "Prefix added to normalized element ids", "importance": "core"},
    )
    id_separator: str = field(
        default=DEFAULT_ID_SEPARATOR,
        metadata={"help": "Word separator used in generated ids", "importance": "core"},
    )
    normalize_ids: bool = field(
        default=DEFAULT_NORMALIZE_IDS,
        metadata={
            "help": "Lowercase explicit ids and apply the id prefix and separator",
            "cli_name": "no-normalize-ids",
            "importance": "core",
        },
    )
    compat_mode: bool = field(
        default=DEFAULT_COMPAT_MODE,
        metadata={"help": "Emit the :compat-mode: attribute in the document header", "importance": "advanced"},
    )
    attributes: Mapping[str, str] = field(
        default_factory=dict,
        metadata={
            "help": "Document attribute to declare, repeatable (NAME=VALUE)",
            "cli_name": "attribute",
            "cli_short": "-a",
            "importance": "core",
        },
    )
    sentence_per_line: bool = field(
        default=DEFAULT_SENTENCE_PER_LINE,
        metadata={"help": "Place each sentence of a paragraph on its own line", "importance": "core"},
    )
    preserve_line_wrap: bool = field(
        default=DEFAULT_PRESERVE_LINE_WRAP,
        metadata={"help": "Keep the line breaks found in paragraph text", "importance": "advanced"},
    )
    delimit_source: bool = field(
        default=DEFAULT_DELIMIT_SOURCE,
        metadata={
            "help": "Always delimit source listings with ----",
            "cli_name": "no-delimit-source",
            "importance": "advanced",
        },
    )
    emphasis_quote_char: EmphasisQuoteChar = field(
        default=DEFAULT_EMPHASIS_QUOTE_CHAR,
        metadata={"help": "Marker character for plain emphasis", "choices": ["_", "*"], "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is invalid.

        """
        if self.emphasis_quote_char not in ("_", "*"):
            raise ValueError(f"emphasis_quote_char must be '_' or '*', got {self.emphasis_quote_char!r}")

        if any(ch.isspace() for ch in self.id_separator):
            raise ValueError(f"id_separator must not contain whitespace, got {self.id_separator!r}")

        if any(ch.isspace() for ch in self.id_prefix):
            raise ValueError(f"id_prefix must not contain whitespace, got {self.id_prefix!r}")

        for name in self.attributes:
            if not name or any(ch.isspace() for ch in name):
                raise ValueError(f"Invalid document attribute name: {name!r}")

    @property
    def wraps_preserved(self) -> bool:
        """Whether source line breaks in paragraphs are kept."""
        return self.preserve_line_wrap and not self.sentence_per_line
