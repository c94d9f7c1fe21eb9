#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/utils/ids.py
"""Anchor id helpers.

AsciiDoc assigns every section an implicit id derived from its title. The
functions here reproduce that derivation so explicit DocBook ids that would
be identical to the implicit one can be left out of the output.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from docbook2adoc.constants import XML_NAMESPACE

if TYPE_CHECKING:
    from lxml import etree

    from docbook2adoc.options import DocBookOptions

_INVALID_ID_CHARS_RE = re.compile(r"&(?:[^\W\d_]+|#\d+|#x[0-9A-Za-z]+);|\W+?")


def generate_id(title: str, id_prefix: str = "_", id_separator: str = "_") -> str:
    """Derive the implicit section id AsciiDoc would assign to ``title``.

    Parameters
    ----------
    title : str
        Section title text
    id_prefix : str, default "_"
        Prefix prepended to the id
    id_separator : str, default "_"
        Replacement for runs of characters that are not allowed in ids

    Returns
    -------
    str
        The generated id

    Examples
    --------
        >>> generate_id("First Section")
        '_first_section'
        >>> generate_id("What's new?", id_prefix="", id_separator="-")
        'what-s-new'

    """
    gen_id = id_prefix + _INVALID_ID_CHARS_RE.sub(id_separator, title.lower())
    if id_separator:
        gen_id = re.sub(f"(?:{re.escape(id_separator)})+", id_separator, gen_id)
        if gen_id.endswith(id_separator):
            gen_id = gen_id[: -len(id_separator)]
        if not id_prefix:
            while gen_id.startswith(id_separator):
                gen_id = gen_id[len(id_separator) :]
    return gen_id


def normalize_id(raw_id: str, id_prefix: str = "_", id_separator: str = "_") -> str:
    """Normalize an explicit source id into AsciiDoc id conventions.

    Examples
    --------
        >>> normalize_id("Some-Question")
        '_some_question'

    """
    normalized = raw_id.lower().replace("_", id_separator).replace("-", id_separator)
    if not normalized.startswith(id_prefix):
        normalized = id_prefix + normalized
    return normalized


def resolve_id(node: etree._Element, options: DocBookOptions) -> str | None:
    """Return the id of ``node`` (``id`` or ``xml:id``), normalized if requested."""
    raw_id = node.get("id") or node.get(f"{{{XML_NAMESPACE}}}id")
    if not raw_id:
        return None
    if options.normalize_ids:
        return normalize_id(raw_id, options.id_prefix, options.id_separator)
    return raw_id
