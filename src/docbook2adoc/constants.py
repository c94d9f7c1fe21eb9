#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the docbook2adoc library.

This module centralizes the default option values and the static, read-only
lookup tables shared by every conversion run.

Constants are organized by category:
1. Type Definitions - Literal types used by the options
2. Option Defaults - Default values for DocBookOptions fields
3. Text Normalization - Entity and replacement tables
4. Element Families - DocBook element names grouped by handler shape
5. Output Fragments - Fixed AsciiDoc snippets emitted by the converter
6. File Extensions - Input and output suffixes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

EmphasisQuoteChar = Literal["_", "*"]

# =============================================================================
# Option Defaults
# =============================================================================

DEFAULT_ID_PREFIX = "_"
DEFAULT_ID_SEPARATOR = "_"
DEFAULT_NORMALIZE_IDS = True
DEFAULT_COMPAT_MODE = False
DEFAULT_SENTENCE_PER_LINE = False
DEFAULT_PRESERVE_LINE_WRAP = False
DEFAULT_DELIMIT_SOURCE = True
DEFAULT_EMPHASIS_QUOTE_CHAR: EmphasisQuoteChar = "_"

# =============================================================================
# Text Normalization
# =============================================================================

# Characters AsciiDoc produces from its own replacement syntax, mapped back to
# that syntax so the rendered output is unchanged.
ENTITY_TABLE: dict[int, str] = {
    169: "(C)",
    174: "(R)",
    8201: " ",
    8212: "--",
    8216: "'`",
    8217: "`'",
    8220: '"`',
    8221: '`"',
    8230: "...",
    8482: "(TM)",
    8592: "<-",
    8594: "->",
    8656: "<=",
    8658: "=>",
}

REPLACEMENT_TABLE: dict[str, str] = {
    ":: ": "{two-colons} ",
}

# =============================================================================
# Element Families
# =============================================================================

PARA_NAMES = frozenset({"para", "simpara"})

ADMONITION_NAMES = frozenset({"note", "tip", "warning", "caution", "important"})

NORMAL_SECTION_NAMES = frozenset(
    {
        "section",
        "simplesect",
        "sect1",
        "sect2",
        "sect3",
        "sect4",
        "sect5",
        "refsection",
        "refsect1",
        "refsect2",
        "refsect3",
    }
)

SPECIAL_SECTION_NAMES = frozenset({"abstract", "appendix", "bibliography", "glossary", "preface"})

DOCUMENT_NAMES = frozenset({"article", "book", "refentry"})

ANONYMOUS_LITERAL_NAMES = frozenset({"abbrev", "acronym", "code", "database", "function", "literal", "tag"})

NAMED_LITERAL_NAMES = frozenset(
    {
        "application",
        "organization",
        "classname",
        "constant",
        "envar",
        "exceptionname",
        "interfacename",
        "methodname",
        "option",
        "parameter",
        "property",
        "replaceable",
        "type",
        "varname",
        "prompt",
        "command",
        "userinput",
        "computeroutput",
    }
)

LITERAL_NAMES = ANONYMOUS_LITERAL_NAMES | NAMED_LITERAL_NAMES

FORMATTING_NAMES = LITERAL_NAMES | {"emphasis"}

KEYWORD_NAMES = frozenset({"package", "firstterm", "citetitle"})

PATH_NAMES = frozenset({"directory", "filename", "systemitem"})

UI_NAMES = frozenset({"guibutton", "guilabel", "menuchoice", "guimenu", "keycap"})

MENU_ITEM_NAMES = ("guimenu", "guisubmenu", "guimenuitem")

LIST_NAMES = frozenset({"itemizedlist", "orderedlist", "variablelist", "procedure", "substeps", "stepalternatives"})

# Lists that contribute to the bullet/number marker depth
NESTED_LIST_NAMES = frozenset({"itemizedlist", "orderedlist", "procedure", "substeps", "stepalternatives"})

# Block elements after which trailing text starts on a fresh line
SPECIAL_BLOCK_NAMES = frozenset({"itemizedlist", "orderedlist", "table", "informaltable"})

TABLE_NAMES = frozenset({"table", "informaltable"})

IGNORED_NAMES = frozenset({"title", "subtitle", "toc"})

# Blocks that may sit inside a paragraph; a paragraph holding one cannot be run in
EMBEDDED_BLOCK_NAMES = frozenset(
    {
        "screen",
        "programlisting",
        "literallayout",
        "funcsynopsis",
        "figure",
        "mediaobject",
        "screenshot",
        "table",
        "informaltable",
        "example",
        "informalexample",
        "blockquote",
        "sidebar",
    }
    | LIST_NAMES
    | ADMONITION_NAMES
)

# List item children that follow the previous child without a continuation marker
UNJOINED_ITEM_NAMES = frozenset({"literallayout", "itemizedlist", "orderedlist"})

# Named literals rendered with a role and a marker other than the plain backtick
NAMED_LITERAL_FORMS: dict[str, tuple[str, str]] = {
    "envar": ("[var]", "`"),
    "organization": ("[org]", "_"),
    "application": ("[app]", "`"),
    "prompt": ("[prompt]", "#"),
    "option": ("[opt]", "*"),
    "command": ("[cmd]", "*"),
    "computeroutput": ("[output]", "`"),
    "userinput": ("[ui]", "`"),
    "replaceable": ("[rep]", "_"),
}

# Parents under which a named literal drops its role
ROLELESS_LITERAL_PARENTS: dict[str, frozenset[str]] = {
    "option": frozenset({"term"}),
    "command": frozenset({"cmdsynopsis"}),
    "replaceable": frozenset({"arg", "term"}),
}

# =============================================================================
# Output Fragments
# =============================================================================

INDEX_PLACEHOLDER_LINES: tuple[str, ...] = (
    "ifdef::backend-docbook[]",
    "[index]",
    "== Index",
    "// Generated automatically by the DocBook toolchain.",
    "endif::backend-docbook[]",
)

BOOK_HEADER_ATTRIBUTES: tuple[str, ...] = (
    ":doctype: book",
    ":sectnums:",
    ":toc: left",
    ":icons: font",
    ":experimental:",
)

ARABIC_NUMERATION = "arabic"

# =============================================================================
# File Extensions
# =============================================================================

ASCIIDOC_EXTENSION = ".adoc"
DOCBOOK_EXTENSIONS: tuple[str, ...] = (".xml", ".dbk", ".docbook")

# =============================================================================
# Namespaces
# =============================================================================

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
DOCBOOK_NAMESPACE = "http://docbook.org/ns/docbook"
XINCLUDE_NAMESPACE = "http://www.w3.org/2001/XInclude"
