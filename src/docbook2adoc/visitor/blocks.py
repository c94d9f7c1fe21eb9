#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/visitor/blocks.py
"""Handlers for DocBook block elements.

Block handlers write whole lines: headings, list markers, delimiters and
block attributes. Inline content inside them is rendered by the handlers in
:mod:`docbook2adoc.visitor.inline` and spliced back with
:meth:`~docbook2adoc.visitor.dispatch.DispatchingVisitor.format_text`.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Optional

from lxml import etree

from docbook2adoc.constants import (
    ARABIC_NUMERATION,
    ASCIIDOC_EXTENSION,
    BOOK_HEADER_ATTRIBUTES,
    DEFAULT_ID_PREFIX,
    DEFAULT_ID_SEPARATOR,
    DOCUMENT_NAMES,
    EMBEDDED_BLOCK_NAMES,
    FORMATTING_NAMES,
    LIST_NAMES,
    PARA_NAMES,
    UNJOINED_ITEM_NAMES,
)
from docbook2adoc.exceptions import ParsingError
from docbook2adoc.utils.ids import generate_id, resolve_id
from docbook2adoc.utils.text import (
    is_blank,
    lazy_quote,
    rstrip,
    split_lines,
    strip,
    strip_indentation,
    unwrap_text,
)
from docbook2adoc.utils.tree import (
    Node,
    TextNode,
    child_elements,
    child_nodes,
    child_path,
    descendant_path,
    find_child,
    find_children,
    get_attr,
    is_root,
    local_name,
    node_text,
    parent_name,
    parse_xml,
    previous_element,
    select,
    select_first,
)
from docbook2adoc.visitor.dispatch import DispatchingVisitor
from docbook2adoc.writer import split_directive_lines

logger = logging.getLogger(__name__)

_LEADING_CONTINUATION_RE = re.compile(r"\A\+([^\n])")
_LISTING_DELIMITER_RE = re.compile(r"^-{4,}")
_SECTION_NUMBER_RE = re.compile(r"\d+")


def _to_int(value: str | None) -> int:
    """Read the leading integer of an attribute value, 0 when there is none."""
    if not value:
        return 0
    match = re.match(r"\s*(\d+)", value)
    return int(match.group(1)) if match else 0


class BlockHandlersMixin(DispatchingVisitor):
    """Block-level element handlers.

    Every ``visit_*`` method receives the element and returns ``True`` when
    the dispatcher should traverse its children afterwards.
    """

    # ------------------------------------------------------------------
    # Documents and headers
    # ------------------------------------------------------------------

    def process_doc(self, node: etree._Element) -> bool:
        """Convert a document element (book, article, refentry).

        A DocBook 4 document may carry its title as a direct child instead
        of inside an info block; the header is then written from it.
        """
        if find_child(node, "info", "articleinfo", "bookinfo") is None:
            title = find_child(node, "title")
            if title is not None:
                self.buffer.append_line(f"= {self.text(title) or ''}")
                self.append_header_attributes(local_name(node) == "book")
        self.state.level += 1
        self.traverse_children(node, using_elements=True)
        self.state.level -= 1
        return False

    def visit_info(self, node: etree._Element) -> bool:
        if parent_name(node) in DOCUMENT_NAMES:
            self.process_info(node)
        return False

    def process_info(self, node: etree._Element) -> None:
        """Write the document header: title, authors, revision and attributes."""
        buffer = self.buffer
        title = self.text_at(node, child_path("title"))
        if title is None and node.getparent() is not None:
            title = self.text(find_child(node.getparent(), "title"))
        buffer.append_line(f"= {title or ''}")

        authors = []
        for author_node in select(node, descendant_path("author")):
            personname = select_first(author_node, descendant_path("personname"))
            if personname is not None:
                parts = [strip(self.text(part) or "") for part in child_elements(personname)]
                author = " ".join(part for part in parts if part) if parts else strip(self.text(personname) or "")
            else:
                names = (
                    self.text_at(author_node, descendant_path("firstname")),
                    self.text_at(author_node, descendant_path("surname")),
                )
                author = " ".join(name for name in names if name is not None)
            email = select_first(author_node, descendant_path("email"))
            if email is not None:
                author = f"{author} <{self.text(email)}>"
            if author:
                authors.append(author)
        if authors:
            buffer.append_line("; ".join(authors))

        revision = select_first(node, descendant_path("revhistory", "revnumber"), descendant_path("releaseinfo"))
        date_prefix = f"v{node_text(revision)}, " if revision is not None else ""
        date = find_child(node, "date", "pubdate")
        if date is not None:
            buffer.append_line(f"{date_prefix}{node_text(date)}")

        is_book = local_name(node) == "bookinfo" or parent_name(node) in ("book", "chapter")
        self.append_header_attributes(is_book)

    def append_header_attributes(self, is_book: bool, default_sourcedir: bool = False) -> None:
        """Write the document attribute lines that follow the title."""
        buffer = self.buffer
        options = self.options
        if is_book:
            if options.compat_mode:
                buffer.append_line(":compat-mode:")
            buffer.extend(BOOK_HEADER_ATTRIBUTES)
        if options.id_prefix != DEFAULT_ID_PREFIX:
            buffer.append_line(rstrip(f":idprefix: {options.id_prefix}"))
        if options.id_separator != DEFAULT_ID_SEPARATOR:
            buffer.append_line(rstrip(f":idseparator: {options.id_separator}"))
        if default_sourcedir and "sourcedir" not in options.attributes:
            buffer.append_line(":sourcedir: .")
        for name, value in options.attributes.items():
            buffer.append_line(rstrip(f":{name}: {value}"))

    def visit_part(self, node: etree._Element) -> bool:
        return self.visit_chapter(node)

    def visit_chapter(self, node: etree._Element) -> bool:
        # a document rooted at a chapter is converted like a book
        if is_root(node):
            self.buffer.adjoin_next = True
            self.process_section(node, header=lambda: self.append_header_attributes(True, default_sourcedir=True))
        else:
            self.process_section(node)
        return False

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def process_special_section(self, node: etree._Element) -> bool:
        return self.process_section(node, special=local_name(node))

    def process_section(
        self,
        node: etree._Element,
        special: Optional[str] = None,
        header: Optional[Callable[[], None]] = None,
    ) -> bool:
        """Convert a section into a heading at the current level.

        Parameters
        ----------
        node : etree._Element
            Section element
        special : str, optional
            Style of a special section (appendix, glossary, ...); such
            sections are unnumbered and titled after the style when they
            carry no title
        header : callable, optional
            Writes extra header lines right after the heading

        """
        buffer = self.buffer
        buffer.append_blank_line()
        if special:
            buffer.append_line(":sectnums!:")
            buffer.append_blank_line()
            buffer.append_line(f"[{special}]")

        title_node = self.title_node_of(node)
        rest: list[str] = []
        if title_node is not None:
            title, *rest = self.format_text(title_node) or [""]
            subtitle_node = find_child(node, "subtitle")
            if subtitle_node is None:
                subtitle_node = select_first(node, child_path("info", "subtitle"))
            if subtitle_node is not None:
                subtitle, *subtitle_rest = self.format_text(subtitle_node) or [""]
                if rest:
                    rest[-1] += f": {strip(subtitle)}"
                else:
                    title += f": {strip(subtitle)}"
                rest.extend(subtitle_rest)
        elif special:
            title = special.capitalize()
        else:
            logger.warning("No title found for section node <%s>", local_name(node))
            title = "Unknown Title!"

        self.append_anchor_if_explicit(node, title)
        self.append_ifdef_start_if_condition(title_node)
        buffer.append_line(f"{'=' * self.state.level} {unwrap_text(title)}")
        buffer.extend(rest)
        self.append_ifdef_end_if_condition(title_node)
        if header is not None:
            header()

        abstract = select_first(node, child_path("info", "abstract"))
        if abstract is not None:
            buffer.append_line()
            buffer.append_line("[abstract]")
            buffer.append_line("--")
            for element in child_elements(abstract):
                buffer.append_line()
                self.traverse_children(element)
                buffer.append_line()
            buffer.append_text("--")

        self.state.level += 1
        self.traverse_children(node, using_elements=True)
        self.state.level -= 1

        if special:
            buffer.append_blank_line()
            buffer.append_line(":sectnums:")
        return False

    def append_anchor_if_explicit(self, node: etree._Element, title: str) -> None:
        """Write ``[[id]]`` unless the id matches the one derived from the title."""
        node_id = resolve_id(node, self.options)
        if node_id and node_id != generate_id(title, self.options.id_prefix, self.options.id_separator):
            self.buffer.append_line(f"[[{node_id}]]")

    def visit_bridgehead(self, node: etree._Element) -> bool:
        renderas = node.get("renderas")
        if renderas is None:
            level = self.state.level
        else:
            match = _SECTION_NUMBER_RE.search(renderas)
            level = (int(match.group()) if match else 0) + 1

        self.buffer.append_blank_line()
        self.buffer.append_line("[float]")
        title, *rest = self.format_text(node) or [""]
        self.append_anchor_if_explicit(node, title)
        self.buffer.append_line(f"{'=' * level} {unwrap_text(title)}")
        self.buffer.extend(rest)
        return False

    # ------------------------------------------------------------------
    # Paragraphs and block metadata
    # ------------------------------------------------------------------

    def visit_formalpara(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.append_block_title(node)
        return True

    def visit_para(self, node: etree._Element) -> bool:
        empty_last_line = self.buffer.last_is_empty()
        self.buffer.append_blank_line()
        self.state.last_added_was_special = False
        self.append_block_role(node)
        if not empty_last_line:
            self.buffer.append_blank_line()
        return True

    def visit_simpara(self, node: etree._Element) -> bool:
        empty_last_line = self.buffer.last_is_empty()
        self.buffer.append_blank_line()
        self.append_block_role(node)
        if not empty_last_line:
            self.buffer.append_blank_line()
        return True

    def append_block_title(self, node: etree._Element, prefix: str = "") -> bool:
        """Write the ``.Title`` line of a block and attach the block to it.

        Returns
        -------
        bool
            True if the block has a title

        """
        title_node = self.title_node_of(node)
        if title_node is None:
            return False

        title, *rest = self.format_text(title_node) or [""]
        # a titled see-also list reads as plain text on a bullet, not a caption
        leading_char = "" if parent_name(node) == "itemizedlist" and node.get("role") == "see-also-list" else "."
        self.buffer.append_line(f"{leading_char}{prefix}{unwrap_text(title)}")
        self.buffer.extend(rest)
        self.buffer.adjoin_next = True
        return True

    def append_block_role(self, node: etree._Element) -> bool:
        role = node.get("role")
        if role:
            self.buffer.append_line(f"[.{role}]")
            return True
        return False

    # ------------------------------------------------------------------
    # Admonitions
    # ------------------------------------------------------------------

    def process_admonition(self, node: etree._Element) -> bool:
        """Convert note, tip, warning, caution and important.

        A body made of one plain paragraph becomes the run-in form
        ``NOTE: text``; anything else becomes a delimited example block
        carrying the label as its style.
        """
        buffer = self.buffer
        label = local_name(node).upper()
        if not buffer.continuation:
            buffer.append_blank_line()

        elements = child_elements(node)
        if len(elements) == 1 and self._is_run_in_paragraph(elements[0]):
            buffer.continuation = False
            buffer.adjoin_next = False
            text, *rest = self.format_text(elements[0]) or [""]
            buffer.append_line(f"{label}: {strip(text)}")
            buffer.extend(rest)
            return False

        self.append_block_title(node)
        buffer.append_line(f"[{label}]")
        buffer.append_line("====")
        buffer.adjoin_next = True
        self.traverse_children(node)
        buffer.adjoin_next = False
        buffer.append_line("====")
        return False

    @staticmethod
    def _is_run_in_paragraph(node: etree._Element) -> bool:
        if local_name(node) not in PARA_NAMES:
            return False
        return not any(local_name(child) in EMBEDDED_BLOCK_NAMES for child in child_elements(node))

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def visit_itemizedlist(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.append_block_title(node)
        if self.state.list_depth == 1:
            self.buffer.append_blank_line()
        return True

    def visit_procedure(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.append_block_title(node, prefix="Procedure: ")
        return self.visit_orderedlist(node)

    def visit_substeps(self, node: etree._Element) -> bool:
        return self.visit_orderedlist(node)

    def visit_stepalternatives(self, node: etree._Element) -> bool:
        return self.visit_orderedlist(node)

    def visit_orderedlist(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        numeration = node.get("numeration")
        if numeration and numeration != ARABIC_NUMERATION:
            self.buffer.append_line(f"[{numeration}]")
        if self.state.list_depth == 1:
            self.buffer.append_blank_line()
        return True

    def visit_variablelist(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.append_block_title(node)
        if self.buffer.last_is_empty():
            self.buffer.splice_back(1)
        return True

    def visit_step(self, node: etree._Element) -> bool:
        return self.visit_listitem(node)

    def list_marker(self, node: etree._Element) -> str:
        """Return the item marker for a list item at the current depth."""
        parent = parent_name(node)
        if parent in ("orderedlist", "procedure", "substeps"):
            return "." * self.state.list_depth
        if parent == "stepalternatives":
            return "a."
        return "*" * self.state.list_depth

    def visit_listitem(self, node: etree._Element) -> bool:
        """Convert a list item.

        Items holding only text and inline formatting are written on the
        marker line. Items mixing paragraphs and blocks attach every block
        after the first with a ``+`` list continuation.
        """
        buffer = self.buffer
        self.append_inline(self.list_marker(node))

        children = child_nodes(node)
        if not child_elements(node):
            self._append_item_text(self.format_text(node), join_lines=False)
        elif all(isinstance(child, TextNode) or local_name(child) in FORMATTING_NAMES for child in children):
            self._append_item_text(self.format_text(node), join_lines=True)
        else:
            self._append_mixed_item(children)

        buffer.continuation = False
        if not buffer.last_is_empty():
            buffer.append_blank_line()
        return False

    def _append_item_text(self, text: list[str], join_lines: bool) -> None:
        buffer = self.buffer
        item_text, *rest = text or [""]
        first_line = True
        for line in split_lines(item_text):
            line = strip_indentation(line)
            if not line:
                continue
            if first_line:
                buffer.append_text(f" {line}")
                first_line = join_lines
            else:
                buffer.append_line(f"  {line}")
        if rest:
            buffer.append_line("+")
            buffer.extend(rest)

    def _append_mixed_item(self, children: list[Node]) -> None:
        buffer = self.buffer
        first_line = True
        for position, child in enumerate(children):
            name = local_name(child)
            if isinstance(child, TextNode) and is_blank(child.text):
                continue

            local_continuation = False
            if not (position == 0 or first_line or name in UNJOINED_ITEM_NAMES):
                buffer.append_line("+")
                buffer.continuation = True
                local_continuation = True
                first_line = True

            if name in PARA_NAMES or isinstance(child, TextNode):
                item_text, *rest = self.format_node(child) or [""]
                # the paragraph was appended to the "+" line above
                item_text = _LEADING_CONTINUATION_RE.sub("+\n\\1", item_text)
                if not item_text and not rest:
                    continue
                for line in split_lines(item_text):
                    line = strip_indentation(line)
                    if not line:
                        continue
                    if not first_line:
                        buffer.append_line(f"  {line}")
                    elif local_continuation:
                        buffer.append_line(line)
                    else:
                        buffer.append_text(f" {line}")
                if rest:
                    if buffer.last != "+":
                        buffer.append_line("+")
                    buffer.extend(rest)
            else:
                if name not in FORMATTING_NAMES:
                    if first_line and not local_continuation:
                        # keeps the marker line from being read as an empty item
                        buffer.append_text(" {empty}")
                    if not (local_continuation or name in UNJOINED_ITEM_NAMES):
                        buffer.append_line("+")
                    buffer.continuation = False
                self.visit(child)
                buffer.continuation = True
            first_line = False

    def visit_varlistentry(self, node: etree._Element) -> bool:
        """Convert a variable list entry into a ``term::`` description item."""
        buffer = self.buffer
        buffer.append_blank_line()

        term = find_child(node, "term")
        for text_line in self.format_text(term) if term is not None else []:
            for i, line in enumerate(split_lines(text_line)):
                line = strip_indentation(line)
                if not line:
                    continue
                if i == 0:
                    buffer.append_line(line)
                else:
                    buffer.append_text(f" {line}")
        buffer.append_text("::")

        listitem = find_child(node, "listitem")
        if listitem is None:
            return False

        first_line = True
        for i, child in enumerate(child_elements(listitem)):
            name = local_name(child)
            local_continuation = False
            if not (i == 0 or first_line or name == "literallayout" or name in LIST_NAMES):
                buffer.append_line("+")
                buffer.append_blank_line()
                buffer.continuation = True
                local_continuation = True

            if name in PARA_NAMES:
                if i == 0:
                    buffer.append_blank_line()
                item_text, *rest = self.format_text(child) or [""]
                item_text = _LEADING_CONTINUATION_RE.sub("+\n\\1", item_text)
                if not item_text and not rest:
                    continue
                for line in split_lines(item_text):
                    line = strip_indentation(line)
                    if not line:
                        continue
                    if first_line:
                        buffer.append_text(line)
                        first_line = False
                    else:
                        buffer.append_line(line)
                if rest:
                    if buffer.last != "+":
                        buffer.append_line("+")
                    buffer.extend(rest)
            else:
                if name not in FORMATTING_NAMES:
                    if not (local_continuation or name == "literallayout" or name in LIST_NAMES):
                        buffer.append_line("+")
                    buffer.continuation = False
                self.visit(child)
                buffer.continuation = True
        return False

    # ------------------------------------------------------------------
    # Glossaries and bibliographies
    # ------------------------------------------------------------------

    def visit_glossentry(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        previous = previous_element(node)
        if previous is None or local_name(previous) != "glossentry":
            self.buffer.append_line("[glossary]")
        return True

    def visit_glossterm(self, node: etree._Element) -> bool:
        self.format_append_line(node, "::")
        return False

    def visit_glossdef(self, node: etree._Element) -> bool:
        elements = child_elements(node)
        definition = self.text(elements[0]) if elements else self.text(node)
        self.buffer.append_line(f"  {definition or ''}")
        return False

    def visit_bibliodiv(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.buffer.append_line("[bibliography]")
        return True

    def visit_bibliomisc(self, node: etree._Element) -> bool:
        return True

    def visit_bibliomixed(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.append_inline("- ")
        for child in child_nodes(node):
            name = local_name(child)
            if name == "abbrev":
                self.buffer.append_text(f"[[[{node_text(child)}]]] ")
            elif name == "title":
                self.buffer.append_text(node_text(child))
            else:
                self.visit(child)
        return False

    # ------------------------------------------------------------------
    # Literal blocks
    # ------------------------------------------------------------------

    def visit_literallayout(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        content = rstrip(node_text(node))
        source_lines = split_lines(content)
        if any(not rstrip(line) for line in source_lines):
            self.buffer.append_line("....")
            self.buffer.append_line(content)
            self.buffer.append_line("....")
        else:
            for line in source_lines:
                self.buffer.append_line(f"  {line}")
        return False

    def visit_screen(self, node: etree._Element) -> bool:
        if parent_name(node) != "para":
            self.buffer.append_blank_line()
        content = rstrip(node_text(node))
        if any(_LISTING_DELIMITER_RE.match(line) for line in split_lines(content)):
            self.buffer.append_line("[listing]")
            self.buffer.append_line("....")
            self.buffer.append_line(content)
            self.buffer.append_line("....")
        else:
            self.buffer.append_line("----")
            self.buffer.append_line(content)
            self.buffer.append_line("----")
        return False

    def visit_programlisting(self, node: etree._Element) -> bool:
        """Convert a program listing into a ``[source]`` block."""
        buffer = self.buffer
        language = node.get("language") or node.get("role") or self.options.attributes.get("source-language")
        language_attr = f",{language.lower()}" if language else ""
        linenums = ",linenums" if node.get("linenumbering") == "numbered" else ""

        if parent_name(node) != "para":
            buffer.append_blank_line()
        buffer.append_line(f"[source{language_attr}{linenums}]")

        elements = child_elements(node)
        if elements and local_name(elements[0]) == "include":
            buffer.append_line("----")
            for element in elements:
                buffer.append_line(f"include::{{sourcedir}}/{element.get('href')}[]")
            buffer.append_line("----")
            return False

        source_lines = split_lines(rstrip(node_text(node)))
        source = "\n".join(source_lines)
        if self.options.delimit_source or any(not rstrip(line) for line in source_lines):
            buffer.append_line("----")
            buffer.append_line(source)
            buffer.append_line("----")
        else:
            buffer.append_line(source)
        return False

    # ------------------------------------------------------------------
    # Delimited blocks
    # ------------------------------------------------------------------

    def visit_example(self, node: etree._Element) -> bool:
        return self.process_example(node)

    def visit_informalexample(self, node: etree._Element) -> bool:
        return self.process_example(node)

    def process_example(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.append_block_title(node)
        self._append_delimited(node, "====")
        return False

    def visit_sidebar(self, node: etree._Element) -> bool:
        self.process_compound_block(node, "sidebar", "****")
        return False

    def visit_blockquote(self, node: etree._Element) -> bool:
        self.process_compound_block(node, "quote", "____", attribution=find_child(node, "attribution"))
        return False

    def process_compound_block(
        self,
        node: etree._Element,
        style: str,
        delimiter: str,
        attribution: Optional[etree._Element] = None,
    ) -> None:
        """Write a sidebar or quote block.

        A single paragraph body uses the paragraph form ``[style]`` followed
        by the text; any other body is enclosed in ``delimiter`` lines. An
        attribution becomes the second positional attribute of the style.
        """
        buffer = self.buffer
        buffer.append_blank_line()
        self.append_block_title(node)
        if attribution is not None:
            style = f"{style}, {lazy_quote(strip(self.text(attribution) or ''))}"

        elements = [element for element in child_elements(node) if element is not attribution]
        if elements and local_name(elements[0]) == "title":
            elements = elements[1:]

        if len(elements) == 1 and local_name(elements[0]) in PARA_NAMES:
            buffer.append_line(f"[{style}]")
            # the block title already attached the block
            buffer.adjoin_next = False
            self.format_append_line(elements[0])
            return

        if attribution is not None:
            buffer.append_line(f"[{style}]")
        self._append_delimited(node, delimiter, skip=attribution)

    def _append_delimited(self, node: etree._Element, delimiter: str, skip: Optional[etree._Element] = None) -> None:
        buffer = self.buffer
        buffer.append_line(delimiter)
        buffer.adjoin_next = True
        if skip is None:
            self.traverse_children(node)
        else:
            for child in child_nodes(node):
                if child is not skip:
                    self.visit(child)
        buffer.adjoin_next = False
        buffer.append_line(delimiter)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def visit_table(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.append_block_title(node)
        self.process_table(node)
        return False

    def visit_informaltable(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        self.process_table(node)
        return False

    def process_table(self, node: etree._Element) -> None:
        """Convert a CALS table into an AsciiDoc table.

        The ``cols`` attribute of the table group decides the column count,
        even when the header row has a different number of cells.
        """
        buffer = self.buffer
        tgroup = find_child(node, "tgroup")
        if tgroup is None:
            logger.warning("No <tgroup> found in table! Skipping.")
            return

        numcols = _to_int(tgroup.get("cols"))
        if not numcols:
            first_row = select_first(tgroup, child_path("thead", "row"), child_path("tbody", "row"))
            numcols = len(child_elements(first_row)) if first_row is not None else 0
            logger.warning(
                "Invalid cols attribute %r in table, using %d columns from the first row", tgroup.get("cols"), numcols
            )
        head = find_child(tgroup, "thead")
        head_row = find_child(head, "row") if head is not None else None
        if head_row is not None:
            numheaders = len(child_elements(head_row))
            if numheaders != numcols:
                title_node = find_child(node, "title")
                title = node_text(title_node) if title_node is not None else ""
                logger.warning(
                    "%d columns specified in table '%s', but only %d headers", numcols, title, numheaders
                )

        cols = ["1"] * numcols
        body = find_child(tgroup, "tbody")
        first_row = find_child(body, "row") if body is not None else None
        if first_row is not None:
            for i, cell in enumerate(child_elements(first_row)[:numcols]):
                contents = child_elements(cell)
                if contents and local_name(contents[0]) == "literallayout":
                    cols[i] = f"{cols[i]}*l"

        frame = node.get("frame")
        frame_attr = f', frame="{frame}"' if frame else ""
        table_options = []
        if head is not None:
            table_options.append("header")
        foot = find_child(tgroup, "tfoot")
        if foot is not None:
            table_options.append("footer")
        options_attr = f', options="{",".join(table_options)}"' if table_options else ""

        buffer.append_line(f'[cols="{",".join(cols)}"{frame_attr}{options_attr}]')
        buffer.append_line("|===")
        if head is not None:
            for cell in select(head, child_path("row", "entry")):
                buffer.append_line(f"| {self.text(cell)}")
            buffer.append_blank_line()

        for row in select(tgroup, child_path("tbody", "row")):
            self.append_ifdef_start_if_condition(row)
            buffer.append_blank_line()
            for cell in child_elements(row):
                if local_name(cell) == "literallayout":
                    buffer.append_line(f"|`{self.text(cell)}`")
                else:
                    buffer.append_line("|")
                    self.traverse_children(cell)
            self.append_ifdef_end_if_condition(row)

        if foot is not None:
            for cell in select(foot, child_path("row", "entry")):
                buffer.append_line(f"| {self.text(cell)}")
        buffer.append_line("|===")

    # ------------------------------------------------------------------
    # Figures
    # ------------------------------------------------------------------

    def visit_mediaobject(self, node: etree._Element) -> bool:
        return self.visit_figure(node)

    def visit_screenshot(self, node: etree._Element) -> bool:
        return self.visit_figure(node)

    def visit_figure(self, node: etree._Element) -> bool:
        """Convert a figure, screenshot or media object into a block image."""
        self.buffer.append_blank_line()
        self.append_block_title(node)
        image = select_first(node, descendant_path("imageobject", "imagedata"))
        if image is None:
            elements = child_elements(node)
            logger.warning(
                "Unknown mediaobject <%s>! Skipping.", local_name(elements[0]) if elements else local_name(node)
            )
            return False

        src, alt = self.image_reference(node, image)
        self.buffer.append_blank_line()
        self.buffer.append_line(f"image::{src}[{lazy_quote(alt) or ''}]")
        self.buffer.append_blank_line()
        return False

    # ------------------------------------------------------------------
    # Program synopses
    # ------------------------------------------------------------------

    def visit_funcsynopsis(self, node: etree._Element) -> bool:
        """Convert a C function synopsis into a source block."""
        buffer = self.buffer
        if parent_name(node) != "para":
            buffer.append_blank_line()
        buffer.append_line("[source,c]")
        buffer.append_line("----")

        info = find_child(node, "funcsynopsisinfo")
        if info is not None:
            for line in strip(node_text(info)).splitlines():
                buffer.append_line(strip(line))
            buffer.append_blank_line()

        prototype = find_child(node, "funcprototype")
        if prototype is not None:
            indent = 0
            first = True
            buffer.append_blank_line()
            funcdef = find_child(prototype, "funcdef")
            if funcdef is not None:
                funcdef_text = node_text(funcdef)
                buffer.append_text(funcdef_text)
                indent = len(funcdef_text) + 2

            for paramdef in find_children(prototype, "paramdef"):
                first = self._open_parameter(first, indent)
                buffer.append_text(node_text(paramdef).split("\n", 1)[0])
                params = find_child(paramdef, "funcparams")
                if params is not None:
                    buffer.append_text(f" ({node_text(params)})")

            varargs = find_child(prototype, "varargs")
            if varargs is not None:
                first = self._open_parameter(first, indent)
                buffer.append_text(f"{node_text(varargs)}...")

            buffer.append_text(" (void);" if first else ");")

        buffer.append_line("----")
        return False

    def _open_parameter(self, first: bool, indent: int) -> bool:
        if first:
            self.buffer.append_text(" (")
        else:
            self.buffer.append_text(",")
            self.buffer.append_line(" " * indent)
        return False

    def visit_qandaset(self, node: etree._Element) -> bool:
        """Convert a question and answer set into a ``[qanda]`` list."""
        buffer = self.buffer
        for child in child_elements(node):
            members = child_elements(child) if local_name(child) == "qandadiv" else [child]
            for element in members:
                name = local_name(element)
                if name == "title":
                    buffer.append_line(f".{node_text(element)}")
                    buffer.append_blank_line()
                    buffer.append_line("[qanda]")
                elif name == "qandaentry":
                    self.process_qandaentry(element)
        return False

    def process_qandaentry(self, node: etree._Element) -> None:
        buffer = self.buffer
        question = select_first(node, child_path("question", "para"))
        if question is None:
            logger.warning("Missing question in qandaset! Skipping.")
            return

        entry_id = resolve_id(node, self.options)
        if entry_id:
            buffer.append_line(f"[[{entry_id}]]")
        self.format_append_line(question, "::")

        answer = find_child(node, "answer")
        if answer is not None:
            first = True
            for child in child_nodes(answer):
                if is_blank(node_text(child)):
                    continue
                if not first:
                    buffer.append_line("+")
                    buffer.continuation = True
                first = False
                self.visit(child)
            buffer.continuation = False
        else:
            logger.warning("Missing answer in qandaset!")
        buffer.append_blank_line()

    # ------------------------------------------------------------------
    # Manual pages
    # ------------------------------------------------------------------

    def visit_refmeta(self, node: etree._Element) -> bool:
        entry = strip(self.text_at(node, descendant_path("refentrytitle")) or "")
        manvolnum = self.text_at(node, descendant_path("manvolnum")) or ""
        manual = self.text_at(node, ".//*[local-name()='refmiscinfo'][@class='manual']") or ""
        source = self.text_at(node, ".//*[local-name()='refmiscinfo'][@class='source']") or ""
        self.buffer.append_line(f"= {entry}({manvolnum})")
        self.buffer.append_line(":doctype: manpage")
        self.buffer.append_line(rstrip(f":man manual: {manual}"))
        self.buffer.append_line(rstrip(f":man source: {source}"))
        self.buffer.append_blank_line()
        return False

    def visit_refnamediv(self, node: etree._Element) -> bool:
        name = self.text_at(node, descendant_path("refname")) or ""
        purpose = self.text_at(node, descendant_path("refpurpose")) or ""
        self.buffer.append_line("== NAME")
        self.buffer.append_blank_line()
        self.buffer.append_line(f"{name} - {purpose}")
        self.buffer.append_blank_line()
        return False

    def visit_refsynopsisdiv(self, node: etree._Element) -> bool:
        self.buffer.append_line("== SYNOPSIS")
        self.buffer.append_blank_line()
        return True

    def visit_cmdsynopsis(self, node: etree._Element) -> bool:
        self.buffer.append_blank_line()
        separator = node.get("sepchar", " ")
        elements = child_elements(node)
        for position, child in enumerate(elements):
            if position:
                self.buffer.append_text(separator)
            self.visit(child)
        return False

    # ------------------------------------------------------------------
    # Cross-document includes
    # ------------------------------------------------------------------

    def visit_include(self, node: etree._Element) -> bool:
        """Convert an ``xi:include`` into an AsciiDoc include directive.

        The referenced document is converted by a separate visitor and
        written next to its source with the ``.adoc`` suffix.
        """
        href = get_attr(node, "href")
        if not href:
            logger.warning("Include without href! Skipping.")
            return False

        include_path = Path(href)
        infile = include_path if self.base_dir is None else self.base_dir / include_path
        self.convert_included(infile)

        buffer = self.buffer
        level = self.state.level
        buffer.append_blank_line()
        if level > 1:
            buffer.append_line(f":leveloffset: {level - 1}")
        buffer.append_line(f"include::{include_path.with_suffix(ASCIIDOC_EXTENSION).as_posix()}[]")
        if level > 1:
            buffer.append_line(":leveloffset: 0")
        return False

    def convert_included(self, infile: Path) -> None:
        """Convert an included document with a fresh visitor of the same type.

        A document already being converted further up the include chain is
        not converted again.
        """
        resolved = infile.resolve()
        if resolved in self.includes:
            logger.warning("Include cycle detected at %s! Skipping.", infile)
            return

        try:
            root = parse_xml(infile.read_bytes())
        except (OSError, ParsingError) as e:
            logger.warning("Include file not readable: %s (%s)", infile, e)
            return

        visitor = type(self)(self.options, base_dir=infile.parent, includes=self.includes | {resolved})
        visitor.visit(root)
        lines = list(visitor.buffer.lines)
        while lines and not lines[0]:
            lines.pop(0)

        outfile = infile.with_suffix(ASCIIDOC_EXTENSION)
        try:
            outfile.write_text("\n".join(split_directive_lines(lines)), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write included document %s: %s", outfile, e)
