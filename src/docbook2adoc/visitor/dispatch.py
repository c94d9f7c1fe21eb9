#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/visitor/dispatch.py
"""Traversal engine for the DocBook visitor.

The :class:`DispatchingVisitor` walks the source tree depth first. Each node
is classified into a :class:`NodeCategory`; elements that belong to a
family (admonitions, literals, sections, ...) share one handler, every
other element is looked up by name in a static handler table, and unknown
elements fall back to :meth:`DispatchingVisitor.default_visit`.

Handlers return ``True`` to request automatic traversal of their children
and ``False`` when they have rendered (or deliberately skipped) them.

A visitor instance, its :class:`TraversalState` and its
:class:`~docbook2adoc.writer.LineBuffer` belong to exactly one conversion.
Nested conversions (cross-document includes) create a new visitor.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from lxml import etree

from docbook2adoc.constants import (
    ADMONITION_NAMES,
    IGNORED_NAMES,
    INDEX_PLACEHOLDER_LINES,
    KEYWORD_NAMES,
    LITERAL_NAMES,
    NESTED_LIST_NAMES,
    NORMAL_SECTION_NAMES,
    PATH_NAMES,
    SPECIAL_BLOCK_NAMES,
    SPECIAL_SECTION_NAMES,
    TABLE_NAMES,
    UI_NAMES,
)
from docbook2adoc.options import DocBookOptions
from docbook2adoc.utils.text import escape_table_cell, reverse_subs, strip
from docbook2adoc.utils.tree import (
    Node,
    NodeKind,
    TextNode,
    child_elements,
    child_nodes,
    child_path,
    descendant_path,
    find_child,
    is_element,
    is_root,
    local_name,
    node_kind,
    node_text,
    select_first,
    serialize,
)
from docbook2adoc.writer import LineBuffer

logger = logging.getLogger(__name__)

Handler = Callable[[Node], bool]


class NodeCategory(enum.Enum):
    """Dispatch targets a node can be classified into."""

    COMMENT = "comment"
    TEXT = "text"
    PROCESSING_INSTRUCTION = "processing_instruction"
    ENTITY_REFERENCE = "entity_reference"
    ADMONITION = "admonition"
    LITERAL = "literal"
    KEYWORD = "keyword"
    PATH = "path"
    UI = "ui"
    SECTION = "section"
    SPECIAL_SECTION = "special_section"
    ELEMENT = "element"


_KIND_CATEGORIES = {
    NodeKind.COMMENT: NodeCategory.COMMENT,
    NodeKind.TEXT: NodeCategory.TEXT,
    NodeKind.PROCESSING_INSTRUCTION: NodeCategory.PROCESSING_INSTRUCTION,
    NodeKind.ENTITY_REFERENCE: NodeCategory.ENTITY_REFERENCE,
}

_FAMILY_CATEGORIES: tuple[tuple[frozenset[str], NodeCategory], ...] = (
    (ADMONITION_NAMES, NodeCategory.ADMONITION),
    (LITERAL_NAMES, NodeCategory.LITERAL),
    (KEYWORD_NAMES, NodeCategory.KEYWORD),
    (PATH_NAMES, NodeCategory.PATH),
    (UI_NAMES, NodeCategory.UI),
    (NORMAL_SECTION_NAMES, NodeCategory.SECTION),
    (SPECIAL_SECTION_NAMES, NodeCategory.SPECIAL_SECTION),
)


def classify(node: Node) -> NodeCategory:
    """Return the dispatch category of a raw node.

    Examples
    --------
        >>> from lxml import etree
        >>> classify(etree.fromstring("<note/>"))
        <NodeCategory.ADMONITION: 'admonition'>
        >>> classify(etree.fromstring("<para/>"))
        <NodeCategory.ELEMENT: 'element'>

    """
    kind = node_kind(node)
    if kind is not NodeKind.ELEMENT:
        return _KIND_CATEGORIES[kind]
    name = local_name(node)
    for names, category in _FAMILY_CATEGORIES:
        if name in names:
            return category
    return NodeCategory.ELEMENT


def index_entries(node: etree._Element) -> list[str]:
    """Return the primary, secondary and tertiary terms present in an index term."""
    entries = []
    for level in ("primary", "secondary", "tertiary"):
        entry = select_first(node, descendant_path(level))
        if entry is not None:
            entries.append(reverse_subs(node_text(entry)))
    return entries


def consumed_index_terms(children: Sequence[Node]) -> set[int]:
    """Find sibling index terms already covered by a preceding multi-level term.

    A multi-level index term ``a > b > c`` is usually followed by the
    redundant terms ``b > c`` and ``c``; the combined AsciiDoc entry already
    produces all of them.

    Returns
    -------
    set[int]
        Positions in ``children`` that must not be visited

    """
    consumed: set[int] = set()
    pending = 0
    for position, child in enumerate(children):
        if not is_element(child) or local_name(child) != "indexterm":
            continue
        if pending:
            consumed.add(position)
            pending -= 1
        else:
            pending = max(len(index_entries(child)) - 1, 0)
    return consumed


@dataclass
class TraversalState:
    """Context threaded through one traversal.

    Attributes
    ----------
    level : int
        Heading depth used for section markers, starts at 1
    list_depth : int
        Nesting depth of bulleted and numbered lists
    in_table : bool
        Whether text is being written inside a table cell
    nested_formatting : list[str]
        Stack of active inline formatting markers
    requires_index : bool
        Set when an index term was seen; adds an index section at the end
    last_added_was_special : bool
        Set right after a list or table so trailing text starts a new line

    """

    level: int = 1
    list_depth: int = 0
    in_table: bool = False
    nested_formatting: list[str] = field(default_factory=list)
    requires_index: bool = False
    last_added_was_special: bool = False


class DispatchingVisitor:
    """Depth-first visitor that writes AsciiDoc into a :class:`LineBuffer`.

    Parameters
    ----------
    options : DocBookOptions, optional
        Conversion options; defaults are used when omitted
    base_dir : Path, optional
        Directory against which cross-document includes are resolved
    includes : frozenset of Path, optional
        Resolved paths of the included documents being converted above
        this one

    """

    def __init__(
        self,
        options: DocBookOptions | None = None,
        base_dir: Path | None = None,
        includes: frozenset[Path] | None = None,
    ):
        self.options = options or DocBookOptions()
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.includes: frozenset[Path] = frozenset(includes or ())
        self.buffer = LineBuffer()
        self.state = TraversalState()
        self._category_handlers: Mapping[NodeCategory, Handler] = self.category_handlers()
        self._element_handlers: Mapping[str, Handler] = self.element_handlers()

    def category_handlers(self) -> Mapping[NodeCategory, Handler]:
        """Return the handler for every category other than ``ELEMENT``."""
        raise NotImplementedError

    def element_handlers(self) -> Mapping[str, Handler]:
        """Return the handler table keyed by element name."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def visit(self, node: Node) -> None:
        """Dispatch ``node`` to its handler, wrapped in the state hooks."""
        category = classify(node)
        if category is NodeCategory.COMMENT:
            return

        name = local_name(node)
        if category is NodeCategory.ELEMENT:
            handler = self._element_handlers.get(name, self.default_visit)
        else:
            handler = self._category_handlers[category]

        self._before_traverse(node, category, name)
        if handler(node):
            self.traverse_children(node)
        self._after_traverse(node, category, name)

    def traverse_children(self, node: etree._Element, using_elements: bool = False) -> None:
        """Visit the children of ``node`` in document order."""
        children: Sequence[Node] = child_elements(node) if using_elements else child_nodes(node)
        consumed = consumed_index_terms(children)
        for position, child in enumerate(children):
            if position not in consumed:
                self.visit(child)

    def format_text(self, node: etree._Element) -> list[str]:
        """Render the children of ``node`` into new lines and take them back.

        A blank line is opened first so inline content has a line to attach
        to. If a pending flag absorbs that blank line, the previous line is
        returned as well, with the rendered text appended to it.
        """
        self.buffer.append_blank_line()
        mark = len(self.buffer)
        self.traverse_children(node)
        return self.buffer.splice_back(len(self.buffer) - mark + 1)

    def format_node(self, node: Node) -> list[str]:
        """Like :meth:`format_text`, but renders a text run itself."""
        if not isinstance(node, TextNode):
            return self.format_text(node)
        self.buffer.append_blank_line()
        mark = len(self.buffer)
        self.visit(node)
        return self.buffer.splice_back(len(self.buffer) - mark + 1)

    def format_append_line(self, node: etree._Element, suffix: str = "") -> None:
        """Render ``node`` and write it as a new line followed by ``suffix``."""
        first, *rest = self.format_text(node) or [""]
        self.buffer.append_line(first + suffix)
        self.buffer.extend(rest)

    def format_append_text(self, node: etree._Element, prefix: str = "", suffix: str = "") -> None:
        """Render ``node`` and attach it, wrapped, to the current line."""
        first, *rest = self.format_text(node) or [""]
        self.append_inline(prefix + strip(first) + suffix)
        self.buffer.extend(rest)

    def append_inline(self, text: str) -> None:
        """Attach ``text`` to the current line.

        Inline elements met directly under a document or section have no
        line to attach to yet, so an empty buffer gets one first.
        """
        if not self.buffer:
            self.buffer.append_line()
        self.buffer.append_text(text)

    @staticmethod
    def title_node_of(node: etree._Element) -> Optional[etree._Element]:
        """Return the title element of a block, looking inside ``info`` too."""
        title = find_child(node, "title")
        if title is None:
            title = select_first(node, child_path("info", "title"))
        return title

    def image_reference(self, node: etree._Element, image: etree._Element) -> tuple[str, str | None]:
        """Return the file reference and alt text of an image.

        Alt text equal to the file name stem is dropped, AsciiDoc derives
        the same text by itself.
        """
        src = image.get("fileref") or ""
        alt = self.text_at(node, descendant_path("textobject", "phrase"))
        if alt and alt == Path(src).stem:
            alt = None
        return src, alt

    def text(self, node: Node | None, unsub: bool = True) -> str | None:
        """Return the text content of ``node`` ready for output."""
        if node is None:
            return None
        out = node_text(node)
        if unsub:
            out = reverse_subs(out)
        if self.state.in_table:
            out = escape_table_cell(out)
        return out

    def text_at(self, node: etree._Element, *paths: str, unsub: bool = True) -> str | None:
        """Return the text of the first node matched by ``paths``."""
        return self.text(select_first(node, *paths), unsub=unsub)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _before_traverse(self, node: Node, category: NodeCategory, name: str) -> None:
        if name not in IGNORED_NAMES:
            self.append_ifdef_start_if_condition(node)

        state = self.state
        if category is NodeCategory.LITERAL:
            state.nested_formatting.append("+")
        elif category is NodeCategory.ELEMENT:
            if name in NESTED_LIST_NAMES:
                state.list_depth += 1
            elif name in TABLE_NAMES:
                state.in_table = True
            elif name == "emphasis":
                state.nested_formatting.append(self.emphasis_marker(node))

    def _after_traverse(self, node: Node, category: NodeCategory, name: str) -> None:
        state = self.state
        if category is NodeCategory.LITERAL:
            state.nested_formatting.pop()
        elif category is NodeCategory.ELEMENT:
            if name in NESTED_LIST_NAMES:
                state.list_depth -= 1
            elif name in TABLE_NAMES:
                state.in_table = False
            elif name == "emphasis":
                state.nested_formatting.pop()

        if is_root(node):
            if state.requires_index:
                self.buffer.append_blank_line()
                self.buffer.extend(INDEX_PLACEHOLDER_LINES)
        else:
            state.last_added_was_special = category is NodeCategory.ELEMENT and name in SPECIAL_BLOCK_NAMES

        if name not in IGNORED_NAMES:
            self.append_ifdef_end_if_condition(node)

    def emphasis_marker(self, node: etree._Element) -> str:
        """Return the quote character for an emphasis element."""
        role = node.get("role")
        if role in ("strong", "bold"):
            return "*"
        if role == "marked":
            return "#"
        return self.options.emphasis_quote_char

    # ------------------------------------------------------------------
    # Conditional directives
    # ------------------------------------------------------------------

    @staticmethod
    def condition_of(node: Node | None) -> str | None:
        if node is None or not is_element(node):
            return None
        return node.get("condition")

    def append_ifdef_start_if_condition(self, node: Node | None) -> None:
        condition = self.condition_of(node)
        if condition:
            self.buffer.append_line(f"ifdef::{condition}[]")

    def append_ifdef_end_if_condition(self, node: Node | None) -> None:
        condition = self.condition_of(node)
        if condition:
            self.buffer.append_line(f"endif::{condition}[]")

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------

    def default_visit(self, node: Node) -> bool:
        """Keep an unknown element visible as a comment block."""
        logger.warning("No visitor defined for <%s>! Skipping.", local_name(node))
        for line in serialize(node).splitlines():
            self.buffer.append_line(f"// {line}")
        self.buffer.append_blank_line()
        return False
