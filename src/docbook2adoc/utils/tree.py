#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/utils/tree.py
"""Navigation helpers over lxml DocBook trees.

lxml keeps character data in the ``text`` and ``tail`` attributes of
elements instead of in separate nodes. The visitor needs to see text as
siblings of elements (to look at what precedes or follows an inline span),
so this module exposes :class:`TextNode` views and sibling helpers that
treat text, elements, comments, processing instructions and entity
references uniformly.

All name lookups are namespace agnostic, so DocBook 4 (no namespace) and
DocBook 5 (``http://docbook.org/ns/docbook``) sources are handled alike.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from lxml import etree

from docbook2adoc.constants import XLINK_NAMESPACE, XML_NAMESPACE
from docbook2adoc.exceptions import ParsingError


class NodeKind(enum.Enum):
    """Kinds of nodes the visitor distinguishes."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    PROCESSING_INSTRUCTION = "pi"
    ENTITY_REFERENCE = "entity_ref"


@dataclass(frozen=True, eq=False)
class TextNode:
    """A run of character data between two sibling nodes.

    Attributes
    ----------
    text : str
        The character data
    parent : etree._Element
        Element containing the text
    previous : Any
        Raw node immediately before the text, or None
    next : Any
        Raw node immediately after the text, or None

    """

    text: str
    parent: etree._Element
    previous: Any = None
    next: Any = None

    @property
    def previous_element(self) -> Optional[etree._Element]:
        node = self.previous
        while node is not None and not is_element(node):
            node = node.getprevious()
        return node


Node = Union[etree._Element, TextNode]


def parse_xml(source: str | bytes) -> etree._Element:
    """Parse DocBook source into its root element.

    The parser recovers from malformed markup, keeps entity references
    unresolved and never touches the network, so comments, processing
    instructions and entities reach the visitor as nodes.

    Parameters
    ----------
    source : str or bytes
        XML document text

    Returns
    -------
    etree._Element
        The document element

    Raises
    ------
    ParsingError
        If the source holds no root element

    """
    if isinstance(source, str):
        source = source.encode("utf-8")

    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(source, parser)
    except etree.XMLSyntaxError as e:
        raise ParsingError(
            f"Not a parseable document: {e}", parsing_stage="xml_parsing", original_error=e
        ) from e

    if root is None:
        raise ParsingError("Not a parseable document: no root element", parsing_stage="xml_parsing")
    return root


def node_kind(node: Node) -> NodeKind:
    """Classify a raw node."""
    if isinstance(node, TextNode):
        return NodeKind.TEXT
    tag = node.tag
    if tag is etree.Comment:
        return NodeKind.COMMENT
    if tag is etree.PI:
        return NodeKind.PROCESSING_INSTRUCTION
    if tag is etree.Entity:
        return NodeKind.ENTITY_REFERENCE
    return NodeKind.ELEMENT


def is_element(node: Any) -> bool:
    """Return True for real elements (not comments, PIs or entities)."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def local_name(node: Node | None) -> str:
    """Return the namespace-free name of a node.

    Text nodes are named ``text`` and processing instructions are named
    after their target.
    """
    if node is None:
        return ""
    kind = node_kind(node)
    if kind is NodeKind.ELEMENT:
        return _element_name(node)
    if kind is NodeKind.TEXT:
        return "text"
    if kind is NodeKind.PROCESSING_INSTRUCTION:
        return node.target
    if kind is NodeKind.ENTITY_REFERENCE:
        return node.name
    return "comment"


def _element_name(node: etree._Element) -> str:
    # recovered documents keep undeclared prefixes such as "xi:" in the tag
    return etree.QName(node).localname.rpartition(":")[2]


def parent_name(node: Node) -> str:
    parent = node.parent if isinstance(node, TextNode) else node.getparent()
    return local_name(parent)


def is_root(node: Node) -> bool:
    """Return True when ``node`` is the document element."""
    return is_element(node) and node.getparent() is None


def get_attr(node: etree._Element, name: str) -> str | None:
    """Read an attribute, accepting the ``xml:`` and ``xlink:`` prefixes."""
    if name.startswith("xml:"):
        return node.get(f"{{{XML_NAMESPACE}}}{name[4:]}")
    if name.startswith("xlink:"):
        return node.get(f"{{{XLINK_NAMESPACE}}}{name[6:]}")
    return node.get(name)


def child_nodes(node: etree._Element) -> list[Node]:
    """Return the raw children of an element, text runs included."""
    nodes: list[Node] = []
    children = list(node)
    if node.text:
        nodes.append(TextNode(node.text, node, None, children[0] if children else None))
    for child in children:
        nodes.append(child)
        if child.tail:
            nodes.append(TextNode(child.tail, node, child, child.getnext()))
    return nodes


def child_elements(node: etree._Element) -> list[etree._Element]:
    """Return the element children of an element."""
    return [child for child in node if is_element(child)]


def previous_node(node: Node) -> Node | None:
    """Return the raw sibling before ``node``, text runs included."""
    if isinstance(node, TextNode):
        return node.previous
    prev = node.getprevious()
    if prev is not None:
        return TextNode(prev.tail, node.getparent(), prev, node) if prev.tail else prev
    parent = node.getparent()
    if parent is not None and parent.text:
        return TextNode(parent.text, parent, None, node)
    return None


def next_node(node: Node) -> Node | None:
    """Return the raw sibling after ``node``, text runs included."""
    if isinstance(node, TextNode):
        return node.next
    if node.tail:
        return TextNode(node.tail, node.getparent(), node, node.getnext())
    return node.getnext()


def previous_element(node: Node) -> Optional[etree._Element]:
    """Return the closest preceding sibling element."""
    if isinstance(node, TextNode):
        return node.previous_element
    prev = node.getprevious()
    while prev is not None and not is_element(prev):
        prev = prev.getprevious()
    return prev


def node_text(node: Node | None) -> str:
    """Return the character data of a node and all its descendants.

    Comments and processing instructions contribute nothing, but the text
    that follows them does.
    """
    if node is None:
        return ""
    if isinstance(node, TextNode):
        return node.text
    if not is_element(node):
        return ""
    return "".join(_iter_text(node))


def _iter_text(node: etree._Element) -> Iterator[str]:
    if node.text:
        yield node.text
    for child in node:
        if is_element(child):
            yield from _iter_text(child)
        if child.tail:
            yield child.tail


def serialize(node: Node) -> str:
    """Serialize a node back to XML, without its tail."""
    if isinstance(node, TextNode):
        return node.text
    return etree.tostring(node, encoding="unicode", with_tail=False)


def _step(name: str) -> str:
    return f"*[local-name()='{name}']"


def child_path(*names: str) -> str:
    """Build an XPath selecting a chain of direct children by local name.

    Examples
    --------
        >>> child_path("tgroup", "thead", "row")
        "./*[local-name()='tgroup']/*[local-name()='thead']/*[local-name()='row']"

    """
    return "./" + "/".join(_step(name) for name in names)


def descendant_path(*names: str) -> str:
    """Build an XPath selecting a chain of descendants by local name."""
    return ".//" + "//".join(_step(name) for name in names)


def select(node: etree._Element, *paths: str) -> list[etree._Element]:
    """Evaluate the union of ``paths`` relative to ``node`` in document order."""
    return node.xpath(" | ".join(paths))


def select_first(node: etree._Element | None, *paths: str) -> Optional[etree._Element]:
    """Return the first node matched by any of ``paths``, or None."""
    if node is None:
        return None
    found = select(node, *paths)
    return found[0] if found else None


def find_child(node: etree._Element, *names: str) -> Optional[etree._Element]:
    """Return the first direct child element whose local name is in ``names``."""
    for child in node:
        if is_element(child) and _element_name(child) in names:
            return child
    return None


def find_children(node: etree._Element, *names: str) -> list[etree._Element]:
    """Return the direct child elements whose local name is in ``names``."""
    return [child for child in node if is_element(child) and _element_name(child) in names]
