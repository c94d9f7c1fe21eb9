"""Unit tests for the lxml tree navigation helpers."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import pytest
from lxml import etree

from docbook2adoc.exceptions import ParsingError
from docbook2adoc.utils.tree import (
    NodeKind,
    TextNode,
    child_nodes,
    child_path,
    find_child,
    find_children,
    get_attr,
    is_root,
    local_name,
    next_node,
    node_kind,
    node_text,
    parse_xml,
    previous_element,
    previous_node,
    select_first,
)


@pytest.mark.unit
class TestParseXml:
    """Test parsing DocBook sources."""

    def test_parse_string(self):
        """Test a string source yields its root element."""
        root = parse_xml("<article><para>Hi</para></article>")
        assert local_name(root) == "article"

    def test_parse_bytes_with_declaration(self):
        """Test byte sources with an encoding declaration are accepted."""
        root = parse_xml(b'<?xml version="1.0" encoding="UTF-8"?>\n<para>Hi</para>')
        assert node_text(root) == "Hi"

    def test_recovers_from_malformed_markup(self):
        """Test unclosed elements are recovered."""
        root = parse_xml("<para>Hello <emphasis>world</para>")
        assert local_name(root) == "para"
        assert "world" in node_text(root)

    def test_empty_source_raises(self):
        """Test a source without a root element is fatal."""
        with pytest.raises(ParsingError):
            parse_xml("")


@pytest.mark.unit
class TestNames:
    """Test namespace agnostic naming."""

    def test_docbook5_namespace_is_ignored(self):
        """Test namespaced elements report their local name."""
        root = parse_xml('<para xmlns="http://docbook.org/ns/docbook"><emphasis>x</emphasis></para>')
        assert local_name(root) == "para"
        assert local_name(root[0]) == "emphasis"

    def test_text_and_comment_names(self):
        """Test text runs and comments have fixed names."""
        root = parse_xml("<para>a<!-- note -->b</para>")
        nodes = child_nodes(root)
        assert [local_name(node) for node in nodes] == ["text", "comment", "text"]

    def test_processing_instruction_is_named_by_target(self):
        """Test processing instructions are named after their target."""
        root = parse_xml("<para><?asciidoc-br?></para>")
        assert local_name(root[0]) == "asciidoc-br"
        assert node_kind(root[0]) is NodeKind.PROCESSING_INSTRUCTION

    def test_local_name_of_none(self):
        """Test a missing node has an empty name."""
        assert local_name(None) == ""


@pytest.mark.unit
class TestSiblings:
    """Test text-aware sibling navigation."""

    def test_child_nodes_include_text_runs(self):
        """Test leading text and tails appear as text nodes in order."""
        root = parse_xml("<para>one <b>two</b> three</para>")
        nodes = child_nodes(root)
        assert isinstance(nodes[0], TextNode)
        assert nodes[0].text == "one "
        assert local_name(nodes[1]) == "b"
        assert nodes[2].text == " three"
        assert nodes[2].previous is root[0]

    def test_previous_and_next_node(self):
        """Test neighbours of an element are the surrounding text runs."""
        root = parse_xml("<para>before<b>x</b>after</para>")
        bold = root[0]
        assert previous_node(bold).text == "before"
        assert next_node(bold).text == "after"

    def test_neighbours_without_text(self):
        """Test neighbours are elements when no text separates them."""
        root = parse_xml("<para><a/><b/></para>")
        assert next_node(root[0]) is root[1]
        assert previous_node(root[1]) is root[0]
        assert previous_node(root[0]) is None

    def test_previous_element_skips_text(self):
        """Test the previous element is found across a text run."""
        root = parse_xml("<para><a/>text<b/></para>")
        assert previous_element(root[1]) is root[0]
        assert previous_element(next_node(root[0])) is root[0]

    def test_is_root(self):
        """Test only the document element is the root."""
        root = parse_xml("<para><b/></para>")
        assert is_root(root)
        assert not is_root(root[0])


@pytest.mark.unit
class TestQueries:
    """Test element lookups."""

    def test_node_text_skips_comments(self):
        """Test comments contribute nothing but their tails do."""
        root = parse_xml("<para>a<!-- hidden -->b<i>c</i>d</para>")
        assert node_text(root) == "abcd"

    def test_child_path_query(self):
        """Test a namespaced child chain is matched by local name."""
        root = parse_xml(
            '<figure xmlns="http://docbook.org/ns/docbook"><info><title>T</title></info></figure>'
        )
        title = select_first(root, child_path("info", "title"))
        assert title is not None
        assert node_text(title) == "T"

    def test_select_first_without_match(self):
        """Test a missing match yields None."""
        root = parse_xml("<para/>")
        assert select_first(root, child_path("title")) is None
        assert select_first(None, child_path("title")) is None

    def test_find_child_and_children(self):
        """Test direct children are found by local name."""
        root = parse_xml("<list><item>1</item><other/><item>2</item></list>")
        assert node_text(find_child(root, "item")) == "1"
        assert [node_text(item) for item in find_children(root, "item")] == ["1", "2"]
        assert find_child(root, "missing") is None

    def test_get_attr_prefixes(self):
        """Test xml: and xlink: prefixed attributes are read."""
        node = etree.fromstring(
            '<link xmlns:xlink="http://www.w3.org/1999/xlink" xml:id="l1" xlink:href="http://x.org" role="r"/>'
        )
        assert get_attr(node, "xml:id") == "l1"
        assert get_attr(node, "xlink:href") == "http://x.org"
        assert get_attr(node, "role") == "r"
