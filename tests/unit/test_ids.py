"""Unit tests for anchor id generation and normalization."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import re
import string

import pytest
from hypothesis import given
from hypothesis import strategies as st
from lxml import etree

from docbook2adoc.options import DocBookOptions
from docbook2adoc.utils.ids import generate_id, normalize_id, resolve_id


@pytest.mark.unit
class TestGenerateId:
    """Test derivation of implicit section ids."""

    def test_simple_title(self):
        """Test a plain title is lowercased and separated."""
        assert generate_id("First Section") == "_first_section"

    def test_punctuation_is_collapsed(self):
        """Test runs of invalid characters collapse into one separator."""
        assert generate_id("What's new?") == "_what_s_new"

    def test_custom_prefix_and_separator(self):
        """Test an empty prefix strips leading separators."""
        assert generate_id("What's new?", id_prefix="", id_separator="-") == "what-s-new"
        assert generate_id("  Leading space", id_prefix="", id_separator="-") == "leading-space"

    def test_entity_reference_is_replaced(self):
        """Test character references count as a single invalid character."""
        assert generate_id("Fish &amp; Chips") == "_fish_chips"

    def test_unicode_letters_are_kept(self):
        """Test non-ASCII letters are valid id characters."""
        assert generate_id("Überblick") == "_überblick"

    @given(st.text(alphabet=string.ascii_letters + string.digits + " .,;!?-", max_size=40))
    def test_generated_ids_are_well_formed(self, title):
        """Test generated ids never hold repeated or trailing separators."""
        gen_id = generate_id(title)
        assert "__" not in gen_id
        assert not gen_id.endswith("_")
        assert re.fullmatch(r"[a-z0-9_]*", gen_id)

    @given(st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=20))
    def test_single_word_titles(self, word):
        """Test a single lowercase word only receives the prefix."""
        assert generate_id(word) == f"_{word}"


@pytest.mark.unit
class TestNormalizeId:
    """Test normalization of explicit ids."""

    def test_normalize_hyphenated_id(self):
        """Test hyphens become separators and the prefix is added."""
        assert normalize_id("Some-Question") == "_some_question"

    def test_prefix_is_not_doubled(self):
        """Test an id already carrying the prefix keeps a single one."""
        assert normalize_id("_intro") == "_intro"

    def test_custom_separator(self):
        """Test underscores and hyphens both map to the separator."""
        assert normalize_id("a_b-c", id_prefix="", id_separator="-") == "a-b-c"


@pytest.mark.unit
class TestResolveId:
    """Test reading ids from elements."""

    def test_xml_id_is_normalized(self):
        """Test the xml:id attribute is read and normalized."""
        node = etree.fromstring('<section xml:id="Intro-Part"/>')
        assert resolve_id(node, DocBookOptions()) == "_intro_part"

    def test_plain_id_attribute(self):
        """Test the DocBook 4 id attribute is read."""
        node = etree.fromstring('<section id="usage"/>')
        assert resolve_id(node, DocBookOptions()) == "_usage"

    def test_normalization_disabled(self):
        """Test ids pass through untouched when normalization is off."""
        node = etree.fromstring('<section id="Intro-Part"/>')
        assert resolve_id(node, DocBookOptions(normalize_ids=False)) == "Intro-Part"

    def test_missing_id(self):
        """Test None is returned for elements without an id."""
        assert resolve_id(etree.fromstring("<section/>"), DocBookOptions()) is None
