"""Unit tests for DocBookOptions."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import dataclasses

import pytest

from docbook2adoc.options import DocBookOptions


@pytest.mark.unit
class TestDocBookOptions:
    """Test option defaults, validation and cloning."""

    def test_defaults(self):
        """Test the default option values."""
        options = DocBookOptions()
        assert options.id_prefix == "_"
        assert options.id_separator == "_"
        assert options.normalize_ids is True
        assert options.compat_mode is False
        assert dict(options.attributes) == {}
        assert options.sentence_per_line is False
        assert options.preserve_line_wrap is False
        assert options.delimit_source is True
        assert options.emphasis_quote_char == "_"

    def test_options_are_frozen(self):
        """Test options cannot be mutated."""
        options = DocBookOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.id_prefix = "x"  # type: ignore[misc]

    def test_create_updated(self):
        """Test cloning with changes leaves the original untouched."""
        options = DocBookOptions()
        updated = options.create_updated(sentence_per_line=True, id_separator="-")
        assert updated.sentence_per_line is True
        assert updated.id_separator == "-"
        assert options.sentence_per_line is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"emphasis_quote_char": "~"},
            {"id_separator": " "},
            {"id_prefix": "a b"},
            {"attributes": {"bad name": "x"}},
            {"attributes": {"": "x"}},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test invalid option values are rejected."""
        with pytest.raises(ValueError):
            DocBookOptions(**kwargs)

    def test_empty_prefix_and_separator_are_allowed(self):
        """Test empty id prefix and separator are valid."""
        options = DocBookOptions(id_prefix="", id_separator="")
        assert options.id_prefix == ""

    def test_wraps_preserved(self):
        """Test sentence-per-line takes precedence over preserved wraps."""
        assert DocBookOptions(preserve_line_wrap=True).wraps_preserved
        assert not DocBookOptions(preserve_line_wrap=True, sentence_per_line=True).wraps_preserved
        assert not DocBookOptions().wraps_preserved

    def test_every_field_has_help(self):
        """Test every option carries command line metadata."""
        for field in dataclasses.fields(DocBookOptions):
            assert field.metadata.get("help"), field.name
            assert field.metadata.get("importance") in ("core", "advanced"), field.name
