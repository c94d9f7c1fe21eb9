"""Unit tests for the public conversion API."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from pathlib import Path

import pytest

from docbook2adoc import (
    DocBookOptions,
    FileNotFoundError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    convert,
    convert_file,
)


@pytest.mark.unit
class TestConvert:
    """Test string conversion."""

    def test_section(self):
        """Test a root section converts to a level-one heading."""
        assert convert("<section><title>Intro</title><para>Hello</para></section>") == "\n= Intro\n\nHello"

    def test_bytes_source(self):
        """Test byte sources are accepted."""
        assert convert(b"<para>Hello</para>") == "\nHello"

    def test_article_header(self):
        """Test an article title becomes the document title."""
        output = convert("<article><info><title>Hello</title></info><para>World</para></article>")
        assert output == "= Hello\n\nWorld"

    def test_wrong_options_type(self):
        """Test options of the wrong class are rejected."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            convert("<para/>", options={"sentence_per_line": True})  # type: ignore[arg-type]
        assert exc_info.value.expected_type is DocBookOptions
        assert exc_info.value.parameter_name == "options"

    def test_unparseable_source(self):
        """Test a source without a root element raises ParsingError."""
        with pytest.raises(ParsingError):
            convert("")


@pytest.mark.unit
class TestConvertFile:
    """Test file conversion."""

    def test_writes_adoc_next_to_input(self, temp_dir: Path):
        """Test the default output path replaces the suffix with .adoc."""
        source = temp_dir / "guide.xml"
        source.write_text("<article><info><title>Guide</title></info><para>Body</para></article>")

        output_path = convert_file(source)

        assert output_path == temp_dir / "guide.adoc"
        assert output_path.read_text(encoding="utf-8") == "= Guide\n\nBody"

    def test_explicit_output_path(self, temp_dir: Path):
        """Test an explicit output path is honored."""
        source = temp_dir / "guide.xml"
        source.write_text("<para>Body</para>")
        target = temp_dir / "out" / "manual.txt"
        target.parent.mkdir()

        assert convert_file(source, output_path=target) == target
        assert target.read_text(encoding="utf-8") == "\nBody"

    def test_options_are_applied(self, temp_dir: Path):
        """Test options reach the conversion."""
        source = temp_dir / "sentences.xml"
        source.write_text("<para>One. Two.</para>")
        output_path = convert_file(source, DocBookOptions(sentence_per_line=True))
        assert output_path.read_text(encoding="utf-8") == "\nOne.\nTwo."

    def test_missing_input(self, temp_dir: Path):
        """Test a missing input raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError) as exc_info:
            convert_file(temp_dir / "missing.xml")
        assert exc_info.value.file_path == str(temp_dir / "missing.xml")

    def test_unwritable_output(self, temp_dir: Path):
        """Test a failed write raises OutputWriteError."""
        source = temp_dir / "guide.xml"
        source.write_text("<para>Body</para>")
        with pytest.raises(OutputWriteError):
            convert_file(source, output_path=temp_dir / "no-such-dir" / "guide.adoc")
