"""Integration tests for complete DocBook to AsciiDoc conversions.

Covers document headers, sections, links and lists.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging

import pytest

from docbook2adoc import DocBookOptions, convert

ARTICLE_OPEN = """<article xmlns='http://docbook.org/ns/docbook'
         xmlns:xl="http://www.w3.org/1999/xlink"
         version="5.0" xml:lang="en">"""


@pytest.mark.integration
class TestDocumentHeader:
    """Test document headers."""

    def test_book_header(self, sample_book):
        """Test a book gets title, author line and book attributes."""
        expected = (
            "= Document Title\n"
            "Doc Writer <doc@example.com>\n"
            ":doctype: book\n"
            ":sectnums:\n"
            ":toc: left\n"
            ":icons: font\n"
            ":experimental:\n"
            "\n"
            "== First Section\n"
            "\n"
            "content"
        )
        assert convert(sample_book) == expected

    def test_compat_mode_and_attributes(self, sample_book):
        """Test compat mode and extra attributes are written to the header."""
        options = DocBookOptions(compat_mode=True, attributes={"sourcedir": "src/main/java"})
        output = convert(sample_book, options)
        assert output.startswith(
            "= Document Title\nDoc Writer <doc@example.com>\n:compat-mode:\n:doctype: book\n"
        )
        assert ":experimental:\n:sourcedir: src/main/java\n" in output

    def test_custom_id_prefix_and_separator(self):
        """Test non-default id settings are declared in the header."""
        source = "<article><info><title>T</title></info><para>x</para></article>"
        output = convert(source, DocBookOptions(id_prefix="", id_separator="-"))
        assert output.startswith("= T\n:idprefix:\n:idseparator: -\n")

    def test_article_is_not_a_book(self):
        """Test an article header has no book attributes."""
        output = convert("<article><info><title>Notes</title></info><para>Hi</para></article>")
        assert output == "= Notes\n\nHi"

    def test_direct_title_without_info(self):
        """Test a title directly under the document becomes the header."""
        assert convert("<article><title>T</title><para>x</para></article>") == "= T\n\nx"

    def test_direct_book_title_gets_book_attributes(self):
        """Test a book with a direct title still gets the book attributes."""
        source = "<book><title>B</title><chapter><title>C</title><para>x</para></chapter></book>"
        output = convert(source)
        assert output.startswith("= B\n:doctype: book\n")
        assert "\n== C\n\nx" in output

    def test_personname_parts_are_separated(self):
        """Test the parts of a structured person name are joined with spaces."""
        source = (
            "<article><info><title>T</title><author><personname>"
            "<firstname>Doc</firstname><surname>Writer</surname>"
            "</personname></author></info><para>x</para></article>"
        )
        assert convert(source).startswith("= T\nDoc Writer\n")

    def test_chapter_as_root(self):
        """Test a standalone chapter is converted like a book."""
        output = convert("<chapter><title>Intro</title><para>Text</para></chapter>")
        assert output == (
            "= Intro\n:doctype: book\n:sectnums:\n:toc: left\n:icons: font\n:experimental:\n:sourcedir: .\n\nText"
        )

    def test_meta_title(self):
        """Test a section title becomes a heading."""
        source = """<section xmlns="http://docbook.org/ns/docbook">
            <title>a</title>
          </section>"""
        assert convert(source) == "\n= a"


@pytest.mark.integration
class TestSections:
    """Test section conversion."""

    def test_explicit_id_is_kept(self):
        """Test an id that differs from the generated one becomes an anchor."""
        output = convert('<article><section xml:id="custom"><title>Intro</title><para>x</para></section></article>')
        assert "\n[[_custom]]\n== Intro\n" in output

    def test_redundant_id_is_dropped(self):
        """Test an id equal to the generated one is left out."""
        output = convert('<article><section xml:id="intro"><title>Intro</title><para>x</para></section></article>')
        assert "[[" not in output
        assert "== Intro" in output

    def test_missing_title(self, caplog):
        """Test a section without a title gets a placeholder and a warning."""
        with caplog.at_level(logging.WARNING):
            output = convert("<article><section><para>x</para></section></article>")
        assert "== Unknown Title!" in output
        assert "No title found for section node <section>" in caplog.text

    def test_special_section_without_title(self):
        """Test special sections are titled after their style."""
        assert "= Bibliography" in convert("<bibliography></bibliography>")

    def test_appendix(self):
        """Test an appendix is unnumbered and styled."""
        output = convert("<article><appendix><title>Extra</title><para>x</para></appendix></article>")
        assert output == "\n:sectnums!:\n\n[appendix]\n== Extra\n\nx\n\n:sectnums:"

    def test_bridgeheads(self):
        """Test bridgeheads become floating titles at the right level."""
        source = f"""{ARTICLE_OPEN}
  <section>
    <title>Section title</title>
    <bridgehead>Section bridgehead</bridgehead>
    <bridgehead renderas="sect3">level-three</bridgehead>

    <section>
      <title>subsub</title>
      <bridgehead>bridgebridge</bridgehead>
      <bridgehead renderas="sect1">level-one</bridgehead>
    </section>

  </section>
</article>
"""
        expected = (
            "\n== Section title\n"
            "\n[float]\n=== Section bridgehead\n"
            "\n[float]\n==== level-three\n"
            "\n=== subsub\n"
            "\n[float]\n==== bridgebridge\n"
            "\n[float]\n== level-one"
        )
        assert expected in convert(source)


@pytest.mark.integration
class TestLinks:
    """Test links, cross references and menus."""

    ORM_URL = "http://en.wikipedia.org/wiki/Object-relational_mapping"

    def test_guimenu(self):
        """Test a menu becomes a menu macro."""
        source = (
            '<para xmlns="http://docbook.org/ns/docbook">File operations are found in the '
            "<guimenu>File</guimenu> menu.</para>"
        )
        assert "menu:File[]" in convert(source)

    def test_menuchoice(self):
        """Test a menu choice lists the submenus."""
        source = (
            '<para xmlns="http://docbook.org/ns/docbook">Select <menuchoice><guimenu>File</guimenu>'
            "<guisubmenu>Open Terminal</guisubmenu><guimenuitem>Default</guimenuitem></menuchoice>.</para>"
        )
        assert "menu:File[Open Terminal > Default]" in convert(source)

    def test_link(self):
        """Test an xlink becomes a URL macro with its label."""
        source = (
            '<para xmlns="http://docbook.org/ns/docbook" xmlns:xlink="http://www.w3.org/1999/xlink">'
            f'Read about <link xlink:href="{self.ORM_URL}">Object-relational mapping</link> on Wikipedia.</para>'
        )
        assert f"Read about {self.ORM_URL}[Object-relational mapping] on Wikipedia." in convert(source)

    def test_uri(self):
        """Test uri elements with and without a label."""
        source = f"""<article xmlns='http://docbook.org/ns/docbook'>
<para xmlns="http://docbook.org/ns/docbook" xmlns:xlink="http://www.w3.org/1999/xlink">Read about <uri xlink:href="{self.ORM_URL}">Object-relational mapping</uri> on Wikipedia.</para>
<para>All DocBook V5.0 elements are in the namespace <uri>http://docbook.org/ns/docbook</uri>.</para>
</article>
"""
        expected = (
            f"Read about {self.ORM_URL}[Object-relational mapping] on Wikipedia.\n\n"
            "All DocBook V5.0 elements are in the namespace http://docbook.org/ns/docbook."
        )
        assert expected in convert(source)

    def test_ulink_with_doctype(self):
        """Test a DocBook 4 ulink behind an external DTD declaration."""
        source = f"""<!DOCTYPE para PUBLIC "-//OASIS//DTD DocBook XML V4.5//EN" "http://www.oasis-open.org/docbook/xml/4.5/docbookx.dtd">
<para xmlns="http://docbook.org/ns/docbook">Read about <ulink url="{self.ORM_URL}">Object-relational mapping</ulink> on Wikipedia.</para>
"""
        assert f"Read about {self.ORM_URL}[Object-relational mapping] on Wikipedia." in convert(source)

    def test_uri_attribute_reference(self):
        """Test a URL matching a document attribute is written as a reference."""
        source = (
            '<para xmlns="http://docbook.org/ns/docbook" xmlns:xlink="http://www.w3.org/1999/xlink">'
            f'Read about <uri xlink:href="{self.ORM_URL}">Object-relational mapping</uri> on Wikipedia.</para>'
        )
        output = convert(source, DocBookOptions(attributes={"uri-orm": self.ORM_URL}))
        assert "Read about {uri-orm}[Object-relational mapping] on Wikipedia." in output

    def test_relative_link(self):
        """Test a non-HTTP target uses the link macro."""
        source = '<para xmlns:xlink="http://www.w3.org/1999/xlink"><link xlink:href="guide.pdf">Guide</link></para>'
        assert convert(source) == "\nlink:guide.pdf[Guide]"

    def test_xref(self):
        """Test cross references with and without a label."""
        options = DocBookOptions(normalize_ids=False)
        assert "<<usage>>" in convert('<para>See <xref linkend="usage"/> for more information.</para>', options)
        assert "<<usage,Usage>>" in convert(
            '<para>See <xref linkend="usage">Usage</xref> for more information.</para>', options
        )

    def test_xref_normalized(self):
        """Test cross reference targets are normalized like ids."""
        assert convert('<para>See <xref linkend="Some-Section"/>.</para>') == "\nSee <<_some_section>>."

    def test_xref_label_with_comma(self):
        """Test a label holding a comma is quoted."""
        assert '<<_a,"One, Two">>' in convert('<para><xref linkend="a">One, Two</xref></para>')

    def test_link_with_linkend(self):
        """Test a link pointing inside the document is a cross reference."""
        assert "<<_intro,the intro>>" in convert('<para><link linkend="intro">the intro</link></para>')

    def test_email(self):
        """Test an email address becomes a mailto macro."""
        source = '<para xmlns="http://docbook.org/ns/docbook">Contact me at <email>info@example.org</email> for more information.</para>'
        assert "Contact me at mailto:info@example.org[] for more information." in convert(source)

    def test_anchor_and_citation(self):
        """Test inline anchors and citations."""
        assert convert('<para><anchor xml:id="Top-Anchor"/>Text</para>') == "\n[[_top_anchor]]Text"
        assert convert("<para>See <citation>RNCTUT</citation>.</para>") == "\nSee <<RNCTUT>>."


@pytest.mark.integration
class TestLists:
    """Test list conversion."""

    def test_itemized_list(self):
        """Test bullets for an itemized list."""
        source = """<itemizedlist xmlns="http://docbook.org/ns/docbook">
<listitem>
<para>Apples</para>
</listitem>
<listitem>
<para>Oranges</para>
</listitem>
<listitem>
<para>Bananas</para>
</listitem>
</itemizedlist>
"""
        assert "* Apples\n* Oranges\n* Bananas" in convert(source)

    def test_ordered_list(self):
        """Test numbers for an ordered list."""
        source = """<orderedlist xmlns="http://docbook.org/ns/docbook">
<listitem>
<para>Apples</para>
</listitem>
<listitem>
<para>Oranges</para>
</listitem>
<listitem>
<para>Bananas</para>
</listitem>
</orderedlist>
"""
        assert ". Apples\n. Oranges\n. Bananas" in convert(source)

    def test_nested_lists(self):
        """Test marker depth follows the nesting of mixed list types."""
        source = f"""{ARTICLE_OPEN}
  <itemizedlist>
    <listitem>
      <para>simple</para>
    </listitem>
    <listitem>
      <para>compact</para>
      <itemizedlist>
        <listitem>
          <para>design</para>
        </listitem>
        <listitem>
          <para>value</para>
        </listitem>
      </itemizedlist>
    </listitem>
    <listitem>
      <para>orcas</para>

      <orderedlist>
        <listitem>
          <para>tuna</para>

          <itemizedlist>
            <listitem>
              <para>squid</para>

              <orderedlist>
                <listitem>
                  <para>shrimp</para>
                </listitem>
              </orderedlist>

            </listitem>
          </itemizedlist>

        </listitem>
        <listitem>
          <para>manta rays</para>
        </listitem>
      </orderedlist>

    </listitem>
  </itemizedlist>
  <para>break!</para>
  <itemizedlist>
    <listitem>
      <para>layer</para>
    </listitem>
    <listitem>
      <para>cake</para>
      <itemizedlist>
        <listitem>
          <para>is a</para>
          <itemizedlist>
            <listitem>
              <para>great film!</para>
            </listitem>
          </itemizedlist>
        </listitem>
      </itemizedlist>
    </listitem>
  </itemizedlist>
</article>
"""
        expected = (
            "\n* simple\n* compact\n** design\n** value\n* orcas\n.. tuna\n*** squid\n.... shrimp\n.. manta rays\n"
            "\nbreak!\n"
            "\n* layer\n* cake\n** is a\n*** great film!\n"
        )
        assert expected in convert(source)

    def test_program_listings_in_list_items(self):
        """Test blocks inside list items are attached with continuations."""
        source = f"""{ARTICLE_OPEN}
  <para>Some examples:
    <itemizedlist>
      <listitem>
        <para>get all process definitions</para>
        <para>
          <programlisting>Collection mousse = service.getChocolate();</programlisting>
        </para>
      </listitem>
      <listitem>
        <para>get active process instances
          <programlisting>Collection rum = service.getRaisin();</programlisting>
        </para>
      </listitem>
      <listitem>
        <para>get tasks assigned to john
          <programlisting>List moonshine = service.getCinnamon();</programlisting>
        </para>
      </listitem>
      <listitem>
        <para>this listitem has....</para>
        <para>...multiple elements!</para>
        <para>So there should be continuations!</para>
      </listitem>
    </itemizedlist>

    But a newline at the end</para>
</article>
"""
        expected = """Some examples: 

* get all process definitions
+
[source]
----
Collection mousse = service.getChocolate();
----
* get active process instances 
+
[source]
----
Collection rum = service.getRaisin();
----
* get tasks assigned to john 
+
[source]
----
List moonshine = service.getCinnamon();
----
* this listitem has....
+
...multiple elements!
+
So there should be continuations!"""
        output = convert(source)
        assert expected in output
        assert output.endswith("But a newline at the end")

    def test_procedure(self):
        """Test a titled procedure becomes a titled numbered list."""
        source = "<procedure><title>Setup</title><step><para>Install</para></step><step><para>Run</para></step></procedure>"
        assert ".Procedure: Setup\n. Install\n. Run" in convert(source)

    def test_variable_list(self):
        """Test a variable list entry becomes a description item."""
        source = (
            "<variablelist><varlistentry><term>Alpha</term>"
            "<listitem><para>First letter</para></listitem></varlistentry></variablelist>"
        )
        assert convert(source) == "\nAlpha::\nFirst letter"

    def test_variable_list_sentence_per_line(self):
        """Test paragraphs of an entry are joined with continuations, one sentence per line."""
        source = """ <variablelist>
      <varlistentry>
        <term><literal>no-loop</literal></term>

        <listitem>
          <para>default value: <literal>false</literal></para>

          <para>type: Boolean</para>

          <para>When a rule's consequence modifies a fact it may cause the
          rule to activate again, causing an infinite loop. Setting no-loop to
          true will skip the creation of another Activation for the rule with
          the current set of facts.</para>
        </listitem>
      </varlistentry>

      <varlistentry>
        <term><literal>ruleflow-group</literal></term>

        <listitem>
          <para>default value: N/A</para>

          <para>type: String</para>

          <para>Ruleflow is a Drools feature that lets you exercise control
          over the firing of rules. Rules that are assembled by the same
          ruleflow-group identifier fire only when their group is
          active.</para>
        </listitem>
      </varlistentry>
 </variablelist>
"""
        expected = """
`no-loop`::
default value: `false`
+
type: Boolean
+
When a rule's consequence modifies a fact it may cause the rule to activate again, causing an infinite loop.
Setting no-loop to true will skip the creation of another Activation for the rule with the current set of facts.

`ruleflow-group`::
default value: N/A
+
type: String
+
Ruleflow is a Drools feature that lets you exercise control over the firing of rules.
Rules that are assembled by the same ruleflow-group identifier fire only when their group is active."""
        assert expected in convert(source, DocBookOptions(sentence_per_line=True))

    def test_glossary(self):
        """Test glossary entries become a glossary list."""
        source = (
            "<glossary><glossentry><glossterm>API</glossterm>"
            "<glossdef><para>Interface</para></glossdef></glossentry></glossary>"
        )
        output = convert(source)
        assert "= Glossary" in output
        assert "[glossary]\nAPI::\n  Interface" in output

    def test_qandaset(self):
        """Test a question and answer set becomes a qanda list."""
        source = """<article xmlns='http://docbook.org/ns/docbook'>
  <qandaset>
    <qandadiv>
      <title>Various Questions</title>
      <qandaentry xml:id="some-question">
        <question>
          <para>My question?</para>
        </question>
        <answer>
          <para>My answer!</para>
        </answer>
      </qandaentry>
      <qandaentry>
        <question>
          <para>Another question?</para>
        </question>
        <answer>
          <para>Another answer!</para>
        </answer>
      </qandaentry>
    </qandadiv>
  </qandaset>
  <para>A paragraph</para>
</article>
"""
        expected = """.Various Questions

[qanda]
[[_some_question]]
My question?::

My answer!

Another question?::

Another answer!

A paragraph"""
        assert expected in convert(source)
