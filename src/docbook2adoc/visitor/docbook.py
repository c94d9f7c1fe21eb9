#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/visitor/docbook.py
"""The complete DocBook to AsciiDoc visitor."""

from __future__ import annotations

import logging
from typing import Mapping

from lxml import etree

from docbook2adoc.visitor.blocks import BlockHandlersMixin
from docbook2adoc.visitor.dispatch import Handler, NodeCategory
from docbook2adoc.visitor.inline import InlineHandlersMixin

logger = logging.getLogger(__name__)


class DocBookVisitor(BlockHandlersMixin, InlineHandlersMixin):
    """Convert one DocBook tree into AsciiDoc lines.

    A visitor renders a single document. Create a new instance for every
    conversion; the traversal state and the output buffer are not reset.

    Parameters
    ----------
    options : DocBookOptions, optional
        Conversion options
    base_dir : Path, optional
        Directory used to resolve ``xi:include`` references

    Examples
    --------
        >>> from docbook2adoc.utils.tree import parse_xml
        >>> root = parse_xml("<article><info><title>Hello</title></info><para>World</para></article>")
        >>> print(DocBookVisitor().render(root))
        = Hello
        <BLANKLINE>
        World

    """

    def render(self, root: etree._Element) -> str:
        """Visit ``root`` and return the flattened AsciiDoc text."""
        self.visit(root)
        return self.buffer.to_text()

    def ignore(self, node: etree._Element) -> bool:
        return False

    def category_handlers(self) -> Mapping[NodeCategory, Handler]:
        return {
            NodeCategory.TEXT: self.visit_text,
            NodeCategory.PROCESSING_INSTRUCTION: self.visit_pi,
            NodeCategory.ENTITY_REFERENCE: self.visit_entity_ref,
            NodeCategory.ADMONITION: self.process_admonition,
            NodeCategory.LITERAL: self.process_literal,
            NodeCategory.KEYWORD: self.process_keyword,
            NodeCategory.PATH: self.process_path,
            NodeCategory.UI: self.process_ui,
            NodeCategory.SECTION: self.process_section,
            NodeCategory.SPECIAL_SECTION: self.process_special_section,
        }

    def element_handlers(self) -> Mapping[str, Handler]:
        return {
            # documents and headers
            "book": self.process_doc,
            "article": self.process_doc,
            "refentry": self.process_doc,
            "info": self.visit_info,
            "bookinfo": self.visit_info,
            "articleinfo": self.visit_info,
            "title": self.ignore,
            "subtitle": self.ignore,
            "toc": self.ignore,
            "part": self.visit_part,
            "chapter": self.visit_chapter,
            "bridgehead": self.visit_bridgehead,
            # paragraphs
            "formalpara": self.visit_formalpara,
            "para": self.visit_para,
            "simpara": self.visit_simpara,
            # lists
            "itemizedlist": self.visit_itemizedlist,
            "orderedlist": self.visit_orderedlist,
            "procedure": self.visit_procedure,
            "substeps": self.visit_substeps,
            "stepalternatives": self.visit_stepalternatives,
            "step": self.visit_step,
            "listitem": self.visit_listitem,
            "variablelist": self.visit_variablelist,
            "varlistentry": self.visit_varlistentry,
            "glossentry": self.visit_glossentry,
            "glossterm": self.visit_glossterm,
            "glossdef": self.visit_glossdef,
            "bibliodiv": self.visit_bibliodiv,
            "bibliomisc": self.visit_bibliomisc,
            "bibliomixed": self.visit_bibliomixed,
            "qandaset": self.visit_qandaset,
            # literal and delimited blocks
            "literallayout": self.visit_literallayout,
            "screen": self.visit_screen,
            "programlisting": self.visit_programlisting,
            "example": self.visit_example,
            "informalexample": self.visit_informalexample,
            "sidebar": self.visit_sidebar,
            "blockquote": self.visit_blockquote,
            "table": self.visit_table,
            "informaltable": self.visit_informaltable,
            "mediaobject": self.visit_mediaobject,
            "screenshot": self.visit_screenshot,
            "figure": self.visit_figure,
            "funcsynopsis": self.visit_funcsynopsis,
            # manual pages
            "refmeta": self.visit_refmeta,
            "refnamediv": self.visit_refnamediv,
            "refsynopsisdiv": self.visit_refsynopsisdiv,
            "cmdsynopsis": self.visit_cmdsynopsis,
            "arg": self.visit_arg,
            "group": self.visit_group,
            "optional": self.visit_optional,
            "sbr": self.visit_sbr,
            "citerefentry": self.visit_citerefentry,
            # includes
            "include": self.visit_include,
            # inline
            "anchor": self.visit_anchor,
            "email": self.visit_email,
            "link": self.visit_link,
            "ulink": self.visit_ulink,
            "uri": self.visit_uri,
            "xref": self.visit_xref,
            "citation": self.visit_citation,
            "phrase": self.visit_phrase,
            "foreignphrase": self.visit_foreignphrase,
            "attribution": self.visit_attribution,
            "guiicon": self.visit_guiicon,
            "quote": self.visit_quote,
            "remark": self.visit_remark,
            "trademark": self.visit_trademark,
            "emphasis": self.visit_emphasis,
            "inlinemediaobject": self.visit_inlinemediaobject,
            "footnote": self.visit_footnote,
            "indexterm": self.visit_indexterm,
        }
