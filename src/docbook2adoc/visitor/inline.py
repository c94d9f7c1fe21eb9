#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/visitor/inline.py
"""Handlers for DocBook inline elements.

Inline handlers never start a paragraph of their own. They attach their
output to the last buffered line, so the text of a paragraph, including its
formatted spans, ends up on one logical line.
"""

from __future__ import annotations

import logging
import re

from lxml import etree

from docbook2adoc.constants import (
    EMBEDDED_BLOCK_NAMES,
    FORMATTING_NAMES,
    MENU_ITEM_NAMES,
    NAMED_LITERAL_FORMS,
    PARA_NAMES,
    ROLELESS_LITERAL_PARENTS,
)
from docbook2adoc.utils.ids import normalize_id, resolve_id
from docbook2adoc.utils.text import (
    escape_table_cell,
    is_blank,
    lazy_quote,
    lstrip,
    passthrough_leading_dots,
    reverse_subs,
    rstrip,
    split_sentences,
    strip,
    strip_whitespace,
)
from docbook2adoc.utils.tree import (
    Node,
    NodeKind,
    TextNode,
    child_elements,
    child_nodes,
    child_path,
    descendant_path,
    get_attr,
    local_name,
    next_node,
    node_kind,
    node_text,
    parent_name,
    previous_node,
    select_first,
)
from docbook2adoc.visitor.dispatch import DispatchingVisitor, index_entries

logger = logging.getLogger(__name__)

_LEADING_SPACE_RE = re.compile(r"[ \t\n\r\f\v]")
_PREV_ADJACENT_RE = re.compile(r"\S\n?\Z")
_NEXT_ADJACENT_RE = re.compile(r"\A\S")
_ESCAPED_LEADING_CHARS = ("_", "*", "+", "`", "#")
_MENU_SEPARATOR_ENTITIES = ("rarr", "gt")
_BLOCK_NEIGHBOUR_NAMES = EMBEDDED_BLOCK_NAMES | PARA_NAMES


class InlineHandlersMixin(DispatchingVisitor):
    """Inline element handlers."""

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def visit_text(self, node: TextNode) -> bool:
        """Append a run of character data to the current line.

        Inside paragraphs the source indentation and line wrapping are
        collapsed; a single space is kept between the text and a preceding
        inline element when the source had whitespace there. Whitespace alone
        between two inline elements becomes one space.
        """
        if is_blank(node.text):
            last = self.buffer.last
            if last and not last.endswith((" ", "\n")) and self._separates_inline_elements(node):
                self.append_inline(" ")
            return False

        buffer = self.buffer
        state = self.state
        if not buffer:
            buffer.append_line()
        text = node.text
        parent = local_name(node.parent)
        if parent in PARA_NAMES or parent == "phrase":
            leading_space = _LEADING_SPACE_RE.match(text)
            text = strip_whitespace(text, self.options.wraps_preserved)
            if node.previous_element is None:
                text = lstrip(text)
            elif leading_space and not _LEADING_SPACE_RE.match(text):
                last = buffer.last or ""
                previous = node.previous
                if last in ("----", "===="):
                    text = leading_space.group() + text
                elif (
                    previous is not None
                    and local_name(previous) not in ("para", "text")
                    and (not last or last.endswith((" ", "\n")))
                ):
                    pass
                else:
                    text = f" {text}"

            if self.options.sentence_per_line:
                text = split_sentences(text)

        if state.in_table:
            text = escape_table_cell(text)
        if state.nested_formatting and text.startswith(_ESCAPED_LEADING_CHARS):
            text = "\\" + text
        if buffer.last_is_empty() and text.startswith("."):
            text = passthrough_leading_dots(text)

        readd_space = text.endswith((" ", "\n"))
        text = "\n" + rstrip(text) if state.last_added_was_special else rstrip(text)
        if readd_space:
            text += " "

        buffer.append_text(reverse_subs(text))
        return False

    @staticmethod
    def _separates_inline_elements(node: TextNode) -> bool:
        if parent_name(node) not in PARA_NAMES and parent_name(node) != "phrase":
            return False
        return all(
            sibling is not None
            and node_kind(sibling) is NodeKind.ELEMENT
            and local_name(sibling) not in _BLOCK_NEIGHBOUR_NAMES
            and sibling.get("condition") is None
            for sibling in (node.previous, node.next)
        )

    def visit_pi(self, node: etree._Element) -> bool:
        target = local_name(node)
        if target == "asciidoc-br":
            self.append_inline(" +")
        elif target == "asciidoc-hr":
            # only valid when wrapped in a para or simpara
            self.append_inline("'''")
        return False

    def visit_entity_ref(self, node: etree._Element) -> bool:
        self.append_inline(f"&{local_name(node)};")
        return False

    # ------------------------------------------------------------------
    # Anchors, links and cross references
    # ------------------------------------------------------------------

    def visit_anchor(self, node: etree._Element) -> bool:
        if parent_name(node).startswith("biblio"):
            return False
        anchor_id = resolve_id(node, self.options)
        if anchor_id:
            self.append_inline(f"[[{anchor_id}]]")
        return False

    def visit_email(self, node: etree._Element) -> bool:
        self.append_inline(f"mailto:{node_text(node)}[]")
        return False

    def visit_link(self, node: etree._Element) -> bool:
        if node.get("linkend"):
            return self.visit_xref(node)
        return self.visit_uri(node)

    def visit_ulink(self, node: etree._Element) -> bool:
        return self.visit_uri(node)

    def visit_uri(self, node: etree._Element) -> bool:
        """Write a URL, with its label when it differs from the URL.

        A URL equal to the value of a document attribute is written as a
        reference to that attribute.
        """
        if local_name(node) == "ulink":
            url = node.get("url") or ""
        else:
            url = get_attr(node, "xlink:href") or node_text(node)

        prefix = "" if url.startswith(("http://", "https://")) else "link:"
        label = self.text(node) or ""
        target = url
        for name, value in self.options.attributes.items():
            if value == url:
                target = f"{{{name}}}"
                break

        if not label or label == url:
            self.append_inline(f"{prefix}{target}")
        else:
            self.append_inline(f"{prefix}{target}[{label}]")
        return False

    def visit_xref(self, node: etree._Element) -> bool:
        linkend = node.get("linkend") or ""
        options = self.options
        ref = normalize_id(linkend, options.id_prefix, options.id_separator) if options.normalize_ids else linkend
        label, *rest = self.format_text(node) or [""]
        if label:
            self.append_inline(f"<<{ref},{lazy_quote(label)}>>")
        else:
            self.append_inline(f"<<{ref}>>")
        self.buffer.extend(rest)
        return False

    def visit_citation(self, node: etree._Element) -> bool:
        self.append_inline(f"<<{node_text(node)}>>")
        return False

    # ------------------------------------------------------------------
    # Phrases and quotes
    # ------------------------------------------------------------------

    def visit_phrase(self, node: etree._Element) -> bool:
        text, *rest = self.format_text(node) or [""]
        role = node.get("role")
        # constrained marks may not bind inside a word, so double them
        self.append_inline(f"[{role}]##{text}##" if role else text)
        self.buffer.extend(rest)
        return False

    def visit_foreignphrase(self, node: etree._Element) -> bool:
        self.format_append_text(node)
        return False

    def visit_attribution(self, node: etree._Element) -> bool:
        return True

    def visit_guiicon(self, node: etree._Element) -> bool:
        return True

    def visit_quote(self, node: etree._Element) -> bool:
        self.format_append_text(node, '"`', '`"')
        return False

    def visit_remark(self, node: etree._Element) -> bool:
        self.format_append_text(node, "[.remark]#", "#")
        return False

    def visit_trademark(self, node: etree._Element) -> bool:
        self.format_append_text(node, "", "(TM)")
        return False

    # ------------------------------------------------------------------
    # Formatted spans
    # ------------------------------------------------------------------

    def visit_emphasis(self, node: etree._Element) -> bool:
        marker = self.emphasis_marker(node)
        if self.adjacent_character(node):
            marker *= 2
        self.format_append_text(node, marker, marker)
        return False

    def process_literal(self, node: etree._Element) -> bool:
        """Write a literal span in its role and marker form.

        Plain literals are monospaced. Content holding a backtick is
        written as a passthrough so the backtick cannot close the span.
        """
        name = local_name(node)
        role, marker = NAMED_LITERAL_FORMS.get(name, ("", "`"))
        if parent_name(node) in ROLELESS_LITERAL_PARENTS.get(name, ()):
            role = ""

        text, *rest = self.format_text(node) or [""]
        text = strip(text)
        unconstrained = self.adjacent_character(node)
        if marker == "`" and "`" in text:
            opening, closing = ("``+", "+``") if unconstrained else ("`+", "+`")
        else:
            opening = closing = marker * 2 if unconstrained else marker
        self.append_inline(f"{role}{opening}{text}{closing}")
        self.buffer.extend(rest)
        return False

    def adjacent_character(self, node: etree._Element) -> bool:
        """Return True when a span touches other non-blank content.

        AsciiDoc only recognizes a single (constrained) marker at word
        boundaries; a span nested in another span or glued to neighbouring
        text needs the doubled (unconstrained) form.
        """
        if len(self.state.nested_formatting) > 1:
            return True

        previous = previous_node(node)
        following = next_node(node)
        if isinstance(previous, TextNode) and _PREV_ADJACENT_RE.search(previous.text):
            return True
        if isinstance(following, TextNode) and _NEXT_ADJACENT_RE.match(following.text):
            return True
        if self._formatting_child_text(previous, _PREV_ADJACENT_RE.search):
            return True
        if self._formatting_child_text(following, _NEXT_ADJACENT_RE.match):
            return True

        last = self.buffer.last
        return bool(last) and not last.endswith((" ", "\n", "\t", "\f"))

    @staticmethod
    def _formatting_child_text(node: Node | None, test) -> bool:
        if node is None or isinstance(node, TextNode) or local_name(node) not in FORMATTING_NAMES:
            return False
        children = child_nodes(node)
        return bool(children) and isinstance(children[0], TextNode) and bool(test(children[0].text))

    # ------------------------------------------------------------------
    # Keyword, path and UI families
    # ------------------------------------------------------------------

    def process_keyword(self, node: etree._Element) -> bool:
        name = local_name(node)
        if name == "firstterm":
            role, char = "term", "_"
        elif name == "citetitle":
            role, char = "ref", "_"
        else:
            role, char = name, "#"
        self.append_inline(f"[{role}]{char}{self.text(node)}{char}")
        return False

    def process_path(self, node: etree._Element) -> bool:
        self.append_inline(f"[path]_{self.text(node, unsub=False)}_")
        return False

    def process_ui(self, node: etree._Element) -> bool:
        """Write GUI labels, buttons, menus and key caps as UI macros."""
        name = local_name(node)
        following = next_node(node)
        if (
            name == "guilabel"
            and following is not None
            and node_kind(following) is NodeKind.ENTITY_REFERENCE
            and local_name(following) in _MENU_SEPARATOR_ENTITIES
        ):
            name = "guimenu"

        if name == "menuchoice":
            items = [node_text(child) for child in child_elements(node) if local_name(child) in MENU_ITEM_NAMES]
            menu = items[0] if items else ""
            self.append_inline(f"menu:{menu}[{' > '.join(items[1:])}]")
        elif name == "guimenu":
            self.append_inline(f"menu:{node_text(node)}[]")
        elif name == "guibutton":
            self.append_inline(f"btn:[{node_text(node)}]")
        elif name == "guilabel":
            self.append_inline(f"[label]#{node_text(node)}#")
        elif name == "keycap":
            self.append_inline(f"kbd:[{node_text(node)}]")
        return False

    # ------------------------------------------------------------------
    # Media, notes and index
    # ------------------------------------------------------------------

    def visit_inlinemediaobject(self, node: etree._Element) -> bool:
        image = select_first(node, descendant_path("imageobject", "imagedata"))
        if image is None:
            logger.warning("Unknown inline mediaobject! Skipping.")
            return False
        src, alt = self.image_reference(node, image)
        self.append_inline(f"image:{src}[{lazy_quote(alt) or ''}]")
        return False

    def visit_footnote(self, node: etree._Element) -> bool:
        text = self.text_at(node, child_path("para"), child_path("simpara")) or ""
        self.append_inline(f"footnote:[{strip(text)}]")
        return False

    def visit_indexterm(self, node: etree._Element) -> bool:
        """Write a combined index entry of up to three levels."""
        self.state.requires_index = True
        entry = f"((({','.join(index_entries(node))})))"
        if self._in_running_text(node):
            self.append_inline(entry)
        else:
            self.buffer.append_line(entry)
        return False

    @staticmethod
    def _in_running_text(node: etree._Element) -> bool:
        if parent_name(node) in PARA_NAMES:
            return True
        return any(
            isinstance(sibling, TextNode) and not is_blank(sibling.text)
            for sibling in (previous_node(node), next_node(node))
        )

    # ------------------------------------------------------------------
    # Manual page synopses
    # ------------------------------------------------------------------

    def visit_arg(self, node: etree._Element) -> bool:
        choice = node.get("choice")
        if choice == "req":
            self.format_append_text(node, "{", "}")
        elif choice == "plain":
            self.format_append_text(node)
        else:
            self.format_append_text(node, "[", "]")
        if node.get("rep") == "repeat":
            self.append_inline("...")
        return False

    def visit_group(self, node: etree._Element) -> bool:
        choice = node.get("choice", "opt")
        opening, closing = {"req": ("{", "}"), "opt": ("[", "]")}.get(choice, ("", ""))
        self.append_inline(opening)
        for position, child in enumerate(child_elements(node)):
            if position:
                self.append_inline(" | ")
            self.visit(child)
        self.append_inline(closing)
        if node.get("rep") == "repeat":
            self.append_inline("...")
        return False

    def visit_optional(self, node: etree._Element) -> bool:
        self.format_append_text(node, "[", "]")
        return False

    def visit_sbr(self, node: etree._Element) -> bool:
        self.append_inline(" +")
        self.buffer.append_line("    ")
        return False

    def visit_citerefentry(self, node: etree._Element) -> bool:
        entry = self.text_at(node, descendant_path("refentrytitle")) or ""
        volume = self.text_at(node, descendant_path("manvolnum")) or ""
        self.append_inline(f"*{entry}*({volume})")
        return False
