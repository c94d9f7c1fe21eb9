#  Copyright (c) 2025 Tom Villani, Ph.D.
"""DocBook tree visitor producing AsciiDoc."""

from docbook2adoc.visitor.dispatch import DispatchingVisitor, NodeCategory, TraversalState, classify
from docbook2adoc.visitor.docbook import DocBookVisitor

__all__ = ["DispatchingVisitor", "DocBookVisitor", "NodeCategory", "TraversalState", "classify"]
