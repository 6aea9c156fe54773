"""
JavaScript syntax layer: CST nodes, the tree-sitter backed parser and the
visitor/transformer protocol.
"""

from wdio2playwright.core.js.nodes import JsNode, Program
from wdio2playwright.core.js.parser import parse, parse_expression
from wdio2playwright.core.js.visitor import FlattenSentinel, JsTransformer, JsVisitor, RemovalSentinel

__all__ = [
  "FlattenSentinel",
  "JsNode",
  "JsTransformer",
  "JsVisitor",
  "Program",
  "RemovalSentinel",
  "parse",
  "parse_expression",
]
