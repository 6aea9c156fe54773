"""
Tests for the CST visitor and transformer protocol.
"""

import pytest

from wdio2playwright.core.js.nodes import CallExpression, Identifier, JsNode, StringLiteral
from wdio2playwright.core.js.parser import parse
from wdio2playwright.core.js.visitor import FlattenSentinel, JsTransformer, JsVisitor, RemovalSentinel


class CallNames(JsVisitor):
  def __init__(self):
    super().__init__()
    self.names = []
    self.left = []

  def visit_CallExpression(self, node):
    self.names.append(node.callee.to_text())
    return True

  def leave_CallExpression(self, node):
    self.left.append(node.callee.to_text())


def test_visitor_order():
  visitor = CallNames()
  visitor.walk(parse("outer(inner(deep()));"))
  assert visitor.names == ["outer", "inner", "deep"]
  assert visitor.left == ["deep", "inner", "outer"]


def test_visitor_can_skip_children():
  class Skipper(CallNames):
    def visit_CallExpression(self, node):
      super().visit_CallExpression(node)
      return False

  visitor = Skipper()
  visitor.walk(parse("outer(inner());"))
  assert visitor.names == ["outer"]


def test_visitor_parent_tracking():
  parents = []

  class Parents(JsVisitor):
    def visit_StringLiteral(self, node):
      parents.append(type(self.parent).__name__)

  Parents().walk(parse("f('a');"))
  assert parents == ["CallExpression"]


class Renamer(JsTransformer):
  def leave_Identifier(self, original: Identifier, updated: Identifier) -> JsNode:
    if updated.name == "old":
      return Identifier("new")
    return updated


def test_transformer_replaces_and_links():
  tree = parse("old(1); keep(old);")
  result = Renamer().transform(tree)
  assert result.to_text() == "new(1); keep(new);"
  call = result.body[0].children[0]
  assert call.callee.replaces is not None
  assert call.callee.replaces.name == "old"


def test_transformer_original_is_snapshot():
  seen = []

  class Recorder(JsTransformer):
    def leave_CallExpression(self, original, updated):
      seen.append((original.arguments, updated.arguments))
      return updated

  class Dropper(Recorder):
    def leave_StringLiteral(self, original, updated):
      return RemovalSentinel.REMOVE

  Dropper().transform(parse("f('a', 1);"))
  before, after = seen[0]
  assert len(before) == 2
  assert len(after) == 1


def test_removal_from_list():
  class DropStrings(JsTransformer):
    def leave_StringLiteral(self, original, updated):
      return RemovalSentinel.REMOVE

  tree = DropStrings().transform(parse("f('a', b, 'c');"))
  assert tree.to_text() == "f(b);"


def test_flatten_into_list():
  class Duplicate(JsTransformer):
    def leave_StringLiteral(self, original, updated):
      return FlattenSentinel([updated, StringLiteral(updated.value + "2")])

  tree = Duplicate().transform(parse("f('a', b);"))
  assert tree.to_text() == "f('a', 'a2', b);"


def test_flatten_into_single_slot_fails():
  class Split(JsTransformer):
    def leave_Identifier(self, original, updated):
      if updated.name == "f":
        return FlattenSentinel([Identifier("a"), Identifier("b")])
      return updated

  with pytest.raises(ValueError):
    Split().transform(parse("f(1);"))


def test_transform_returns_same_root_when_untouched():
  tree = parse("f(x);")
  assert JsTransformer().transform(tree) is tree
  assert isinstance(tree.body[0].children[0], CallExpression)
