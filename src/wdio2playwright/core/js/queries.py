"""
Read-only pattern helpers shared by the classifier, extractor, rewriter and
page-object analyser.
"""

from typing import Optional

from wdio2playwright.core.js.nodes import (
  ArrowFunction,
  CallExpression,
  FunctionExpression,
  Identifier,
  JsNode,
  MemberExpression,
  StringLiteral,
)


def identifier_name(node: Optional[JsNode]) -> Optional[str]:
  """Name of an Identifier node, else None."""
  return node.name if isinstance(node, Identifier) else None


def callee_name(call: JsNode) -> Optional[str]:
  """``foo`` for ``foo(...)``; None for any other callee."""
  if not isinstance(call, CallExpression):
    return None
  return identifier_name(call.callee)


def member_call(call: JsNode) -> Optional[MemberExpression]:
  """The callee of ``x.method(...)``, else None."""
  if isinstance(call, CallExpression) and isinstance(call.callee, MemberExpression):
    return call.callee
  return None


def string_argument(call: CallExpression, index: int = 0) -> Optional[StringLiteral]:
  """The ``index``-th argument if it is a string literal."""
  if len(call.arguments) > index and isinstance(call.arguments[index], StringLiteral):
    return call.arguments[index]
  return None


def is_function(node: JsNode) -> bool:
  return isinstance(node, (ArrowFunction, FunctionExpression))


def require_source(node: Optional[JsNode]) -> Optional[str]:
  """Module name of ``require('module')``, else None."""
  if callee_name(node) == "require":
    literal = string_argument(node)
    if literal is not None:
      return literal.value
  return None
