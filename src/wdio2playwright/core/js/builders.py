"""
Helpers for constructing CST nodes structurally.

Replacement code is always assembled from nodes rather than formatted as text,
so string values are quoted and escaped by :class:`StringLiteral` itself.
"""

import re
from typing import Iterable, List, Sequence

from wdio2playwright.core.js.nodes import (
  ArrayExpression,
  CallExpression,
  Identifier,
  ImportDeclaration,
  ImportSpecifier,
  JsNode,
  MemberExpression,
  ObjectExpression,
  ObjectPattern,
  Property,
  StringLiteral,
  TypeAnnotation,
)
from wdio2playwright.core.tags import format_tag

TARGET_PACKAGE = "@playwright/test"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


def is_identifier_path(target: str) -> bool:
  """True if ``target`` is a dotted chain of plain identifiers (``page.keyboard.press``)."""
  return all(_IDENTIFIER.match(part) for part in target.split("."))


def member_chain(path: Sequence[str]) -> JsNode:
  """
  Builds ``a.b.c`` from ``["a", "b", "c"]``.

  Args:
      path: Non-empty sequence of identifier names.

  Returns:
      JsNode: An Identifier for a single name, otherwise nested MemberExpressions.
  """
  node: JsNode = Identifier(path[0])
  for name in path[1:]:
    node = MemberExpression(node, Identifier(name))
  return node


def page_call(method: str, *arguments: str) -> CallExpression:
  """Builds ``page.<method>('arg', ...)`` with string arguments."""
  return CallExpression(member_chain(["page", method]), [StringLiteral(a) for a in arguments])


def page_fixture(annotate: bool = False) -> ObjectPattern:
  """
  Builds the ``{ page }`` fixture parameter.

  Args:
      annotate: Adds the ``: { page: Page }`` type annotation.
  """
  pattern = ObjectPattern([Identifier("page")])
  if annotate:
    pattern.annotation = page_annotation()
  return pattern


def page_annotation() -> TypeAnnotation:
  return TypeAnnotation([Property(Identifier("page"), Identifier("Page"))])


def tag_options(tags: Iterable[str]) -> ObjectExpression:
  """Builds ``{ tag: ['@a', '@b'] }``."""
  elements: List[JsNode] = [StringLiteral(format_tag(tag)) for tag in tags]
  return ObjectExpression([Property(Identifier("tag"), ArrayExpression(elements))])


def target_import(*names: str) -> ImportDeclaration:
  """Builds ``import { test, expect } from '@playwright/test';`` (or the given names)."""
  names = names or ("test", "expect")
  return ImportDeclaration(StringLiteral(TARGET_PACKAGE), specifiers=[ImportSpecifier(Identifier(n)) for n in names])
