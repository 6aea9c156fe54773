"""
Page information extraction.

Walks Playwright test code (typically the output of a migration) and collects
the navigation URLs, locators, actions and assertions that belong in a page
object.
"""

from typing import Optional

from wdio2playwright.core.facts import SourceSpan
from wdio2playwright.core.js.nodes import CallExpression, ObjectExpression, StringLiteral
from wdio2playwright.core.js.parser import parse
from wdio2playwright.core.js.queries import callee_name, identifier_name, member_call
from wdio2playwright.core.js.visitor import JsVisitor
from wdio2playwright.core.pom.models import ActionInfo, AssertionInfo, LocatorInfo, PageObjectInfo
from wdio2playwright.core.rewriter.context import source_of
from wdio2playwright.enums import Dialect

ACTION_METHODS = ("click", "fill", "type", "check", "uncheck", "selectOption", "hover", "focus")


def is_locator_factory(method: str) -> bool:
  return method == "locator" or method.startswith("getBy")


class PageInfoCollector(JsVisitor):
  """Visitor accumulating :class:`PageObjectInfo`."""

  def __init__(self) -> None:
    super().__init__()
    self.info = PageObjectInfo()

  def visit_CallExpression(self, node: CallExpression) -> bool:
    span = SourceSpan.of(node)
    member = member_call(node)
    if member is not None:
      method = member.attr.name
      first = node.arguments[0] if node.arguments else None

      if method == "goto" and isinstance(first, StringLiteral):
        self.info.urls.append(first.value)

      if identifier_name(member.value) == "page" and is_locator_factory(method):
        self._locator(node, method, first, span)

      if method in ACTION_METHODS:
        self.info.actions.append(ActionInfo(action=method, span=span))

    if callee_name(node) == "expect":
      self.info.assertions.append(AssertionInfo(span=span))
    return True

  def _locator(self, node: CallExpression, method: str, first, span: Optional[SourceSpan]) -> None:
    if isinstance(first, StringLiteral):
      locator = LocatorInfo(method=method, selector=first.value, expression=source_of(node), span=span)
    elif isinstance(first, ObjectExpression):
      locator = LocatorInfo(method=method, options=source_of(first), expression=source_of(node), span=span)
    else:
      return
    self.info.locators.append(locator)


def extract_page_info(code: str, dialect: Dialect = Dialect.JAVASCRIPT) -> PageObjectInfo:
  """
  Collects page-object material from test code.

  Args:
      code: Playwright test source.
      dialect: Grammar to parse with.

  Returns:
      PageObjectInfo: URLs, locators, actions and assertions in source order.

  Raises:
      ParseFailure: If the code cannot be parsed at all.
  """
  collector = PageInfoCollector()
  collector.walk(parse(code, dialect))
  return collector.info
