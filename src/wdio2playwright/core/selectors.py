"""
Selector Classifier.

Maps a legacy element-lookup selector string onto the best-ranked Playwright
locator factory. The first matching rule wins:

1. ``[data-test-id='v']`` -> ``page.getByTestId('v')``
2. ``[aria-label='v']`` -> ``page.getByLabel('v')``
3. ``[role='v']`` -> ``page.getByRole('v')``
4. ``[placeholder='v']`` -> ``page.getByPlaceholder('v')``
5. ``button``/``a`` (optionally with attribute filters) -> ``page.getByRole('button'|'link')``
6. anything else -> ``page.locator(selector)``

The classifier is total and deterministic: every string yields a result.
"""

import re
from typing import Dict, List, Optional, Pattern

from pydantic import BaseModel, ConfigDict, Field

from wdio2playwright.core.js.builders import page_call
from wdio2playwright.core.js.nodes import CallExpression
from wdio2playwright.enums import SelectorStrategy

SELECTOR_PATTERNS: Dict[str, Pattern[str]] = {
  "data_test_id": re.compile(r"\[data-test-id=['\"]([^'\"]+)['\"]\]"),
  "aria_label": re.compile(r"\[aria-label=['\"]([^'\"]+)['\"]\]"),
  "role": re.compile(r"\[role=['\"]([^'\"]+)['\"]\]"),
  "placeholder": re.compile(r"\[placeholder=['\"]([^'\"]+)['\"]\]"),
}

_ROLE_ELEMENT = re.compile(r"(button|a)(\[.*\])?")

_ATTRIBUTE_RULES = (
  ("data_test_id", SelectorStrategy.TEST_ID, "getByTestId"),
  ("aria_label", SelectorStrategy.LABEL, "getByLabel"),
  ("role", SelectorStrategy.ROLE, "getByRole"),
  ("placeholder", SelectorStrategy.PLACEHOLDER, "getByPlaceholder"),
)

ROLE_ADVISORY = 'Consider adding { name: "..." } for specificity'
CSS_ADVISORY = "Consider using data-test-id for more reliable selectors"


class SelectorTransform(BaseModel):
  """
  Result of classifying one selector.

  Attributes:
      code: Source text of the locator expression.
      strategy: Locator strategy chosen.
      original: The input selector.
      advisory: Optional review hint.
      factory: Name of the ``page`` method used (``getByTestId``, ``locator``, ...).
      argument: The single string argument passed to the factory.
  """

  model_config = ConfigDict(frozen=True)

  code: str
  strategy: SelectorStrategy
  original: str
  advisory: Optional[str] = None
  factory: str
  argument: str

  def to_node(self) -> CallExpression:
    """Builds a fresh ``page.<factory>('<argument>')`` node."""
    return page_call(self.factory, self.argument)


class SelectorSuggestion(BaseModel):
  """Suggested replacement for a selector found by the extractor."""

  original: str
  suggested: str
  type: SelectorStrategy
  recommendation: Optional[str] = Field(default=None)


def _build(strategy: SelectorStrategy, original: str, factory: str, argument: str, advisory: Optional[str] = None) -> SelectorTransform:
  code = page_call(factory, argument).to_text()
  return SelectorTransform(
    code=code,
    strategy=strategy,
    original=original,
    advisory=advisory,
    factory=factory,
    argument=argument,
  )


def transform_selector(selector: str) -> SelectorTransform:
  """
  Classifies a legacy selector.

  Args:
      selector: Selector string passed to ``$``/``$$``.

  Returns:
      SelectorTransform: The ranked locator expression.
  """
  for key, strategy, factory in _ATTRIBUTE_RULES:
    match = SELECTOR_PATTERNS[key].search(selector)
    if match:
      return _build(strategy, selector, factory, match.group(1))

  role = _ROLE_ELEMENT.fullmatch(selector)
  if role:
    name = "button" if role.group(1) == "button" else "link"
    return _build(SelectorStrategy.ROLE, selector, "getByRole", name, ROLE_ADVISORY)

  return _build(SelectorStrategy.CSS, selector, "locator", selector, CSS_ADVISORY)


def generate_selector_suggestions(selectors: List[str]) -> List[SelectorSuggestion]:
  """
  Builds a suggestion per selector string.

  Args:
      selectors: Selector strings (for example from ``ExtractedFacts.selectors``).

  Returns:
      List[SelectorSuggestion]: One entry per input, in order.
  """
  suggestions = []
  for selector in selectors:
    result = transform_selector(selector)
    suggestions.append(
      SelectorSuggestion(
        original=selector,
        suggested=result.code,
        type=result.strategy,
        recommendation=result.advisory,
      )
    )
  return suggestions
