"""
Tests for the selector classifier.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from wdio2playwright.core.selectors import (
  CSS_ADVISORY,
  ROLE_ADVISORY,
  generate_selector_suggestions,
  transform_selector,
)
from wdio2playwright.enums import SelectorStrategy


def test_test_id_selector():
  result = transform_selector("[data-test-id='submit-button']")
  assert result.strategy == SelectorStrategy.TEST_ID
  assert result.code == "page.getByTestId('submit-button')"
  assert result.advisory is None


@pytest.mark.parametrize(
  "selector, strategy, code",
  [
    ('[aria-label="Close"]', SelectorStrategy.LABEL, "page.getByLabel('Close')"),
    ("[role='dialog']", SelectorStrategy.ROLE, "page.getByRole('dialog')"),
    ('input[placeholder="Email"]', SelectorStrategy.PLACEHOLDER, "page.getByPlaceholder('Email')"),
    ("#password", SelectorStrategy.CSS, "page.locator('#password')"),
    ("button.primary", SelectorStrategy.CSS, "page.locator('button.primary')"),
  ],
)
def test_strategies(selector, strategy, code):
  result = transform_selector(selector)
  assert result.strategy == strategy
  assert result.code == code


def test_attribute_rule_precedence():
  result = transform_selector("[aria-label='y'][data-test-id='x']")
  assert result.strategy == SelectorStrategy.TEST_ID
  assert result.argument == "x"


def test_role_elements():
  button = transform_selector("button")
  assert button.code == "page.getByRole('button')"
  assert button.advisory == ROLE_ADVISORY
  link = transform_selector("a[href='/home']")
  assert link.code == "page.getByRole('link')"


def test_css_fallback_has_advisory():
  result = transform_selector("div > .item:nth-child(2)")
  assert result.strategy == SelectorStrategy.CSS
  assert result.advisory == CSS_ADVISORY
  assert result.original == "div > .item:nth-child(2)"


def test_quotes_in_css_selector_are_escaped():
  result = transform_selector("input[name='q']")
  assert result.code == "page.locator(\"input[name='q']\")"


def test_suggestions():
  suggestions = generate_selector_suggestions(["#a", "[data-test-id='b']"])
  assert [s.type for s in suggestions] == [SelectorStrategy.CSS, SelectorStrategy.TEST_ID]
  assert suggestions[1].suggested == "page.getByTestId('b')"
  assert suggestions[0].recommendation == CSS_ADVISORY


@given(st.text())
def test_classifier_is_total_and_deterministic(selector):
  first = transform_selector(selector)
  second = transform_selector(selector)
  assert first == second
  assert first.strategy in set(SelectorStrategy)
  assert first.code.startswith("page.")
  assert first.to_node().to_text() == first.code
