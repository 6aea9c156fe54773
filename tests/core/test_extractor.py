"""
Tests for the structural extractor.
"""

from wdio2playwright.core.extractor import extract_facts
from wdio2playwright.core.js.parser import parse
from wdio2playwright.enums import ImportKind, SelectorKind, TagSource


def test_legacy_file_facts(legacy_login_test):
  facts = extract_facts(parse(legacy_login_test))

  assert len(facts.imports) == 1
  chai = facts.imports[0]
  assert chai.source == "chai"
  assert chai.is_require
  assert [(b.kind, b.local) for b in chai.bindings] == [(ImportKind.NAMED, "expect")]

  assert [d.name for d in facts.describes] == ["Login [REGRESSION]"]
  assert facts.describes[0].tags == ["regression"]
  assert [t.name for t in facts.tests] == ["should login [SMOKE] [P1]"]
  assert facts.tests[0].tags == ["smoke", "p1"]
  assert [h.name for h in facts.hooks] == ["beforeEach"]

  assert [s.selector for s in facts.selectors] == ['[data-test-id="username"]', "#password", "button", ".welcome"]
  assert all(s.kind == SelectorKind.SINGLE for s in facts.selectors)
  assert [c.name for c in facts.commands] == ["browser.url", "setValue", "setValue", "click", "waitForDisplayed"]
  assert facts.assertions == []
  assert facts.unique_tags == ["regression", "smoke", "p1"]
  assert [t.source for t in facts.tags] == [TagSource.DESCRIBE, TagSource.TEST, TagSource.TEST]


def test_spans_are_recorded(legacy_login_test):
  facts = extract_facts(parse(legacy_login_test))
  assert facts.describes[0].span.line == 3
  assert facts.hooks[0].span.line == 4


def test_target_file_facts():
  code = """import { test, expect } from '@playwright/test';
test.describe('Suite @a', () => {
  test.beforeEach(async () => {});
  test('case #b', async ({ page }) => {
    await expect(page.locator('.x')).toBeVisible();
  });
});
"""
  facts = extract_facts(parse(code))
  assert [(b.kind, b.local) for b in facts.imports[0].bindings] == [
    (ImportKind.NAMED, "test"),
    (ImportKind.NAMED, "expect"),
  ]
  assert [d.name for d in facts.describes] == ["Suite @a"]
  assert [t.name for t in facts.tests] == ["case #b"]
  assert facts.hooks[0].name == "beforeEach"
  assert facts.hooks[0].qualified
  assert sorted(a.kind for a in facts.assertions) == ["expect", "toBeVisible"]
  assert facts.unique_tags == ["a", "b"]


def test_multiple_lookup_and_page_objects():
  code = "const page = new LoginPage(browser);\nconst d = new Date();\nconst items = $$('li');\n"
  facts = extract_facts(parse(code))
  assert [p.class_name for p in facts.page_objects] == ["LoginPage"]
  assert facts.selectors[0].kind == SelectorKind.MULTIPLE


def test_default_and_namespace_imports():
  facts = extract_facts(parse("import a from 'x';\nimport * as b from 'y';\nconst c = require('z');\n"))
  kinds = [(f.source, f.bindings[0].kind, f.bindings[0].local) for f in facts.imports]
  assert kinds == [("x", ImportKind.DEFAULT, "a"), ("y", ImportKind.NAMESPACE, "b"), ("z", ImportKind.DEFAULT, "c")]
