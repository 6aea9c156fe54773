"""
Tests for single-file analysis reports.
"""

from wdio2playwright.analysis import analyze
from wdio2playwright.analysis.audit import calculate_complexity
from wdio2playwright.core.facts import ExtractedFacts, HookFact, PageObjectFact
from wdio2playwright.enums import ComplexityLevel, FrameworkKind


def test_legacy_report(legacy_login_test):
  report = analyze(legacy_login_test, "login.js")

  assert report.success
  assert report.file_path == "login.js"
  assert report.framework == FrameworkKind.LEGACY
  assert len(report.structure.describes) == 1
  assert report.structure.tests[0].tags == ["smoke", "p1"]
  assert [h.name for h in report.structure.hooks] == ["beforeEach"]
  assert report.structure.imports[0].source == "chai"
  assert len(report.selectors.found) == 4
  assert report.selectors.suggestions
  assert [c.name for c in report.commands] == ["browser.url", "setValue", "setValue", "click", "waitForDisplayed"]

  assert report.complexity.factors["selectors"] == 4
  assert report.complexity.score == 16
  assert report.complexity.level == ComplexityLevel.MEDIUM

  assert report.recommendations == [
    "Run 'wdio2playwright migrate' to convert this test",
    "1 explicit waits found - Playwright auto-waits, most can be removed",
    "3 tags found [regression, smoke, p1] - will be migrated to Playwright tag annotations",
  ]


def test_playwright_file_needs_no_migration():
  code = "import { test } from '@playwright/test';\ntest('a', async ({ page }) => {});\n"
  report = analyze(code, "a.spec.js")
  assert report.framework == FrameworkKind.TARGET
  assert report.recommendations == ["Already using Playwright - no migration needed"]


def test_waits_complex_selectors_and_page_objects():
  code = "$('//div[1]').click();\nbrowser.pause(100);\nconst login = new LoginPage();\n"
  report = analyze(code)

  assert report.file_path == "unknown.js"
  assert report.page_objects[0].class_name == "LoginPage"
  assert report.complexity.score == 9
  assert report.complexity.level == ComplexityLevel.LOW
  assert "1 explicit waits found - Playwright auto-waits, most can be removed" in report.recommendations
  assert "1 complex selectors found - consider using data-test-id attributes" in report.recommendations
  assert "Page Objects detected - they need migration too" in report.recommendations


def test_mixed_file():
  code = "import { test } from '@playwright/test';\n$('#a').click();\n"
  report = analyze(code)
  assert report.framework == FrameworkKind.MIXED
  assert report.recommendations[0] == "Mixed WebdriverIO/Playwright code detected - complete the migration"


def test_typescript_is_picked_from_the_path():
  report = analyze("const a: number = 1;\n$('#a').click();\n", "a.ts")
  assert report.success
  assert report.framework == FrameworkKind.LEGACY


def test_parse_failure():
  report = analyze("\x00", "broken.js")
  assert not report.success
  assert report.errors[0].startswith("Parse Error:")
  assert report.framework == FrameworkKind.UNKNOWN
  assert report.commands == []


def test_complexity_levels():
  assert calculate_complexity(ExtractedFacts()).level == ComplexityLevel.LOW
  facts = ExtractedFacts(
    hooks=[HookFact(name="before") for _ in range(6)],
    page_objects=[PageObjectFact(class_name="LoginPage") for _ in range(3)],
  )
  complexity = calculate_complexity(facts)
  assert complexity.score == 33
  assert complexity.level == ComplexityLevel.HIGH


def test_deeply_nested_file_is_reported():
  report = analyze("$('#a')" + ".click()" * 300 + ";\n", "deep.js")
  assert not report.success
  assert "nested more than" in report.errors[0]
