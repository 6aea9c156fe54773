"""
Tests for the individual rewrite rules.

Each test feeds a small legacy snippet through ``migrate`` and checks the
printed output together with the change log entries it produced.
"""

from wdio2playwright.core.engine import migrate
from wdio2playwright.semantics import CommandRegistry

PW_IMPORT = "import { test, expect } from '@playwright/test';"


def test_full_login_file(legacy_login_test):
  result = migrate(legacy_login_test)

  assert result.success
  assert result.code == f"""{PW_IMPORT}

test.describe('Login [REGRESSION]', () => {{
  test.beforeEach(async ({{ page }}) => {{
    await page.goto('/login');
  }});

  test('should login', {{ tag: ['@smoke', '@p1'] }}, async ({{ page }}) => {{
    await page.getByTestId('username').fill('alice');
    await page.locator('#password').fill('secret');
    await page.getByRole('button').click();
    await page.locator('.welcome').waitFor({{ state: "visible" }});
  }});
}});
"""
  assert result.changes == [
    "Replaced chai require with @playwright/test import",
    "Transformed browser.url to page.goto",
    "Transformed beforeEach to test.beforeEach",
    "Transformed $('[data-test-id=\"username\"]') to page.getByTestId('username')",
    "Transformed .setValue() to .fill()",
    "Transformed $('#password') to page.locator('#password')",
    "Transformed .setValue() to .fill()",
    "Transformed $('button') to page.getByRole('button')",
    "Transformed $('.welcome') to page.locator('.welcome')",
    "Transformed .waitForDisplayed() to .waitFor()",
    "Migrated tags [smoke, p1] to Playwright tag annotation",
    "Transformed it to test with page fixture",
    "Transformed describe to test.describe",
  ]
  assert result.tags == ["smoke", "p1"]


def test_tagged_case_with_empty_callback():
  result = migrate("it('should login [SMOKE] [P1]', () => {});\n")
  assert result.code == f"{PW_IMPORT}\ntest('should login', {{ tag: ['@smoke', '@p1'] }}, ({{ page }}) => {{}});\n"
  assert result.changes[-1] == "Added @playwright/test import"


def test_selector_rewrite():
  result = migrate("const button = $(\"[data-test-id='submit-button']\");\n")
  assert result.code == f"{PW_IMPORT}\nconst button = page.getByTestId('submit-button');\n"


def test_multiple_lookup_uses_same_locator():
  result = migrate("const items = $$('li.item');\n")
  assert "const items = page.locator('li.item');" in result.code


def test_dynamic_selector_is_left_alone():
  result = migrate("$(sel).click();\n")
  assert "$(sel).click();" in result.code
  assert any("dynamic selector" in note for note in result.notes)


def test_wait_options_are_added():
  result = migrate("$('#a').waitForDisplayed();\n")
  assert "page.locator('#a').waitFor({ state: \"visible\" });" in result.code


def test_wait_options_merge_into_existing_object():
  result = migrate("$('#a').waitForExist({ timeout: 5000 });\n")
  assert "page.locator('#a').waitFor({ state: \"attached\", timeout: 5000 });" in result.code


def test_wait_options_with_positional_argument_are_flagged():
  result = migrate("$('#a').waitForDisplayed(5000);\n")
  assert "page.locator('#a').waitFor(5000);" in result.code
  assert any("review its arguments" in note for note in result.notes)


def test_browser_commands():
  result = migrate("browser.keys('Enter');\nbrowser.refresh();\n")
  assert "page.keyboard.press('Enter');\npage.reload();" in result.code
  assert "Transformed browser.keys to page.keyboard.press" in result.changes


def test_browser_commands_needing_manual_work():
  result = migrate("browser.acceptAlert();\nbrowser.getWindowHandle();\nbrowser.customThing();\n")
  assert "browser.acceptAlert();\nbrowser.getWindowHandle();\nbrowser.customThing();" in result.code
  assert any("browser.acceptAlert()" in note for note in result.notes)
  assert any("browser.getWindowHandle() maps to page" in note for note in result.notes)
  assert any("No Playwright mapping for browser.customThing()" in note for note in result.notes)


def test_unmapped_member_calls_are_untouched():
  result = migrate("helper.doThing(1);\n")
  assert "helper.doThing(1);" in result.code
  assert not any("doThing" in change for change in result.changes)


def test_hooks():
  result = migrate("before(async () => {});\nafterEach(() => {});\n")
  assert "test.beforeAll(async ({ page }) => {});" in result.code
  assert "test.afterEach(({ page }) => {});" in result.code
  assert "Transformed before to test.beforeAll" in result.changes
  assert any("test.beforeAll cannot use the page fixture" in note for note in result.notes)


def test_existing_parameters_are_kept():
  result = migrate("it('a', async function (done) {});\n")
  assert "test('a', async function (done) {});" in result.code


def test_runner_modifiers():
  result = migrate("describe.only('A', () => {\n  it.skip('b', () => {});\n});\n")
  assert "test.describe.only('A', () => {\n  test.skip('b', ({ page }) => {});\n});" in result.code
  assert "Transformed describe.only to test.describe.only" in result.changes


def test_tags_kept_when_options_already_present():
  result = migrate("it('a @smoke', { retries: 2 }, async () => {});\n")
  assert "test('a @smoke', { retries: 2 }, async ({ page }) => {});" in result.code
  assert result.tags == []
  assert any("tags [smoke] were left in the name" in note for note in result.notes)


def test_chai_es_import_is_replaced():
  result = migrate("import { expect } from 'chai';\n$('#a').click();\n")
  assert result.code == f"{PW_IMPORT}\npage.locator('#a').click();\n"
  assert result.changes[0] == "Replaced chai import with @playwright/test"


def test_chai_import_removed_when_playwright_imported():
  code = "import { test } from '@playwright/test';\nimport { expect } from 'chai';\n$('#a');\n"
  result = migrate(code)
  assert result.code == "import { test } from '@playwright/test';\npage.locator('#a');\n"
  assert "Removed chai import" in result.changes


def test_chai_require_keeps_other_declarators():
  result = migrate("const { expect } = require('chai'), x = 1;\n")
  assert result.code == f"{PW_IMPORT}\nconst x = 1;\n"


def test_custom_registry_mapping():
  registry = CommandRegistry()
  registry.register_custom("loginAs", {"target": "signIn"})
  result = migrate("helper.loginAs('alice');\n", registry=registry)
  assert "helper.signIn('alice');" in result.code
  assert "Transformed .loginAs() to .signIn()" in result.changes


def test_comments_and_formatting_survive():
  code = "// suite header\ndescribe('A', () => {\n  // explains b\n  it('b', async () => {\n    await $('#x').click(); // inline\n  });\n});\n"
  result = migrate(code)
  assert result.code == (
    f"// suite header\n{PW_IMPORT}\ntest.describe('A', () => {{\n  // explains b\n"
    "  test('b', async ({ page }) => {\n    await page.locator('#x').click(); // inline\n  });\n});\n"
  )


def test_import_goes_after_interpreter_line():
  result = migrate("#!/usr/bin/env node\n$('#a').click();\n")
  assert result.code == f"#!/usr/bin/env node\n{PW_IMPORT}\npage.locator('#a').click();\n"


def test_comment_after_interpreter_line_is_not_duplicated():
  result = migrate("#!/usr/bin/env node\n// helper\n$('#a').click();\n")
  assert result.code == f"#!/usr/bin/env node\n// helper\n{PW_IMPORT}\npage.locator('#a').click();\n"


def test_tags_listed_once_per_test():
  code = "describe('A', () => {\n  it('a @smoke', () => {});\n  it('b @smoke @p1', () => {});\n});\n"
  result = migrate(code)
  assert result.tags == ["smoke", "smoke", "p1"]
