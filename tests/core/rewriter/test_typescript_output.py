"""
Tests for TypeScript output (Page type import and fixture annotations).
"""

from wdio2playwright.core.engine import migrate


def test_typescript_annotations(legacy_login_test):
  result = migrate(legacy_login_test, typescript=True)

  assert result.success
  assert result.code.startswith("import { test, expect, Page } from '@playwright/test';\n")
  assert "test.beforeEach(async ({ page }: { page: Page }) => {" in result.code
  assert "test('should login', { tag: ['@smoke', '@p1'] }, async ({ page }: { page: Page }) => {" in result.code
  assert result.changes[-2:] == ["Added Page type import for TypeScript", "Added TypeScript type annotations"]
  assert "- TypeScript type definitions" in result.notes


def test_page_added_to_existing_import():
  code = "import { test } from '@playwright/test';\nit('a', async () => {\n  await $('#a').click();\n});\n"
  result = migrate(code, typescript=True)
  assert result.code == (
    "import { test, Page } from '@playwright/test';\n"
    "test('a', async ({ page }: { page: Page }) => {\n  await page.locator('#a').click();\n});\n"
  )


def test_typed_source_is_parsed():
  code = "const user: string = 'alice';\nit('a', async () => {\n  await $('#name').setValue(user as string);\n});\n"
  result = migrate(code, typescript=True)
  assert "const user: string = 'alice';" in result.code
  assert "await page.locator('#name').fill(user as string);" in result.code


def test_page_not_imported_twice():
  code = "import { test, Page } from '@playwright/test';\n$('#a');\n"
  result = migrate(code, typescript=True)
  assert result.code.count("Page") == 1
  assert "Added Page type import for TypeScript" not in result.changes


def test_typescript_import_after_interpreter_line():
  result = migrate("#!/usr/bin/env node\nit('a', async () => {});\n", typescript=True)
  assert result.code.startswith("#!/usr/bin/env node\nimport { test, expect, Page } from '@playwright/test';\n")
