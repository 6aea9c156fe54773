"""
Tests for page-object extraction and class generation.
"""

import pytest

from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.pom import extract_page_info, generate_page_object_class, refactor_to_pom
from wdio2playwright.core.pom.models import PageObjectInfo
from wdio2playwright.core.pom.synthesizer import collect_fields

LOGIN_TEST = """import { test, expect } from '@playwright/test';

test('login', async ({ page }) => {
  await page.goto('/login');
  await page.getByTestId('submit-button').click();
  await page.locator('#password').fill('secret');
  await page.getByTestId('submit-button').click();
  await expect(page.locator('.welcome')).toBeVisible();
});
"""


def test_extract_page_info():
  info = extract_page_info(LOGIN_TEST)

  assert info.urls == ["/login"]
  assert [loc.expression for loc in info.locators] == [
    "page.getByTestId('submit-button')",
    "page.locator('#password')",
    "page.getByTestId('submit-button')",
    "page.locator('.welcome')",
  ]
  assert info.locators[1].selector == "#password"
  assert info.locators[1].span.line == 6
  assert [a.action for a in info.actions] == ["click", "fill", "click"]
  assert len(info.assertions) == 1


def test_object_argument_locator():
  info = extract_page_info("page.getByRole({ name: 'Save' });\npage.locator(selector);\n")
  assert len(info.locators) == 1
  assert info.locators[0].options == "{ name: 'Save' }"
  assert info.locators[0].selector is None


def test_fields_are_deduplicated():
  names = [name for name, _ in collect_fields(extract_page_info(LOGIN_TEST))]
  assert names == ["submitButton", "password", "welcome"]


def test_colliding_names_get_suffixes():
  info = extract_page_info("page.locator('#save');\npage.locator('#save >> nth=1');\n")
  assert [name for name, _ in collect_fields(info)] == ["save", "save2"]


def test_refactor_to_pom_javascript():
  result = refactor_to_pom(LOGIN_TEST, "tests/login.spec.js")

  assert result.page_object.class_name == "LoginPage"
  assert result.page_object.file_name == "LoginPage.js"
  assert result.page_object.content == """export class LoginPage {
  constructor(page) {
    this.page = page;
    this.submitButton = page.getByTestId('submit-button');
    this.password = page.locator('#password');
    this.welcome = page.locator('.welcome');
  }

  async goto() {
    await this.page.goto('/login');
  }
}
"""


def test_refactor_to_pom_typescript():
  result = refactor_to_pom(LOGIN_TEST, "login.spec.ts")
  content = result.page_object.content

  assert result.page_object.file_name == "LoginPage.ts"
  assert content.startswith(
    "import type { Page, Locator } from '@playwright/test';\n\n"
    "export class LoginPage {\n"
    "  readonly page: Page;\n"
    "  readonly submitButton: Locator;\n"
    "  readonly password: Locator;\n"
    "  readonly welcome: Locator;\n\n"
    "  constructor(page: Page) {\n"
  )
  assert "  async goto(): Promise<void> {\n    await this.page.goto('/login');\n  }\n" in content


def test_goto_defaults_to_root():
  content = generate_page_object_class("EmptyPage", PageObjectInfo())
  assert "await this.page.goto('/');" in content
  assert "    this.page = page;\n  }\n" in content


def test_unparsable_source_raises():
  with pytest.raises(ParseFailure):
    refactor_to_pom("\x00", "x.spec.js")
