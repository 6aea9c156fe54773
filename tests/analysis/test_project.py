"""
Tests for project state detection.
"""

from wdio2playwright.analysis import detect_project_state
from wdio2playwright.analysis.project import is_page_object

LOGIN_PAGE = "export class LoginPage {\n  constructor(page) {\n    this.page = page;\n  }\n}\n"


def test_partially_migrated_project(legacy_login_test):
  files = {
    "wdio.conf.js": "exports.config = {};\n",
    "package.json": '{"name": "shop", "devDependencies": {"webdriverio": "^8.0.0"}}',
    "tests/login.spec.js": legacy_login_test,
    "tests/cart.spec.ts": "import { test, expect } from '@playwright/test';\ntest('a', async ({ page }) => {});\n",
    "tests/mixed.test.js": "import { test } from '@playwright/test';\n$('#a');\n",
    "tests/pages/LoginPage.js": LOGIN_PAGE,
    "tests/fixtures/users.json": "{}",
  }
  state = detect_project_state(files)

  assert state.has_wdio_config
  assert state.wdio_config_path == "wdio.conf.js"
  assert not state.has_playwright_config
  assert state.wdio_tests == ["tests/login.spec.js"]
  assert state.playwright_tests == ["tests/cart.spec.ts"]
  assert state.mixed_tests == ["tests/mixed.test.js"]
  assert state.page_objects == ["tests/pages/LoginPage.js"]
  assert state.structure.pages_dir == "tests/pages/"
  assert state.structure.fixtures_dir == "tests/fixtures/"
  assert state.structure.tests_dir == "tests/"
  assert state.package_json["name"] == "shop"
  assert state.recommendations == [
    "Create a playwright.config to replace wdio.conf",
    "1 tests have mixed WebdriverIO/Playwright code - complete migration",
    "1 existing page objects found - can be reused or extended",
    "Use existing pages directory: tests/pages/",
  ]


def test_playwright_configured_project():
  files = {
    "playwright.config.ts": "export default {};\n",
    "specs/a.spec.js": "$('#a').click();\n",
    "specs/broken.spec.js": "\x00",
    "package.json": "{oops",
  }
  state = detect_project_state(files)

  assert state.has_playwright_config
  assert state.playwright_config_path == "playwright.config.ts"
  assert state.wdio_tests == ["specs/a.spec.js"]
  assert state.unparsed_tests == ["specs/broken.spec.js"]
  assert state.package_json is None
  assert state.structure.tests_dir is None
  assert state.recommendations == ["Playwright already configured. Migrate remaining WebdriverIO tests."]


def test_absolute_paths_keep_their_prefix():
  state = detect_project_state({"/repo/pages/Home.js": LOGIN_PAGE.replace("Login", "Home")})
  assert state.structure.pages_dir == "/repo/pages/"
  assert state.page_objects == ["/repo/pages/Home.js"]


def test_is_page_object():
  assert is_page_object("pages/LoginPage.ts", LOGIN_PAGE)
  assert not is_page_object("helpers/login.js", LOGIN_PAGE)
  assert not is_page_object("pages/readme.md", LOGIN_PAGE)
  assert not is_page_object("pages/util.js", "export function helper() {}\n")


def test_empty_project():
  state = detect_project_state({})
  assert state.recommendations == []
  assert state.wdio_tests == []
