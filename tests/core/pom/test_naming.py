"""
Tests for page-object naming rules.
"""

import pytest

from wdio2playwright.core.pom.naming import derive_field_name, generate_page_name, to_camel_case, unique_name


@pytest.mark.parametrize(
  "text, expected",
  [
    ("submit-button", "submitButton"),
    ("user_name", "userName"),
    ("Email address", "emailAddress"),
    ("welcome", "welcome"),
  ],
)
def test_to_camel_case(text, expected):
  assert to_camel_case(text) == expected


@pytest.mark.parametrize(
  "method, argument, index, expected",
  [
    ("locator", '[data-test-id="submit-button"]', 0, "submitButton"),
    ("getByTestId", "submit-button", 0, "submitButton"),
    ("locator", "#password", 0, "password"),
    ("getByLabel", "Email address", 0, "emailAddressElement"),
    ("locator", ".welcome-banner", 0, "welcomeBanner"),
    ("getByRole", "button", 2, "element3"),
    ("locator", None, 0, "element1"),
    ("getByTestId", "123", 4, "element5"),
  ],
)
def test_derive_field_name(method, argument, index, expected):
  assert derive_field_name(method, argument, index) == expected


def test_unique_name():
  assert unique_name("password", []) == "password"
  assert unique_name("save", ["save"]) == "save2"
  assert unique_name("save", ["save", "save2"]) == "save3"
  # Members of the generated class itself are never reused.
  assert unique_name("page", []) == "page2"
  assert unique_name("goto", []) == "goto2"


@pytest.mark.parametrize(
  "path, expected",
  [
    ("tests/login.spec.js", "LoginPage"),
    ("tests/user-profile.spec.js", "UserProfilePage"),
    ("checkout_flow.test.ts", "CheckoutFlowPage"),
    ("C:\\suite\\search.js", "SearchPage"),
  ],
)
def test_generate_page_name(path, expected):
  assert generate_page_name(path) == expected
