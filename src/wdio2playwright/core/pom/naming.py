"""
Naming rules for generated page objects.

Field names are derived from the locator argument, in priority order:

1. a ``data-test-id`` value
2. an ``#id`` selector
3. an ``aria-label`` value, suffixed with ``Element``
4. a ``.class`` selector
5. otherwise ``element<N>`` (1-based position among distinct locators)

``getByTestId(v)`` and ``getByLabel(v)`` are named as if the selector were
``[data-test-id="v"]`` / ``[aria-label="v"]``.
"""

import re
from typing import Iterable, Optional

_TEST_ID = re.compile(r"data-test-id=['\"]?([^'\"\]>\s]+)")
_ID = re.compile(r"^#([\w-]+)")
_ARIA_LABEL = re.compile(r"aria-label=['\"]([^'\"]+)")
_CLASS = re.compile(r"^\.([\w-]+)")

_NAME_RULES = ((_TEST_ID, ""), (_ID, ""), (_ARIA_LABEL, "Element"), (_CLASS, ""))

_SEPARATOR = re.compile(r"[-_\s]+(.)?")
_NOT_IDENTIFIER = re.compile(r"[^\w$]", re.ASCII)
_SOURCE_SUFFIX = re.compile(r"(\.(spec|test))?\.(js|jsx|mjs|cjs|ts|tsx)$")

# Names already used by the generated class itself.
RESERVED_NAMES = frozenset({"page", "goto", "constructor"})


def to_camel_case(text: str) -> str:
  """
  Converts ``submit-button`` / ``user_name`` / ``Email address`` to camelCase.

  Args:
      text: Raw name.

  Returns:
      str: Separators removed, the following letter upper-cased, first letter lower-cased.
  """
  text = _SEPARATOR.sub(lambda m: m.group(1).upper() if m.group(1) else "", text)
  return text[:1].lower() + text[1:]


def naming_selector(method: str, argument: Optional[str]) -> Optional[str]:
  """The selector string a locator is named after."""
  if argument is None:
    return None
  if method == "getByTestId":
    return f'[data-test-id="{argument}"]'
  if method == "getByLabel":
    return f'[aria-label="{argument}"]'
  return argument


def derive_field_name(method: str, argument: Optional[str], index: int) -> str:
  """
  Derives a field name for one locator.

  Args:
      method: Locator factory (``locator``, ``getByTestId``, ...).
      argument: Its string argument, if it had one.
      index: 0-based position among distinct locators.

  Returns:
      str: A valid JavaScript identifier.
  """
  selector = naming_selector(method, argument)
  if selector:
    for pattern, suffix in _NAME_RULES:
      match = pattern.search(selector)
      if match:
        name = _NOT_IDENTIFIER.sub("", to_camel_case(match.group(1)) + suffix)
        if name and not name[0].isdigit():
          return name
        break
  return f"element{index + 1}"


def unique_name(name: str, taken: Iterable[str]) -> str:
  """Appends 2, 3, ... to ``name`` until it is not in ``taken`` or reserved."""
  taken = set(taken) | RESERVED_NAMES
  if name not in taken:
    return name
  counter = 2
  while f"{name}{counter}" in taken:
    counter += 1
  return f"{name}{counter}"


def generate_page_name(file_path: str) -> str:
  """
  Derives the page-object class name from a test file path.

  ``tests/user-profile.spec.js`` becomes ``UserProfilePage``.

  Args:
      file_path: Path of the test file.

  Returns:
      str: The class name.
  """
  base = re.sub(r".*[/\\]", "", file_path)
  base = _SOURCE_SUFFIX.sub("", base)
  words = re.split(r"[-_.\s]+", base)
  name = "".join(word[:1].upper() + word[1:] for word in words if word)
  return _NOT_IDENTIFIER.sub("", name) + "Page"
