"""
Tag Engine.

Harvests inline test-tag metadata from test and group names. Three notations
are recognised, each applied independently over the whole text:

* ``[SMOKE]``: an upper-case token in brackets (letters, digits, ``_``, ``-``).
* ``@smoke``: a word prefixed with ``@``.
* ``#smoke``: a word prefixed with ``#``.

The prefixed forms must not follow a word character, so e-mail addresses and
anchors inside words are not treated as tags.
"""

import re
from typing import List

TAG_PATTERNS = (
  re.compile(r"\[([A-Z0-9_-]+)\]"),
  # Unlike a bare `@(\w+)`, the lookbehind keeps `user@example.com` from yielding a tag.
  re.compile(r"(?<!\w)@(\w+)", re.ASCII),
  re.compile(r"(?<!\w)#(\w+)", re.ASCII),
)

_WHITESPACE = re.compile(r"\s+")


def extract_tags(text: str) -> List[str]:
  """
  Extracts tags from a name.

  Args:
      text: A test or group name.

  Returns:
      List[str]: Lower-cased tags without duplicates, in discovery order
      (all bracket tags first, then ``@`` tags, then ``#`` tags).
  """
  tags: List[str] = []
  for pattern in TAG_PATTERNS:
    for match in pattern.finditer(text):
      tag = match.group(1).lower()
      if tag not in tags:
        tags.append(tag)
  return tags


def strip_tags(text: str) -> str:
  """
  Removes every tag notation from a name and normalises whitespace.

  Args:
      text: A test or group name.

  Returns:
      str: The name with tags removed, whitespace runs collapsed and trimmed.
  """
  for pattern in TAG_PATTERNS:
    text = pattern.sub("", text)
  return _WHITESPACE.sub(" ", text).strip()


def format_tag(tag: str) -> str:
  """Renders a tag in the ``@tag`` notation used by Playwright annotations."""
  return f"@{tag}"
