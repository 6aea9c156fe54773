"""
Tests for tag extraction and stripping.
"""

from hypothesis import given
from hypothesis import strategies as st

from wdio2playwright.core.tags import extract_tags, format_tag, strip_tags


def test_bracket_tags_are_lowercased():
  assert extract_tags("should login [SMOKE] [P1]") == ["smoke", "p1"]
  assert strip_tags("should login [SMOKE] [P1]") == "should login"


def test_notations_order_and_dedupe():
  assert extract_tags("@smoke checkout #fast [P1] @SMOKE") == ["p1", "smoke", "fast"]


def test_embedded_markers_are_not_tags():
  assert extract_tags("mail user@example.com about issue a#b") == []
  assert extract_tags("[lowercase] is not a bracket tag") == []


def test_strip_collapses_whitespace():
  assert strip_tags("  a   @x\tb  #y ") == "a b"


def test_format_tag():
  assert format_tag("smoke") == "@smoke"


words = st.lists(st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8), min_size=1, max_size=5)
tags = st.lists(st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", min_size=1, max_size=8), max_size=4)


@given(words, tags)
def test_tag_round_trip(name_words, tag_names):
  text = " ".join(name_words + [f"@{t}" for t in tag_names])
  assert extract_tags(text) == list(dict.fromkeys(tag_names))
  assert strip_tags(text) == " ".join(name_words)
