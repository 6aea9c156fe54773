"""
Tests for the framework classifier.
"""

import pytest

from wdio2playwright.core.classifier import detect_framework
from wdio2playwright.core.js.parser import parse
from wdio2playwright.enums import FrameworkKind


@pytest.mark.parametrize(
  "code, expected",
  [
    ("$('#a').click();", FrameworkKind.LEGACY),
    ("const els = $$('li');", FrameworkKind.LEGACY),
    ("import { expect } from 'chai';", FrameworkKind.LEGACY),
    ("const { remote } = require('webdriverio');", FrameworkKind.LEGACY),
    ("import { test } from '@playwright/test';", FrameworkKind.TARGET),
    ("test('a', async ({ page }) => { await page.goto('/'); });", FrameworkKind.TARGET),
    ("$('#a'); page.goto('/');", FrameworkKind.MIXED),
    ("const a = 1;", FrameworkKind.UNKNOWN),
    ("it('a', async () => { await browser.url('/'); });", FrameworkKind.UNKNOWN),
  ],
)
def test_verdicts(code, expected):
  assert detect_framework(parse(code)) == expected


def test_verdict_helpers():
  assert FrameworkKind.LEGACY.is_legacy
  assert FrameworkKind.TARGET.is_target
  assert FrameworkKind.MIXED.is_mixed
  assert FrameworkKind.UNKNOWN.is_unknown
  assert not FrameworkKind.MIXED.is_legacy
