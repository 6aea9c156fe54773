"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Isolation of the process-wide command registry, so tests registering custom
  mappings do not leak into each other.
- A recording console for asserting on CLI output.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'wdio2playwright' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from wdio2playwright.semantics.registry import get_registry  # noqa: E402
from wdio2playwright.utils.console import _THEME, reset_console, set_console  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_command_registry():
  """
  Restores the default registry entries after each test.
  """
  registry = get_registry()
  original_entries = registry._entries
  yield
  registry._entries = original_entries


@pytest.fixture
def recorded_console():
  """Routes console and logging output into a recording Console."""
  backend = Console(file=io.StringIO(), record=True, width=200, force_terminal=False, theme=_THEME)
  set_console(backend)
  yield backend
  reset_console()


@pytest.fixture
def legacy_login_test() -> str:
  return """const { expect } = require('chai');

describe('Login [REGRESSION]', () => {
  beforeEach(async () => {
    await browser.url('/login');
  });

  it('should login [SMOKE] [P1]', async () => {
    await $('[data-test-id="username"]').setValue('alice');
    await $('#password').setValue('secret');
    await $('button').click();
    await $('.welcome').waitForDisplayed();
  });
});
"""
