"""
wdio2playwright Package.

Migrates WebdriverIO test suites to Playwright Test: the legacy source is
parsed into a lossless syntax tree, rewritten rule by rule and printed back
with every untouched character preserved.

Usage
-----

Simple String Migration
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import wdio2playwright as w2p
    result = w2p.migrate("describe('Login', () => { it('works @smoke', async () => {}) })")
    print(result.code)
    # import { test, expect } from '@playwright/test';
    # test.describe('Login', () => { test('works', { tag: ['@smoke'] }, async ({ page }) => {}) })

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from wdio2playwright import MigrationEngine, RuntimeConfig
    from wdio2playwright.semantics import CommandRegistry

    registry = CommandRegistry()
    registry.register_custom("loginAs", {"target": "loginAs"})
    engine = MigrationEngine(registry=registry, config=RuntimeConfig(typescript=True))
    res = engine.run(code)

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from wdio2playwright.analysis.audit import analyze
from wdio2playwright.analysis.project import detect_project_state
from wdio2playwright.config import RuntimeConfig
from wdio2playwright.core.classifier import detect_framework
from wdio2playwright.core.engine import MigrationEngine, migrate, target_file_name
from wdio2playwright.core.errors import InvalidMappingError, ParseFailure, Wdio2PlaywrightError
from wdio2playwright.core.extractor import extract_facts
from wdio2playwright.core.js.parser import parse
from wdio2playwright.core.pom import refactor_to_pom
from wdio2playwright.core.result import MigrationResult
from wdio2playwright.core.selectors import transform_selector
from wdio2playwright.core.tags import extract_tags, strip_tags
from wdio2playwright.semantics.registry import register_custom_mapping

__version__ = "0.1.0"

__all__ = [
  "InvalidMappingError",
  "MigrationEngine",
  "MigrationResult",
  "ParseFailure",
  "RuntimeConfig",
  "Wdio2PlaywrightError",
  "__version__",
  "analyze",
  "detect_framework",
  "detect_project_state",
  "extract_facts",
  "extract_tags",
  "migrate",
  "parse",
  "refactor_to_pom",
  "register_custom_mapping",
  "strip_tags",
  "target_file_name",
  "transform_selector",
]
