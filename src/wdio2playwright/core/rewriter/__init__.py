"""
Rewrite rules turning WebdriverIO test code into Playwright Test code.
"""

from wdio2playwright.core.rewriter.context import RewriterContext
from wdio2playwright.core.rewriter.transformer import MigrationTransformer

__all__ = ["MigrationTransformer", "RewriterContext"]
