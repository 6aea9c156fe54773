"""
CLI Command Handlers Facade.

Re-exports the handlers from ``wdio2playwright.cli.handlers`` so the
dispatcher (and tests patching it) have a single import location.
"""

from wdio2playwright.cli.handlers.analyze import handle_analyze
from wdio2playwright.cli.handlers.commands import handle_compare, handle_register
from wdio2playwright.cli.handlers.migrate import handle_migrate
from wdio2playwright.cli.handlers.pom import handle_pom
from wdio2playwright.cli.handlers.state import handle_state

__all__ = [
  "handle_analyze",
  "handle_compare",
  "handle_migrate",
  "handle_pom",
  "handle_register",
  "handle_state",
]
