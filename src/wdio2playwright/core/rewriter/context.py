"""
Per-run state shared by the rewrite rules.
"""

import logging
from typing import List

from wdio2playwright.core.js.nodes import JsNode, ObjectPattern
from wdio2playwright.core.tracer import TraceLogger
from wdio2playwright.enums import Dialect
from wdio2playwright.semantics.registry import CommandRegistry

logger = logging.getLogger(__name__)


def source_of(node: JsNode) -> str:
  """Original text of a parsed node, or its rendering for a built one."""
  if node.origin is not None:
    return node.origin.text()
  return node.to_text()


class RewriterContext:
  """
  Mutable state of a single rewrite.

  Attributes:
      registry: Command mappings consulted by the command rule.
      dialect: Grammar of the file (TypeScript output gets type annotations).
      tracer: Trace logger of the run.
      changes: Change log entries in the order rules fired.
      advisories: Review hints, deduplicated.
      tags: Tags migrated into annotations, one entry per test that carried them.
      injected: ``{ page }`` parameters added by the rewriter.
      has_target_import: Set once a ``@playwright/test`` import exists.
  """

  def __init__(self, registry: CommandRegistry, dialect: Dialect, tracer: TraceLogger) -> None:
    self.registry = registry
    self.dialect = dialect
    self.tracer = tracer
    self.changes: List[str] = []
    self.advisories: List[str] = []
    self.tags: List[str] = []
    self.injected: List[ObjectPattern] = []
    self.has_target_import = False

  @property
  def typescript(self) -> bool:
    return self.dialect == Dialect.TYPESCRIPT

  def record(self, change: str, before: str = "", after: str = "") -> None:
    """Appends a change log entry and traces it."""
    self.changes.append(change)
    self.tracer.log_rule(change, before, after)
    logger.debug(change)

  def advise(self, message: str) -> None:
    if message in self.advisories:
      return
    self.advisories.append(message)
    self.tracer.log_note(message)

  def add_tags(self, tags: List[str]) -> None:
    """Records the tags of one test; a tag shared by several tests is listed once per test."""
    self.tags.extend(tags)
