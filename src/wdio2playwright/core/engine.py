"""
Orchestration Engine for WebdriverIO to Playwright migration.

The engine drives one migration from source text to :class:`MigrationResult`:

1.  **Parsing**: a fresh lossless tree for the chosen dialect.
2.  **Classification**: files already written for Playwright are returned
    unchanged.
3.  **Rewriting**: the :class:`MigrationTransformer` applies every rule in one
    traversal, then fixes imports.
4.  **Rendering**: the tree is printed back, preserving untouched text.

Each run owns its tree, change log and :class:`TraceLogger`; engines can be
shared between threads as long as the injected registry is.
"""

import logging
import re
from typing import List, Optional, Union

from pydantic import ValidationError

from wdio2playwright.config import RuntimeConfig
from wdio2playwright.core.classifier import detect_framework
from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.facts import ExtractedFacts
from wdio2playwright.core.js.parser import parse
from wdio2playwright.core.result import MigrationResult
from wdio2playwright.core.rewriter import MigrationTransformer, RewriterContext
from wdio2playwright.core.tracer import TraceLogger
from wdio2playwright.enums import Dialect, FrameworkKind
from wdio2playwright.semantics.registry import CommandRegistry, get_registry

logger = logging.getLogger(__name__)

_SOURCE_SUFFIX = re.compile(r"\.(js|ts)$")

ALREADY_TARGET_NOTE = "File is already using Playwright syntax"

REVIEW_NOTES = (
  "- Custom assertions that may need adjustment",
  "- Complex selectors that could use better Playwright locators",
  "- Async/await patterns",
  "- Explicit waits (Playwright auto-waits)",
)

TYPESCRIPT_REVIEW_NOTES = (
  "- TypeScript type definitions",
  "- Generic type parameters if needed",
)


def generate_migration_notes(changes: List[str], typescript: bool = False, advisories: Optional[List[str]] = None) -> List[str]:
  """
  Builds the review notes attached to a migration.

  Args:
      changes: The change log.
      typescript: Adds the TypeScript review items.
      advisories: Rule-specific hints (selector advisories, manual steps).

  Returns:
      List[str]: Note lines.
  """
  notes = ["Migration completed with the following transformations:", ""]
  notes.extend(f"{i}. {change}" for i, change in enumerate(changes, start=1))
  notes.extend(["", "Manual review recommended for:"])
  notes.extend(REVIEW_NOTES)
  if typescript:
    notes.extend(TYPESCRIPT_REVIEW_NOTES)
  notes.extend(f"- {advisory}" for advisory in advisories or [])
  return notes


class MigrationEngine:
  """
  Converts WebdriverIO test source into Playwright Test source.
  """

  def __init__(self, registry: Optional[CommandRegistry] = None, config: Optional[RuntimeConfig] = None) -> None:
    """
    Args:
        registry: Command mappings to use. Defaults to the process-wide registry.
        config: Runtime settings. Custom commands it declares are registered
            (add-if-absent) in ``registry``.
    """
    self.config = config or RuntimeConfig()
    self.registry = registry if registry is not None else get_registry()
    if self.config.custom_commands:
      self.config.apply_to(self.registry)

  def run(
    self,
    code: str,
    analysis: Optional[Union[ExtractedFacts, dict]] = None,
    typescript: Optional[bool] = None,
  ) -> MigrationResult:
    """
    Executes the migration pipeline.

    Args:
        code: Legacy test source.
        analysis: Facts from a previous analysis; advisory only.
        typescript: Parse and emit TypeScript. Defaults to the config value.

    Returns:
        MigrationResult: Migrated code and logs. ``success`` is False only when
        the source could not be parsed or is nested too deeply to rewrite.
    """
    typescript = self.config.typescript if typescript is None else typescript
    dialect = Dialect.TYPESCRIPT if typescript else Dialect.JAVASCRIPT
    tracer = TraceLogger()
    with tracer.phase("Migration Pipeline", f"wdio -> playwright ({dialect.value})"):
      result = self._pipeline(code, dialect, tracer, analysis)
    result.trace_events = tracer.export()
    return result

  def _pipeline(
    self,
    code: str,
    dialect: Dialect,
    tracer: TraceLogger,
    analysis: Optional[Union[ExtractedFacts, dict]],
  ) -> MigrationResult:
    with tracer.phase("Parse"):
      try:
        tree = parse(code, dialect)
      except ParseFailure as e:
        logger.debug("Parse failure: %s", e)
        tracer.log_note(f"Parse failure: {e}")
        return MigrationResult(code=code, errors=[f"Parse Error: {e}"], success=False)

    with tracer.phase("Classify"):
      verdict = detect_framework(tree)
    if verdict == FrameworkKind.TARGET:
      return MigrationResult(code=code, notes=[ALREADY_TARGET_NOTE], framework=verdict)

    context = RewriterContext(self.registry, dialect, tracer)
    self._use_analysis(context, analysis)
    try:
      with tracer.phase("Rewrite"):
        program = MigrationTransformer(context).transform(tree)
      with tracer.phase("Render"):
        output = program.to_text()
    except RecursionError:
      logger.debug("Rewrite exceeded the recursion limit")
      tracer.log_note("Rewrite aborted: source is nested too deeply")
      return MigrationResult(
        code=code, errors=["Rewrite Error: source is nested too deeply"], success=False, framework=verdict
      )

    logger.debug("Applied %d changes", len(context.changes))
    return MigrationResult(
      code=output,
      changes=context.changes,
      notes=generate_migration_notes(context.changes, context.typescript, context.advisories),
      tags=context.tags,
      framework=verdict,
    )

  @staticmethod
  def _use_analysis(context: RewriterContext, analysis: Optional[Union[ExtractedFacts, dict]]) -> None:
    if analysis is None:
      return
    try:
      facts = analysis if isinstance(analysis, ExtractedFacts) else ExtractedFacts.model_validate(analysis)
    except ValidationError as e:
      logger.debug("Ignoring malformed analysis: %s", e)
      return
    if facts.page_objects:
      names = ", ".join(dict.fromkeys(p.class_name for p in facts.page_objects))
      context.advise(f"Page objects used by this file ({names}) need to be migrated separately")


def migrate(
  code: str,
  analysis: Optional[Union[ExtractedFacts, dict]] = None,
  typescript: bool = False,
  registry: Optional[CommandRegistry] = None,
) -> MigrationResult:
  """
  Migrates one WebdriverIO test file to Playwright Test.

  Args:
      code: Legacy test source.
      analysis: Facts from a previous analysis; advisory only.
      typescript: Parse and emit TypeScript.
      registry: Command mappings. Defaults to the process-wide registry.

  Returns:
      MigrationResult: The migrated code, change log, notes and tags.
  """
  return MigrationEngine(registry=registry).run(code, analysis=analysis, typescript=typescript)


def target_file_name(path: str, typescript: bool = False) -> str:
  """
  Name of the migrated test file.

  ``login.test.js`` becomes ``login.test.spec.js`` (``.spec.ts`` for
  TypeScript). Paths without a ``.js``/``.ts`` suffix are returned unchanged.

  Args:
      path: Path of the legacy test.
      typescript: Whether the output is TypeScript.

  Returns:
      str: Path of the Playwright test.
  """
  return _SOURCE_SUFFIX.sub(".spec.ts" if typescript else ".spec.js", path)
