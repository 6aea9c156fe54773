"""
Single-file Analysis Report.

Combines the framework verdict and the structural facts of a file into a
report with selector suggestions, a complexity score and migration
recommendations.
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from wdio2playwright.core.classifier import detect_framework
from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.extractor import extract_facts
from wdio2playwright.core.facts import (
  AssertionFact,
  CommandFact,
  DescribeFact,
  ExtractedFacts,
  HookFact,
  ImportFact,
  PageObjectFact,
  SelectorFact,
  TagFact,
  TestCaseFact,
)
from wdio2playwright.core.js.parser import parse
from wdio2playwright.core.selectors import SelectorSuggestion, generate_selector_suggestions
from wdio2playwright.enums import ComplexityLevel, Dialect, FrameworkKind

logger = logging.getLogger(__name__)

COMPLEXITY_WEIGHTS: Dict[str, int] = {
  "selectors": 2,
  "commands": 1,
  "assertions": 1,
  "hooks": 3,
  "page_objects": 5,
}

MEDIUM_THRESHOLD = 10
HIGH_THRESHOLD = 30

WAIT_MARKERS = ("wait", "pause")
COMPLEX_SELECTOR_MARKERS = ("//", ":nth-child")


class FileStructure(BaseModel):
  imports: List[ImportFact] = Field(default_factory=list)
  describes: List[DescribeFact] = Field(default_factory=list)
  tests: List[TestCaseFact] = Field(default_factory=list)
  hooks: List[HookFact] = Field(default_factory=list)


class SelectorReport(BaseModel):
  found: List[SelectorFact] = Field(default_factory=list)
  suggestions: List[SelectorSuggestion] = Field(default_factory=list)


class Complexity(BaseModel):
  """Weighted count of the constructs that need migrating."""

  score: int = 0
  level: ComplexityLevel = ComplexityLevel.LOW
  factors: Dict[str, int] = Field(default_factory=dict)


class AnalysisReport(BaseModel):
  """
  Analysis of one test file.

  On a parse failure ``success`` is False, ``errors`` holds the message and
  every other section is empty.
  """

  file_path: str = "unknown.js"
  framework: FrameworkKind = FrameworkKind.UNKNOWN
  structure: FileStructure = Field(default_factory=FileStructure)
  selectors: SelectorReport = Field(default_factory=SelectorReport)
  commands: List[CommandFact] = Field(default_factory=list)
  assertions: List[AssertionFact] = Field(default_factory=list)
  page_objects: List[PageObjectFact] = Field(default_factory=list)
  tags: List[TagFact] = Field(default_factory=list)
  complexity: Complexity = Field(default_factory=Complexity)
  recommendations: List[str] = Field(default_factory=list)
  errors: List[str] = Field(default_factory=list)
  success: bool = True


def calculate_complexity(facts: ExtractedFacts) -> Complexity:
  """
  Scores the migration effort of a file.

  Args:
      facts: Extracted structure.

  Returns:
      Complexity: Score, bucket and the raw counts.
  """
  factors = {name: len(getattr(facts, name)) for name in COMPLEXITY_WEIGHTS}
  score = sum(COMPLEXITY_WEIGHTS[name] * count for name, count in factors.items())
  if score < MEDIUM_THRESHOLD:
    level = ComplexityLevel.LOW
  elif score < HIGH_THRESHOLD:
    level = ComplexityLevel.MEDIUM
  else:
    level = ComplexityLevel.HIGH
  return Complexity(score=score, level=level, factors=factors)


def generate_recommendations(framework: FrameworkKind, facts: ExtractedFacts) -> List[str]:
  if framework.is_target:
    return ["Already using Playwright - no migration needed"]

  recommendations = []
  if framework.is_mixed:
    recommendations.append("Mixed WebdriverIO/Playwright code detected - complete the migration")
  if framework.is_legacy:
    recommendations.append("Run 'wdio2playwright migrate' to convert this test")

  waits = [c for c in facts.commands if any(m in c.name for m in WAIT_MARKERS)]
  if waits:
    recommendations.append(f"{len(waits)} explicit waits found - Playwright auto-waits, most can be removed")

  complex_selectors = [s for s in facts.selectors if any(m in s.selector for m in COMPLEX_SELECTOR_MARKERS)]
  if complex_selectors:
    recommendations.append(
      f"{len(complex_selectors)} complex selectors found - consider using data-test-id attributes"
    )

  if facts.page_objects:
    recommendations.append("Page Objects detected - they need migration too")

  if facts.tags:
    recommendations.append(
      f"{len(facts.tags)} tags found [{', '.join(facts.unique_tags)}] - will be migrated to Playwright tag annotations"
    )
  return recommendations


def analyze(code: str, file_path: str = "unknown.js", dialect: Optional[Dialect] = None) -> AnalysisReport:
  """
  Analyses a test file without modifying it.

  Args:
      code: Source text.
      file_path: Used for reporting and, when ``dialect`` is omitted, to pick
          the grammar.
      dialect: Grammar override.

  Returns:
      AnalysisReport: The report. Parse failures are reported, not raised.
  """
  dialect = dialect or Dialect.for_path(file_path)
  try:
    tree = parse(code, dialect)
  except ParseFailure as e:
    logger.debug("Cannot analyse %s: %s", file_path, e)
    return AnalysisReport(file_path=file_path, errors=[f"Parse Error: {e}"], success=False)

  framework = detect_framework(tree)
  facts = extract_facts(tree)
  return AnalysisReport(
    file_path=file_path,
    framework=framework,
    structure=FileStructure(imports=facts.imports, describes=facts.describes, tests=facts.tests, hooks=facts.hooks),
    selectors=SelectorReport(
      found=facts.selectors,
      suggestions=generate_selector_suggestions([s.selector for s in facts.selectors]),
    ),
    commands=facts.commands,
    assertions=facts.assertions,
    page_objects=facts.page_objects,
    tags=facts.tags,
    complexity=calculate_complexity(facts),
    recommendations=generate_recommendations(framework, facts),
  )
