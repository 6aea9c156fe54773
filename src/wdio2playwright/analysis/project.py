"""
Project State Detection.

Summarises a project from an in-memory ``{path: content}`` map: which
configurations exist, which test files are already migrated, which page
objects can be reused and where tests, pages and fixtures live.
"""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from wdio2playwright.core.classifier import detect_framework
from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.js.parser import parse
from wdio2playwright.enums import Dialect

logger = logging.getLogger(__name__)

TEST_FILE_PATTERN = re.compile(r"\.(spec|test)\.(js|ts)$")
SOURCE_FILE_PATTERN = re.compile(r"\.(js|ts)$")

STRUCTURE_DIRS = {
  "tests_dir": ("/tests/", "/test/"),
  "pages_dir": ("/pages/",),
  "fixtures_dir": ("/fixtures/",),
}


class ProjectStructure(BaseModel):
  """Directory prefixes (ending in ``/``) of the conventional folders."""

  tests_dir: Optional[str] = None
  pages_dir: Optional[str] = None
  fixtures_dir: Optional[str] = None


class ProjectState(BaseModel):
  has_playwright_config: bool = False
  playwright_config_path: Optional[str] = None
  has_wdio_config: bool = False
  wdio_config_path: Optional[str] = None
  playwright_tests: List[str] = Field(default_factory=list)
  wdio_tests: List[str] = Field(default_factory=list)
  mixed_tests: List[str] = Field(default_factory=list)
  unparsed_tests: List[str] = Field(default_factory=list)
  page_objects: List[str] = Field(default_factory=list)
  structure: ProjectStructure = Field(default_factory=ProjectStructure)
  package_json: Optional[Dict[str, Any]] = None
  recommendations: List[str] = Field(default_factory=list)


def is_page_object(path: str, content: str) -> bool:
  """True for a JS/TS module under a page path exporting a class built from ``page``."""
  lower = path.lower()
  return (
    "page" in lower
    and SOURCE_FILE_PATTERN.search(lower) is not None
    and "export class" in content
    and "constructor(page" in content
  )


def _directory_prefix(path: str, markers) -> Optional[str]:
  # Root-relative paths ("pages/x.js") still match "/pages/".
  normalized = "/" + path.replace("\\", "/").lstrip("/")
  lower = normalized.lower()
  for marker in markers:
    index = lower.find(marker)
    if index != -1:
      prefix = normalized[: index + len(marker)]
      return prefix if path.startswith(("/", "\\")) else prefix[1:]
  return None


def _classify_test(state: ProjectState, path: str, content: str) -> None:
  try:
    tree = parse(content, Dialect.for_path(path))
  except ParseFailure as e:
    logger.debug("Skipping unparsable test %s: %s", path, e)
    state.unparsed_tests.append(path)
    return
  verdict = detect_framework(tree)
  if verdict.is_target:
    state.playwright_tests.append(path)
  elif verdict.is_legacy:
    state.wdio_tests.append(path)
  elif verdict.is_mixed:
    state.mixed_tests.append(path)


def _recommendations(state: ProjectState) -> List[str]:
  recommendations = []
  if state.has_playwright_config and state.wdio_tests:
    recommendations.append("Playwright already configured. Migrate remaining WebdriverIO tests.")
  if state.has_wdio_config and not state.has_playwright_config:
    recommendations.append("Create a playwright.config to replace wdio.conf")
  if state.mixed_tests:
    recommendations.append(f"{len(state.mixed_tests)} tests have mixed WebdriverIO/Playwright code - complete migration")
  if state.page_objects:
    recommendations.append(f"{len(state.page_objects)} existing page objects found - can be reused or extended")
  if state.structure.pages_dir:
    recommendations.append(f"Use existing pages directory: {state.structure.pages_dir}")
  return recommendations


def detect_project_state(files: Mapping[str, str]) -> ProjectState:
  """
  Inspects the files of a project.

  Args:
      files: Mapping of project-relative path to file content.

  Returns:
      ProjectState: Configurations, classified tests, page objects, layout and
      recommendations. Paths keep the order of ``files``.
  """
  state = ProjectState()
  for path, content in files.items():
    lower = path.lower()

    if "playwright.config" in lower:
      state.has_playwright_config = True
      state.playwright_config_path = path
    if "wdio.conf" in lower:
      state.has_wdio_config = True
      state.wdio_config_path = path

    if TEST_FILE_PATTERN.search(lower):
      _classify_test(state, path, content)

    if is_page_object(path, content):
      state.page_objects.append(path)

    for field, markers in STRUCTURE_DIRS.items():
      prefix = _directory_prefix(path, markers)
      if prefix is not None:
        setattr(state.structure, field, prefix)

    if lower.endswith("package.json"):
      try:
        state.package_json = json.loads(content)
      except json.JSONDecodeError as e:
        logger.debug("Ignoring malformed %s: %s", path, e)

  state.recommendations = _recommendations(state)
  return state
