"""
Framework Classifier.

Decides whether a parsed file is written for WebdriverIO (legacy), Playwright
Test (target), both, or neither, from a handful of syntactic markers:

Legacy markers:
    * a call to the ``$`` or ``$$`` element-lookup shorthands
    * an import or ``require`` whose module name contains ``chai``,
      ``webdriverio`` or ``wdio``

Target markers:
    * a member call on the ``page`` fixture (``page.goto(...)``)
    * an import or ``require`` of ``@playwright/test``
"""

import logging

from wdio2playwright.core.js.builders import TARGET_PACKAGE
from wdio2playwright.core.js.nodes import CallExpression, ImportDeclaration, Program
from wdio2playwright.core.js.queries import callee_name, identifier_name, member_call, require_source
from wdio2playwright.core.js.visitor import JsVisitor
from wdio2playwright.enums import FrameworkKind

logger = logging.getLogger(__name__)

LEGACY_LOOKUPS = ("$", "$$")
LEGACY_MODULE_MARKERS = ("chai", "webdriverio", "wdio")


def is_legacy_module(source: str) -> bool:
  return any(marker in source for marker in LEGACY_MODULE_MARKERS)


def is_target_module(source: str) -> bool:
  return source == TARGET_PACKAGE


class _MarkerVisitor(JsVisitor):
  def __init__(self) -> None:
    super().__init__()
    self.legacy = False
    self.target = False

  def _module(self, source: str) -> None:
    if is_target_module(source):
      self.target = True
    elif is_legacy_module(source):
      self.legacy = True

  def visit_ImportDeclaration(self, node: ImportDeclaration) -> bool:
    self._module(node.source.value)
    return False

  def visit_CallExpression(self, node: CallExpression) -> bool:
    if callee_name(node) in LEGACY_LOOKUPS:
      self.legacy = True
    member = member_call(node)
    if member is not None and identifier_name(member.value) == "page":
      self.target = True
    source = require_source(node)
    if source is not None:
      self._module(source)
    return True


def detect_framework(tree: Program) -> FrameworkKind:
  """
  Classifies a parsed file.

  Args:
      tree: Root of the syntax tree.

  Returns:
      FrameworkKind: ``MIXED`` when both marker families occur, the single
      family found otherwise, ``UNKNOWN`` when there are no markers.
  """
  visitor = _MarkerVisitor()
  visitor.walk(tree)
  if visitor.legacy and visitor.target:
    verdict = FrameworkKind.MIXED
  elif visitor.legacy:
    verdict = FrameworkKind.LEGACY
  elif visitor.target:
    verdict = FrameworkKind.TARGET
  else:
    verdict = FrameworkKind.UNKNOWN
  logger.debug("Framework verdict: %s", verdict.value)
  return verdict
