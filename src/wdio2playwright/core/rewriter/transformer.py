"""
Migration Transformer.

A :class:`JsTransformer` applying the WebdriverIO to Playwright rewrite rules in
one post-order traversal. Each rule is a ``leave_<Variant>`` arm with a guard:

* ``leave_ImportDeclaration``: ``import ... from 'chai'`` becomes the
  ``@playwright/test`` import.
* ``leave_VariableDeclaration``: ``require('chai')`` declarators are replaced by
  an import placed before the declaration.
* ``leave_CallExpression``: test groups, test cases (with tag migration and
  ``{ page }`` injection), hooks, ``$``/``$$`` lookups and command mappings.
* ``leave_Program``: import fixing and TypeScript typing (see ``imports.py``).
"""

import logging
from typing import List, Optional, Union

from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.js.builders import member_chain, page_fixture, tag_options, target_import
from wdio2playwright.core.js.nodes import (
  CallExpression,
  Identifier,
  ImportDeclaration,
  JsNode,
  MemberExpression,
  ObjectExpression,
  Program,
  Property,
  StringLiteral,
  VariableDeclaration,
)
from wdio2playwright.core.js.parser import parse_expression
from wdio2playwright.core.js.queries import identifier_name, is_function, require_source, string_argument
from wdio2playwright.core.js.visitor import FlattenSentinel, JsTransformer, RemovalSentinel
from wdio2playwright.core.classifier import is_target_module
from wdio2playwright.core.rewriter.context import RewriterContext, source_of
from wdio2playwright.core.rewriter.imports import ImportFixer, has_target_import
from wdio2playwright.core.selectors import transform_selector
from wdio2playwright.core.tags import extract_tags, strip_tags
from wdio2playwright.semantics.schema import CommandMapping

logger = logging.getLogger(__name__)

HOOK_MAP = {
  "before": "beforeAll",
  "after": "afterAll",
  "beforeEach": "beforeEach",
  "afterEach": "afterEach",
  "beforeAll": "beforeAll",
  "afterAll": "afterAll",
}

# Playwright only provides worker-scoped fixtures to these hooks.
_WORKER_HOOKS = ("beforeAll", "afterAll")

RUNNER_MODIFIERS = ("only", "skip")

LEGACY_ASSERTION_MODULE = "chai"


def _property_key(node: JsNode) -> Optional[str]:
  key = node.key if isinstance(node, Property) else node
  if isinstance(key, Identifier):
    return key.name
  if isinstance(key, StringLiteral):
    return key.value
  return None


class MigrationTransformer(JsTransformer):
  """
  Rewrites a legacy test file in place.

  Args:
      context: Per-run state (registry, dialect, change log).
  """

  def __init__(self, context: RewriterContext) -> None:
    super().__init__()
    self.ctx = context

  # --- Imports ---

  def visit_Program(self, node: Program) -> bool:
    self.ctx.has_target_import = has_target_import(node)
    return True

  def leave_ImportDeclaration(
    self, original: ImportDeclaration, updated: ImportDeclaration
  ) -> Union[JsNode, RemovalSentinel]:
    source = updated.source.value
    if is_target_module(source):
      self.ctx.has_target_import = True
      return updated
    if LEGACY_ASSERTION_MODULE not in source:
      return updated
    if self.ctx.has_target_import:
      self.ctx.record("Removed chai import", source_of(updated), "")
      return RemovalSentinel.REMOVE
    replacement = target_import()
    self.ctx.has_target_import = True
    self.ctx.record("Replaced chai import with @playwright/test", source_of(updated), replacement.to_text())
    return replacement

  def leave_VariableDeclaration(
    self, original: VariableDeclaration, updated: VariableDeclaration
  ) -> Union[JsNode, FlattenSentinel, RemovalSentinel]:
    kept = []
    removed = False
    for declarator in updated.declarators:
      source = require_source(declarator.init)
      if source is not None and is_target_module(source):
        self.ctx.has_target_import = True
      if source is not None and LEGACY_ASSERTION_MODULE in source:
        removed = True
      else:
        kept.append(declarator)
    if not removed:
      return updated

    before = source_of(updated)
    updated.declarators = kept
    replacement: List[JsNode] = [] if self.ctx.has_target_import else [target_import()]
    if kept:
      replacement.append(updated)
    self.ctx.has_target_import = True
    self.ctx.record(
      "Replaced chai require with @playwright/test import",
      before,
      "\n".join(node.to_text() for node in replacement),
    )
    if not replacement:
      return RemovalSentinel.REMOVE
    return FlattenSentinel(replacement)

  # --- Calls ---

  def leave_CallExpression(self, original: CallExpression, updated: CallExpression) -> JsNode:
    callee = updated.callee
    name = identifier_name(callee)
    if name == "describe":
      return self._rewrite_group(updated)
    if name == "it":
      return self._rewrite_case(updated, Identifier("test"))
    if name in HOOK_MAP:
      return self._rewrite_hook(updated, name)
    if name in ("$", "$$"):
      return self._rewrite_lookup(updated, name)
    if isinstance(callee, MemberExpression):
      runner = identifier_name(callee.value)
      if runner in ("describe", "it") and callee.attr.name in RUNNER_MODIFIERS:
        return self._rewrite_modifier(updated, callee, runner)
      return self._rewrite_command(updated, callee)
    return updated

  def _rewrite_group(self, call: CallExpression) -> CallExpression:
    before = source_of(call.callee)
    call.callee = member_chain(["test", "describe"])
    self.ctx.record("Transformed describe to test.describe", before, call.callee.to_text())
    return call

  def _rewrite_modifier(self, call: CallExpression, callee: MemberExpression, runner: str) -> CallExpression:
    modifier = callee.attr.name
    if runner == "describe":
      call.callee = member_chain(["test", "describe", modifier])
      self.ctx.record(f"Transformed describe.{modifier} to test.describe.{modifier}")
      return call
    return self._rewrite_case(call, member_chain(["test", modifier]))

  def _rewrite_case(self, call: CallExpression, new_callee: JsNode) -> CallExpression:
    before = source_of(call)
    call.callee = new_callee
    literal = string_argument(call)
    if literal is not None:
      tags = extract_tags(literal.value)
      if tags and len(call.arguments) > 1 and not is_function(call.arguments[1]):
        self.ctx.advise(
          f"Test '{literal.value}' already has a second argument; tags [{', '.join(tags)}] were left in the name"
        )
      elif tags:
        literal.value = strip_tags(literal.value)
        call.arguments.insert(1, tag_options(tags))
        self.ctx.add_tags(tags)
        self.ctx.record(f"Migrated tags [{', '.join(tags)}] to Playwright tag annotation")
    self._inject_page(call)
    self.ctx.record("Transformed it to test with page fixture", before, call.callee.to_text())
    return call

  def _rewrite_hook(self, call: CallExpression, name: str) -> CallExpression:
    mapped = HOOK_MAP[name]
    call.callee = member_chain(["test", mapped])
    if self._inject_page(call) and mapped in _WORKER_HOOKS:
      self.ctx.advise(f"test.{mapped} cannot use the page fixture; create a page with browser.newPage() instead")
    self.ctx.record(f"Transformed {name} to test.{mapped}")
    return call

  def _inject_page(self, call: CallExpression) -> bool:
    """Adds ``{ page }`` to the first function argument if it takes no parameters."""
    for argument in call.arguments:
      if is_function(argument):
        if argument.params:
          return False
        pattern = page_fixture()
        argument.params.append(pattern)
        self.ctx.injected.append(pattern)
        return True
    return False

  def _rewrite_lookup(self, call: CallExpression, name: str) -> JsNode:
    literal = string_argument(call)
    if literal is None:
      self.ctx.advise(f"{name}() with a dynamic selector was left unchanged")
      return call
    result = transform_selector(literal.value)
    if result.advisory:
      self.ctx.advise(f"{literal.value}: {result.advisory}")
    self.ctx.record(f"Transformed {name}('{literal.value}') to {result.code}", source_of(call), result.code)
    return result.to_node()

  def _rewrite_command(self, call: CallExpression, callee: MemberExpression) -> CallExpression:
    method = callee.attr.name
    registry = self.ctx.registry

    if identifier_name(callee.value) == "browser":
      qualified = f"browser.{method}"
      mapping = registry.get(qualified)
      if mapping is not None:
        path = mapping.path
        if path is None or len(path) < 2:
          self.ctx.advise(f"{qualified}() maps to {mapping.target}; migrate it manually")
          return call
        before = source_of(call.callee)
        call.callee = member_chain(path)
        self._apply_options(call, mapping)
        self.ctx.record(f"Transformed {qualified} to {mapping.target}", before, call.callee.to_text())
        return call
      if registry.get(method) is None:
        self.ctx.advise(f"No Playwright mapping for {qualified}(); migrate it manually")
        return call

    mapping = registry.get(method)
    if mapping is None:
      logger.debug("No mapping for .%s(), left unchanged", method)
      self.ctx.tracer.log_inspection(f".{method}()", "unmapped")
      return call
    path = mapping.path
    if path is None or len(path) != 1:
      self.ctx.advise(f".{method}() maps to {mapping.target}; migrate it manually")
      return call
    if path[0] != method:
      callee.attr = Identifier(path[0])
      self.ctx.record(f"Transformed .{method}() to .{mapping.target}()")
    self._apply_options(call, mapping)
    return call

  def _apply_options(self, call: CallExpression, mapping: CommandMapping) -> None:
    """Adds the mapping's option literal as first argument, or merges it into one."""
    if not mapping.options:
      return
    try:
      options = parse_expression(mapping.options, self.ctx.dialect)
    except ParseFailure:
      options = None
    if not isinstance(options, ObjectExpression):
      self.ctx.advise(f"Options {mapping.options!r} for {mapping.target} are not an object literal")
      return

    if not call.arguments:
      call.arguments.append(options)
      return
    first = call.arguments[0]
    if isinstance(first, ObjectExpression):
      present = {_property_key(p) for p in first.properties}
      first.properties[0:0] = [p for p in options.properties if _property_key(p) not in present]
      return
    self.ctx.advise(f"{mapping.target}() expects options {mapping.options}; review its arguments")

  # --- Program ---

  def leave_Program(self, original: Program, updated: Program) -> Program:
    return ImportFixer(self.ctx).apply(updated)
