"""
Import Fixer.

Runs once the whole tree has been rewritten:

1. Adds ``import { test, expect } from '@playwright/test'`` when the file has
   no Playwright import (or require) yet.
2. For TypeScript, imports the ``Page`` type and annotates every ``{ page }``
   parameter the rewriter injected.
"""

from typing import List

from wdio2playwright.core.classifier import is_target_module
from wdio2playwright.core.js.builders import page_annotation, target_import
from wdio2playwright.core.js.nodes import (
  Identifier,
  ImportDeclaration,
  ImportSpecifier,
  Program,
  VariableDeclaration,
  Verbatim,
)
from wdio2playwright.core.js.queries import require_source
from wdio2playwright.core.rewriter.context import RewriterContext


def target_imports(program: Program) -> List[ImportDeclaration]:
  return [s for s in program.body if isinstance(s, ImportDeclaration) and is_target_module(s.source.value)]


def has_target_import(program: Program) -> bool:
  """True if the program already imports or requires @playwright/test at top level."""
  if target_imports(program):
    return True
  for statement in program.body:
    if isinstance(statement, VariableDeclaration):
      for declarator in statement.declarators:
        source = require_source(declarator.init)
        if source is not None and is_target_module(source):
          return True
  return False


def insertion_index(program: Program) -> int:
  """Position of the first statement; an interpreter line (``#!...``) must stay first."""
  body = program.body
  if body and isinstance(body[0], Verbatim) and body[0].kind == "hash_bang_line":
    return 1
  return 0


class ImportFixer:
  """Adds the Playwright import and TypeScript typing to a rewritten program."""

  def __init__(self, context: RewriterContext) -> None:
    self.ctx = context

  def apply(self, program: Program) -> Program:
    if not (self.ctx.has_target_import or has_target_import(program)):
      program.body.insert(insertion_index(program), target_import())
      self.ctx.has_target_import = True
      self.ctx.tracer.log_import("Inserted @playwright/test import")
      self.ctx.record("Added @playwright/test import")

    if self.ctx.typescript:
      self._import_page_type(program)
      self._annotate_fixtures()
    return program

  def _import_page_type(self, program: Program) -> None:
    declarations = target_imports(program)
    for declaration in declarations:
      if any(spec.bound_name == "Page" for spec in declaration.specifiers):
        return
    for declaration in declarations:
      # `import * as pw, { Page }` is not valid syntax.
      if declaration.namespace is None:
        declaration.specifiers.append(ImportSpecifier(Identifier("Page")))
        break
    else:
      program.body.insert(insertion_index(program), target_import("Page"))
    self.ctx.tracer.log_import("Imported Page type")
    self.ctx.record("Added Page type import for TypeScript")

  def _annotate_fixtures(self) -> None:
    for pattern in self.ctx.injected:
      pattern.annotation = page_annotation()
    if self.ctx.injected:
      self.ctx.record("Added TypeScript type annotations")
