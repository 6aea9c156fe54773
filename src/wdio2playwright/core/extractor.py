"""
Structural Extractor.

A single read-only pre-order pass that records imports, test groups, test
cases, hooks, element selectors, commands, assertions, page-object
instantiations and tags.
"""

from typing import List

from wdio2playwright.core.facts import (
  AssertionFact,
  CommandFact,
  DescribeFact,
  ExtractedFacts,
  HookFact,
  ImportBinding,
  ImportFact,
  PageObjectFact,
  SelectorFact,
  SourceSpan,
  TagFact,
  TestCaseFact,
)
from wdio2playwright.core.js.nodes import (
  CallExpression,
  Identifier,
  ImportDeclaration,
  MemberExpression,
  NewExpression,
  ObjectPattern,
  Program,
  Property,
  VariableDeclarator,
)
from wdio2playwright.core.js.queries import callee_name, identifier_name, member_call, require_source, string_argument
from wdio2playwright.core.js.visitor import JsVisitor
from wdio2playwright.core.tags import extract_tags
from wdio2playwright.enums import ImportKind, SelectorKind, TagSource

HOOK_NAMES = ("before", "after", "beforeEach", "afterEach", "beforeAll", "afterAll")
ASSERTION_MATCHERS = ("toBe", "toEqual", "toHaveText", "toBeVisible")
PAGE_OBJECT_MARKERS = ("Page", "Component")


class FactCollector(JsVisitor):
  """Visitor accumulating :class:`ExtractedFacts`."""

  def __init__(self) -> None:
    super().__init__()
    self.facts = ExtractedFacts()

  def visit_ImportDeclaration(self, node: ImportDeclaration) -> bool:
    bindings: List[ImportBinding] = []
    if node.default is not None:
      bindings.append(ImportBinding(kind=ImportKind.DEFAULT, local=node.default.name))
    if node.namespace is not None:
      bindings.append(ImportBinding(kind=ImportKind.NAMESPACE, local=node.namespace.name))
    for spec in node.specifiers:
      bindings.append(ImportBinding(kind=ImportKind.NAMED, local=spec.bound_name, imported=spec.imported.name))
    self.facts.imports.append(ImportFact(source=node.source.value, bindings=bindings, span=SourceSpan.of(node)))
    return False

  def visit_VariableDeclarator(self, node: VariableDeclarator) -> bool:
    source = require_source(node.init)
    if source is None:
      return True
    bindings: List[ImportBinding] = []
    if isinstance(node.target, Identifier):
      bindings.append(ImportBinding(kind=ImportKind.DEFAULT, local=node.target.name))
    elif isinstance(node.target, ObjectPattern):
      for prop in node.target.properties:
        if isinstance(prop, Identifier):
          bindings.append(ImportBinding(kind=ImportKind.NAMED, local=prop.name, imported=prop.name))
        elif isinstance(prop, Property):
          local = identifier_name(prop.value) or identifier_name(prop.key)
          if local is not None:
            bindings.append(ImportBinding(kind=ImportKind.NAMED, local=local, imported=identifier_name(prop.key)))
    self.facts.imports.append(ImportFact(source=source, bindings=bindings, is_require=True, span=SourceSpan.of(node)))
    return True

  def visit_NewExpression(self, node: NewExpression) -> bool:
    name = identifier_name(node.callee)
    if name is not None and any(marker in name for marker in PAGE_OBJECT_MARKERS):
      self.facts.page_objects.append(PageObjectFact(class_name=name, span=SourceSpan.of(node)))
    return True

  def visit_CallExpression(self, node: CallExpression) -> bool:
    span = SourceSpan.of(node)
    name = callee_name(node)
    member = member_call(node)
    receiver = identifier_name(member.value) if member is not None else None
    method = member.attr.name if member is not None else None

    if name == "describe" or (receiver == "test" and method == "describe"):
      self._named_block(node, span, TagSource.DESCRIBE)
    if name == "it" or (name == "test" and not isinstance(self.parent, MemberExpression)):
      self._named_block(node, span, TagSource.TEST)

    if name in HOOK_NAMES:
      self.facts.hooks.append(HookFact(name=name, span=span))
    if receiver == "test" and method in HOOK_NAMES:
      self.facts.hooks.append(HookFact(name=method, qualified=True, span=span))

    if name in ("$", "$$"):
      literal = string_argument(node)
      if literal is not None:
        kind = SelectorKind.SINGLE if name == "$" else SelectorKind.MULTIPLE
        self.facts.selectors.append(SelectorFact(selector=literal.value, kind=kind, span=span))

    if method is not None:
      command = f"browser.{method}" if receiver == "browser" else method
      self.facts.commands.append(CommandFact(name=command, span=span))

    if name == "expect":
      self.facts.assertions.append(AssertionFact(kind="expect", span=span))
    if method in ASSERTION_MATCHERS:
      self.facts.assertions.append(AssertionFact(kind=method, span=span))
    return True

  def _named_block(self, node: CallExpression, span, source: TagSource) -> None:
    literal = string_argument(node)
    if literal is None:
      return
    tags = extract_tags(literal.value)
    if source == TagSource.DESCRIBE:
      self.facts.describes.append(DescribeFact(name=literal.value, tags=tags, span=span))
    else:
      self.facts.tests.append(TestCaseFact(name=literal.value, tags=tags, span=span))
    self.facts.tags.extend(TagFact(tag=tag, source=source, name=literal.value) for tag in tags)


def extract_facts(tree: Program) -> ExtractedFacts:
  """
  Collects the structural facts of a parsed file.

  Args:
      tree: Root of the syntax tree. It is not modified.

  Returns:
      ExtractedFacts: Facts in source pre-order.
  """
  collector = FactCollector()
  collector.walk(tree)
  return collector.facts
