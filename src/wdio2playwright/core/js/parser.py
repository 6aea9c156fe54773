"""
JavaScript / TypeScript Parser.

Converts source text into the lossless CST defined in
:mod:`wdio2playwright.core.js.nodes`. Tokenising and error recovery are handled
by tree-sitter; this module maps the grammar nodes the rewrite rules care about
onto typed variants and keeps everything else as :class:`Verbatim` nodes.

Grammars:
    * ``tree-sitter-javascript`` for plain JavaScript (JSX allowed).
    * ``tree-sitter-typescript`` for TypeScript.
"""

import logging
import sys
from dataclasses import fields
from typing import Dict, List, Optional, Tuple

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.js.nodes import (
  ArrayExpression,
  ArrowFunction,
  CallExpression,
  FunctionExpression,
  Identifier,
  ImportDeclaration,
  ImportSpecifier,
  JsNode,
  MemberExpression,
  NewExpression,
  ObjectExpression,
  ObjectPattern,
  Origin,
  Program,
  Property,
  StatementBlock,
  StringLiteral,
  VariableDeclaration,
  VariableDeclarator,
  Verbatim,
  unescape_string,
)
from wdio2playwright.enums import Dialect

logger = logging.getLogger(__name__)

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())
_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())

_IDENTIFIER_TYPES = frozenset(
  {
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "statement_identifier",
    "type_identifier",
  }
)

# Grammar nodes whose presence inside an ERROR region means the parser still
# recovered meaningful structure from it.
_RECOVERED_TYPES = frozenset(
  {
    "arrow_function",
    "assignment_expression",
    "call_expression",
    "class_declaration",
    "expression_statement",
    "function_declaration",
    "function_expression",
    "import_statement",
    "lexical_declaration",
    "member_expression",
    "new_expression",
    "statement_block",
    "variable_declaration",
    "variable_declarator",
  }
)

Span = Tuple[int, int]

# Python stack frames used per grammar level by the deepest recursive pass
# (rendering: to_text -> _splice -> _render_slot -> _render_list).
_FRAMES_PER_LEVEL = 4
_RESERVED_FRAMES = 200


def max_nesting_depth() -> int:
  """Deepest grammar tree the recursive passes can handle under the current recursion limit."""
  return max(50, (sys.getrecursionlimit() - _RESERVED_FRAMES) // _FRAMES_PER_LEVEL)


def _language(dialect: Dialect) -> tree_sitter.Language:
  return _TS_LANGUAGE if dialect == Dialect.TYPESCRIPT else _JS_LANGUAGE


def parse(code: str, dialect: Dialect = Dialect.JAVASCRIPT) -> Program:
  """
  Parses source text into a lossless syntax tree.

  Statements the grammar cannot parse are kept as ``Verbatim`` nodes of kind
  ``ERROR``; the rest of the file is converted normally.

  Args:
      code: The source text.
      dialect: Grammar to use.

  Returns:
      Program: The root node. It belongs exclusively to the caller.

  Raises:
      ParseFailure: If the source is not text, nothing in it is recoverable,
          or it is nested deeper than :func:`max_nesting_depth`.
  """
  nul = code.find("\x00")
  if nul != -1:
    raise ParseFailure("Source contains NUL bytes and is not text", code.count("\n", 0, nul) + 1, 0)

  source = code.encode("utf-8")
  parser = tree_sitter.Parser(_language(dialect))
  tree = parser.parse(source)
  _check_recoverable(tree.root_node)
  _check_depth(tree.root_node, max_nesting_depth())
  logger.debug("Parsed %d bytes as %s (errors: %s)", len(source), dialect.value, tree.root_node.has_error)
  return _Converter(source).program(tree.root_node)


def parse_expression(code: str, dialect: Dialect = Dialect.JAVASCRIPT) -> JsNode:
  """
  Parses a single expression, e.g. an object literal such as ``{ state: "visible" }``.

  Args:
      code: Expression source.
      dialect: Grammar to use.

  Returns:
      JsNode: The expression node.

  Raises:
      ParseFailure: If the text is not exactly one expression.
  """
  program = parse(f"({code});", dialect)
  if len(program.body) == 1:
    statement = program.body[0]
    if isinstance(statement, Verbatim) and statement.kind == "expression_statement" and len(statement.children) == 1:
      wrapper = statement.children[0]
      if isinstance(wrapper, Verbatim) and wrapper.kind == "parenthesized_expression" and len(wrapper.children) == 1:
        return wrapper.children[0]
  raise ParseFailure(f"Not a single expression: {code!r}")


def _contains_recovered(node: tree_sitter.Node) -> bool:
  stack = list(node.named_children)
  while stack:
    current = stack.pop()
    if current.type in _RECOVERED_TYPES:
      return True
    stack.extend(current.named_children)
  return False


def _check_recoverable(root: tree_sitter.Node) -> None:
  if not root.has_error:
    return
  if root.type == "ERROR":
    top = [root]
  else:
    top = [c for c in root.named_children if c.type != "comment"]
  if top and all(c.type == "ERROR" and not _contains_recovered(c) for c in top):
    row, column = top[0].start_point
    raise ParseFailure("Unable to parse source: no recoverable statements", row + 1, column)


def _check_depth(root: tree_sitter.Node, limit: int) -> None:
  stack = [(root, 0)]
  while stack:
    node, depth = stack.pop()
    if depth > limit:
      row, column = node.start_point
      raise ParseFailure(f"Source is nested more than {limit} levels deep", row + 1, column)
    stack.extend((child, depth + 1) for child in node.named_children)


class _Converter:
  """
  Maps tree-sitter nodes onto CST variants.

  Handlers are looked up by grammar type (``_convert_<type>``). A handler may
  return None when the node does not have the expected shape, in which case
  the node is kept verbatim.
  """

  def __init__(self, source: bytes) -> None:
    self.source = source

  def program(self, root: tree_sitter.Node) -> Program:
    """Converts the root node, which may itself be an ERROR region."""
    if root.type == "ERROR":
      body = [self._verbatim(root)]
    else:
      body = [self.convert(c) for c in self._named(root)]
    slots = {"body": self._list_span(body, len(self.source))}
    return self._attach(Program(body=body), 0, len(self.source), slots, {"body": "\n"})

  def convert(self, node: tree_sitter.Node) -> JsNode:
    if node.type in _IDENTIFIER_TYPES:
      result: Optional[JsNode] = self._attach(Identifier(self._text(node)), node.start_byte, node.end_byte)
    else:
      handler = getattr(self, f"_convert_{node.type}", None)
      result = handler(node) if handler is not None else None
    if result is None:
      result = self._verbatim(node)
    return result

  # --- Helpers ---

  def _text(self, node: tree_sitter.Node) -> str:
    return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

  @staticmethod
  def _named(node: tree_sitter.Node) -> List[tree_sitter.Node]:
    return [c for c in node.named_children if c.type != "comment"]

  @staticmethod
  def _span(node: JsNode) -> Span:
    return node.origin.start, node.origin.end

  @staticmethod
  def _list_span(items: List[JsNode], empty_at: int) -> Span:
    if not items:
      return empty_at, empty_at
    return items[0].origin.start, items[-1].origin.end

  def _indent_separator(self, items: List[JsNode]) -> str:
    if not items:
      return "\n"
    start = items[0].origin.start
    line_start = self.source.rfind(b"\n", 0, start) + 1
    prefix = self.source[line_start:start]
    return "\n" + (prefix.decode("utf-8") if not prefix.strip() else "")

  def _attach(
    self,
    result: JsNode,
    start: int,
    end: int,
    slots: Optional[Dict[str, Span]] = None,
    separators: Optional[Dict[str, str]] = None,
  ) -> JsNode:
    origin = Origin(self.source, start, end, slots=slots or {}, separators=separators or {})
    for f in fields(result):
      if f.name in ("origin", "replaces"):
        continue
      value = getattr(result, f.name)
      origin.snapshot[f.name] = list(value) if isinstance(value, list) else value
      if isinstance(value, list) and f.name in origin.slots:
        origin.gaps[f.name] = [
          self.source[a.origin.end : b.origin.start].decode("utf-8", errors="replace") for a, b in zip(value, value[1:])
        ]
    result.origin = origin
    return result

  def _verbatim(self, node: tree_sitter.Node) -> Verbatim:
    children = [self.convert(c) for c in self._named(node)]
    slots = {"children": self._list_span(children, node.start_byte)} if children else {}
    result = Verbatim(kind=node.type, children=children, text=self._text(node))
    return self._attach(result, node.start_byte, node.end_byte, slots)

  def _sequence(self, node: tree_sitter.Node) -> Tuple[List[JsNode], Span]:
    """Converts the named children of a bracketed list (``(...)``, ``{...}``, ``[...]``)."""
    items = [self.convert(c) for c in self._named(node)]
    return items, self._list_span(items, node.start_byte + 1)

  # --- Typed variants ---

  def _convert_string(self, node: tree_sitter.Node) -> Optional[JsNode]:
    text = self._text(node)
    quote = text[:1]
    if quote not in ("'", '"'):
      return None
    raw = text[1:-1] if len(text) >= 2 and text.endswith(quote) else text[1:]
    return self._attach(StringLiteral(unescape_string(raw), quote), node.start_byte, node.end_byte)

  def _convert_member_expression(self, node: tree_sitter.Node) -> Optional[JsNode]:
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None or prop is None or prop.type not in _IDENTIFIER_TYPES:
      return None
    value = self.convert(obj)
    attr = self.convert(prop)
    optional = any(c.type in ("?.", "optional_chain") for c in node.children)
    slots = {"value": self._span(value), "attr": self._span(attr)}
    return self._attach(MemberExpression(value, attr, optional), node.start_byte, node.end_byte, slots)

  def _convert_call_expression(self, node: tree_sitter.Node) -> Optional[JsNode]:
    function = node.child_by_field_name("function")
    arguments = node.child_by_field_name("arguments")
    if function is None or arguments is None or arguments.type != "arguments":
      return None
    callee = self.convert(function)
    args, args_span = self._sequence(arguments)
    slots = {"callee": self._span(callee), "arguments": args_span}
    return self._attach(CallExpression(callee, args), node.start_byte, node.end_byte, slots)

  def _convert_new_expression(self, node: tree_sitter.Node) -> Optional[JsNode]:
    constructor = node.child_by_field_name("constructor")
    if constructor is None:
      return None
    callee = self.convert(constructor)
    slots = {"callee": self._span(callee)}
    args: List[JsNode] = []
    arguments = node.child_by_field_name("arguments")
    if arguments is not None:
      args, slots["arguments"] = self._sequence(arguments)
    return self._attach(NewExpression(callee, args), node.start_byte, node.end_byte, slots)

  def _convert_import_statement(self, node: tree_sitter.Node) -> Optional[JsNode]:
    source_node = node.child_by_field_name("source")
    if source_node is None or source_node.type != "string":
      return None
    source = self.convert(source_node)
    if not isinstance(source, StringLiteral):
      return None
    slots = {"source": self._span(source)}
    default = namespace = None
    specifiers: List[JsNode] = []
    for clause in self._named(node):
      if clause.type != "import_clause":
        continue
      for part in self._named(clause):
        if part.type == "identifier":
          default = self.convert(part)
          slots["default"] = self._span(default)
        elif part.type == "namespace_import":
          names = [c for c in self._named(part) if c.type == "identifier"]
          if names:
            namespace = self.convert(names[0])
            slots["namespace"] = self._span(namespace)
        elif part.type == "named_imports":
          specifiers, slots["specifiers"] = self._sequence(part)
    type_only = any(not c.is_named and c.type == "type" for c in node.children)
    result = ImportDeclaration(source, default, namespace, specifiers, type_only)
    return self._attach(result, node.start_byte, node.end_byte, slots)

  def _convert_import_specifier(self, node: tree_sitter.Node) -> Optional[JsNode]:
    name = node.child_by_field_name("name")
    if name is None:
      return None
    imported = self._attach(Identifier(self._text(name)), name.start_byte, name.end_byte)
    slots = {"imported": self._span(imported)}
    local = None
    alias = node.child_by_field_name("alias")
    if alias is not None:
      local = self.convert(alias)
      slots["local"] = self._span(local)
    return self._attach(ImportSpecifier(imported, local), node.start_byte, node.end_byte, slots)

  def _convert_lexical_declaration(self, node: tree_sitter.Node) -> Optional[JsNode]:
    named = self._named(node)
    if not named or any(c.type != "variable_declarator" for c in named):
      return None
    declarators = [self.convert(c) for c in named]
    kind = node.children[0].type
    slots = {"declarators": self._list_span(declarators, named[0].start_byte)}
    return self._attach(VariableDeclaration(kind, declarators), node.start_byte, node.end_byte, slots)

  _convert_variable_declaration = _convert_lexical_declaration

  def _convert_variable_declarator(self, node: tree_sitter.Node) -> Optional[JsNode]:
    name = node.child_by_field_name("name")
    if name is None:
      return None
    target = self.convert(name)
    slots = {"target": self._span(target)}
    init = None
    value = node.child_by_field_name("value")
    if value is not None:
      init = self.convert(value)
      slots["init"] = self._span(init)
    return self._attach(VariableDeclarator(target, init), node.start_byte, node.end_byte, slots)

  def _params(self, node: tree_sitter.Node) -> Optional[Tuple[List[JsNode], Span]]:
    parameters = node.child_by_field_name("parameters")
    if parameters is not None:
      return self._sequence(parameters)
    single = node.child_by_field_name("parameter")
    if single is not None:
      param = self.convert(single)
      return [param], self._span(param)
    return None

  def _convert_arrow_function(self, node: tree_sitter.Node) -> Optional[JsNode]:
    body_node = node.child_by_field_name("body")
    params = self._params(node)
    if body_node is None or params is None:
      return None
    body = self.convert(body_node)
    is_async = any(c.type == "async" for c in node.children)
    slots = {"params": params[1], "body": self._span(body)}
    return self._attach(ArrowFunction(params[0], body, is_async), node.start_byte, node.end_byte, slots)

  def _convert_function_expression(self, node: tree_sitter.Node) -> Optional[JsNode]:
    body_node = node.child_by_field_name("body")
    params = self._params(node)
    if body_node is None or params is None:
      return None
    body = self.convert(body_node)
    slots = {"params": params[1], "body": self._span(body)}
    name = None
    name_node = node.child_by_field_name("name")
    if name_node is not None:
      name = self.convert(name_node)
      slots["name"] = self._span(name)
    is_async = any(c.type == "async" for c in node.children)
    result = FunctionExpression(name, params[0], body, is_async)
    return self._attach(result, node.start_byte, node.end_byte, slots)

  # Older grammar releases call function expressions "function".
  _convert_function = _convert_function_expression

  def _convert_object(self, node: tree_sitter.Node) -> Optional[JsNode]:
    properties, span = self._sequence(node)
    return self._attach(ObjectExpression(properties), node.start_byte, node.end_byte, {"properties": span})

  def _convert_object_pattern(self, node: tree_sitter.Node) -> Optional[JsNode]:
    properties, span = self._sequence(node)
    return self._attach(ObjectPattern(properties), node.start_byte, node.end_byte, {"properties": span})

  def _convert_pair(self, node: tree_sitter.Node) -> Optional[JsNode]:
    key_node = node.child_by_field_name("key")
    value_node = node.child_by_field_name("value")
    if key_node is None or value_node is None:
      return None
    key = self.convert(key_node)
    value = self.convert(value_node)
    slots = {"key": self._span(key), "value": self._span(value)}
    return self._attach(Property(key, value), node.start_byte, node.end_byte, slots)

  _convert_pair_pattern = _convert_pair

  def _convert_array(self, node: tree_sitter.Node) -> Optional[JsNode]:
    elements, span = self._sequence(node)
    return self._attach(ArrayExpression(elements), node.start_byte, node.end_byte, {"elements": span})

  def _convert_statement_block(self, node: tree_sitter.Node) -> Optional[JsNode]:
    body, span = self._sequence(node)
    separators = {"body": self._indent_separator(body)}
    return self._attach(StatementBlock(body), node.start_byte, node.end_byte, {"body": span}, separators)
