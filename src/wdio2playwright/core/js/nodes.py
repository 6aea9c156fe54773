"""
JavaScript Concrete Syntax Tree (CST) Nodes.

This module defines the closed set of dataclasses used to represent test
source code. Nodes produced by the parser carry an :class:`Origin` that remembers
the original source bytes and the positions of every child slot, which makes
rendering lossless:

* An untouched subtree renders byte-for-byte.
* A subtree whose children were replaced re-uses the original text around the
  child slots (whitespace, comments, semicolons, trailing commas survive).
* A node built by hand (or whose own scalar fields changed) renders from its
  fields with a canonical layout.

Constructs the rewrite rules never inspect are kept as :class:`Verbatim` nodes,
which still expose their named children so that rewrites can reach calls nested
inside arbitrary statements.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Tuple


@dataclass
class Origin:
  """
  Source bookkeeping attached to a parsed node.

  Attributes:
      source: The complete UTF-8 encoded source the node was parsed from.
      start: Byte offset of the first byte of the node.
      end: Byte offset one past the last byte of the node.
      slots: Maps child field names to the byte range they occupied.
          Empty lists record a zero-width range at the insertion point.
      snapshot: Field values as they were right after parsing. Lists are
          shallow copies so later in-place edits are detectable.
      gaps: For list fields, the original text between consecutive elements.
      separators: For list fields, the separator used for inserted elements.
  """

  source: bytes
  start: int
  end: int
  slots: Dict[str, Tuple[int, int]] = field(default_factory=dict)
  snapshot: Dict[str, Any] = field(default_factory=dict)
  gaps: Dict[str, List[str]] = field(default_factory=dict)
  separators: Dict[str, str] = field(default_factory=dict)

  def text(self, start: Optional[int] = None, end: Optional[int] = None) -> str:
    """Decodes a byte range of the source (defaults to the node range)."""
    lo = self.start if start is None else start
    hi = self.end if end is None else end
    return self.source[lo:hi].decode("utf-8", errors="replace")

  def position(self, offset: int) -> Tuple[int, int]:
    """
    Converts a byte offset into a ``(line, column)`` pair.

    Lines are 1-based, columns are 0-based and counted in characters.
    """
    line_start = self.source.rfind(b"\n", 0, offset) + 1
    line = self.source.count(b"\n", 0, offset) + 1
    column = len(self.source[line_start:offset].decode("utf-8", errors="replace"))
    return line, column


@dataclass
class JsNode(ABC):
  """
  Abstract base class for all JavaScript CST nodes.

  Subclasses list the names of their child fields in ``_children``; every other
  dataclass field is a scalar that is compared against the origin snapshot when
  deciding whether the original text can be reused.
  """

  _children: ClassVar[Tuple[str, ...]] = ()
  _separators: ClassVar[Dict[str, str]] = {}

  origin: Optional[Origin] = field(default=None, init=False, repr=False, compare=False)
  replaces: Optional["JsNode"] = field(default=None, init=False, repr=False, compare=False)

  def to_text(self) -> str:
    """Returns the source text of the node."""
    if self.origin is None or self._is_dirty():
      return self.render()
    return self._splice()

  @abstractmethod
  def render(self) -> str:
    """Renders the node from its fields, ignoring any original text."""

  def child_nodes(self) -> List["JsNode"]:
    """Returns the direct children in field order."""
    result: List[JsNode] = []
    for name in self._children:
      value = getattr(self, name)
      if isinstance(value, list):
        result.extend(v for v in value if isinstance(v, JsNode))
      elif isinstance(value, JsNode):
        result.append(value)
    return result

  @property
  def span(self) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Start and end ``(line, column)`` of a parsed node, else None."""
    if self.origin is None:
      return None
    return self.origin.position(self.origin.start), self.origin.position(self.origin.end)

  def _scalar_names(self) -> List[str]:
    return [f.name for f in fields(self) if f.name not in self._children and f.name not in ("origin", "replaces")]

  def _is_dirty(self) -> bool:
    snapshot = self.origin.snapshot
    for name in self._scalar_names():
      if snapshot.get(name) != getattr(self, name):
        return True
    for name in self._children:
      if name in self.origin.slots:
        continue
      # A child with no recorded slot can only be reproduced verbatim while unchanged.
      before = snapshot.get(name)
      after = getattr(self, name)
      if isinstance(after, list):
        if len(after) != len(before or []) or any(a is not b for a, b in zip(after, before or [])):
          return True
      elif after is not before:
        return True
    return False

  def _splice(self) -> str:
    origin = self.origin
    parts = []
    cursor = origin.start
    for name, (start, end) in sorted(origin.slots.items(), key=lambda item: item[1]):
      parts.append(origin.text(cursor, start))
      parts.append(self._render_slot(name, getattr(self, name)))
      cursor = end
    parts.append(origin.text(cursor, origin.end))
    return "".join(parts)

  def _render_slot(self, name: str, value: Any) -> str:
    if value is None:
      return ""
    if isinstance(value, list):
      return self._render_list(name, value)
    return value.to_text()

  def _render_list(self, name: str, items: List["JsNode"]) -> str:
    original = self.origin.snapshot.get(name) or []
    gaps = self.origin.gaps.get(name, [])
    default = self.origin.separators.get(name, self._separators.get(name, ", "))
    index = {id(node): i for i, node in enumerate(original)}

    def position(node: Optional[JsNode]) -> Optional[int]:
      while node is not None:
        if id(node) in index:
          return index[id(node)]
        node = node.replaces
      return None

    parts = []
    previous = None
    emitted = set()
    for i, item in enumerate(items):
      if i > 0:
        before, after = position(previous), position(item)
        if before is not None and before + 1 < len(original):
          gap = before
        elif after is not None and after > 0:
          gap = after - 1
        else:
          gap = None
        # A gap holding comments is written once, even when a new node splits it.
        if gap is None or (gap in emitted and gaps[gap].strip()):
          parts.append(default)
        else:
          parts.append(gaps[gap])
          emitted.add(gap)
      parts.append(item.to_text())
      previous = item
    return "".join(parts)


def _join(items: List[JsNode], separator: str = ", ") -> str:
  return separator.join(item.to_text() for item in items)


@dataclass
class Identifier(JsNode):
  """A bare name: variables, property names, type names."""

  name: str

  def render(self) -> str:
    return self.name


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.DOTALL)


def unescape_string(raw: str) -> str:
  """
  Decodes the escape sequences of a JavaScript string literal body.

  Args:
      raw: The literal text between the quotes.

  Returns:
      str: The string value.
  """

  def replace(match: "re.Match[str]") -> str:
    escape = match.group(1)
    if escape.startswith("u{"):
      return chr(int(escape[2:-1], 16))
    if escape[0] == "u" and len(escape) == 5:
      return chr(int(escape[1:], 16))
    if escape[0] == "x" and len(escape) == 3:
      return chr(int(escape[1:], 16))
    if escape in ("\n", "\r\n"):
      return ""
    return _ESCAPES.get(escape, escape)

  return _ESCAPE_RE.sub(replace, raw)


@dataclass
class StringLiteral(JsNode):
  """
  A single or double quoted string literal.

  ``value`` holds the decoded string; ``quote`` the preferred delimiter.
  """

  value: str
  quote: str = "'"

  def render(self) -> str:
    quote = self.quote
    other = '"' if quote == "'" else "'"
    if quote in self.value and other not in self.value:
      quote = other
    body = self.value.replace("\\", "\\\\").replace(quote, "\\" + quote)
    body = body.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return f"{quote}{body}{quote}"


@dataclass
class MemberExpression(JsNode):
  """Property access ``value.attr`` (or ``value?.attr``)."""

  _children: ClassVar[Tuple[str, ...]] = ("value", "attr")

  value: JsNode
  attr: Identifier
  optional: bool = False

  def render(self) -> str:
    dot = "?." if self.optional else "."
    return f"{self.value.to_text()}{dot}{self.attr.to_text()}"


@dataclass
class CallExpression(JsNode):
  """A call ``callee(arguments...)``."""

  _children: ClassVar[Tuple[str, ...]] = ("callee", "arguments")

  callee: JsNode
  arguments: List[JsNode] = field(default_factory=list)

  def render(self) -> str:
    return f"{self.callee.to_text()}({_join(self.arguments)})"


@dataclass
class NewExpression(JsNode):
  """A constructor call ``new Callee(arguments...)``."""

  _children: ClassVar[Tuple[str, ...]] = ("callee", "arguments")

  callee: JsNode
  arguments: List[JsNode] = field(default_factory=list)

  def render(self) -> str:
    return f"new {self.callee.to_text()}({_join(self.arguments)})"


@dataclass
class TypeAnnotation(JsNode):
  """
  An object type annotation ``: { name: Type, ... }``.

  Only built by the rewriter; parsed annotations stay verbatim.
  """

  _children: ClassVar[Tuple[str, ...]] = ("properties",)

  properties: List["Property"] = field(default_factory=list)

  def render(self) -> str:
    return f": {{ {_join(self.properties)} }}"


@dataclass
class Property(JsNode):
  """A ``key: value`` entry of an object literal; ``value`` is None for shorthand."""

  _children: ClassVar[Tuple[str, ...]] = ("key", "value")

  key: JsNode
  value: Optional[JsNode] = None

  def render(self) -> str:
    if self.value is None:
      return self.key.to_text()
    return f"{self.key.to_text()}: {self.value.to_text()}"


@dataclass
class ObjectExpression(JsNode):
  """An object literal ``{ ... }``."""

  _children: ClassVar[Tuple[str, ...]] = ("properties",)

  properties: List[JsNode] = field(default_factory=list)

  def render(self) -> str:
    if not self.properties:
      return "{}"
    return f"{{ {_join(self.properties)} }}"

  def keys(self) -> List[str]:
    """Names of the identifier or string keys present in the literal."""
    names = []
    for prop in self.properties:
      key = prop.key if isinstance(prop, Property) else prop
      if isinstance(key, Identifier):
        names.append(key.name)
      elif isinstance(key, StringLiteral):
        names.append(key.value)
    return names


@dataclass
class ObjectPattern(JsNode):
  """A destructuring pattern ``{ a, b }`` with an optional type annotation."""

  _children: ClassVar[Tuple[str, ...]] = ("properties", "annotation")

  properties: List[JsNode] = field(default_factory=list)
  annotation: Optional[TypeAnnotation] = None

  def render(self) -> str:
    body = f"{{ {_join(self.properties)} }}" if self.properties else "{}"
    if self.annotation is not None:
      body += self.annotation.to_text()
    return body

  def names(self) -> List[str]:
    """Local names bound by the pattern."""
    result = []
    for prop in self.properties:
      if isinstance(prop, Identifier):
        result.append(prop.name)
      elif isinstance(prop, Property):
        target = prop.value if prop.value is not None else prop.key
        if isinstance(target, Identifier):
          result.append(target.name)
    return result


@dataclass
class ArrayExpression(JsNode):
  """An array literal ``[a, b]``."""

  _children: ClassVar[Tuple[str, ...]] = ("elements",)

  elements: List[JsNode] = field(default_factory=list)

  def render(self) -> str:
    return f"[{_join(self.elements)}]"


@dataclass
class StatementBlock(JsNode):
  """A braced list of statements."""

  _children: ClassVar[Tuple[str, ...]] = ("body",)
  _separators: ClassVar[Dict[str, str]] = {"body": "\n"}

  body: List[JsNode] = field(default_factory=list)

  def render(self) -> str:
    if not self.body:
      return "{}"
    inner = "\n".join("  " + line if line else line for s in self.body for line in s.to_text().splitlines())
    return "{\n" + inner + "\n}"


@dataclass
class ArrowFunction(JsNode):
  """An arrow function ``(params) => body``."""

  _children: ClassVar[Tuple[str, ...]] = ("params", "body")

  params: List[JsNode]
  body: JsNode
  is_async: bool = False

  def render(self) -> str:
    prefix = "async " if self.is_async else ""
    return f"{prefix}({_join(self.params)}) => {self.body.to_text()}"


@dataclass
class FunctionExpression(JsNode):
  """A ``function`` expression, optionally named and/or async."""

  _children: ClassVar[Tuple[str, ...]] = ("name", "params", "body")

  name: Optional[Identifier]
  params: List[JsNode]
  body: JsNode
  is_async: bool = False

  def render(self) -> str:
    prefix = "async function" if self.is_async else "function"
    name = f" {self.name.to_text()}" if self.name is not None else ""
    return f"{prefix}{name}({_join(self.params)}) {self.body.to_text()}"


@dataclass
class VariableDeclarator(JsNode):
  """A single ``target = init`` binding inside a declaration."""

  _children: ClassVar[Tuple[str, ...]] = ("target", "init")

  target: JsNode
  init: Optional[JsNode] = None

  def render(self) -> str:
    if self.init is None:
      return self.target.to_text()
    return f"{self.target.to_text()} = {self.init.to_text()}"


@dataclass
class VariableDeclaration(JsNode):
  """A ``const``/``let``/``var`` statement."""

  _children: ClassVar[Tuple[str, ...]] = ("declarators",)

  kind: str
  declarators: List[VariableDeclarator] = field(default_factory=list)

  def render(self) -> str:
    return f"{self.kind} {_join(self.declarators)};"


@dataclass
class ImportSpecifier(JsNode):
  """A named import binding ``imported as local``."""

  _children: ClassVar[Tuple[str, ...]] = ("imported", "local")

  imported: Identifier
  local: Optional[Identifier] = None

  @property
  def bound_name(self) -> str:
    """The local name the specifier binds."""
    return (self.local or self.imported).name

  def render(self) -> str:
    if self.local is None:
      return self.imported.to_text()
    return f"{self.imported.to_text()} as {self.local.to_text()}"


@dataclass
class ImportDeclaration(JsNode):
  """An ES module ``import`` statement."""

  _children: ClassVar[Tuple[str, ...]] = ("default", "namespace", "specifiers", "source")

  source: StringLiteral
  default: Optional[Identifier] = None
  namespace: Optional[Identifier] = None
  specifiers: List[ImportSpecifier] = field(default_factory=list)
  type_only: bool = False

  def render(self) -> str:
    clauses = []
    if self.default is not None:
      clauses.append(self.default.to_text())
    if self.namespace is not None:
      clauses.append(f"* as {self.namespace.to_text()}")
    if self.specifiers:
      clauses.append(f"{{ {_join(self.specifiers)} }}")
    keyword = "import type" if self.type_only else "import"
    if not clauses:
      return f"{keyword} {self.source.to_text()};"
    return f"{keyword} {', '.join(clauses)} from {self.source.to_text()};"


@dataclass
class Verbatim(JsNode):
  """
  Any construct without a dedicated variant.

  ``kind`` is the grammar node type (``ERROR`` for unparseable regions) and
  ``children`` its named children, so traversals still reach nested calls.
  """

  _children: ClassVar[Tuple[str, ...]] = ("children",)

  kind: str
  children: List[JsNode] = field(default_factory=list)
  text: str = ""

  def render(self) -> str:
    return self.text


@dataclass
class Program(JsNode):
  """The root node: a list of top-level statements."""

  _children: ClassVar[Tuple[str, ...]] = ("body",)
  _separators: ClassVar[Dict[str, str]] = {"body": "\n"}

  body: List[JsNode] = field(default_factory=list)

  def render(self) -> str:
    return "\n".join(statement.to_text() for statement in self.body) + "\n"
