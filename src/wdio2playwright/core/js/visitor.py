"""
Traversal protocol for the JavaScript CST.

Mirrors LibCST's visitor API so rewrite rules read the same way:

* :class:`JsVisitor` walks a tree read-only, calling ``visit_<Variant>`` before
  and ``leave_<Variant>`` after the children of each node. Returning ``False``
  from a ``visit_`` method skips the children.
* :class:`JsTransformer` calls ``leave_<Variant>(original, updated)`` after the
  children have been transformed. The return value replaces the node; it may be
  :data:`RemovalSentinel.REMOVE` or a :class:`FlattenSentinel` when the node
  sits inside a list slot.

Both keep a stack of ancestors in ``self.parents``.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from wdio2playwright.core.js.nodes import JsNode


class RemovalSentinel(Enum):
  """Returned from ``leave_`` to drop the node from its parent."""

  REMOVE = "remove"


@dataclass
class FlattenSentinel:
  """Returned from ``leave_`` to splice several nodes in place of one."""

  nodes: List[JsNode]


LeaveResult = Union[JsNode, RemovalSentinel, FlattenSentinel]


class JsVisitor:
  """
  Read-only depth-first walker.
  """

  def __init__(self) -> None:
    self.parents: List[JsNode] = []

  @property
  def parent(self) -> Optional[JsNode]:
    """The direct parent of the node currently being visited."""
    return self.parents[-1] if self.parents else None

  def walk(self, node: JsNode) -> None:
    """
    Visits ``node`` and its descendants in pre-order.

    Args:
        node: Root of the subtree to visit.
    """
    name = type(node).__name__
    visit = getattr(self, f"visit_{name}", None)
    descend = visit(node) if visit is not None else True
    if descend is not False:
      self.parents.append(node)
      try:
        for child in node.child_nodes():
          self.walk(child)
      finally:
        self.parents.pop()
    leave = getattr(self, f"leave_{name}", None)
    if leave is not None:
      leave(node)


class JsTransformer:
  """
  Post-order rewriting walker.

  The tree is updated in place: ``updated`` is the node itself with its children
  already transformed, ``original`` a shallow copy taken before the children
  were visited. A replacement node inherits the list position of the node it
  replaces, so the original separators around it are kept.
  """

  def __init__(self) -> None:
    self.parents: List[JsNode] = []

  @property
  def parent(self) -> Optional[JsNode]:
    return self.parents[-1] if self.parents else None

  def transform(self, node: JsNode) -> LeaveResult:
    """
    Transforms ``node`` and its descendants.

    Args:
        node: Root of the subtree.

    Returns:
        The replacement for ``node`` (often ``node`` itself).
    """
    name = type(node).__name__
    original = copy.copy(node)
    visit = getattr(self, f"visit_{name}", None)
    if visit is None or visit(node) is not False:
      self.parents.append(node)
      try:
        self._transform_children(node)
      finally:
        self.parents.pop()

    leave = getattr(self, f"leave_{name}", None)
    result = leave(original, node) if leave is not None else node
    if isinstance(result, JsNode) and result is not node and result.replaces is None:
      result.replaces = node
    return result

  def _transform_children(self, node: JsNode) -> None:
    for field_name in node._children:
      value = getattr(node, field_name)
      if isinstance(value, list):
        updated: List[JsNode] = []
        for child in value:
          result = self.transform(child)
          if isinstance(result, FlattenSentinel):
            updated.extend(result.nodes)
          elif isinstance(result, JsNode):
            updated.append(result)
        setattr(node, field_name, updated)
      elif isinstance(value, JsNode):
        result = self.transform(value)
        if isinstance(result, FlattenSentinel):
          if len(result.nodes) != 1:
            raise ValueError(f"Cannot flatten {len(result.nodes)} nodes into the '{field_name}' slot")
          result = result.nodes[0]
        setattr(node, field_name, None if result is RemovalSentinel.REMOVE else result)
