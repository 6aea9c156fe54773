"""
Enumerations for wdio2playwright.

This module defines the closed sets used across the codebase: source dialects,
framework verdicts, selector strategies and the kinds of extracted facts.
"""

from enum import Enum


class Dialect(str, Enum):
  """
  Grammar used to parse a source file.
  """

  JAVASCRIPT = "javascript"
  TYPESCRIPT = "typescript"

  @classmethod
  def for_path(cls, path: str) -> "Dialect":
    """Picks the dialect from a file extension (``.ts``/``.tsx`` are typed)."""
    return cls.TYPESCRIPT if path.lower().endswith((".ts", ".tsx", ".mts", ".cts")) else cls.JAVASCRIPT


class FrameworkKind(str, Enum):
  """
  Verdict of the framework classifier. Exactly one variant applies to a file.
  """

  LEGACY = "legacy"  # WebdriverIO / chai
  TARGET = "target"  # @playwright/test
  MIXED = "mixed"
  UNKNOWN = "unknown"

  @property
  def is_legacy(self) -> bool:
    return self is FrameworkKind.LEGACY

  @property
  def is_target(self) -> bool:
    return self is FrameworkKind.TARGET

  @property
  def is_mixed(self) -> bool:
    return self is FrameworkKind.MIXED

  @property
  def is_unknown(self) -> bool:
    return self is FrameworkKind.UNKNOWN


class SelectorStrategy(str, Enum):
  """
  Locator strategy chosen for a legacy selector string.
  """

  TEST_ID = "testId"
  LABEL = "label"
  ROLE = "role"
  PLACEHOLDER = "placeholder"
  CSS = "css"


class SelectorKind(str, Enum):
  """Element lookup arity: ``$`` finds one element, ``$$`` many."""

  SINGLE = "single"
  MULTIPLE = "multiple"


class ImportKind(str, Enum):
  """Binding kind of an import specifier."""

  DEFAULT = "default"
  NAMED = "named"
  NAMESPACE = "namespace"


class TagSource(str, Enum):
  """Construct a tag was harvested from."""

  DESCRIBE = "describe"
  TEST = "test"


class ComplexityLevel(str, Enum):
  """Migration effort bucket of an analysed file."""

  LOW = "low"
  MEDIUM = "medium"
  HIGH = "high"
