"""
Data structures produced by the structural extractor.

All lists are ordered by source position (pre-order traversal). Every fact
that points at code carries a :class:`SourceSpan`.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from wdio2playwright.core.js.nodes import JsNode
from wdio2playwright.enums import ImportKind, SelectorKind, TagSource


class SourceSpan(BaseModel):
  """Location of a construct: 1-based lines, 0-based columns."""

  line: int
  column: int
  end_line: int
  end_column: int

  @classmethod
  def of(cls, node: JsNode) -> Optional["SourceSpan"]:
    """Span of a parsed node, or None for constructed nodes."""
    span = node.span
    if span is None:
      return None
    (line, column), (end_line, end_column) = span
    return cls(line=line, column=column, end_line=end_line, end_column=end_column)


class ImportBinding(BaseModel):
  """A name bound by an import or require."""

  kind: ImportKind
  local: str
  imported: Optional[str] = None


class ImportFact(BaseModel):
  source: str
  bindings: List[ImportBinding] = Field(default_factory=list)
  is_require: bool = False
  span: Optional[SourceSpan] = None


class DescribeFact(BaseModel):
  """A test group (``describe`` / ``test.describe``)."""

  name: str
  tags: List[str] = Field(default_factory=list)
  span: Optional[SourceSpan] = None


class TestCaseFact(BaseModel):
  """A test case (``it`` / ``test``)."""

  __test__ = False  # not a pytest class

  name: str
  tags: List[str] = Field(default_factory=list)
  span: Optional[SourceSpan] = None


class HookFact(BaseModel):
  name: str
  qualified: bool = Field(default=False, description="True for the test.<hook> form.")
  span: Optional[SourceSpan] = None


class SelectorFact(BaseModel):
  selector: str
  kind: SelectorKind
  span: Optional[SourceSpan] = None


class CommandFact(BaseModel):
  """A member call; browser commands are qualified (``browser.url``)."""

  name: str
  span: Optional[SourceSpan] = None


class AssertionFact(BaseModel):
  """An ``expect(...)`` call (kind ``expect``) or a known matcher call."""

  kind: str
  span: Optional[SourceSpan] = None


class PageObjectFact(BaseModel):
  class_name: str
  span: Optional[SourceSpan] = None


class TagFact(BaseModel):
  """A tag found in a test or group name."""

  tag: str
  source: TagSource
  name: str


class ExtractedFacts(BaseModel):
  """
  Read-only structural summary of one file.
  """

  imports: List[ImportFact] = Field(default_factory=list)
  describes: List[DescribeFact] = Field(default_factory=list)
  tests: List[TestCaseFact] = Field(default_factory=list)
  hooks: List[HookFact] = Field(default_factory=list)
  selectors: List[SelectorFact] = Field(default_factory=list)
  commands: List[CommandFact] = Field(default_factory=list)
  assertions: List[AssertionFact] = Field(default_factory=list)
  page_objects: List[PageObjectFact] = Field(default_factory=list)
  tags: List[TagFact] = Field(default_factory=list)

  @property
  def unique_tags(self) -> List[str]:
    """Distinct tags in discovery order."""
    return list(dict.fromkeys(t.tag for t in self.tags))
