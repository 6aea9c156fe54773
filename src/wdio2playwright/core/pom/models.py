"""
Data structures of the page-object synthesizer.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from wdio2playwright.core.facts import SourceSpan


class LocatorInfo(BaseModel):
  """
  A ``page.locator(...)`` / ``page.getBy*(...)`` call.

  Attributes:
      method: Factory name.
      selector: The string argument, when the first argument is a literal.
      options: Source of the object argument, when the first argument is an object.
      expression: Source text of the whole call, reused in the generated class.
  """

  method: str
  selector: Optional[str] = None
  options: Optional[str] = None
  expression: str
  span: Optional[SourceSpan] = None


class ActionInfo(BaseModel):
  action: str
  span: Optional[SourceSpan] = None


class AssertionInfo(BaseModel):
  span: Optional[SourceSpan] = None


class PageObjectInfo(BaseModel):
  """Everything the synthesizer learned about the page under test."""

  urls: List[str] = Field(default_factory=list)
  locators: List[LocatorInfo] = Field(default_factory=list)
  actions: List[ActionInfo] = Field(default_factory=list)
  assertions: List[AssertionInfo] = Field(default_factory=list)


class PageObjectClass(BaseModel):
  class_name: str
  file_name: str
  content: str


class PomResult(BaseModel):
  """Output of :func:`refactor_to_pom`."""

  page_object: PageObjectClass
  page_info: PageObjectInfo
