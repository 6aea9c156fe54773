"""
Schema for command mapping entries.

A mapping describes how one legacy command is expressed in Playwright. The
``method`` key used by hand-written JSON payloads is accepted as an alias of
``target``.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from wdio2playwright.core.js.builders import is_identifier_path


class CommandMapping(BaseModel):
  """
  Target expression for a legacy command.

  Attributes:
      target: Method name (``fill``) or dotted path (``page.keyboard.press``).
      options: Object literal source added as the first argument, if any.
      description: Short human readable summary.
  """

  model_config = ConfigDict(frozen=True, populate_by_name=True)

  target: str = Field(validation_alias=AliasChoices("target", "method"), min_length=1)
  options: Optional[str] = None
  description: str = ""

  @property
  def path(self) -> Optional[List[str]]:
    """The target split on dots, or None when it is not a plain identifier path."""
    if not is_identifier_path(self.target):
      return None
    return self.target.split(".")


class CommandComparison(BaseModel):
  """Lookup result for a single legacy command."""

  command: str
  mapping: Optional[CommandMapping] = None
  suggestion: Optional[str] = Field(default=None, description="Closest partial match when there is no exact one.")
  suggested_mapping: Optional[CommandMapping] = None
  related: List[str] = Field(default_factory=list)

  @property
  def found(self) -> bool:
    return self.mapping is not None
