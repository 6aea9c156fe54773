"""
Data structures representing the output of the migration pipeline.

``MigrationResult`` encapsulates the migrated code, the ordered change log,
review notes, migrated tags, errors and the execution trace.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from wdio2playwright.enums import FrameworkKind


class MigrationResult(BaseModel):
  """
  Container for the results of one migration.
  """

  code: str = Field(default="", description="The migrated source code.")
  changes: List[str] = Field(default_factory=list, description="Rewrite rules applied, in traversal order.")
  notes: List[str] = Field(default_factory=list, description="Review notes and advisories.")
  tags: List[str] = Field(default_factory=list, description="Tags migrated into Playwright annotations.")
  framework: FrameworkKind = Field(default=FrameworkKind.UNKNOWN, description="Verdict for the input file.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="False if the input could not be parsed at all.",
  )
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0

  @property
  def changed(self) -> bool:
    return bool(self.changes)
