"""
Exception types raised by wdio2playwright.

Only input that cannot be processed at all raises; every recoverable
condition (unmapped commands, ambiguous selectors) is reported through the
result objects instead.
"""

from typing import Optional


class Wdio2PlaywrightError(Exception):
  """Base class for all library errors."""


class ParseFailure(Wdio2PlaywrightError):
  """
  Raised when a source file contains nothing the parser could recover.

  Attributes:
      message: Human readable description.
      line: 1-based line of the first error, when known.
      column: 0-based column of the first error, when known.
  """

  def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
    self.message = message
    self.line = line
    self.column = column
    location = f" (line {line}, column {column})" if line is not None else ""
    super().__init__(f"{message}{location}")


class InvalidMappingError(Wdio2PlaywrightError, ValueError):
  """Raised when a custom command mapping payload is malformed."""
