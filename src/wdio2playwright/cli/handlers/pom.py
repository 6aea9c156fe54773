"""
Page-Object Command Handler.
"""

from pathlib import Path
from typing import Optional

from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.pom import refactor_to_pom
from wdio2playwright.utils.console import console, log_error, log_info, log_success


def handle_pom(path: Path, out_dir: Optional[Path] = None) -> int:
  """
  Generates a page object from a Playwright test file.

  Args:
      path: Playwright test file.
      out_dir: Directory to write the class into. Without it the class is printed.

  Returns:
      int: Exit code (1 if the file is missing or cannot be parsed).
  """
  if not path.is_file():
    log_error(f"File not found: {path}")
    return 1

  try:
    result = refactor_to_pom(path.read_text("utf-8"), path.name)
  except (OSError, UnicodeDecodeError, ParseFailure) as e:
    log_error(f"Failed to process {path}: {e}")
    return 1

  info = result.page_info
  log_info(f"Found {len(info.urls)} URLs, {len(info.locators)} locators, {len(info.actions)} actions")

  if out_dir is None:
    console.print(f"[bold]{result.page_object.file_name}[/bold]")
    print(result.page_object.content)
    return 0

  destination = out_dir / result.page_object.file_name
  destination.parent.mkdir(parents=True, exist_ok=True)
  destination.write_text(result.page_object.content, "utf-8")
  log_success(f"Page object written to [path]{destination}[/path]")
  return 0
