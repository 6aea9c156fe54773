"""
Project State Handler.
"""

import json
from pathlib import Path
from typing import Dict

from wdio2playwright.analysis.project import detect_project_state
from wdio2playwright.cli.handlers.common import is_skipped
from wdio2playwright.utils.console import log_error, log_info

PROJECT_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts", ".json")


def read_project(root: Path) -> Dict[str, str]:
  """
  Loads the text of the project files below ``root``.

  Returns:
      Dict[str, str]: Root-relative POSIX path to content. Undecodable files are skipped.
  """
  files: Dict[str, str] = {}
  for path in sorted(root.rglob("*")):
    if not path.is_file() or path.suffix not in PROJECT_SUFFIXES or is_skipped(path, root):
      continue
    try:
      files[path.relative_to(root).as_posix()] = path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
      log_error(f"Skipping {path}: {e}")
  return files


def handle_state(directory: Path) -> int:
  """
  Prints the migration state of a project as JSON.

  Args:
      directory: Project root.

  Returns:
      int: Exit code.
  """
  if not directory.is_dir():
    log_error(f"Not a directory: {directory}")
    return 1

  files = read_project(directory)
  log_info(f"Inspecting {len(files)} files in [path]{directory}[/path]...")
  state = detect_project_state(files)
  print(json.dumps(state.model_dump(mode="json"), indent=2))
  return 0
