"""
File discovery shared by the command handlers.
"""

from pathlib import Path
from typing import List

TEST_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts")
SKIPPED_DIRS = ("node_modules", ".git", "dist", "build")


def is_skipped(path: Path, root: Path) -> bool:
  return any(part in SKIPPED_DIRS for part in path.relative_to(root).parts)


def collect_sources(root: Path) -> List[Path]:
  """
  Lists JavaScript/TypeScript files below ``root``, sorted, vendor folders excluded.

  Args:
      root: A file (returned as is) or a directory.

  Returns:
      List[Path]: Matching files.
  """
  if root.is_file():
    return [root]
  return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix in TEST_SUFFIXES and not is_skipped(p, root))
