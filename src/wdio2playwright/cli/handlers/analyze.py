"""
Analyze Command Handler.

Reports the verdict, structure and migration effort of test files without
modifying them.
"""

import json
from pathlib import Path
from typing import List

from rich.table import Table

from wdio2playwright.analysis.audit import AnalysisReport, analyze
from wdio2playwright.cli.handlers.common import collect_sources
from wdio2playwright.utils.console import console, log_error, log_info


def handle_analyze(path: Path, json_mode: bool = False) -> int:
  """
  Analyses a test file or every test file in a directory.

  Args:
      path: Input file or directory.
      json_mode: Print the reports as JSON to stdout instead of a table.

  Returns:
      int: Exit code (1 if the path is missing or a file could not be parsed).
  """
  if not path.exists():
    log_error(f"Path not found: {path}")
    return 1

  files = collect_sources(path)
  if not json_mode:
    log_info(f"Analysing {len(files)} files in [path]{path}[/path]...")

  reports: List[AnalysisReport] = []
  for f in files:
    try:
      code = f.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
      log_error(f"Failed to read {f}: {e}")
      reports.append(AnalysisReport(file_path=str(f), errors=[str(e)], success=False))
      continue
    reports.append(analyze(code, str(f)))

  failed = any(not r.success for r in reports)

  if json_mode:
    payload = [r.model_dump(mode="json") for r in reports]
    print(json.dumps(payload[0] if path.is_file() else payload, indent=2))
    return 1 if failed else 0

  _print_reports(reports)
  return 1 if failed else 0


def _print_reports(reports: List[AnalysisReport]) -> None:
  table = Table(title="Test Analysis")
  table.add_column("File", style="cyan")
  table.add_column("Framework")
  table.add_column("Tests", justify="right")
  table.add_column("Selectors", justify="right")
  table.add_column("Complexity")

  for report in reports:
    if not report.success:
      table.add_row(report.file_path, "[error]parse error[/error]", "-", "-", "-")
      continue
    table.add_row(
      report.file_path,
      report.framework.value,
      str(len(report.structure.tests)),
      str(len(report.selectors.found)),
      f"{report.complexity.level.value} ({report.complexity.score})",
    )
  console.print(table)

  for report in reports:
    for error in report.errors:
      log_error(f"{report.file_path}: {error}")
    if report.recommendations:
      console.print(f"\n[bold]{report.file_path}[/bold]")
      for line in report.recommendations:
        console.print(f"  - {line}")
