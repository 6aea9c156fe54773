"""
Migrate Command Handler.

This module implements the logic for the ``wdio2playwright migrate`` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Migration of a file or a directory tree via the engine.
3. Optional page-object extraction from the migrated code.
4. Output writing and trace logging.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from rich.table import Table

from wdio2playwright.cli.handlers.common import collect_sources
from wdio2playwright.config import RuntimeConfig
from wdio2playwright.core.engine import MigrationEngine, target_file_name
from wdio2playwright.core.errors import ParseFailure
from wdio2playwright.core.pom import refactor_to_pom
from wdio2playwright.core.result import MigrationResult
from wdio2playwright.enums import Dialect
from wdio2playwright.utils.console import console, log_error, log_info, log_success, log_warning


def handle_migrate(
  input_path: Path,
  output_path: Optional[Path],
  typescript: Optional[bool],
  pom: bool = False,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'migrate' command execution.

  Args:
      input_path: Legacy test file or directory.
      output_path: Destination file (single input) or directory. Without it the
          migrated code is printed.
      typescript: Override for TypeScript output. ``None`` uses the config,
          then the file extension.
      pom: Also generate a page object from each migrated file.
      json_trace_path: Where to dump the execution trace (single file only;
          directory runs write ``<name>.trace.json`` next to each output).

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  config = RuntimeConfig.load(
    typescript=typescript,
    search_path=input_path if input_path.is_dir() else input_path.parent,
  )
  engine = MigrationEngine(config=config)
  results: Dict[str, MigrationResult] = {}
  issues: Dict[str, List[str]] = {}

  if input_path.is_file():
    ts = _use_typescript(input_path, typescript, config)
    result, _ = _migrate_single_file(engine, input_path, output_path, ts, pom, config, json_trace_path)
    return 0 if result.success else 1

  if not output_path:
    log_error("Directory migration requires --out destination directory.")
    return 1

  files = collect_sources(input_path)
  if not files:
    log_warning(f"No test files found in {input_path}")
    return 0

  log_info(f"Migrating {len(files)} files from [path]{input_path}[/path]...")
  for src_file in files:
    rel_path = src_file.relative_to(input_path)
    ts = _use_typescript(src_file, typescript, config)
    dest_file = output_path / target_file_name(str(rel_path), ts)
    trace = dest_file.with_suffix(".trace.json") if json_trace_path else None
    results[str(rel_path)], issues[str(rel_path)] = _migrate_single_file(
      engine, src_file, dest_file, ts, pom, config, trace
    )

  _print_batch_summary(results, issues)
  return 0 if all(r.success for r in results.values()) else 1


def _use_typescript(path: Path, override: Optional[bool], config: RuntimeConfig) -> bool:
  if override is not None:
    return override
  return config.typescript or Dialect.for_path(str(path)) == Dialect.TYPESCRIPT


def _migrate_single_file(
  engine: MigrationEngine,
  input_path: Path,
  output_path: Optional[Path],
  typescript: bool,
  pom: bool,
  config: RuntimeConfig,
  json_trace_path: Optional[Path] = None,
) -> Tuple[MigrationResult, List[str]]:
  """
  Migrates one file and writes its outputs.

  Returns:
      Tuple[MigrationResult, List[str]]: The engine result, untouched, and the
      problems met while writing the page object.
  """
  try:
    code = input_path.read_text("utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return MigrationResult(success=False, errors=[str(e)]), []

  result = engine.run(code, typescript=typescript)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      json_trace_path.write_text(json.dumps(result.trace_events, indent=2), "utf-8")
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {e}")

  if not result.success:
    for error in result.errors:
      log_error(f"{input_path}: {error}")
    return result, []

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.code, "utf-8")
    log_success(f"Migrated: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(result.code)

  issues = _write_page_object(result, output_path, typescript, config) if pom else []
  return result, issues


def _write_page_object(
  result: MigrationResult, output_path: Optional[Path], typescript: bool, config: RuntimeConfig
) -> List[str]:
  """Writes (or prints) the page object of a migrated file and returns the problems met."""
  name = output_path.name if output_path else ("test.spec.ts" if typescript else "test.spec.js")
  try:
    pom_result = refactor_to_pom(result.code, name)
  except ParseFailure as e:
    log_warning(f"Page object skipped: {e}")
    return [f"Page object: {e}"]

  page = pom_result.page_object
  if output_path is None:
    print(page.content)
    return []
  destination = output_path.parent / config.pages_dir / page.file_name
  if destination.exists():
    log_warning(f"Keeping existing page object [path]{destination}[/path]")
    return []
  destination.parent.mkdir(parents=True, exist_ok=True)
  destination.write_text(page.content, "utf-8")
  log_success(f"Page object: [path]{destination}[/path]")
  return []


def _print_batch_summary(results: Dict[str, MigrationResult], issues: Dict[str, List[str]]) -> None:
  """
  Renders a summary table of migration results to the console.

  Args:
      results: Mapping of file names to migration results.
      issues: Page-object problems per file name.
  """
  total = len(results)
  failures = {name: r for name, r in results.items() if not r.success or r.has_errors or issues.get(name)}

  if not failures:
    log_success(f"Batch Complete: {total}/{total} files migrated.")
    return

  table = Table(title="Migration Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in failures.items():
    status = "Failed" if not res.success else "Warnings"
    table.add_row(filename, status, "; ".join(res.errors + issues.get(filename, [])) or "Unknown Error")

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - len(failures)} Passed, {len(failures)} with Issues.")
