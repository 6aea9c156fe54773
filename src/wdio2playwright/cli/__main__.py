"""
Main Entry Point for the wdio2playwright CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `wdio2playwright.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from wdio2playwright import __version__
from wdio2playwright.cli import commands
from wdio2playwright.utils.console import set_verbosity


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="wdio2playwright: WebdriverIO to Playwright Test migration")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: ANALYZE ---
  cmd_analyze = subparsers.add_parser("analyze", help="Report framework, structure and complexity of test files")
  cmd_analyze.add_argument("path", type=Path, help="Input test file or directory")
  cmd_analyze.add_argument("--json", action="store_true", help="Print the report as JSON")

  # --- Command: MIGRATE ---
  cmd_migrate = subparsers.add_parser("migrate", help="Migrate WebdriverIO tests to Playwright Test")
  cmd_migrate.add_argument("path", type=Path, help="Input test file or directory")
  cmd_migrate.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_migrate.add_argument(
    "--typescript",
    action="store_true",
    default=None,
    help="Emit TypeScript (Overrides config and file extension)",
  )
  cmd_migrate.add_argument("--pom", action="store_true", help="Also generate a page object per migrated file")
  cmd_migrate.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace to a JSON file."
  )

  # --- Command: POM ---
  cmd_pom = subparsers.add_parser("pom", help="Extract a page object from a Playwright test")
  cmd_pom.add_argument("path", type=Path, help="Playwright test file")
  cmd_pom.add_argument("--out-dir", type=Path, default=None, help="Directory for the generated class")

  # --- Command: COMPARE ---
  cmd_compare = subparsers.add_parser("compare", help="Show the Playwright equivalent of a WebdriverIO command")
  cmd_compare.add_argument("wdio_command", help="Command name (e.g. setValue, browser.url)")

  # --- Command: REGISTER ---
  cmd_register = subparsers.add_parser("register", help="Validate and register custom command mappings")
  cmd_register.add_argument("mappings", type=Path, help="JSON file mapping command names to mappings")

  # --- Command: STATE ---
  cmd_state = subparsers.add_parser("state", help="Detect the migration state of a project")
  cmd_state.add_argument("directory", type=Path, help="Project root")

  args = parser.parse_args(argv)
  set_verbosity(args.verbose)

  if args.command == "analyze":
    return commands.handle_analyze(args.path, args.json)

  elif args.command == "migrate":
    return commands.handle_migrate(args.path, args.out, args.typescript, args.pom, args.json_trace)

  elif args.command == "pom":
    return commands.handle_pom(args.path, args.out_dir)

  elif args.command == "compare":
    return commands.handle_compare(args.wdio_command)

  elif args.command == "register":
    return commands.handle_register(args.mappings)

  elif args.command == "state":
    return commands.handle_state(args.directory)

  return 0


if __name__ == "__main__":
  sys.exit(main())
