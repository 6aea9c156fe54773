"""
Command-Mapping Handlers.

``compare`` looks a legacy command up in the mapping table; ``register``
validates a JSON file of custom mappings and adds them to the registry.
"""

import json
from pathlib import Path

from rich.table import Table

from wdio2playwright.core.errors import InvalidMappingError
from wdio2playwright.semantics.registry import get_registry
from wdio2playwright.utils.console import console, log_error, log_info, log_success, log_warning

KEY_DIFFERENCES = (
  "Playwright has built-in auto-waiting for most actions",
  "Playwright uses Locators with strict mode by default",
  "Playwright assertions have built-in retry logic",
  "No need for explicit waits in most cases",
  "Use page.getByTestId() with the data-test-id attribute for reliable selectors",
)


def handle_compare(command: str) -> int:
  """
  Shows the Playwright equivalent of a WebdriverIO command.

  Args:
      command: Legacy command name (``setValue``, ``browser.url``).

  Returns:
      int: 0 if an exact or partial match exists, 1 otherwise.
  """
  registry = get_registry()
  comparison = registry.compare(command)

  console.print(f"[bold]WebdriverIO:[/bold] [legacy]{command}[/legacy]")
  if comparison.mapping is not None:
    mapping = comparison.mapping
    options = f" with options: {mapping.options}" if mapping.options else ""
    console.print(f"[bold]Playwright:[/bold] [target]{mapping.target}[/target]{options}")
    if mapping.description:
      console.print(mapping.description)
  elif comparison.suggestion is not None:
    console.print(f"Did you mean [legacy]{comparison.suggestion}[/legacy]?")
    console.print(f"[bold]Playwright:[/bold] [target]{comparison.suggested_mapping.target}[/target]")
    if comparison.suggested_mapping.description:
      console.print(comparison.suggested_mapping.description)
  else:
    log_warning(f'No direct mapping found for "{command}". It may need a custom implementation.')

  if comparison.related:
    table = Table(title="Related Commands")
    table.add_column("WebdriverIO", style="magenta")
    table.add_column("Playwright", style="green")
    table.add_column("Description", style="dim")
    for name in comparison.related:
      related = registry.get(name)
      table.add_row(name, related.target, related.description)
    console.print(table)

  console.print("\n[bold]Key differences:[/bold]")
  for line in KEY_DIFFERENCES:
    console.print(f"  - {line}")

  return 0 if comparison.found or comparison.suggestion is not None else 1


def handle_register(mappings_path: Path) -> int:
  """
  Registers custom command mappings from a JSON object file.

  The file maps command names to ``{"target"|"method", "options",
  "description"}`` objects. Names already registered are kept.

  Args:
      mappings_path: JSON file.

  Returns:
      int: Exit code (1 for unreadable or invalid payloads).
  """
  try:
    payload = json.loads(mappings_path.read_text("utf-8"))
  except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
    log_error(f"Failed to read {mappings_path}: {e}")
    return 1
  if not isinstance(payload, dict):
    log_error("Custom commands must be a JSON object mapping names to mappings")
    return 1

  registry = get_registry()
  try:
    added = registry.register_many(payload)
  except InvalidMappingError as e:
    log_error(str(e))
    return 1

  skipped = [name for name in payload if name not in added]
  if added:
    log_success(f"Registered {len(added)} custom commands: {', '.join(added)}")
  if skipped:
    log_info(f"Already mapped, kept existing: {', '.join(skipped)}")
  return 0
