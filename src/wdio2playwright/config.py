"""
Runtime Configuration Store.

Settings come from the ``[tool.wdio2playwright]`` table of the nearest
``pyproject.toml`` and are overridden by explicit arguments (the CLI flags)::

    [tool.wdio2playwright]
    typescript = true
    pages_dir = "tests/pages"

    [tool.wdio2playwright.custom_commands]
    loginAs = { target = "loginAs", description = "Project login helper" }
    "browser.waitForAngular" = { target = "page.waitForLoadState" }
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from wdio2playwright.semantics.registry import CommandRegistry
from wdio2playwright.semantics.schema import CommandMapping

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

logger = logging.getLogger(__name__)

TOOL_SECTION = "wdio2playwright"


class RuntimeConfig(BaseModel):
  """
  Configuration container for the migration engine and CLI.
  """

  typescript: bool = Field(False, description="Parse and emit TypeScript.")
  pages_dir: str = Field("pages", description="Directory (relative to the output) for generated page objects.")
  custom_commands: Dict[str, CommandMapping] = Field(
    default_factory=dict, description="Project specific command mappings, registered add-if-absent."
  )

  @field_validator("pages_dir")
  @classmethod
  def validate_pages_dir(cls, v: str) -> str:
    """
    Ensures the page-object directory is a non-empty relative path.

    Args:
        v (str): The configured directory.

    Returns:
        str: The normalized directory (no trailing slash).

    Raises:
        ValueError: If empty or absolute.
    """
    v_clean = v.strip().rstrip("/\\")
    if not v_clean:
      raise ValueError("pages_dir must not be empty")
    if Path(v_clean).is_absolute():
      raise ValueError(f"pages_dir must be relative, got '{v_clean}'")
    return v_clean

  def apply_to(self, registry: CommandRegistry) -> List[str]:
    """
    Registers the custom commands in ``registry``.

    Args:
        registry: Target registry. Existing entries are kept.

    Returns:
        List[str]: Names that were added.
    """
    return registry.register_many(self.custom_commands)

  @classmethod
  def load(
    cls,
    typescript: Optional[bool] = None,
    pages_dir: Optional[str] = None,
    custom_commands: Optional[Mapping[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        typescript (Optional[bool]): Override for TypeScript output.
        pages_dir (Optional[str]): Override for the page-object directory.
        custom_commands (Optional[Mapping]): Extra mappings, merged over the TOML ones.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    final_typescript = typescript if typescript is not None else toml_config.get("typescript", False)
    final_pages_dir = pages_dir or toml_config.get("pages_dir", "pages")
    final_commands = {**toml_config.get("custom_commands", {}), **(custom_commands or {})}

    return cls(typescript=final_typescript, pages_dir=final_pages_dir, custom_commands=final_commands)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for a 'pyproject.toml' and extracts the tool table.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", toml_path, e)
        return {}, None
      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None
