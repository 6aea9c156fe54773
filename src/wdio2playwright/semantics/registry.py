"""
CommandRegistry: the table of legacy command mappings.

The registry is seeded with the static table and can be extended at runtime.
Entries are only ever added: registering a name that already exists is a
no-op, so the first writer wins. The single mutation path is guarded by a lock
so concurrent registrations and lookups are safe.
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from wdio2playwright.core.errors import InvalidMappingError
from wdio2playwright.semantics.commands import default_commands
from wdio2playwright.semantics.schema import CommandComparison, CommandMapping

logger = logging.getLogger(__name__)

MappingLike = Union[CommandMapping, Mapping[str, Any]]


def _coerce(name: str, mapping: MappingLike) -> CommandMapping:
  if isinstance(mapping, CommandMapping):
    return mapping
  if not isinstance(mapping, Mapping):
    raise InvalidMappingError(f"Mapping for '{name}' must be an object, got {type(mapping).__name__}")
  try:
    return CommandMapping.model_validate(dict(mapping))
  except ValidationError as e:
    raise InvalidMappingError(f"Invalid mapping for '{name}': {e.errors()[0]['msg']}") from e


class CommandRegistry:
  """
  Add-only mapping from legacy command names to :class:`CommandMapping`.
  """

  def __init__(self, seed: Optional[Mapping[str, CommandMapping]] = None) -> None:
    """
    Args:
        seed: Initial entries. Defaults to the built-in table.
    """
    self._lock = threading.Lock()
    self._entries: Dict[str, CommandMapping] = dict(default_commands() if seed is None else seed)

  def get(self, name: str) -> Optional[CommandMapping]:
    return self._entries.get(name)

  def contains(self, name: str) -> bool:
    return name in self._entries

  __contains__ = contains

  def __len__(self) -> int:
    return len(self._entries)

  def names(self) -> List[str]:
    """Registered names in insertion order."""
    return list(self._entries)

  def items(self) -> List[Tuple[str, CommandMapping]]:
    return list(self._entries.items())

  def register_custom(self, name: str, mapping: MappingLike) -> bool:
    """
    Adds a mapping if the name is not registered yet.

    Args:
        name: Legacy command name (``myCommand`` or ``browser.myCommand``).
        mapping: A CommandMapping or a dict with ``target``/``method``,
            ``options`` and ``description``.

    Returns:
        bool: True if the entry was added, False if the name already existed.

    Raises:
        InvalidMappingError: If the payload cannot be validated.
    """
    if not name:
      raise InvalidMappingError("Command name must not be empty")
    entry = _coerce(name, mapping)
    with self._lock:
      if name in self._entries:
        logger.debug("Mapping for '%s' already registered, keeping the existing entry", name)
        return False
      # Copy-on-write so readers iterating the previous dict are unaffected.
      entries = dict(self._entries)
      entries[name] = entry
      self._entries = entries
    logger.debug("Registered custom mapping %s -> %s", name, entry.target)
    return True

  def register_many(self, mappings: Mapping[str, MappingLike]) -> List[str]:
    """
    Registers several mappings.

    Args:
        mappings: Name to mapping payload.

    Returns:
        List[str]: Names that were actually added.
    """
    return [name for name, mapping in mappings.items() if self.register_custom(name, mapping)]

  def suggest(self, name: str) -> Optional[str]:
    """
    Finds the first registered name that contains, or is contained in, ``name``.

    Matching is case-insensitive.
    """
    needle = name.lower()
    if not needle:
      return None
    for key in self._entries:
      lowered = key.lower()
      if needle in lowered or lowered in needle:
        return key
    return None

  def related(self, name: str, limit: int = 10) -> List[str]:
    """
    Lists names sharing the receiver prefix of ``name`` or its first four characters.

    Args:
        name: Legacy command name.
        limit: Maximum number of results.

    Returns:
        List[str]: Related names in table order.
    """
    category = name.split(".")[0]
    stem = name[:4]
    return [key for key in self._entries if key.startswith(category) or stem in key][:limit]

  def compare(self, name: str) -> CommandComparison:
    """
    Looks up a command for side-by-side comparison.

    Args:
        name: Legacy command name.

    Returns:
        CommandComparison: The exact mapping, or the closest partial match, plus related names.
    """
    mapping = self.get(name)
    suggestion = None
    suggested_mapping = None
    if mapping is None:
      suggestion = self.suggest(name)
      if suggestion is not None:
        suggested_mapping = self.get(suggestion)
    return CommandComparison(
      command=name,
      mapping=mapping,
      suggestion=suggestion,
      suggested_mapping=suggested_mapping,
      related=self.related(name),
    )


_DEFAULT_REGISTRY: Optional[CommandRegistry] = None
_DEFAULT_LOCK = threading.Lock()


def get_registry() -> CommandRegistry:
  """Returns the process-wide default registry, creating it on first use."""
  global _DEFAULT_REGISTRY
  with _DEFAULT_LOCK:
    if _DEFAULT_REGISTRY is None:
      _DEFAULT_REGISTRY = CommandRegistry()
    return _DEFAULT_REGISTRY


def register_custom_mapping(name: str, mapping: MappingLike, registry: Optional[CommandRegistry] = None) -> bool:
  """
  Registers a mapping in ``registry`` (default: the process-wide registry).

  Returns:
      bool: True if added.
  """
  target = registry if registry is not None else get_registry()
  return target.register_custom(name, mapping)

