"""
Migration Trace Logger.

A :class:`TraceLogger` belongs to one ``MigrationEngine.run`` call. It records
a flat list of events that can be re-assembled into a tree through
``parent_id``:

* phases (``Migration Pipeline`` > ``Parse`` / ``Classify`` / ``Rewrite`` /
  ``Render``), opened with :meth:`TraceLogger.phase`
* one ``rule_applied`` event per change log entry, with the source text before
  and after the rewrite
* import actions, review notes and ``inspection`` events for member calls that
  were looked up but left alone

``export()`` turns the events into plain dicts; the CLI writes them to the
``--json-trace`` file.
"""

import time
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  RULE_APPLIED = "rule_applied"
  IMPORT_ACTION = "import_action"
  REVIEW_NOTE = "review_note"
  INSPECTION = "inspection"


@dataclass
class TraceEvent:
  """One entry of the trace. Phase ends point at their phase through ``parent_id``."""

  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Event recorder of a single migration run.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._open: List[str] = []

  @property
  def events(self) -> List[TraceEvent]:
    return list(self._events)

  @property
  def current_phase(self) -> Optional[str]:
    return self._open[-1] if self._open else None

  def _record(self, kind: TraceEventType, description: str, parent: Optional[str], **metadata: Any) -> str:
    event = TraceEvent(
      id=str(uuid.uuid4()),
      type=kind,
      timestamp=time.time(),
      description=description,
      parent_id=parent,
      metadata=metadata,
    )
    self._events.append(event)
    return event.id

  def start_phase(self, name: str, description: str = "") -> str:
    """
    Opens a phase nested in the current one.

    Args:
        name: Phase name (``Parse``, ``Rewrite``...).
        description: Free-form detail stored in the metadata.

    Returns:
        str: Id of the phase, the ``parent_id`` of everything logged inside it.
    """
    phase_id = self._record(TraceEventType.PHASE_START, name, self.current_phase, detail=description)
    self._open.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    """Closes the innermost phase; a no-op when none is open."""
    if self._open:
      self._record(TraceEventType.PHASE_END, "End Phase", self._open.pop())

  @contextmanager
  def phase(self, name: str, description: str = "") -> Iterator[str]:
    """``with tracer.phase("Parse"):`` closes the phase even on early return or error."""
    phase_id = self.start_phase(name, description)
    try:
      yield phase_id
    finally:
      self.end_phase()

  def log_rule(self, rule: str, before: str, after: str) -> None:
    """Records a change log entry with the text it replaced."""
    self._record(TraceEventType.RULE_APPLIED, f"Applied {rule}", self.current_phase, before=before, after=after)

  def log_import(self, description: str) -> None:
    self._record(TraceEventType.IMPORT_ACTION, description, self.current_phase)

  def log_note(self, message: str) -> None:
    self._record(TraceEventType.REVIEW_NOTE, message, self.current_phase, level="warning")

  def log_inspection(self, node_str: str, outcome: str) -> None:
    """Records a construct that was examined and deliberately left unchanged."""
    self._record(TraceEventType.INSPECTION, f"Inspecting '{node_str}'", self.current_phase, outcome=outcome)

  def export(self) -> List[Dict[str, Any]]:
    """Events as dicts, ready for ``json.dumps``."""
    return [asdict(event) for event in self._events]
