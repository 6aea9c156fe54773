"""
Tests for the Tracing System.
"""

from wdio2playwright.core.tracer import TraceEventType, TraceLogger


def test_phase_nesting():
  logger = TraceLogger()

  p1 = logger.start_phase("Parent")
  logger.start_phase("Child")
  logger.end_phase()  # End Child
  logger.end_phase()  # End Parent

  events = logger.export()

  # 4 events: Start P, Start C, End C, End P
  assert len(events) == 4
  assert events[0]["type"] == TraceEventType.PHASE_START
  assert events[1]["parent_id"] == p1
  assert events[2]["type"] == TraceEventType.PHASE_END


def test_rule_logging():
  logger = TraceLogger()
  phase = logger.start_phase("Rewrite")
  logger.log_rule("Transformed describe to test.describe", "describe", "test.describe")

  event = logger.export()[1]
  assert event["type"] == TraceEventType.RULE_APPLIED
  assert event["parent_id"] == phase
  assert event["metadata"] == {"before": "describe", "after": "test.describe"}


def test_end_phase_without_start_is_ignored():
  logger = TraceLogger()
  logger.end_phase()
  assert logger.events == []


def test_loggers_are_independent():
  a, b = TraceLogger(), TraceLogger()
  a.log_note("only in a")
  assert len(a.events) == 1
  assert b.events == []
