"""
Console and logging setup for the command line tool.

Library modules only call ``logging.getLogger(__name__)``; this module decides
where those records end up. A single ``RichHandler`` on the root logger renders
them to the active ``rich`` console, next to the tables and summaries the CLI
prints itself.

The exported ``console`` object is a stand-in for that active console. Tests
(or an embedding application) call :func:`set_console` with a recording
``Console`` and every later ``console.print`` and log record is captured there.

The helpers ``log_info``, ``log_success``, ``log_warning`` and ``log_error``
prefix an icon and enable rich markup (``[path]tests/a.js[/path]``).
``log_success`` uses a dedicated ``SUCCESS`` level (25) between INFO and
WARNING.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

# Markup styles used by the handlers: paths, verdicts and legacy/target command names.
_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "legacy": "magenta",
    "target": "bold green",
  }
)


def _new_console() -> Console:
  return Console(theme=_THEME)


def _route_logging(target: Console) -> None:
  """Points the root logger at ``target``, replacing any previous rich handler."""
  root = logging.getLogger()
  for handler in [h for h in root.handlers if isinstance(h, RichHandler)]:
    root.removeHandler(handler)
  root.addHandler(
    RichHandler(
      console=target,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
  )
  root.setLevel(logging.INFO)


class _ConsoleProxy:
  """
  Stable handle on the console currently used for output.

  Attribute access falls through to the active ``Console`` (``console.rule``,
  ``console.width``...), so callers never hold on to a stale instance.
  """

  def __init__(self, backend: Optional[Console] = None) -> None:
    self._backend = backend or _new_console()
    _route_logging(self._backend)

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    _route_logging(new_console)

  def reset(self) -> None:
    self.set_backend(_new_console())

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    """Text recorded so far; the active console must be created with ``record=True``."""
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Sends console output and log records to ``new_console``.

  Args:
      new_console (Console): For example ``Console(record=True, file=io.StringIO())``.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Goes back to a fresh console on standard output."""
  console.reset()


def set_verbosity(verbose: bool) -> None:
  """Shows the debug records of the library (one per applied rule) when ``verbose``."""
  logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def _emit(level: int, icon: str, msg: str) -> None:
  logging.log(level, f"{icon} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs progress information.

  Args:
      msg (str): Message, may contain rich markup.
  """
  _emit(logging.INFO, "ℹ️ ", msg)


def log_success(msg: str) -> None:
  _emit(SUCCESS_LEVEL_NUM, "✅", msg)


def log_warning(msg: str) -> None:
  _emit(logging.WARNING, "⚠️ ", msg)


def log_error(msg: str) -> None:
  """Logs a failure that makes the command exit with a non-zero code."""
  _emit(logging.ERROR, "❌", msg)
