"""
Tests for CLI argument parsing and dispatch.

Handlers are patched on the ``commands`` facade, so these tests only check
that ``main`` forwards the parsed arguments.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from wdio2playwright import __version__
from wdio2playwright.cli.__main__ import main


@patch("wdio2playwright.cli.commands.handle_analyze", return_value=0)
def test_analyze_dispatch(mock_handle):
  assert main(["analyze", "tests/", "--json"]) == 0
  mock_handle.assert_called_once_with(Path("tests/"), True)


@patch("wdio2playwright.cli.commands.handle_migrate", return_value=0)
def test_migrate_defaults(mock_handle):
  main(["migrate", "login.js"])
  mock_handle.assert_called_once_with(Path("login.js"), None, None, False, None)


@patch("wdio2playwright.cli.commands.handle_migrate", return_value=1)
def test_migrate_all_flags(mock_handle):
  code = main(["migrate", "specs", "--out", "out", "--typescript", "--pom", "--json-trace", "t.json"])
  assert code == 1
  mock_handle.assert_called_once_with(Path("specs"), Path("out"), True, True, Path("t.json"))


@patch("wdio2playwright.cli.commands.handle_pom", return_value=0)
def test_pom_dispatch(mock_handle):
  main(["pom", "login.spec.js", "--out-dir", "pages"])
  mock_handle.assert_called_once_with(Path("login.spec.js"), Path("pages"))


@patch("wdio2playwright.cli.commands.handle_compare", return_value=0)
def test_compare_dispatch(mock_handle):
  main(["compare", "browser.url"])
  mock_handle.assert_called_once_with("browser.url")


@patch("wdio2playwright.cli.commands.handle_register", return_value=0)
def test_register_dispatch(mock_handle):
  main(["register", "mappings.json"])
  mock_handle.assert_called_once_with(Path("mappings.json"))


@patch("wdio2playwright.cli.commands.handle_state", return_value=0)
def test_state_dispatch(mock_handle):
  main(["state", "."])
  mock_handle.assert_called_once_with(Path("."))


@patch("wdio2playwright.cli.__main__.set_verbosity")
@patch("wdio2playwright.cli.commands.handle_state", return_value=0)
def test_verbose_flag(mock_handle, mock_verbosity):
  main(["-v", "state", "."])
  mock_verbosity.assert_called_once_with(True)


def test_version(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert __version__ in capsys.readouterr().out


def test_command_required():
  with pytest.raises(SystemExit):
    main([])
