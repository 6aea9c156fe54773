"""
Entry point for module execution (``python -m wdio2playwright``).

This module delegates execution to the CLI handler in ``wdio2playwright.cli.__main__``.
"""

import sys

from wdio2playwright.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
