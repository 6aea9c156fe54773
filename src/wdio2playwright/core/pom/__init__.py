"""
Page-Object Synthesizer.
"""

from wdio2playwright.core.pom.analyser import extract_page_info
from wdio2playwright.core.pom.models import PageObjectClass, PageObjectInfo, PomResult
from wdio2playwright.core.pom.naming import generate_page_name
from wdio2playwright.core.pom.synthesizer import generate_page_object_class, refactor_to_pom

__all__ = [
  "PageObjectClass",
  "PageObjectInfo",
  "PomResult",
  "extract_page_info",
  "generate_page_name",
  "generate_page_object_class",
  "refactor_to_pom",
]
