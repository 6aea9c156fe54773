"""
Page-Object class generation.

Turns :class:`PageObjectInfo` into an ``export class`` with one field per
distinct locator and a ``goto()`` method navigating to the first URL seen.
TypeScript output declares ``readonly`` typed fields and imports the
``Page``/``Locator`` types.
"""

import logging
from typing import List, Tuple

from wdio2playwright.core.js.nodes import StringLiteral
from wdio2playwright.core.pom.analyser import extract_page_info
from wdio2playwright.core.pom.models import LocatorInfo, PageObjectClass, PageObjectInfo, PomResult
from wdio2playwright.core.pom.naming import derive_field_name, generate_page_name, unique_name
from wdio2playwright.enums import Dialect

logger = logging.getLogger(__name__)


def collect_fields(info: PageObjectInfo) -> List[Tuple[str, LocatorInfo]]:
  """
  Assigns a field name to every distinct locator.

  Locators with identical source collapse into one field; distinct locators
  deriving the same name get a numeric suffix.

  Args:
      info: Extracted page information.

  Returns:
      List[Tuple[str, LocatorInfo]]: ``(field name, locator)`` in source order.
  """
  fields: List[Tuple[str, LocatorInfo]] = []
  seen = set()
  for locator in info.locators:
    if locator.expression in seen:
      continue
    seen.add(locator.expression)
    name = derive_field_name(locator.method, locator.selector, len(fields))
    fields.append((unique_name(name, (n for n, _ in fields)), locator))
  return fields


def generate_page_object_class(page_name: str, info: PageObjectInfo, typescript: bool = False) -> str:
  """
  Renders the page-object class source.

  Args:
      page_name: Class name.
      info: Extracted page information.
      typescript: Emit a typed class.

  Returns:
      str: Class source ending with a newline.
  """
  fields = collect_fields(info)
  url = StringLiteral(info.urls[0] if info.urls else "/").to_text()

  lines: List[str] = []
  if typescript:
    lines += ["import type { Page, Locator } from '@playwright/test';", ""]
  lines.append(f"export class {page_name} {{")
  if typescript:
    lines.append("  readonly page: Page;")
    lines += [f"  readonly {name}: Locator;" for name, _ in fields]
    lines.append("")
    lines.append("  constructor(page: Page) {")
  else:
    lines.append("  constructor(page) {")
  lines.append("    this.page = page;")
  lines += [f"    this.{name} = {locator.expression};" for name, locator in fields]
  lines.append("  }")
  lines.append("")
  lines.append("  async goto(): Promise<void> {" if typescript else "  async goto() {")
  lines.append(f"    await this.page.goto({url});")
  lines.append("  }")
  lines.append("}")
  return "\n".join(lines) + "\n"


def refactor_to_pom(code: str, file_path: str = "test.spec.js") -> PomResult:
  """
  Extracts a page object from a Playwright test file.

  Args:
      code: Playwright test source.
      file_path: Path of the test; drives the class name and, for ``.ts``
          paths, TypeScript output.

  Returns:
      PomResult: The generated class and the page information it was built from.

  Raises:
      ParseFailure: If the code cannot be parsed at all.
  """
  dialect = Dialect.for_path(file_path)
  typescript = dialect == Dialect.TYPESCRIPT
  info = extract_page_info(code, dialect)
  page_name = generate_page_name(file_path)
  extension = "ts" if typescript else "js"
  content = generate_page_object_class(page_name, info, typescript)
  logger.debug("Generated %s with %d locators", page_name, len(info.locators))
  return PomResult(
    page_object=PageObjectClass(class_name=page_name, file_name=f"{page_name}.{extension}", content=content),
    page_info=info,
  )
