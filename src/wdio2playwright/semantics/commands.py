"""
Static command table.

Element commands are keyed by method name; browser commands are keyed by the
qualified ``browser.<name>`` form.
"""

from typing import Dict

from wdio2playwright.semantics.schema import CommandMapping

_VISIBLE = '{ state: "visible" }'

_ELEMENT_COMMANDS = {
  "setValue": ("fill", None, "Clears and fills input"),
  "addValue": ("pressSequentially", None, "Types without clearing"),
  "clearValue": ("clear", None, "Clears input field"),
  "getValue": ("inputValue", None, "Gets input value"),
  "getText": ("textContent", None, "Gets element text"),
  "getHTML": ("innerHTML", None, "Gets inner HTML"),
  "getAttribute": ("getAttribute", None, "Gets attribute value"),
  "click": ("click", None, "Clicks element"),
  "doubleClick": ("dblclick", None, "Double clicks element"),
  "moveTo": ("hover", None, "Hovers over element"),
  "scrollIntoView": ("scrollIntoViewIfNeeded", None, "Scrolls element into view"),
  "isDisplayed": ("isVisible", None, "Checks visibility"),
  "isEnabled": ("isEnabled", None, "Checks if enabled"),
  "isSelected": ("isChecked", None, "Checks if selected/checked"),
  "isExisting": ("count", None, "Checks existence (count > 0)"),
  "waitForDisplayed": ("waitFor", _VISIBLE, "Waits for visibility"),
  "waitForClickable": ("waitFor", _VISIBLE, "Waits for clickable state"),
  "waitForExist": ("waitFor", '{ state: "attached" }', "Waits for existence"),
  "waitForEnabled": ("waitFor", _VISIBLE, "Waits for enabled state"),
  "selectByVisibleText": ("selectOption", None, "Selects dropdown option by text"),
  "selectByIndex": ("selectOption", None, "Selects dropdown option by index"),
  "selectByAttribute": ("selectOption", None, "Selects dropdown option by attribute"),
}

_BROWSER_COMMANDS = {
  "url": ("page.goto", None, "Navigates to URL"),
  "getUrl": ("page.url", None, "Gets current URL"),
  "getTitle": ("page.title", None, "Gets page title"),
  "pause": ("page.waitForTimeout", None, "Pauses execution"),
  "debug": ("page.pause", None, "Opens Playwright inspector"),
  "execute": ("page.evaluate", None, "Executes JavaScript"),
  "executeAsync": ("page.evaluate", None, "Executes async JavaScript"),
  "keys": ("page.keyboard.press", None, "Presses keyboard keys"),
  "refresh": ("page.reload", None, "Reloads page"),
  "back": ("page.goBack", None, "Navigates back"),
  "forward": ("page.goForward", None, "Navigates forward"),
  "deleteCookies": ("context.clearCookies", None, "Clears cookies"),
  "getCookies": ("context.cookies", None, "Gets cookies"),
  "setCookies": ("context.addCookies", None, "Sets cookies"),
  "newWindow": ("context.newPage", None, "Opens new window/tab"),
  "switchWindow": ("page.bringToFront", None, "Switches to window"),
  "closeWindow": ("page.close", None, "Closes window"),
  "getWindowHandles": ("context.pages", None, "Gets all page handles"),
  "getWindowHandle": ("page", None, "Gets current page handle"),
  "switchToFrame": ("page.frameLocator", None, "Switches to frame"),
  "switchToParentFrame": ("page.mainFrame", None, "Switches to parent frame"),
  "acceptAlert": ('page.on("dialog")', None, "Accepts dialog"),
  "dismissAlert": ('page.on("dialog")', None, "Dismisses dialog"),
  "getAlertText": ("dialog.message", None, "Gets dialog text"),
  "sendAlertText": ("dialog.accept", None, "Sends text to dialog"),
  "takeScreenshot": ("page.screenshot", None, "Takes screenshot"),
  "saveScreenshot": ("page.screenshot", '{ path: "..." }', "Saves screenshot"),
  "uploadFile": ("locator.setInputFiles", None, "Uploads file"),
}


def default_commands() -> Dict[str, CommandMapping]:
  """
  Builds the built-in mapping table.

  Returns:
      Dict[str, CommandMapping]: A new dict, element commands first.
  """
  table: Dict[str, CommandMapping] = {}
  for name, (target, options, description) in _ELEMENT_COMMANDS.items():
    table[name] = CommandMapping(target=target, options=options, description=description)
  for name, (target, options, description) in _BROWSER_COMMANDS.items():
    table[f"browser.{name}"] = CommandMapping(target=target, options=options, description=description)
  return table
