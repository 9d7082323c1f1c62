"""
Locator translation: ``strategy=selector`` strings to ``By`` expressions.
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from wdexport.emitter.errors import UnsupportedLocatorError
from wdexport.emitter.variables import quote_literal

ELEMENT_TIMEOUT = "TIMEOUT"


def _by(method: str) -> Callable[[str], str]:
    return lambda selector: f"By.{method}({quote_literal(selector)})"


STRATEGIES: Dict[str, Callable[[str], str]] = {
    "css": _by("css"),
    "xpath": _by("xpath"),
    "id": _by("id"),
    "name": _by("name"),
    "link": _by("linkText"),
    "linkText": _by("linkText"),
    "partialLinkText": _by("partialLinkText"),
    # selenium-webdriver for JavaScript has no By.tagName; a bare tag is a valid css selector
    "tagName": _by("css"),
    "className": _by("className"),
}


def split_locator(locator: str) -> Tuple[str, str]:
    if not isinstance(locator, str):
        raise UnsupportedLocatorError(f"Locator must be text, got {type(locator).__name__}")
    if locator.startswith("//"):
        return "xpath", locator
    strategy, sep, selector = locator.partition("=")
    if not sep or strategy not in STRATEGIES:
        raise UnsupportedLocatorError(f"Unknown locator {locator}")
    return strategy, selector


async def emit(locator: str) -> str:
    strategy, selector = split_locator(locator)
    return STRATEGIES[strategy](selector)


async def emit_located(locator: str) -> str:
    """Expression resolving to the element once it exists, bounded by ``TIMEOUT``."""
    return f"await $webDriver.wait(until.elementLocated({await emit(locator)}), {ELEMENT_TIMEOUT})"
