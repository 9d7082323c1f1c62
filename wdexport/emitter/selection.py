"""
Option locators for ``select``/``addSelection``/``removeSelection``.

The returned expression is looked up inside the already resolved dropdown
element, so every form is relative to it. Options without a prefix are
matched by label.
"""

from __future__ import annotations

from wdexport.emitter.errors import UnsupportedLocatorError
from wdexport.emitter.variables import quote_literal


async def emit(option: str) -> str:
    if not isinstance(option, str):
        raise UnsupportedLocatorError(f"Option locator must be text, got {type(option).__name__}")
    kind, sep, rest = option.partition("=")
    if not sep or kind not in ("label", "id", "value", "index"):
        kind, rest = "label", option

    if kind == "label":
        return f"By.xpath({quote_literal(f'//option[. = {_xpath_string(rest)}]')})"
    if kind == "id":
        return f"By.css({quote_literal(f'*[id={_css_string(rest)}]')})"
    if kind == "value":
        return f"By.css({quote_literal(f'*[value={_css_string(rest)}]')})"

    try:
        index = int(rest)
    except ValueError:
        raise UnsupportedLocatorError(f"Invalid option index {rest!r}")
    return f"By.css({quote_literal(f'*:nth-child({index + 1})')})"


def _xpath_string(text: str) -> str:
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    chunks = ", \"'\", ".join(f"'{part}'" for part in text.split("'"))
    return f"concat({chunks})"


def _css_string(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"
