"""
Variable binding conventions for generated programs.

Generated code keeps test variables in a ``vars`` object. Values are
written with ``vars["name"] = expr`` and read back as ``vars["name"]``.
Arguments that reach a translator are either one of those read
expressions, a key token (``Key['ENTER']``) produced by the keys
preprocessor, or plain text that must be quoted.
"""

from __future__ import annotations

import json
import re
from enum import Enum

VARIABLE_REFERENCE_RE = re.compile(r'^vars\["([^"\\]*)"\]$')
KEY_TOKEN_RE = re.compile(r"^Key\['([^']+)'\]$")
INTERPOLATION_RE = re.compile(r'\$\{vars\["[^"\\]*"\]\}')
_BARE_INTERPOLATION_RE = re.compile(r'\$\{(?!vars\[")')


class ArgumentKind(str, Enum):
    VARIABLE = "variable"
    KEY = "key"
    LITERAL = "literal"


def variable_lookup(name: str) -> str:
    return f'vars["{name}"]'


def variable_setter(name: str | None, value: str) -> str:
    """
    Assignment of ``value`` into the ``name`` slot.

    An unset name yields an empty statement so the value is discarded.
    """
    return f"{variable_lookup(name)} = {value}" if name else ""


def assign_or_evaluate(name: str | None, value: str) -> str:
    """Like ``variable_setter`` but keeps ``value`` as a bare statement when no name is set."""
    return variable_setter(name, value) or value


def classify_argument(value: str) -> ArgumentKind:
    if VARIABLE_REFERENCE_RE.match(value):
        return ArgumentKind.VARIABLE
    if KEY_TOKEN_RE.match(value):
        return ArgumentKind.KEY
    return ArgumentKind.LITERAL


def is_variable_reference(value: str) -> bool:
    return classify_argument(value) is ArgumentKind.VARIABLE


def key_name(token: str) -> str:
    m = KEY_TOKEN_RE.match(token)
    if not m:
        raise ValueError(f"not a key token: {token!r}")
    return m.group(1)


def quote_literal(text: str) -> str:
    """
    JavaScript string literal for ``text``.

    Text carrying ``${vars["x"]}`` interpolations becomes a template
    literal; anything else is a double-quoted string escaped by
    ``json.dumps``.
    """
    if INTERPOLATION_RE.search(text):
        escaped = text.replace("\\", "\\\\").replace("`", "\\`")
        escaped = _BARE_INTERPOLATION_RE.sub(lambda _: "\\${", escaped)
        return f"`{escaped}`"
    return json.dumps(text, ensure_ascii=False)


def expression_for(value: str) -> str:
    """Variable reads pass through; everything else is quoted."""
    if classify_argument(value) is ArgumentKind.VARIABLE:
        return value
    return quote_literal(value)
