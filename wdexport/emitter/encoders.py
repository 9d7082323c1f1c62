"""
Argument marshalling for translators: typed keys, script parameters and
navigation URLs.
"""

from __future__ import annotations

import re
from typing import List, Union

from wdexport.emitter.models import ScriptShape
from wdexport.emitter.variables import (
    ArgumentKind,
    classify_argument,
    key_name,
    quote_literal,
    variable_lookup,
)

ABSOLUTE_URL_RE = re.compile(r"^(file|http|https)://")


def encode_send_keys_element(value: str) -> str:
    kind = classify_argument(value)
    if kind is ArgumentKind.VARIABLE:
        return value
    if kind is ArgumentKind.KEY:
        return f"Key.{key_name(value)}"
    return quote_literal(value)


def generate_send_keys_input(value: Union[str, List[str]]) -> str:
    """
    Arguments of a ``sendKeys(...)`` call.

    A single string is one argument. A list (produced by the keys
    preprocessor) becomes one argument per element, joined with ``", "``.
    """
    if isinstance(value, (list, tuple)):
        return ", ".join(encode_send_keys_element(str(v)) for v in value)
    value = "" if value is None else str(value)
    # a lone key token is only produced inside lists
    if classify_argument(value) is ArgumentKind.VARIABLE:
        return value
    return quote_literal(value)


def generate_script_arguments(script: ScriptShape) -> str:
    """``""`` when the script takes no arguments, else ``", vars["a"],vars["b"]"``."""
    if not script.argv:
        return ""
    return ", " + ",".join(variable_lookup(name) for name in script.argv)


def resolve_url(target: str, base_url: str) -> str:
    if ABSOLUTE_URL_RE.match(target):
        return target
    return f"{base_url}{target}"
