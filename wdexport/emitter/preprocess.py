"""
Argument preprocessors run by the registry before a translator sees a
command's target or value.

Recorded commands reference test variables as ``${name}`` and special
keys as ``${KEY_ENTER}``. These functions rewrite those references into
the forms the translators classify: ``vars["name"]`` reads, ``Key['X']``
tokens and ``arguments[i]`` script parameters.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from wdexport.emitter.models import ScriptShape
from wdexport.emitter.variables import variable_lookup

REFERENCE_RE = re.compile(r"\$\{([^}\s]+)\}")
KEY_PREFIX = "KEY_"

Lookup = Callable[[str], str]
Preprocessor = Callable[[Any], Any]


def identity(value: Any) -> Any:
    return value


def interpolate_variables(value: Any, lookup: Lookup = variable_lookup, whole: bool = True) -> Any:
    """
    ``"${x}"`` becomes ``vars["x"]``; references embedded in longer text
    become ``${vars["x"]}`` interpolations. With ``whole=False`` a lone
    reference is interpolated too, for arguments that are always text
    (locators, option labels). Non-string values pass through.
    """
    if not isinstance(value, str):
        return value
    match = REFERENCE_RE.fullmatch(value)
    if whole and match:
        return lookup(match.group(1))
    return REFERENCE_RE.sub(lambda m: "${" + lookup(m.group(1)) + "}", value)


def interpolate_text(value: Any) -> Any:
    return interpolate_variables(value, whole=False)


def substitute_references(value: Any, lookup: Lookup = variable_lookup) -> Any:
    """Replace every ``${x}`` with a bare ``vars["x"]`` read, for arguments spliced in as code."""
    if not isinstance(value, str):
        return value
    return REFERENCE_RE.sub(lambda m: lookup(m.group(1)), value)


def preprocess_keys(value: Any, lookup: Lookup = variable_lookup) -> Union[str, List[str], Any]:
    """
    Split typed input into literal chunks, key tokens and variable reads.

    ``"abc${KEY_ENTER}"`` -> ``["abc", "Key['ENTER']"]``. Input without any
    reference is returned as the original string.
    """
    if not isinstance(value, str) or not REFERENCE_RE.search(value):
        return value

    parts: List[str] = []
    pos = 0
    for m in REFERENCE_RE.finditer(value):
        if m.start() > pos:
            parts.append(value[pos:m.start()])
        name = m.group(1)
        if name.startswith(KEY_PREFIX) and len(name) > len(KEY_PREFIX):
            parts.append(f"Key['{name[len(KEY_PREFIX):]}']")
        else:
            parts.append(lookup(name))
        pos = m.end()
    if pos < len(value):
        parts.append(value[pos:])
    return parts


def preprocess_script(value: Any) -> Any:
    """
    Turn script text into a ``ScriptShape``.

    Each distinct ``${name}`` gets the next ``arguments[i]`` slot in order
    of first appearance; repeated names reuse their slot.
    """
    if isinstance(value, ScriptShape) or not isinstance(value, str):
        return value

    argv: List[str] = []
    slots: Dict[str, int] = {}

    def _slot(m: re.Match) -> str:
        name = m.group(1)
        if name not in slots:
            slots[name] = len(argv)
            argv.append(name)
        return f"arguments[{slots[name]}]"

    return ScriptShape(script=REFERENCE_RE.sub(_slot, value), argv=argv)


def process_env_variable(
    value: Any,
    lookup: Lookup = variable_lookup,
    env: Optional[Mapping[str, str]] = None,
    whole: bool = True,
) -> Any:
    """
    Substitute ``${NAME}`` with the environment value when ``NAME`` is
    defined in ``env``; remaining references are interpolated as variable
    reads through ``lookup``.
    """
    if not isinstance(value, str):
        return value
    env = env or {}
    substituted = REFERENCE_RE.sub(
        lambda m: env[m.group(1)] if m.group(1) in env else m.group(0),
        value,
    )
    return interpolate_variables(substituted, lookup, whole=whole)
