"""
Translators whose output encodes a multi-step runtime protocol.

New-window handling
    1. capture every open handle into ``vars["windowHandles"]``
    2. the triggering command's own statements, unchanged (insertion point)
    3. ``waitForWindow`` sleeps, compares the handle sets and returns the
       handle that was not there before, or throws.

Nothing is remembered between commands; the whole protocol lives in the
emitted statements.
"""

from __future__ import annotations

import math
import re
from typing import Any, List

import structlog

from wdexport.core.config import settings
from wdexport.emitter import location
from wdexport.emitter.errors import UnsupportedFormError
from wdexport.emitter.logger_commands import generate_logger_commands
from wdexport.emitter.models import Command, EmitterContext
from wdexport.emitter.statements import EmittedCommand, MethodDeclaration, Statement, statements
from wdexport.emitter.variables import assign_or_evaluate, variable_lookup, variable_setter

logger = structlog.get_logger(__name__)

WINDOW_HANDLES_VAR = "windowHandles"
WAIT_FOR_WINDOW = "waitForWindow"

WINDOW_SERIAL_RE = re.compile(r"^win_ser_(\d+)$")
ALL_HANDLES = "(await $webDriver.getAllWindowHandles())"


async def emit_wait_for_window() -> MethodDeclaration:
    commands = statements(
        (0, "await $webDriver.sleep(timeout)"),
        (0, f"const handlesThen = {variable_lookup(WINDOW_HANDLES_VAR)}"),
        (0, "const handlesNow = await $webDriver.getAllWindowHandles()"),
        (
            0,
            "if (handlesNow.length > handlesThen.length"
            " && handlesThen.every(handle => handlesNow.includes(handle))) {",
        ),
        (1, "return handlesNow.find(handle => (!handlesThen.includes(handle)))"),
        (0, "}"),
        (0, 'throw new Error("New window did not appear before timeout")'),
    )
    return MethodDeclaration(
        name=WAIT_FOR_WINDOW,
        body=f"async function {WAIT_FOR_WINDOW}(timeout = {settings.NEW_WINDOW_TIMEOUT}) {{",
        terminating_keyword="}",
        commands=commands,
    )


async def emit_new_window_handling(
    command: Command,
    emitted: EmittedCommand,
    context: EmitterContext,
) -> EmittedCommand:
    timeout = command.window_timeout if command.window_timeout is not None else settings.NEW_WINDOW_TIMEOUT
    commands: List[Statement] = [
        Statement(0, variable_setter(WINDOW_HANDLES_VAR, "await $webDriver.getAllWindowHandles()")),
        *emitted.commands,
        Statement(0, assign_or_evaluate(command.window_handle_name, f"await {WAIT_FOR_WINDOW}({timeout})")),
    ]
    description = f"Emit New Window on {command.command}"
    with_logger = await generate_logger_commands(description, commands, context)

    methods = list(emitted.methods)
    if not any(m.name == WAIT_FOR_WINDOW for m in methods):
        methods.append(await emit_wait_for_window())
    return EmittedCommand(commands=with_logger, description=description, methods=methods)


def _frame_index(frame_location: str) -> int:
    raw = frame_location[len("index="):]
    try:
        return math.trunc(float(raw))
    except (ValueError, OverflowError):
        raise UnsupportedFormError(f'Frame index must be a number, got "{raw}"')


async def emit_select_frame(frame_location: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    if frame_location in ("relative=top", "relative=parent"):
        commands = statements((0, "await $webDriver.switchTo().defaultContent()"))
    elif frame_location.startswith("index="):
        commands = statements((0, f"await $webDriver.switchTo().frame({_frame_index(frame_location)})"))
    else:
        commands = statements(
            (0, f"const frame = {await location.emit_located(frame_location)}"),
            (0, "await $webDriver.switchTo().frame(frame)"),
        )
    return EmittedCommand(commands=commands, description=f"Select frame {frame_location}")


async def emit_select_window(window_location: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    if window_location.startswith(("handle=", "name=")):
        handle = window_location.partition("=")[2]
        if not handle.strip():
            raise UnsupportedFormError(f'Missing window handle in "{window_location}"')
    elif window_location == "win_ser_local":
        handle = f"{ALL_HANDLES}[0]"
    elif window_location.startswith("win_ser_"):
        m = WINDOW_SERIAL_RE.match(window_location)
        if not m:
            raise UnsupportedFormError(f'Malformed window serial "{window_location}"')
        handle = f"{ALL_HANDLES}[{int(m.group(1))}]"
    else:
        logger.warning("unsupported window selection", target=window_location)
        raise UnsupportedFormError('Can only emit "select window" for window handles')

    commands = statements((0, f"await $webDriver.switchTo().window({handle})"))
    description = re.sub(r'"([^"]+)"', r"\1", f"Select window {window_location}", count=1)
    return EmittedCommand(commands=commands, description=description)


async def emit_store_window_handle(var_name: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements((0, variable_setter(var_name, "await $webDriver.getWindowHandle()")))
    return EmittedCommand(commands=commands, description=f"Store window handle {var_name}")
