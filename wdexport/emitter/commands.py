"""
Per-command translators.

Each translator receives the preprocessed target and value of one command
plus the ``EmitterContext`` and returns an ``EmittedCommand``. Element
lookups go through ``location.emit_located`` so every one of them waits up
to ``TIMEOUT`` for the element to exist.

Log statements are not added here; the registry decorates every fragment
with the ``description`` a translator returns.
"""

from __future__ import annotations

from typing import Any, Union

from wdexport.emitter import location, selection
from wdexport.emitter.encoders import generate_script_arguments, generate_send_keys_input, resolve_url
from wdexport.emitter.errors import UnsupportedFormError
from wdexport.emitter.models import EmitterContext, ScriptShape
from wdexport.emitter.preprocess import process_env_variable, preprocess_script
from wdexport.emitter.statements import EmittedCommand, statements
from wdexport.emitter.variables import (
    assign_or_evaluate,
    expression_for,
    is_variable_reference,
    quote_literal,
    variable_lookup,
    variable_setter,
)


async def skip(*_args: Any) -> str:
    return ""


# Navigation / windows


async def emit_open(target: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    # a variable holds a complete URL and is never joined to the base URL
    url = target if is_variable_reference(target) else resolve_url(target, context.project.url)
    commands = statements((0, f"await $webDriver.get({expression_for(url)})"))
    return EmittedCommand(commands=commands, description=f"Open {url}")


async def emit_close(_target: Any, _value: Any, context: EmitterContext) -> EmittedCommand:
    return EmittedCommand(commands=statements((0, "await $webDriver.close()")), description="Close")


async def emit_set_window_size(size: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    width, sep, height = str(size).partition("x")
    if not sep or not width.strip().isdigit() or not height.strip().isdigit():
        raise UnsupportedFormError(f'Window size must look like "1280x800", got "{size}"')
    width, height = width.strip(), height.strip()
    commands = statements(
        (0, f"await $webDriver.manage().window().setRect({{ width: {width}, height: {height} }})"),
    )
    return EmittedCommand(commands=commands, description=f"Set window size w:{width} h:{height}")


async def emit_pause(time_ms: Any, _value: Any, context: EmitterContext) -> EmittedCommand:
    try:
        ms = int(str(time_ms or 0).strip())
    except ValueError:
        raise UnsupportedFormError(f'Pause needs a number of milliseconds, got "{time_ms}"')
    return EmittedCommand(
        commands=statements((0, f"await $webDriver.sleep({ms})")),
        description=f"Pause {ms}ms",
    )


# Mouse


async def emit_click(target: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements((0, f"{await location.emit_located(target)}.click()"))
    return EmittedCommand(commands=commands, description=f"Click {target}")


async def emit_double_click(target: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"const element = {await location.emit_located(target)}"),
        (0, "await $webDriver.actions({ bridge: true }).doubleClick(element).perform()"),
    )
    return EmittedCommand(commands=commands, description=f"Double click {target}")


async def emit_mouse_over(target: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"const element = {await location.emit_located(target)}"),
        (0, "await $webDriver.actions({ bridge: true }).move({ origin: element }).perform()"),
    )
    return EmittedCommand(commands=commands, description=f"Mouse over {target}")


async def emit_drag_and_drop(dragged: str, dropped: str, context: EmitterContext) -> str:
    """Flexible translator: returns the statements as one multi-line string."""
    lines = [
        f"const dragged = {await location.emit_located(dragged)}",
        f"const dropped = {await location.emit_located(dropped)}",
        "await $webDriver.actions().dragAndDrop(dragged, dropped).perform()",
    ]
    return "\n".join(lines)


async def emit_check(locator: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"const element = {await location.emit_located(locator)}"),
        (0, "if(!await element.isSelected()) await element.click()"),
    )
    return EmittedCommand(commands=commands, description=f"Check {locator}")


async def emit_uncheck(locator: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"const element = {await location.emit_located(locator)}"),
        (0, "if(await element.isSelected()) await element.click()"),
    )
    return EmittedCommand(commands=commands, description=f"Uncheck {locator}")


# Keyboard / forms


async def emit_type(target: str, value: Union[str, list], context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"{await location.emit_located(target)}.sendKeys({generate_send_keys_input(value)})"),
    )
    shown = "".join(value) if isinstance(value, list) else value
    return EmittedCommand(commands=commands, description=f"Type {shown} into {target}")


async def emit_select(select_element: str, option: str, context: EmitterContext) -> EmittedCommand:
    # option labels are always text, so a lone ``${x}`` stays an interpolation
    processed = process_env_variable(option, variable_lookup, context.env, whole=False)
    commands = statements(
        (0, "{"),
        (1, f"const dropdown = {await location.emit_located(select_element)}"),
        (1, f"await dropdown.findElement({await selection.emit(processed)}).click()"),
        (0, "}"),
    )
    return EmittedCommand(commands=commands, description=f"Select {processed} from {select_element}")


async def emit_edit_content(locator: str, content: str, context: EmitterContext) -> EmittedCommand:
    script = "if(arguments[0].contentEditable === 'true') { arguments[0].innerText = arguments[1] }"
    commands = statements(
        (0, f"const element = {await location.emit_located(locator)}"),
        (0, f"await $webDriver.executeScript({quote_literal(script)}, element, {expression_for(content)})"),
    )
    return EmittedCommand(commands=commands, description=f"Edit content {locator}")


# Dialogs


async def emit_assert_alert(alert_text: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"assert(await $webDriver.switchTo().alert().getText() == {expression_for(alert_text)})"),
    )
    return EmittedCommand(commands=commands, description=f"Assert alert text equals {alert_text}")


async def emit_answer_on_next_prompt(answer: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, "const alert = await $webDriver.switchTo().alert()"),
        (0, f"await alert.sendKeys({expression_for(answer)})"),
        (0, "await alert.accept()"),
    )
    return EmittedCommand(commands=commands, description=f"Answer on next prompt {answer}")


async def emit_choose_ok_on_next_confirmation(_target: Any, _value: Any, context: EmitterContext) -> EmittedCommand:
    return EmittedCommand(
        commands=statements((0, "await $webDriver.switchTo().alert().accept()")),
        description="Choose OK on next confirmation",
    )


async def emit_choose_cancel_on_next_confirmation(_target: Any, _value: Any, context: EmitterContext) -> EmittedCommand:
    return EmittedCommand(
        commands=statements((0, "await $webDriver.switchTo().alert().dismiss()")),
        description="Choose cancel on next confirmation",
    )


# Variables


async def emit_assert(var_name: str, value: str, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"assert({variable_lookup(var_name)}.toString() == {expression_for(value)})"),
    )
    return EmittedCommand(commands=commands, description=f"Assert {var_name} equals {value}")


async def emit_echo(message: str, _value: Any, context: EmitterContext) -> EmittedCommand:
    commands = statements((0, f"console.log({expression_for(message)})"))
    return EmittedCommand(commands=commands, description=f"Echo {message}")


async def emit_store(value: str, var_name: str, context: EmitterContext) -> EmittedCommand:
    commands = statements((0, variable_setter(var_name, expression_for(value))))
    return EmittedCommand(commands=commands, description=f"Store {value} into {var_name}")


async def emit_store_text(locator: str, var_name: str, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"const element = {await location.emit_located(locator)}"),
        (0, variable_setter(var_name, "await element.getText()")),
    )
    return EmittedCommand(commands=commands, description=f"Store text from {locator} into {var_name}")


async def emit_store_value(locator: str, var_name: str, context: EmitterContext) -> EmittedCommand:
    commands = statements(
        (0, f"const element = {await location.emit_located(locator)}"),
        (0, variable_setter(var_name, 'await element.getAttribute("value")')),
    )
    return EmittedCommand(commands=commands, description=f"Store value from {locator} into {var_name}")


async def emit_store_title(_target: Any, var_name: str, context: EmitterContext) -> EmittedCommand:
    commands = statements((0, variable_setter(var_name, "await $webDriver.getTitle()")))
    return EmittedCommand(commands=commands, description=f"Store title into {var_name}")


# Scripts


def _as_script(script: Union[ScriptShape, str, None]) -> ScriptShape:
    if isinstance(script, ScriptShape):
        return script
    if script is None or isinstance(script, str):
        return preprocess_script(script or "")
    raise UnsupportedFormError(f"Script must be text or a script descriptor, got {type(script).__name__}")


async def emit_execute_script(script: Union[ScriptShape, str], var_name: str, context: EmitterContext) -> EmittedCommand:
    script = _as_script(script)
    call = (
        f"await $webDriver.wait($webDriver.executeScript({quote_literal(script.script)}"
        f"{generate_script_arguments(script)}), {location.ELEMENT_TIMEOUT})"
    )
    commands = statements((0, assign_or_evaluate(var_name, call)))
    return EmittedCommand(commands=commands, description=f"Execute script {var_name or ''}".rstrip())


async def emit_execute_async_script(
    script: Union[ScriptShape, str], var_name: str, context: EmitterContext
) -> EmittedCommand:
    script = _as_script(script)
    wrapped = f"const callback = arguments[arguments.length - 1]; {script.script}.then(callback).catch(callback);"
    call = f"await $webDriver.executeAsyncScript({quote_literal(wrapped)}{generate_script_arguments(script)})"
    commands = statements((0, assign_or_evaluate(var_name, call)))
    return EmittedCommand(commands=commands, description=f"Execute async script {var_name or ''}".rstrip())
