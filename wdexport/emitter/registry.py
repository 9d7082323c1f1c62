"""
Command registry and the single dispatch entry point.

``CommandRegistry.default()`` builds the table of built-in commands.
Extra commands are added to one registry instance through ``register``;
the built-in table itself is rebuilt for every ``default()`` call, so
registering never leaks between callers.

Dispatch order for one command:

1. look the translator up (unknown names raise ``UnknownCommandError``)
2. run the target/value preprocessors
3. call the translator; flexible translators may return a plain string
4. bracket the fragment with log statements (when the context asks)
5. wrap it in the new-window protocol when the command opens a window
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Tuple, Union

import structlog

from wdexport.emitter import commands as c
from wdexport.emitter import window as w
from wdexport.emitter.errors import UnknownCommandError, UnsupportedFormError
from wdexport.emitter.logger_commands import generate_logger_commands
from wdexport.emitter.models import Command, EmitterContext, ScriptShape
from wdexport.emitter.preprocess import (
    Preprocessor,
    identity,
    interpolate_text,
    interpolate_variables,
    preprocess_keys,
    preprocess_script,
    substitute_references,
)
from wdexport.emitter.statements import EmittedCommand, MethodDeclaration, from_string

logger = structlog.get_logger(__name__)

Translator = Callable[[Any, Any, EmitterContext], Awaitable[Union[EmittedCommand, str]]]


class CommandKind(str, Enum):
    """Built-in command names."""

    ADD_SELECTION = "addSelection"
    ASSERT = "assert"
    ASSERT_ALERT = "assertAlert"
    CHECK = "check"
    CHOOSE_CANCEL_ON_NEXT_CONFIRMATION = "chooseCancelOnNextConfirmation"
    CHOOSE_CANCEL_ON_NEXT_PROMPT = "chooseCancelOnNextPrompt"
    CHOOSE_OK_ON_NEXT_CONFIRMATION = "chooseOkOnNextConfirmation"
    CLICK = "click"
    CLICK_AT = "clickAt"
    CLOSE = "close"
    DEBUGGER = "debugger"
    DOUBLE_CLICK = "doubleClick"
    DOUBLE_CLICK_AT = "doubleClickAt"
    DRAG_AND_DROP_TO_OBJECT = "dragAndDropToObject"
    ECHO = "echo"
    EDIT_CONTENT = "editContent"
    ELSE = "else"
    ELSE_IF = "elseIf"
    END = "end"
    EXECUTE_ASYNC_SCRIPT = "executeAsyncScript"
    EXECUTE_SCRIPT = "executeScript"
    MOUSE_OVER = "mouseOver"
    OPEN = "open"
    PAUSE = "pause"
    REMOVE_SELECTION = "removeSelection"
    SELECT = "select"
    SELECT_FRAME = "selectFrame"
    SELECT_WINDOW = "selectWindow"
    SEND_KEYS = "sendKeys"
    SET_WINDOW_SIZE = "setWindowSize"
    STORE = "store"
    STORE_TEXT = "storeText"
    STORE_TITLE = "storeTitle"
    STORE_VALUE = "storeValue"
    STORE_WINDOW_HANDLE = "storeWindowHandle"
    TYPE = "type"
    UNCHECK = "uncheck"
    WEBDRIVER_ANSWER_ON_VISIBLE_PROMPT = "webdriverAnswerOnVisiblePrompt"
    WEBDRIVER_CHOOSE_CANCEL_ON_VISIBLE_CONFIRMATION = "webdriverChooseCancelOnVisibleConfirmation"
    WEBDRIVER_CHOOSE_OK_ON_VISIBLE_CONFIRMATION = "webdriverChooseOkOnVisibleConfirmation"


STRUCTURAL_COMMANDS = (
    CommandKind.CHOOSE_CANCEL_ON_NEXT_CONFIRMATION,
    CommandKind.CHOOSE_CANCEL_ON_NEXT_PROMPT,
    CommandKind.CHOOSE_OK_ON_NEXT_CONFIRMATION,
    CommandKind.DEBUGGER,
    CommandKind.ELSE,
    CommandKind.ELSE_IF,
    CommandKind.END,
)


@dataclass(frozen=True)
class CommandEmitter:
    translator: Translator
    target: Preprocessor = interpolate_variables
    value: Preprocessor = interpolate_variables
    # flexible translators may return a (multi-line) string instead of an EmittedCommand
    flexible: bool = False


def _key(kind: Union[CommandKind, str]) -> str:
    return kind.value if isinstance(kind, CommandKind) else str(kind)


class CommandRegistry:
    def __init__(self, emitters: Dict[str, CommandEmitter] | None = None):
        self._emitters: Dict[str, CommandEmitter] = dict(emitters or {})

    @classmethod
    def default(cls) -> "CommandRegistry":
        registry = cls()
        for kind in STRUCTURAL_COMMANDS:
            registry.register(kind, c.skip, flexible=True)

        locator = {"target": interpolate_text}
        registry.register(CommandKind.OPEN, c.emit_open)
        registry.register(CommandKind.CLOSE, c.emit_close)
        registry.register(CommandKind.SET_WINDOW_SIZE, c.emit_set_window_size)
        registry.register(CommandKind.PAUSE, c.emit_pause, target=identity)
        registry.register(CommandKind.CLICK, c.emit_click, **locator)
        registry.register(CommandKind.CLICK_AT, c.emit_click, **locator)
        registry.register(CommandKind.DOUBLE_CLICK, c.emit_double_click, **locator)
        registry.register(CommandKind.DOUBLE_CLICK_AT, c.emit_double_click, **locator)
        registry.register(CommandKind.MOUSE_OVER, c.emit_mouse_over, **locator)
        registry.register(
            CommandKind.DRAG_AND_DROP_TO_OBJECT,
            c.emit_drag_and_drop,
            target=interpolate_text,
            value=interpolate_text,
            flexible=True,
        )
        registry.register(CommandKind.CHECK, c.emit_check, **locator)
        registry.register(CommandKind.UNCHECK, c.emit_uncheck, **locator)
        registry.register(CommandKind.TYPE, c.emit_type, target=interpolate_text, value=preprocess_keys)
        registry.register(CommandKind.SEND_KEYS, c.emit_type, target=interpolate_text, value=preprocess_keys)
        for kind in (CommandKind.SELECT, CommandKind.ADD_SELECTION, CommandKind.REMOVE_SELECTION):
            # the option keeps its raw ``${...}`` references for environment substitution
            registry.register(kind, c.emit_select, target=interpolate_text, value=identity)
        registry.register(CommandKind.EDIT_CONTENT, c.emit_edit_content, **locator)
        registry.register(CommandKind.ASSERT_ALERT, c.emit_assert_alert)
        registry.register(CommandKind.WEBDRIVER_ANSWER_ON_VISIBLE_PROMPT, c.emit_answer_on_next_prompt)
        registry.register(
            CommandKind.WEBDRIVER_CHOOSE_OK_ON_VISIBLE_CONFIRMATION, c.emit_choose_ok_on_next_confirmation
        )
        registry.register(
            CommandKind.WEBDRIVER_CHOOSE_CANCEL_ON_VISIBLE_CONFIRMATION, c.emit_choose_cancel_on_next_confirmation
        )
        registry.register(CommandKind.ASSERT, c.emit_assert, target=identity)
        registry.register(CommandKind.ECHO, c.emit_echo)
        registry.register(CommandKind.STORE, c.emit_store, value=identity)
        registry.register(CommandKind.STORE_TEXT, c.emit_store_text, target=interpolate_text, value=identity)
        registry.register(CommandKind.STORE_VALUE, c.emit_store_value, target=interpolate_text, value=identity)
        registry.register(CommandKind.STORE_TITLE, c.emit_store_title, value=identity)
        registry.register(CommandKind.STORE_WINDOW_HANDLE, w.emit_store_window_handle, target=identity)
        registry.register(CommandKind.EXECUTE_SCRIPT, c.emit_execute_script, target=preprocess_script, value=identity)
        registry.register(
            CommandKind.EXECUTE_ASYNC_SCRIPT, c.emit_execute_async_script, target=preprocess_script, value=identity
        )
        registry.register(CommandKind.SELECT_FRAME, w.emit_select_frame, target=interpolate_text)
        registry.register(CommandKind.SELECT_WINDOW, w.emit_select_window, target=substitute_references)
        return registry

    def register(
        self,
        kind: Union[CommandKind, str],
        translator: Translator,
        *,
        target: Preprocessor = interpolate_variables,
        value: Preprocessor = interpolate_variables,
        flexible: bool = False,
    ) -> None:
        """Add or replace the translator for ``kind`` in this registry."""
        self._emitters[_key(kind)] = CommandEmitter(
            translator=translator, target=target, value=value, flexible=flexible
        )

    def get(self, name: Union[CommandKind, str]) -> CommandEmitter:
        try:
            return self._emitters[_key(name)]
        except KeyError:
            raise UnknownCommandError(_key(name)) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, (str, CommandKind)) and _key(name) in self._emitters

    def names(self) -> List[str]:
        return sorted(self._emitters)

    async def emit(self, command: Command, context: EmitterContext) -> EmittedCommand:
        entry = self.get(command.command)
        _check_argument(command, "target", command.target, entry.target)
        _check_argument(command, "value", command.value, entry.value)
        target = entry.target(command.target)
        value = entry.value(command.value)

        result = await entry.translator(target, value, context)
        emitted = _normalize(command, result, entry, target)

        if emitted.commands:
            emitted.commands = await generate_logger_commands(emitted.description, emitted.commands, context)
            if command.opens_window:
                emitted = await w.emit_new_window_handling(command, emitted, context)

        logger.debug("command emitted", command=command.command, statements=len(emitted.commands))
        return emitted

    async def emit_commands(
        self, commands: Iterable[Command], context: EmitterContext
    ) -> Tuple[List[EmittedCommand], List[MethodDeclaration]]:
        """
        Emit a sequence of commands in order.

        Returns the per-command results and the helper declarations they
        need, each helper listed once.
        """
        emitted: List[EmittedCommand] = []
        methods: Dict[str, MethodDeclaration] = {}
        for command in commands:
            result = await self.emit(command, context)
            for method in result.methods:
                methods.setdefault(method.name, method)
            emitted.append(result)
        return emitted, list(methods.values())


# preprocessors that accept something other than text
STRUCTURED_ARGUMENTS: Dict[Preprocessor, Tuple[type, ...]] = {
    preprocess_keys: (list, tuple),
    preprocess_script: (ScriptShape,),
}


def _check_argument(command: Command, field: str, raw: Any, preprocessor: Preprocessor) -> None:
    if raw is None or isinstance(raw, str) or isinstance(raw, STRUCTURED_ARGUMENTS.get(preprocessor, ())):
        return
    raise UnsupportedFormError(f"{command.command} {field} must be text, got {type(raw).__name__}")


def _normalize(command: Command, result: Union[EmittedCommand, str], entry: CommandEmitter, target: Any) -> EmittedCommand:
    if isinstance(result, EmittedCommand):
        return result
    if entry.flexible and isinstance(result, str):
        description = f"{command.command} {target}".strip() if result else ""
        return EmittedCommand(commands=from_string(result), description=description)
    raise TypeError(f"translator for {command.command!r} returned {type(result).__name__}")


async def emit(command: Command, context: EmitterContext, registry: CommandRegistry | None = None) -> EmittedCommand:
    """Translate one command with ``registry`` (the built-in table by default)."""
    return await (registry or DEFAULT_REGISTRY).emit(command, context)


DEFAULT_REGISTRY = CommandRegistry.default()
