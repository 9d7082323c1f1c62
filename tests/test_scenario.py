import asyncio
import json

from wdexport.emitter.models import EmitterContext, ScriptShape
from wdexport.emitter.registry import emit
from wdexport.emitter.scenario import load_command_list, parse_command_list

YAML_LIST = """
name: login
base_url: https://example.com
commands:
  - command: open
    target: /login
  - command: click
    target: css=#sso
    opensWindow: true
    windowHandleName: sso
    windowTimeout: 2000
  - command: type
    target: id=user
    value: alice
"""


def test_load_yaml_command_list(tmp_path):
    path = tmp_path / "login.yaml"
    path.write_text(YAML_LIST, encoding="utf-8")

    loaded = load_command_list(str(path))
    assert loaded.name == "login"
    assert loaded.base_url == "https://example.com"
    assert [c.command for c in loaded.commands] == ["open", "click", "type"]

    click = loaded.commands[1]
    assert click.opens_window is True
    assert click.window_handle_name == "sso"
    assert click.window_timeout == 2000
    assert loaded.commands[2].value == "alice"


def test_load_json_command_list(tmp_path):
    path = tmp_path / "flow.json"
    path.write_text(
        json.dumps({"url": "https://shop.test", "commands": [{"command": "close"}]}),
        encoding="utf-8",
    )
    loaded = load_command_list(str(path))
    assert loaded.base_url == "https://shop.test"
    assert loaded.commands[0].target == ""
    assert loaded.commands[0].opens_window is False


def test_bare_list_is_accepted():
    loaded = parse_command_list([{"command": "echo", "target": "hi"}, "not a command"])
    assert loaded.base_url == ""
    assert [(c.command, c.target) for c in loaded.commands] == [("echo", "hi")]


def test_snake_case_fields():
    loaded = parse_command_list(
        {"commands": [{"command": "click", "target": "id=a", "opens_window": True, "window_handle_name": "w"}]}
    )
    assert loaded.commands[0].opens_window is True
    assert loaded.commands[0].window_handle_name == "w"
    assert loaded.commands[0].window_timeout is None


def test_script_descriptor_target(tmp_path):
    path = tmp_path / "script.yaml"
    path.write_text(
        "commands:\n"
        "  - command: executeScript\n"
        "    target: {script: 'return arguments[0]', argv: [a]}\n"
        "    value: b\n",
        encoding="utf-8",
    )
    command = load_command_list(str(path)).commands[0]
    assert command.target == ScriptShape(script="return arguments[0]", argv=["a"])

    emitted = asyncio.run(emit(command, EmitterContext()))
    assert [s.statement for s in emitted.commands] == [
        'vars["b"] = await $webDriver.wait($webDriver.executeScript("return arguments[0]", vars["a"]), TIMEOUT)'
    ]
