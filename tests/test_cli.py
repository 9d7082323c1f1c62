import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "export_commands.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("export_commands", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write(tmp_path, text):
    path = tmp_path / "recorded.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_exports_command_list(cli, tmp_path, capsys):
    path = _write(
        tmp_path,
        "base_url: https://example.com\n"
        "commands:\n"
        "  - {command: open, target: /start}\n"
        "  - {command: click, target: 'css=#new', opensWindow: true, windowHandleName: popup}\n",
    )
    assert cli.main([path]) == 0
    out = capsys.readouterr().out
    assert out.startswith("async function waitForWindow(")
    assert 'await $webDriver.get("https://example.com/start")' in out
    assert 'vars["popup"] = await waitForWindow(2)' in out


def test_base_url_option_and_env(cli, tmp_path, capsys):
    path = _write(
        tmp_path,
        "commands:\n"
        "  - {command: open, target: /}\n"
        "  - {command: select, target: id=dd, value: 'label=${CHOICE}'}\n",
    )
    assert cli.main([path, "--base-url", "https://other.test", "--env", "CHOICE=Two", "--indent", "4"]) == 0
    out = capsys.readouterr().out
    assert 'await $webDriver.get("https://other.test/")' in out
    assert "    await dropdown.findElement(By.xpath(\"//option[. = 'Two']\")).click()" in out


def test_logger_flag(cli, tmp_path, capsys):
    path = _write(tmp_path, "- {command: close}\n")
    assert cli.main([path, "--logger"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [
        'await $logger.info("Close")',
        "await $webDriver.close()",
        'await $logger.debug("Done: Close")',
    ]


def test_export_error_exits_non_zero(cli, tmp_path, capsys):
    path = _write(tmp_path, "- {command: selectWindow, target: 'title=Home'}\n")
    assert cli.main([path]) == 1
    assert capsys.readouterr().out == ""


def test_malformed_env_pair(cli, tmp_path):
    path = _write(tmp_path, "- {command: close}\n")
    with pytest.raises(SystemExit):
        cli.main([path, "--env", "NOVALUE"])
