from fastapi.testclient import TestClient

from wdexport.emitter.registry import CommandKind
from wdexport.main import app

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_list_commands():
    r = client.get("/export/commands")
    assert r.status_code == 200
    assert set(r.json()) == {k.value for k in CommandKind}


def test_export_returns_statements_and_code():
    r = client.post(
        "/export",
        json={
            "base_url": "https://example.com",
            "with_logger": False,
            "commands": [
                {"command": "open", "target": "/"},
                {"command": "select", "target": "id=dd", "value": "label=Two"},
            ],
        },
    )
    assert r.status_code == 200
    body = r.json()
    assert body["helpers"] == []
    assert body["timeout_ms"] == 30000
    assert body["commands"][0]["statements"] == [
        {"level": 0, "statement": 'await $webDriver.get("https://example.com/")'}
    ]
    assert [s["level"] for s in body["commands"][1]["statements"]] == [0, 1, 1, 0]
    assert body["code"] == "\n".join(
        [
            'await $webDriver.get("https://example.com/")',
            "{",
            '  const dropdown = await $webDriver.wait(until.elementLocated(By.id("dd")), TIMEOUT)',
            "  await dropdown.findElement(By.xpath(\"//option[. = 'Two']\")).click()",
            "}",
        ]
    )


def test_export_declares_window_helper_once():
    r = client.post(
        "/export",
        json={
            "indent": 4,
            "commands": [
                {"command": "click", "target": "css=#a", "opens_window": True, "window_handle_name": "w1"},
                {"command": "selectWindow", "target": "handle=${w1}"},
                {"command": "click", "target": "css=#b", "opens_window": True},
            ],
        },
    )
    assert r.status_code == 200
    body = r.json()
    assert len(body["helpers"]) == 1
    assert body["helpers"][0].startswith("async function waitForWindow(")
    assert "\n    await $webDriver.sleep(timeout)" in body["helpers"][0]
    assert body["code"].startswith(body["helpers"][0] + "\n\n")
    assert 'await $webDriver.switchTo().window(vars["w1"])' in body["code"]


def test_unsupported_window_form_is_a_bad_request():
    r = client.post("/export", json={"commands": [{"command": "selectWindow", "target": "title=Home"}]})
    assert r.status_code == 400
    assert "window handles" in r.json()["detail"]


def test_unknown_command_is_a_bad_request():
    r = client.post("/export", json={"commands": [{"command": "teleport"}]})
    assert r.status_code == 400
    assert "teleport" in r.json()["detail"]


def test_env_values_reach_select_options():
    r = client.post(
        "/export",
        json={
            "env": {"PLAN": "Pro"},
            "commands": [{"command": "select", "target": "id=plan", "value": "label=${PLAN}"}],
        },
    )
    assert r.status_code == 200
    assert "//option[. = 'Pro']" in r.json()["code"]


def test_list_target_is_a_bad_request():
    r = client.post("/export", json={"commands": [{"command": "click", "target": ["css=#a"]}]})
    assert r.status_code == 400
    assert "must be text" in r.json()["detail"]


def test_script_descriptor_target():
    r = client.post(
        "/export",
        json={
            "commands": [
                {"command": "executeScript", "target": {"script": "return arguments[0]", "argv": ["a"]}, "value": "b"}
            ]
        },
    )
    assert r.status_code == 200
    assert r.json()["code"] == (
        'vars["b"] = await $webDriver.wait($webDriver.executeScript("return arguments[0]", vars["a"]), TIMEOUT)'
    )
