import pytest

from wdexport.emitter.encoders import generate_script_arguments, generate_send_keys_input, resolve_url
from wdexport.emitter.models import ScriptShape


def test_send_keys_list_classifies_each_element():
    encoded = generate_send_keys_input(["foo", "Key['Enter']", 'vars["x"]'])
    assert encoded == '"foo", Key.Enter, vars["x"]'
    assert len(encoded.split(", ")) == 3


def test_send_keys_single_values():
    assert generate_send_keys_input("hello") == '"hello"'
    assert generate_send_keys_input('vars["x"]') == 'vars["x"]'
    assert generate_send_keys_input('a "b"') == '"a \\"b\\""'


def test_send_keys_single_key_token_is_literal_text():
    assert generate_send_keys_input("Key['ENTER']") == "\"Key['ENTER']\""


def test_script_arguments():
    assert generate_script_arguments(ScriptShape(script="return 1")) == ""
    assert generate_script_arguments(ScriptShape(script="", argv=["a", "b"])) == ', vars["a"],vars["b"]'


@pytest.mark.parametrize(
    "target",
    ["https://example.com", "http://example.com/a?b=1", "file:///tmp/page.html"],
)
def test_absolute_urls_pass_through(target):
    assert resolve_url(target, "https://base.test") == target


def test_relative_urls_are_concatenated():
    assert resolve_url("/login", "https://example.com") == "https://example.com/login"
    assert resolve_url("/login", "https://example.com/") == "https://example.com//login"
    assert resolve_url("login", "https://example.com") == "https://example.comlogin"


def test_unrecognised_scheme_is_relative():
    assert resolve_url("ftp://host/file", "https://example.com/") == "https://example.com/ftp://host/file"
