import asyncio

import pytest

from wdexport.emitter import location, selection
from wdexport.emitter.errors import UnsupportedLocatorError


def _loc(value):
    return asyncio.run(location.emit(value))


def _opt(value):
    return asyncio.run(selection.emit(value))


@pytest.mark.parametrize(
    "locator,expected",
    [
        ("css=#login", 'By.css("#login")'),
        ("xpath=//button[1]", 'By.xpath("//button[1]")'),
        ("//div[@id='x']", "By.xpath(\"//div[@id='x']\")"),
        ("id=q", 'By.id("q")'),
        ("name=email", 'By.name("email")'),
        ("linkText=Sign in", 'By.linkText("Sign in")'),
        ("link=Sign in", 'By.linkText("Sign in")'),
        ("partialLinkText=Sign", 'By.partialLinkText("Sign")'),
        ("tagName=form", 'By.css("form")'),
        ("className=btn-primary", 'By.className("btn-primary")'),
    ],
)
def test_locator_strategies(locator, expected):
    assert _loc(locator) == expected


def test_selector_may_contain_equals_sign():
    assert _loc("css=a[href='/x']") == "By.css(\"a[href='/x']\")"


def test_interpolated_selector_becomes_template_literal():
    assert _loc('css=#${vars["row"]}') == 'By.css(`#${vars["row"]}`)'


@pytest.mark.parametrize("locator", ["foo=bar", "button", 'vars["loc"]'])
def test_unknown_strategies_are_rejected(locator):
    with pytest.raises(UnsupportedLocatorError):
        _loc(locator)


def test_emit_located_waits_with_shared_timeout():
    located = asyncio.run(location.emit_located("id=q"))
    assert located == 'await $webDriver.wait(until.elementLocated(By.id("q")), TIMEOUT)'


@pytest.mark.parametrize(
    "option,expected",
    [
        ("label=Two", "By.xpath(\"//option[. = 'Two']\")"),
        ("Two", "By.xpath(\"//option[. = 'Two']\")"),
        ("value=2", "By.css(\"*[value='2']\")"),
        ("id=opt-2", "By.css(\"*[id='opt-2']\")"),
        ("index=0", 'By.css("*:nth-child(1)")'),
    ],
)
def test_option_locators(option, expected):
    assert _opt(option) == expected


def test_option_label_with_apostrophe():
    assert _opt("label=It's") == 'By.xpath("//option[. = \\"It\'s\\"]")'


def test_option_index_must_be_integer():
    with pytest.raises(UnsupportedLocatorError):
        _opt("index=first")


def test_non_text_locators_are_rejected():
    with pytest.raises(UnsupportedLocatorError):
        _loc(["css=#a"])
    with pytest.raises(UnsupportedLocatorError):
        _opt(["label=Two"])
