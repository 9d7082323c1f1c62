"""
Shared pytest configuration for the emitter tests.

Translators are coroutines; the ``emit`` fixture drives them with
``asyncio.run`` so test functions stay synchronous.
"""

import asyncio

import pytest
import structlog

from wdexport.emitter.models import Command, EmitterContext, ProjectContext
from wdexport.emitter.registry import CommandRegistry

BASE_URL = "https://example.com"


@pytest.fixture
def context():
    """Context without log statements, resolving relative URLs against ``BASE_URL``."""
    return EmitterContext(project=ProjectContext(url=BASE_URL, name="suite"))


@pytest.fixture
def logged_context():
    return EmitterContext(project=ProjectContext(url=BASE_URL, name="suite"), with_logger=True)


@pytest.fixture
def registry():
    return CommandRegistry.default()


@pytest.fixture
def emit(registry, context):
    """
    Emit one command through the default registry.

    ``emit("click", "css=#go")`` returns the ``EmittedCommand``; pass
    ``ctx=`` to use another context and any ``Command`` field as keyword.
    """

    def _emit(command, target="", value="", ctx=None, **fields):
        cmd = Command(command=command, target=target, value=value, **fields)
        return asyncio.run(registry.emit(cmd, ctx or context))

    return _emit


@pytest.fixture(autouse=True)
def _reset_structlog():
    # configure_logging binds the current stderr; drop it once a test's capture closes
    yield
    structlog.reset_defaults()
