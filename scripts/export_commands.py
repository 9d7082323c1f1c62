"""
Export a YAML/JSON command list as selenium-webdriver statements.

Example:
    python scripts/export_commands.py recorded.yaml --base-url https://example.com --logger

The generated helper functions are printed first, then the statements of
every command in order.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from wdexport.core.config import settings
from wdexport.core.logging import configure_logging
from wdexport.emitter.errors import EmitError
from wdexport.emitter.models import EmitterContext, ProjectContext
from wdexport.emitter.registry import DEFAULT_REGISTRY
from wdexport.emitter.scenario import load_command_list
from wdexport.emitter.statements import render, render_method

logger = structlog.get_logger(__name__)


def _parse_env(pairs: list[str]) -> dict[str, str]:
    env: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"--env expects KEY=VALUE, got {pair!r}")
        env[key] = value
    return env


async def _export(args: argparse.Namespace) -> str:
    command_list = load_command_list(args.path)
    base_url = args.base_url if args.base_url is not None else (command_list.base_url or settings.EXPORT_BASE_URL)
    context = EmitterContext(
        project=ProjectContext(url=base_url, name=command_list.name),
        with_logger=args.logger or settings.EMIT_LOGGER_COMMANDS,
        env=_parse_env(args.env),
    )
    emitted, methods = await DEFAULT_REGISTRY.emit_commands(command_list.commands, context)

    chunks = [render_method(m, indent=args.indent) for m in methods]
    body = "\n".join(code for code in (render(e.commands, indent=args.indent) for e in emitted) if code)
    if body:
        chunks.append(body)
    logger.info("exported", path=args.path, commands=len(command_list.commands), helpers=len(methods))
    return "\n\n".join(chunks)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    ap.add_argument("path", help="command list (.yaml/.yml/.json)")
    ap.add_argument("--base-url", default=None, help="base URL for relative open targets")
    ap.add_argument("--indent", type=int, default=settings.INDENT_WIDTH)
    ap.add_argument("--logger", action="store_true", help="bracket every command with $logger statements")
    ap.add_argument("--env", action="append", default=[], metavar="KEY=VALUE")
    args = ap.parse_args(argv)

    configure_logging()
    try:
        code = asyncio.run(_export(args))
    except EmitError as e:
        logger.error("export failed", path=args.path, error=str(e))
        return 1
    sys.stdout.write(code + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
