"""
Log statements wrapped around each translated command.

When the context asks for them, a fragment is bracketed by a
``$logger.info`` line describing the action and a ``$logger.debug`` line
once it finished. Existing statements are never removed or reordered.
"""

from __future__ import annotations

from typing import List, Sequence

from wdexport.emitter.models import EmitterContext
from wdexport.emitter.statements import Statement
from wdexport.emitter.variables import quote_literal


def _log_statement(method: str, message: str) -> Statement:
    return Statement(level=0, statement=f"await $logger.{method}({quote_literal(message)})")


async def generate_logger_commands(
    description: str,
    commands: Sequence[Statement],
    context: EmitterContext,
) -> List[Statement]:
    if not context.with_logger or not description or not commands:
        return list(commands)
    return [
        _log_statement("info", description),
        *commands,
        _log_statement("debug", f"Done: {description}"),
    ]
