from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
import structlog

from wdexport.core.config import settings
from wdexport.emitter.errors import EmitError
from wdexport.emitter.models import Command, EmitterContext, ProjectContext
from wdexport.emitter.registry import DEFAULT_REGISTRY
from wdexport.emitter.statements import render, render_method

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


class ScriptIn(BaseModel):
    script: str
    argv: list[str] = Field(default_factory=list)


class CommandIn(BaseModel):
    command: str
    # lists are only meaningful as typed values; the registry rejects them elsewhere
    target: str | ScriptIn | list[str] = ""
    value: str | list[str] = ""
    id: str = ""
    comment: str = ""
    opens_window: bool = False
    window_handle_name: str = ""
    window_timeout: int | None = None

    def to_command(self) -> Command:
        return Command.from_dict(self.model_dump())


class ExportIn(BaseModel):
    commands: list[CommandIn]
    base_url: str | None = None
    name: str = ""
    with_logger: bool | None = None
    indent: int = Field(default_factory=lambda: settings.INDENT_WIDTH, ge=0, le=8)
    env: dict[str, str] = Field(default_factory=dict)


class StatementOut(BaseModel):
    level: int
    statement: str


class EmittedCommandOut(BaseModel):
    command: str
    statements: list[StatementOut]
    code: str


class ExportOut(BaseModel):
    commands: list[EmittedCommandOut]
    helpers: list[str]
    timeout_ms: int
    code: str


@router.get("/commands", response_model=list[str])
def list_commands():
    """
    ## Registered commands

    Names accepted in the ``command`` field of ``POST /export``.
    """
    return DEFAULT_REGISTRY.names()


@router.post("", response_model=ExportOut)
async def export_commands(payload: ExportIn):
    """
    ## Export commands

    - **Request**: ordered commands plus optional project base URL,
      logger flag, indent width and environment values
    - **Response**: statements and rendered code per command, helper
      function declarations, and the whole program body
    - **Errors**:
      - 400: unknown command or an argument form that cannot be exported
    """
    context = EmitterContext.from_settings(
        project=ProjectContext(
            url=settings.EXPORT_BASE_URL if payload.base_url is None else payload.base_url,
            name=payload.name,
        ),
        with_logger=settings.EMIT_LOGGER_COMMANDS if payload.with_logger is None else payload.with_logger,
        env=dict(payload.env),
    )
    commands = [c.to_command() for c in payload.commands]
    try:
        emitted, methods = await DEFAULT_REGISTRY.emit_commands(commands, context)
    except EmitError as e:
        logger.info("export rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    out = []
    for command, result in zip(commands, emitted):
        out.append(
            EmittedCommandOut(
                command=command.command,
                statements=[StatementOut(level=s.level, statement=s.statement) for s in result.commands],
                code=render(result.commands, indent=payload.indent),
            )
        )
    helpers = [render_method(m, indent=payload.indent) for m in methods]
    body = "\n".join(o.code for o in out if o.code)

    logger.info("commands exported", name=payload.name, count=len(commands), helpers=len(helpers))
    return ExportOut(
        commands=out,
        helpers=helpers,
        timeout_ms=settings.ELEMENT_TIMEOUT_MS,
        code="\n\n".join([*helpers, body]) if helpers else body,
    )
