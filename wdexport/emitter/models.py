"""
Input shapes consumed by the emitter.

A ``Command`` is one recorded browser interaction. It is created upstream
(recorder, command-list loader, API request) and never mutated here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from wdexport.core.config import settings


@dataclass(frozen=True)
class ScriptShape:
    # script text with ``${name}`` references already replaced by ``arguments[i]``
    script: str
    argv: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScriptShape":
        return cls(script=str(data.get("script") or ""), argv=[str(a) for a in data.get("argv") or []])


def _argument(raw: Any) -> Any:
    if raw is None:
        return ""
    # ``{script, argv}`` mappings are script descriptors
    if isinstance(raw, Mapping) and "script" in raw:
        return ScriptShape.from_dict(raw)
    return raw


CommandValue = Union[str, List[str], ScriptShape, None]


@dataclass(frozen=True)
class Command:
    command: str
    target: Any = ""
    value: Any = ""
    id: str = ""
    comment: str = ""
    opens_window: bool = False
    window_handle_name: str = ""
    window_timeout: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Command":
        """
        Build a command from a recorder-style mapping.

        Both snake_case and the recorder's camelCase keys are accepted.
        """
        timeout = data.get("window_timeout", data.get("windowTimeout"))
        return cls(
            command=str(data.get("command") or ""),
            target=_argument(data.get("target")),
            value=_argument(data.get("value")),
            id=str(data.get("id") or ""),
            comment=str(data.get("comment") or ""),
            opens_window=bool(data.get("opens_window", data.get("opensWindow", False))),
            window_handle_name=str(data.get("window_handle_name") or data.get("windowHandleName") or ""),
            window_timeout=int(timeout) if timeout not in (None, "") else None,
        )


@dataclass(frozen=True)
class ProjectContext:
    url: str = ""
    name: str = ""


@dataclass(frozen=True)
class EmitterContext:
    project: ProjectContext = field(default_factory=ProjectContext)
    with_logger: bool = False
    # environment values substituted into ``${NAME}`` references at export time
    env: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, **overrides: Any) -> "EmitterContext":
        project = overrides.pop("project", None) or ProjectContext(url=settings.EXPORT_BASE_URL)
        overrides.setdefault("with_logger", settings.EMIT_LOGGER_COMMANDS)
        return cls(project=project, **overrides)
