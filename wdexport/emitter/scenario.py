"""
Loading of command lists from YAML or JSON.

A command list describes one recorded test: an optional base URL and an
ordered list of commands, each a mapping with ``command``, ``target`` and
``value`` keys plus the optional new-window fields.
"""

from dataclasses import dataclass
from typing import Any, Dict, List
import json
from pathlib import Path

import yaml

from wdexport.emitter.models import Command


@dataclass
class CommandList:
    # may be empty when every ``open`` uses an absolute URL
    base_url: str
    name: str
    commands: List[Command]


def parse_command_list(data: Any) -> CommandList:
    base_url = ""
    name = ""
    raw: List[Dict[str, Any]] = []
    if isinstance(data, dict):
        base_url = str(data.get("base_url") or data.get("url") or "")
        name = str(data.get("name") or "")
        raw = data.get("commands") or []
    elif isinstance(data, list):
        raw = data
    commands = [Command.from_dict(item) for item in raw if isinstance(item, dict)]
    return CommandList(base_url=base_url, name=name, commands=commands)


def load_command_list(path: str) -> CommandList:
    """Parse a ``.json`` command list, or YAML for any other extension."""
    source = Path(path)
    text = source.read_text(encoding="utf-8")
    data = json.loads(text) if source.suffix.lower() == ".json" else yaml.safe_load(text)
    return parse_command_list(data)
