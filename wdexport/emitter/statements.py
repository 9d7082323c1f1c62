"""
Statement model shared by every translator.

A translator returns an ordered list of ``Statement`` items. ``level`` is
the nesting depth relative to the enclosing block, never an absolute
indentation; ``render`` owns the indent width.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(frozen=True)
class Statement:
    level: int
    statement: str

    def indented(self, by: int) -> "Statement":
        return Statement(level=self.level + by, statement=self.statement)


@dataclass(frozen=True)
class MethodDeclaration:
    """
    A helper function the assembled program must declare once.

    ``body`` is the opening line (``async function name(...) {``) and
    ``terminating_keyword`` closes it; ``commands`` are the statements of
    the function body at levels relative to the declaration.
    """

    name: str
    body: str
    terminating_keyword: str
    commands: List[Statement] = field(default_factory=list)


@dataclass
class EmittedCommand:
    commands: List[Statement] = field(default_factory=list)
    description: str = ""
    methods: List[MethodDeclaration] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.commands


def statements(*pairs: tuple[int, str]) -> List[Statement]:
    """Build a fragment from ``(level, text)`` pairs."""
    return [Statement(level=level, statement=text) for level, text in pairs]


def from_string(code: str, level: int = 0) -> List[Statement]:
    """Split a flexible (multi-line string) translation into statements."""
    if not code:
        return []
    return [Statement(level=level, statement=line) for line in code.split("\n")]


def check_nesting(commands: Sequence[Statement]) -> bool:
    """
    Return True when levels form a valid nesting.

    The first statement must sit at level 0 and a statement may only go
    one level deeper than the one before it.
    """
    previous = -1
    for cmd in commands:
        if cmd.level < 0:
            return False
        if cmd.level > previous + 1:
            return False
        previous = cmd.level
    return True


def render(commands: Sequence[Statement], indent: int = 2, base_level: int = 0) -> str:
    """
    Render statements as source text.

    Empty statements (for example an assignment to an unset variable)
    produce no line.
    """
    lines = []
    for cmd in commands:
        if not cmd.statement:
            continue
        lines.append(" " * (indent * (cmd.level + base_level)) + cmd.statement)
    return "\n".join(lines)


def render_method(method: MethodDeclaration, indent: int = 2) -> str:
    body = render(method.commands, indent=indent, base_level=1)
    parts = [method.body]
    if body:
        parts.append(body)
    parts.append(method.terminating_keyword)
    return "\n".join(parts)
