"""Tags group commands into ordered sections of the help output."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tag:
    name: str
    order: int
    text: str


CORE = Tag(name="core", order=1000, text="Core Commands")
COMMANDS = Tag(name="commands", order=2, text="Command Management")
SYSTEM = Tag(name="system", order=9999, text="System Library")
