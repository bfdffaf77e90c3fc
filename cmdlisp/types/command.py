"""Command handlers.

A command is the unit of dispatch: the evaluator resolves the head symbol of
a form to a Command and calls `execute` with the evaluated arguments and the
session Context.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from cmdlisp import CommandFn
from cmdlisp.types.tag import Tag, CORE
from cmdlisp.types.value import Value

if TYPE_CHECKING:
    from cmdlisp.types.context import Context


class Command(ABC):
    """Base class of every registered handler."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Dispatch key."""

    @abstractmethod
    def execute(self, args: list[Value], ctx: Context) -> Value:
        """Run the command. Raise a CommandError on failure."""

    @property
    def description(self) -> str:
        return "No description available"

    @property
    def syntax(self) -> str:
        return "Syntax not documented"

    @property
    def examples(self) -> str:
        return "Examples not available"

    @property
    def tag(self) -> Tag:
        return CORE

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class FunctionCommand(Command):
    """Adapts a plain `fn(args, ctx) -> Value` into a Command."""

    __slots__ = ("_name", "_description", "_syntax", "_examples", "_tag", "fn")

    def __init__(
        self,
        name: str,
        description: str,
        fn: CommandFn,
        *,
        syntax: str | None = None,
        examples: str | None = None,
        tag: Tag = CORE,
    ):
        self._name = name
        self._description = description
        self._syntax = syntax
        self._examples = examples
        self._tag = tag
        self.fn = fn

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def syntax(self) -> str:
        return self._syntax if self._syntax is not None else super().syntax

    @property
    def examples(self) -> str:
        return self._examples if self._examples is not None else super().examples

    @property
    def tag(self) -> Tag:
        return self._tag

    def execute(self, args: list[Value], ctx: Context) -> Value:
        return self.fn(args, ctx)
