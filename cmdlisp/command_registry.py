"""Name -> Command table shared by the evaluator and the help commands.

The backing dict is guarded by a lock so registration and lookup are safe
from any thread. The interpreter itself only ever drives one thread; a
plain dict owned by a single thread would be an equally valid choice.
Lookups hand back the Command object itself, so a long-running handler
never holds the lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, Set, Tuple

from cmdlisp import CommandFn
from cmdlisp.types.command import Command, FunctionCommand
from cmdlisp.types.tag import Tag, CORE

logger = logging.getLogger(__name__)

HelpEntry = Tuple[str, str, str, str]


class CommandRegistry:
    def __init__(self):
        self._commands: Dict[str, Command] = {}
        self._lock = threading.Lock()

    def register(self, command: Command) -> None:
        """Insert `command` under its name. A later registration replaces an earlier one."""
        with self._lock:
            previous = self._commands.get(command.name)
            self._commands[command.name] = command
        if previous is not None:
            logger.debug("command %r re-registered, replacing %r", command.name, previous)

    def register_function(
        self,
        name: str,
        description: str,
        fn: CommandFn,
        *,
        syntax: str | None = None,
        examples: str | None = None,
        tag: Tag = CORE,
    ) -> Command:
        command = FunctionCommand(name, description, fn, syntax=syntax, examples=examples, tag=tag)
        self.register(command)
        return command

    def command(
        self,
        name: str,
        description: str,
        *,
        syntax: str | None = None,
        examples: str | None = None,
        tag: Tag = CORE,
    ) -> Callable[[CommandFn], CommandFn]:
        """Decorator form of register_function; returns the function unchanged."""
        def decorator(fn: CommandFn) -> CommandFn:
            self.register_function(name, description, fn, syntax=syntax, examples=examples, tag=tag)
            return fn
        return decorator

    def get(self, name: str) -> Optional[Command]:
        with self._lock:
            return self._commands.get(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._commands

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    def _snapshot(self) -> List[Command]:
        with self._lock:
            return list(self._commands.values())

    def list_commands(self) -> Set[str]:
        with self._lock:
            return set(self._commands)

    def get_commands_with_descriptions(self) -> List[Tuple[str, str]]:
        return [(c.name, c.description) for c in self._snapshot()]

    def get_commands_with_help(self) -> List[HelpEntry]:
        return [(c.name, c.description, c.syntax, c.examples) for c in self._snapshot()]

    def _grouped(self) -> List[Tuple[Tag, List[Command]]]:
        groups: Dict[str, Tuple[Tag, List[Command]]] = {}
        for command in self._snapshot():
            tag = command.tag
            groups.setdefault(tag.name, (tag, []))[1].append(command)
        result = sorted(groups.values(), key=lambda group: group[0].order)
        for _, commands in result:
            commands.sort(key=lambda c: c.name)
        return result

    def get_commands_grouped_by_tags(self) -> List[Tuple[Tag, List[Tuple[str, str]]]]:
        """Commands grouped by tag: groups ordered by tag order, names alphabetical."""
        return [
            (tag, [(c.name, c.description) for c in commands])
            for tag, commands in self._grouped()
        ]

    def get_commands_grouped_by_tags_with_help(self) -> List[Tuple[Tag, List[HelpEntry]]]:
        return [
            (tag, [(c.name, c.description, c.syntax, c.examples) for c in commands])
            for tag, commands in self._grouped()
        ]


# Module-level default registry, builtins installed on first use
_registry: Optional[CommandRegistry] = None
_registry_lock = threading.Lock()

def get_default_registry() -> CommandRegistry:
    global _registry
    with _registry_lock:
        if _registry is None:
            # Lazy import to avoid circular dependency at module load time
            from cmdlisp.builtin import register_builtins
            registry = CommandRegistry()
            register_builtins(registry)
            _registry = registry
        return _registry
