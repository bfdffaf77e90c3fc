from cmdlisp.command_registry import CommandRegistry
from cmdlisp.builtin import (
    basedir_builtin,
    core_builtin,
    help_builtin,
    list_builtin,
    system_builtin,
    vars_builtin,
)


def register_builtins(registry: CommandRegistry) -> None:
    """Install every builtin command into `registry`."""
    core_builtin.register(registry)
    list_builtin.register(registry)
    help_builtin.register(registry)
    vars_builtin.register(registry)
    basedir_builtin.register(registry)
    system_builtin.register(registry)
