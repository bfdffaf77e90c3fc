"""Session variable commands.

String values stored with set-var are interpolated: each ${name} is
replaced by the session variable `name`, else the OS environment variable
`name`, else left untouched.
"""
from __future__ import annotations

import os
import re

from cmdlisp.command_registry import CommandRegistry
from cmdlisp.errors import CommandError, CommandTypeError
from cmdlisp.types.context import Context
from cmdlisp.types.tag import COMMANDS
from cmdlisp.types.value import Value, Str
from cmdlisp.utils import debug_log, expect_arity

VAR_RE = re.compile(r"\$\{([^}]+)\}")


def interpolate_variables(text: str, ctx: Context) -> str:
    def replace(m: re.Match) -> str:
        name = m.group(1)
        value = ctx.get_variable(name)
        if value is not None:
            return str(value)
        return os.environ.get(name, m.group(0))

    return VAR_RE.sub(replace, text)


def get_var(args: list[Value], ctx: Context) -> Value:
    debug_log(ctx, "get-var", "executing get-var command")
    expect_arity("get-var", args, 1, "key")
    key = args[0]
    if not isinstance(key, Str):
        raise CommandTypeError("get-var key must be a string")
    value = ctx.get_variable(key.value)
    if value is None:
        debug_log(ctx, "get-var", f"variable not found: {key.value}")
        raise CommandError(f"Variable '{key.value}' not found")
    debug_log(ctx, "get-var", f"found variable: {key.value} = {value}")
    return value


def set_var(args: list[Value], ctx: Context) -> Value:
    debug_log(ctx, "set-var", f"received {len(args)} arguments")
    expect_arity("set-var", args, 2, "key, value")
    key, value = args
    if not isinstance(key, Str):
        raise CommandTypeError("set-var key must be a string")
    if isinstance(value, Str):
        value = Str(interpolate_variables(value.value, ctx))
        debug_log(ctx, "set-var", f"interpolated value: {key.value} = {value}")
    ctx.set_variable(key.value, value)
    debug_log(ctx, "set-var", "variable stored in context")
    return Str(f"Variable '{key.value}' set to '{value}'")


def register(registry: CommandRegistry) -> None:
    registry.register_function(
        "get-var", "Get a variable from the context with the given key", get_var,
        syntax="(get-var key)",
        examples="  (get-var \"name\")        ; Get variable 'name'\n"
                 "  (get-var \"count\")       ; Get variable 'count'",
        tag=COMMANDS,
    )
    registry.register_function(
        "set-var", "Set a variable in the context with the given key and value", set_var,
        syntax="(set-var key value)",
        examples="  (set-var \"name\" \"John\")          ; Set variable 'name' to 'John'\n"
                 "  (set-var \"greeting\" \"hi ${name}\") ; Interpolates 'name'",
        tag=COMMANDS,
    )
