"""List construction and access commands."""
from __future__ import annotations

from cmdlisp.command_registry import CommandRegistry
from cmdlisp.errors import CommandTypeError
from cmdlisp.types.context import Context
from cmdlisp.types.value import Value, List, Nil
from cmdlisp.utils import expect_arity


def list_builtin(args: list[Value], ctx: Context) -> Value:
    return List(args)


def list_first(args: list[Value], ctx: Context) -> Value:
    """First element of a list, or nil for the empty list."""
    expect_arity("list-first", args, 1, "list")
    lst = args[0]
    if not isinstance(lst, List):
        raise CommandTypeError("list-first expects a list argument")
    return lst.items[0] if lst.items else Nil


def list_rest(args: list[Value], ctx: Context) -> Value:
    """All but the first element; the empty list stays empty."""
    expect_arity("list-rest", args, 1, "list")
    lst = args[0]
    if not isinstance(lst, List):
        raise CommandTypeError("list-rest expects a list argument")
    return List(lst.items[1:])


def register(registry: CommandRegistry) -> None:
    registry.register_function(
        "list", "Create a list from arguments", list_builtin,
        syntax="(list element1 element2 ...)",
        examples="  (list 1 2 3)       ; Creates (1 2 3)\n  (list \"a\" \"b\")     ; Creates (a b)",
    )
    registry.register_function(
        "list-first", "Get first element of a list", list_first,
        syntax="(list-first list)",
        examples="  (list-first (list 1 2 3))  ; Returns 1",
    )
    registry.register_function(
        "list-rest", "Get all but first element of a list", list_rest,
        syntax="(list-rest list)",
        examples="  (list-rest (list 1 2 3))   ; Returns (2 3)",
    )
