"""Core evaluator for cmdlisp.

A form `(name arg ...)` resolves `name` through the context's registry,
evaluates its arguments left to right (depth first), then calls the
command. Everything that is not a form is a literal and converts directly
into a Value. There are no special forms: every argument is evaluated
before the command runs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cmdlisp import SExpression
from cmdlisp.errors import DispatchError, ParseError, UnknownCommandError
from cmdlisp.reader.parser import parse_string, parse_string_normalized
from cmdlisp.types.symbol import Symbol
from cmdlisp.types.value import Value, List, Str, Nil

if TYPE_CHECKING:
    from cmdlisp.types.context import Context

logger = logging.getLogger(__name__)


def _split_form(expr: SExpression) -> tuple[SExpression, list[SExpression]] | None:
    """Return (head, args) for a call form, or None for a literal."""
    match expr:
        case list([head, *args]):
            return head, args
        case tuple(([head, *args], tail)):
            # Dotted form: the improper tail is the final argument
            return head, [*args, tail]
    return None


def apply_command(name: str, args: list[Value], ctx: Context) -> Value:
    """Look up `name` and run it with already-evaluated arguments."""
    command = ctx.registry.get(name)
    if command is None:
        raise UnknownCommandError(name)
    logger.debug("calling %s with %d argument(s)", name, len(args))
    return command.execute(args, ctx)


def evaluate(expr: SExpression, ctx: Context) -> Value:
    form = _split_form(expr)
    if form is None:
        return Value.from_sexpr(expr)

    head, tail_args = form
    if not isinstance(head, Symbol):
        raise DispatchError("First element of list must be a command name")

    command = ctx.registry.get(head.id)
    if command is None:
        raise UnknownCommandError(head.id)

    args = [evaluate(arg, ctx) for arg in tail_args]
    logger.debug("calling %s with %d argument(s)", head.id, len(args))
    return command.execute(args, ctx)


def value_to_form(value: Value) -> SExpression:
    """Turn a List value headed by a command-name string back into a form."""
    if isinstance(value, List) and value.items and isinstance(value.items[0], Str):
        head, *rest = value.items
        return [Symbol(head.value), *(item.to_sexpr() for item in rest)]
    return value.to_sexpr()


def evaluate_string(source: str, ctx: Context) -> Value:
    """Parse `source` and evaluate each top-level expression in order.

    Returns the last result (Nil for empty input). The first failing
    expression aborts the rest of `source`.
    """
    try:
        exprs = parse_string_normalized(source)
    except ParseError as e:
        logger.debug("normalized parse failed (%s), retrying raw input", e)
        exprs = parse_string(source)

    result: Value = Nil
    for expr in exprs:
        result = evaluate(expr, ctx)
    return result
