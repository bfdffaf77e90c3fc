"""Small helpers shared by builtin commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cmdlisp.errors import CommandArityError

if TYPE_CHECKING:
    from cmdlisp.types.context import Context

trace_logger = logging.getLogger("cmdlisp.trace")


def debug_log(ctx: Context, module_name: str, description: str) -> None:
    """Trace a handler step.

    Printed as "module-name: description" when the session's debug flag is
    on, and always emitted on the cmdlisp.trace logger at DEBUG level.
    """
    trace_logger.debug("%s: %s", module_name, description)
    if ctx.get_debug_print():
        print(f"{module_name}: {description}")


def expect_arity(name: str, args: list, count: int, what: str = "") -> None:
    """Raise CommandArityError unless exactly `count` arguments were given."""
    if len(args) == count:
        return
    if count == 0:
        raise CommandArityError(f"{name} expects no arguments")
    noun = {1: "one argument", 2: "two arguments"}.get(count, f"{count} arguments")
    suffix = f" ({what})" if what else ""
    raise CommandArityError(f"{name} expects exactly {noun}{suffix}")
