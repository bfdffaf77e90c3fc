# Core type aliases for cmdlisp's data model.
# The reader emits plain Python data (int, float, str, bool, list, tuple-for-dotted-lists,
# Symbol, Nil) to represent code. Evaluation produces instances of the closed Value
# hierarchy in cmdlisp.types.value.
#
# Naming guidance:
# - SExpression: Use in reader/evaluator code to denote syntactic forms (code-as-data).
# - CommandFn:   Signature of a plain function registered as a command handler.

from typing import Any, Callable

__version__ = "0.3.0"

# Reader output alias
SExpression = Any

# Handler function type: fn(args, ctx) -> Value
CommandFn = Callable[..., Any]
