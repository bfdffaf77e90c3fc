"""Core commands: output, arithmetic, strings, pipelines and session debugging."""
from __future__ import annotations

from cmdlisp.command_registry import CommandRegistry
from cmdlisp.errors import CommandArityError, CommandError, CommandTypeError
from cmdlisp.evaluation.evaluator import apply_command, evaluate, evaluate_string, value_to_form
from cmdlisp.types.command import Command
from cmdlisp.types.context import Context
from cmdlisp.types.value import Value, Int, Str, List, Nil, INT_MIN, INT_MAX, value_to_int
from cmdlisp.utils import expect_arity


def print_builtin(args: list[Value], ctx: Context) -> Value:
    """Print the arguments joined by spaces and return the printed text."""
    output = " ".join(str(v) for v in args)
    print(output)
    return Str(output)


def sum_builtin(args: list[Value], ctx: Context) -> Value:
    """Sum integers; list arguments contribute each of their elements."""
    total = 0
    for arg in args:
        for item in (arg.items if isinstance(arg, List) else (arg,)):
            if not isinstance(item, Int):
                raise CommandTypeError(f"Cannot sum non-integer value: {item}")
            total += item.value
    if not INT_MIN <= total <= INT_MAX:
        raise CommandError("sum overflowed 64-bit integer range")
    return Int(total)


def multiply(args: list[Value], ctx: Context) -> Value:
    expect_arity("multiply", args, 2, "number1, number2")
    product = value_to_int(args[0]) * value_to_int(args[1])
    if not INT_MIN <= product <= INT_MAX:
        raise CommandError("multiply overflowed 64-bit integer range")
    return Int(product)


def concat(args: list[Value], ctx: Context) -> Value:
    return Str("".join(str(v) for v in args))


def eval_builtin(args: list[Value], ctx: Context) -> Value:
    """(eval "source") or (eval (list "cmd" arg ...)): evaluate data as code."""
    expect_arity("eval", args, 1, "source or command list")
    target = args[0]
    if isinstance(target, Str):
        return evaluate_string(target.value, ctx)
    if isinstance(target, List):
        return evaluate(value_to_form(target), ctx)
    return target


class PipeCommand(Command):
    """Thread a value through a sequence of commands.

    The first argument is the starting value. Each following argument is a
    list whose first element names a command; that command runs with the rest
    of the list as arguments and the running value appended last.
    """

    name = "pipe"
    description = "Execute a pipeline of commands, passing results between them"
    syntax = "(pipe value (list \"command\" arg ...) ...)"
    examples = (
        "  (pipe (sum 1 2 3) (list \"print\" \"Result:\"))  ; Prints \"Result: 6\"\n"
        "  (pipe (list 1 2) (list \"sum\" 10))            ; Returns 13"
    )

    def execute(self, args: list[Value], ctx: Context) -> Value:
        if not args:
            return Nil
        result = args[0]
        for step in args[1:]:
            if not isinstance(step, List):
                raise CommandTypeError("Pipe arguments must be command lists")
            if not step.items:
                continue
            head, *rest = step.items
            if not isinstance(head, Str):
                raise CommandTypeError(f"Pipe step must start with a command name, got: {head}")
            result = apply_command(head.value, [*rest, result], ctx)
        return result


class DebugCommand(Command):
    name = "debug"
    description = "Print current program state or set debug printing true/false"
    syntax = "(debug) or (debug \"true\"|\"false\")"
    examples = (
        "  (debug)          ; Print session variables\n"
        "  (debug \"true\")   ; Enable debug printing\n"
        "  (debug \"false\")  ; Disable debug printing"
    )

    def execute(self, args: list[Value], ctx: Context) -> Value:
        if not args:
            output = ctx.print_debug_info()
            print(output, end="")
            return Str(output)
        if len(args) != 1:
            raise CommandArityError(
                "debug command accepts either no arguments or exactly one argument (true/false)"
            )
        arg = args[0]
        if not isinstance(arg, Str):
            raise CommandTypeError("debug command argument must be a string ('true' or 'false')")
        match arg.value.lower():
            case "true":
                ctx.set_debug_print(True)
                message = "Debug printing enabled"
            case "false":
                ctx.set_debug_print(False)
                message = "Debug printing disabled"
            case _:
                raise CommandTypeError("debug command argument must be 'true' or 'false'")
        print(message)
        return Str(message)


def register(registry: CommandRegistry) -> None:
    """Register the core commands into the given registry."""
    registry.register_function(
        "print", "Print arguments to stdout", print_builtin,
        syntax="(print arg1 arg2 ...)",
        examples="  (print \"Hello World\")\n  (print \"Sum is:\" (sum 1 2 3))",
    )
    registry.register_function(
        "sum", "Sum a list of integers", sum_builtin,
        syntax="(sum number1 number2 ...)",
        examples="  (sum 1 2 3)        ; Returns 6\n  (sum 10 20)        ; Returns 30",
    )
    registry.register_function(
        "multiply", "Multiply two numbers", multiply,
        syntax="(multiply number1 number2)",
        examples="  (multiply 6 7)      ; Returns 42\n  (multiply 3 4)      ; Returns 12",
    )
    registry.register_function(
        "concat", "Concatenate strings", concat,
        syntax="(concat string1 string2 ...)",
        examples="  (concat \"Hello\" \" \" \"World\") ; Returns \"Hello World\"\n"
                 "  (concat \"A\" \"B\" \"C\")         ; Returns \"ABC\"",
    )
    registry.register_function(
        "eval", "Evaluate a string of source or a command list", eval_builtin,
        syntax="(eval source) or (eval (list \"command\" arg ...))",
        examples="  (eval \"(sum 1 2)\")          ; Returns 3\n"
                 "  (eval (list \"sum\" 1 2))      ; Returns 3",
    )
    registry.register(PipeCommand())
    registry.register(DebugCommand())
