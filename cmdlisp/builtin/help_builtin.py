"""Help commands rendered from the registry's tag grouping."""
from __future__ import annotations

from io import StringIO

from cmdlisp.command_registry import CommandRegistry
from cmdlisp.types.context import Context
from cmdlisp.types.value import Value, Str
from cmdlisp.utils import expect_arity


def format_help(registry: CommandRegistry) -> str:
    with StringIO() as buffer:
        buffer.write("Available commands:\n\n")
        for tag, commands in registry.get_commands_grouped_by_tags():
            buffer.write(f"=== {tag.text} ===\n")
            for name, description in commands:
                buffer.write(f"  {name:<12} - {description}\n")
            buffer.write("\n")
        return buffer.getvalue()


def format_help_long(registry: CommandRegistry) -> str:
    with StringIO() as buffer:
        buffer.write("=== DETAILED COMMAND REFERENCE ===\n\n")
        for tag, commands in registry.get_commands_grouped_by_tags_with_help():
            buffer.write(f"=== {tag.text} ===\n\n")
            for name, description, syntax, examples in commands:
                buffer.write(f"Command: {name}\n")
                buffer.write(f"Description: {description}\n")
                buffer.write(f"Syntax: {syntax}\n")
                buffer.write("Examples:\n")
                buffer.write(f"{examples}\n\n")
            buffer.write("\n")
        buffer.write("=== GENERAL USAGE ===\n")
        buffer.write("All commands use Lisp-style syntax with parentheses:\n")
        buffer.write("  (command-name arg1 arg2 ...)\n\n")
        buffer.write("Commands can be nested:\n")
        buffer.write("  (print (sum 1 2 3))  ; Prints the result of sum\n\n")
        buffer.write("Multiple expressions can be evaluated:\n")
        buffer.write("  cmdlisp '(sum 1 2 3)' '(print \"Hello\")'\n")
        return buffer.getvalue()


def help_builtin(args: list[Value], ctx: Context) -> Value:
    expect_arity("help", args, 0)
    text = format_help(ctx.registry)
    print(text)
    return Str(text)


def help_long(args: list[Value], ctx: Context) -> Value:
    expect_arity("help-long", args, 0)
    text = format_help_long(ctx.registry)
    print(text)
    return Str(text)


def register(registry: CommandRegistry) -> None:
    registry.register_function(
        "help", "Show short help for all commands", help_builtin,
        syntax="(help)",
        examples="  (help)              ; Shows short help",
    )
    registry.register_function(
        "help-long", "Show detailed help with syntax and examples", help_long,
        syntax="(help-long)",
        examples="  (help-long)         ; Shows this detailed help",
    )
