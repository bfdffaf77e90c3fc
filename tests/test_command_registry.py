import threading

import pytest

from cmdlisp.command_registry import CommandRegistry, get_default_registry
from cmdlisp.types.command import Command, FunctionCommand
from cmdlisp.types.tag import Tag, CORE, COMMANDS, SYSTEM
from cmdlisp.types.value import Int, Str


def constant(value):
    return lambda args, ctx: value


@pytest.fixture
def reg():
    return CommandRegistry()


def test_register_and_lookup(reg):
    cmd = reg.register_function("one", "Return one", constant(Int(1)))
    assert isinstance(cmd, FunctionCommand)
    assert reg.get("one") is cmd
    assert "one" in reg
    assert "two" not in reg
    assert reg.get("two") is None
    assert len(reg) == 1


def test_later_registration_shadows_earlier(reg):
    reg.register_function("x", "first", constant(Int(1)))
    reg.register_function("x", "second", constant(Int(2)))
    assert len(reg) == 1
    assert reg.get("x").description == "second"
    assert reg.get("x").execute([], None) == Int(2)


def test_decorator_returns_function_unchanged(reg):
    @reg.command("greet", "Say hello", syntax="(greet)", tag=COMMANDS)
    def greet(args, ctx):
        return Str("hello")

    cmd = reg.get("greet")
    assert greet([], None) == Str("hello")
    assert cmd.syntax == "(greet)"
    assert cmd.examples == "Examples not available"
    assert cmd.tag is COMMANDS


def test_command_subclass_defaults(reg):
    class Bare(Command):
        name = "bare"

        def execute(self, args, ctx):
            return Int(0)

    reg.register(Bare())
    cmd = reg.get("bare")
    assert cmd.description == "No description available"
    assert cmd.syntax == "Syntax not documented"
    assert cmd.examples == "Examples not available"
    assert cmd.tag is CORE
    assert reg.get_commands_with_help() == [
        ("bare", "No description available", "Syntax not documented", "Examples not available")
    ]


def test_listing(reg):
    reg.register_function("a", "A", constant(Int(1)))
    reg.register_function("b", "B", constant(Int(2)), syntax="(b)", examples="  (b)")
    assert reg.list_commands() == {"a", "b"}
    assert sorted(reg.get_commands_with_descriptions()) == [("a", "A"), ("b", "B")]
    assert ("b", "B", "(b)", "  (b)") in reg.get_commands_with_help()


def test_grouping_orders_tags_then_names(reg):
    late = Tag("late", 50, "Late Group")
    reg.register_function("omega", "z", constant(Int(0)))
    reg.register_function("alpha", "a", constant(Int(0)))
    reg.register_function("sys-b", "b", constant(Int(0)), tag=SYSTEM)
    reg.register_function("sys-a", "a", constant(Int(0)), tag=SYSTEM)
    reg.register_function("mid", "m", constant(Int(0)), tag=late)
    reg.register_function("set", "s", constant(Int(0)), tag=COMMANDS)

    groups = reg.get_commands_grouped_by_tags()
    assert [tag.name for tag, _ in groups] == ["commands", "late", "core", "system"]
    assert groups[2][1] == [("alpha", "a"), ("omega", "z")]
    assert [name for name, _ in groups[3][1]] == ["sys-a", "sys-b"]

    detailed = reg.get_commands_grouped_by_tags_with_help()
    assert [tag for tag, _ in detailed] == [tag for tag, _ in groups]
    assert detailed[0][1] == [("set", "s", "Syntax not documented", "Examples not available")]


def test_empty_registry_groups_to_nothing(reg):
    assert reg.get_commands_grouped_by_tags() == []


def test_concurrent_registration_and_lookup(reg):
    errors = []

    def worker(n):
        try:
            for i in range(200):
                name = f"cmd-{n}-{i}"
                reg.register_function(name, "generated", constant(Int(i)))
                assert reg.get(name) is not None
                reg.list_commands()
        except Exception as e:  # pragma: no cover
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(reg) == 8 * 200


def test_default_registry_is_shared_and_populated():
    first = get_default_registry()
    assert first is get_default_registry()
    for name in ("print", "sum", "pipe", "help", "set-var", "basedir", "sys-path-join"):
        assert name in first
