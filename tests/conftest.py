import pytest

from cmdlisp.builtin import register_builtins
from cmdlisp.command_registry import CommandRegistry
from cmdlisp.types.context import Context
from cmdlisp.types.value import Int


# Most tests evaluate against the full builtin registry ("registry"/"ctx").
# Evaluator tests that need to observe dispatch order use "bare_ctx", which
# only knows a handful of hand-written handlers.


@pytest.fixture
def registry():
    r = CommandRegistry()
    register_builtins(r)
    return r


@pytest.fixture
def ctx(registry, tmp_path):
    return Context(registry, basedir=tmp_path)


@pytest.fixture
def calls():
    return []


@pytest.fixture
def bare_ctx(calls):
    r = CommandRegistry()

    def do_sum(args, _ctx):
        return Int(sum(a.value for a in args))

    def record(args, _ctx):
        calls.append(str(args[0]))
        return args[0]

    def boom(args, _ctx):
        from cmdlisp.errors import CommandError
        raise CommandError("boom failed")

    r.register_function("sum", "Sum integers", do_sum)
    r.register_function("rec", "Record the first argument", record)
    r.register_function("boom", "Always fails", boom)
    return Context(r)
