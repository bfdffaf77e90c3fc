"""Thin wrappers over the operating system: environment, filesystem, paths, processes.

Paths given to these commands are used as-is (not basedir-relative).
"""
from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from cmdlisp.command_registry import CommandRegistry
from cmdlisp.errors import CommandArityError, CommandError, CommandTypeError
from cmdlisp.types.context import Context
from cmdlisp.types.tag import SYSTEM
from cmdlisp.types.value import Value, Int, Str, Bool, List, Nil
from cmdlisp.utils import debug_log, expect_arity


def _strings(name: str, args: list[Value]) -> list[str]:
    out = []
    for arg in args:
        if not isinstance(arg, Str):
            raise CommandTypeError(f"{name} arguments must be strings")
        out.append(arg.value)
    return out


def _one_path(name: str, args: list[Value]) -> Path:
    expect_arity(name, args, 1, "path")
    return Path(_strings(name, args)[0])


# -------------------------------
# Environment
# -------------------------------
def env_current_dir(args: list[Value], ctx: Context) -> Value:
    expect_arity("sys-env-current-dir", args, 0)
    return Str(str(Path.cwd()))


def env_home_dir(args: list[Value], ctx: Context) -> Value:
    expect_arity("sys-env-home-dir", args, 0)
    try:
        return Str(str(Path.home()))
    except RuntimeError:
        return Nil


def env_var(args: list[Value], ctx: Context) -> Value:
    """Value of an environment variable, nil when unset."""
    expect_arity("sys-env-var", args, 1, "name")
    (name,) = _strings("sys-env-var", args)
    value = os.environ.get(name)
    return Nil if value is None else Str(value)


def env_vars(args: list[Value], ctx: Context) -> Value:
    expect_arity("sys-env-vars", args, 0)
    return List(List((Str(k), Str(v))) for k, v in sorted(os.environ.items()))


# -------------------------------
# Filesystem
# -------------------------------
def fs_read_to_string(args: list[Value], ctx: Context) -> Value:
    path = _one_path("sys-fs-read-to-string", args)
    debug_log(ctx, "sys-fs", f"reading file contents from: {path}")
    try:
        return Str(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise CommandError(f"Failed to read file '{path}': {e}") from e


def fs_write(args: list[Value], ctx: Context) -> Value:
    expect_arity("sys-fs-write", args, 2, "path, content")
    path_arg, content = _strings("sys-fs-write", args)
    path = Path(path_arg)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise CommandError(f"Failed to write file '{path}': {e}") from e
    return Bool(True)


def fs_create_dir(args: list[Value], ctx: Context) -> Value:
    path = _one_path("sys-fs-create-dir", args)
    try:
        path.mkdir()
    except OSError as e:
        raise CommandError(f"Failed to create directory '{path}': {e}") from e
    return Bool(True)


def fs_remove_file(args: list[Value], ctx: Context) -> Value:
    path = _one_path("sys-fs-remove-file", args)
    try:
        path.unlink()
    except OSError as e:
        raise CommandError(f"Failed to remove file '{path}': {e}") from e
    return Bool(True)


def fs_copy(args: list[Value], ctx: Context) -> Value:
    """Copy a file; returns the number of bytes copied."""
    expect_arity("sys-fs-copy", args, 2, "source, destination")
    source, destination = _strings("sys-fs-copy", args)
    try:
        copied = shutil.copyfile(source, destination)
    except OSError as e:
        raise CommandError(f"Failed to copy '{source}' to '{destination}': {e}") from e
    return Int(Path(copied).stat().st_size)


# -------------------------------
# Paths
# -------------------------------
def path_join(args: list[Value], ctx: Context) -> Value:
    if not args:
        raise CommandArityError("sys-path-join expects at least one argument (base)")
    base, *parts = _strings("sys-path-join", args)
    return Str(str(Path(base).joinpath(*parts)))


def path_parent(args: list[Value], ctx: Context) -> Value:
    path = _one_path("sys-path-parent", args)
    parent = path.parent
    return Nil if parent == path else Str(str(parent))


def path_filename(args: list[Value], ctx: Context) -> Value:
    path = _one_path("sys-path-filename", args)
    return Str(path.name) if path.name else Nil


def path_extension(args: list[Value], ctx: Context) -> Value:
    path = _one_path("sys-path-extension", args)
    return Str(path.suffix[1:]) if path.suffix else Nil


def path_exists(args: list[Value], ctx: Context) -> Value:
    return Bool(_one_path("sys-path-exists", args).exists())


def path_is_dir(args: list[Value], ctx: Context) -> Value:
    return Bool(_one_path("sys-path-is-dir", args).is_dir())


def path_is_file(args: list[Value], ctx: Context) -> Value:
    return Bool(_one_path("sys-path-is-file", args).is_file())


# -------------------------------
# Processes
# -------------------------------
def _program(name: str, args: list[Value]) -> list[str]:
    if not args:
        raise CommandArityError(f"{name} expects at least one argument (program name)")
    return _strings(name, args)


def process_command(args: list[Value], ctx: Context) -> Value:
    """Run a program with inherited stdio; returns (success exit-code)."""
    argv = _program("sys-process-command", args)
    debug_log(ctx, "sys-process", f"executing system command: {argv[0]} with {len(argv) - 1} arguments")
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as e:
        raise CommandError(f"Failed to execute command '{argv[0]}': {e}") from e
    return List((Bool(completed.returncode == 0), Int(completed.returncode)))


def process_output(args: list[Value], ctx: Context) -> Value:
    """Run a program capturing output; returns (stdout stderr success exit-code)."""
    argv = _program("sys-process-output", args)
    debug_log(ctx, "sys-process", f"capturing output of: {argv[0]} with {len(argv) - 1} arguments")
    try:
        completed = subprocess.run(argv, capture_output=True, text=True, errors="replace", check=False)
    except OSError as e:
        raise CommandError(f"Failed to execute command '{argv[0]}': {e}") from e
    return List((
        Str(completed.stdout),
        Str(completed.stderr),
        Bool(completed.returncode == 0),
        Int(completed.returncode),
    ))


SYSTEM_COMMANDS = [
    ("sys-env-current-dir", "Get the current working directory", "(sys-env-current-dir)", env_current_dir),
    ("sys-env-home-dir", "Get the user's home directory", "(sys-env-home-dir)", env_home_dir),
    ("sys-env-var", "Get the value of an environment variable", "(sys-env-var name)", env_var),
    ("sys-env-vars", "Get all environment variables as a list of (name value) pairs", "(sys-env-vars)", env_vars),
    ("sys-fs-read-to-string", "Read the entire contents of a file into a string", "(sys-fs-read-to-string path)", fs_read_to_string),
    ("sys-fs-write", "Write a string to a file, creating the file if it doesn't exist", "(sys-fs-write path content)", fs_write),
    ("sys-fs-create-dir", "Create a new directory", "(sys-fs-create-dir path)", fs_create_dir),
    ("sys-fs-remove-file", "Remove a file from the filesystem", "(sys-fs-remove-file path)", fs_remove_file),
    ("sys-fs-copy", "Copy a file from source to destination", "(sys-fs-copy source destination)", fs_copy),
    ("sys-path-join", "Join path components together", "(sys-path-join base component1 component2 ...)", path_join),
    ("sys-path-parent", "Get the parent directory of a path", "(sys-path-parent path)", path_parent),
    ("sys-path-filename", "Get the filename component of a path", "(sys-path-filename path)", path_filename),
    ("sys-path-extension", "Get the file extension of a path", "(sys-path-extension path)", path_extension),
    ("sys-path-exists", "Check if a path exists", "(sys-path-exists path)", path_exists),
    ("sys-path-is-dir", "Check if a path is a directory", "(sys-path-is-dir path)", path_is_dir),
    ("sys-path-is-file", "Check if a path is a file", "(sys-path-is-file path)", path_is_file),
    ("sys-process-command", "Execute a system command and return the exit status", "(sys-process-command program arg1 arg2 ...)", process_command),
    ("sys-process-output", "Execute a system command and return the output (stdout, stderr, status)", "(sys-process-output program arg1 arg2 ...)", process_output),
]


def register(registry: CommandRegistry) -> None:
    for name, description, syntax, fn in SYSTEM_COMMANDS:
        registry.register_function(
            name, description, fn,
            syntax=syntax,
            examples=f"  {syntax}",
            tag=SYSTEM,
        )
