"""Base directory and basedir-relative file commands."""
from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path

from cmdlisp.command_registry import CommandRegistry
from cmdlisp.errors import CommandArityError, CommandError, CommandTypeError
from cmdlisp.types.context import Context
from cmdlisp.types.tag import COMMANDS
from cmdlisp.types.value import Value, Str, List
from cmdlisp.utils import debug_log, expect_arity


def _string_arg(name: str, what: str, value: Value) -> str:
    if not isinstance(value, Str):
        raise CommandTypeError(f"{name} {what} must be a string")
    return value.value


def basedir(args: list[Value], ctx: Context) -> Value:
    """Set the base directory; relative paths resolve against the current one."""
    expect_arity("basedir", args, 1, "path")
    path_arg = _string_arg("basedir", "path", args[0])
    base_path = ctx.resolve_path(path_arg)
    debug_log(ctx, "basedir", f"resolved base path: {base_path}")
    if not base_path.exists():
        raise CommandError(f"Path does not exist: {base_path}")
    if not base_path.is_dir():
        raise CommandError(f"Path is not a directory: {base_path}")
    ctx.set_basedir(base_path.resolve())
    return Str(f"Base directory set to: {ctx.get_basedir()}")


def get_basedir(args: list[Value], ctx: Context) -> Value:
    expect_arity("get-basedir", args, 0)
    return Str(str(ctx.get_basedir()))


def basedir_root(args: list[Value], ctx: Context) -> Value:
    """Walk up from the working directory until `target` exists; make that the basedir."""
    if len(args) > 1:
        raise CommandArityError("basedir-root expects at most one argument (target)")
    target = _string_arg("basedir-root", "target", args[0]) if args else ".git"

    current = Path.cwd()
    debug_log(ctx, "basedir", f"starting search for {target} from: {current}")
    for directory in (current, *current.parents):
        candidate = directory / target
        if candidate.exists():
            ctx.set_basedir(directory)
            debug_log(ctx, "basedir", f"target found at: {candidate}")
            return Str(f"Found '{target}' at: {candidate}\nBase directory set to: {directory}")
    raise CommandError(
        f"Target '{target}' not found in any parent directory from current working directory"
    )


def fs_list(args: list[Value], ctx: Context) -> Value:
    """Names of regular files in the basedir matching a * / ? wildcard."""
    expect_arity("fs-list", args, 1, "pattern string")
    pattern = _string_arg("fs-list", "pattern", args[0])
    root = ctx.get_basedir()
    try:
        names = sorted(p.name for p in root.iterdir() if p.is_file() and fnmatchcase(p.name, pattern))
    except OSError as e:
        raise CommandError(f"Failed to read directory '{root}': {e}") from e
    debug_log(ctx, "fs-list", f"matched {len(names)} files")
    return List(Str(n) for n in names)


def read_file(args: list[Value], ctx: Context) -> Value:
    expect_arity("read-file", args, 1, "file path")
    path = ctx.resolve_path(_string_arg("read-file", "file path", args[0]))
    debug_log(ctx, "read-file", f"reading {path}")
    try:
        return Str(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise CommandError(f"Failed to read file '{path}': {e}") from e


def write_file(args: list[Value], ctx: Context) -> Value:
    expect_arity("write-file", args, 2, "file path, content")
    path = ctx.resolve_path(_string_arg("write-file", "file path", args[0]))
    content = str(args[1])
    debug_log(ctx, "write-file", f"writing {len(content)} characters to {path}")
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise CommandError(f"Failed to write file '{path}': {e}") from e
    return Str(str(path))


def register(registry: CommandRegistry) -> None:
    registry.register_function(
        "basedir", "Set the base directory for subsequent operations", basedir,
        syntax="(basedir path)",
        examples="  (basedir \"/home/user/project\")  ; Set absolute path\n"
                 "  (basedir \"../project\")         ; Relative to the current basedir",
        tag=COMMANDS,
    )
    registry.register_function(
        "get-basedir", "Get the current base directory from the context", get_basedir,
        syntax="(get-basedir)",
        examples="  (get-basedir)                 ; Get the current base directory path",
        tag=COMMANDS,
    )
    registry.register_function(
        "basedir-root",
        "Find and set base directory by searching up the filesystem for a target file/folder",
        basedir_root,
        syntax="(basedir-root [target])",
        examples="  (basedir-root)                ; Search for .git folder (default)\n"
                 "  (basedir-root \"setup.py\")     ; Search for setup.py",
        tag=COMMANDS,
    )
    registry.register_function(
        "fs-list", "List files in the base directory matching a wildcard pattern", fs_list,
        syntax="(fs-list pattern)",
        examples="  (fs-list \"*.py\")        ; List Python sources\n"
                 "  (fs-list \"config.*\")    ; List files starting with 'config.'",
        tag=COMMANDS,
    )
    registry.register_function(
        "read-file", "Read a file relative to the base directory", read_file,
        syntax="(read-file path)",
        examples="  (read-file \"VERSION\")",
        tag=COMMANDS,
    )
    registry.register_function(
        "write-file", "Write text to a file relative to the base directory", write_file,
        syntax="(write-file path content)",
        examples="  (write-file \"VERSION\" \"1.2.0\")",
        tag=COMMANDS,
    )
