"""Session context for cmdlisp.

The Context is the mutable state threaded through every evaluation: the
command registry, string-keyed session variables, the debug-print flag and
the base directory that file commands resolve relative paths against.

One Context lives for the whole run and belongs to the evaluation driver.
Handlers receive it for the duration of a call and must not keep it.
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from cmdlisp.types.value import Value

if TYPE_CHECKING:
    from cmdlisp.command_registry import CommandRegistry


class Context:
    """Per-session mutable state."""

    __slots__ = ("registry", "variables", "debug_print", "basedir")

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        basedir: Path | str = ".",
        debug_print: bool = False,
    ):
        self.registry: CommandRegistry = registry
        self.variables: dict[str, Value] = {}
        self.debug_print: bool = debug_print
        self.basedir: Path = Path(basedir)

    # --- Variables ---
    def set_variable(self, name: str, value: Value) -> None:
        if not isinstance(value, Value):
            raise TypeError(f"Context variables hold Values, got {value!r}")
        self.variables[name] = value

    def get_variable(self, name: str) -> Optional[Value]:
        return self.variables.get(name)

    # --- Debug flag ---
    def set_debug_print(self, enabled: bool) -> None:
        self.debug_print = enabled

    def get_debug_print(self) -> bool:
        return self.debug_print

    # --- Base directory ---
    def set_basedir(self, path: Path | str) -> None:
        self.basedir = Path(path)

    def get_basedir(self) -> Path:
        return self.basedir

    def resolve_path(self, path: Path | str) -> Path:
        """Resolve `path` against the base directory unless it is absolute."""
        p = Path(path)
        return p if p.is_absolute() else self.basedir / p

    def print_debug_info(self) -> str:
        """Render the current session state as a multi-line report."""
        with StringIO() as buffer:
            buffer.write("\n=== DEBUG: Current Program State ===\n")
            buffer.write("\n--- Fixed Context Variables ---\n")
            buffer.write(f"  debugPrint = {'true' if self.debug_print else 'false'}\n")
            buffer.write(f"  basedir = {self.basedir}\n")
            buffer.write("\n--- Session Variables ---\n")
            if not self.variables:
                buffer.write("  (no variables set)\n")
            else:
                for name in sorted(self.variables):
                    buffer.write(f"  {name} = {self.variables[name]}\n")
            buffer.write("\n=== End Debug Info ===\n")
            return buffer.getvalue()
