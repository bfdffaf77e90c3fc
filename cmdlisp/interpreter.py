from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from cmdlisp.builtin import register_builtins
from cmdlisp.command_registry import CommandRegistry
from cmdlisp.config import Settings, load_settings
from cmdlisp.errors import CmdLispError
from cmdlisp.evaluation.evaluator import evaluate_string
from cmdlisp.types.context import Context
from cmdlisp.types.value import Value, Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Owns a command registry and the session Context, and drives evaluation
    of source text in the three supported modes: line by line, one unit per
    argument, or a whole file at once.
    """

    def __init__(
        self,
        registry: CommandRegistry | None = None,
        *,
        settings: Settings | None = None,
        prelude: str | None = None,
        echo: bool = False,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        if registry is None:
            registry = CommandRegistry()
            register_builtins(registry)
        if settings is None:
            settings = load_settings()
        self.registry: CommandRegistry = registry
        self.settings: Settings = settings
        self.context: Context = Context(
            registry, basedir=settings.basedir, debug_print=settings.debug
        )
        self.echo = echo
        self._out = out
        self._err = err

        for path in settings.prelude:
            self.eval_prelude(Path(path).read_text(encoding="utf-8"))
        if prelude:
            self.eval_prelude(prelude)

    # Resolved lazily so pytest's capsys sees the live streams
    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def eval_prelude(self, code: str) -> None:
        logger.debug("evaluating prelude (%d characters)", len(code))
        evaluate_string(code, self.context)

    def eval(self, code: str) -> Value:
        return evaluate_string(code, self.context)

    def _report(self, error: CmdLispError) -> None:
        print(f"Error: {error}", file=self.err)

    def _echo(self, result: Value) -> None:
        if self.echo and result is not Nil:
            print(result, file=self.out)

    def run_lines(self, lines: Iterable[str]) -> int:
        """Evaluate each non-empty line; report failures and keep going."""
        status = 0
        for line in lines:
            if not line.strip():
                continue
            try:
                self._echo(self.eval(line))
            except CmdLispError as e:
                logger.debug("line failed: %r", line)
                self._report(e)
                status = 1
        return status

    def run_args(self, args: Iterable[str]) -> int:
        """Evaluate each argument in turn; the first failure stops the run."""
        for arg in args:
            try:
                self._echo(self.eval(arg))
            except CmdLispError as e:
                self._report(e)
                return 1
        return 0

    def run_file(self, path: Path | str) -> int:
        """Evaluate the whole file as a single unit."""
        try:
            source = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: cannot read {path}: {e}", file=self.err)
            return 1
        try:
            self._echo(self.eval(source))
        except CmdLispError as e:
            self._report(e)
            return 1
        return 0
