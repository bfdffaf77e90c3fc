from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


_TRUTHY = {'1', 'true', 'yes', 'on'}

# Defaults
_DEFAULT_BASEDIR = Path('.')
_DEFAULT_LOG_LEVEL = 'WARNING'


@dataclass(frozen=True)
class Settings:
    basedir: Path = _DEFAULT_BASEDIR
    debug: bool = False
    log_level: str = _DEFAULT_LOG_LEVEL
    prelude: List[Path] = field(default_factory=list)

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def load_settings() -> Settings:
    """Read CMDLISP_* environment variables into Settings."""
    return Settings(
        basedir=Path(os.environ.get('CMDLISP_BASEDIR') or _DEFAULT_BASEDIR),
        debug=flag_from_env('CMDLISP_DEBUG'),
        log_level=os.environ.get('CMDLISP_LOG_LEVEL') or _DEFAULT_LOG_LEVEL,
        prelude=paths_from_env('CMDLISP_PRELUDE', []),
    )
