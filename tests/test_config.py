import logging
import os
from pathlib import Path

import pytest

from cmdlisp.config import Settings, flag_from_env, load_settings, paths_from_env


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("CMDLISP_BASEDIR", "CMDLISP_DEBUG", "CMDLISP_LOG_LEVEL", "CMDLISP_PRELUDE"):
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings == Settings()
    assert settings.basedir == Path(".")
    assert settings.debug is False
    assert settings.prelude == []
    assert settings.log_level_value == logging.WARNING


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CMDLISP_BASEDIR", str(tmp_path))
    monkeypatch.setenv("CMDLISP_DEBUG", "yes")
    monkeypatch.setenv("CMDLISP_LOG_LEVEL", "debug")
    monkeypatch.setenv("CMDLISP_PRELUDE", os.pathsep.join(["a.lisp", "", " b.lisp "]))
    settings = load_settings()
    assert settings.basedir == tmp_path
    assert settings.debug is True
    assert settings.log_level_value == logging.DEBUG
    assert settings.prelude == [Path("a.lisp"), Path("b.lisp")]


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("true", True), ("ON", True), ("0", False), ("no", False), ("", False), ("  ", False)]
)
def test_flag_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("CMDLISP_DEBUG", raw)
    assert flag_from_env("CMDLISP_DEBUG") is expected


def test_flag_default_when_unset():
    assert flag_from_env("CMDLISP_DEBUG", default=True) is True


def test_paths_from_env_defaults():
    assert paths_from_env("CMDLISP_PRELUDE", ["x.lisp"]) == [Path("x.lisp")]


def test_unknown_log_level_falls_back_to_warning():
    assert Settings(log_level="chatty").log_level_value == logging.WARNING
