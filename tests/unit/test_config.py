"""Unit tests for rfsm_light.config."""

import json
import shutil
from pathlib import Path

import pytest

from rfsm_light.checker import AcceptAllChecker, CachingChecker, RfsmcChecker
from rfsm_light.config import (
    detect_compiler,
    is_initialized,
    load_config,
    load_or_default,
    make_checker,
    save_config,
)
from rfsm_light.models import ToolConfig


class TestSaveLoad:
    def test_round_trip(self, tmp_path: Path) -> None:
        config = ToolConfig(compiler="/usr/bin/rfsmc", compiler_timeout=3.0, dot_captions=False)
        path = save_config(config, tmp_path)
        assert path == tmp_path / ".rfsm-light" / "config.json"
        assert is_initialized(tmp_path)
        assert load_config(tmp_path) == config

    def test_missing(self, tmp_path: Path) -> None:
        assert not is_initialized(tmp_path)
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path)

    def test_defaults_for_missing_keys(self, tmp_path: Path) -> None:
        (tmp_path / ".rfsm-light").mkdir()
        (tmp_path / ".rfsm-light" / "config.json").write_text(json.dumps({"compiler": "x"}))
        config = load_config(tmp_path)
        assert config.compiler == "x"
        assert config.dot_captions is True
        assert config.compiler_timeout == 10.0

    def test_load_or_default(self, tmp_path: Path) -> None:
        assert load_or_default(tmp_path) == ToolConfig()


class TestCompiler:
    def test_detect(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(shutil, "which", lambda name: f"/opt/bin/{name}")
        assert detect_compiler() == "/opt/bin/rfsmc"

    def test_detect_absent(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(shutil, "which", lambda name: None)
        assert detect_compiler() == ""

    def test_make_checker(self) -> None:
        assert isinstance(make_checker(ToolConfig()), AcceptAllChecker)
        checker = make_checker(ToolConfig(compiler="rfsmc", compiler_timeout=2.0))
        assert isinstance(checker, CachingChecker)
        assert isinstance(checker.inner, RfsmcChecker)
        assert checker.inner.timeout == 2.0
