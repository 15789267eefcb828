"""Configuration management for rfsm-light projects."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from rfsm_light.checker import AcceptAllChecker, CachingChecker, FragmentChecker, RfsmcChecker
from rfsm_light.models import ToolConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = ".rfsm-light"
CONFIG_FILE = "config.json"
DEFAULT_COMPILER = "rfsmc"


def _config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILE


def save_config(config: ToolConfig, project_root: Path) -> Path:
    """Save project config to .rfsm-light/config.json. Returns the config path."""
    config_dir = project_root / CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    path = _config_path(project_root)
    data = {
        "version": config.version,
        "compiler": config.compiler,
        "compiler_timeout": config.compiler_timeout,
        "dot_captions": config.dot_captions,
        "check_stimuli": config.check_stimuli,
    }
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def load_config(project_root: Path) -> ToolConfig:
    """Load project config from .rfsm-light/config.json."""
    path = _config_path(project_root)
    if not path.exists():
        raise FileNotFoundError(f"No config found at {path}")
    data = json.loads(path.read_text())
    return ToolConfig(
        version=data.get("version", "0.1.0"),
        compiler=data.get("compiler", ""),
        compiler_timeout=float(data.get("compiler_timeout", 10.0)),
        dot_captions=data.get("dot_captions", True),
        check_stimuli=data.get("check_stimuli", False),
    )


def is_initialized(project_root: Path) -> bool:
    return _config_path(project_root).exists()


def load_or_default(project_root: Path) -> ToolConfig:
    """Load the project config, or return defaults when there is none."""
    if is_initialized(project_root):
        return load_config(project_root)
    return ToolConfig()


def detect_compiler() -> str:
    """Return the path of the rfsmc compiler if it is on PATH, else ''."""
    return shutil.which(DEFAULT_COMPILER) or ""


def make_checker(config: ToolConfig) -> FragmentChecker:
    """Build the fragment checker described by ``config``."""
    if not config.compiler:
        logger.debug("No compiler configured; fragments are not checked")
        return AcceptAllChecker()
    return CachingChecker(RfsmcChecker(config.compiler, config.compiler_timeout))
