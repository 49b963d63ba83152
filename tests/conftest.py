"""
Shared fixtures: throwaway base and overlay trees.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dotkit.config import Config

BASH = "#!/usr/bin/env bash\n"


def write_script(path: Path, body: str = "echo ok\n", *, executable: bool = True,
                 marker: str = BASH) -> Path:
    """Create a script file, making parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(marker + body)
    path.chmod(0o755 if executable else 0o644)
    return path


@pytest.fixture
def base(tmp_path):
    """Empty base (framework) tree."""
    root = tmp_path / "dotkit"
    (root / "scripts").mkdir(parents=True)
    return root


@pytest.fixture
def overlay(tmp_path):
    """Empty overlay (dotfiles) tree."""
    root = tmp_path / "dotfiles"
    (root / "scripts").mkdir(parents=True)
    return root


@pytest.fixture
def base_config(base):
    """Config with no overlay."""
    return Config(base_path=base)


@pytest.fixture
def config(base, overlay):
    """Config with both trees."""
    return Config(base_path=base, overlay_path=overlay)


@pytest.fixture
def dot_env(monkeypatch, base, overlay, tmp_path):
    """Point the environment at the fixture trees."""
    monkeypatch.setenv("DOTKIT_PATH", str(base))
    monkeypatch.setenv("DOTFILES_PATH", str(overlay))
    monkeypatch.setenv("DOTKIT_CONFIG", str(tmp_path / "no-config.json"))
    monkeypatch.delenv("DOTKIT_DEBUG", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the stderr handler installed by CLI entry points."""
    yield
    import dotkit.logging as dot_logging

    logger = logging.getLogger("dotkit")
    if dot_logging._handler is not None:
        logger.removeHandler(dot_logging._handler)
        dot_logging._handler = None
    logger.setLevel(logging.NOTSET)
