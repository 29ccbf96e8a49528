from __future__ import annotations

import pytest
from pathlib import Path


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide an isolated directory for taker.toml files."""
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the working directory at empty temp dirs.

    Returns the fake home directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(work)
    return home
