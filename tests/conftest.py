from __future__ import annotations

import importlib

import pytest

from maildir_cleaner import config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point XDG dirs at a scratch home so the user's settings never leak in."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / "data"))
    importlib.reload(config)
    yield config
