"""Common test fixtures."""

import os
from pathlib import Path

import pytest


@pytest.fixture
def config_home(tmp_path, monkeypatch) -> Path:
    # Patch HOME environment variable for the duration of the test
    monkeypatch.setenv("HOME", str(tmp_path))
    # On Windows, also set USERPROFILE
    if os.name == "nt":
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
    for name in ("SMOL_JOURNAL_DIR", "SMOL_ROOT", "SMOL_LOG_LEVEL", "SMOL_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def journal_dir(tmp_path) -> Path:
    return tmp_path / "journals"


@pytest.fixture
def root_dir(tmp_path) -> Path:
    root = tmp_path / "root"
    root.mkdir()
    return root
