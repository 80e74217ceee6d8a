"""CLI test fixtures: run every command in an empty project directory."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """No coral.yaml in cwd and no global config."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    with patch("coral.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
        yield project
