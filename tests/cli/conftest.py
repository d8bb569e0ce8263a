"""Keep CLI tests away from the user's global config."""

from pathlib import Path

import pytest

from airfoildb.config import loader


@pytest.fixture(autouse=True)
def no_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml")
