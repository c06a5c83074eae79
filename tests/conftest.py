from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for name in ("CARNETPANEL_STORE", "CARNETPANEL_NAMESPACE", "CARNETPANEL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
