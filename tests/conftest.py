from __future__ import annotations

import pytest


# Point every test at a throwaway data directory so nothing touches ./data.
@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("AIRFLEET_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("AIRFLEET_DB_PATH", raising=False)
    monkeypatch.delenv("AIRFLEET_LOG_LEVEL", raising=False)
    return tmp_path / "data"
