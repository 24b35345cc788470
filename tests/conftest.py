"""テスト共通フィクスチャ。"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from intel_notes.config import Config
from intel_notes.main import create_app

TOKEN = "test_token"


@pytest.fixture
def app_config() -> Config:
    return Config(token=TOKEN, log_level="INFO", character_budget=200, note_text_limit=65000)


@pytest.fixture
def client(tmp_path, monkeypatch, app_config) -> TestClient:
    monkeypatch.setenv("INTEL_NOTES_HOME", str(tmp_path))
    app = create_app(app_config, notes_db_url=f"sqlite:///{tmp_path / 'notes.db'}")
    return TestClient(app)


@pytest.fixture
def headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN}"}
