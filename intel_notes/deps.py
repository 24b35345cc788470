"""依存オブジェクトの生成。"""

from __future__ import annotations

from typing import Iterator

from sqlalchemy.orm import Session

from intel_notes.config import ConfigStore, get_config_store
from intel_notes.notes_db import get_notes_db


def get_config_store_dep() -> ConfigStore:
    """FastAPI依存性注入用。"""
    return get_config_store()


def get_notes_db_dep() -> Iterator[Session]:
    """ノートDBセッションのFastAPI依存性注入用。"""
    yield from get_notes_db()
