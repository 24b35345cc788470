"""
ノートDB（notes.db）接続とセッション管理

ケースに投稿されたノートを保持する。ノートIDは自動採番で、投稿順そのものを表す。
"""

from __future__ import annotations

import contextlib
import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from intel_notes import paths


logger = logging.getLogger(__name__)

# notes.db 用 Base
NotesBase = declarative_base()

# グローバルセッション（notes.db 用）
NotesSessionLocal: sessionmaker | None = None


def get_notes_db_url() -> str:
    """notes.db のSQLAlchemy URLを返す。"""

    return f"sqlite:///{paths.get_data_dir() / 'notes.db'}"


def init_notes_db(db_url: str | None = None) -> None:
    """
    notes.db を初期化する（起動時）。

    - セッションファクトリを作成する
    - テーブルを作成する
    """

    global NotesSessionLocal

    db_url = db_url or get_notes_db_url()
    connect_args = {"check_same_thread": False, "timeout": 10.0} if db_url.startswith("sqlite") else {}
    engine = create_engine(db_url, future=True, connect_args=connect_args)
    NotesSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    # テーブル作成にはモデル import が必要
    import intel_notes.notes_models  # noqa: F401

    NotesBase.metadata.create_all(bind=engine)
    logger.info("notes DB initialized: %s", db_url)


def get_notes_db() -> Iterator[Session]:
    """
    notes.db のセッションを取得する（FastAPI依存性注入用）。

    使用後は自動でクローズされる。
    """

    if NotesSessionLocal is None:
        raise RuntimeError("Notes database not initialized. Call init_notes_db() first.")
    session = NotesSessionLocal()
    try:
        yield session
    finally:
        session.close()


@contextlib.contextmanager
def notes_session_scope() -> Iterator[Session]:
    """
    notes.db のセッションスコープ（with文用）。

    正常終了時はコミット、例外時はロールバックする。
    """

    if NotesSessionLocal is None:
        raise RuntimeError("Notes database not initialized. Call init_notes_db() first.")
    session = NotesSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
