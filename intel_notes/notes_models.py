"""
ノートDB（notes.db）のORMモデル
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from intel_notes.notes_db import NotesBase


_CASE_ID_MAX_LEN = 128
_LABEL_MAX_LEN = 32


class Note(NotesBase):
    """
    ケースに投稿されたノート。

    - id: 自動採番。大きいほど新しい（表示は降順）
    - body_json: コンテンツブロック列（JSON）
    - text: プレーンテキスト化した本文（上限で切り詰め済み）
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    case_id: Mapped[str] = mapped_column(String(_CASE_ID_MAX_LEN), nullable=False, index=True)
    entity_value: Mapped[str] = mapped_column(Text, nullable=False)
    position_label: Mapped[str] = mapped_column(String(_LABEL_MAX_LEN), nullable=False)
    leading_comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    body_json: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
