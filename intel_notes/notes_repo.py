"""
ノートDBのリポジトリ（最小のCRUD補助）

API/サービスから同じロジックを呼べるようにここへ集約する。
"""

from __future__ import annotations

import json
from typing import List

from sqlalchemy.orm import Session

from intel_notes.note_assembler import Chunk
from intel_notes.notes_models import Note
from intel_notes.submission import truncate_if_needed


def add_note(db: Session, *, case_id: str, entity_value: str, chunk: Chunk, text_limit: int) -> Note:
    """チャンクを1件のノートとして保存し、採番済みの行を返す。"""

    note = Note(
        case_id=case_id,
        entity_value=entity_value,
        position_label=chunk.position_label,
        leading_comment=chunk.leading_comment,
        body_json=json.dumps(list(chunk.body), ensure_ascii=False),
        text=truncate_if_needed(chunk.text, text_limit),
    )
    db.add(note)
    db.flush()
    return note


def list_notes(db: Session, case_id: str) -> List[Note]:
    """ケースのノートを新しい順（投稿の逆順）で返す。"""

    return db.query(Note).filter(Note.case_id == case_id).order_by(Note.id.desc()).all()
