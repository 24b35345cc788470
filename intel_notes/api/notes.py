"""
ノートAPI（/api/notes/*, /api/cases/{case_id}/notes）

- preview: 組み立てのみ行い、投稿はしない
- create: 組み立てたチャンクを1件ずつ順番に保存する（1件ごとにコミット）
- list: 新しい順に返す（コメント付きの "1 of N" が先頭に来る）
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from intel_notes import schemas
from intel_notes.config import ConfigStore
from intel_notes.deps import get_config_store_dep, get_notes_db_dep
from intel_notes.note_assembler import Chunk, build_note_chunks
from intel_notes.notes_db import notes_session_scope
from intel_notes.notes_models import Note
from intel_notes.notes_repo import add_note, list_notes
from intel_notes.submission import submit_chunks


logger = logging.getLogger(__name__)

router = APIRouter(tags=["notes"])


def _build_chunks_or_400(request: schemas.NoteRequest, config_store: ConfigStore) -> List[Chunk]:
    """チャンクを組み立てる。入力/設定の不備は400にする。"""

    try:
        return build_note_chunks(
            [s.to_payload() for s in request.sources],
            request.entity.to_label(),
            request.leading_comment,
            character_budget=config_store.character_budget,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _chunk_to_item(chunk: Chunk) -> schemas.ChunkItem:
    return schemas.ChunkItem(
        position_label=chunk.position_label,
        leading_comment=chunk.leading_comment,
        source_names=list(chunk.source_names),
        body=list(chunk.body),
        text=chunk.text,
    )


def _note_to_item(note: Note) -> schemas.NoteItem:
    return schemas.NoteItem(
        id=int(note.id),
        case_id=str(note.case_id),
        entity_value=str(note.entity_value),
        position_label=str(note.position_label),
        leading_comment=note.leading_comment,
        text=str(note.text),
        created_at=note.created_at,
    )


@router.post("/notes/preview", response_model=schemas.NotePreviewResponse)
def preview_notes(
    request: schemas.NoteRequest,
    config_store: ConfigStore = Depends(get_config_store_dep),
):
    """投稿せずにチャンクを組み立てて返す。"""
    chunks = _build_chunks_or_400(request, config_store)
    return schemas.NotePreviewResponse(chunks=[_chunk_to_item(c) for c in chunks])


@router.post("/cases/{case_id}/notes", response_model=schemas.NoteListResponse)
def create_notes(
    case_id: str,
    request: schemas.NoteRequest,
    config_store: ConfigStore = Depends(get_config_store_dep),
):
    """チャンクを組み立て、返された順に1件ずつ保存する。結果は投稿順。"""
    chunks = _build_chunks_or_400(request, config_store)
    entity_value = request.entity.value.strip()

    def submit(chunk: Chunk) -> schemas.NoteItem:
        # 1件ごとにコミットする（途中で失敗しても保存済みのノートは残す）
        with notes_session_scope() as db:
            note = add_note(
                db,
                case_id=case_id,
                entity_value=entity_value,
                chunk=chunk,
                text_limit=config_store.note_text_limit,
            )
            return _note_to_item(note)

    items = submit_chunks(chunks, submit)
    logger.info("notes added to case %s: %d", case_id, len(items))
    return schemas.NoteListResponse(notes=items)


@router.get("/cases/{case_id}/notes", response_model=schemas.NoteListResponse)
def get_notes(
    case_id: str,
    db: Session = Depends(get_notes_db_dep),
):
    """ケースのノートを新しい順で返す。"""
    return schemas.NoteListResponse(notes=[_note_to_item(n) for n in list_notes(db, case_id)])
