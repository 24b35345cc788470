"""API リクエスト/レスポンスの Pydantic モデル。"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from intel_notes.defang import EntityLabel
from intel_notes.flatten import SourcePayload


class EntityIn(BaseModel):
    """ノート対象のエンティティ（表示カテゴリのフラグ付き）。"""
    value: str
    is_ip: bool = False
    is_domain: bool = False
    is_url: bool = False

    @field_validator("value")
    @classmethod
    def _validate_value(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("entity value must not be empty")
        return v

    def to_label(self) -> EntityLabel:
        return EntityLabel(value=self.value, is_ip=self.is_ip, is_domain=self.is_domain, is_url=self.is_url)


class SourcePayloadIn(BaseModel):
    """取得済みの1インテグレーション分のデータ。"""
    source_name: Optional[str] = None
    summary_tags: List[Any] = Field(default_factory=list)
    details: Any = None

    def to_payload(self) -> SourcePayload:
        return SourcePayload(
            source_name=self.source_name,
            details=self.details,
            summary_tags=tuple(self.summary_tags),
        )


class NoteRequest(BaseModel):
    """/notes/preview, /cases/{case_id}/notes 用リクエスト。"""
    entity: EntityIn
    sources: List[SourcePayloadIn] = Field(default_factory=list)
    leading_comment: Optional[str] = None


class ChunkItem(BaseModel):
    """組み立て済みチャンク（投稿順）。"""
    position_label: str
    leading_comment: Optional[str] = None
    source_names: List[str] = Field(default_factory=list)
    body: List[Dict[str, Any]]
    text: str


class NotePreviewResponse(BaseModel):
    chunks: List[ChunkItem]


class NoteItem(BaseModel):
    """保存済みノート。"""
    id: int
    case_id: str
    entity_value: str
    position_label: str
    leading_comment: Optional[str] = None
    text: str
    created_at: datetime


class NoteListResponse(BaseModel):
    notes: List[NoteItem]
