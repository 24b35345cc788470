"""
ノート（チャンク）の組み立て

複数ソースのペイロードを「平坦化 → ビンパッキング → 組み立て」の順に処理し、
投稿順に並んだチャンク列を返す。

表示順の契約:
- 投稿先は「新しいノートほど上」に表示する。
- そのためビン列を反転して投稿し、先頭コメントの余地を持つビン0を最後に投稿する。
- ラベルは N of N から 1 of N へ数え下げ、コメント付きのチャンクが "1 of N" になる。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from intel_notes import content_blocks as cb
from intel_notes.bin_packer import Bin, first_bin_capacity, pack_items
from intel_notes.defang import EntityLabel
from intel_notes.defaults import DEFAULT_CHARACTER_BUDGET, FLAT_OBJECT_KEY_COLOR
from intel_notes.flatten import FlatEntry, SourceItem, SourcePayload, flatten_sources
from intel_notes.value_kinds import ValueKind


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chunk:
    """投稿単位のノート。body はコンテンツブロックの列。"""

    position_label: str
    leading_comment: Optional[str]
    body: Tuple[cb.Block, ...]
    source_names: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return cb.render_text(self.body)


def normalize_comment(leading_comment: Optional[str]) -> Optional[str]:
    s = (leading_comment or "").strip()
    return s or None


def truncation_warning(character_budget: int) -> str:
    return (
        f"Data for this integration exceeded the {character_budget:,} character limit "
        "and has been truncated."
    )


def _entry_row(entry: FlatEntry) -> cb.Block:
    if entry.kind is ValueKind.FLAT_OBJECT:
        # キーは灰色、値は通常色。最後のメンバー以外は改行で区切る
        runs: List[cb.Block] = []
        for i, (key, value) in enumerate(entry.members):
            runs.append(cb.text(key, marks=[cb.color_mark(FLAT_OBJECT_KEY_COLOR)]))
            runs.append(cb.text(f": {value}"))
            if i != len(entry.members) - 1:
                runs.append(cb.hard_break())
        value_cell = cb.table_cell(cb.paragraph(*runs))
    else:
        value_cell = cb.table_cell(cb.text_paragraph(entry.value))
    return cb.table_row(cb.table_cell(cb.text_paragraph(entry.path)), value_cell)


def source_blocks(item: SourceItem, *, character_budget: int) -> List[cb.Block]:
    """1ソース分のブロック（見出し、タグ、打ち切り警告、表、区切り線）。"""
    blocks: List[cb.Block] = [
        cb.heading(f"Integration: {item.source_name}", level=3),
        cb.tags_paragraph(item.summary_tags),
    ]
    if item.is_truncated:
        blocks.append(cb.panel(truncation_warning(character_budget), panel_type="warning"))

    header = cb.table_row(
        cb.table_cell(cb.text_paragraph("Field"), header=True),
        cb.table_cell(cb.text_paragraph("Value"), header=True),
    )
    blocks.append(cb.table([header, *(_entry_row(e) for e in item.entries)]))
    blocks.append(cb.rule())
    return blocks


def position_label(index: int, count: int) -> str:
    """反転後の走査位置 index（0始まり）のラベル。数え下げる。"""
    return f"{count - index} of {count}"


def assemble_chunks(
    bins: Sequence[Bin],
    entity: EntityLabel,
    leading_comment: Optional[str] = None,
    *,
    character_budget: int = DEFAULT_CHARACTER_BUDGET,
) -> List[Chunk]:
    """
    ビン列（作成順）を投稿順のチャンク列へ変換する。

    - 反転して、最初に作ったビン（ビン0）を最後にする
    - 先頭コメントは最後のチャンク（= 元のビン0）にだけ付ける
    """
    comment = normalize_comment(leading_comment)
    ordered = list(reversed(bins))
    count = len(ordered)
    entity_heading = cb.heading(f"Integration Data for {entity.defanged()}", level=2)

    chunks: List[Chunk] = []
    for i, b in enumerate(ordered):
        label = position_label(i, count)
        chunk_comment = comment if i == count - 1 else None

        body: List[cb.Block] = []
        if chunk_comment:
            body.append(cb.text_paragraph(chunk_comment))
        body.append(cb.panel(f"({label}) Integration Data", panel_type="info"))
        body.append(entity_heading)
        for item in b.items:
            body.extend(source_blocks(item, character_budget=character_budget))

        chunks.append(
            Chunk(
                position_label=label,
                leading_comment=chunk_comment,
                body=tuple(body),
                source_names=tuple(item.source_name for item in b.items),
            )
        )
    return chunks


def to_source_payload(raw: Any) -> SourcePayload:
    """dict形式（sourceName/summaryTags/details）の入力も受け付ける。"""
    if isinstance(raw, SourcePayload):
        return raw
    return SourcePayload(
        source_name=raw.get("source_name", raw.get("sourceName")),
        details=raw.get("details"),
        summary_tags=tuple(raw.get("summary_tags", raw.get("summaryTags")) or ()),
    )


def build_note_chunks(
    sources: Sequence[Any],
    entity: EntityLabel,
    leading_comment: Optional[str] = None,
    *,
    character_budget: int = DEFAULT_CHARACTER_BUDGET,
) -> List[Chunk]:
    """
    ソース列からチャンク列を作る（平坦化 → パッキング → 組み立て）。

    ソースが空、または予算が0以下の場合は ValueError。
    """
    if character_budget <= 0:
        raise ValueError(f"character budget must be positive (got {character_budget})")
    if not sources:
        raise ValueError("at least one source is required")

    comment = normalize_comment(leading_comment)
    items = flatten_sources([to_source_payload(s) for s in sources], character_budget)
    bins = pack_items(items, first_bin_capacity(character_budget, comment), character_budget)
    chunks = assemble_chunks(bins, entity, comment, character_budget=character_budget)

    logger.info(
        "note chunks assembled entity=%s sources=%d chunks=%d truncated=%d",
        entity.defanged(),
        len(items),
        len(chunks),
        sum(1 for it in items if it.is_truncated),
    )
    return chunks
