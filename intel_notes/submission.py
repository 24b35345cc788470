"""
チャンクの逐次投稿

チャンクは返された順に1件ずつ投稿する（同時に投稿中なのは常に1件）。
投稿先は新しいものを上に表示するため、順序が崩れると表示順が不定になる。

途中で投稿が失敗した場合は例外をそのまま呼び出し元へ返す。
投稿済みのチャンクは取り消さない。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Sequence, TypeVar

from intel_notes.content_blocks import Block
from intel_notes.note_assembler import Chunk


logger = logging.getLogger(__name__)

T = TypeVar("T")


def truncate_if_needed(text: str, limit: int) -> str:
    """limit を超える場合は末尾を "..." にして切り詰める。"""
    if len(text) <= limit:
        return text
    return text[: max(0, limit - 3)] + "..."


def _text_node_length(nodes: Any) -> int:
    if isinstance(nodes, (list, tuple)):
        return sum(_text_node_length(n) for n in nodes)
    if isinstance(nodes, dict):
        total = len(nodes["text"]) if isinstance(nodes.get("text"), str) else 0
        return total + sum(_text_node_length(v) for k, v in nodes.items() if k != "text")
    return 0


def chunk_stats(chunk: Chunk) -> Dict[str, Any]:
    """デバッグログ用の統計（テキストノード長、本文のUTF-8バイト数）。"""
    body: Sequence[Block] = chunk.body
    rendered = chunk.text
    return {
        "label": chunk.position_label,
        "text_node_length": _text_node_length(list(body)),
        "text_bytes": len(rendered.encode("utf-8")),
        "sources": list(chunk.source_names),
    }


def submit_chunks(chunks: Sequence[Chunk], submit: Callable[[Chunk], T]) -> List[T]:
    """チャンクを先頭から順に submit() し、結果を投稿順で返す。"""
    results: List[T] = []
    total = len(chunks)
    for index, chunk in enumerate(chunks):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("submitting chunk %d/%d", index + 1, total, extra={"chunk": chunk_stats(chunk)})
        try:
            results.append(submit(chunk))
        except Exception:
            logger.warning("chunk submission failed (%d of %d already submitted)", index, total)
            raise
    logger.info("chunks submitted: %d", total)
    return results
