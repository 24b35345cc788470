"""
リッチテキストのコンテンツブロック

ノート本文はブロック構造のドキュメント（heading/paragraph/panel/table/rule ...）で表す。
ここではノードの組み立てヘルパと、ブロック木をプレーンテキストへ落とす
render_text() を提供する。ノードは素の dict（JSONへそのまま出せる形）。
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from intel_notes.defaults import NO_SUMMARY_TAGS_TEXT, TAG_UNAVAILABLE_TEXT

Block = Dict[str, Any]

_SVG_RE = re.compile(r"<svg.+</svg>", re.DOTALL)
_IMG_RE = re.compile(r"<img.+</img>", re.DOTALL)


def text(value: str, marks: Optional[List[Dict[str, Any]]] = None) -> Block:
    node: Block = {"type": "text", "text": value}
    if marks:
        node["marks"] = marks
    return node


def hard_break() -> Block:
    return {"type": "hardBreak"}


def paragraph(*content: Block) -> Block:
    return {"type": "paragraph", "content": list(content)}


def text_paragraph(value: str) -> Block:
    return paragraph(text(value))


def heading(value: str, level: int = 3) -> Block:
    return {"type": "heading", "attrs": {"level": level}, "content": [text(value)]}


def panel(value: str, panel_type: str = "info") -> Block:
    return {
        "type": "panel",
        "attrs": {"panelType": panel_type},
        "content": [text_paragraph(value)],
    }


def rule() -> Block:
    return {"type": "rule"}


def table_cell(*content: Block, header: bool = False) -> Block:
    return {"type": "tableHeader" if header else "tableCell", "attrs": {}, "content": list(content)}


def table_row(*cells: Block) -> Block:
    return {"type": "tableRow", "content": list(cells)}


def table(rows: Iterable[Block]) -> Block:
    return {"type": "table", "content": list(rows)}


def color_mark(color: str) -> Dict[str, Any]:
    return {"type": "textColor", "attrs": {"color": color}}


def code_mark() -> Dict[str, Any]:
    return {"type": "code"}


# --- サマリータグ ---


def strip_markup(value: str) -> str:
    """タグ文字列に埋め込まれたアイコン（svg/img）を取り除く。"""
    return _IMG_RE.sub("", _SVG_RE.sub("", value))


def tag_text(tag: Any) -> str:
    """タグ（文字列 or {"text": ...}）から表示テキストを取り出す。"""
    if isinstance(tag, str):
        return strip_markup(tag).strip()
    if isinstance(tag, dict) and isinstance(tag.get("text"), str):
        return strip_markup(tag["text"]).strip()
    return TAG_UNAVAILABLE_TEXT


def tags_paragraph(tags: Sequence[Any]) -> Block:
    """タグをコード装飾つきのテキストとして1段落に並べる。"""
    labels = [tag_text(t) for t in tags] or [NO_SUMMARY_TAGS_TEXT]
    content: List[Block] = []
    for label in labels:
        content.append(text(label, marks=[code_mark()]))
        content.append(text(" "))
    return paragraph(*content)


# --- プレーンテキスト化 ---


def _inline_text(nodes: Sequence[Block]) -> str:
    parts: List[str] = []
    for node in nodes or []:
        if node.get("type") == "hardBreak":
            parts.append("\n")
        else:
            parts.append(str(node.get("text") or ""))
    return "".join(parts)


def _table_lines(block: Block) -> List[str]:
    lines: List[str] = []
    for row in block.get("content") or []:
        cells = []
        for cell in row.get("content") or []:
            cells.append(" ".join(_inline_text(p.get("content") or []) for p in cell.get("content") or []))
        lines.append(" | ".join(cells))
    return lines


def block_lines(block: Optional[Block]) -> List[str]:
    """1ブロックをテキスト行へ変換する。未知のブロックは無視する。"""
    if not block:
        return []
    kind = block.get("type")
    if kind == "paragraph":
        return [_inline_text(block.get("content") or [])]
    if kind == "heading":
        level = int((block.get("attrs") or {}).get("level") or 3)
        return [f"{'#' * level} {_inline_text(block.get('content') or [])}"]
    if kind == "rule":
        return ["---"]
    if kind in ("panel", "expand"):
        return blocks_lines(block.get("content") or [])
    if kind == "table":
        return _table_lines(block)
    return []


def blocks_lines(blocks: Iterable[Block]) -> List[str]:
    lines: List[str] = []
    for block in blocks:
        lines.extend(block_lines(block))
    return lines


def render_text(blocks: Iterable[Block]) -> str:
    """ブロック木をプレーンテキスト（Markdown風）にする。"""
    return "\n".join(blocks_lines(blocks))
