"""
ソースのビンパッキング

平坦化済みソース（SourceItem）を、容量上限つきのビン（= 1ノート）へ
コスト降順のファーストフィットで詰める。

NOTE:
- ビン0だけは先頭コメントの分だけ容量を減らして扱う（first_bin_capacity）。
- 最適解は保証しない。決定的で単純なことを優先する。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from intel_notes.flatten import SourceItem


@dataclass
class Bin:
    """詰め込み中/詰め込み済みのビン。items は配置順。"""

    items: List[SourceItem] = field(default_factory=list)
    total_cost: int = 0

    def add(self, item: SourceItem) -> None:
        self.items.append(item)
        self.total_cost += item.total_cost


def first_bin_capacity(capacity: int, leading_comment: Optional[str] = None) -> int:
    """先頭コメントの文字数を差し引いたビン0の容量。"""
    comment = (leading_comment or "").strip()
    if not comment:
        return capacity
    return max(0, capacity - len(comment))


def effective_capacity(index: int, first_capacity: int, capacity: int) -> int:
    return first_capacity if index == 0 else capacity


def pack_items(items: Sequence[SourceItem], first_capacity: int, capacity: int) -> List[Bin]:
    """
    SourceItemをビンへ詰める。

    1. total_cost の降順に並べる（同コストは入力順を保つ）
    2. 既存ビンを作成順に見て、最初に収まるビンへ入れる
    3. どこにも収まらなければ新しいビンを末尾に作る

    単体で容量を超えるアイテムは、新しいビンに1つだけ入る。
    """
    if capacity <= 0:
        raise ValueError(f"bin capacity must be positive (got {capacity})")

    ordered = sorted(items, key=lambda it: it.total_cost, reverse=True)
    bins: List[Bin] = []
    for item in ordered:
        for index, b in enumerate(bins):
            if b.total_cost + item.total_cost <= effective_capacity(index, first_capacity, capacity):
                b.add(item)
                break
        else:
            new_bin = Bin()
            new_bin.add(item)
            bins.append(new_bin)
    return bins
