"""
ソースペイロードの平坦化

1つのインテグレーション（データソース）が返した任意の入れ子データを、
ドット区切りパスで参照される行（FlatEntry）の列へ深さ優先で展開する。

方針:
- 文字数予算はソース単位。累積カウンタ（CostAccumulator）はソースごとに作り、共有しない。
- プリミティブ配列とフラットオブジェクトはそれ以上降りずに1行へまとめる。
- 要素1個の配列とメンバー1個のフラットオブジェクトは「包み」を外して辿る（無意味なパス要素を作らない）。
- 予算超過の行は捨てて is_truncated を立てる。兄弟要素の走査は続ける。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from intel_notes.classifier import classify, is_ignorable, is_sequence, render_primitive
from intel_notes.cost_model import (
    flat_object_cost,
    flat_object_members,
    join_primitive_array,
    primitive_cost,
)
from intel_notes.defaults import NO_DATA_TEXT, UNKNOWN_SOURCE_NAME
from intel_notes.value_kinds import ValueKind


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlatEntry:
    """平坦化後の1行。members はフラットオブジェクトの場合のみ入る。"""

    path: str
    kind: ValueKind
    value: str
    cost_chars: int
    members: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class SourcePayload:
    """取得済みの1ソース分の入力。"""

    source_name: Optional[str]
    details: Any
    summary_tags: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class SourceItem:
    """平坦化済みの1ソース。ビンパッキングの単位。"""

    source_name: str
    entries: Tuple[FlatEntry, ...]
    total_cost: int
    is_truncated: bool
    summary_tags: Tuple[Any, ...] = ()


@dataclass
class CostAccumulator:
    """1ソース分の累積文字数。"""

    budget: int
    total: int = 0
    truncated: bool = False

    @property
    def exhausted(self) -> bool:
        return self.total >= self.budget

    def admit(self, cost: int) -> bool:
        """加算後の累積が予算内なら加算してTrue。超えるなら打ち切りを記録してFalse。"""
        if self.total + cost > self.budget:
            self.truncated = True
            return False
        self.total += cost
        return True


def join_path(parent: str, key: Any) -> str:
    return f"{parent}.{key}" if parent else str(key)


def _visit(value: Any, path: str, acc: CostAccumulator, out: List[FlatEntry]) -> List[Tuple[Any, str]]:
    """1ノードを処理し、続けて辿る子 (値, パス) を走査順で返す。"""
    kind = classify(value)
    if kind is ValueKind.IGNORABLE:
        return []
    if acc.exhausted:
        # 予算を使い切った後の非空データは表示できない
        acc.truncated = True
        return []

    if kind is ValueKind.PRIMITIVE_ARRAY:
        joined = join_primitive_array(value)
        cost = primitive_cost(joined, path)
        if acc.admit(cost):
            out.append(FlatEntry(path=path, kind=kind, value=joined, cost_chars=cost))
        return []

    if kind is ValueKind.FLAT_OBJECT:
        remaining = [(k, v) for k, v in value.items() if not is_ignorable(v)]
        if len(remaining) == 1:
            key, child = remaining[0]
            return [(child, join_path(path, key))]
        members = flat_object_members(value)
        cost = flat_object_cost(members)
        if acc.admit(cost):
            text = "\n".join(f"{k}: {v}" for k, v in members)
            out.append(FlatEntry(path=path, kind=kind, value=text, cost_chars=cost, members=members))
        return []

    if kind is ValueKind.NESTED:
        if isinstance(value, Mapping):
            return [(child, join_path(path, key)) for key, child in value.items()]
        if is_sequence(value):
            if len(value) > 1:
                return [(child, join_path(path, index)) for index, child in enumerate(value)]
            return [(value[0], path)]

    # プリミティブ（未知のスカラー型も文字列化してここで葉として扱う）
    text = render_primitive(value)
    cost = primitive_cost(text, path)
    if acc.admit(cost):
        out.append(FlatEntry(path=path, kind=ValueKind.PRIMITIVE, value=text, cost_chars=cost))
    return []


def _walk(value: Any, acc: CostAccumulator, out: List[FlatEntry]) -> None:
    """深さ優先（行きがけ順）で辿る。入れ子の深さに依存しないよう明示スタックを使う。"""
    stack: List[Tuple[Any, str]] = [(value, "")]
    while stack:
        current, path = stack.pop()
        children = _visit(current, path, acc, out)
        stack.extend(reversed(children))


def no_data_entry() -> FlatEntry:
    """空ペイロード用の合成行。"""
    return FlatEntry(path="", kind=ValueKind.PRIMITIVE, value=NO_DATA_TEXT, cost_chars=len(NO_DATA_TEXT))


def flatten_value(details: Any, budget: int) -> Tuple[Tuple[FlatEntry, ...], int, bool]:
    """
    ペイロードを平坦化し、(行の列, 累積コスト, 打ち切り有無) を返す。

    ペイロードに表示できる値が1つも無い場合は「データなし」の合成行を1つだけ返す。
    値はあるが1行も予算に収まらなかった場合は、空の列と is_truncated=True を返す。
    """
    if budget <= 0:
        raise ValueError(f"character budget must be positive (got {budget})")

    acc = CostAccumulator(budget=budget)
    entries: List[FlatEntry] = []
    _walk(details, acc, entries)

    if not entries and not acc.truncated:
        entry = no_data_entry()
        return (entry,), entry.cost_chars, acc.truncated
    return tuple(entries), acc.total, acc.truncated


def source_display_name(source_name: Optional[str]) -> str:
    s = str(source_name or "").strip()
    return s or UNKNOWN_SOURCE_NAME


def flatten_source(source: SourcePayload, budget: int) -> SourceItem:
    """1ソースを平坦化して SourceItem を作る。"""
    name = source_display_name(source.source_name)
    entries, total_cost, is_truncated = flatten_value(source.details, budget)
    if is_truncated:
        logger.info("source truncated: %s (budget=%d, kept=%d chars)", name, budget, total_cost)
    logger.debug("source flattened: %s entries=%d cost=%d", name, len(entries), total_cost)
    return SourceItem(
        source_name=name,
        entries=entries,
        total_cost=total_cost,
        is_truncated=is_truncated,
        summary_tags=tuple(source.summary_tags or ()),
    )


def flatten_sources(sources: Sequence[SourcePayload], budget: int) -> List[SourceItem]:
    return [flatten_source(s, budget) for s in sources]
