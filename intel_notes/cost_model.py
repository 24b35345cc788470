"""
文字数コストの計算

フラット化した1行の「描画後の文字数」を見積もる。
平坦化時の打ち切り判定と、ビンパッキング時の重みの両方にこの値を使う。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Tuple

from intel_notes.classifier import is_ignorable, is_sequence, render_primitive

# "key: value" の ": " と表の改行ぶん
FLAT_OBJECT_MEMBER_OVERHEAD = 3


def join_primitive_array(values: Any) -> str:
    """無視対象を除いた要素を ", " で連結する。"""
    return ", ".join(render_primitive(v) for v in values if not is_ignorable(v))


def render_member(value: Any) -> str:
    """フラットオブジェクトのメンバー値を文字列化する。"""
    if is_sequence(value):
        return join_primitive_array(value)
    return render_primitive(value)


def flat_object_members(value: Mapping[Any, Any]) -> Tuple[Tuple[str, str], ...]:
    """無視対象キーを落とし、(key, 表示値) の組を元の順序で返す。"""
    return tuple((str(k), render_member(v)) for k, v in value.items() if not is_ignorable(v))


def primitive_cost(text: str, path: str) -> int:
    return len(text) + len(path)


def primitive_array_cost(value: Any, path: str) -> int:
    return len(join_primitive_array(value)) + len(path)


def flat_object_cost(members: Tuple[Tuple[str, str], ...]) -> int:
    """flat_object_members() 済みのメンバー列のコスト。"""
    return sum(len(v) + len(k) + FLAT_OBJECT_MEMBER_OVERHEAD for k, v in members)
