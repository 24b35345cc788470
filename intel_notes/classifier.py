"""
JSON値の構造分類

任意のJSON風の値を、無視/プリミティブ/プリミティブ配列/フラットオブジェクト/ネスト
のいずれかに分類する。分類は値の形だけで決まる純粋関数で、例外は投げない。
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from intel_notes.value_kinds import ValueKind


_BASE64_IMAGE_RE = re.compile(r"^data:image/[a-zA-Z]*;base64,")
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")


def is_sequence(value: Any) -> bool:
    """文字列/バイト列以外のシーケンスかどうか。"""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_primitive(value: Any) -> bool:
    """表示上プリミティブとして扱う型かどうか（bool/int/float/str）。"""
    return isinstance(value, (bool, int, float, str))


def _is_ignorable_scalar(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return True
        return bool(_BASE64_IMAGE_RE.match(s) or _HEX_COLOR_RE.match(s))
    return False


def is_ignorable(value: Any) -> bool:
    """
    表示する価値のない値かどうかを判定する。

    None、空白のみの文字列、base64画像のdata URI、16進カラー文字列、
    および全要素（全メンバー）が無視対象の配列/オブジェクトが該当する。
    """
    # 入れ子の深さに依存しないよう、再帰せず明示スタックで辿る
    stack = [value]
    while stack:
        current = stack.pop()
        if isinstance(current, Mapping):
            stack.extend(current.values())
        elif is_sequence(current):
            stack.extend(current)
        elif not _is_ignorable_scalar(current):
            return False
    return True


def _is_primitive_array(value: Any) -> bool:
    return is_sequence(value) and all(is_ignorable(v) or is_primitive(v) for v in value)


def _is_flat_member(value: Any) -> bool:
    return is_ignorable(value) or is_primitive(value) or _is_primitive_array(value)


def classify(value: Any) -> ValueKind:
    """値を5分類のいずれかに振り分ける。"""
    if is_ignorable(value):
        return ValueKind.IGNORABLE
    if is_primitive(value):
        return ValueKind.PRIMITIVE
    if _is_primitive_array(value):
        return ValueKind.PRIMITIVE_ARRAY
    if isinstance(value, Mapping) and all(_is_flat_member(v) for v in value.values()):
        return ValueKind.FLAT_OBJECT
    return ValueKind.NESTED


def render_primitive(value: Any) -> str:
    """プリミティブ値を表示用の文字列にする。"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)
