"""値分類のEnum定義。"""

from __future__ import annotations

from enum import Enum


class ValueKind(str, Enum):
    """JSON値の構造分類（閉じた集合）。"""
    IGNORABLE = "ignorable"
    PRIMITIVE = "primitive"
    PRIMITIVE_ARRAY = "primitive_array"
    FLAT_OBJECT = "flat_object"
    NESTED = "nested"
