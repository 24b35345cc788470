"""値分類のテスト。"""

from __future__ import annotations

import copy

import pytest

from intel_notes.classifier import classify, is_ignorable, render_primitive
from intel_notes.value_kinds import ValueKind


@pytest.mark.parametrize(
    "value",
    [
        None,
        [],
        {},
        "",
        "   ",
        "data:image/png;base64,iVBORw0KGgo=",
        "#fff",
        "#A0B1C2",
        [None, "", []],
        {"x": None, "y": []},
    ],
)
def test_ignorable_values(value):
    assert is_ignorable(value)
    assert classify(value) is ValueKind.IGNORABLE


@pytest.mark.parametrize("value", ["#ffff", "#12345g", "data:text/plain;base64,abc", 0, False])
def test_not_ignorable(value):
    assert not is_ignorable(value)


@pytest.mark.parametrize("value", ["abc", 1, 2.5, True, 0])
def test_primitive(value):
    assert classify(value) is ValueKind.PRIMITIVE


def test_primitive_array_allows_ignorable_elements():
    assert classify(["x", "y", ""]) is ValueKind.PRIMITIVE_ARRAY
    assert classify([1, None, True]) is ValueKind.PRIMITIVE_ARRAY


def test_array_with_mapping_is_nested():
    assert classify([1, {"a": 1}]) is ValueKind.NESTED
    assert classify([[1, 2], [3]]) is ValueKind.NESTED


def test_flat_object():
    assert classify({"a": 1, "b": ["x", "y"], "c": None}) is ValueKind.FLAT_OBJECT


def test_mapping_with_nested_member_is_nested():
    assert classify({"a": 1, "b": {"c": 2}}) is ValueKind.NESTED
    assert classify({"a": [{"b": 1}]}) is ValueKind.NESTED


def test_classification_depends_only_on_shape():
    value = {"a": [1, 2], "b": {"c": ["x", None], "d": "#fff"}, "e": [{"f": 1}]}
    first = classify(value)
    assert classify(copy.deepcopy(value)) is first
    assert classify(value) is first
    assert value == {"a": [1, 2], "b": {"c": ["x", None], "d": "#fff"}, "e": [{"f": 1}]}


def test_render_primitive():
    assert render_primitive(True) == "true"
    assert render_primitive(False) == "false"
    assert render_primitive(3.0) == "3"
    assert render_primitive(3.5) == "3.5"
    assert render_primitive(42) == "42"
    assert render_primitive("x") == "x"
    assert render_primitive(float("nan")) == "NaN"
    assert render_primitive(float("inf")) == "Infinity"
    assert render_primitive(float("-inf")) == "-Infinity"


def test_deeply_nested_values_do_not_hit_recursion_limit():
    empty = None
    text = "x"
    for _ in range(3000):
        empty = [empty]
        text = [text]
    assert is_ignorable(empty)
    assert classify(empty) is ValueKind.IGNORABLE
    assert not is_ignorable(text)
    assert classify(text) is ValueKind.NESTED
