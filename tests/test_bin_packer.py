"""ビンパッキングのテスト。"""

from __future__ import annotations

import random

import pytest

from intel_notes.bin_packer import effective_capacity, first_bin_capacity, pack_items
from intel_notes.flatten import SourceItem


def _item(name: str, cost: int) -> SourceItem:
    return SourceItem(source_name=name, entries=(), total_cost=cost, is_truncated=False)


def _names(bins):
    return [[it.source_name for it in b.items] for b in bins]


def test_first_fit_descending_with_reduced_first_bin():
    items = [_item("a", 50000), _item("b", 40000), _item("c", 5000)]
    bins = pack_items(items, 55000, 60000)
    # c は 50000 + 5000 = 55000 でビン0にちょうど収まる
    assert _names(bins) == [["a", "c"], ["b"]]
    assert [b.total_cost for b in bins] == [55000, 40000]


def test_reduced_first_bin_pushes_item_to_next_bin():
    items = [_item("a", 50000), _item("b", 40000), _item("c", 6000)]
    bins = pack_items(items, 55000, 60000)
    assert _names(bins) == [["a"], ["b", "c"]]


def test_ties_keep_input_order():
    items = [_item("a", 10), _item("b", 30), _item("c", 10), _item("d", 30)]
    bins = pack_items(items, 30, 30)
    assert _names(bins) == [["b"], ["d"], ["a", "c"]]


def test_oversized_item_gets_its_own_bin():
    bins = pack_items([_item("small", 10), _item("huge", 500)], 100, 100)
    assert _names(bins) == [["huge"], ["small"]]


def test_capacity_and_conservation_invariants():
    rng = random.Random(7)
    items = [_item(f"s{i}", rng.randint(1, 120)) for i in range(40)]
    bins = pack_items(items, 70, 100)

    packed = [it for b in bins for it in b.items]
    assert sorted(id(it) for it in packed) == sorted(id(it) for it in items)

    for index, b in enumerate(bins):
        assert b.total_cost == sum(it.total_cost for it in b.items)
        if len(b.items) == 1 and b.items[0].total_cost > effective_capacity(index, 70, 100):
            continue
        assert b.total_cost <= effective_capacity(index, 70, 100)


def test_empty_input_gives_no_bins():
    assert pack_items([], 10, 10) == []


def test_non_positive_capacity_is_rejected():
    with pytest.raises(ValueError):
        pack_items([_item("a", 1)], 0, 0)


def test_first_bin_capacity_reserves_comment_length():
    assert first_bin_capacity(60000, "hello") == 59995
    assert first_bin_capacity(60000, None) == 60000
    assert first_bin_capacity(60000, "   ") == 60000
    assert first_bin_capacity(3, "too long") == 0
