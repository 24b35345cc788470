"""逐次投稿のテスト。"""

from __future__ import annotations

import logging

import pytest

from intel_notes import content_blocks as cb
from intel_notes.note_assembler import Chunk
from intel_notes.submission import chunk_stats, submit_chunks, truncate_if_needed


def _chunk(label: str) -> Chunk:
    return Chunk(position_label=label, leading_comment=None, body=(cb.text_paragraph(f"body {label}"),))


def test_chunks_are_submitted_one_at_a_time_in_order():
    in_flight = []
    seen = []

    def submit(chunk: Chunk) -> str:
        in_flight.append(chunk)
        assert len(in_flight) == 1
        seen.append(chunk.position_label)
        in_flight.pop()
        return f"note-{chunk.position_label}"

    results = submit_chunks([_chunk("2 of 2"), _chunk("1 of 2")], submit)
    assert seen == ["2 of 2", "1 of 2"]
    assert results == ["note-2 of 2", "note-1 of 2"]


def test_failure_stops_and_keeps_earlier_submissions():
    stored = []

    def submit(chunk: Chunk) -> None:
        if chunk.position_label == "2 of 3":
            raise RuntimeError("remote rejected note")
        stored.append(chunk.position_label)

    with pytest.raises(RuntimeError):
        submit_chunks([_chunk("3 of 3"), _chunk("2 of 3"), _chunk("1 of 3")], submit)
    assert stored == ["3 of 3"]


def test_truncate_if_needed():
    assert truncate_if_needed("abcdef", 10) == "abcdef"
    assert truncate_if_needed("abcdefghijkl", 10) == "abcdefg..."


def test_chunk_stats():
    stats = chunk_stats(_chunk("1 of 1"))
    assert stats["label"] == "1 of 1"
    assert stats["text_node_length"] == len("body 1 of 1")
    assert stats["text_bytes"] == len("body 1 of 1")


def test_chunk_stats_skipped_unless_debug(monkeypatch, caplog):
    """DEBUG でなければ統計を計算しない"""
    from intel_notes import submission

    calls = []

    def counting_stats(chunk):
        calls.append(chunk.position_label)
        return {"label": chunk.position_label}

    monkeypatch.setattr(submission, "chunk_stats", counting_stats)

    caplog.set_level(logging.INFO, logger="intel_notes.submission")
    submit_chunks([_chunk("2 of 2"), _chunk("1 of 2")], lambda c: None)
    assert calls == []

    caplog.set_level(logging.DEBUG, logger="intel_notes.submission")
    submit_chunks([_chunk("2 of 2"), _chunk("1 of 2")], lambda c: None)
    assert calls == ["2 of 2", "1 of 2"]
