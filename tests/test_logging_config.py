"""ロギング設定のテスト。"""

from __future__ import annotations

import logging

from intel_notes.logging_config import QUIET_LOGGERS, _AccessPathFilter, _build_handlers, setup_logging


def _access_record(path: str) -> logging.LogRecord:
    return logging.LogRecord(
        "uvicorn.access",
        logging.INFO,
        __file__,
        0,
        '%s - "%s %s HTTP/%s" %d',
        ("127.0.0.1:5000", "GET", path, "1.1", 200),
        None,
    )


def test_access_filter_drops_only_exact_paths():
    f = _AccessPathFilter(["/api/health"])
    assert not f.filter(_access_record("/api/health"))
    assert not f.filter(_access_record("/api/health?verbose=1"))
    assert f.filter(_access_record("/api/cases/case-1/notes"))
    assert f.filter(_access_record("/api/healthcheck"))


def test_access_filter_passes_unrelated_records():
    f = _AccessPathFilter(["/api/health"])
    record = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 0, "plain /api/health", None, None)
    assert f.filter(record)


def test_file_handler_is_rotating_when_enabled(tmp_path):
    handlers = _build_handlers(True, tmp_path / "logs" / "notes.log")
    try:
        assert len(handlers) == 2
        assert (tmp_path / "logs").is_dir()
    finally:
        for h in handlers:
            h.close()
    assert len(_build_handlers(False, tmp_path / "unused.log")) == 1


def test_setup_logging_quiets_library_loggers():
    setup_logging("DEBUG")
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
