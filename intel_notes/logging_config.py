"""
ロギング設定

ノート組み立て/投稿のログはコンソールへ、必要ならローテーション付きファイルへも出す。
ノートDB（SQLAlchemy）やフォーム解析など、1リクエストごとに大量に出る
ライブラリのログは WARNING 以上に絞る。
"""

from __future__ import annotations

import logging
import pathlib
from logging.handlers import RotatingFileHandler
from typing import Iterable

from intel_notes.defaults import DEFAULT_LOG_FILE_PATH, LOG_FILE_BACKUP_COUNT, LOG_FILE_MAX_BYTES


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# ノートDBのSQL/コネクションプール、multipart の解析ログ、TestClient の httpx
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "multipart",
    "python_multipart",
    "httpx",
    "httpcore",
)


class _AccessPathFilter(logging.Filter):
    """uvicornアクセスログのうち、指定パスへのリクエストを落とす。"""

    def __init__(self, paths: Iterable[str]) -> None:
        super().__init__()
        self._paths = frozenset(paths)

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        # uvicorn.access の args は (client, method, path, http_version, status)
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3 and isinstance(args[2], str):
            return args[2].split("?", 1)[0] not in self._paths
        return True


def suppress_uvicorn_access_log_paths(*paths: str) -> None:
    """ヘルスチェック等、ポーリングされるパスをアクセスログから外す。"""
    if not paths:
        return
    logging.getLogger("uvicorn.access").addFilter(_AccessPathFilter(paths))


def _build_handlers(log_file_enabled: bool, log_file_path: str | pathlib.Path) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file_enabled:
        log_path = pathlib.Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_path,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    return handlers


def setup_logging(
    level: str = "INFO",
    *,
    log_file_enabled: bool = False,
    log_file_path: str | pathlib.Path = DEFAULT_LOG_FILE_PATH,
) -> None:
    """ルートロガーを初期化し、QUIET_LOGGERS を WARNING に絞る。"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=_build_handlers(log_file_enabled, log_file_path),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
