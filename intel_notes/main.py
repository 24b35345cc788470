"""FastAPI エントリポイント。"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from intel_notes.api import notes
from intel_notes.config import (
    Config,
    ConfigStore,
    get_token,
    load_config,
    set_global_config_store,
    validate_config,
)
from intel_notes.logging_config import setup_logging, suppress_uvicorn_access_log_paths
from intel_notes.notes_db import init_notes_db
from intel_notes.paths import get_default_config_file_path, resolve_path_under_app_root


security = HTTPBearer()
logger = logging.getLogger(__name__)


def verify_token(credentials: HTTPAuthorizationCredentials = Depends(security)) -> str:
    """Bearerトークンを検証し、OKならトークン文字列を返す。"""
    token = get_token()
    if credentials.credentials != token:
        logger.warning("Authentication failed: invalid token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid authentication token")
    return credentials.credentials


def create_app(toml_config: Config | None = None, *, notes_db_url: str | None = None) -> FastAPI:
    """アプリ生成と初期化（設定→ロギング→ノートDB→ルータ登録）をまとめて行う。"""

    # 1. TOML設定読み込み（引数で渡された場合はそれを使う）
    config = validate_config(toml_config) if toml_config is not None else load_config(get_default_config_file_path())
    setup_logging(
        config.log_level,
        log_file_enabled=config.log_file_enabled,
        log_file_path=resolve_path_under_app_root(config.log_file_path),
    )
    suppress_uvicorn_access_log_paths("/api/health")
    set_global_config_store(ConfigStore(config))

    # 2. ノートDB初期化
    init_notes_db(notes_db_url)

    # 3. FastAPIアプリ作成
    app = FastAPI(title="IntelNotes API")
    app.include_router(notes.router, dependencies=[Depends(verify_token)], prefix="/api")

    @app.get("/api/health")
    async def health():
        """稼働確認用のヘルスチェック。"""
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        """ルートの簡易応答（動作確認用）。"""
        return {"message": "IntelNotes API is running"}

    logger.info("app created (character_budget=%d)", config.character_budget)
    return app
