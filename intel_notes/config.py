"""設定読み込みとランタイム設定ストア。"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass

import tomli

from intel_notes.defaults import DEFAULT_CHARACTER_BUDGET, DEFAULT_LOG_FILE_PATH, DEFAULT_NOTE_TEXT_LIMIT


@dataclass
class Config:
    """TOML起動設定（起動時のみ使用、変更不可）。"""

    token: str
    log_level: str
    character_budget: int = DEFAULT_CHARACTER_BUDGET
    note_text_limit: int = DEFAULT_NOTE_TEXT_LIMIT
    log_file_enabled: bool = False
    log_file_path: str = DEFAULT_LOG_FILE_PATH


class ConfigStore:
    """ランタイム設定ストア。"""

    def __init__(self, toml_config: Config) -> None:
        self._toml = toml_config

    @property
    def config(self) -> Config:
        """起動時に読み込んだTOML設定を返す。"""
        return self._toml

    @property
    def character_budget(self) -> int:
        """1ソースあたりの文字数予算（= ノート容量）。"""
        return self._toml.character_budget

    @property
    def note_text_limit(self) -> int:
        """投稿するノート本文の上限文字数。"""
        return self._toml.note_text_limit


_ALLOWED_KEYS = {
    "token",
    "log_level",
    "character_budget",
    "note_text_limit",
    "log_file_enabled",
    "log_file_path",
}


def _require(config_dict: dict, key: str) -> str:
    if key not in config_dict or config_dict[key] in (None, ""):
        raise ValueError(f"config key '{key}' is required")
    return config_dict[key]


def _positive_int(config_dict: dict, key: str, default: int) -> int:
    value = config_dict.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"config key '{key}' must be a positive integer (got {value!r})")
    return value


def validate_config(config: Config) -> Config:
    """コード上で組み立てたConfigも同じ基準で検証する。"""
    _positive_int({"character_budget": config.character_budget}, "character_budget", DEFAULT_CHARACTER_BUDGET)
    _positive_int({"note_text_limit": config.note_text_limit}, "note_text_limit", DEFAULT_NOTE_TEXT_LIMIT)
    return config


def load_config(path: str | pathlib.Path = "config/setting.toml") -> Config:
    """TOML設定を読み込む。"""
    config_path = pathlib.Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    with config_path.open("rb") as f:
        data = tomli.load(f)

    unknown_keys = sorted(set(data.keys()) - _ALLOWED_KEYS)
    if unknown_keys:
        keys = ", ".join(repr(k) for k in unknown_keys)
        allowed = ", ".join(repr(k) for k in sorted(_ALLOWED_KEYS))
        raise ValueError(f"unknown config key(s): {keys} (allowed: {allowed})")

    return Config(
        token=_require(data, "token"),
        log_level=_require(data, "log_level"),
        character_budget=_positive_int(data, "character_budget", DEFAULT_CHARACTER_BUDGET),
        note_text_limit=_positive_int(data, "note_text_limit", DEFAULT_NOTE_TEXT_LIMIT),
        log_file_enabled=bool(data.get("log_file_enabled", False)),
        log_file_path=str(data.get("log_file_path") or DEFAULT_LOG_FILE_PATH),
    )


_config_store: ConfigStore | None = None


def set_global_config_store(store: ConfigStore) -> None:
    """グローバルConfigStoreを設定。"""
    global _config_store
    _config_store = store


def get_config_store() -> ConfigStore:
    """グローバルConfigStoreを取得。"""
    global _config_store
    if _config_store is None:
        raise RuntimeError("ConfigStore not initialized")
    return _config_store


def get_token() -> str:
    """API認証用トークンを返す。"""
    return get_config_store().config.token
