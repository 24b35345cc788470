"""
アプリケーションのデフォルト値

設定ファイルで省略された場合に適用される値と、
ノート組み立て時に使う固定文言を定義する。
"""

from __future__ import annotations

# 1ソースあたりの文字数予算（= 1ノートあたりの容量）
DEFAULT_CHARACTER_BUDGET = 60000

# 投稿先ノート本文の上限文字数
DEFAULT_NOTE_TEXT_LIMIT = 65000

NO_DATA_TEXT = "No integration data available"
UNKNOWN_SOURCE_NAME = "Unknown Integration"
NO_SUMMARY_TAGS_TEXT = "No summary tags available"
TAG_UNAVAILABLE_TEXT = "Tag unavailable"

# フラットオブジェクトのキー表示色
FLAT_OBJECT_KEY_COLOR = "#97a0af"

# ファイルログ（config の log_file_path 省略時、アプリルート相対）
DEFAULT_LOG_FILE_PATH = "logs/intel_notes.log"
LOG_FILE_MAX_BYTES = 2_000_000
LOG_FILE_BACKUP_COUNT = 3
