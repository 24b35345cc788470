"""
API ルーター群

intel_notes の REST API エンドポイントを定義するルーターモジュール群。

含まれるルーター:
- notes: ノートのプレビュー/投稿/一覧API
"""
