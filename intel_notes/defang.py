"""エンティティ表示値のデファング（クリック/解決されない表記への置換）。"""

from __future__ import annotations

import re
from dataclasses import dataclass


_HTTP_PREFIX_RE = re.compile(r"^http", re.IGNORECASE)


def defang_dots(value: str) -> str:
    return value.replace(".", "[.]")


def defang_url(value: str) -> str:
    """先頭の http を hxxp に、ドットを [.] にする。"""
    return defang_dots(_HTTP_PREFIX_RE.sub("hxxp", value.strip(), count=1))


@dataclass(frozen=True)
class EntityLabel:
    """ノート見出しに載せるエンティティと、その表示カテゴリ。"""

    value: str
    is_ip: bool = False
    is_domain: bool = False
    is_url: bool = False

    def defanged(self) -> str:
        value = (self.value or "").strip()
        if self.is_url:
            return defang_url(value)
        if self.is_ip or self.is_domain:
            return defang_dots(value)
        return value
