"""デファングのテスト。"""

from __future__ import annotations

from intel_notes.defang import EntityLabel


def test_ip_dots_are_bracketed():
    assert EntityLabel("8.8.8.8", is_ip=True).defanged() == "8[.]8[.]8[.]8"


def test_domain_dots_are_bracketed():
    assert EntityLabel("evil.example.com", is_domain=True).defanged() == "evil[.]example[.]com"


def test_url_scheme_and_dots():
    assert EntityLabel("https://evil.example.com/a.php", is_url=True).defanged() == "hxxps://evil[.]example[.]com/a[.]php"
    assert EntityLabel("HTTP://x.io", is_url=True).defanged() == "hxxp://x[.]io"


def test_other_entities_unchanged():
    assert EntityLabel("d41d8cd98f00b204e9800998ecf8427e").defanged() == "d41d8cd98f00b204e9800998ecf8427e"
    assert EntityLabel("user@example.com").defanged() == "user@example.com"
