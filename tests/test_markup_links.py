"""Tests for link target validation"""

import pytest

from agora.modules.markup.links import is_allowed, resolve


@pytest.mark.parametrize(
    "href",
    [
        "http://google.com",
        "https://example.com/path?q=1#frag",
        "mailto:test@example.com",
        "/some/path",
        "/",
        "HTTPS://Example.com",
        "MailTo:someone@example.com",
    ],
)
def test_allowed_targets(href):
    """Test allowlisted schemes and same-origin paths are accepted"""
    assert resolve(href) == href
    assert is_allowed(href)


@pytest.mark.parametrize(
    "href",
    [
        "javascript:alert(1)",
        "JavaScript:alert(1)",
        "data:text/html,<script>alert(1)</script>",
        "vbscript:msgbox(1)",
        "file:///etc/passwd",
        "//example.com/path",
        "/\\example.com",
        "ftp://example.com",
        "example.com",
        "java\tscript:alert(1)",
        "https://exa mple.com",
        "",
        "   ",
    ],
)
def test_rejected_targets(href):
    """Test everything outside the allowlist is rejected"""
    assert resolve(href) is None
    assert not is_allowed(href)


def test_surrounding_whitespace_is_trimmed():
    """Test surrounding whitespace does not affect validation"""
    assert resolve("  https://example.com ") == "https://example.com"
    assert resolve(" javascript:alert(1)") is None
