"""
Markup Module - lightweight post markup to safe HTML.

Features:
- Paragraphs, code fences, blockquotes, ordered/unordered lists
- Bold, italic, inline code and allowlisted links
- Plain text extraction for previews and search
- Everything user-authored is HTML-escaped
"""

from agora.modules.markup.service import (
    MarkupService,
    get_markup_service,
    to_html,
    to_plain_text,
)

__all__ = [
    "MarkupService",
    "get_markup_service",
    "to_html",
    "to_plain_text",
]
