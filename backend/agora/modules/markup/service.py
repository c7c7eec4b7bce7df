"""
Markup Service - public entry point of the markup engine.
"""

from functools import lru_cache

from loguru import logger

from agora.core.config import settings
from agora.modules.markup.blocks import normalize_source, segment
from agora.modules.markup.escaper import escape
from agora.modules.markup.plain_text import to_plain_text as extract_plain_text
from agora.modules.markup.renderer import LINE_BREAK, render

ELLIPSIS = "…"


class MarkupService:
    """
    Converts user-authored markup to safe HTML and plain text.

    The service holds no state; one instance can be shared by any number
    of concurrent callers.

    Usage:
        markup = get_markup_service()
        html = markup.to_html("**hello** [docs](https://example.com)")
        preview = markup.snippet(post.content, max_length=120)
    """

    def to_html(self, markup: str | None) -> str:
        """
        Render markup to an HTML fragment.

        Args:
            markup: Raw, untrusted markup (None is treated as empty)

        Returns:
            HTML fragment without document-level tags. Never raises.
        """
        if not markup:
            return ""
        try:
            return render(segment(markup))
        except Exception:
            logger.exception("Markup rendering failed, falling back to escaped text")
            escaped = escape(normalize_source(markup)).replace("\n", LINE_BREAK)
            return f"<p>{escaped}</p>"

    def to_plain_text(self, markup: str | None) -> str:
        """
        Extract marker-free text for previews and search indexing.

        Returns:
            Plain (unescaped) text. Never raises.
        """
        if not markup:
            return ""
        try:
            return extract_plain_text(markup)
        except Exception:
            logger.exception("Plain text extraction failed, falling back to raw text")
            return normalize_source(markup).strip()

    def snippet(self, markup: str | None, max_length: int | None = None) -> str:
        """
        Build a short single-line preview of a post.

        Args:
            markup: Raw markup
            max_length: Max characters including the ellipsis
                (default from settings)

        Returns:
            Whitespace-collapsed plain text, cut at a word boundary when
            longer than max_length
        """
        limit = max_length or settings.markup_snippet_length
        text = " ".join(self.to_plain_text(markup).split())
        if len(text) <= limit:
            return text

        cut = text[: max(limit - len(ELLIPSIS), 0)]
        boundary = cut.rfind(" ")
        if boundary > len(cut) // 2:
            cut = cut[:boundary]
        return cut.rstrip() + ELLIPSIS


@lru_cache
def get_markup_service() -> MarkupService:
    """Get shared markup service instance."""
    return MarkupService()


def to_html(markup: str | None) -> str:
    """Render markup to safe HTML."""
    return get_markup_service().to_html(markup)


def to_plain_text(markup: str | None) -> str:
    """Extract plain text from markup."""
    return get_markup_service().to_plain_text(markup)
