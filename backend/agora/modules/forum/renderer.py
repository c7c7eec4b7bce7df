"""
Post HTML Renderer - HTML fragments for posts pushed to clients.

Realtime updates (new post, edit, delete) swap these fragments into an open
discussion page, so they must match the server-rendered post markup.
"""

from dataclasses import dataclass
from datetime import datetime

from agora.core.config import settings
from agora.modules.markup import MarkupService, get_markup_service
from agora.modules.markup.escaper import escape


@dataclass(frozen=True)
class RenderablePost:
    """Post fields needed for rendering."""

    public_id: str
    content: str
    created_at: datetime
    edited_at: datetime | None = None
    is_first_post: bool = False


class PostHtmlRenderer:
    """
    Renders posts to HTML fragments.

    Usage:
        renderer = PostHtmlRenderer()
        html = renderer.render_post_card(post)
    """

    def __init__(
        self,
        markup: MarkupService | None = None,
        date_format: str | None = None,
    ) -> None:
        """
        Initialize renderer.

        Args:
            markup: Markup service (default shared instance)
            date_format: strftime format for timestamps (default from settings)
        """
        self.markup = markup or get_markup_service()
        self.date_format = date_format or settings.forum_date_format

    def _posted_line(self, post: RenderablePost) -> str:
        edited = '<span class="ml-2">(edited)</span>' if post.edited_at else ""
        posted_at = escape(post.created_at.strftime(self.date_format))
        return f'<div class="text-sm opacity-70 mt-2">Posted {posted_at}{edited}</div>'

    def render_post_content(self, post: RenderablePost) -> str:
        """Render post body and timestamp line (used for in-place edits)."""
        body = self.markup.to_html(post.content)
        return (
            f'<div class="prose prose-sm max-w-none">{body}</div>'
            f"{self._posted_line(post)}"
        )

    def render_post_card(self, post: RenderablePost) -> str:
        """Render the full post card (used when a new post arrives)."""
        post_id = escape(post.public_id)
        badge = (
            '<div class="badge badge-info mb-2">Original Post</div>'
            if post.is_first_post
            else ""
        )
        return (
            f'<div id="post-{post_id}" class="card bg-base-100 shadow-md mb-4">'
            f'<div class="card-body">'
            f"{badge}"
            f'<div id="post-content-{post_id}">{self.render_post_content(post)}</div>'
            f"</div>"
            f"</div>"
        )

    def render_tombstone(self) -> str:
        """Placeholder shown in place of a deleted post."""
        return (
            '<div class="card bg-base-100 shadow-md mb-4">'
            '<div class="card-body">'
            '<p class="text-base-content/50 italic">[This post has been deleted]</p>'
            "</div>"
            "</div>"
        )
