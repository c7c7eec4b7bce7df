"""
Forum Module - Community discussions.

Features:
- Post fragments for realtime delivery (new, edited, deleted posts)
- Post bodies rendered through the markup engine
"""

from agora.modules.forum.renderer import PostHtmlRenderer, RenderablePost

__all__ = ["PostHtmlRenderer", "RenderablePost"]
