"""
HTML escaping for user-authored text.
"""

import html


def escape(text: str) -> str:
    """Encode & < > " ' so the text is inert inside element content and attributes."""
    return html.escape(text, quote=True)
