"""
Link target validation.

Only a fixed allowlist of schemes can become an anchor:
- http:// and https://
- mailto:
- same-origin paths starting with a single "/"
"""

from loguru import logger

ALLOWED_PREFIXES: tuple[str, ...] = ("http://", "https://", "mailto:")


def resolve(href: str) -> str | None:
    """
    Validate a link target against the scheme allowlist.

    Args:
        href: Raw target from the markup, e.g. "https://example.com"

    Returns:
        The trimmed href if it may be rendered as an anchor, otherwise None
    """
    candidate = href.strip()
    if not candidate:
        return None

    # Browsers drop embedded tabs and newlines ("java\tscript:")
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in candidate):
        logger.debug(f"Rejected link target with control characters: {candidate!r}")
        return None

    lowered = candidate.lower()
    if lowered.startswith(ALLOWED_PREFIXES):
        return candidate

    # "//host" and "/\host" are both protocol-relative in browsers
    if candidate.startswith("/") and not candidate.startswith(("//", "/\\")):
        return candidate

    logger.debug(f"Rejected link target: {candidate!r}")
    return None


def is_allowed(href: str) -> bool:
    """Check whether an href passes the allowlist."""
    return resolve(href) is not None
