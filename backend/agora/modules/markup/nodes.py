"""
Markup syntax tree.

Blocks and inline spans are closed unions of frozen dataclasses. Consumers
dispatch on the concrete type and treat anything else as a programming error.
"""

from dataclasses import dataclass
from typing import Union

# ==================== Inline spans ====================


@dataclass(frozen=True)
class Text:
    """Plain text, escaped on output."""

    raw: str


@dataclass(frozen=True)
class Bold:
    """**strong** text."""

    children: tuple["InlineSpan", ...]


@dataclass(frozen=True)
class Italic:
    """*emphasised* text."""

    children: tuple["InlineSpan", ...]


@dataclass(frozen=True)
class Code:
    """`inline code`, never formatted further."""

    raw: str


@dataclass(frozen=True)
class Link:
    """
    [text](href) link.

    href is None when the target failed the allowlist; raw keeps the original
    bracket syntax so it can be shown as literal text instead.
    """

    text: str
    href: str | None
    raw: str


InlineSpan = Union[Text, Bold, Italic, Code, Link]


# ==================== Blocks ====================


@dataclass(frozen=True)
class Paragraph:
    lines: tuple[str, ...]


@dataclass(frozen=True)
class CodeBlock:
    content: str


@dataclass(frozen=True)
class Blockquote:
    lines: tuple[str, ...]


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    items: tuple[str, ...]


Block = Union[Paragraph, CodeBlock, Blockquote, ListBlock]
