"""
Plain Text Extractor - markup to marker-free text for snippets and search.

Uses the same block and inline structure as the HTML renderer, but emits the
bare text: no tags, no escaping, link targets dropped.
"""

from agora.modules.markup.blocks import segment
from agora.modules.markup.inline import parse_inline
from agora.modules.markup.nodes import (
    Block,
    Blockquote,
    Bold,
    Code,
    CodeBlock,
    InlineSpan,
    Italic,
    Link,
    ListBlock,
    Paragraph,
    Text,
)

BLOCK_SEPARATOR = "\n\n"


def spans_text(spans: list[InlineSpan] | tuple[InlineSpan, ...]) -> str:
    """Concatenate the visible text of inline spans."""
    out: list[str] = []
    for span in spans:
        if isinstance(span, (Text, Code)):
            out.append(span.raw)
        elif isinstance(span, (Bold, Italic)):
            out.append(spans_text(span.children))
        elif isinstance(span, Link):
            out.append(span.text)
        else:
            raise TypeError(f"Unknown inline span: {span!r}")
    return "".join(out)


def block_text(block: Block) -> str:
    """Plain text of one block; lines are kept on separate lines."""
    if isinstance(block, CodeBlock):
        return block.content
    if isinstance(block, (Paragraph, Blockquote)):
        lines = block.lines
    elif isinstance(block, ListBlock):
        lines = block.items
    else:
        raise TypeError(f"Unknown block: {block!r}")
    return "\n".join(spans_text(parse_inline(line)) for line in lines)


def to_plain_text(source: str | None) -> str:
    """Extract plain text from markup. Empty or None input gives ""."""
    parts = (block_text(block) for block in segment(source))
    return BLOCK_SEPARATOR.join(part for part in parts if part.strip()).strip()
