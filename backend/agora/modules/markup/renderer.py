"""
Renderer - turns segmented blocks into an HTML fragment.

Tag vocabulary is fixed: p, br, pre, code, blockquote, ul, ol, li, strong,
em and a. Everything else in the output is escaped user text.
"""

from loguru import logger

from agora.modules.markup.escaper import escape
from agora.modules.markup.inline import format_inline
from agora.modules.markup.nodes import Block, Blockquote, CodeBlock, ListBlock, Paragraph

LINE_BREAK = "<br>"


def _lines_html(lines: tuple[str, ...]) -> str:
    return LINE_BREAK.join(format_inline(line) for line in lines)


def render_block(block: Block) -> str:
    """Render a single block."""
    if isinstance(block, Paragraph):
        return f"<p>{_lines_html(block.lines)}</p>"

    if isinstance(block, CodeBlock):
        return f"<pre><code>{escape(block.content)}</code></pre>"

    if isinstance(block, Blockquote):
        return f"<blockquote>{_lines_html(block.lines)}</blockquote>"

    if isinstance(block, ListBlock):
        tag = "ol" if block.ordered else "ul"
        items = "".join(f"<li>{format_inline(item)}</li>" for item in block.items)
        return f"<{tag}>{items}</{tag}>"

    raise TypeError(f"Unknown block: {block!r}")


def _fallback(block: Block) -> str:
    """Escaped source text of a block, used when formatting it failed."""
    if isinstance(block, CodeBlock):
        lines: tuple[str, ...] = tuple(block.content.split("\n"))
    elif isinstance(block, ListBlock):
        lines = block.items
    elif isinstance(block, (Paragraph, Blockquote)):
        lines = block.lines
    else:
        lines = ()
    return f"<p>{LINE_BREAK.join(escape(line) for line in lines)}</p>"


def render(blocks: list[Block]) -> str:
    """
    Render blocks to HTML.

    A block that fails to render is logged and replaced by its escaped text.
    """
    parts: list[str] = []
    for block in blocks:
        try:
            parts.append(render_block(block))
        except Exception:
            logger.exception(f"Markup block failed to render: {type(block).__name__}")
            parts.append(_fallback(block))
    return "".join(parts)
