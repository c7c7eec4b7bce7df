"""
Block Segmenter - splits markup into paragraphs, code fences, quotes and lists.

Works line by line as a small state machine. Fences capture their lines
verbatim; every other block keeps its lines raw for the inline formatter.
"""

import re
from enum import Enum

from agora.modules.markup.nodes import Block, Blockquote, CodeBlock, ListBlock, Paragraph

FENCE = "```"

_ORDERED_ITEM_RE = re.compile(r"(\d+)\.\s+(\S.*)")
_INFO_STRING_RE = re.compile(r"[\w+.#-]+")


class SegmenterState(str, Enum):
    """Segmenter states."""

    SCANNING_BLOCK_START = "scanning_block_start"
    IN_CODE_BLOCK = "in_code_block"
    IN_BLOCKQUOTE_RUN = "in_blockquote_run"
    IN_LIST_RUN = "in_list_run"
    IN_PARAGRAPH = "in_paragraph"


def normalize_source(source: str | None) -> str:
    """Unify line endings and drop NUL characters from raw markup."""
    if not source:
        return ""
    return source.replace("\r\n", "\n").replace("\r", "\n").replace("\x00", "\ufffd")


# ==================== Line classification ====================


def is_fence(line: str) -> bool:
    return line.lstrip().startswith(FENCE)


def is_closing_fence(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= 3 and stripped == "`" * len(stripped)


def split_fence_line(line: str) -> tuple[str | None, str]:
    """
    Split a line that starts with a fence.

    Returns:
        (code, rest) for a one-line ```code``` span, rest being the text after
        its closing fence; (None, text) when the line only opens a fence and
        text follows the opening backticks
    """
    body = line.strip().lstrip("`")
    close = body.find(FENCE)
    if close > 0:
        return body[:close], body[close:].lstrip("`")
    return None, body.strip()


def is_info_string(text: str) -> bool:
    """Whether text after an opening fence is a language tag like "python"."""
    return _INFO_STRING_RE.fullmatch(text) is not None

def quote_text(line: str) -> str | None:
    """Text of a "> quoted" line, or None if the line is not quoted."""
    stripped = line.lstrip()
    if not stripped.startswith(">"):
        return None
    text = stripped[1:]
    return text[1:] if text.startswith(" ") else text


def list_item(line: str) -> tuple[bool, str] | None:
    """
    Parse a list item line.

    Returns:
        (ordered, item text) or None if the line is not a list item
    """
    stripped = line.strip()
    if stripped[:2] in ("- ", "* "):
        text = stripped[2:].strip()
        return (False, text) if text else None

    match = _ORDERED_ITEM_RE.fullmatch(stripped)
    if match:
        return True, match.group(2)
    return None


# ==================== Segmenter ====================


class BlockSegmenter:
    """
    Line-driven state machine producing Block nodes.

    Usage:
        blocks = BlockSegmenter().segment("> quote\\n\\n- item")
    """

    def __init__(self) -> None:
        self.state = SegmenterState.SCANNING_BLOCK_START
        self.blocks: list[Block] = []
        self._lines: list[str] = []
        self._ordered = False

    def segment(self, source: str | None) -> list[Block]:
        """Split markup into blocks. State is reset on every call."""
        self.state = SegmenterState.SCANNING_BLOCK_START
        self.blocks = []
        self._lines = []

        text = normalize_source(source)
        if not text:
            return []

        for line in text.split("\n"):
            self._feed(line)
        self._flush()

        blocks, self.blocks = self.blocks, []
        return blocks

    def _feed(self, line: str) -> None:
        if self.state == SegmenterState.IN_CODE_BLOCK:
            if is_closing_fence(line):
                self._flush()
            else:
                self._lines.append(line)
            return

        if self.state == SegmenterState.IN_BLOCKQUOTE_RUN:
            text = quote_text(line)
            if text is not None:
                self._lines.append(text)
                return
            self._flush()

        elif self.state == SegmenterState.IN_LIST_RUN:
            item = list_item(line)
            if item is not None and item[0] == self._ordered:
                self._lines.append(item[1])
                return
            self._flush()

        elif self.state == SegmenterState.IN_PARAGRAPH:
            if not line.strip():
                self._flush()
                return
            if is_fence(line) or quote_text(line) is not None or list_item(line) is not None:
                self._flush()
            else:
                self._lines.append(line.strip())
                return

        self._start_block(line)

    def _start_block(self, line: str) -> None:
        while is_fence(line):
            code, rest = split_fence_line(line)
            if code is None:
                self._open_fence(rest)
                return
            self.blocks.append(CodeBlock(code))
            line = rest

        if not line.strip():
            return

        text = quote_text(line)
        if text is not None:
            self.state = SegmenterState.IN_BLOCKQUOTE_RUN
            self._lines.append(text)
            return

        item = list_item(line)
        if item is not None:
            self.state = SegmenterState.IN_LIST_RUN
            self._ordered = item[0]
            self._lines.append(item[1])
            return

        self.state = SegmenterState.IN_PARAGRAPH
        self._lines.append(line.strip())

    def _open_fence(self, text: str) -> None:
        self.state = SegmenterState.IN_CODE_BLOCK
        if text and not is_info_string(text):
            self._lines.append(text)

    def _flush(self) -> None:
        """Close the open block (if any) and return to block-start scanning."""
        lines = tuple(self._lines)

        if self.state == SegmenterState.IN_CODE_BLOCK:
            self.blocks.append(CodeBlock("\n".join(lines)))
        elif self.state == SegmenterState.IN_BLOCKQUOTE_RUN:
            self.blocks.append(Blockquote(lines))
        elif self.state == SegmenterState.IN_LIST_RUN:
            self.blocks.append(ListBlock(ordered=self._ordered, items=lines))
        elif self.state == SegmenterState.IN_PARAGRAPH:
            self.blocks.append(Paragraph(lines))

        self._lines = []
        self.state = SegmenterState.SCANNING_BLOCK_START


def segment(source: str | None) -> list[Block]:
    """Split markup into an ordered list of blocks."""
    return BlockSegmenter().segment(source)
