"""
Inline Formatter - spans within a single line of markup.

Recognised in priority order:
- `inline code`
- [display](href)
- ***bold italic***, **bold** and __bold__
- *italic* and _italic_

Code spans and links are cut out first, then emphasis is scanned over the
remaining text. All scanning is a forward pass with memoised lookups, so
adversarial input such as long runs of unmatched markers stays linear.
"""

from typing import Iterator

from agora.modules.markup.escaper import escape
from agora.modules.markup.links import resolve
from agora.modules.markup.nodes import Bold, Code, InlineSpan, Italic, Link, Text

# Marks the position of an already parsed code/link span while emphasis is
# scanned. User text never contains it (see parse_inline).
PLACEHOLDER = "\x00"
REPLACEMENT_CHAR = "\ufffd"

EMPHASIS_MARKERS = "*_"
_SPECIAL = EMPHASIS_MARKERS + PLACEHOLDER

BOLD = "bold"
ITALIC = "italic"
ALL_EMPHASIS = frozenset({BOLD, ITALIC})


class _Finder:
    """
    str.find with a per-token memo.

    Lookups only move forward. If an earlier search started at or before the
    new start and its hit is at or after it, that hit is still the first one;
    a miss stays a miss. Repeated lookups for an unmatched marker are O(1).
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._memo: dict[str, tuple[int, int]] = {}

    def _cached(self, key: str, start: int) -> int | None:
        hit = self._memo.get(key)
        if hit is None:
            return None
        origin, pos = hit
        if origin <= start and (pos == -1 or pos >= start):
            return pos
        return None

    def find(self, token: str, start: int) -> int:
        pos = self._cached(token, start)
        if pos is None:
            pos = self.text.find(token, start)
            self._memo[token] = (start, pos)
        return pos

    def find_lone(self, marker: str, start: int) -> int:
        """Find a marker character that is not next to another copy of itself."""
        key = f"lone:{marker}"
        pos = self._cached(key, start)
        if pos is not None:
            return pos

        pos = self.find(marker, start)
        while pos != -1 and (self._is(pos - 1, marker) or self._is(pos + 1, marker)):
            pos = self.find(marker, pos + 1)

        self._memo[key] = (start, pos)
        return pos

    def _is(self, index: int, char: str) -> bool:
        return 0 <= index < len(self.text) and self.text[index] == char


# ==================== Code spans and links ====================


def _split_code(line: str) -> list[str | Code]:
    """Cut `code` spans out of a line. Empty or unmatched backticks stay literal."""
    finder = _Finder(line)
    parts: list[str | Code] = []
    text_start = 0
    pos = 0

    while True:
        pos = finder.find("`", pos)
        if pos == -1:
            break
        close = finder.find("`", pos + 1)
        if close == -1:
            break
        if close == pos + 1:
            pos = close + 1
            continue

        if pos > text_start:
            parts.append(line[text_start:pos])
        parts.append(Code(line[pos + 1 : close]))
        pos = text_start = close + 1

    if text_start < len(line):
        parts.append(line[text_start:])
    return parts


def _split_links(text: str) -> list[str | Link]:
    """Cut [display](href) links out of a code-free run of text."""
    finder = _Finder(text)
    parts: list[str | Link] = []
    text_start = 0
    pos = 0

    while True:
        pos = finder.find("[", pos)
        if pos == -1:
            break
        label_end = finder.find("]", pos + 1)
        if label_end == -1:
            break

        if label_end > pos + 1 and text.startswith("(", label_end + 1):
            href_end = finder.find(")", label_end + 2)
            if href_end == -1:
                break
            if href_end > label_end + 2:
                if pos > text_start:
                    parts.append(text[text_start:pos])
                href = text[label_end + 2 : href_end]
                parts.append(
                    Link(
                        text=text[pos + 1 : label_end],
                        href=resolve(href),
                        raw=text[pos : href_end + 1],
                    )
                )
                pos = text_start = href_end + 1
                continue

        pos += 1

    if text_start < len(text):
        parts.append(text[text_start:])
    return parts


# ==================== Emphasis ====================


def _parse_emphasis(
    text: str,
    allowed: frozenset[str],
    atoms: Iterator[InlineSpan],
) -> list[InlineSpan]:
    """
    Scan bold/italic markers left to right.

    Args:
        text: Line with code/link spans replaced by PLACEHOLDER
        allowed: Emphasis kinds that may still open at this nesting level
        atoms: Parsed code/link spans, consumed in document order

    Returns:
        Inline spans for the text
    """
    finder = _Finder(text)
    spans: list[InlineSpan] = []
    buffer: list[str] = []
    length = len(text)
    pos = 0

    def flush() -> None:
        if buffer:
            spans.append(Text("".join(buffer)))
            buffer.clear()

    while pos < length:
        char = text[pos]

        if char == PLACEHOLDER:
            flush()
            spans.append(next(atoms))
            pos += 1
            continue

        if char not in EMPHASIS_MARKERS:
            end = pos + 1
            while end < length and text[end] not in _SPECIAL:
                end += 1
            buffer.append(text[pos:end])
            pos = end
            continue

        double = char * 2
        triple = char * 3

        if allowed == ALL_EMPHASIS and text.startswith(triple, pos):
            close = finder.find(triple, pos + 4)
            if close != -1:
                flush()
                inner = _parse_emphasis(text[pos + 3 : close], frozenset(), atoms)
                spans.append(Bold((Italic(tuple(inner)),)))
                pos = close + 3
                continue

        if text.startswith(double, pos):
            if BOLD in allowed:
                close = finder.find(double, pos + 3)
                if close != -1:
                    flush()
                    inner = _parse_emphasis(text[pos + 2 : close], allowed - {BOLD}, atoms)
                    spans.append(Bold(tuple(inner)))
                    pos = close + 2
                    continue
            # An unmatched pair never opens italic
            buffer.append(double)
            pos += 2
            continue

        if ITALIC in allowed:
            close = finder.find_lone(char, pos + 2)
            if close != -1:
                flush()
                inner = _parse_emphasis(text[pos + 1 : close], allowed - {ITALIC}, atoms)
                spans.append(Italic(tuple(inner)))
                pos = close + 1
                continue

        buffer.append(char)
        pos += 1

    flush()
    return spans


# ==================== Public API ====================


def parse_inline(line: str) -> list[InlineSpan]:
    """Parse one line of markup into inline spans."""
    line = line.replace(PLACEHOLDER, REPLACEMENT_CHAR)

    parts: list[str | InlineSpan] = []
    for part in _split_code(line):
        if isinstance(part, str):
            parts.extend(_split_links(part))
        else:
            parts.append(part)

    flat = "".join(part if isinstance(part, str) else PLACEHOLDER for part in parts)
    atoms = iter([part for part in parts if not isinstance(part, str)])
    return _parse_emphasis(flat, ALL_EMPHASIS, atoms)


def render_spans(spans: list[InlineSpan] | tuple[InlineSpan, ...]) -> str:
    """Render inline spans to HTML. Every piece of user text is escaped exactly once."""
    out: list[str] = []
    for span in spans:
        if isinstance(span, Text):
            out.append(escape(span.raw))
        elif isinstance(span, Bold):
            out.append(f"<strong>{render_spans(span.children)}</strong>")
        elif isinstance(span, Italic):
            out.append(f"<em>{render_spans(span.children)}</em>")
        elif isinstance(span, Code):
            out.append(f"<code>{escape(span.raw)}</code>")
        elif isinstance(span, Link):
            if span.href is None:
                out.append(escape(span.raw))
            else:
                out.append(
                    f'<a href="{escape(span.href)}" target="_blank" '
                    f'rel="noopener noreferrer">{escape(span.text)}</a>'
                )
        else:
            raise TypeError(f"Unknown inline span: {span!r}")
    return "".join(out)


def format_inline(line: str) -> str:
    """Format one line of markup as an HTML fragment."""
    return render_spans(parse_inline(line))
