"""Tests for block segmentation"""

from agora.modules.markup.blocks import BlockSegmenter, SegmenterState, segment
from agora.modules.markup.nodes import Blockquote, CodeBlock, ListBlock, Paragraph


def test_empty_source():
    assert segment("") == []
    assert segment(None) == []
    assert segment("\n\n   \n") == []


def test_paragraph_lines():
    assert segment("a\nb") == [Paragraph(("a", "b"))]


def test_blank_line_splits_paragraphs():
    assert segment("a\n\n\nb") == [Paragraph(("a",)), Paragraph(("b",))]


def test_crlf_line_endings():
    assert segment("a\r\nb\rc") == [Paragraph(("a", "b", "c"))]


def test_code_fence_is_verbatim():
    """Test fenced lines are captured exactly"""
    source = "```\nx = 1\n    **y**\n> not a quote\n```"
    assert segment(source) == [CodeBlock("x = 1\n    **y**\n> not a quote")]


def test_code_fence_info_string_is_dropped():
    assert segment("```python\nprint()\n```") == [CodeBlock("print()")]


def test_unterminated_fence_keeps_content():
    assert segment("intro\n```\nunterminated\nstill code") == [
        Paragraph(("intro",)),
        CodeBlock("unterminated\nstill code"),
    ]


def test_one_line_fence():
    assert segment("```one```") == [CodeBlock("one")]


def test_fence_with_trailing_text_is_not_a_close():
    assert segment("```\n```js\n```") == [CodeBlock("```js")]


def test_blockquote_run():
    """Test consecutive quote lines form one block"""
    assert segment("> a\n>b\n> \nafter") == [
        Blockquote(("a", "b", "")),
        Paragraph(("after",)),
    ]


def test_unordered_and_ordered_lists():
    assert segment("- a\n* b\n1. c\n10.  d") == [
        ListBlock(ordered=False, items=("a", "b")),
        ListBlock(ordered=True, items=("c", "d")),
    ]


def test_list_interrupts_paragraph():
    assert segment("text\n- item\nmore") == [
        Paragraph(("text",)),
        ListBlock(ordered=False, items=("item",)),
        Paragraph(("more",)),
    ]


def test_not_list_items():
    """Test lines that only resemble list markers stay paragraph text"""
    assert segment("-notalist\n*emphasis*\n1.5 litres\n- ") == [
        Paragraph(("-notalist", "*emphasis*", "1.5 litres", "-")),
    ]


def test_mixed_document():
    source = "Intro line\n\n> quoted\n```\ncode\n```\n1. one\n\nend"
    assert segment(source) == [
        Paragraph(("Intro line",)),
        Blockquote(("quoted",)),
        CodeBlock("code"),
        ListBlock(ordered=True, items=("one",)),
        Paragraph(("end",)),
    ]


def test_segmenter_resets_between_calls():
    segmenter = BlockSegmenter()
    assert segmenter.segment("```\nopen") == [CodeBlock("open")]
    assert segmenter.state == SegmenterState.SCANNING_BLOCK_START
    assert segmenter.segment("plain") == [Paragraph(("plain",))]


def test_text_after_one_line_fence_is_kept():
    assert segment("```a``` and more text\nnext line") == [
        CodeBlock("a"),
        Paragraph(("and more text", "next line")),
    ]


def test_consecutive_one_line_fences():
    assert segment("```a``` ```b```") == [CodeBlock("a"), CodeBlock("b")]


def test_prose_after_opening_fence_is_code():
    """Test only a single language word after a fence is dropped"""
    assert segment("```Here is my sample\nbody\n```") == [
        CodeBlock("Here is my sample\nbody"),
    ]
    assert segment("```c++\nint x;\n```") == [CodeBlock("int x;")]
