"""Tests for the Notion block encoder and link detection."""

import json

import pytest

from slack2notion.models.notion import (
    BookmarkBlock,
    CodeBlock,
    CodeSpan,
    EmbedBlock,
    FileBlock,
    HeadingBlock,
    LinkSpan,
    ParagraphBlock,
    TextSpan,
    paragraph,
)
from slack2notion.notion.blocks import build_children, make_block_children, richize, to_rich_text


# -- Rich text spans --


def test_text_span_keeps_full_length():
    """Plain text spans are not truncated."""
    text = "a" * 2500
    assert to_rich_text(TextSpan(text=text)) == [
        {"type": "text", "text": {"content": text, "link": None}}
    ]


def test_link_span_shows_url_and_links_it():
    assert to_rich_text(LinkSpan(url="https://example.com")) == [
        {
            "type": "text",
            "text": {"content": "https://example.com", "link": {"url": "https://example.com"}},
        }
    ]


def test_code_span_truncated_and_annotated():
    [item] = to_rich_text(CodeSpan(text="c" * 2500))
    assert item["annotations"] == {"code": True}
    assert len(item["text"]["content"]) == 2000
    assert item["text"]["content"].endswith("...")


# -- Blocks --


def test_empty_paragraph_dropped():
    assert make_block_children(ParagraphBlock()) == []


def test_paragraph_concatenates_spans():
    block = ParagraphBlock(children=(TextSpan(text="see "), LinkSpan(url="https://x.test")))
    [encoded] = make_block_children(block)
    assert encoded["type"] == "paragraph"
    contents = [r["text"]["content"] for r in encoded["paragraph"]["rich_text"]]
    assert contents == ["see ", "https://x.test"]


@pytest.mark.parametrize("level", [1, 2, 3])
def test_heading_levels(level: int):
    [encoded] = make_block_children(HeadingBlock(level=level, text="Event"))
    key = f"heading_{level}"
    assert encoded["type"] == key
    assert encoded[key]["rich_text"][0]["text"]["content"] == "Event"
    assert encoded[key]["is_toggleable"] is False


def test_heading_toggleable():
    [encoded] = make_block_children(HeadingBlock(level=2, text="x", is_toggleable=True))
    assert encoded["heading_2"]["is_toggleable"] is True


def test_bookmark_and_embed_keep_url():
    assert make_block_children(BookmarkBlock(url="https://x.test/a?b=c")) == [
        {"object": "block", "type": "bookmark", "bookmark": {"url": "https://x.test/a?b=c"}}
    ]
    assert make_block_children(EmbedBlock(url="https://x.test/v")) == [
        {"object": "block", "type": "embed", "embed": {"url": "https://x.test/v"}}
    ]


def test_file_block_is_external_with_caption():
    [encoded] = make_block_children(FileBlock(url="https://files.test/F1", caption="report.pdf"))
    assert encoded["file"] == {
        "caption": [{"type": "text", "text": {"content": "report.pdf"}}],
        "type": "external",
        "external": {"url": "https://files.test/F1"},
    }


def test_code_block_defaults_to_plain_text():
    [encoded] = make_block_children(CodeBlock(text="x = 1"))
    assert encoded["code"]["language"] == "plain text"
    assert encoded["code"]["rich_text"][0]["text"]["content"] == "x = 1"


def test_code_block_language_and_truncation():
    [encoded] = make_block_children(CodeBlock(text="{" * 5000, language="json"))
    assert encoded["code"]["language"] == "json"
    content = encoded["code"]["rich_text"][0]["text"]["content"]
    assert len(content) == 2000
    assert content.endswith("...")


def test_build_children_preserves_order_and_drops_empty():
    blocks = [
        paragraph("first"),
        ParagraphBlock(),
        HeadingBlock(level=3, text="URL"),
        BookmarkBlock(url="https://x.test"),
    ]
    assert [c["type"] for c in build_children(blocks)] == ["paragraph", "heading_3", "bookmark"]


def test_encoding_is_deterministic():
    """Encoding the same blocks twice gives byte-identical payloads."""
    blocks = [
        paragraph("a"),
        CodeBlock(text="b", language="json"),
        FileBlock(url="https://f.test", caption="c"),
    ]
    assert json.dumps(build_children(blocks)) == json.dumps(build_children(blocks))


# -- richize --


def _joined(spans) -> str:
    return "".join(s.url if isinstance(s, LinkSpan) else s.text for s in spans)


def test_richize_without_url_is_single_text_span():
    assert richize("just words") == [TextSpan(text="just words")]


def test_richize_splits_around_urls():
    text = "see https://a.test/x?y=1 and http://b.test end"
    assert richize(text) == [
        TextSpan(text="see "),
        LinkSpan(url="https://a.test/x?y=1"),
        TextSpan(text=" and "),
        LinkSpan(url="http://b.test"),
        TextSpan(text=" end"),
    ]


def test_richize_url_only():
    assert richize("https://a.test") == [LinkSpan(url="https://a.test")]


def test_richize_url_stops_at_non_ascii():
    """Only ASCII word characters continue a URL."""
    assert richize("リンクhttps://a.test/パス") == [
        TextSpan(text="リンク"),
        LinkSpan(url="https://a.test/"),
        TextSpan(text="パス"),
    ]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no links here",
        "https://a.test",
        "prefix https://a.test/path#frag suffix",
        "<https://a.test|label> and (http://b.test/(x)) end",
        "back-to-back https://a.test https://b.test",
        "日本語 https://例え.test/ok 終わり",
    ],
)
def test_richize_is_lossless(text: str):
    assert _joined(richize(text)) == text
