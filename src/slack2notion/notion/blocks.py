"""Pure functions converting document blocks into Notion block objects.

Code content (code blocks and code spans) is truncated to Notion's
2000-char rich_text limit. Paragraphs without spans are dropped.
"""

import re

from slack2notion.models.notion import (
    BookmarkBlock,
    CodeBlock,
    CodeSpan,
    DocumentBlock,
    EmbedBlock,
    FileBlock,
    HeadingBlock,
    LinkSpan,
    ParagraphBlock,
    RichTextSpan,
    TextSpan,
)
from slack2notion.text import truncate

RICH_TEXT_LIMIT = 2000
DEFAULT_CODE_LANGUAGE = "plain text"

_URL_PATTERN = re.compile(r"https?://[\w/:%#$&?()~.=+\-]+", re.ASCII)


def to_rich_text(span: RichTextSpan) -> list[dict]:
    """Encode one inline span as Notion rich_text objects."""
    if isinstance(span, LinkSpan):
        return [{"type": "text", "text": {"content": span.url, "link": {"url": span.url}}}]
    if isinstance(span, CodeSpan):
        return [
            {
                "type": "text",
                "text": {"content": truncate(span.text, RICH_TEXT_LIMIT), "link": None},
                "annotations": {"code": True},
            }
        ]
    return [{"type": "text", "text": {"content": span.text, "link": None}}]


def _heading_block(block: HeadingBlock) -> dict:
    key = f"heading_{block.level}"
    return {
        "object": "block",
        "type": key,
        key: {
            "rich_text": to_rich_text(TextSpan(text=block.text)),
            "is_toggleable": block.is_toggleable,
        },
    }


def _code_block(block: CodeBlock) -> dict:
    return {
        "object": "block",
        "type": "code",
        "code": {
            "language": block.language or DEFAULT_CODE_LANGUAGE,
            "rich_text": [
                {"type": "text", "text": {"content": truncate(block.text, RICH_TEXT_LIMIT)}}
            ],
        },
    }


def _file_block(block: FileBlock) -> dict:
    return {
        "object": "block",
        "type": "file",
        "file": {
            "caption": [{"type": "text", "text": {"content": block.caption}}],
            "type": "external",
            "external": {"url": block.url},
        },
    }


def make_block_children(block: DocumentBlock) -> list[dict]:
    """Encode one document block as zero or more Notion block objects."""
    if isinstance(block, ParagraphBlock):
        if not block.children:
            return []
        rich_text = [item for span in block.children for item in to_rich_text(span)]
        return [{"object": "block", "type": "paragraph", "paragraph": {"rich_text": rich_text}}]
    if isinstance(block, HeadingBlock):
        return [_heading_block(block)]
    if isinstance(block, BookmarkBlock):
        return [{"object": "block", "type": "bookmark", "bookmark": {"url": block.url}}]
    if isinstance(block, EmbedBlock):
        return [{"object": "block", "type": "embed", "embed": {"url": block.url}}]
    if isinstance(block, CodeBlock):
        return [_code_block(block)]
    if isinstance(block, FileBlock):
        return [_file_block(block)]
    raise TypeError(f"Unsupported document block: {block!r}")


def build_children(blocks: list[DocumentBlock]) -> list[dict]:
    """Encode a document block list in order."""
    return [child for block in blocks for child in make_block_children(block)]


def richize(text: str) -> list[RichTextSpan]:
    """Split plain text into text and link spans around http(s) URLs.

    Lossless: joining span texts (URLs for links) rebuilds ``text``.
    Text without URLs comes back as a single text span.
    """
    spans: list[RichTextSpan] = []
    pos = 0
    for m in _URL_PATTERN.finditer(text):
        if m.start() > pos:
            spans.append(TextSpan(text=text[pos : m.start()]))
        spans.append(LinkSpan(url=m.group(0)))
        pos = m.end()
    if pos < len(text) or not spans:
        spans.append(TextSpan(text=text[pos:]))
    return spans
