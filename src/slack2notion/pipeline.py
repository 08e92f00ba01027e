"""Slack event to Notion page transformation.

Classifies an event_callback, derives a page title, flattens the message
(text, rich-text blocks, unfurled attachments, files) into document blocks
and creates the page. Block order is fixed:

1. the message text as one paragraph
2. one paragraph per rich-text paragraph of the message blocks
3. per attachment: author, unfurled content, files, "URL" heading + bookmark
4. per file: bookmark + one paragraph per line of its plain text
5. an "Event" heading followed by the raw payload as JSON
"""

import json
import logging
import re
from enum import Enum

from notion_client import AsyncClient

from slack2notion.fallback import conditional, default, evaluate
from slack2notion.models.notion import (
    BookmarkBlock,
    CodeBlock,
    DocumentBlock,
    HeadingBlock,
    LinkSpan,
    ParagraphBlock,
    RichTextSpan,
    TextSpan,
    paragraph,
)
from slack2notion.models.slack import (
    Attachment,
    CallbackEventBody,
    ChannelElement,
    EmojiElement,
    File,
    LinkElement,
    MessageCreatedEvent,
    MessageDeletedEvent,
    RichTextBlock,
    RichTextPreformatted,
    RichTextQuote,
    RichTextSection,
    TextElement,
    UserElement,
)
from slack2notion.notion.blocks import richize
from slack2notion.notion.models import PageResult
from slack2notion.notion.service import create_task_page
from slack2notion.text import is_meaningful, transform

logger = logging.getLogger(__name__)

NO_TITLE = "No title"
TITLE_LINES = 3

_title_text = transform(header_lines=TITLE_LINES, trim="both")
_trimmed = transform(trim="both")
_LINE_BREAK = re.compile(r"\r?\n")
_KNOWN_PARAGRAPHS = (RichTextSection, RichTextPreformatted, RichTextQuote)


class Action(str, Enum):
    """What a message event means for the task database."""

    DELETED = "deleted"
    MESSAGE_CREATED = "message-created"
    MESSAGE_FORWARDED = "message-forwarded"
    FILE_SHARED = "file-shared"


def classify_action(body: CallbackEventBody) -> Action:
    """Classify the event. First match wins: deleted, files, attachments, created."""
    event = body.event
    if isinstance(event, MessageDeletedEvent):
        return Action.DELETED
    if event.files is not None:
        return Action.FILE_SHARED
    if event.attachments is not None:
        return Action.MESSAGE_FORWARDED
    return Action.MESSAGE_CREATED


def _rich_text_blocks(blocks) -> list[RichTextBlock]:
    known = []
    for block in blocks or []:
        if isinstance(block, RichTextBlock):
            known.append(block)
        else:
            logger.warning("Unknown block type skipped: %s", block.type)
    return known


def derive_title(event: MessageCreatedEvent) -> str:
    """Pick the page title from the first source with non-blank text.

    Sources: message text, text spans of the message blocks, attachment
    texts, file titles. Each is cut to its first three lines and trimmed.
    """
    block_text = "\n".join(
        element.text if isinstance(element, TextElement) else ""
        for block in _rich_text_blocks(event.blocks)
        for para in block.elements
        if isinstance(para, _KNOWN_PARAGRAPHS)
        for element in para.elements
    )
    attachment_text = "\n".join(a.text or "" for a in event.attachments or [])
    file_titles = "\n".join(f.title or "" for f in event.files or [])

    return evaluate(
        [
            conditional(event.text, _title_text, is_meaningful),
            conditional(block_text, _title_text, is_meaningful),
            conditional(attachment_text, _title_text, is_meaningful),
            conditional(file_titles, _title_text, is_meaningful),
            default(NO_TITLE),
        ]
    )


def _debug_string(element) -> str:
    return element.model_dump_json(exclude_unset=True)


def message_block_paragraphs(event: MessageCreatedEvent) -> list[DocumentBlock]:
    """One paragraph per rich-text paragraph; non-text elements as JSON strings."""
    blocks: list[DocumentBlock] = []
    for block in _rich_text_blocks(event.blocks):
        for para in block.elements:
            if not isinstance(para, _KNOWN_PARAGRAPHS):
                logger.warning("Unknown rich text paragraph skipped: %s", para.type)
                continue
            texts = [
                e.text if isinstance(e, TextElement) else _debug_string(e)
                for e in para.elements
            ]
            if texts:
                blocks.append(paragraph(*texts))
    return blocks


def decode_emoji(element: EmojiElement) -> str:
    """Render an emoji from its hex code points, or as :name: for custom emoji."""
    if not element.unicode:
        return f":{element.name}:"
    return "".join(chr(int(cp, 16)) for cp in element.unicode.split("-"))


def _section_spans(section: RichTextSection) -> list[RichTextSpan]:
    spans: list[RichTextSpan] = []
    for element in section.elements:
        if isinstance(element, TextElement):
            text = _trimmed(element.text)
            if is_meaningful(text):
                spans.append(TextSpan(text=text))
        elif isinstance(element, LinkElement):
            spans.append(LinkSpan(url=element.url))
        elif isinstance(element, (UserElement, ChannelElement)):
            # Mentions are meaningless outside the workspace
            continue
        elif isinstance(element, EmojiElement):
            spans.append(TextSpan(text=decode_emoji(element)))
        else:
            logger.warning("Unknown element of rich_text_section: %s", element.type)
    return spans


def _code_blocks(para: RichTextPreformatted | RichTextQuote) -> list[DocumentBlock]:
    blocks: list[DocumentBlock] = []
    for element in para.elements:
        if isinstance(element, TextElement):
            blocks.append(CodeBlock(text=element.text))
        elif isinstance(element, LinkElement):
            blocks.append(CodeBlock(text=element.url))
        else:
            logger.warning("Unknown element of %s: %s", para.type, element.type)
    return blocks


def attachment_blocks(attachment: Attachment) -> list[DocumentBlock]:
    """Flatten an unfurled attachment into document blocks."""
    blocks: list[DocumentBlock] = []
    if is_meaningful(attachment.author_name):
        blocks.append(paragraph(attachment.author_name))

    nested = [
        block
        for message_block in attachment.message_blocks or []
        if message_block.message is not None
        for block in message_block.message.blocks
    ]
    for block in _rich_text_blocks(nested):
        for para in block.elements:
            if isinstance(para, RichTextSection):
                spans = _section_spans(para)
                if spans:
                    blocks.append(ParagraphBlock(children=tuple(spans)))
            elif isinstance(para, (RichTextPreformatted, RichTextQuote)):
                blocks.extend(_code_blocks(para))
            else:
                logger.warning("Unknown element of message_blocks: %s", para.type)

    for file in attachment.files or []:
        blocks.extend(file_blocks(file))

    url = attachment.from_url or attachment.original_url
    if is_meaningful(url):
        blocks.append(HeadingBlock(level=3, text="URL"))
        blocks.append(BookmarkBlock(url=url))
    else:
        logger.warning("Attachment without source URL: ts=%s", attachment.ts)
    return blocks


def file_blocks(file: File) -> list[DocumentBlock]:
    """Bookmark the file, then one auto-linked paragraph per non-blank text line."""
    logger.debug("file: %s", file.model_dump_json(exclude_none=True))
    blocks: list[DocumentBlock] = []
    if is_meaningful(file.url_private):
        blocks.append(BookmarkBlock(url=file.url_private))
    for line in _LINE_BREAK.split(file.plain_text or ""):
        text = _trimmed(line)
        if is_meaningful(text):
            blocks.append(ParagraphBlock(children=tuple(richize(text))))
    return blocks


def event_appendix(raw: str) -> list[DocumentBlock]:
    """Raw payload pretty-printed as JSON, for debugging."""
    return [
        HeadingBlock(level=3, text="Event"),
        CodeBlock(
            language="json",
            text=json.dumps(json.loads(raw), indent=2, ensure_ascii=False),
        ),
    ]


def build_blocks(body: CallbackEventBody) -> list[DocumentBlock]:
    """Flatten a content-bearing event into its ordered document blocks."""
    event = body.event
    blocks: list[DocumentBlock] = []

    if is_meaningful(event.text):
        blocks.append(paragraph(event.text))

    blocks.extend(message_block_paragraphs(event))

    for attachment in event.attachments or []:
        blocks.extend(attachment_blocks(attachment))

    for file in event.files or []:
        blocks.extend(file_blocks(file))

    blocks.extend(event_appendix(body.raw))
    return blocks


async def add_task_to_notion(
    client: AsyncClient,
    database_id: str,
    body: CallbackEventBody,
) -> PageResult | None:
    """Create a Notion page for the event. Deleted messages are ignored.

    Returns the created page, or None when nothing was created.
    """
    action = classify_action(body)
    logger.debug("action: %s", action.value)

    if action is Action.DELETED:
        return None

    event = body.event
    title = derive_title(event)
    logger.debug("title: %s", title)

    blocks = build_blocks(body)
    logger.debug("Built %d document block(s)", len(blocks))

    return await create_task_page(client, database_id, title, blocks)
