"""Data models for Slack events and Notion document blocks."""

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
    Status,
    TextSpan,
)
from slack2notion.models.slack import (
    Attachment,
    CallbackEventBody,
    ChallengeEventBody,
    File,
    MalformedEventError,
    MessageCreatedEvent,
    MessageDeletedEvent,
    UnknownEventBody,
    parse_event_body,
)

__all__ = [
    "Attachment",
    "BookmarkBlock",
    "CallbackEventBody",
    "ChallengeEventBody",
    "CodeBlock",
    "CodeSpan",
    "DocumentBlock",
    "EmbedBlock",
    "File",
    "FileBlock",
    "HeadingBlock",
    "LinkSpan",
    "MalformedEventError",
    "MessageCreatedEvent",
    "MessageDeletedEvent",
    "ParagraphBlock",
    "RichTextSpan",
    "Status",
    "TextSpan",
    "UnknownEventBody",
    "parse_event_body",
]
