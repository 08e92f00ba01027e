"""Slack Events API payload models.

Only the fields the pipeline reads are declared. Every union carries an
``Unknown*`` arm so unrecognized variants validate and can be skipped
explicitly instead of failing the whole event.
"""

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Tag, TypeAdapter, ValidationError


class MalformedEventError(Exception):
    """The inbound request body is missing, not JSON, or not a Slack event."""


def _kind_of(value: Any, field: str = "type") -> Any:
    if isinstance(value, dict):
        return value.get(field)
    return getattr(value, field, None)


def _tagged(known: set[str], field: str = "type"):
    """Callable discriminator routing unrecognized tags to ``unknown``."""

    def discriminate(value: Any) -> str:
        kind = _kind_of(value, field)
        return kind if kind in known else "unknown"

    return Discriminator(discriminate)


class SlackModel(BaseModel):
    """Base for Slack payload models. Numeric ids and timestamps are kept as strings."""

    model_config = ConfigDict(coerce_numbers_to_str=True)


# -- Rich-text elements --


class _Element(SlackModel):
    model_config = ConfigDict(extra="allow")


class TextElement(_Element):
    type: Literal["text"] = "text"
    text: str
    style: dict | None = None


class LinkElement(_Element):
    type: Literal["link"] = "link"
    url: str
    text: str | None = None


class UserElement(_Element):
    type: Literal["user"] = "user"
    user_id: str


class ChannelElement(_Element):
    type: Literal["channel"] = "channel"
    channel_id: str


class EmojiElement(_Element):
    type: Literal["emoji"] = "emoji"
    name: str
    unicode: str | None = None  # hex code points joined by "-"; absent for custom emoji


class UnknownElement(_Element):
    type: str


RichTextElement = Annotated[
    Union[
        Annotated[TextElement, Tag("text")],
        Annotated[LinkElement, Tag("link")],
        Annotated[UserElement, Tag("user")],
        Annotated[ChannelElement, Tag("channel")],
        Annotated[EmojiElement, Tag("emoji")],
        Annotated[UnknownElement, Tag("unknown")],
    ],
    _tagged({"text", "link", "user", "channel", "emoji"}),
]


# -- Rich-text paragraphs --


class RichTextSection(SlackModel):
    type: Literal["rich_text_section"] = "rich_text_section"
    elements: list[RichTextElement] = []


class RichTextPreformatted(SlackModel):
    type: Literal["rich_text_preformatted"] = "rich_text_preformatted"
    elements: list[RichTextElement] = []


class RichTextQuote(SlackModel):
    type: Literal["rich_text_quote"] = "rich_text_quote"
    elements: list[RichTextElement] = []


class UnknownParagraph(SlackModel):
    model_config = ConfigDict(extra="allow")

    type: str


RichTextParagraph = Annotated[
    Union[
        Annotated[RichTextSection, Tag("rich_text_section")],
        Annotated[RichTextPreformatted, Tag("rich_text_preformatted")],
        Annotated[RichTextQuote, Tag("rich_text_quote")],
        Annotated[UnknownParagraph, Tag("unknown")],
    ],
    _tagged({"rich_text_section", "rich_text_preformatted", "rich_text_quote"}),
]


# -- Blocks --


class RichTextBlock(SlackModel):
    type: Literal["rich_text"] = "rich_text"
    block_id: str | None = None
    elements: list[RichTextParagraph] = []


class UnknownBlock(SlackModel):
    model_config = ConfigDict(extra="allow")

    type: str


Block = Annotated[
    Union[
        Annotated[RichTextBlock, Tag("rich_text")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    _tagged({"rich_text"}),
]


# -- Files and attachments --


class File(SlackModel):
    """An uploaded file. Email files carry their body in ``plain_text``."""

    id: str | None = None
    name: str | None = None
    title: str | None = None
    mimetype: str | None = None
    filetype: str | None = None
    pretty_type: str | None = None
    url_private: str | None = None
    url_private_download: str | None = None
    permalink: str | None = None
    plain_text: str | None = None
    preview_plain_text: str | None = None


class AttachedMessage(SlackModel):
    blocks: list[Block] = []


class MessageBlock(SlackModel):
    team: str | None = None
    channel: str | None = None
    ts: str | None = None
    message: AttachedMessage | None = None


class Attachment(SlackModel):
    """An unfurled link preview, e.g. a shared message from another channel."""

    ts: str | None = None
    channel_id: str | None = None
    is_msg_unfurl: bool | None = None
    message_blocks: list[MessageBlock] | None = None
    files: list[File] | None = None
    from_url: str | None = None
    original_url: str | None = None
    fallback: str | None = None
    text: str | None = None
    author_id: str | None = None
    author_name: str | None = None
    author_link: str | None = None
    footer: str | None = None


# -- Message events --


class MessageCreatedEvent(SlackModel):
    """Any content-bearing message. Subtypes other than deletion land here."""

    type: str = "message"
    subtype: str | None = None
    channel: str | None = None
    channel_type: str | None = None
    user: str | None = None
    ts: str | None = None
    event_ts: str | None = None
    text: str | None = None
    blocks: list[Block] | None = None
    attachments: list[Attachment] | None = None
    files: list[File] | None = None


class MessageDeletedEvent(SlackModel):
    type: str = "message"
    subtype: Literal["message_deleted"] = "message_deleted"
    channel: str | None = None
    ts: str | None = None
    deleted_ts: str | None = None
    hidden: bool | None = None
    previous_message: MessageCreatedEvent | None = None


def _message_kind(value: Any) -> str:
    return "deleted" if _kind_of(value, "subtype") == "message_deleted" else "created"


MessageEvent = Annotated[
    Union[
        Annotated[MessageDeletedEvent, Tag("deleted")],
        Annotated[MessageCreatedEvent, Tag("created")],
    ],
    Discriminator(_message_kind),
]


# -- Request bodies --


class ChallengeEventBody(SlackModel):
    """Slack URL verification handshake."""

    type: Literal["url_verification"] = "url_verification"
    challenge: str
    token: str | None = None


class CallbackEventBody(SlackModel):
    """An event delivery. ``raw`` holds the exact request body text."""

    type: Literal["event_callback"] = "event_callback"
    raw: str
    event: MessageEvent
    event_id: str | None = None
    event_time: int | None = None
    team_id: str | None = None
    api_app_id: str | None = None


class UnknownEventBody(SlackModel):
    model_config = ConfigDict(extra="allow")

    type: str | None = None


EventBody = Annotated[
    Union[
        Annotated[ChallengeEventBody, Tag("url_verification")],
        Annotated[CallbackEventBody, Tag("event_callback")],
        Annotated[UnknownEventBody, Tag("unknown")],
    ],
    _tagged({"url_verification", "event_callback"}),
]

_event_body_adapter = TypeAdapter(EventBody)


def parse_event_body(raw: str | bytes | None) -> ChallengeEventBody | CallbackEventBody | UnknownEventBody:
    """Parse a Slack request body, embedding the raw text as ``raw``.

    Raises MalformedEventError if the body is empty, not a JSON object,
    or does not validate.
    """
    if not raw:
        raise MalformedEventError("Event body is undefined.")
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedEventError(f"Event body is not JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedEventError("Event body is not a JSON object.")

    try:
        return _event_body_adapter.validate_python({**payload, "raw": raw})
    except ValidationError as exc:
        raise MalformedEventError(f"Invalid event body: {exc}") from exc
