"""Document blocks for a Notion page, before encoding to the API format."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class Status(str, Enum):
    """Values of the database's Status column."""

    NOT_STARTED = "Not started"
    IN_PROGRESS = "In progress"
    DONE = "Done"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# -- Inline spans --


class TextSpan(_Frozen):
    type: Literal["text"] = "text"
    text: str


class LinkSpan(_Frozen):
    """A hyperlink whose visible text is the URL itself."""

    type: Literal["link"] = "link"
    url: str


class CodeSpan(_Frozen):
    type: Literal["code"] = "code"
    text: str


RichTextSpan = TextSpan | LinkSpan | CodeSpan


# -- Blocks --


class ParagraphBlock(_Frozen):
    type: Literal["paragraph"] = "paragraph"
    children: tuple[RichTextSpan, ...] = ()


class HeadingBlock(_Frozen):
    type: Literal["heading"] = "heading"
    level: Literal[1, 2, 3]
    text: str
    is_toggleable: bool = False


class BookmarkBlock(_Frozen):
    type: Literal["bookmark"] = "bookmark"
    url: str


class CodeBlock(_Frozen):
    type: Literal["code"] = "code"
    text: str
    language: str | None = None  # None encodes as "plain text"


class FileBlock(_Frozen):
    """An externally hosted file with a caption."""

    type: Literal["file"] = "file"
    url: str
    caption: str


class EmbedBlock(_Frozen):
    type: Literal["embed"] = "embed"
    url: str


DocumentBlock = ParagraphBlock | HeadingBlock | BookmarkBlock | CodeBlock | FileBlock | EmbedBlock


def paragraph(*texts: str) -> ParagraphBlock:
    """Paragraph of plain text spans."""
    return ParagraphBlock(children=tuple(TextSpan(text=t) for t in texts))
