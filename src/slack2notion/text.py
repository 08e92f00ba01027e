"""Pure string helpers used for titles and block content."""

from collections.abc import Callable
from typing import Literal

ELLIPSIS = "..."

Trim = Literal["left", "right", "both"]


def truncate(text: str, length: int) -> str:
    """Cut text to at most ``length`` characters, ending with an ellipsis.

    Only defined for ``length >= 3``; shorter limits cannot fit the marker.
    """
    if len(text) > length:
        return text[: length - len(ELLIPSIS)] + ELLIPSIS
    return text


def first_lines(text: str, lines: int = 1) -> str:
    """Keep the first N lines of text.

    Kept lines are joined without a separator, so "a\\nb" with lines=2
    becomes "ab". Existing titles depend on this.
    """
    return "".join(text.split("\n")[:lines])


def is_meaningful(text: str | None) -> bool:
    """True when text is present and non-empty. No trimming is applied."""
    return text is not None and len(text) > 0


def transform(header_lines: int | None = None, trim: Trim | None = None) -> Callable[[str], str]:
    """Build a text normalizer: header-line extraction first, then trim."""

    def apply(value: str) -> str:
        text = value
        if header_lines:
            text = first_lines(text, header_lines)
        if trim == "left":
            text = text.lstrip()
        elif trim == "right":
            text = text.rstrip()
        elif trim == "both":
            text = text.strip()
        return text

    return apply
