"""First-truthy-wins evaluation over an ordered list of candidates.

Each candidate is a zero-argument callable. ``evaluate`` calls them in
order and returns the first truthy result::

    title = evaluate([
        conditional(event.text, mapper=str.strip, predicate=is_meaningful),
        default("No title"),
    ])
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")

Candidate = Callable[[], R | None]


class NoValueFound(Exception):
    """Raised when every candidate produced a falsy result."""


def evaluate(candidates: Iterable[Candidate[R]]) -> R:
    """Return the first truthy candidate result.

    Later candidates are never called once one succeeds.
    Raises NoValueFound if nothing qualifies.
    """
    for candidate in candidates:
        result = candidate()
        if result:
            return result
    raise NoValueFound("No value found.")


def conditional(
    value: T,
    mapper: Callable[[T], R],
    predicate: Callable[[T], bool] | None = None,
) -> Candidate[R]:
    """Candidate yielding ``mapper(value)`` when ``predicate(value)`` holds.

    Without a predicate the mapper always runs. Returns None otherwise.
    """

    def candidate() -> R | None:
        if predicate is not None and not predicate(value):
            return None
        return mapper(value)

    return candidate


def default(value: R) -> Candidate[R]:
    """Terminal candidate that always yields ``value``."""
    return lambda: value
