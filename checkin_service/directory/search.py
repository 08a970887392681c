"""Attendee search, ordering and pagination."""
from collections.abc import Iterable, Sequence
from functools import lru_cache
from typing import Protocol, TypeVar

from pyuca import Collator

from checkin_service.directory.text import normalize


class Searchable(Protocol):
    name: str
    email: str
    document: str


T = TypeVar("T", bound=Searchable)


def search_key(attendee: Searchable) -> str:
    """Normalized text a search query is matched against."""
    return " ".join(
        normalize(part) for part in (attendee.name, attendee.email, attendee.document)
    )


def filter_attendees(attendees: Iterable[T], search: str | None) -> list[T]:
    """
    Keep attendees whose name, email or document contains the search text.

    Matching is a substring test on normalized text. An empty or missing
    search keeps everyone.
    """
    needle = normalize(search or "")
    if not needle:
        return list(attendees)
    return [a for a in attendees if needle in search_key(a)]


@lru_cache(maxsize=1)
def get_collator() -> Collator:
    """Unicode Collation Algorithm collator, built once on first use."""
    return Collator()


def name_sort_key(name: str) -> tuple:
    """Collation key for a name: normalized, then ordered by the Unicode rules."""
    return get_collator().sort_key(normalize(name))


def sort_by_name(attendees: Iterable[T]) -> list[T]:
    """
    Sort ascending by normalized name using Unicode collation.

    Letters without a decomposition, such as "ł" or "ø", sort next to their
    base letter instead of after "z". Ties keep their original order.
    """
    return sorted(attendees, key=lambda a: name_sort_key(a.name))


def paginate(items: Sequence[T], page: int, limit: int) -> list[T]:
    """Return the 1-based ``page`` of ``limit`` items. Past the end is empty."""
    start = (page - 1) * limit
    return list(items[start:start + limit])


def clamp_page_params(
    page: int | None,
    limit: int | None,
    default_limit: int = 20,
    max_limit: int | None = None,
) -> tuple[int, int]:
    """
    Apply defaults and bounds to raw page/limit values.

    Both are floored at 1. ``limit`` is only capped when ``max_limit`` is set.
    """
    page = max(page if page is not None else 1, 1)
    limit = max(limit if limit is not None else default_limit, 1)
    if max_limit is not None:
        limit = min(limit, max_limit)
    return page, limit


def search_attendees(
    attendees: Iterable[T], search: str | None, page: int, limit: int
) -> tuple[list[T], int]:
    """
    Filter, sort and paginate attendees.

    Returns the requested page and the number of matches before pagination.
    """
    matches = sort_by_name(filter_attendees(attendees, search))
    return paginate(matches, page, limit), len(matches)
