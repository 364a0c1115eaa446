"""pagination.py — Page slicing, filtering and sorting for mock collections.

Query parameters arrive as raw strings. Garbage falls back to defaults
(page=1, pageSize=settings.default_page_size) so a sloppy client still gets
the first page, but an explicit ``pageSize <= 0`` is rejected: there is no
sensible page of size zero to return.

Called by: mock/store.py, mock/comments.py, api/routes/*
Depends on: core/errors.py
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from backoffice.core.errors import InvalidPageSizeError

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 5


class Page(BaseModel, Generic[T]):
    """One page of an ordered collection."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[T]
    page: int
    page_size: int
    total: int
    total_pages: int


def _to_int(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip(), 10)
    except ValueError:
        return None


def parse_page_params(
    page: str | int | None,
    page_size: str | int | None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[int, int]:
    """Parse ``page`` / ``pageSize`` query values.

    Args:
        page: Raw 1-based page number.
        page_size: Raw page size.
        default_page_size: Endpoint-specific fallback size.

    Returns:
        ``(page, page_size)`` as positive integers.

    Raises:
        InvalidPageSizeError: If page_size parses to an integer <= 0.
    """
    parsed_page = _to_int(page)
    if parsed_page is None or parsed_page < 1:
        parsed_page = DEFAULT_PAGE

    parsed_size = _to_int(page_size)
    if parsed_size is None:
        parsed_size = default_page_size
    elif parsed_size <= 0:
        raise InvalidPageSizeError(parsed_size)

    return parsed_page, parsed_size


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice ``items`` into the requested page.

    A page past the end is not an error: it comes back empty with the
    real ``total`` so the client can recover.
    """
    if page_size <= 0:
        raise InvalidPageSizeError(page_size)
    page = max(page, DEFAULT_PAGE)

    total = len(items)
    start = (page - 1) * page_size
    return Page[T](
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=max(1, math.ceil(total / page_size)),
    )


class CursorMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cursor: str | None
    next_cursor: str | None
    page_size: int
    has_next_page: bool


class CursorPage(BaseModel, Generic[T]):
    """A window of an ordered collection addressed by an opaque cursor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[T]
    meta: CursorMeta


def cursor_slice(items: Sequence[T], cursor: str | None, page_size: int) -> CursorPage[T]:
    """Return ``page_size`` items starting at ``cursor``.

    The cursor is the start offset as a decimal string. A missing, garbage
    or negative cursor starts from the beginning, the same leniency
    ``parse_page_params`` applies to ``page``. ``nextCursor`` is ``None``
    on the last window.

    Raises:
        InvalidPageSizeError: If page_size <= 0.
    """
    if page_size <= 0:
        raise InvalidPageSizeError(page_size)
    start = max(_to_int(cursor) or 0, 0)
    end = min(start + page_size, len(items))
    has_next = end < len(items)
    return CursorPage[T](
        items=list(items[start:end]),
        meta=CursorMeta(
            cursor=cursor or None,
            next_cursor=str(end) if has_next else None,
            page_size=page_size,
            has_next_page=has_next,
        ),
    )


def filter_items(
    items: Iterable[Mapping[str, Any]],
    exact: Mapping[str, Any] | None = None,
    contains: Mapping[str, str] | None = None,
) -> list[Any]:
    """Keep items matching every predicate.

    ``exact`` compares field values with ``==``; ``None`` values in the
    mapping are ignored so optional query params can be passed straight in.
    ``contains`` is a case-insensitive substring match. A key in
    ``contains`` may name several fields separated by ``|``; the item
    matches if any of them contains the term.
    """
    exact = {k: v for k, v in (exact or {}).items() if v is not None}
    contains = {k: v.lower() for k, v in (contains or {}).items() if v}

    result = []
    for item in items:
        if any(item.get(field) != value for field, value in exact.items()):
            continue
        if any(
            not any(term in str(item.get(field) or "").lower() for field in fields.split("|"))
            for fields, term in contains.items()
        ):
            continue
        result.append(item)
    return result


def sort_items(
    items: Iterable[Mapping[str, Any]],
    sort_by: str | None,
    sort_dir: str = "asc",
    key: Callable[[Mapping[str, Any]], Any] | None = None,
) -> list[Any]:
    """Stable sort by a field; items missing the field always sort last."""
    items = list(items)
    if not sort_by and key is None:
        return items

    get = key or (lambda item: item.get(sort_by))
    present = [item for item in items if get(item) is not None]
    missing = [item for item in items if get(item) is None]
    present.sort(key=get, reverse=sort_dir.lower() == "desc")
    return present + missing
