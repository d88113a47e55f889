"""
Shared helpers for working with CMA collection payloads.

A collection looks like ``{"sys": {"type": "Array"}, "total": n, "skip": s,
"limit": l, "items": [...]}``.
"""

from __future__ import annotations

from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
)

from .observability import log_event

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

Fetch = Callable[..., Awaitable[Dict[str, Any]]]


def _clamp_page_size(page_size: int) -> int:
    """Clamp page_size into the range the API accepts."""
    return max(1, min(page_size, MAX_PAGE_SIZE))


def collection_items(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Extract the items list from a collection payload.
    Raises ValueError if the expected structure is malformed.
    """
    items = payload.get("items", [])
    if not isinstance(items, list):
        raise ValueError("Expected items to be a list.")
    return [i for i in items if isinstance(i, dict)]


async def iter_collection(
    fetch: Fetch,
    *,
    query: Optional[Mapping[str, Any]] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    order: Optional[str] = "sys.createdAt",
) -> AsyncIterator[Dict[str, Any]]:
    """
    Walk a collection endpoint page by page using skip/limit.

    ``fetch`` is any endpoint bound to its path params that accepts a
    ``query`` keyword, e.g. ``functools.partial(entry.get_many, client,
    space_id=..., environment_id=...)``. Stops on an empty page or once
    ``total`` items have been seen.
    """
    page_size = _clamp_page_size(page_size)
    base_query: Dict[str, Any] = dict(query or {})
    if order and "order" not in base_query:
        base_query["order"] = order

    skip = int(base_query.pop("skip", 0) or 0)
    while True:
        payload = await fetch(query={**base_query, "skip": skip, "limit": page_size})
        items = collection_items(payload)
        # skip counts every item the API returned, usable or not
        fetched = len(payload.get("items") or [])
        total = payload.get("total") if isinstance(payload.get("total"), int) else None

        log_event("collection_page", count=len(items), skip=skip, total=total)

        for item in items:
            yield item

        if not fetched:
            break
        skip += fetched
        if total is not None and skip >= total:
            break


async def fetch_all(fetch: Fetch, **kwargs: Any) -> List[Dict[str, Any]]:
    return [item async for item in iter_collection(fetch, **kwargs)]


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "collection_items",
    "iter_collection",
    "fetch_all",
]
