from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional

from contentful_cma.core.client import ContentfulClient
from contentful_cma.core.params import (
    CONTENT_TYPE_HEADER,
    JSON_PATCH_CONTENT_TYPE,
    merge_headers,
    normalize_select,
    strip_sys,
    sys_version,
    version_header,
)

TOOL = "entry"


def _base_url(space_id: str, environment_id: str) -> str:
    return f"/spaces/{space_id}/environments/{environment_id}/entries"


def _entity_url(space_id: str, environment_id: str, entry_id: str) -> str:
    return f"{_base_url(space_id, environment_id)}/{entry_id}"


async def get(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
    query: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.get(
        _entity_url(space_id, environment_id, entry_id),
        params=normalize_select(query),
        headers=merge_headers(headers),
        tool=TOOL,
    )


async def get_many(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    query: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.get(
        _base_url(space_id, environment_id),
        params=normalize_select(query),
        tool=TOOL,
    )


async def patch(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
    version: int,
    data: List[Dict[str, Any]],
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Apply JSON-patch operations, e.g.
    ``[{"op": "replace", "path": "/fields/title/en-US", "value": "New"}]``.
    """
    return await client.patch(
        _entity_url(space_id, environment_id, entry_id),
        json=data,
        headers=merge_headers(
            version_header(version),
            {"Content-Type": JSON_PATCH_CONTENT_TYPE},
            headers,
        ),
        tool=TOOL,
    )


async def update(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
    data: Mapping[str, Any],
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.put(
        _entity_url(space_id, environment_id, entry_id),
        json=strip_sys(data),
        headers=merge_headers(version_header(sys_version(data)), headers),
        tool=TOOL,
    )


async def delete(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
) -> Dict[str, Any]:
    return await client.delete(
        _entity_url(space_id, environment_id, entry_id), tool=TOOL
    )


async def publish(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    return await client.put(
        f"{_entity_url(space_id, environment_id, entry_id)}/published",
        headers=version_header(sys_version(data, default=None)),
        tool=TOOL,
    )


async def unpublish(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
) -> Dict[str, Any]:
    return await client.delete(
        f"{_entity_url(space_id, environment_id, entry_id)}/published", tool=TOOL
    )


async def archive(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
) -> Dict[str, Any]:
    return await client.put(
        f"{_entity_url(space_id, environment_id, entry_id)}/archived", tool=TOOL
    )


async def unarchive(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
) -> Dict[str, Any]:
    return await client.delete(
        f"{_entity_url(space_id, environment_id, entry_id)}/archived", tool=TOOL
    )


async def create(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    content_type_id: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    return await client.post(
        _base_url(space_id, environment_id),
        json=copy.deepcopy(dict(data)),
        headers={CONTENT_TYPE_HEADER: content_type_id},
        tool=TOOL,
    )


async def create_with_id(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    entry_id: str,
    content_type_id: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    return await client.put(
        _entity_url(space_id, environment_id, entry_id),
        json=copy.deepcopy(dict(data)),
        headers={CONTENT_TYPE_HEADER: content_type_id},
        tool=TOOL,
    )


__all__ = [
    "get",
    "get_many",
    "patch",
    "update",
    "delete",
    "publish",
    "unpublish",
    "archive",
    "unarchive",
    "create",
    "create_with_id",
]
