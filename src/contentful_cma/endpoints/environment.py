from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from contentful_cma.core.client import ContentfulClient
from contentful_cma.core.params import (
    SOURCE_ENVIRONMENT_HEADER,
    merge_headers,
    normalize_select,
    strip_sys,
    sys_version,
    version_header,
)

TOOL = "environment"


def _base_url(space_id: str) -> str:
    return f"/spaces/{space_id}/environments"


def _entity_url(space_id: str, environment_id: str) -> str:
    return f"{_base_url(space_id)}/{environment_id}"


async def get(
    client: ContentfulClient, *, space_id: str, environment_id: str
) -> Dict[str, Any]:
    return await client.get(_entity_url(space_id, environment_id), tool=TOOL)


async def get_many(
    client: ContentfulClient,
    *,
    space_id: str,
    query: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.get(
        _base_url(space_id), params=normalize_select(query), tool=TOOL
    )


async def create(
    client: ContentfulClient, *, space_id: str, data: Mapping[str, Any]
) -> Dict[str, Any]:
    return await client.post(_base_url(space_id), json=dict(data), tool=TOOL)


async def create_with_id(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    data: Mapping[str, Any],
    source_environment_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Create (or branch from ``source_environment_id``) with a chosen id."""
    source_header = (
        {SOURCE_ENVIRONMENT_HEADER: source_environment_id}
        if source_environment_id
        else None
    )
    return await client.put(
        _entity_url(space_id, environment_id),
        json=dict(data),
        headers=source_header,
        tool=TOOL,
    )


async def update(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    data: Mapping[str, Any],
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.put(
        _entity_url(space_id, environment_id),
        json=strip_sys(data),
        headers=merge_headers(version_header(sys_version(data)), headers),
        tool=TOOL,
    )


async def delete(
    client: ContentfulClient, *, space_id: str, environment_id: str
) -> Dict[str, Any]:
    return await client.delete(_entity_url(space_id, environment_id), tool=TOOL)


__all__ = ["get", "get_many", "create", "create_with_id", "update", "delete"]
