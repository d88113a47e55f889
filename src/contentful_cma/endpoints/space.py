from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from contentful_cma.core.client import ContentfulClient
from contentful_cma.core.params import (
    ORGANIZATION_HEADER,
    merge_headers,
    normalize_select,
    strip_sys,
    sys_version,
    version_header,
)

TOOL = "space"
BASE_URL = "/spaces"


def _entity_url(space_id: str) -> str:
    return f"{BASE_URL}/{space_id}"


async def get(client: ContentfulClient, *, space_id: str) -> Dict[str, Any]:
    return await client.get(_entity_url(space_id), tool=TOOL)


async def get_many(
    client: ContentfulClient, *, query: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    return await client.get(BASE_URL, params=normalize_select(query), tool=TOOL)


async def create(
    client: ContentfulClient,
    *,
    data: Mapping[str, Any],
    organization_id: Optional[str] = None,
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Create a space. ``organization_id`` is only required when the token's
    user belongs to more than one organization.
    """
    org_header = {ORGANIZATION_HEADER: organization_id} if organization_id else None
    return await client.post(
        BASE_URL,
        json=dict(data),
        headers=merge_headers(org_header, headers),
        tool=TOOL,
    )


async def update(
    client: ContentfulClient,
    *,
    space_id: str,
    data: Mapping[str, Any],
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.put(
        _entity_url(space_id),
        json=strip_sys(data),
        headers=merge_headers(version_header(sys_version(data)), headers),
        tool=TOOL,
    )


async def delete(client: ContentfulClient, *, space_id: str) -> Dict[str, Any]:
    return await client.delete(_entity_url(space_id), tool=TOOL)


__all__ = ["get", "get_many", "create", "update", "delete"]
