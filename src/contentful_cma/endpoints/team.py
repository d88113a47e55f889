from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from contentful_cma.core.client import ContentfulClient
from contentful_cma.core.params import (
    merge_headers,
    normalize_select,
    strip_sys,
    sys_version,
    version_header,
)

TOOL = "team"


def _base_url(organization_id: str) -> str:
    return f"/organizations/{organization_id}/teams"


def _entity_url(organization_id: str, team_id: str) -> str:
    return f"{_base_url(organization_id)}/{team_id}"


async def get(
    client: ContentfulClient, *, organization_id: str, team_id: str
) -> Dict[str, Any]:
    return await client.get(_entity_url(organization_id, team_id), tool=TOOL)


async def get_many(
    client: ContentfulClient,
    *,
    organization_id: str,
    query: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.get(
        _base_url(organization_id), params=normalize_select(query), tool=TOOL
    )


async def create(
    client: ContentfulClient,
    *,
    organization_id: str,
    data: Mapping[str, Any],
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.post(
        _base_url(organization_id), json=dict(data), headers=headers, tool=TOOL
    )


async def update(
    client: ContentfulClient,
    *,
    organization_id: str,
    team_id: str,
    data: Mapping[str, Any],
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.put(
        _entity_url(organization_id, team_id),
        json=strip_sys(data),
        headers=merge_headers(version_header(sys_version(data)), headers),
        tool=TOOL,
    )


async def delete(
    client: ContentfulClient, *, organization_id: str, team_id: str
) -> Dict[str, Any]:
    return await client.delete(_entity_url(organization_id, team_id), tool=TOOL)


__all__ = ["get", "get_many", "create", "update", "delete"]
