from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Optional

from contentful_cma.core.client import ContentfulClient
from contentful_cma.core.params import (
    merge_headers,
    normalize_select,
    strip_sys,
    sys_id,
    sys_version,
    version_header,
)

TOOL = "asset"


def _base_url(space_id: str, environment_id: str) -> str:
    return f"/spaces/{space_id}/environments/{environment_id}/assets"


def _entity_url(space_id: str, environment_id: str, asset_id: str) -> str:
    return f"{_base_url(space_id, environment_id)}/{asset_id}"


async def get(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
    query: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.get(
        _entity_url(space_id, environment_id, asset_id),
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


async def update(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
    data: Mapping[str, Any],
    headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    return await client.put(
        _entity_url(space_id, environment_id, asset_id),
        json=strip_sys(data),
        headers=merge_headers(version_header(sys_version(data)), headers),
        tool=TOOL,
    )


async def delete(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
) -> Dict[str, Any]:
    return await client.delete(
        _entity_url(space_id, environment_id, asset_id), tool=TOOL
    )


async def publish(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    return await client.put(
        f"{_entity_url(space_id, environment_id, asset_id)}/published",
        headers=version_header(sys_version(data, default=None)),
        tool=TOOL,
    )


async def unpublish(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
) -> Dict[str, Any]:
    return await client.delete(
        f"{_entity_url(space_id, environment_id, asset_id)}/published", tool=TOOL
    )


async def archive(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
) -> Dict[str, Any]:
    return await client.put(
        f"{_entity_url(space_id, environment_id, asset_id)}/archived", tool=TOOL
    )


async def unarchive(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
) -> Dict[str, Any]:
    return await client.delete(
        f"{_entity_url(space_id, environment_id, asset_id)}/archived", tool=TOOL
    )


async def create(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    return await client.post(
        _base_url(space_id, environment_id),
        json=copy.deepcopy(dict(data)),
        tool=TOOL,
    )


async def create_with_id(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset_id: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    return await client.put(
        _entity_url(space_id, environment_id, asset_id),
        json=copy.deepcopy(dict(data)),
        tool=TOOL,
    )


async def process_for_locale(
    client: ContentfulClient,
    *,
    space_id: str,
    environment_id: str,
    asset: Mapping[str, Any],
    locale: str,
) -> Dict[str, Any]:
    """
    Ask the API to fetch and process the uploaded file for one locale.

    Processing is asynchronous on the server side; the response body is
    empty and the asset version bumps once the file is ready.
    """
    asset_id = sys_id(asset)
    if not asset_id:
        raise ValueError("asset must carry sys.id to be processed.")
    return await client.put(
        f"{_entity_url(space_id, environment_id, asset_id)}/files/{locale}/process",
        headers=version_header(sys_version(asset, default=None)),
        tool=TOOL,
    )


__all__ = [
    "get",
    "get_many",
    "update",
    "delete",
    "publish",
    "unpublish",
    "archive",
    "unarchive",
    "create",
    "create_with_id",
    "process_for_locale",
]
