"""
Copy content types, entries and assets from one space into another.

Work is strictly sequential: every content type is created and published
before the first entry is copied, and assets come last. Any failure is
logged and re-raised; nothing is retried or rolled back.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .core.client import ContentfulClient, validate_model
from .core.collections import MAX_PAGE_SIZE, collection_items, iter_collection
from .core.errors import ContentfulClientError
from .core.observability import log_event
from .core.params import strip_sys, sys_id
from .endpoints import asset, content_type, entry, space
from .models import SpaceProps

log = logging.getLogger("contentful_cma.clone")

DEFAULT_ENVIRONMENT_ID = "master"
DEFAULT_PAGE_SIZE = 10
SPACE_CREATE_DELAY_SECONDS = 5.0


@dataclass
class CloneResult:
    source_space_id: str
    destination_space_id: str
    content_types: int = 0
    entries: int = 0
    assets: int = 0


def _absolute_url(url: Optional[str]) -> Optional[str]:
    # Asset URLs come back protocol-relative ("//images.ctfassets.net/...")
    if url and url.startswith("//"):
        return "http:" + url
    return url


def build_destination_asset(source: Dict[str, Any]) -> Dict[str, Any]:
    """
    Reduce a source asset to what can be re-created elsewhere: its ``sys``,
    title/description, and the first locale's file as an ``upload`` URL.
    """
    destination: Dict[str, Any] = {}
    if "sys" in source:
        destination["sys"] = source["sys"]

    fields = source.get("fields")
    if not fields:
        return destination

    destination["fields"] = {
        k: v for k, v in fields.items() if k in ("title", "description")
    }

    files = fields.get("file") or {}
    locale = next(iter(files), None)
    if locale and files.get(locale):
        source_file = files[locale]
        destination["fields"]["file"] = {
            locale: {
                "contentType": source_file.get("contentType"),
                "fileName": source_file.get("fileName"),
                "upload": _absolute_url(
                    source_file.get("url") or source_file.get("upload")
                ),
            }
        }
    return destination


class SpaceCloner:
    def __init__(
        self,
        source: ContentfulClient,
        destination: ContentfulClient,
        *,
        environment_id: str = DEFAULT_ENVIRONMENT_ID,
        page_size: int = DEFAULT_PAGE_SIZE,
        space_create_delay: float = SPACE_CREATE_DELAY_SECONDS,
    ):
        self.source = source
        self.destination = destination
        self.environment_id = environment_id
        self.page_size = page_size
        self.space_create_delay = space_create_delay

    async def clone(
        self,
        source_space_id: str,
        destination_space_id: Optional[str] = None,
        destination_organization_id: Optional[str] = None,
    ) -> CloneResult:
        try:
            source_space = validate_model(
                SpaceProps, await space.get(self.source, space_id=source_space_id)
            )
        except ContentfulClientError:
            log.error("Could not find source Space %s", source_space_id)
            raise

        destination_space = await self._destination_space(
            source_space, destination_space_id, destination_organization_id
        )

        log.info(
            'Cloning from Space "%s" (%s) to "%s" (%s)',
            source_space.name,
            source_space.id,
            destination_space.name,
            destination_space.id,
        )

        result = CloneResult(
            source_space_id=source_space.id or source_space_id,
            destination_space_id=destination_space.id or "",
        )
        src_id = result.source_space_id
        dst_id = result.destination_space_id

        result.content_types = await self.clone_content_types(src_id, dst_id)
        result.entries = await self.clone_entries(src_id, dst_id)
        result.assets = await self.clone_assets(src_id, dst_id)

        log_event(
            "clone_done",
            logger=log,
            space_id=dst_id,
            count=result.content_types + result.entries + result.assets,
        )
        return result

    async def _destination_space(
        self,
        source_space: SpaceProps,
        destination_space_id: Optional[str],
        organization_id: Optional[str],
    ) -> SpaceProps:
        if destination_space_id:
            try:
                payload = await space.get(
                    self.destination, space_id=destination_space_id
                )
                return validate_model(SpaceProps, payload)
            except ContentfulClientError:
                log.error("Could not find destination Space %s", destination_space_id)
                raise

        payload = await space.create(
            self.destination,
            data={"name": f"Clone of {source_space.name}"},
            organization_id=organization_id,
        )
        # New spaces need a moment before their default environment accepts writes.
        await asyncio.sleep(self.space_create_delay)
        return validate_model(SpaceProps, payload)

    async def clone_content_types(self, src_id: str, dst_id: str) -> int:
        payload = await content_type.get_many(
            self.source,
            space_id=src_id,
            environment_id=self.environment_id,
            query={"limit": MAX_PAGE_SIZE},
        )
        count = 0
        for item in collection_items(payload):
            log.info("Creating & publishing Content Type %s", item.get("name"))
            body = strip_sys(item)
            item_id = sys_id(item)
            if item_id:
                created = await content_type.create_with_id(
                    self.destination,
                    space_id=dst_id,
                    environment_id=self.environment_id,
                    content_type_id=item_id,
                    data=body,
                )
            else:
                created = await content_type.create(
                    self.destination,
                    space_id=dst_id,
                    environment_id=self.environment_id,
                    data=body,
                )
            await content_type.publish(
                self.destination,
                space_id=dst_id,
                environment_id=self.environment_id,
                content_type_id=sys_id(created),
                data=created,
            )
            count += 1
        return count

    def _pages(self, endpoint, space_id: str):
        fetch = functools.partial(
            endpoint.get_many,
            self.source,
            space_id=space_id,
            environment_id=self.environment_id,
        )
        return iter_collection(
            fetch, page_size=self.page_size, order="sys.createdAt"
        )

    async def clone_entries(self, src_id: str, dst_id: str) -> int:
        count = 0
        async for item in self._pages(entry, src_id):
            item_id = sys_id(item)
            log.info("Creating Entry %s", item_id)
            content_type_id = item["sys"]["contentType"]["sys"]["id"]
            try:
                if item_id:
                    await entry.create_with_id(
                        self.destination,
                        space_id=dst_id,
                        environment_id=self.environment_id,
                        entry_id=item_id,
                        content_type_id=content_type_id,
                        data=strip_sys(item),
                    )
                else:
                    await entry.create(
                        self.destination,
                        space_id=dst_id,
                        environment_id=self.environment_id,
                        content_type_id=content_type_id,
                        data=strip_sys(item),
                    )
            except ContentfulClientError as exc:
                log.error("Error creating Entry\n%s", exc)
                raise
            count += 1
        return count

    async def clone_assets(self, src_id: str, dst_id: str) -> int:
        count = 0
        async for item in self._pages(asset, src_id):
            log.info("Creating Asset %s", sys_id(item))
            await self._clone_asset(item, dst_id)
            count += 1
        return count

    async def _clone_asset(self, item: Dict[str, Any], dst_id: str) -> None:
        destination_asset = build_destination_asset(item)
        item_id = sys_id(item)
        try:
            if item_id:
                created = await asset.create_with_id(
                    self.destination,
                    space_id=dst_id,
                    environment_id=self.environment_id,
                    asset_id=item_id,
                    data=strip_sys(destination_asset),
                )
            else:
                created = await asset.create(
                    self.destination,
                    space_id=dst_id,
                    environment_id=self.environment_id,
                    data=strip_sys(destination_asset),
                )
        except ContentfulClientError as exc:
            log.error("Error creating Asset\n%s", exc)
            raise

        log.info("Processing Asset %s", sys_id(created))
        files = (created.get("fields") or {}).get("file") or {}
        locale = next(iter(files), None)
        if not locale:
            return
        try:
            await asset.process_for_locale(
                self.destination,
                space_id=dst_id,
                environment_id=self.environment_id,
                asset=created,
                locale=locale,
            )
        except ContentfulClientError as exc:
            log.error("Error processing Asset\n%s", exc)
            raise


__all__ = ["SpaceCloner", "CloneResult", "build_destination_asset"]
