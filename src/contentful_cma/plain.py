"""
Plain API: endpoint functions bound to a client and default params.

    async with ContentfulClient(access_token=token) as client:
        cma = PlainClient(client, defaults={"space_id": "abc", "environment_id": "master"})
        entry = await cma.entry.get(entry_id="xyz")
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, Mapping, Optional

from .core.client import ContentfulClient
from .registry import endpoint_table

DEFAULT_KEYS = ("space_id", "environment_id", "organization_id")


class ResourceApi:
    """Operations of one resource, e.g. ``entry.get`` or ``asset.publish``."""

    def __init__(
        self,
        name: str,
        operations: Mapping[str, Callable],
        client: ContentfulClient,
        defaults: Mapping[str, Any],
    ):
        self._name = name
        self._operations = dict(operations)
        self._client = client
        self._defaults = dict(defaults)

    def __getattr__(self, op: str) -> Callable:
        try:
            func = self._operations[op]
        except KeyError:
            raise AttributeError(f"{self._name!r} has no operation {op!r}") from None

        accepted = inspect.signature(func).parameters
        defaults = {
            k: v
            for k, v in self._defaults.items()
            if k in DEFAULT_KEYS and k in accepted and v is not None
        }

        async def bound(**kwargs: Any) -> Dict[str, Any]:
            return await func(self._client, **{**defaults, **kwargs})

        bound.__name__ = op
        bound.__doc__ = func.__doc__
        return bound

    def __dir__(self):
        return sorted(self._operations)

    def __repr__(self) -> str:
        return f"<ResourceApi {self._name}>"


class PlainClient:
    def __init__(
        self,
        client: ContentfulClient,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        self.client = client
        self.defaults: Dict[str, Any] = dict(defaults or {})
        self._resources = {
            name: ResourceApi(name, ops, client, self.defaults)
            for name, ops in endpoint_table().items()
        }

    def __getattr__(self, name: str) -> ResourceApi:
        resources = self.__dict__.get("_resources", {})
        if name in resources:
            return resources[name]
        raise AttributeError(f"No CMA resource named {name!r}")

    async def __aenter__(self) -> "PlainClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.client.aclose()


__all__ = ["PlainClient", "ResourceApi"]
