"""contentful_cma package exports."""

from . import endpoints
from .clone import CloneResult, SpaceCloner, build_destination_asset
from .core.client import (
    ContentfulClient,
    ContentfulClientError,
    ContentfulHTTPError,
    ContentfulModelValidationError,
    ContentfulParseError,
    RetryConfig,
    __version__,
)
from .core.collections import collection_items, fetch_all, iter_collection
from .core.config import create_client_from_env, load_env_config
from .core.params import normalize_select
from .plain import PlainClient, ResourceApi

__all__ = [
    "__version__",
    # Client
    "ContentfulClient",
    "RetryConfig",
    "PlainClient",
    "ResourceApi",
    "endpoints",
    # Exceptions
    "ContentfulClientError",
    "ContentfulHTTPError",
    "ContentfulParseError",
    "ContentfulModelValidationError",
    # Helpers
    "normalize_select",
    "collection_items",
    "iter_collection",
    "fetch_all",
    "create_client_from_env",
    "load_env_config",
    # Clone
    "SpaceCloner",
    "CloneResult",
    "build_destination_asset",
]
