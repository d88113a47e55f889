"""Transport and helper layer for contentful-cma (resource-agnostic)."""

from .client import (
    ContentfulClient,
    ContentfulClientError,
    ContentfulHTTPError,
    ContentfulModelValidationError,
    ContentfulParseError,
    RetryConfig,
)
from .collections import collection_items, fetch_all, iter_collection
from .config import create_client_from_env, load_env_config
from .params import merge_headers, normalize_select, strip_sys, sys_version

__all__ = [
    # Client
    "ContentfulClient",
    "RetryConfig",
    # Exceptions
    "ContentfulClientError",
    "ContentfulHTTPError",
    "ContentfulParseError",
    "ContentfulModelValidationError",
    # Collections
    "collection_items",
    "iter_collection",
    "fetch_all",
    # Params
    "normalize_select",
    "merge_headers",
    "strip_sys",
    "sys_version",
    # Config helpers
    "create_client_from_env",
    "load_env_config",
]
