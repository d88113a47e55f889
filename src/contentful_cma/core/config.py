from __future__ import annotations

import os
from typing import Tuple

from . import client as _client
from .client import DEFAULT_HOST, ContentfulClient

ACCESS_TOKEN_ENV = "CONTENTFUL_MANAGEMENT_ACCESS_TOKEN"
HOST_ENV = "CONTENTFUL_HOST"


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load the CMA access token and host from environment (optional .env)."""
    if use_dotenv:
        _client.load_dotenv()
    access_token = os.getenv(ACCESS_TOKEN_ENV, "").strip()
    host = os.getenv(HOST_ENV, "").strip() or DEFAULT_HOST
    return access_token, host


def create_client_from_env(**kwargs) -> ContentfulClient:
    """Create a ContentfulClient from environment variables."""
    access_token, host = load_env_config()
    if not access_token:
        raise ValueError(f"Missing {ACCESS_TOKEN_ENV} in environment.")
    return ContentfulClient(access_token=access_token, host=host, **kwargs)


__all__ = [
    "load_env_config",
    "create_client_from_env",
    "ACCESS_TOKEN_ENV",
    "HOST_ENV",
]
