from .client import (
    ContentfulClientError,
    ContentfulHTTPError,
    ContentfulModelValidationError,
    ContentfulParseError,
)

__all__ = [
    "ContentfulClientError",
    "ContentfulHTTPError",
    "ContentfulParseError",
    "ContentfulModelValidationError",
]
