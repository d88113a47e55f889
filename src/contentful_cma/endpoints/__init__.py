"""
Endpoint namespace: one module per CMA resource.

Every public coroutine takes ``client`` first and keyword-only path/query
params, and returns the decoded JSON payload.
"""

from . import asset, content_type, entry, environment, space, team

__all__ = ["asset", "content_type", "entry", "environment", "space", "team"]
