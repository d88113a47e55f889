"""
Query and header helpers shared by the endpoint modules.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Dict, Mapping, Optional

VERSION_HEADER = "X-Contentful-Version"
CONTENT_TYPE_HEADER = "X-Contentful-Content-Type"
ORGANIZATION_HEADER = "X-Contentful-Organization"
SOURCE_ENVIRONMENT_HEADER = "X-Contentful-Source-Environment"
JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"

_SYS_RE = re.compile(r"sys", re.IGNORECASE)


def normalize_select(
    query: Optional[Mapping[str, Any]],
) -> Optional[Dict[str, Any]]:
    """
    Make sure a ``select`` projection always includes ``sys``.

    The API rejects a select without sys, so ``fields.title`` becomes
    ``fields.title,sys``. Other keys pass through untouched; the input
    mapping is never mutated.
    """
    if not query:
        return dict(query) if query is not None else None

    normalized = dict(query)
    select = normalized.get("select")
    if select is None:
        return normalized

    if isinstance(select, (list, tuple)):
        select = ",".join(str(s) for s in select)
        normalized["select"] = select

    if select and not _SYS_RE.search(select):
        normalized["select"] = f"{select},sys"
    return normalized


def version_header(version: Optional[int]) -> Dict[str, Any]:
    return {VERSION_HEADER: version}


def merge_headers(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge header mappings left to right; later layers win, None is skipped."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def strip_sys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep copy of a payload without its read-only ``sys`` block."""
    body = copy.deepcopy(dict(data))
    body.pop("sys", None)
    return body


def sys_version(data: Optional[Mapping[str, Any]], default: Optional[int] = 0):
    if not data:
        return default
    sys_ = data.get("sys")
    if not isinstance(sys_, Mapping):
        return default
    version = sys_.get("version")
    return default if version is None else version


def sys_id(data: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not data:
        return None
    sys_ = data.get("sys")
    return sys_.get("id") if isinstance(sys_, Mapping) else None


__all__ = [
    "VERSION_HEADER",
    "CONTENT_TYPE_HEADER",
    "ORGANIZATION_HEADER",
    "SOURCE_ENVIRONMENT_HEADER",
    "JSON_PATCH_CONTENT_TYPE",
    "normalize_select",
    "version_header",
    "merge_headers",
    "strip_sys",
    "sys_version",
    "sys_id",
]
