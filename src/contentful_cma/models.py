from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


class Link(BaseModel):
    type: str = "Link"
    link_type: str = Field(alias="linkType")
    id: str

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SysLink(BaseModel):
    """The ``{"sys": {"type": "Link", ...}}`` wrapper used for references."""

    sys: Link

    model_config = ConfigDict(extra="ignore")

    @property
    def id(self) -> str:
        return self.sys.id


class Sys(BaseModel):
    """
    Metadata block present on every CMA entity.
    Most keys are optional because their presence depends on entity type and
    lifecycle (e.g. ``publishedVersion`` only after a publish).
    """

    id: Optional[str] = None
    type: str
    version: Optional[int] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
    published_version: Optional[int] = Field(default=None, alias="publishedVersion")
    archived_version: Optional[int] = Field(default=None, alias="archivedVersion")
    space: Optional[SysLink] = None
    environment: Optional[SysLink] = None
    content_type: Optional[SysLink] = Field(default=None, alias="contentType")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class EntityProps(BaseModel):
    sys: Sys

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def id(self) -> Optional[str]:
        return self.sys.id

    @property
    def version(self) -> Optional[int]:
        return self.sys.version

    @property
    def is_published(self) -> bool:
        return self.sys.published_version is not None

    @property
    def is_archived(self) -> bool:
        return self.sys.archived_version is not None


class SpaceProps(EntityProps):
    name: str


class ContentTypeProps(EntityProps):
    name: str
    description: Optional[str] = None
    display_field: Optional[str] = Field(default=None, alias="displayField")
    fields: List[Dict[str, Any]] = Field(default_factory=list)


class EntryProps(EntityProps):
    fields: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @property
    def content_type_id(self) -> Optional[str]:
        return self.sys.content_type.id if self.sys.content_type else None


class AssetFile(BaseModel):
    content_type: Optional[str] = Field(default=None, alias="contentType")
    file_name: Optional[str] = Field(default=None, alias="fileName")
    url: Optional[str] = None
    upload: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AssetProps(EntityProps):
    fields: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @property
    def file_locales(self) -> List[str]:
        return list((self.fields.get("file") or {}).keys())

    def file_for(self, locale: str) -> Optional[AssetFile]:
        raw = (self.fields.get("file") or {}).get(locale)
        return AssetFile.model_validate(raw) if isinstance(raw, dict) else None


class TeamProps(EntityProps):
    name: str
    description: Optional[str] = None


class Collection(BaseModel, Generic[T]):
    total: int = 0
    skip: int = 0
    limit: int = 0
    items: List[T] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "Link",
    "SysLink",
    "Sys",
    "EntityProps",
    "SpaceProps",
    "ContentTypeProps",
    "EntryProps",
    "AssetFile",
    "AssetProps",
    "TeamProps",
    "Collection",
]
