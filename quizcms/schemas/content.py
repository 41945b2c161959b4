from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from quizcms.exceptions import MediaResolutionError


class ContentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class CollectionKind(str, Enum):
    """Asset collections a media reference can point into"""
    ART = "art"
    FILMS = "films"
    ALBUMS = "albums"
    BOOKS = "books"


class MediaRef(BaseModel):
    """Tagged pointer into one of the media collections"""
    kind: CollectionKind
    id: int

    model_config = {"frozen": True}

    @classmethod
    def coerce(cls, raw: Any, fallback_kind: str | None = None) -> "MediaRef | None":
        """Normalize a stored reference into a MediaRef.

        Accepted shapes:
            {"kind": "films", "id": 7}            canonical
            {"relationTo": "films", "value": 7}   explicit, value may be a populated object
            {"id": 7, "title": ...}               populated object, kind from fallback_kind
            7                                     bare id, kind from fallback_kind

        Returns None for an empty reference and raises MediaResolutionError when
        the collection or id cannot be determined.
        """
        if raw is None or raw == "":
            return None
        if isinstance(raw, MediaRef):
            return raw

        kind: Any = fallback_kind
        item_id: Any = None
        if isinstance(raw, dict):
            if "relationTo" in raw:
                kind = raw.get("relationTo")
                value = raw.get("value")
                item_id = value.get("id") if isinstance(value, dict) else value
            elif "kind" in raw:
                kind = raw.get("kind")
                item_id = raw.get("id")
            else:
                item_id = raw.get("id")
        elif isinstance(raw, (int, float, str)):
            item_id = raw

        try:
            return cls(kind=CollectionKind(kind), id=_parse_id(item_id))
        except (TypeError, ValueError):
            raise MediaResolutionError(
                str(kind) if kind is not None else None,
                None,
                reason=f"unrecognized reference {raw!r}",
            )


def _parse_id(value: Any) -> int:
    """Integer id from a stored value; bools and fractional numbers are rejected"""
    if isinstance(value, bool):
        raise ValueError(f"boolean id {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"invalid id {value!r}")


class PublishOptions(BaseModel):
    """Options carried by every content write"""
    suppress_cascade: bool = Field(False, description="Do not run the application publish cascade")


class PublishSummary(BaseModel):
    """Result of cascading a publish through an application"""
    application_id: int
    published_section_ids: list[int] = Field(default_factory=list)
    skipped_section_ids: list[int] = Field(default_factory=list)
    published_step_ids: list[int] = Field(default_factory=list)
    skipped_step_ids: list[int] = Field(default_factory=list)

    @property
    def write_count(self) -> int:
        return len(self.published_section_ids) + len(self.published_step_ids)


class ApplicationUpdateRequest(BaseModel):
    """Application write request"""
    title: str | None = Field(None, min_length=1)
    description: str | None = None
    published: bool | None = Field(None, description="Mark as the live application")
    status: ContentStatus | None = Field(None, description="Version status")


class ApplicationResponse(BaseModel):
    """Application response"""
    id: int
    title: str
    slug: str
    description: str | None
    published: bool
    status: ContentStatus
    main_section_ids: list[int]
    follow_up_section_ids: list[int]

    model_config = {"from_attributes": True}


class ApplicationUpdateResponse(BaseModel):
    """Application write response, with the cascade summary when one ran"""
    application: ApplicationResponse
    publish_summary: PublishSummary | None = None
