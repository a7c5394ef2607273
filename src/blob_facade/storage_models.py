"""Descriptors returned by the facade's write, copy, delete and list operations.

The storage SDK hands back a mix of property objects and header dicts.
These models pin down the fields callers can rely on, independent of the
SDK version in use.
"""

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field


def _enum_value(value: Any) -> Optional[str]:
    """Flatten SDK string enums (BlobType, PublicAccess, ...) to plain str."""
    if value is None:
        return None
    return getattr(value, "value", value)


class ContainerEntry(BaseModel):
    """A container within the storage account."""
    name: str
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    public_access: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_properties(cls, props: Any) -> "ContainerEntry":
        """Build from an SDK ``ContainerProperties`` object."""
        return cls(
            name=props.name,
            last_modified=getattr(props, "last_modified", None),
            etag=getattr(props, "etag", None),
            public_access=_enum_value(getattr(props, "public_access", None)),
            metadata=dict(getattr(props, "metadata", None) or {}),
        )


class BlobEntry(BaseModel):
    """Full metadata for a single blob from a flat listing."""
    name: str
    container: Optional[str] = None
    size: int = 0
    content_type: Optional[str] = None
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    creation_time: Optional[datetime] = None
    blob_type: Optional[str] = None
    blob_tier: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_properties(cls, props: Any) -> "BlobEntry":
        """Build from an SDK ``BlobProperties`` object."""
        settings = getattr(props, "content_settings", None)
        return cls(
            name=props.name,
            container=getattr(props, "container", None),
            size=getattr(props, "size", None) or 0,
            content_type=getattr(settings, "content_type", None),
            etag=getattr(props, "etag", None),
            last_modified=getattr(props, "last_modified", None),
            creation_time=getattr(props, "creation_time", None),
            blob_type=_enum_value(getattr(props, "blob_type", None)),
            blob_tier=_enum_value(getattr(props, "blob_tier", None)),
            metadata=dict(getattr(props, "metadata", None) or {}),
        )


class CopyResult(BaseModel):
    """Outcome of a synchronous server-side copy."""
    copy_id: Optional[str] = None
    copy_status: Optional[str] = None   # "success" for a completed sync copy
    error_code: Optional[str] = None
    request_id: Optional[str] = None
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None

    @classmethod
    def from_response(cls, response: Mapping[str, Any]) -> "CopyResult":
        """Build from the header dict returned by ``start_copy_from_url``."""
        return cls(
            copy_id=response.get("copy_id"),
            copy_status=_enum_value(response.get("copy_status")),
            error_code=response.get("error_code"),
            request_id=response.get("request_id"),
            etag=response.get("etag"),
            last_modified=response.get("last_modified"),
        )


class DeleteResult(BaseModel):
    """Deletion confirmation taken from the delete response headers."""
    request_id: Optional[str] = None
    date: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "DeleteResult":
        """Build from raw HTTP response headers (case-insensitive lookup)."""
        lowered = {k.lower(): v for k, v in headers.items()}
        return cls(
            request_id=lowered.get("x-ms-request-id"),
            date=lowered.get("date"),
            version=lowered.get("x-ms-version"),
        )
