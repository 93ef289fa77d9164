"""
MemoPad — Pydantic Request/Response Schemas
============================================

What:  Pydantic models defining the JSON contract between the page and the API.
How:   Memo is both the stored record and its JSON representation; MemoPayload
       validates POST/PUT bodies before they reach the store.
Who:   Used by MemoStore, the route handlers and the OpenAPI document.

JSON uses camelCase (createdAt, updatedAt) to match the browser page;
Python attributes stay snake_case. `updatedAt` is omitted until the first
update, so responses are serialized with exclude_none.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_serializer


def format_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision, e.g. 2024-01-15T12:00:00.000Z."""
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class Memo(BaseModel):
    """
    What:  A titled text note.
    Who:   Returned by GET /memos (as map values) and GET /memo/{id}.

    `id`, `created_at` are fixed at creation; `title`, `content` and
    `updated_at` change only through MemoStore.update().
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(description="Timestamp-derived identifier (milliseconds since epoch)")
    title: str = Field(min_length=1, description="Memo title")
    content: str = Field(min_length=1, description="Memo body")
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(
        default=None,
        alias="updatedAt",
        description="Last update time (UTC); absent until the memo is updated",
    )

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return format_timestamp(value)


class MemoPayload(BaseModel):
    """
    What:  Body of POST /memo and PUT /memo/{id}.

    Both fields are optional at the schema level; POST requires both to be
    non-blank, which MemoStore.create() enforces. Non-string values make the
    body malformed rather than silently coercing numbers into titles.
    """

    title: Optional[StrictStr] = Field(default=None, description="Memo title")
    content: Optional[StrictStr] = Field(default=None, description="Memo body")


class ServerInfo(BaseModel):
    """Diagnostics returned by GET /server-info."""

    model_config = ConfigDict(populate_by_name=True)

    host: str = Field(description="Address the server binds to and advertises")
    port: int = Field(description="Listening port")
    local_ip: str = Field(alias="localIP", description="Private (or configured) address")
    public_ip: Optional[str] = Field(
        default=None, alias="publicIP", description="Non-private address, if one was found"
    )
    environment: str = Field(description="Deployment environment name")
