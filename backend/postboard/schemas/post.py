"""
PostBoard Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of the Post endpoints.
How:   FastAPI uses these models to validate request bodies, serialize
       responses, and generate the OpenAPI document.

Request bodies forbid unknown fields; a body that does not match its schema
is answered with 400 by the RequestValidationError handler in main.py.
Responses use camelCase timestamp keys (`createdAt`, `updatedAt`).
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """
    Body of POST /api/posts.

    `title` and `content` are declared optional so that a missing value is
    reported with the service's "Title and content are required" message
    rather than a schema error.
    """
    title: Optional[str] = Field(default=None, description="Post title (required)")
    content: Optional[str] = Field(default=None, description="Post body (required)")
    author: Optional[str] = Field(
        default=None,
        description="Author name; 'Anonymous' when absent or empty",
    )

    model_config = {"extra": "forbid"}


class PostUpdate(BaseModel):
    """
    Body of PUT /api/posts/{id}.

    Omitted fields keep their stored value. `title`/`content` sent as
    null or empty are rejected.
    """
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New body")
    author: Optional[str] = Field(default=None, description="New author name")

    model_config = {"extra": "forbid"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """JSON representation of a stored Post."""
    id: uuid.UUID = Field(description="Unique post identifier (UUID)")
    title: str
    content: str
    author: str
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC)")
    updated_at: datetime = Field(alias="updatedAt", description="Last update time (UTC)")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite returns naive datetimes; stored values are always UTC."""
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class PostEnvelope(BaseModel):
    """Success envelope for create, update and delete."""
    success: bool = True
    message: str
    post: PostResponse


class PostListEnvelope(BaseModel):
    """Success envelope for GET /api/posts, newest first."""
    success: bool = True
    posts: List[PostResponse]


class RootResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Error envelope used for every 4xx/5xx response.

    Example:
        {"success": false, "message": "Server error", "error": "Could not delete the post"}
    """
    success: bool = False
    message: str = Field(description="Human-readable error description")
    error: Optional[str] = Field(default=None, description="Additional error detail")
