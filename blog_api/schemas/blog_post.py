"""
Blog API: Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the JSON contract of the blog post API.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI document.
Who:   Used by route handlers and BlogPostService.

Request models declare every field optional on purpose: presence checks are
business rules owned by BlogPostService (which reports 400 with the names of
the missing fields), not schema errors. `model_fields_set` tells the service
which keys the client actually sent.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What the client sends
# ══════════════════════════════════════════════════════════════════════════


class BlogPostCreate(BaseModel):
    """Body of POST /posts. All three fields are required by the service."""
    title: Optional[str] = Field(default=None, description="Post title")
    content: Optional[str] = Field(default=None, description="Post body")
    author: Optional[str] = Field(default=None, description="Author name")


class BlogPostUpdate(BaseModel):
    """
    Body of PUT /posts/{id}.

    `id` must be present and equal the path id. Only the updatable fields
    present in the body are written (partial update).
    """
    id: Optional[str] = Field(default=None, description="Must equal the id in the URL path")
    title: Optional[str] = Field(default=None, description="New title")
    content: Optional[str] = Field(default=None, description="New body")
    author: Optional[str] = Field(default=None, description="New author name")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class BlogPostResponse(BaseModel):
    """
    What:  Serialized representation of a blog post.
    Who:   Returned by GET /posts/{id} and POST /posts, and listed by GET /posts.

    Exposes only the public fields; the ORM object is read via from_attributes.
    """
    id: uuid.UUID = Field(description="Store-assigned post identifier")
    title: str = Field(description="Post title")
    content: str = Field(description="Post body")
    author: str = Field(description="Author name")
    created: Optional[datetime] = Field(default=None, description="Creation timestamp (UTC)")

    model_config = {"from_attributes": True}

    @field_validator("created")
    @classmethod
    def normalize_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Report every timestamp in UTC; SQLite hands back naive values."""
        if v is None:
            return v
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class BlogPostListResponse(BaseModel):
    """Response of GET /posts, in the store's natural order."""
    blogposts: List[BlogPostResponse] = Field(description="Every stored blog post")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  The single error envelope used by every endpoint.

    Fields:
        error:      Human-readable description (generic for server errors)
        details:    Every validation violation, for 400 responses
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "Missing required field author in request body",
            "details": ["Missing required field author in request body"],
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Error description")
    details: Optional[List[str]] = Field(default=None, description="Validation violations")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
