"""
Blog API: Blog Post Service (Business Logic)
==============================================

What:  Validation passes and persistence operations for blog posts.
How:   Each public coroutine validates its input, issues exactly one store
       operation through the request's AsyncSession, and returns a response
       model (or nothing, for update/delete).
Who:   Called by the /posts route handlers.

Request Flow (POST /posts):
    ┌──────────┐    ┌─────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate   │───▶│  Store   │
    │          │    │  (all rules)│    │  (DB)    │
    └──────────┘    └─────────────┘    └──────────┘

    Validation collects every violation before deciding. If the list is not
    empty, ValidationError is raised and the store is never touched.

Error Handling:
    Store exceptions are logged with context and re-raised as DatabaseError,
    whose client-facing message is generic. Missing posts raise NotFoundError.
    The service is stateless: the session arrives with each call.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from blog_api.models.blog_post import BlogPost
from blog_api.schemas.blog_post import (
    BlogPostCreate,
    BlogPostListResponse,
    BlogPostResponse,
    BlogPostUpdate,
)

logger = logging.getLogger(__name__)

# Checked in this order; violation messages follow the same order
REQUIRED_FIELDS = ("title", "content", "author")
UPDATABLE_FIELDS = ("title", "content", "author")

RESOURCE_NAME = "Blog post"


def parse_post_id(post_id: str) -> Optional[uuid.UUID]:
    """Return the UUID for a path id, or None when it cannot name any stored post."""
    try:
        return uuid.UUID(post_id)
    except (TypeError, ValueError):
        return None


class BlogPostService:
    """
    Business logic layer for blog post operations.

    Responsibilities:
        - list_posts():  every post, store order
        - get_post():    single post with not-found handling
        - create_post(): required-field validation, then insert
        - update_post(): id validation, then partial update
        - delete_post(): delete by id; absent ids are not an error
    """

    # ── Validation ────────────────────────────────────────────────────────

    @staticmethod
    def collect_create_violations(payload: BlogPostCreate) -> List[str]:
        """
        Check that every required field was sent with a value.

        A key that is absent from the body, or sent as null, is missing.
        """
        violations = []
        for field in REQUIRED_FIELDS:
            if field not in payload.model_fields_set or getattr(payload, field) is None:
                violations.append(f"Missing required field {field} in request body")
        return violations

    @staticmethod
    def collect_update_violations(post_id: str, payload: BlogPostUpdate) -> List[str]:
        violations = []
        if not payload.id:
            violations.append("Request body must contain an ID")
        elif payload.id != post_id:
            violations.append("IDs must match")
        for field in UPDATABLE_FIELDS:
            if field in payload.model_fields_set and getattr(payload, field) is None:
                violations.append(f"Field {field} must not be null")
        return violations

    # ── Operations ────────────────────────────────────────────────────────

    async def list_posts(self, db: AsyncSession) -> BlogPostListResponse:
        """
        Return every stored post.

        No ORDER BY is applied: the order is whatever the store returns.
        """
        try:
            result = await db.execute(select(BlogPost))
            posts = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing blog posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve blog posts.",
                context={"error_type": type(e).__name__},
            )

        return BlogPostListResponse(
            blogposts=[BlogPostResponse.model_validate(post) for post in posts]
        )

    async def get_post(self, db: AsyncSession, post_id: str) -> BlogPostResponse:
        """
        Retrieve a single post by ID.

        Raises:
            NotFoundError: No post has this id, or the id is not a valid UUID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        post_uuid = parse_post_id(post_id)
        if post_uuid is None:
            raise NotFoundError(resource=RESOURCE_NAME, resource_id=post_id)

        try:
            post = await db.get(BlogPost, post_uuid)
        except Exception as e:
            logger.error("Database error fetching blog post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the blog post.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if post is None:
            raise NotFoundError(resource=RESOURCE_NAME, resource_id=post_id)

        return BlogPostResponse.model_validate(post)

    async def create_post(self, db: AsyncSession, payload: BlogPostCreate) -> BlogPostResponse:
        """
        Insert a new post once all required fields are present.

        Raises:
            ValidationError: One or more required fields missing (→ 400, nothing stored)
            DatabaseError:   Insert or commit failed (→ 500)
        """
        violations = self.collect_create_violations(payload)
        if violations:
            for message in violations:
                logger.warning(message)
            raise ValidationError(violations)

        post = BlogPost(
            title=payload.title,
            content=payload.content,
            author=payload.author,
        )
        try:
            db.add(post)
            await db.commit()
        except Exception as e:
            logger.error("Database error creating blog post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the blog post.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Blog post created: %s", post.id)
        return BlogPostResponse.model_validate(post)

    async def update_post(self, db: AsyncSession, post_id: str, payload: BlogPostUpdate) -> None:
        """
        Overwrite the fields supplied in the body; other fields keep their values.

        Raises:
            ValidationError: Body id missing or different from the path id,
                             or a supplied field is null (→ 400, nothing written)
            NotFoundError:   No post has this id (→ 404)
            DatabaseError:   Read or commit failed (→ 500)
        """
        violations = self.collect_update_violations(post_id, payload)
        if violations:
            for message in violations:
                logger.warning(message)
            raise ValidationError(violations, context={"post_id": post_id})

        post_uuid = parse_post_id(post_id)
        if post_uuid is None:
            raise NotFoundError(resource=RESOURCE_NAME, resource_id=post_id)

        changes = {
            field: getattr(payload, field)
            for field in UPDATABLE_FIELDS
            if field in payload.model_fields_set
        }

        try:
            post = await db.get(BlogPost, post_uuid)
            if post is not None:
                for field, value in changes.items():
                    setattr(post, field, value)
                await db.commit()
        except Exception as e:
            logger.error("Database error updating blog post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the blog post.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if post is None:
            raise NotFoundError(resource=RESOURCE_NAME, resource_id=post_id)

        logger.info("Blog post %s updated: %s", post_id, ", ".join(changes) or "no fields")

    async def delete_post(self, db: AsyncSession, post_id: str) -> None:
        """
        Delete the post with this id.

        Deleting an id that matches nothing (including one that is not a UUID)
        completes without error.

        Raises:
            DatabaseError: Delete or commit failed (→ 500)
        """
        post_uuid = parse_post_id(post_id)
        if post_uuid is None:
            logger.info("deleted post %s (no such post)", post_id)
            return

        try:
            result = await db.execute(delete(BlogPost).where(BlogPost.id == post_uuid))
            await db.commit()
        except Exception as e:
            logger.error("Database error deleting blog post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the blog post.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if result.rowcount:
            logger.info("deleted post %s", post_id)
        else:
            logger.info("deleted post %s (no such post)", post_id)


# ── Singleton Instance ────────────────────────────────────────────────────
blog_post_service = BlogPostService()
