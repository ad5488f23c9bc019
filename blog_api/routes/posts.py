"""
Blog API: Blog Post Route Handlers
====================================

What:  The five CRUD endpoints of the /posts resource.
How:   Each handler takes the path id / JSON body, delegates to
       BlogPostService, and picks the success status code. Failures are
       raised as exceptions and rendered by the global handlers in main.py.

Route Inventory:
    GET    /posts       → 200 {"blogposts": [...]}
    GET    /posts/{id}  → 200 BlogPost            (404 if absent)
    POST   /posts       → 201 BlogPost            (400 on missing fields)
    PUT    /posts/{id}  → 204, empty body         (400 on id problems, 404 if absent)
    DELETE /posts/{id}  → 204, empty body         (also for ids that match nothing)
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.blog_post import (
    BlogPostCreate,
    BlogPostListResponse,
    BlogPostResponse,
    BlogPostUpdate,
    ErrorResponse,
)
from blog_api.services.blog_post_service import blog_post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get(
    "",
    response_model=BlogPostListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all blog posts",
)
async def list_posts(db: AsyncSession = Depends(get_db_session)) -> BlogPostListResponse:
    return await blog_post_service.list_posts(db)


@router.get(
    "/{post_id}",
    response_model=BlogPostResponse,
    responses={
        404: {"description": "Blog post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single blog post by ID",
)
async def get_post(post_id: str, db: AsyncSession = Depends(get_db_session)) -> BlogPostResponse:
    return await blog_post_service.get_post(db, post_id)


@router.post(
    "",
    status_code=201,
    response_model=BlogPostResponse,
    responses={
        400: {"description": "Missing required field", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a blog post",
    description="Requires `title`, `content` and `author`. Nothing is stored if any is missing.",
)
async def create_post(
    payload: BlogPostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> BlogPostResponse:
    return await blog_post_service.create_post(db, payload)


@router.put(
    "/{post_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Body id missing or different from path id", "model": ErrorResponse},
        404: {"description": "Blog post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update fields of a blog post",
    description="Only the fields present in the body are overwritten.",
)
async def update_post(
    post_id: str,
    payload: BlogPostUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_post_service.update_post(db, post_id, payload)
    return Response(status_code=204)


@router.delete(
    "/{post_id}",
    status_code=204,
    response_class=Response,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Delete a blog post",
    description="Responds 204 whether or not a post with this id existed.",
)
async def delete_post(post_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await blog_post_service.delete_post(db, post_id)
    return Response(status_code=204)
