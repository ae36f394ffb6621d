"""
PostBoard Backend — Post Route Handlers
=========================================

What:  Handles the four /api/posts endpoints.
How:   Each handler makes exactly one PostService call and wraps the result
       in the success envelope. Failures are raised as PostBoardError
       subclasses and formatted by the global exception handlers.
Who:   Any HTTP client; CORS allows every origin by default.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.schemas.post import (
    ErrorResponse,
    PostCreate,
    PostEnvelope,
    PostListEnvelope,
    PostUpdate,
)
from postboard.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])


@router.post(
    "/posts",
    status_code=201,
    response_model=PostEnvelope,
    responses={
        201: {"description": "Post created", "model": PostEnvelope},
        400: {"description": "Title or content missing, or malformed body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a post",
)
async def create_post(
    payload: PostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PostEnvelope:
    """
    Create a post from `{title, content, author?}`.

    Returns 201 with the stored post; `author` defaults to 'Anonymous'.
    """
    post = await post_service.create_post(
        db=db,
        title=payload.title,
        content=payload.content,
        author=payload.author,
    )
    return PostEnvelope(message="Post created successfully!", post=post)


@router.get(
    "/posts",
    response_model=PostListEnvelope,
    responses={
        200: {"description": "All posts, newest first", "model": PostListEnvelope},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all posts",
)
async def list_posts(
    db: AsyncSession = Depends(get_db_session),
) -> PostListEnvelope:
    posts = await post_service.list_posts(db=db)
    return PostListEnvelope(posts=posts)


@router.put(
    "/posts/{post_id}",
    response_model=PostEnvelope,
    responses={
        200: {"description": "Post updated", "model": PostEnvelope},
        400: {"description": "Empty title/content or malformed body", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a post",
)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PostEnvelope:
    """
    Update `title`, `content` and/or `author` of an existing post.

    Fields left out of the body are not changed.
    """
    post = await post_service.update_post(db=db, post_id=post_id, changes=payload)
    return PostEnvelope(message="Post updated successfully!", post=post)


@router.delete(
    "/posts/{post_id}",
    response_model=PostEnvelope,
    responses={
        200: {"description": "Post deleted", "model": PostEnvelope},
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PostEnvelope:
    """Delete a post; the response carries its last stored state."""
    post = await post_service.delete_post(db=db, post_id=post_id)
    return PostEnvelope(message="Post deleted successfully!", post=post)
