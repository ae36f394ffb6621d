"""
PostBoard Backend — Post Service (Record Store)
=================================================

What:  The persistence operations behind the Post API: create, list,
       update and delete.
How:   Each method performs one database operation on the session it is
       given, commits it, and converts the result into a `PostResponse`.
Who:   Called by the route handlers in `postboard.routes.posts`.

Error Handling Strategy:
    - Missing/empty required fields → ValidationError (400)
    - No row for the identifier     → NotFoundError (404)
    - Identifier is not a UUID      → InvalidIdentifierError (500)
    - Anything else from SQLAlchemy or the driver → DatabaseError (500)
    Original exception types are logged and kept in the error context;
    they never reach the response body.
"""

import logging
import uuid
from typing import List

from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import (
    DatabaseError,
    InvalidIdentifierError,
    NotFoundError,
    ValidationError,
)
from postboard.models.post import DEFAULT_AUTHOR, Post, utcnow
from postboard.schemas.post import PostResponse, PostUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Title and content are required"


class PostService:
    """
    Stateless CRUD operations over the `posts` table.

    Every method receives the request's AsyncSession, so a single instance
    can serve all requests concurrently.
    """

    async def create_post(
        self,
        db: AsyncSession,
        title: str | None,
        content: str | None,
        author: str | None = None,
    ) -> PostResponse:
        """
        Insert a new post.

        Args:
            db: Async database session
            title: Required, must be non-empty
            content: Required, must be non-empty
            author: Optional; empty or missing becomes 'Anonymous'

        Returns:
            The stored post, including its generated id and timestamps.

        Raises:
            ValidationError: title or content missing/empty (nothing is written)
            DatabaseError: insert or commit failed
        """
        if not title or not content:
            raise ValidationError(
                message=REQUIRED_FIELDS_MESSAGE,
                context={"title_present": bool(title), "content_present": bool(content)},
            )

        now = utcnow()
        post = Post(
            id=uuid.uuid4(),
            title=title,
            content=content,
            author=author or DEFAULT_AUTHOR,
            created_at=now,
            updated_at=now,
        )

        try:
            db.add(post)
            await db.commit()
        except Exception as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the post",
                context={"error_type": type(e).__name__},
            )

        logger.info("Post created: %s", post.id)
        return PostResponse.model_validate(post)

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """
        Return every post, newest first (created_at DESC).

        The result is not paginated.
        """
        try:
            result = await db.execute(select(Post).order_by(desc(Post.created_at)))
            posts = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts",
                context={"error_type": type(e).__name__},
            )

        return [PostResponse.model_validate(post) for post in posts]

    async def update_post(
        self,
        db: AsyncSession,
        post_id: str,
        changes: PostUpdate,
    ) -> PostResponse:
        """
        Apply the fields present in `changes` to an existing post.

        Fields omitted from the request keep their stored value. `title`
        and `content`, when present, must be non-empty; an empty `author`
        is stored as 'Anonymous'. `updated_at` always advances.

        Raises:
            ValidationError: title or content present but null/empty
            InvalidIdentifierError: post_id is not a UUID
            NotFoundError: no post with this id
            DatabaseError: update or commit failed
        """
        fields = changes.model_dump(exclude_unset=True)
        empty = [name for name in ("title", "content") if name in fields and not fields[name]]
        if empty:
            raise ValidationError(
                message=REQUIRED_FIELDS_MESSAGE,
                detail=f"{empty[0]} cannot be empty",
                context={"field": empty[0]},
            )
        if "author" in fields:
            fields["author"] = fields["author"] or DEFAULT_AUTHOR

        key = self._parse_id(post_id)

        # Match and write in one UPDATE ... RETURNING statement, so a row
        # deleted concurrently shows up as "no row" rather than a stale flush
        stmt = (
            update(Post)
            .where(Post.id == key)
            .values(**fields, updated_at=utcnow())
            .returning(Post)
        )

        try:
            result = await db.execute(stmt)
            post = result.scalar_one_or_none()
            if post is None:
                raise NotFoundError(resource="Post", resource_id=post_id)
            await db.commit()

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        logger.info("Post updated: %s (%s)", post.id, ", ".join(sorted(fields)) or "no fields")
        return PostResponse.model_validate(post)

    async def delete_post(self, db: AsyncSession, post_id: str) -> PostResponse:
        """
        Remove a post and return its last stored state.

        Raises:
            InvalidIdentifierError: post_id is not a UUID
            NotFoundError: no post with this id
            DatabaseError: delete or commit failed
        """
        key = self._parse_id(post_id)

        stmt = delete(Post).where(Post.id == key).returning(Post)

        try:
            result = await db.execute(stmt)
            post = result.scalar_one_or_none()
            if post is None:
                raise NotFoundError(resource="Post", resource_id=post_id)

            snapshot = PostResponse.model_validate(post)
            await db.commit()

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the post",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        logger.info("Post deleted: %s", post_id)
        return snapshot

    @staticmethod
    def _parse_id(post_id: str) -> uuid.UUID:
        try:
            return uuid.UUID(post_id)
        except (TypeError, ValueError):
            logger.warning("Rejected malformed post id: %r", post_id)
            raise InvalidIdentifierError(resource_id=str(post_id))


post_service = PostService()
