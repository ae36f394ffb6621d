"""
PostBoard Backend — Post SQLAlchemy Model
===========================================

What:  ORM model representing the `posts` table.
How:   Inherits from the shared DeclarativeBase; `Database.connect()` creates
       the table if it does not exist.
Who:   Used by PostService for every Record Store operation.

Table Design:
    - id: UUID generated in Python at insert time
    - title/content: TEXT, NOT NULL; non-empty is enforced by PostService
    - author: TEXT, NOT NULL, defaults to 'Anonymous'
    - created_at/updated_at: timezone-aware UTC timestamps
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base

DEFAULT_AUTHOR = "Anonymous"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    A single user-submitted post.

    Lifecycle:
        1. Created by POST /api/posts (created_at = updated_at = now)
        2. title/content/author changed in place by PUT /api/posts/{id}
           (updated_at advanced)
        3. Removed by DELETE /api/posts/{id}; no soft delete
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=DEFAULT_AUTHOR,
        server_default=text(f"'{DEFAULT_AUTHOR}'"),
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # Stored in UTC; listing sorts on created_at DESC
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, title='{self.title}', "
            f"created_at='{self.created_at}')>"
        )
