"""
PostBoard Backend — Post Service Unit Tests
=============================================

What:  Tests for PostService (create, list, update, delete).
How:   Uses mock DB sessions (no real database).

What we test:
    ✅ Required-field checks happen before anything is written
    ✅ 'Anonymous' default for missing/empty author
    ✅ Partial update semantics and updated_at advancing
    ✅ Not-found and malformed-id handling
    ✅ Driver failures wrapped in DatabaseError
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import sqlite

from postboard.exceptions import (
    DatabaseError,
    InvalidIdentifierError,
    NotFoundError,
    ValidationError,
)
from postboard.models.post import Post
from postboard.schemas.post import PostUpdate
from postboard.services.post_service import PostService


class TestPostServiceCreate:
    """Tests for create_post."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_post_success(self, mock_db_session):
        result = await self.service.create_post(
            mock_db_session, title="A", content="B", author="Grace"
        )

        assert result.title == "A"
        assert result.content == "B"
        assert result.author == "Grace"
        assert result.id is not None
        assert result.created_at == result.updated_at
        mock_db_session.add.assert_called_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("author", [None, ""])
    async def test_create_post_defaults_author(self, mock_db_session, author):
        result = await self.service.create_post(
            mock_db_session, title="A", content="B", author=author
        )
        assert result.author == "Anonymous"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,content",
        [(None, "B"), ("A", None), ("", "B"), ("A", ""), (None, None)],
    )
    async def test_create_post_requires_title_and_content(self, mock_db_session, title, content):
        with pytest.raises(ValidationError, match="Title and content are required"):
            await self.service.create_post(mock_db_session, title=title, content=content)

        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_post_commit_failure(self, mock_db_session):
        mock_db_session.commit.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError) as excinfo:
            await self.service.create_post(mock_db_session, title="A", content="B")

        assert excinfo.value.message == "Could not create the post"
        assert excinfo.value.context["error_type"] == "RuntimeError"


class TestPostServiceList:
    """Tests for list_posts."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_posts(mock_db_session)

        assert result == []

    @pytest.mark.asyncio
    async def test_list_posts_keeps_query_order(self, mock_db_session):
        now = datetime.now(timezone.utc)
        posts = [
            Post(
                id=uuid4(),
                title=f"Post {i}",
                content="body",
                author="Anonymous",
                created_at=now - timedelta(minutes=i),
                updated_at=now - timedelta(minutes=i),
            )
            for i in range(3)
        ]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = posts
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_posts(mock_db_session)

        assert [p.title for p in result] == ["Post 0", "Post 1", "Post 2"]

    @pytest.mark.asyncio
    async def test_list_posts_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("database is locked")

        with pytest.raises(DatabaseError, match="Could not retrieve posts"):
            await self.service.list_posts(mock_db_session)


def returning(post):
    """A mock Result for an UPDATE/DELETE ... RETURNING that matched `post` (or nothing)."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = post
    return result


def statement_params(db):
    """Bound parameters of the last statement passed to db.execute."""
    stmt = db.execute.await_args.args[0]
    return stmt.compile(dialect=sqlite.dialect()).params


class TestPostServiceUpdate:
    """Tests for update_post."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_update_post_replaces_given_fields(self, mock_db_session, sample_post):
        before = sample_post.updated_at
        sample_post.title, sample_post.content, sample_post.author = "A2", "B2", "Linus"
        mock_db_session.execute.return_value = returning(sample_post)

        result = await self.service.update_post(
            mock_db_session,
            str(sample_post.id),
            PostUpdate(title="A2", content="B2", author="Linus"),
        )

        assert (result.title, result.content, result.author) == ("A2", "B2", "Linus")
        params = statement_params(mock_db_session)
        assert (params["title"], params["content"], params["author"]) == ("A2", "B2", "Linus")
        assert params["updated_at"] > before
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_post_keeps_omitted_fields(self, mock_db_session, sample_post):
        mock_db_session.execute.return_value = returning(sample_post)

        await self.service.update_post(
            mock_db_session, str(sample_post.id), PostUpdate(title="Only the title")
        )

        params = statement_params(mock_db_session)
        assert params["title"] == "Only the title"
        assert "content" not in params
        assert "author" not in params

    @pytest.mark.asyncio
    async def test_update_post_empty_body_touches_updated_at(self, mock_db_session, sample_post):
        mock_db_session.execute.return_value = returning(sample_post)

        await self.service.update_post(mock_db_session, str(sample_post.id), PostUpdate())

        params = statement_params(mock_db_session)
        assert params["updated_at"] > sample_post.created_at
        assert not {"title", "content", "author"} & set(params)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_post_empty_author_becomes_anonymous(self, mock_db_session, sample_post):
        mock_db_session.execute.return_value = returning(sample_post)

        await self.service.update_post(
            mock_db_session, str(sample_post.id), PostUpdate(author="")
        )

        assert statement_params(mock_db_session)["author"] == "Anonymous"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("changes", [{"title": ""}, {"content": None}, {"title": "x", "content": ""}])
    async def test_update_post_rejects_empty_required_fields(self, mock_db_session, sample_post, changes):
        with pytest.raises(ValidationError) as excinfo:
            await self.service.update_post(
                mock_db_session, str(sample_post.id), PostUpdate(**changes)
            )

        assert excinfo.value.detail.endswith("cannot be empty")
        mock_db_session.execute.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_post_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = returning(None)

        with pytest.raises(NotFoundError, match="Post not found"):
            await self.service.update_post(mock_db_session, str(uuid4()), PostUpdate(title="A"))

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_post_malformed_id(self, mock_db_session):
        with pytest.raises(InvalidIdentifierError) as excinfo:
            await self.service.update_post(mock_db_session, "not-a-uuid", PostUpdate(title="A"))

        assert isinstance(excinfo.value, DatabaseError)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_post_commit_failure(self, mock_db_session, sample_post):
        mock_db_session.execute.return_value = returning(sample_post)
        mock_db_session.commit.side_effect = RuntimeError("deadlock detected")

        with pytest.raises(DatabaseError, match="Could not update the post"):
            await self.service.update_post(
                mock_db_session, str(sample_post.id), PostUpdate(title="A")
            )


class TestPostServiceDelete:
    """Tests for delete_post."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_delete_post_returns_last_state(self, mock_db_session, sample_post):
        mock_db_session.execute.return_value = returning(sample_post)

        result = await self.service.delete_post(mock_db_session, str(sample_post.id))

        assert result.id == sample_post.id
        assert result.title == sample_post.title
        assert statement_params(mock_db_session) == {"id_1": sample_post.id}
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_post_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = returning(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_post(mock_db_session, str(uuid4()))

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_post_malformed_id(self, mock_db_session):
        with pytest.raises(InvalidIdentifierError):
            await self.service.delete_post(mock_db_session, "12345")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_post_statement_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("server closed the connection")

        with pytest.raises(DatabaseError, match="Could not delete the post"):
            await self.service.delete_post(mock_db_session, str(uuid4()))

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_post_commit_failure(self, mock_db_session, sample_post):
        mock_db_session.execute.return_value = returning(sample_post)
        mock_db_session.commit.side_effect = RuntimeError("disk I/O error")

        with pytest.raises(DatabaseError, match="Could not delete the post"):
            await self.service.delete_post(mock_db_session, str(sample_post.id))
