"""
Blog API: Blog Post Service Unit Tests
========================================

What:  Tests for BlogPostService validation passes and store calls.
How:   Uses mock DB sessions (no real DB).

What we test:
    ✅ Required-field violations are collected in check order
    ✅ Update id checks (missing, mismatched) and null fields
    ✅ Invalid input never reaches the store
    ✅ Missing posts raise NotFoundError; malformed ids count as missing
    ✅ Store failures are wrapped in DatabaseError
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError

from blog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from blog_api.models.blog_post import BlogPost
from blog_api.schemas.blog_post import BlogPostCreate, BlogPostUpdate
from blog_api.services.blog_post_service import BlogPostService, parse_post_id


def make_post(data):
    post = MagicMock()
    for key, value in data.items():
        setattr(post, key, value)
    return post


class TestParsePostId:

    def test_valid_uuid(self):
        value = uuid4()
        assert parse_post_id(str(value)) == value

    def test_malformed_id(self):
        assert parse_post_id("not-a-uuid") is None
        assert parse_post_id("") is None


class TestCreateValidation:
    """Tests for collect_create_violations."""

    def test_complete_body_has_no_violations(self):
        payload = BlogPostCreate(title="t", content="c", author="a")
        assert BlogPostService.collect_create_violations(payload) == []

    def test_missing_author(self):
        payload = BlogPostCreate(title="t", content="c")
        assert BlogPostService.collect_create_violations(payload) == [
            "Missing required field author in request body"
        ]

    def test_violations_follow_field_order(self):
        payload = BlogPostCreate.model_validate({"author": "a"})
        assert BlogPostService.collect_create_violations(payload) == [
            "Missing required field title in request body",
            "Missing required field content in request body",
        ]

    def test_null_counts_as_missing(self):
        payload = BlogPostCreate.model_validate({"title": None, "content": "c", "author": "a"})
        assert BlogPostService.collect_create_violations(payload) == [
            "Missing required field title in request body"
        ]

    def test_empty_string_is_present(self):
        payload = BlogPostCreate(title="", content="", author="")
        assert BlogPostService.collect_create_violations(payload) == []


class TestUpdateValidation:
    """Tests for collect_update_violations."""

    def test_matching_id(self):
        post_id = str(uuid4())
        payload = BlogPostUpdate(id=post_id, title="new")
        assert BlogPostService.collect_update_violations(post_id, payload) == []

    def test_missing_id(self):
        payload = BlogPostUpdate(title="new")
        assert BlogPostService.collect_update_violations(str(uuid4()), payload) == [
            "Request body must contain an ID"
        ]

    def test_mismatched_id(self):
        payload = BlogPostUpdate(id=str(uuid4()))
        assert BlogPostService.collect_update_violations(str(uuid4()), payload) == [
            "IDs must match"
        ]

    def test_all_violations_reported(self):
        payload = BlogPostUpdate.model_validate({"id": "other", "content": None})
        assert BlogPostService.collect_update_violations("this", payload) == [
            "IDs must match",
            "Field content must not be null",
        ]


class TestBlogPostServiceCreate:

    def setup_method(self):
        self.service = BlogPostService()

    @pytest.mark.asyncio
    async def test_create_post_success(self, mock_db_session):
        """Store assigns identity on commit; the response carries it."""
        new_id = uuid4()
        created = datetime.now(timezone.utc)

        def assign_identity():
            post = mock_db_session.add.call_args[0][0]
            post.id = new_id
            post.created = created

        mock_db_session.commit = AsyncMock(side_effect=assign_identity)

        result = await self.service.create_post(
            mock_db_session, BlogPostCreate(title="t", content="c", author="a")
        )

        added = mock_db_session.add.call_args[0][0]
        assert isinstance(added, BlogPost)
        assert (added.title, added.content, added.author) == ("t", "c", "a")
        assert result.id == new_id
        assert result.title == "t"
        assert result.created == created
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_field_never_touches_store(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_post(mock_db_session, BlogPostCreate(title="t", content="c"))

        assert exc_info.value.violations == ["Missing required field author in request body"]
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_raises_database_error(self, mock_db_session):
        mock_db_session.commit = AsyncMock(side_effect=SQLAlchemyError("write conflict"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_post(
                mock_db_session, BlogPostCreate(title="t", content="c", author="a")
            )

        assert "write conflict" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "SQLAlchemyError"


class TestBlogPostServiceGet:

    def setup_method(self):
        self.service = BlogPostService()

    @pytest.mark.asyncio
    async def test_get_post_found(self, mock_db_session, sample_post_data):
        mock_db_session.get.return_value = make_post(sample_post_data)

        result = await self.service.get_post(mock_db_session, str(sample_post_data["id"]))

        assert result.id == sample_post_data["id"]
        assert result.content == sample_post_data["content"]
        assert result.author == sample_post_data["author"]
        mock_db_session.get.assert_awaited_once_with(BlogPost, sample_post_data["id"])

    @pytest.mark.asyncio
    async def test_get_post_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.get_post(mock_db_session, str(uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError, match="not-a-uuid"):
            await self.service.get_post(mock_db_session, "not-a-uuid")

        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_error_raises_database_error(self, mock_db_session):
        mock_db_session.get = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(DatabaseError):
            await self.service.get_post(mock_db_session, str(uuid4()))


class TestBlogPostServiceList:

    def setup_method(self):
        self.service = BlogPostService()

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_posts(mock_db_session)

        assert result.blogposts == []

    @pytest.mark.asyncio
    async def test_list_posts_keeps_store_order(self, mock_db_session, sample_post_data):
        posts = []
        for i in range(3):
            data = dict(sample_post_data, id=uuid4(), title=f"Post {i}")
            posts.append(make_post(data))

        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = posts
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_posts(mock_db_session)

        assert [item.id for item in result.blogposts] == [post.id for post in posts]

    @pytest.mark.asyncio
    async def test_store_error_raises_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(DatabaseError):
            await self.service.list_posts(mock_db_session)


class TestBlogPostServiceUpdate:

    def setup_method(self):
        self.service = BlogPostService()

    @pytest.mark.asyncio
    async def test_only_supplied_fields_change(self, mock_db_session, sample_post_data):
        post = make_post(sample_post_data)
        mock_db_session.get.return_value = post
        post_id = str(sample_post_data["id"])

        await self.service.update_post(
            mock_db_session, post_id, BlogPostUpdate(id=post_id, title="Renamed")
        )

        assert post.title == "Renamed"
        assert post.content == sample_post_data["content"]
        assert post.author == sample_post_data["author"]
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_mismatched_id_never_touches_store(self, mock_db_session):
        with pytest.raises(ValidationError, match="IDs must match"):
            await self.service.update_post(
                mock_db_session, str(uuid4()), BlogPostUpdate(id=str(uuid4()), title="x")
            )

        mock_db_session.get.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None
        post_id = str(uuid4())

        with pytest.raises(NotFoundError):
            await self.service.update_post(mock_db_session, post_id, BlogPostUpdate(id=post_id))

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_raises_database_error(self, mock_db_session, sample_post_data):
        mock_db_session.get.return_value = make_post(sample_post_data)
        mock_db_session.commit = AsyncMock(side_effect=SQLAlchemyError("write conflict"))
        post_id = str(sample_post_data["id"])

        with pytest.raises(DatabaseError):
            await self.service.update_post(
                mock_db_session, post_id, BlogPostUpdate(id=post_id, author="Grace")
            )


class TestBlogPostServiceDelete:

    def setup_method(self):
        self.service = BlogPostService()

    @pytest.mark.asyncio
    async def test_delete_existing_post(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=1)

        await self.service.delete_post(mock_db_session, str(uuid4()))

        mock_db_session.execute.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_absent_post_is_not_an_error(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        await self.service.delete_post(mock_db_session, str(uuid4()))

    @pytest.mark.asyncio
    async def test_delete_malformed_id_skips_store(self, mock_db_session):
        await self.service.delete_post(mock_db_session, "not-a-uuid")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_error_raises_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(DatabaseError):
            await self.service.delete_post(mock_db_session, str(uuid4()))
