"""Post repository for database operations."""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from quill.configs import MAX_POST_ID
from quill.models.post import PostDB
from quill.repositories.base import BaseRepository
from quill.schemas.post import PostCreate
from quill.utils.helpers import page_count

UPDATABLE_FIELDS = frozenset({"title", "content", "image_url"})


@dataclass(frozen=True)
class PostListResult:
    """A page of posts plus the counts needed to render pagination."""

    items: list[PostDB]
    total: int
    page: int
    pages: int


class PostRepository(BaseRepository[PostDB]):
    """Repository for Post database operations."""

    model = PostDB

    async def get_by_id(self, record_id: int) -> PostDB | None:
        """Get a post by id; ids the column cannot hold never match."""
        if not 1 <= record_id <= MAX_POST_ID:
            return None
        return await super().get_by_id(record_id)

    async def create(self, schema: PostCreate, author_username: str) -> PostDB:
        """
        Create a new post in the database.

        Args:
            schema: Validated post creation payload
            author_username: Username of the authenticated author

        Returns:
            PostDB: Created post with its assigned id and timestamp
        """
        post = PostDB(
            title=schema.title,
            content=schema.content,
            image_url=str(schema.image_url) if schema.image_url else None,
            author_username=author_username,
        )
        return await self._add_and_refresh(post)

    async def apply_changes(self, post: PostDB, changes: dict[str, Any]) -> PostDB:
        """
        Overwrite the mutable fields of a post.

        Identity fields (``id``, ``author_username``, ``created_at``) are
        never touched, whatever ``changes`` contains.

        Args:
            post: Loaded post to update
            changes: Field values keyed by model attribute name

        Returns:
            PostDB: Updated post
        """
        for field, value in changes.items():
            if field in UPDATABLE_FIELDS:
                setattr(post, field, value)
        return await self._add_and_refresh(post)

    async def list(
        self,
        search: str = "",
        page: int = 1,
        page_size: int = 10,
    ) -> PostListResult:
        """
        List posts newest first, optionally filtered by title or author.

        Posts created at the same instant are ordered by ascending id, so
        repeated queries always return the same sequence.

        Args:
            search: Case-insensitive substring matched against title and
                author; blank means no filter
            page: 1-based page number
            page_size: Maximum posts per page

        Returns:
            PostListResult: The requested page and pagination counts
        """
        criteria = self._search_criteria(search)

        count_stmt = select(func.count()).select_from(PostDB)
        statement = select(PostDB)
        if criteria is not None:
            count_stmt = count_stmt.where(criteria)
            statement = statement.where(criteria)

        total = (await self.session.execute(count_stmt)).scalar() or 0

        offset = (page - 1) * page_size
        items: list[PostDB] = []
        if offset < total:
            statement = (
                statement.order_by(desc(PostDB.created_at), asc(PostDB.id))
                .offset(offset)
                .limit(page_size)
            )
            items = list((await self.session.execute(statement)).scalars().all())

        return PostListResult(
            items=items,
            total=total,
            page=page,
            pages=page_count(total, page_size),
        )

    @staticmethod
    def _search_criteria(search: str) -> ColumnElement[bool] | None:
        term = search.strip()
        if not term:
            return None
        # autoescape keeps % and _ in the term literal
        return or_(
            PostDB.title.icontains(term, autoescape=True),
            PostDB.author_username.icontains(term, autoescape=True),
        )
