"""Post service: ownership-checked CRUD and listing."""

from pydantic import ValidationError as PydanticValidationError

from quill.errors import ForbiddenError, PostNotFoundError, ValidationError, format_errors
from quill.models import PostDB
from quill.monitoring import get_logger
from quill.repositories import PostListResult, PostRepository
from quill.schemas.auth import TokenData
from quill.schemas.post import PostCreate, PostUpdate

logger = get_logger(__name__)


class PostService:
    """
    Business rules for posts.

    The author of a post is always the authenticated principal; anything a
    client sends about authorship is ignored. Only the author may change or
    delete a post.
    """

    def __init__(self, post_repo: PostRepository) -> None:
        self.post_repo = post_repo

    async def create(self, payload: PostCreate, principal: TokenData) -> PostDB:
        """
        Publish a new post on behalf of the principal.

        Args:
            payload: Validated post data
            principal: Authenticated caller

        Returns:
            PostDB: Created post
        """
        post = await self.post_repo.create(payload, author_username=principal.username)
        logger.info("Post created", post_id=post.id, author=principal.username)
        return post

    async def get(self, post_id: int) -> PostDB:
        """
        Fetch a single post.

        Raises:
            PostNotFoundError: If no post has this id
        """
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def get_owned(self, post_id: int, principal: TokenData) -> PostDB:
        """
        Fetch a post the principal is allowed to modify.

        Existence is checked before ownership, so a missing post is reported
        as ``404`` even to a non-author.

        Raises:
            PostNotFoundError: If no post has this id
            ForbiddenError: If the principal is not the author
        """
        post = await self.get(post_id)
        if post.author_username != principal.username:
            logger.warning(
                "Post modification forbidden",
                post_id=post_id,
                author=post.author_username,
                caller=principal.username,
            )
            raise ForbiddenError
        return post

    async def update(
        self,
        post_id: int,
        payload: PostUpdate,
        principal: TokenData,
    ) -> PostDB:
        """
        Apply a partial update to a post.

        The merged record must still satisfy the creation rules. Concurrent
        updates are last-write-wins.

        Args:
            post_id: Target post id
            payload: Fields to change
            principal: Authenticated caller

        Returns:
            PostDB: Updated post

        Raises:
            PostNotFoundError: If no post has this id
            ForbiddenError: If the principal is not the author
            ValidationError: If the merged record is invalid
        """
        post = await self.get_owned(post_id, principal)
        changes = payload.changes()
        self._validate_merged(post, changes)

        updated = await self.post_repo.apply_changes(post, changes)
        logger.info("Post updated", post_id=post_id, fields=sorted(changes))
        return updated

    async def delete(self, post_id: int, principal: TokenData) -> None:
        """
        Delete a post.

        Raises:
            PostNotFoundError: If no post has this id
            ForbiddenError: If the principal is not the author
        """
        post = await self.get_owned(post_id, principal)
        await self.post_repo.remove(post)
        logger.info("Post deleted", post_id=post_id, author=principal.username)

    async def list(self, search: str, page: int, page_size: int) -> PostListResult:
        """Search and paginate posts, newest first."""
        return await self.post_repo.list(search=search, page=page, page_size=page_size)

    @staticmethod
    def _validate_merged(post: PostDB, changes: dict) -> None:
        merged = {
            "title": post.title,
            "content": post.content,
            "image_url": post.image_url,
        } | changes
        try:
            PostCreate.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(errors=format_errors(e.errors())) from e
