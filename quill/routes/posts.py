# quill/routes/posts.py

"""
Post Routes.

CRUD endpoints plus search and pagination for posts.

Summary
-------
Endpoints include:
  - List posts (search + pagination, public)
  - Get post by id (public)
  - Create post (authenticated)
  - Update post (author only)
  - Delete post (author only)

Authorization
-------------
Write endpoints require ``Authorization: Bearer <token>``. A missing post is
reported as ``404`` before ownership is checked.
"""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from quill.decorators import timed
from quill.dependencies import PostListQueryDep, PostServiceDep, PrincipalDep
from quill.models import PostDB
from quill.schemas.post import MessageResponse, PostCreate, PostPage, PostResponse, PostUpdate

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

POST_EXAMPLE = {
    "id": 1,
    "title": "Hello World",
    "content": "Writing the first post on a fresh blog is always the hardest part.",
    "imageURL": "https://example.com/cover.jpg",
    "author": "alice",
    "createdAt": "2025-01-01T10:00:00Z",
}

UNAUTHORIZED = {
    "description": "Unauthorized",
    "content": {"application/json": {"example": {"detail": "Could not validate credentials"}}},
}
FORBIDDEN = {
    "description": "Forbidden",
    "content": {
        "application/json": {"example": {"detail": "You are not allowed to modify this resource"}},
    },
}
NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post with ID 1 not found"}}},
}
BAD_REQUEST = {
    "description": "Bad request",
    "content": {
        "application/json": {
            "example": {
                "detail": "Validation failed",
                "errors": [
                    {
                        "field": "title",
                        "message": "String should have at least 5 characters",
                        "type": "string_too_short",
                    },
                ],
            },
        },
    },
}


def db_post_to_response(post: PostDB) -> PostResponse:
    return PostResponse.model_validate(post)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostPage,
    summary="List posts",
    description=(
        "List posts newest first. `search` filters by title or author, "
        "case-insensitively."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"posts": [POST_EXAMPLE], "total": 1, "page": 1, "pages": 1},
                },
            },
        },
        400: BAD_REQUEST,
    },
    operation_id="posts_list",
)
@timed("/posts")
async def list_posts(query: PostListQueryDep, service: PostServiceDep) -> PostPage:
    """
    List posts with optional search and pagination.

    Parameters
    ----------
    query : PostListQuery
        Search term, page and page size.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostPage
        The requested page with total and page counts.
    """
    result = await service.list(query.search, query.page, query.limit)
    return PostPage(
        posts=[db_post_to_response(post) for post in result.items],
        total=result.total,
        page=result.page,
        pages=result.pages,
    )


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by ID",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: BAD_REQUEST,
        404: NOT_FOUND,
    },
    operation_id="posts_get",
)
@timed("/posts/{post_id}")
async def get_post(post_id: int, service: PostServiceDep) -> PostResponse:
    """
    Get a single post.

    Parameters
    ----------
    post_id : int
        Post identifier.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostResponse
        Post data.

    Raises
    ------
    PostNotFoundError
        If the post does not exist.
    """
    return db_post_to_response(await service.get(post_id))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Create a new post",
    description="Publish a post authored by the authenticated user.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: BAD_REQUEST,
        401: UNAUTHORIZED,
    },
    operation_id="posts_create",
)
@timed("/posts/create")
async def create_post(
    payload: PostCreate,
    principal: PrincipalDep,
    service: PostServiceDep,
) -> PostResponse:
    """
    Create a new post.

    Any author supplied in the body is ignored; the author is the caller.

    Parameters
    ----------
    payload : PostCreate
        Title, content and optional image URL.
    principal : TokenData
        Authenticated caller.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostResponse
        Created post.
    """
    return db_post_to_response(await service.create(payload, principal))


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post",
    description=(
        "Partially update a post. Only the author may update it. "
        "Concurrent updates are last-write-wins."
    ),
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: BAD_REQUEST,
        401: UNAUTHORIZED,
        403: FORBIDDEN,
        404: NOT_FOUND,
    },
    operation_id="posts_update",
)
@timed("/posts/update")
async def update_post(
    post_id: int,
    payload: PostUpdate,
    principal: PrincipalDep,
    service: PostServiceDep,
) -> PostResponse:
    """
    Update a post owned by the caller.

    Parameters
    ----------
    post_id : int
        Post identifier.
    payload : PostUpdate
        Fields to change; omitted fields are kept.
    principal : TokenData
        Authenticated caller.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostResponse
        Updated post.

    Raises
    ------
    PostNotFoundError
        If the post does not exist.
    ForbiddenError
        If the caller is not the author.
    ValidationError
        If the updated post would be invalid.
    """
    return db_post_to_response(await service.update(post_id, payload, principal))


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a post",
    description="Delete a post. Only the author may delete it.",
    responses={
        200: {"content": {"application/json": {"example": {"message": "Post deleted"}}}},
        401: UNAUTHORIZED,
        403: FORBIDDEN,
        404: NOT_FOUND,
    },
    operation_id="posts_delete",
)
@timed("/posts/delete")
async def delete_post(
    post_id: int,
    principal: PrincipalDep,
    service: PostServiceDep,
) -> MessageResponse:
    """
    Delete a post owned by the caller.

    Raises
    ------
    PostNotFoundError
        If the post does not exist.
    ForbiddenError
        If the caller is not the author.
    """
    await service.delete(post_id, principal)
    return MessageResponse(message="Post deleted")
