# quill/dependencies/dependencies.py

"""Application dependencies: repositories, services and the bearer-token gate."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from quill.configs import DEFAULT_PAGE_SIZE, MAX_PAGE_NUMBER, MAX_PAGE_SIZE
from quill.db import get_session
from quill.errors import UnauthenticatedError
from quill.managers.token_manager import decode_access_token
from quill.monitoring import bind_user
from quill.repositories import PostRepository, UserRepository
from quill.schemas.auth import TokenData
from quill.services import AuthService, PostService

bearer_scheme = HTTPBearer(auto_error=False, description="JWT access token")


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_post_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> PostRepository:
    """
    Resolve the `PostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostRepository
        Repository instance bound to the session.
    """
    return PostRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


def get_auth_service(user_repo: UserRepoDep) -> AuthService:
    return AuthService(user_repo)


def get_post_service(post_repo: PostRepoDep) -> PostService:
    return PostService(post_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]


async def get_current_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """
    Resolve the caller's identity from the ``Authorization: Bearer`` header.

    Verification is stateless: the token alone proves who the caller is,
    no user lookup is made.

    Parameters
    ----------
    request : Request
        Incoming request; the principal is stored on ``request.state``.
    credentials : HTTPAuthorizationCredentials | None
        Parsed bearer credentials, ``None`` when the header is missing.

    Returns
    -------
    TokenData
        Verified principal.

    Raises
    ------
    UnauthenticatedError
        If the header is missing, malformed, or the token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError

    principal = decode_access_token(credentials.credentials)
    if principal is None:
        raise UnauthenticatedError

    request.state.principal = principal
    bind_user(principal.username)
    return principal


PrincipalDep = Annotated[TokenData, Depends(get_current_principal)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listing.

    Parameters
    ----------
    search : str
        Case-insensitive filter on title or author, empty for no filter.
    page : int
        1-based page number.
    limit : int
        Page size.
    """

    search: str = ""
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


def get_post_list_query(
    search: Annotated[
        str,
        Query(max_length=200, description="Filter by title or author (case-insensitive)"),
    ] = "",
    page: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_NUMBER, description="Page number, starting at 1"),
    ] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of posts per page"),
    ] = DEFAULT_PAGE_SIZE,
) -> PostListQuery:
    """
    Dependency to construct `PostListQuery` from query parameters.

    Returns
    -------
    PostListQuery
        Aggregated query parameters object.
    """
    return PostListQuery(search=search.strip(), page=page, limit=limit)


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]
