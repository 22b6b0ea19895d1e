# quill/dependencies/__init__.py

from quill.dependencies.dependencies import (
    AuthServiceDep,
    PostListQuery,
    PostListQueryDep,
    PostRepoDep,
    PostServiceDep,
    PrincipalDep,
    UserRepoDep,
    bearer_scheme,
    get_current_principal,
    get_post_list_query,
)

__all__ = [
    "AuthServiceDep",
    "PostListQuery",
    "PostListQueryDep",
    "PostRepoDep",
    "PostServiceDep",
    "PrincipalDep",
    "UserRepoDep",
    "bearer_scheme",
    "get_current_principal",
    "get_post_list_query",
]
