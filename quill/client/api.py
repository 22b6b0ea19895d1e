"""Async HTTP client for the Quill API."""

from types import TracebackType
from typing import Any, Self

from httpx import AsyncBaseTransport, AsyncClient, Response

from quill.client.session import SessionContext

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ApiError(Exception):
    """
    A non-2xx response from the API.

    Attributes:
        status_code: HTTP status of the response.
        detail: Server-provided message.
        errors: Field-level validation errors, when present.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []

    def __str__(self) -> str:
        return f"{self.status_code}: {self.detail}"


class QuillClient:
    """
    Thin wrapper over ``httpx.AsyncClient``.

    Register and login store the issued token in the session; write calls
    send it as a bearer token.

    Example:
        ```python
        async with QuillClient(session=SessionContext.load()) as client:
            page = await client.list_posts(search="alice")
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: SessionContext | None = None,
        api_prefix: str = "/api",
        timeout: float = 10.0,
        transport: AsyncBaseTransport | None = None,
    ) -> None:
        self.session = session or SessionContext.load()
        self._http = AsyncClient(
            base_url=base_url.rstrip("/") + api_prefix,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def register(self, username: str, email: str, password: str) -> dict[str, Any]:
        """Create an account and log in as it."""
        data = await self._request(
            "POST",
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        self.session.update(data["token"], data["username"])
        return data

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and persist the issued token."""
        data = await self._request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
        )
        self.session.update(data["token"], data["username"])
        return data

    def logout(self) -> None:
        """Tokens are stateless, so logging out only discards the local copy."""
        self.session.clear()

    async def list_posts(
        self,
        search: str = "",
        page: int = 1,
        limit: int = 10,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        return await self._request("GET", "/posts", params=params)

    async def get_post(self, post_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/posts/{post_id}")

    async def create_post(
        self,
        title: str,
        content: str,
        image_url: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"title": title, "content": content}
        if image_url:
            body["imageURL"] = image_url
        return await self._request("POST", "/posts", json=body, auth=True)

    async def update_post(self, post_id: int, **changes: Any) -> dict[str, Any]:
        """
        Send only the given fields; ``image_url`` maps to ``imageURL``.

        Example:
            >>> await client.update_post(3, title="A better title")
        """
        if "image_url" in changes:
            changes["imageURL"] = changes.pop("image_url")
        return await self._request("PUT", f"/posts/{post_id}", json=changes, auth=True)

    async def delete_post(self, post_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/posts/{post_id}", auth=True)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        auth: bool = False,
        **kwargs: Any,
    ) -> dict[str, Any]:
        headers = self.session.auth_headers() if auth else {}
        response = await self._http.request(method, url, headers=headers, **kwargs)
        return self._handle(response)

    @staticmethod
    def _handle(response: Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.is_success:
            return data
        if not isinstance(data, dict):
            data = {}
        raise ApiError(
            status_code=response.status_code,
            detail=str(data.get("detail") or response.reason_phrase),
            errors=data.get("errors"),
        )
