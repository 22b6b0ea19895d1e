"""Persisted login state for the command-line client."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from orjson import JSONDecodeError, dumps, loads

from quill.monitoring import get_logger

DEFAULT_SESSION_PATH = Path.home() / ".quill" / "session.json"

logger = get_logger(__name__)


@dataclass
class SessionContext:
    """
    Who the client is logged in as.

    The context is passed explicitly to the API client; nothing about the
    session lives in module globals.

    Attributes:
        token: Bearer token from the last register/login, if any.
        username: Username the token was issued for.
        path: File the session is persisted to.
    """

    token: str | None = None
    username: str | None = None
    path: Path = field(default=DEFAULT_SESSION_PATH)

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """
        Read a persisted session, or return an empty one.

        An unreadable or malformed file is treated as logged out.
        """
        path = path or DEFAULT_SESSION_PATH
        if not path.is_file():
            return cls(path=path)
        try:
            data = loads(path.read_bytes())
        except (OSError, JSONDecodeError):
            logger.warning("Ignoring unreadable session file", path=str(path))
            return cls(path=path)
        if not isinstance(data, dict):
            return cls(path=path)
        return cls(token=data.get("token"), username=data.get("username"), path=path)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def update(self, token: str, username: str) -> None:
        """Store a freshly issued token and persist it."""
        self.token = token
        self.username = username
        self.save()

    def save(self) -> None:
        """Write the session to a file only the current user can read."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # An existing file keeps its mode on open, so tighten it before writing
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "wb") as fh:
            fh.write(dumps({"token": self.token, "username": self.username}))

    def clear(self) -> None:
        """Forget the token and remove the persisted file."""
        self.token = None
        self.username = None
        self.path.unlink(missing_ok=True)

    def auth_headers(self) -> dict[str, str]:
        """``Authorization`` header for the current token, empty when logged out."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
