from collections.abc import MutableMapping
from datetime import datetime
from math import ceil
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from pydantic import validate_email
from pydantic_core import PydanticCustomError
from starlette.routing import BaseRoute, Match, Route


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return the current local time as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(
        "%Y-%m-%d %H:%M:%S",
    )


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed to hold ``total`` items, ``0`` when empty."""
    return ceil(total / page_size) if total else 0


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary


def normalize_email(value: str) -> str:
    """
    Canonical form used to store and look up account emails.

    Display names are dropped and the whole address is lowercased, so
    ``Alice <Alice@Example.COM>`` and ``alice@example.com`` name the same
    account. Strings that are not addresses are only trimmed and lowercased.
    """
    try:
        _, email = validate_email(value)
    except PydanticCustomError:
        return value.strip().lower()
    return email.lower()
