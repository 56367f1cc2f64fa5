"""Request dependencies shared by the API routers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Header, HTTPException, Request, status

from protein_tracker.config import is_valid_timezone
from protein_tracker.domain.errors import ValidationError

if TYPE_CHECKING:
    from protein_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def _resolve_bearer(request: Request, authorization: str) -> UUID:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    user_id = get_container(request).auth_client.get_user_id(token.strip())
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user_id


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID:
    """Resolve the bearer token to the signed-in user's id."""
    return _resolve_bearer(request, authorization or "")


async def optional_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID | None:
    """Like require_user, but anonymous callers resolve to None."""
    if authorization is None:
        return None
    return _resolve_bearer(request, authorization)


async def user_timezone(
    request: Request, x_timezone: str | None = Header(default=None)
) -> str:
    """Return the caller's IANA timezone, falling back to the default."""
    if x_timezone is None or not x_timezone.strip():
        return get_container(request).settings.default_timezone
    timezone_name = x_timezone.strip()
    if not is_valid_timezone(timezone_name):
        raise ValidationError(f"Unknown timezone: {timezone_name}")
    return timezone_name


def caller_id(request: Request) -> str:
    """Identify the caller by forwarded origin, then by peer address."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
