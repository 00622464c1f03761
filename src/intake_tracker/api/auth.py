"""Bearer token authentication for API routes."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Header, Request

from intake_tracker.domain.errors import AuthError

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> UUID:
    """Resolve the requesting user from a bearer token or ``token`` cookie."""
    token = _bearer_token(authorization) or request.cookies.get("token")
    if not token:
        raise AuthError("Access denied. No token provided.")
    container: AppContainer = request.app.state.container
    return container.authenticator.authenticate(token)


def _bearer_token(header: str | None) -> str | None:
    if not header:
        return None
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()
