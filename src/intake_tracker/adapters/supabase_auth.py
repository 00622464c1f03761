"""Token authentication backed by Supabase Auth."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from supabase import AuthError as SupabaseAuthError
from supabase import Client

from intake_tracker.domain.errors import AuthError

_logger = logging.getLogger(__name__)


class Authenticator(Protocol):
    """Resolves an access token to the id of the user it was issued to."""

    def authenticate(self, token: str) -> UUID:
        """Return the user id, raising ``AuthError`` for invalid tokens."""


@dataclass
class SupabaseAuthenticator(Authenticator):
    """Validates Supabase access tokens."""

    client: Client

    def authenticate(self, token: str) -> UUID:
        """Return the Supabase user id for the access token."""
        try:
            response = self.client.auth.get_user(token)
        except SupabaseAuthError as exc:
            _logger.info("Rejected access token: %s", exc)
            raise AuthError("Invalid or expired token.") from exc
        user = getattr(response, "user", None)
        if user is None:
            raise AuthError("Invalid or expired token.")
        return UUID(str(user.id))
