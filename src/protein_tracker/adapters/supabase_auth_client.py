"""Supabase Auth adapter for resolving access tokens."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from supabase import Client

_logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Interface for resolving an access token to a user id."""

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid token, otherwise None."""


@dataclass
class SupabaseAuthClient(AuthClient):
    """Verifies access tokens against Supabase Auth."""

    client: Client

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid token, otherwise None."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            _logger.warning("Rejected access token", exc_info=True)
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return UUID(str(user.id))
