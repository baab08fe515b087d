"""Anonymous identity handling."""

import logging
from dataclasses import dataclass
from typing import Protocol

from lingo_live.domain.errors import AuthenticationError

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Interface for an anonymous identity provider."""

    def sign_in_anonymously(self) -> str:
        """Create an anonymous identity and return its user id."""


@dataclass
class IdentityService:
    """Service that keeps a session signed in."""

    provider: IdentityProvider

    def ensure_identity(self, current_user_id: str | None = None) -> str:
        """Return the current identity, signing in anonymously when absent."""
        if current_user_id:
            return current_user_id
        try:
            user_id = self.provider.sign_in_anonymously()
        except Exception as exc:
            raise AuthenticationError("Anonymous sign-in failed") from exc
        if not user_id:
            raise AuthenticationError("Identity provider returned no user id")
        logger.info("Signed in anonymously", extra={"user_id": user_id})
        return user_id
