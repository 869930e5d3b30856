"""Sign-in gate for the household app."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from whats_cookin.adapters.google_identity_client import IdentityClient
from whats_cookin.domain.errors import (
    AccessDeniedError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from whats_cookin.domain.users import AllowedUser, SessionUser

logger = logging.getLogger(__name__)


class AllowedUserRepository(Protocol):
    """Persistence interface for the allow-list."""

    def get_allowed_user(self, email: str) -> AllowedUser | None:
        """Return the allow-list entry for an email, if any."""


@dataclass
class AuthService:
    """Resolves identity-provider tokens to allow-listed session users."""

    identity_client: IdentityClient
    repository: AllowedUserRepository
    allowed_emails: set[str] | None = field(default=None)

    async def login(self, credential: str) -> SessionUser:
        """Verify a credential and return the user to store in the session."""
        token = credential.strip() if isinstance(credential, str) else ""
        if not token:
            raise ValidationError("credential is required")
        try:
            identity = await self.identity_client.fetch_identity(token)
        except httpx.HTTPError as exc:
            logger.warning("Identity provider request failed: %s", exc)
            raise UpstreamError("Could not verify sign-in with Google") from exc
        if identity is None:
            raise UnauthorizedError("Invalid sign-in credential")

        email = identity.email.strip().lower()
        allowed = self.repository.get_allowed_user(email)
        if allowed is not None:
            return SessionUser(
                email=email,
                name=allowed.name or identity.name,
                role=allowed.role,
            )
        if self.allowed_emails and email in self.allowed_emails:
            return SessionUser(email=email, name=identity.name)
        logger.info("Rejected sign-in for %s", email)
        raise AccessDeniedError("This account is not allowed to use this app")
