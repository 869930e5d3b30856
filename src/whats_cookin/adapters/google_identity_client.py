"""Google OAuth userinfo client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx


@dataclass(frozen=True)
class IdentityInfo:
    """Identity claims returned by the identity provider."""

    email: str
    name: str


class IdentityClient(Protocol):
    """Interface for resolving an access token to an identity."""

    async def fetch_identity(self, access_token: str) -> IdentityInfo | None:
        """Return the identity for a token, or None when the token is rejected."""


@dataclass
class HttpxGoogleIdentityClient(IdentityClient):
    """Identity client backed by Google's userinfo endpoint."""

    userinfo_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, userinfo_url: str) -> "HttpxGoogleIdentityClient":
        """Create an identity client with a managed httpx session."""
        return cls(userinfo_url=userinfo_url, http_client=httpx.AsyncClient())

    async def fetch_identity(self, access_token: str) -> IdentityInfo | None:
        """Exchange an access token for the user's email and name."""
        response = await self.http_client.get(
            self.userinfo_url,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=10,
        )
        if response.status_code in {400, 401, 403}:
            return None
        response.raise_for_status()
        payload = response.json()
        email = payload.get("email") if isinstance(payload, dict) else None
        if not isinstance(email, str) or not email:
            return None
        return IdentityInfo(email=email, name=str(payload.get("name") or email))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
