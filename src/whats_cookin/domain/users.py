"""Domain models for authenticated users."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AllowedUser:
    """A row of the allow-list."""

    email: str
    name: str
    role: str


@dataclass(frozen=True)
class SessionUser:
    """Identity stored in the session cookie."""

    email: str
    name: str
    role: str = "user"

    def to_session(self) -> dict[str, str]:
        """Serialize for the session cookie."""
        return {"email": self.email, "name": self.name, "role": self.role}

    @classmethod
    def from_session(cls, data: object) -> "SessionUser | None":
        """Rebuild the user from session data, if well formed."""
        if not isinstance(data, dict):
            return None
        email = data.get("email")
        if not isinstance(email, str) or not email:
            return None
        return cls(
            email=email,
            name=str(data.get("name") or email),
            role=str(data.get("role") or "user"),
        )
