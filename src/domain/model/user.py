from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    name: str
    email: str
    image: str
    created_at: datetime
    updated_at: datetime
    places: list[str] = field(default_factory=list)
    password_hash: str | None = None

    def owns(self, place_id: str) -> bool:
        return place_id in self.places


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified auth token."""
    user_id: str
    email: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful signup or login."""
    user_id: str
    email: str
    token: str
