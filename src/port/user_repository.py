from typing import Any, Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Store failures surface as PersistenceError; writes that take a
    ``session`` join the caller's transaction when one is given.
    """
    def create(self, name: str, email: str, password_hash: str, image: str) -> User:
        """Create a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def list_all(self) -> list[User]:
        """Return every user, without password hashes."""
        ...

    def add_place(self, user_id: str, place_id: str, session: Any = None) -> None:
        """Append a place ID to the user's places. Raise NotFoundError if no such user."""
        ...

    def remove_place(self, user_id: str, place_id: str, session: Any = None) -> None:
        """Pull a place ID from the user's places. Raise NotFoundError if no such user."""
        ...
