"""In-memory implementation of UserRepository for testing."""

import copy
import uuid
from datetime import datetime, timezone
from typing import Any

from adapter.fake.document_store import FakeDocumentStore
from domain.model.errors import DuplicateError, NotFoundError, PersistenceError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self, store: FakeDocumentStore | None = None):
        self.db = store or FakeDocumentStore()
        # Set to make every write raise PersistenceError, like a store outage
        self.fail_writes = False

    @property
    def store(self) -> dict[str, User]:
        return self.db.users

    # ── write operations ─────────────────────────────────────

    def create(self, name: str, email: str, password_hash: str, image: str) -> User:
        self._check_writable()
        if any(u.email == email for u in self.store.values()):
            raise DuplicateError("User exist already, please login instead.")

        now = datetime.now(timezone.utc)
        user = User(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            image=image,
            created_at=now,
            updated_at=now,
            places=[],
            password_hash=password_hash,
        )
        self.store[user.id] = user
        return copy.deepcopy(user)

    def add_place(self, user_id: str, place_id: str, session: Any = None) -> None:
        user = self._writable_user(user_id)
        user.places.append(place_id)
        user.updated_at = datetime.now(timezone.utc)

    def remove_place(self, user_id: str, place_id: str, session: Any = None) -> None:
        user = self._writable_user(user_id)
        user.places = [p for p in user.places if p != place_id]
        user.updated_at = datetime.now(timezone.utc)

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return copy.deepcopy(user) if user else None

    def list_all(self) -> list[User]:
        users = [copy.deepcopy(u) for u in self.store.values()]
        for user in users:
            user.password_hash = None
        return users

    # ── helpers ──────────────────────────────────────────────

    def _check_writable(self) -> None:
        if self.fail_writes:
            raise PersistenceError("Simulated user write failure")

    def _writable_user(self, user_id: str) -> User:
        self._check_writable()
        user = self.store.get(user_id)
        if not user:
            raise NotFoundError("Could not find user for provided id.")
        return user
