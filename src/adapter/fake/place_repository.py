"""In-memory implementation of PlaceRepository for testing."""

import copy
from typing import Any

from adapter.fake.document_store import FakeDocumentStore
from domain.model.errors import PersistenceError
from domain.model.place import Place


class FakePlaceRepository:
    def __init__(self, store: FakeDocumentStore | None = None):
        self.db = store or FakeDocumentStore()
        self.fail_writes = False
        self.fail_reads = False

    @property
    def store(self) -> dict[str, Place]:
        return self.db.places

    # ── write operations ─────────────────────────────────────

    def create(self, place: Place, session: Any = None) -> Place:
        self._check(self.fail_writes)
        self.store[place.id] = copy.deepcopy(place)
        return place

    def update_details(self, place_id: str, title: str, description: str) -> Place | None:
        self._check(self.fail_writes)
        place = self.store.get(place_id)
        if not place:
            return None
        place.rename(title, description)
        return copy.deepcopy(place)

    def delete(self, place_id: str, session: Any = None) -> bool:
        self._check(self.fail_writes)
        return self.store.pop(place_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, place_id: str) -> Place | None:
        self._check(self.fail_reads)
        place = self.store.get(place_id)
        return copy.deepcopy(place) if place else None

    def find_by_creator(self, user_id: str) -> list[Place]:
        self._check(self.fail_reads)
        return [copy.deepcopy(p) for p in self.store.values() if p.creator == user_id]

    @staticmethod
    def _check(failing: bool) -> None:
        if failing:
            raise PersistenceError("Simulated place store failure")
