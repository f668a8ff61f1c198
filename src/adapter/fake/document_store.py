"""Shared in-memory document store backing the fake repositories."""

import copy

from domain.model.place import Place
from domain.model.user import User


class FakeDocumentStore:
    """Both collections in one object so a fake transaction can snapshot them together."""

    def __init__(self):
        self.users: dict[str, User] = {}
        self.places: dict[str, Place] = {}

    def snapshot(self) -> tuple[dict[str, User], dict[str, Place]]:
        return copy.deepcopy(self.users), copy.deepcopy(self.places)

    def restore(self, snapshot: tuple[dict[str, User], dict[str, Place]]) -> None:
        self.users, self.places = snapshot
