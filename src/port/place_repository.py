"""Port definition for PlaceRepository."""

from typing import Any, Protocol

from domain.model.place import Place


class PlaceRepository(Protocol):
    def create(self, place: Place, session: Any = None) -> Place: ...

    def get_by_id(self, place_id: str) -> Place | None: ...

    def find_by_creator(self, user_id: str) -> list[Place]: ...

    def update_details(self, place_id: str, title: str, description: str) -> Place | None: ...

    def delete(self, place_id: str, session: Any = None) -> bool: ...
