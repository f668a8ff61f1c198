from typing import Protocol

from domain.model.place import Location


class GeocoderPort(Protocol):
    def get_coordinates(self, address: str) -> Location:
        """Resolve a free-text address. Raise GeocodeError if it cannot be resolved."""
        ...
