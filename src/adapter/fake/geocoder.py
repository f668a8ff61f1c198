"""In-memory implementation of GeocoderPort for testing."""

from domain.model.errors import GeocodeError
from domain.model.place import Location

EMPIRE_STATE_BUILDING = Location(lat=40.7484405, lng=-73.9878584)


class FakeGeocoder:
    def __init__(self, known: dict[str, Location] | None = None, default: Location | None = EMPIRE_STATE_BUILDING):
        self.known = known or {}
        self.default = default
        self.calls: list[str] = []

    def get_coordinates(self, address: str) -> Location:
        self.calls.append(address)
        location = self.known.get(address, self.default)
        if location is None:
            raise GeocodeError("Could not find location for the specified address.", 422)
        return location
