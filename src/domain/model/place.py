# domain/model/place.py

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Geographic coordinates resolved from an address."""
    lat: float
    lng: float


@dataclass
class Place:
    """Domain model representing a point of interest owned by one user."""
    id: str
    title: str
    description: str
    image: str
    address: str
    location: Location
    creator: str

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(
        title: str,
        description: str,
        address: str,
        location: Location,
        image: str,
        creator: str,
    ) -> 'Place':
        """Create a new Place with a generated ID."""
        return Place(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            image=image,
            address=address,
            location=location,
            creator=creator,
        )

    # ── queries ───────────────────────────────────────────

    def is_owned_by(self, user_id: str) -> bool:
        return self.creator == user_id

    # ── state transitions ─────────────────────────────────

    def rename(self, title: str, description: str) -> None:
        """Replace the editable fields. Everything else is immutable after creation."""
        self.title = title
        self.description = description
