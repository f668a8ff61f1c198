"""MongoDB implementation of PlaceRepository."""

from logging import getLogger
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import PLACES_COLLECTION_NAME
from domain.model.errors import PersistenceError
from domain.model.place import Location, Place

logger = getLogger(__name__)


class MongoPlaceRepository:
    def __init__(self, db: Database):
        self.collection = db[PLACES_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for places collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('creator', 1)], 'idx_places_creator')
            return True
        except PyMongoError as e:
            logger.error("Failed to create places indexes", extra={"error": str(e)})
            return False

    # ── conversion ────────────────────────────────────────────

    @staticmethod
    def _to_domain(doc: dict) -> Place:
        location = doc['location']
        return Place(
            id=doc['_id'],
            title=doc['title'],
            description=doc['description'],
            image=doc['image'],
            address=doc['address'],
            location=Location(lat=location['lat'], lng=location['lng']),
            creator=doc['creator'],
        )

    @staticmethod
    def _to_document(place: Place) -> dict:
        return {
            '_id': place.id,
            'title': place.title,
            'description': place.description,
            'image': place.image,
            'address': place.address,
            'location': {'lat': place.location.lat, 'lng': place.location.lng},
            'creator': place.creator,
        }

    # ── write operations ──────────────────────────────────────

    def create(self, place: Place, session: Any = None) -> Place:
        try:
            self.collection.insert_one(self._to_document(place), session=session)
        except PyMongoError as e:
            logger.error("Failed to insert place", extra={"placeId": place.id, "error": str(e)})
            raise PersistenceError("Failed to save place") from e
        return place

    def update_details(self, place_id: str, title: str, description: str) -> Place | None:
        try:
            doc = self.collection.find_one_and_update(
                {'_id': place_id},
                {'$set': {'title': title, 'description': description}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update place", extra={"placeId": place_id, "error": str(e)})
            raise PersistenceError("Failed to update place") from e
        return self._to_domain(doc) if doc else None

    def delete(self, place_id: str, session: Any = None) -> bool:
        try:
            result = self.collection.delete_one({'_id': place_id}, session=session)
        except PyMongoError as e:
            logger.error("Failed to delete place", extra={"placeId": place_id, "error": str(e)})
            raise PersistenceError("Failed to delete place") from e
        return result.deleted_count > 0

    # ── read operations ───────────────────────────────────────

    def get_by_id(self, place_id: str) -> Place | None:
        try:
            doc = self.collection.find_one({'_id': place_id})
        except PyMongoError as e:
            logger.error("Failed to get place", extra={"placeId": place_id, "error": str(e)})
            raise PersistenceError("Failed to load place") from e
        return self._to_domain(doc) if doc else None

    def find_by_creator(self, user_id: str) -> list[Place]:
        try:
            docs = list(self.collection.find({'creator': user_id}))
        except PyMongoError as e:
            logger.error("Failed to list places", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to load places") from e
        return [self._to_domain(doc) for doc in docs]
