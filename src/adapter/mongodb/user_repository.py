"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from typing import Any

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, NotFoundError, PersistenceError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            image=doc.get('image', ''),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            places=list(doc.get('places', [])),
            password_hash=doc.get('password_hash'),
        )

    def create(self, name: str, email: str, password_hash: str, image: str) -> User:
        """Create a new user and return the User object."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'name': name,
            'email': email,
            'password_hash': password_hash,
            'image': image,
            'places': [],
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError("User exist already, please login instead.") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise PersistenceError("Signing up failed, please try again.") from e

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise PersistenceError("Failed to load user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to load user") from e
        return self._to_domain(doc) if doc else None

    def list_all(self) -> list[User]:
        try:
            docs = list(self.collection.find({}, {'password_hash': 0}))
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise PersistenceError("Failed to load users") from e
        return [self._to_domain(doc) for doc in docs]

    def add_place(self, user_id: str, place_id: str, session: Any = None) -> None:
        self._update_places(user_id, {'$push': {'places': place_id}}, session)

    def remove_place(self, user_id: str, place_id: str, session: Any = None) -> None:
        self._update_places(user_id, {'$pull': {'places': place_id}}, session)

    def _update_places(self, user_id: str, change: dict, session: Any) -> None:
        update = {**change, '$set': {'updated_at': datetime.now(timezone.utc)}}
        try:
            result = self.collection.update_one({'_id': user_id}, update, session=session)
        except PyMongoError as e:
            logger.error("Failed to update user places", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to update user places") from e
        if result.matched_count == 0:
            raise NotFoundError("Could not find user for provided id.")
