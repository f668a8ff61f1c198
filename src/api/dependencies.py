import logging

from fastapi import Depends

from adapter.external.google_geocoder import GoogleGeocoderAdapter
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.place_repository import MongoPlaceRepository
from adapter.mongodb.transaction import MongoTransactionManager
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.storage.local_image_store import LocalImageStore
from domain.model.errors import DomainError, PersistenceError
from port.geocoder import GeocoderPort
from port.image_store import ImageStorePort
from port.place_repository import PlaceRepository
from port.transaction import TransactionManager
from port.user_repository import UserRepository
from services.token_service import TokenService
from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _get_client(settings: Settings):
    """Get MongoDB client, raising PersistenceError if unavailable."""
    client = get_mongodb_client(settings.mongo_url)
    if client is None:
        raise PersistenceError("Database unavailable")
    return client


def _get_db(settings: Settings):
    return _get_client(settings)[settings.database_name]


def get_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository:
    return MongoUserRepository(_get_db(settings))


def get_place_repo(settings: Settings = Depends(get_settings)) -> PlaceRepository:
    return MongoPlaceRepository(_get_db(settings))


def get_transaction_manager(settings: Settings = Depends(get_settings)) -> TransactionManager:
    return MongoTransactionManager(_get_client(settings))


def get_geocoder(settings: Settings = Depends(get_settings)) -> GeocoderPort:
    return GoogleGeocoderAdapter(settings.google_api_key)


def get_image_store(settings: Settings = Depends(get_settings)) -> ImageStorePort:
    return LocalImageStore(settings.upload_dir, settings.max_image_bytes)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    if not settings.jwt_secret_key:
        logger.error(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
        raise DomainError()
    return TokenService(settings.jwt_secret_key, expires_minutes=settings.jwt_expiration_minutes)
