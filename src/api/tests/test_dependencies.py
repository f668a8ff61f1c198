"""Unit tests for API dependency wiring."""

import unittest
from unittest.mock import MagicMock, patch

from adapter.mongodb.place_repository import MongoPlaceRepository
from adapter.mongodb.transaction import MongoTransactionManager
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.storage.local_image_store import LocalImageStore
from api.dependencies import (
    get_image_store,
    get_place_repo,
    get_token_service,
    get_transaction_manager,
    get_user_repo,
)
from domain.model.errors import DomainError, PersistenceError
from services.token_service import TokenService
from utils.settings import Settings


class TestRepositoryDependencies(unittest.TestCase):

    def setUp(self):
        self.settings = Settings(mongo_url="mongodb://localhost:27017", database_name="placeshare_test")

    @patch('api.dependencies.get_mongodb_client')
    def test_repositories_use_configured_database(self, mock_get_client):
        mock_client = MagicMock()
        mock_get_client.return_value = mock_client

        self.assertIsInstance(get_user_repo(self.settings), MongoUserRepository)
        self.assertIsInstance(get_place_repo(self.settings), MongoPlaceRepository)

        mock_get_client.assert_called_with("mongodb://localhost:27017")
        mock_client.__getitem__.assert_called_with("placeshare_test")

    @patch('api.dependencies.get_mongodb_client')
    def test_transaction_manager_wraps_client(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        self.assertIsInstance(get_transaction_manager(self.settings), MongoTransactionManager)

    @patch('api.dependencies.get_mongodb_client')
    def test_unavailable_database_is_persistence_error(self, mock_get_client):
        mock_get_client.return_value = None

        for factory in (get_user_repo, get_place_repo, get_transaction_manager):
            with self.subTest(factory=factory.__name__):
                with self.assertRaises(PersistenceError) as ctx:
                    factory(self.settings)

                self.assertEqual(ctx.exception.code, 500)
                self.assertEqual(ctx.exception.message, "Database unavailable")


class TestServiceDependencies(unittest.TestCase):

    def test_token_service_requires_secret(self):
        with self.assertLogs('api.dependencies', level='ERROR'):
            with self.assertRaises(DomainError) as ctx:
                get_token_service(Settings(jwt_secret_key=None))

        self.assertEqual(ctx.exception.code, 500)

    def test_token_service_uses_configured_expiry(self):
        tokens = get_token_service(Settings(jwt_secret_key="k", jwt_expiration_minutes=5))

        self.assertIsInstance(tokens, TokenService)
        self.assertEqual(tokens.expires_minutes, 5)

    def test_image_store_uses_configured_limits(self):
        store = get_image_store(Settings(upload_dir="/tmp/placeshare-images", max_image_bytes=1000))

        self.assertIsInstance(store, LocalImageStore)
        self.assertEqual(store.max_bytes, 1000)


if __name__ == '__main__':
    unittest.main()
