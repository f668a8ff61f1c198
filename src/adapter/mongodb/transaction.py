"""MongoDB implementation of TransactionManager."""

from contextlib import contextmanager
from logging import getLogger
from typing import Iterator

from pymongo import MongoClient
from pymongo.client_session import ClientSession
from pymongo.errors import PyMongoError

from domain.model.errors import PersistenceError

logger = getLogger(__name__)


class MongoTransactionManager:
    """Runs a block of repository writes as one multi-document transaction.

    ``ClientSession.start_transaction`` commits when the block exits
    normally and aborts when it raises, so nothing written through the
    yielded session is visible unless every write succeeded.
    """

    def __init__(self, client: MongoClient):
        self.client = client

    @contextmanager
    def transaction(self) -> Iterator[ClientSession]:
        try:
            with self.client.start_session() as session:
                with session.start_transaction():
                    yield session
        except PyMongoError as e:
            logger.error("Transaction aborted", extra={"error": str(e)})
            raise PersistenceError("Transaction failed") from e
