"""In-memory implementation of TransactionManager for testing."""

from contextlib import contextmanager
from typing import Iterator

from adapter.fake.document_store import FakeDocumentStore


class FakeTransactionManager:
    def __init__(self, store: FakeDocumentStore):
        self.store = store
        self.committed = 0
        self.aborted = 0

    @contextmanager
    def transaction(self) -> Iterator['FakeTransactionManager']:
        snapshot = self.store.snapshot()
        try:
            yield self
        except Exception:
            self.store.restore(snapshot)
            self.aborted += 1
            raise
        self.committed += 1
