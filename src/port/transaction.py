"""Port definition for multi-document transactions."""

from contextlib import AbstractContextManager
from typing import Any, Protocol


class TransactionManager(Protocol):
    def transaction(self) -> AbstractContextManager[Any]:
        """Open a transaction and yield its session handle.

        Commits when the block exits normally, aborts when it raises.
        A failed commit surfaces as PersistenceError.
        """
        ...
