"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Give every session (and every test) its own isolated ledger
2. Swap the in-memory lists for a real database later
3. Keep business logic decoupled from storage implementation

The interface is intentionally simple - append and full scan.
There is no update or delete: ledgers are append-only.
"""

from abc import ABC, abstractmethod

from finance_assistant.models.ledger import LedgerEntry, LedgerKind


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation must preserve insertion order.
    """

    @abstractmethod
    async def append(self, kind: LedgerKind, entry: LedgerEntry) -> None:
        """
        Append an entry to one of the two ledgers.

        Args:
            kind: Which ledger (expense or income)
            entry: The entry to append

        Raises:
            StorageError: If the append fails
        """
        pass

    @abstractmethod
    async def list_entries(self, kind: LedgerKind) -> list[LedgerEntry]:
        """
        Return every entry of one ledger in insertion order.

        Args:
            kind: Which ledger (expense or income)

        Returns:
            A copy of the ledger's entries (oldest first)
        """
        pass

    @abstractmethod
    async def count(self, kind: LedgerKind) -> int:
        """Number of entries in one ledger."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Requested ledger does not exist in this backend."""
    pass
