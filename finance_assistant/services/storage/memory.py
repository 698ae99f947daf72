"""
In-Memory Ledger Storage

Two Python lists, one per ledger. Created empty with the session and
discarded with it - nothing survives the process.
"""

from finance_assistant.models.ledger import LedgerEntry, LedgerKind
from finance_assistant.services.storage.interface import (
    LedgerStorageInterface,
    NotFoundError,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Append-only in-memory ledgers."""

    def __init__(self):
        self._ledgers: dict[LedgerKind, list[LedgerEntry]] = {
            LedgerKind.EXPENSE: [],
            LedgerKind.INCOME: [],
        }

    def _ledger(self, kind: LedgerKind) -> list[LedgerEntry]:
        try:
            return self._ledgers[kind]
        except KeyError:
            raise NotFoundError(f"No ledger for kind: {kind!r}")

    async def append(self, kind: LedgerKind, entry: LedgerEntry) -> None:
        self._ledger(kind).append(entry)

    async def list_entries(self, kind: LedgerKind) -> list[LedgerEntry]:
        # Entries are frozen, a shallow copy is enough
        return list(self._ledger(kind))

    async def count(self, kind: LedgerKind) -> int:
        return len(self._ledger(kind))
