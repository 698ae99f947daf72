"""Services package."""

from finance_assistant.services.ledger import LedgerService
from finance_assistant.services.storage import (
    InMemoryLedgerStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)

__all__ = [
    # Ledger operations
    "LedgerService",
    # Storage services
    "InMemoryLedgerStorage",
    "LedgerStorageInterface",
    "NotFoundError",
    "StorageError",
]
