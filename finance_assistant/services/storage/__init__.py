"""
Storage Services Package

Provides the abstract ledger interface and the in-memory implementation.
Designed so a persistent backend can be swapped in later.
"""

from finance_assistant.services.storage.interface import (
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from finance_assistant.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryLedgerStorage",
]
