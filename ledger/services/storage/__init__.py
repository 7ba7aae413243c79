"""
Storage Services Package

Provides abstract interfaces and concrete implementations for ledger storage.
Currently implements in-memory stores, but designed to be swappable.
"""

from ledger.services.storage.interface import (
    AuditStorageInterface,
    BudgetStorageInterface,
    TransactionStorageInterface,
)
from ledger.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryBudgetStorage,
    InMemoryTransactionStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "BudgetStorageInterface",
    "TransactionStorageInterface",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryBudgetStorage",
    "InMemoryTransactionStorage",
]
