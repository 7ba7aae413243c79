"""Services package."""

from ledger.services.loader import (
    BudgetDecodeError,
    BudgetLoadError,
    decode_budgets,
    read_budgets_file,
)
from ledger.services.storage import (
    AuditStorageInterface,
    BudgetStorageInterface,
    InMemoryAuditStorage,
    InMemoryBudgetStorage,
    InMemoryTransactionStorage,
    TransactionStorageInterface,
)

__all__ = [
    # Budget loading
    "BudgetDecodeError",
    "BudgetLoadError",
    "decode_budgets",
    "read_budgets_file",
    # Storage services
    "AuditStorageInterface",
    "BudgetStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryBudgetStorage",
    "InMemoryTransactionStorage",
    "TransactionStorageInterface",
]
