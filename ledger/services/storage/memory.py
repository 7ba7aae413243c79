"""
In-Memory Storage Implementation

The ledger's stores live for as long as the ledger object that owns them.
Nothing is persisted between runs.

TRADEOFFS:
- Category totals are a linear scan over every transaction (fine at this size)
- No locking: a store must not be shared between threads
"""

from typing import Optional
from uuid import UUID

from ledger.models.audit import AuditEvent
from ledger.models.finance import Budget, Transaction
from ledger.services.storage.interface import (
    AuditStorageInterface,
    BudgetStorageInterface,
    TransactionStorageInterface,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Ordered list of transactions with sequential ids."""

    def __init__(self):
        self._transactions: list[Transaction] = []

    def add_transaction(self, transaction: Transaction) -> Transaction:
        # No deletion exists, so the length always equals the last id issued.
        stored = transaction.model_copy(update={"id": len(self._transactions) + 1})
        self._transactions.append(stored)
        return stored

    def list_transactions(
        self,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        if category is None:
            return list(self._transactions)
        return [tx for tx in self._transactions if tx.category == category]

    def count(self) -> int:
        return len(self._transactions)


class InMemoryBudgetStorage(BudgetStorageInterface):
    """Mapping from category name to budget."""

    def __init__(self):
        self._budgets: dict[str, Budget] = {}

    def save_budget(self, budget: Budget) -> Optional[Budget]:
        previous = self._budgets.get(budget.category)
        self._budgets[budget.category] = budget
        return previous

    def get_budget(self, category: str) -> Optional[Budget]:
        return self._budgets.get(category)

    def list_budgets(self) -> list[Budget]:
        return sorted(self._budgets.values(), key=lambda b: b.category)


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events[-limit:])) if limit > 0 else []
