"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep several independent ledgers in one process
2. Swap the in-memory stores for a real database later
3. Keep business logic decoupled from storage implementation

The interface is intentionally small. Neither store supports deletion:
transactions are append-only and budgets are only ever set or replaced.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ledger.models.audit import AuditEvent
from ledger.models.finance import Budget, Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for the append-only transaction store.
    """

    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> Transaction:
        """
        Append a transaction and assign its identifier.

        Args:
            transaction: A validated candidate (its id is ignored)

        Returns:
            The stored transaction carrying the next sequential id
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """
        List stored transactions in insertion order.

        Args:
            category: Only return transactions with exactly this category

        Returns:
            A new list; mutating it does not affect the store
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored transactions."""
        pass


class BudgetStorageInterface(ABC):
    """
    Abstract interface for the budget registry, keyed by category.
    """

    @abstractmethod
    def save_budget(self, budget: Budget) -> Optional[Budget]:
        """
        Insert or replace the budget for its category.

        Returns:
            The budget that was replaced, or None if the category was new
        """
        pass

    @abstractmethod
    def get_budget(self, category: str) -> Optional[Budget]:
        """
        Retrieve the budget for a category.

        Returns:
            The budget if one is configured, None otherwise
        """
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """
        List all budgets sorted by category name.

        Returns:
            A new list; mutating it does not affect the store
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one bulk budget load).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass
