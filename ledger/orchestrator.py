"""
Main Orchestrator for the Personal Ledger

This module ties together storage, validation, aggregation and audit
into a single Ledger object. It defines the flows for:
1. Adding a transaction (validate -> check budget -> store -> audit)
2. Setting a budget (validate -> store -> audit)
3. Bulk loading budgets (decode -> set each in order -> audit)

DESIGN DECISION: A Ledger owns its stores; there is no module-level state.
Several ledgers can live side by side, and each test gets a fresh one.

DESIGN DECISION: A rejected operation leaves both stores untouched.
The one deliberate exception is bulk loading: budgets applied before the
failing record stay applied.
"""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional, Union
from uuid import UUID

from ledger.audit import AuditLogger, create_correlation_id
from ledger.config import get_settings
from ledger.config.settings import Settings
from ledger.models.finance import Budget, BudgetStatus, Transaction
from ledger.queries import QueryExecutor
from ledger.services.loader import (
    BudgetDecodeError,
    BudgetLoadError,
    decode_budgets,
    read_budgets_file,
)
from ledger.services.storage import (
    BudgetStorageInterface,
    InMemoryAuditStorage,
    InMemoryBudgetStorage,
    InMemoryTransactionStorage,
    TransactionStorageInterface,
)
from ledger.validation import LedgerError, LedgerValidator


class Ledger:
    """
    An in-memory ledger with per-category budget enforcement.

    Flow for add_transaction:
    1. Reject zero amounts
    2. If the category has a budget, sum the category and reject if the
       new amount would take the total past the limit
    3. Assign the next id, default the date to now, append

    Not thread-safe: callers sharing a Ledger across threads must guard
    it with a single lock.
    """

    def __init__(
        self,
        transaction_storage: Optional[TransactionStorageInterface] = None,
        budget_storage: Optional[BudgetStorageInterface] = None,
        validator: Optional[LedgerValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._transactions = transaction_storage or InMemoryTransactionStorage()
        self._budgets = budget_storage or InMemoryBudgetStorage()
        self._validator = validator or LedgerValidator()
        self._audit = audit_logger or AuditLogger()
        self._queries = QueryExecutor(self._transactions, self._budgets)

    @property
    def audit(self) -> AuditLogger:
        return self._audit

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Validate and append a transaction.

        Any id on the candidate is ignored; the stored copy carries the
        next sequential id.

        Returns:
            The stored transaction

        Raises:
            ZeroAmountError: If the amount is zero
            BudgetExceededError: If the category total would exceed its limit
        """
        try:
            self._validator.validate_transaction(transaction)
            budget = self._budgets.get_budget(transaction.category)
            if budget is not None:
                current_total = self._queries.category_total(transaction.category)
                self._validator.check_budget_limit(transaction, budget, current_total)
        except LedgerError as e:
            self._audit.log_transaction_rejected(transaction, e, correlation_id)
            raise

        if transaction.date is None:
            transaction = transaction.model_copy(update={"date": datetime.now()})

        stored = self._transactions.add_transaction(transaction)
        self._audit.log_transaction_added(stored, correlation_id)
        return stored

    def list_transactions(self, category: Optional[str] = None) -> list[Transaction]:
        """Snapshot of stored transactions in insertion order."""
        return self._transactions.list_transactions(category=category)

    def transaction_count(self) -> int:
        return self._transactions.count()

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    def set_budget(
        self,
        budget: Budget,
        correlation_id: Optional[UUID] = None,
    ) -> Budget:
        """
        Insert or replace the budget for a category.

        The new limit applies to the very next add_transaction call.

        Raises:
            EmptyCategoryError: If the category is empty
            NonPositiveLimitError: If the limit is zero or negative
        """
        try:
            self._validator.validate_budget(budget)
        except LedgerError as e:
            self._audit.log_budget_rejected(budget, e, correlation_id)
            raise

        previous = self._budgets.save_budget(budget)
        self._audit.log_budget_set(budget, replaced=previous is not None,
                                   correlation_id=correlation_id)
        return budget

    def get_budget(self, category: str) -> Optional[Budget]:
        """The budget for `category`, or None if none is configured."""
        return self._budgets.get_budget(category)

    def list_budgets(self) -> list[Budget]:
        """Snapshot of all budgets, sorted by category."""
        return self._budgets.list_budgets()

    def load_budgets(
        self,
        budgets: Iterable[Budget],
        source: str = "records",
        correlation_id: Optional[UUID] = None,
    ) -> int:
        """
        Apply set_budget to each record in order.

        Stops at the first refused record. Budgets applied before it are
        kept.

        Returns:
            Number of budgets applied

        Raises:
            BudgetLoadError: Naming the refused record's category
        """
        correlation_id = correlation_id or create_correlation_id()
        count = 0
        for budget in budgets:
            try:
                self.set_budget(budget, correlation_id=correlation_id)
            except LedgerError as e:
                error = BudgetLoadError(budget.category, e)
                self._audit.log_budget_load_failed(source, error, correlation_id)
                raise error from e
            count += 1

        self._audit.log_budgets_loaded(source, count, correlation_id)
        return count

    def load_budgets_json(
        self,
        data: Union[str, bytes],
        source: str = "json",
    ) -> int:
        """
        Decode a JSON array of budget records and bulk-load it.

        Raises:
            BudgetDecodeError: If the data is malformed (nothing is applied)
            BudgetLoadError: If a decoded record is refused
        """
        correlation_id = create_correlation_id()
        try:
            budgets = decode_budgets(data)
        except BudgetDecodeError as e:
            self._audit.log_budget_load_failed(source, e, correlation_id)
            raise
        return self.load_budgets(budgets, source=source, correlation_id=correlation_id)

    def load_budgets_file(self, path: Union[str, Path]) -> int:
        """
        Read a budget file and bulk-load it.

        Raises:
            FileNotFoundError: If the file does not exist
            BudgetDecodeError: If the file content is malformed
            BudgetLoadError: If a decoded record is refused
        """
        source = str(path)
        correlation_id = create_correlation_id()
        try:
            budgets = read_budgets_file(path)
        except BudgetDecodeError as e:
            self._audit.log_budget_load_failed(source, e, correlation_id)
            raise
        return self.load_budgets(budgets, source=source, correlation_id=correlation_id)

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def category_total(self, category: str) -> Decimal:
        """Sum of all recorded amounts in `category` (exact match)."""
        return self._queries.category_total(category)

    def budget_status(self, category: str) -> Optional[BudgetStatus]:
        return self._queries.budget_status(category)

    def budget_report(self) -> list[BudgetStatus]:
        """Limit, spent and remaining for every budget, sorted by category."""
        return self._queries.budget_report()


def create_ledger(settings: Optional[Settings] = None) -> Ledger:
    """
    Factory function to build a Ledger from configuration.

    Use this in the application entry point.
    """
    settings = settings or get_settings()
    audit_storage = (
        InMemoryAuditStorage() if settings.ledger.audit_trail_enabled else None
    )
    return Ledger(audit_logger=AuditLogger(storage=audit_storage))
