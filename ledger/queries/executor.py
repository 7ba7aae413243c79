"""
Query Execution Engine

Aggregations over the ledger's stores. Everything here is read-only and
recomputed on every call: a category total is a linear scan over all
stored transactions. There is no cache to invalidate when a transaction
is added or a budget is replaced.
"""

from decimal import Decimal
from typing import Optional

from ledger.models.finance import Budget, BudgetStatus
from ledger.services.storage import (
    BudgetStorageInterface,
    TransactionStorageInterface,
)


class QueryExecutor:
    """
    Executes aggregation queries against ledger storage.

    GUARANTEES:
    - Only reports data present in storage
    - Category matching is exact and case-sensitive
    - Categories without transactions total zero
    """

    def __init__(
        self,
        transaction_storage: TransactionStorageInterface,
        budget_storage: BudgetStorageInterface,
    ):
        self._transactions = transaction_storage
        self._budgets = budget_storage

    def category_total(self, category: str) -> Decimal:
        """Sum of all recorded amounts whose category equals `category`."""
        total = Decimal("0")
        for tx in self._transactions.list_transactions():
            if tx.category == category:
                total += tx.amount
        return total

    def budget_status(self, category: str) -> Optional[BudgetStatus]:
        """Status of the budget for `category`, or None if none is set."""
        budget = self._budgets.get_budget(category)
        if budget is None:
            return None
        return self._status_for(budget)

    def budget_report(self) -> list[BudgetStatus]:
        """Status of every configured budget, sorted by category."""
        return [self._status_for(b) for b in self._budgets.list_budgets()]

    def _status_for(self, budget: Budget) -> BudgetStatus:
        return BudgetStatus(
            category=budget.category,
            limit=budget.limit,
            period=budget.period,
            spent=self.category_total(budget.category),
        )
