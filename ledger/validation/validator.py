"""
Ledger Validation Rules

Two kinds of checks guard the ledger:

RECORD CHECKS:
- A transaction amount must not be zero
- A budget needs a category and a strictly positive limit

BUDGET ENFORCEMENT:
- Adding a transaction must not push its category total past the limit
- The total includes negative amounts as recorded; there is no
  special treatment for refunds

IMPORTANT: Validation never alters the record. It raises, and the caller
decides what to report.
"""

from decimal import Decimal

from ledger.models.finance import Budget, Transaction


class LedgerError(Exception):
    """Base exception for all ledger rule violations."""
    pass


class ZeroAmountError(LedgerError):
    """Transaction amount is exactly zero."""

    def __init__(self):
        super().__init__("transaction amount cannot be zero")


class BudgetExceededError(LedgerError):
    """Adding the transaction would push its category past the budget limit."""

    def __init__(
        self,
        category: str,
        current_total: Decimal,
        amount: Decimal,
        limit: Decimal,
    ):
        self.category = category
        self.current_total = current_total
        self.amount = amount
        self.limit = limit
        super().__init__(
            f"budget exceeded for category '{category}': "
            f"current {current_total:.2f} + new {amount:.2f} > limit {limit:.2f}"
        )


class EmptyCategoryError(LedgerError):
    """Budget has no category."""

    def __init__(self):
        super().__init__("budget category cannot be empty")


class NonPositiveLimitError(LedgerError):
    """Budget limit is zero or negative."""

    def __init__(self, limit: Decimal):
        self.limit = limit
        super().__init__(f"budget limit must be positive, got {limit}")


class LedgerValidator:
    """
    Stateless rule checks used by the ledger before it mutates a store.

    The ledger looks up the budget and category total itself; the
    validator only decides.
    """

    def validate_transaction(self, transaction: Transaction) -> None:
        """Reject a transaction whose amount is zero."""
        if transaction.amount == 0:
            raise ZeroAmountError()

    def validate_budget(self, budget: Budget) -> None:
        """Reject a budget with an empty category or a non-positive limit."""
        if not budget.category:
            raise EmptyCategoryError()
        if budget.limit <= 0:
            raise NonPositiveLimitError(budget.limit)

    def check_budget_limit(
        self,
        transaction: Transaction,
        budget: Budget,
        current_total: Decimal,
    ) -> None:
        """
        Enforce the budget ceiling.

        Accepts iff current_total + amount <= limit. Reaching the limit
        exactly is allowed.
        """
        if current_total + transaction.amount > budget.limit:
            raise BudgetExceededError(
                category=transaction.category,
                current_total=current_total,
                amount=transaction.amount,
                limit=budget.limit,
            )
