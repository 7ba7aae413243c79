"""Validation package."""

from ledger.validation.validator import (
    BudgetExceededError,
    EmptyCategoryError,
    LedgerError,
    LedgerValidator,
    NonPositiveLimitError,
    ZeroAmountError,
)

__all__ = [
    "BudgetExceededError",
    "EmptyCategoryError",
    "LedgerError",
    "LedgerValidator",
    "NonPositiveLimitError",
    "ZeroAmountError",
]
