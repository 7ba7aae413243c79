"""Budget loading package."""

from ledger.services.loader.json_loader import (
    BudgetDecodeError,
    BudgetLoadError,
    decode_budgets,
    read_budgets_file,
)

__all__ = [
    "BudgetDecodeError",
    "BudgetLoadError",
    "decode_budgets",
    "read_budgets_file",
]
