"""
JSON Budget Loader

Budget definitions can be supplied as a JSON array of records:

    [
        {"category": "Utilities", "limit": 4000, "period": "monthly"},
        {"category": "Education", "limit": 2500, "period": "monthly"}
    ]

DESIGN DECISION: Decoding and applying are separate steps. This module only
turns bytes into Budget models; the ledger applies them one by one through
its normal budget checks. A malformed document never touches the registry.
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from ledger.models.finance import Budget
from ledger.validation.validator import LedgerError


_BUDGET_LIST = TypeAdapter(list[Budget])


class BudgetDecodeError(LedgerError):
    """Budget data is not a JSON array of budget records."""

    def __init__(self, message: str, errors: Optional[list[dict]] = None):
        self.errors = errors or []
        super().__init__(message)


class BudgetLoadError(LedgerError):
    """A decoded budget record was refused by the registry."""

    def __init__(self, category: str, cause: LedgerError):
        self.category = category
        self.cause = cause
        super().__init__(f"failed to set budget for '{category}': {cause}")


def decode_budgets(data: Union[str, bytes]) -> list[Budget]:
    """
    Parse a JSON array of budget records.

    Raises:
        BudgetDecodeError: If the payload is not valid JSON, is not a list,
            or any record has missing or mistyped fields
    """
    try:
        return _BUDGET_LIST.validate_json(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise BudgetDecodeError(
            f"failed to parse budget data: {location}: {first['msg']}"
            f" ({e.error_count()} error(s))",
            errors=e.errors(include_url=False),
        ) from e


def read_budgets_file(path: Union[str, Path]) -> list[Budget]:
    """
    Read and decode a budget file.

    Raises:
        FileNotFoundError: If the file does not exist
        BudgetDecodeError: If its content is malformed
    """
    with open(path, "rb") as f:
        return decode_budgets(f.read())
