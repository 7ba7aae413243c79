"""
Core Data Models for the Personal Ledger

These models define the schemas for everything stored in a ledger:
1. Transactions recorded against a category
2. Budgets that cap the total of a category
3. Budget status rows produced by aggregation

DESIGN DECISION: Models are frozen. A stored transaction never changes;
the ledger produces a new copy when it assigns the identifier and date.
Business rules (zero amounts, non-positive limits, empty categories) are
enforced by the validator, not the schema, so that a rejected record can
still be described in errors and audit events.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_BUDGET_PERIOD = "monthly"


# =============================================================================
# TRANSACTIONS
# =============================================================================

class Transaction(BaseModel):
    """
    A single ledger entry.

    Candidates are created without an id. The ledger assigns the next
    sequential id (starting at 1) on insertion and fills in the date if
    it was left unset.

    The amount is signed; the ledger does not distinguish debits from
    credits when summing a category.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(
        default=None,
        ge=1,
        description="Sequential identifier, assigned on insertion"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount; zero is rejected by the ledger"
    )
    category: str = Field(
        default="",
        description="Free-form category label (case-sensitive)"
    )
    description: str = Field(
        default="",
        description="Free-form description"
    )
    date: Optional[datetime] = Field(
        default=None,
        description="When the transaction happened; defaults to insertion time"
    )

    @property
    def is_stored(self) -> bool:
        """True once the ledger has assigned an identifier."""
        return self.id is not None


# =============================================================================
# BUDGETS
# =============================================================================

class Budget(BaseModel):
    """
    Spending ceiling for a category.

    The category is the unique key: setting a budget for a category that
    already has one replaces it. The period is an informational label and
    is never checked against calendar time.
    """
    model_config = ConfigDict(frozen=True)

    category: str = Field(
        ...,
        description="Category this budget applies to (unique key)"
    )
    limit: Decimal = Field(
        ...,
        description="Maximum category total; must be strictly positive"
    )
    period: str = Field(
        default=DEFAULT_BUDGET_PERIOD,
        description="Informational period label, e.g. 'monthly'"
    )


class BudgetStatus(BaseModel):
    """Aggregated view of one budget against its category total."""
    model_config = ConfigDict(frozen=True)

    category: str
    limit: Decimal
    period: str
    spent: Decimal = Field(
        ...,
        description="Sum of all recorded amounts in the category"
    )

    @property
    def remaining(self) -> Decimal:
        """Limit minus spent. Negative only if the limit was lowered."""
        return self.limit - self.spent

    @property
    def is_exceeded(self) -> bool:
        return self.spent > self.limit
