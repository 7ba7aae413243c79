"""
Data Models Package

This package contains all Pydantic models used by the ledger.
Everything stored in or reported by a ledger conforms to these schemas.
"""

from ledger.models.finance import (
    DEFAULT_BUDGET_PERIOD,
    Budget,
    BudgetStatus,
    Transaction,
)
from ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "DEFAULT_BUDGET_PERIOD",
    "Budget",
    "BudgetStatus",
    "Transaction",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
