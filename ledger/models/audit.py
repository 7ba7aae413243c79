"""
Audit Models for the Personal Ledger

Every change to a ledger, and every rejected change, is recorded as an
audit event. This provides:
1. Traceability of how a category reached its total
2. Debugging information when a transaction is refused
3. A readable history for the console demo

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from ledger.models.finance import Budget, Transaction


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_REJECTED = "transaction_rejected"

    # Budgets
    BUDGET_SET = "budget_set"
    BUDGET_REJECTED = "budget_rejected"
    BUDGETS_LOADED = "budgets_loaded"
    BUDGET_LOAD_FAILED = "budget_load_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'budget')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Transaction id or budget category"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one bulk budget load)"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(stored)
        event = AuditEventBuilder.budget_set(budget, replaced=True)
    """

    @staticmethod
    def transaction_added(
        transaction: Transaction,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=str(transaction.id),
            correlation_id=correlation_id,
            description=f"Transaction added: {transaction.amount:.2f} for {transaction.category}",
            details={
                "amount": str(transaction.amount),
                "category": transaction.category,
                "description": transaction.description,
            },
        )

    @staticmethod
    def transaction_rejected(
        transaction: Transaction,
        error: Exception,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Transaction rejected for {transaction.category or '<no category>'}",
            details={
                "amount": str(transaction.amount),
                "category": transaction.category,
            },
            error_code=type(error).__name__,
            error_message=str(error),
        )

    @staticmethod
    def budget_set(
        budget: Budget,
        replaced: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        verb = "updated" if replaced else "set"
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=budget.category,
            correlation_id=correlation_id,
            description=f"Budget {verb}: {budget.category} - {budget.limit:.2f}",
            details={
                "limit": str(budget.limit),
                "period": budget.period,
                "replaced": replaced,
            },
        )

    @staticmethod
    def budget_rejected(
        budget: Budget,
        error: Exception,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            entity_id=budget.category or None,
            correlation_id=correlation_id,
            description=f"Budget rejected for {budget.category or '<no category>'}",
            details={
                "limit": str(budget.limit),
                "period": budget.period,
            },
            error_code=type(error).__name__,
            error_message=str(error),
        )

    @staticmethod
    def budgets_loaded(
        source: str,
        count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGETS_LOADED,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Loaded {count} budgets from {source}",
            details={
                "source": source,
                "count": count,
            },
        )

    @staticmethod
    def budget_load_failed(
        source: str,
        error: Exception,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Budget load from {source} failed",
            details={
                "source": source,
            },
            error_code=type(error).__name__,
            error_message=str(error),
        )
