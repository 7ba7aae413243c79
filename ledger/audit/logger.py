"""
Audit Logger

DESIGN DECISION: Every change to a ledger, and every refused change, is
logged. This provides:
1. Traceability of how each category reached its total
2. Debugging capability when a transaction is rejected
3. A history the demo driver can print

The audit logger:
- Always writes a structured log line
- Optionally appends the event to an audit store
- Never lets a failing audit store break the ledger operation
- Supports correlation IDs to group related events (one bulk load)
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from ledger.config import LoggingSettings, get_settings
from ledger.models.audit import AuditEvent, AuditEventBuilder
from ledger.models.finance import Budget, Transaction
from ledger.services.storage import AuditStorageInterface


def _processors(json_output: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_processors(json_output=True),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Route structlog output to stderr at the configured level.

    Arguments left as None are read from LoggingSettings. An explicit level
    is validated the same way. Call once at startup, before the first log
    line is written.

    Raises:
        ValueError: If `level` is not a standard logging level name
    """
    settings = get_settings().logging
    if level is not None:
        settings = LoggingSettings(level=level, json_output=settings.json_output)
    level = settings.level
    json_output = settings.json_output if json_output is None else json_output

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
        force=True,
    )
    structlog.configure(processors=_processors(json_output))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store (for the in-process history), when one is given
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for audit events.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("ledger.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Appends to storage if available.

        Returns True if the storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_added(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_added(transaction, correlation_id))

    def log_transaction_rejected(
        self,
        transaction: Transaction,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_rejected(transaction, error, correlation_id))

    def log_budget_set(
        self,
        budget: Budget,
        replaced: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budget_set(budget, replaced, correlation_id))

    def log_budget_rejected(
        self,
        budget: Budget,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budget_rejected(budget, error, correlation_id))

    def log_budgets_loaded(
        self,
        source: str,
        count: int,
        correlation_id: UUID,
    ) -> None:
        """Log completion of a bulk budget load."""
        self.log(AuditEventBuilder.budgets_loaded(source, count, correlation_id))

    def log_budget_load_failed(
        self,
        source: str,
        error: Exception,
        correlation_id: UUID,
    ) -> None:
        """Log a bulk budget load that stopped early."""
        self.log(AuditEventBuilder.budget_load_failed(source, error, correlation_id))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a multi-step action (e.g., a bulk budget load).
    Pass it through all subsequent operations.
    """
    return uuid4()
