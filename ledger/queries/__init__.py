"""Query execution package."""

from ledger.queries.executor import QueryExecutor

__all__ = ["QueryExecutor"]
