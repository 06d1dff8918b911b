"""Error types raised by wpfeed."""

from typing import Any, Optional


class WPFeedError(Exception):
    """Base class for all wpfeed errors."""


class ConnectivityError(WPFeedError):
    """The database handle could not be opened or used."""


class QueryError(WPFeedError):
    """A statement was rejected by the database."""

    def __init__(self, operation: str, message: str, sql: Optional[str] = None) -> None:
        self.operation = operation
        self.sql = sql
        super().__init__(f"{operation} failed: {message}")


class MappingError(WPFeedError):
    """A row could not be turned into a BlogPost."""

    def __init__(self, row_id: Any, message: str) -> None:
        self.row_id = row_id
        super().__init__(f"Cannot map post {row_id}: {message}")
