"""Database access for wpfeed."""

from .connection import (
    close_connection_pool,
    get_connection,
    get_connection_pool,
    validate_connection,
)
from .posts import OrderMode, PostRepository
from .query_builder import QueryBuilder

__all__ = [
    "get_connection",
    "get_connection_pool",
    "close_connection_pool",
    "validate_connection",
    "QueryBuilder",
    "PostRepository",
    "OrderMode",
]
