"""Core interfaces and models for the database console."""

from db_console.core.errors import QueryExecutionError, RequestShapeError
from db_console.core.interfaces import IQueryExecutor
from db_console.core.models import (
    Connection,
    ConnectRequest,
    DatabaseType,
    ExecuteRequest,
    ExecutionPayload,
    QueryResult,
)

__all__ = [
    "IQueryExecutor",
    "QueryExecutionError",
    "RequestShapeError",
    "Connection",
    "ConnectRequest",
    "DatabaseType",
    "ExecuteRequest",
    "ExecutionPayload",
    "QueryResult",
]
