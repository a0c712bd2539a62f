"""
Query dispatch.

Selects the engine executor for a connection, times the call and converts
every failure into a QueryResult.
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from db_console.core.errors import (
    MISSING_PARAMETERS,
    UNSUPPORTED_TYPE,
    RequestShapeError,
    error_message,
)
from db_console.core.interfaces import IQueryExecutor
from db_console.core.models import Connection, DatabaseType, QueryResult

logger = logging.getLogger(__name__)

ConnectionInput = Union[Connection, Mapping[str, Any], None]


def default_executors() -> Dict[DatabaseType, IQueryExecutor]:
    """Build one executor per supported engine."""
    from db_console.adapters.mongodb import MongoQueryExecutor
    from db_console.adapters.mysql import MySQLQueryExecutor
    from db_console.adapters.postgresql import PostgresQueryExecutor
    from db_console.adapters.redis import RedisQueryExecutor

    return {
        DatabaseType.POSTGRESQL: PostgresQueryExecutor(),
        DatabaseType.MYSQL: MySQLQueryExecutor(),
        DatabaseType.MONGODB: MongoQueryExecutor(),
        DatabaseType.REDIS: RedisQueryExecutor(),
    }


class QueryDispatcher:
    """
    Single entry point for query execution.

    Wraps the engine-specific executors and provides the common logic:
    request checks, executor selection, timing and error translation.
    """

    def __init__(self, executors: Mapping[DatabaseType, IQueryExecutor]):
        """
        Initialize the dispatcher.

        Args:
            executors: Executor for each supported engine type
        """
        self.executors = dict(executors)

    @classmethod
    def default(cls) -> "QueryDispatcher":
        """Create a dispatcher wired to the real database drivers."""
        return cls(default_executors())

    def resolve(self, connection: ConnectionInput) -> Tuple[Connection, IQueryExecutor]:
        """
        Validate a connection descriptor and pick its executor.

        Args:
            connection: Descriptor as a model or a plain mapping

        Returns:
            The validated connection and the executor for its engine

        Raises:
            RequestShapeError: If the descriptor is missing, malformed or
                names an unsupported engine
        """
        if not connection:
            raise RequestShapeError(MISSING_PARAMETERS)

        if isinstance(connection, Connection):
            db_type = connection.type
        else:
            try:
                db_type = DatabaseType(connection.get("type"))
            except (TypeError, ValueError):
                raise RequestShapeError(UNSUPPORTED_TYPE) from None
            try:
                connection = Connection.model_validate(connection)
            except ValidationError as e:
                raise RequestShapeError(f"invalid connection: {e.errors()[0]['msg']}") from e

        executor = self.executors.get(db_type)
        if executor is None:
            raise RequestShapeError(UNSUPPORTED_TYPE)
        return connection, executor

    async def dispatch(self, connection: ConnectionInput, query: Optional[str]) -> QueryResult:
        """
        Execute a query, raising only for request-shape problems.

        Args:
            connection: Target database descriptor
            query: Engine-specific query text

        Returns:
            Successful result, or a failed one for any execution error

        Raises:
            RequestShapeError: If a parameter is missing or the engine is unsupported
        """
        started = time.perf_counter()
        if not connection or not query:
            raise RequestShapeError(MISSING_PARAMETERS)
        connection, executor = self.resolve(connection)

        try:
            payload = await executor.run(connection, query)
        except Exception as e:
            elapsed = _elapsed_ms(started)
            logger.warning(
                "%s query on %s:%s failed after %d ms: %s",
                connection.type.value, connection.host, connection.port, elapsed, e,
            )
            return QueryResult.failure(error_message(e), elapsed)

        elapsed = _elapsed_ms(started)
        logger.info(
            "%s query on %s:%s returned %d row(s) in %d ms",
            connection.type.value, connection.host, connection.port, payload.row_count, elapsed,
        )
        return QueryResult.ok(payload, elapsed)

    async def execute(self, connection: ConnectionInput, query: Optional[str]) -> QueryResult:
        """
        Execute a query. Never raises.

        Args:
            connection: Target database descriptor
            query: Engine-specific query text

        Returns:
            QueryResult; request-shape problems are reported with executionTime 0
        """
        try:
            return await self.dispatch(connection, query)
        except RequestShapeError as e:
            return QueryResult.failure(str(e))


def _elapsed_ms(started: float) -> int:
    return max(0, int((time.perf_counter() - started) * 1000))
