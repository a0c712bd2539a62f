"""
PostgreSQL query executor.

Runs a single SQL statement through asyncpg and returns normalized results.
"""

import logging
from typing import Any, Dict, Optional

import asyncpg

from db_console.core.models import Connection, ExecutionPayload
from db_console.execution.result_formatter import ResultFormatter

logger = logging.getLogger(__name__)


class PostgresQueryExecutor:
    """
    Executes SQL against PostgreSQL.

    Implements the IQueryExecutor interface. Statements are sent verbatim,
    without parameterization: this is a developer console and the caller's
    SQL is trusted as-is.
    """

    def __init__(self, connect_timeout: float = 10.0):
        """
        Initialize PostgreSQL executor.

        Args:
            connect_timeout: Seconds to wait for the server to accept the connection
        """
        self.connect_timeout = connect_timeout

    def _connect_kwargs(self, connection: Connection) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "host": connection.host,
            "port": connection.port,
            "timeout": self.connect_timeout,
        }
        if connection.database:
            kwargs["database"] = connection.database
        if connection.username:
            kwargs["user"] = connection.username
        if connection.password:
            kwargs["password"] = connection.password
        return kwargs

    async def run(self, connection: Connection, query: str) -> ExecutionPayload:
        """
        Execute one SQL statement.

        Args:
            connection: Target database descriptor
            query: SQL statement

        Returns:
            Payload with returned rows, column names from the statement
            metadata and the row count (affected rows for writes)
        """
        conn = await asyncpg.connect(**self._connect_kwargs(connection))
        try:
            statement = await conn.prepare(query)
            columns = [attr.name for attr in statement.get_attributes()]
            records = await statement.fetch()
            if records:
                row_count = len(records)
            else:
                row_count = _affected_rows(statement.get_statusmsg())
            logger.debug("PostgreSQL statement returned %d row(s)", len(records))
            return ResultFormatter.build_payload(
                (dict(record) for record in records),
                columns=columns,
                row_count=row_count,
            )
        finally:
            await conn.close()

    async def check(self, connection: Connection) -> None:
        conn = await asyncpg.connect(**self._connect_kwargs(connection))
        await conn.close()


def _affected_rows(status: Optional[str]) -> int:
    """
    Extract the row count from a command tag such as ``INSERT 0 3``.

    Tags without a trailing count (``CREATE TABLE``) yield 0.
    """
    if not status:
        return 0
    tail = status.rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0
