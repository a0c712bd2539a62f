"""
MySQL query executor.

Runs a single SQL statement through PyMySQL in a worker thread.
"""

import asyncio
import logging

import pymysql
import pymysql.cursors

from db_console.core.models import Connection, ExecutionPayload
from db_console.execution.result_formatter import ResultFormatter

logger = logging.getLogger(__name__)


class MySQLQueryExecutor:
    """
    Executes SQL against MySQL.

    Implements the IQueryExecutor interface. PyMySQL is blocking, so each
    call runs on a worker thread and leaves the event loop free.
    """

    def __init__(self, connect_timeout: int = 10):
        """
        Initialize MySQL executor.

        Args:
            connect_timeout: Seconds to wait for the server to accept the connection
        """
        self.connect_timeout = connect_timeout

    def _connect(self, connection: Connection) -> pymysql.connections.Connection:
        return pymysql.connect(
            host=connection.host,
            port=connection.port,
            user=connection.username,
            password=connection.password or "",
            database=connection.database,
            cursorclass=pymysql.cursors.DictCursor,
            connect_timeout=self.connect_timeout,
            autocommit=True,
        )

    def _run_sync(self, connection: Connection, query: str) -> ExecutionPayload:
        conn = self._connect(connection)
        try:
            with conn.cursor() as cursor:
                affected = cursor.execute(query)
                if cursor.description:
                    columns = [desc[0] for desc in cursor.description]
                    rows = list(cursor.fetchall())
                    row_count = len(rows)
                else:
                    columns = []
                    rows = []
                    row_count = affected or 0
            logger.debug("MySQL statement returned %d row(s)", len(rows))
            return ResultFormatter.build_payload(rows, columns=columns, row_count=row_count)
        finally:
            conn.close()

    def _check_sync(self, connection: Connection) -> None:
        self._connect(connection).close()

    async def run(self, connection: Connection, query: str) -> ExecutionPayload:
        return await asyncio.to_thread(self._run_sync, connection, query)

    async def check(self, connection: Connection) -> None:
        await asyncio.to_thread(self._check_sync, connection)
