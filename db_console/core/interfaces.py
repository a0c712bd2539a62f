"""
Abstract interfaces for database adapters.

These protocols define the contract that every engine executor must
implement to be registered with the dispatcher.
"""

from typing import Protocol

from db_console.core.models import Connection, ExecutionPayload


class IQueryExecutor(Protocol):
    """
    Execute one query against one engine and normalize the result.

    Implementations open a fresh connection per call and release it on every
    exit path. They never build failure payloads: any error is raised and
    translated by the dispatcher.
    """

    async def run(self, connection: Connection, query: str) -> ExecutionPayload:
        """
        Execute a raw query string.

        Args:
            connection: Target database descriptor
            query: Engine-specific query text

        Returns:
            Normalized payload with data, columns and row count
        """
        ...

    async def check(self, connection: Connection) -> None:
        """
        Open and immediately close a connection.

        Args:
            connection: Target database descriptor

        Raises:
            Exception: Whatever the driver raises when the database is unreachable
        """
        ...
