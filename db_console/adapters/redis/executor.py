"""
Redis query executor.

Executes console command lines and returns normalized results.
"""

import logging
from typing import Any, Mapping

from redis.asyncio import Redis

from db_console.adapters.redis.commands import parse_command, resolve_command
from db_console.core.models import Connection, ExecutionPayload
from db_console.execution.result_formatter import ResultFormatter

logger = logging.getLogger(__name__)


def normalize_reply(reply: Any) -> ExecutionPayload:
    """
    Shape a native reply into records.

    A list becomes one ``{"value": item}`` record per element, a mapping
    becomes a single record with its own keys as columns, anything else a
    single ``{"value": reply}`` record.
    """
    if isinstance(reply, (list, tuple, set)):
        return ResultFormatter.build_payload([{"value": item} for item in reply], columns=["value"])
    if isinstance(reply, Mapping):
        return ResultFormatter.build_payload([reply], columns=[str(k) for k in reply.keys()])
    return ResultFormatter.build_payload([{"value": reply}], columns=["value"])


class RedisQueryExecutor:
    """
    Executes Redis commands.

    Implements the IQueryExecutor interface for Redis. Replies are decoded
    as text.
    """

    def __init__(self, socket_connect_timeout: float = 10.0):
        self.socket_connect_timeout = socket_connect_timeout

    def _client(self, connection: Connection) -> Redis:
        return Redis(
            host=connection.host,
            port=connection.port,
            password=connection.password or None,
            decode_responses=True,
            socket_connect_timeout=self.socket_connect_timeout,
        )

    async def run(self, connection: Connection, query: str) -> ExecutionPayload:
        client = self._client(connection)
        try:
            command = parse_command(query)
            spec = resolve_command(command)
            logger.debug("Redis %s with %d argument(s)", command.name, len(command.args))
            reply = await spec.call(client, command.args)
            return normalize_reply(reply)
        finally:
            await client.aclose()

    async def check(self, connection: Connection) -> None:
        client = self._client(connection)
        try:
            await client.ping()
        finally:
            await client.aclose()
