"""
MongoDB query executor.

Executes decoded document operations and returns normalized results.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from db_console import config
from db_console.adapters.mongodb.operations import (
    CreateCollection,
    Delete,
    DocumentOperation,
    Find,
    Insert,
    ListCollections,
    Update,
    parse_operation,
)
from db_console.core.models import Connection, ExecutionPayload
from db_console.execution.result_formatter import ResultFormatter

logger = logging.getLogger(__name__)


def build_mongo_uri(connection: Connection, auth_source: str = config.MONGO_AUTH_SOURCE) -> str:
    """
    Build a connection URI authenticating against the administrative namespace.

    Args:
        connection: Target database descriptor
        auth_source: Namespace holding the user's credentials

    Returns:
        A ``mongodb://`` URI
    """
    credentials = ""
    if connection.username:
        credentials = quote_plus(connection.username)
        if connection.password:
            credentials += ":" + quote_plus(connection.password)
        credentials += "@"
    return f"mongodb://{credentials}{connection.host}:{connection.port}/?authSource={auth_source}"


def mask_uri(uri: str, password: Optional[str]) -> str:
    """Hide the password in a URI before it is logged."""
    if not password:
        return uri
    return uri.replace(quote_plus(password), "****")


class MongoQueryExecutor:
    """
    Executes MongoDB queries.

    Implements the IQueryExecutor interface for MongoDB. Each call opens its
    own client and closes it before returning.
    """

    def __init__(
        self,
        default_database: str = config.MONGO_DEFAULT_DATABASE,
        find_limit: int = config.MONGO_FIND_LIMIT,
        server_selection_timeout_ms: int = config.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        connect_timeout_ms: int = config.MONGO_CONNECT_TIMEOUT_MS,
    ):
        """
        Initialize MongoDB query executor.

        Args:
            default_database: Namespace used when the connection names none
            find_limit: Maximum number of documents returned by a find
            server_selection_timeout_ms: Driver server selection timeout
            connect_timeout_ms: Driver socket connect timeout
        """
        self.default_database = default_database
        self.find_limit = find_limit
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.connect_timeout_ms = connect_timeout_ms

    def _client(self, uri: str) -> AsyncMongoClient:
        return AsyncMongoClient(
            uri,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            connectTimeoutMS=self.connect_timeout_ms,
        )

    async def run(self, connection: Connection, query: str) -> ExecutionPayload:
        """
        Execute a JSON document query.

        Args:
            connection: Target database descriptor
            query: JSON text, see ``operations`` for the accepted shapes

        Returns:
            Normalized payload
        """
        uri = build_mongo_uri(connection)
        database_name = connection.database or self.default_database
        logger.debug("MongoDB connect %s (database=%s)", mask_uri(uri, connection.password), database_name)

        client = self._client(uri)
        try:
            operation = parse_operation(query)
            return await self._execute(client[database_name], operation)
        finally:
            await client.close()

    async def check(self, connection: Connection, uri: Optional[str] = None) -> None:
        """
        Verify the server is reachable.

        Args:
            connection: Target database descriptor
            uri: Explicit connection URI, used verbatim instead of one built
                 from the descriptor
        """
        client = self._client(uri or build_mongo_uri(connection))
        try:
            await client.admin.command("ping")
        finally:
            await client.close()

    async def _execute(self, db: AsyncDatabase, operation: DocumentOperation) -> ExecutionPayload:
        """Run a single decoded operation."""
        if isinstance(operation, CreateCollection):
            await db.create_collection(operation.name)
            return ResultFormatter.build_payload([{"message": f"{operation.name} created"}])

        if isinstance(operation, ListCollections):
            cursor = await db.list_collections()
            collections: List[Dict[str, Any]] = await cursor.to_list(length=None)
            return ResultFormatter.build_payload(
                collections,
                columns=list(collections[0].keys()) if collections else ["name"],
            )

        coll = db[operation.collection]

        if isinstance(operation, Delete):
            result = await coll.delete_many(operation.filter)
            return ResultFormatter.build_payload([{"deletedCount": result.deleted_count}])

        if isinstance(operation, Insert):
            result = await coll.insert_one(operation.document)
            return ResultFormatter.build_payload([{"insertedId": result.inserted_id}])

        if isinstance(operation, Update):
            result = await coll.update_many(operation.filter, operation.update)
            return ResultFormatter.build_payload(
                [{"matchedCount": result.matched_count, "modifiedCount": result.modified_count}]
            )

        if isinstance(operation, Find):
            documents = await coll.find(operation.filter).limit(self.find_limit).to_list(length=None)
            return ResultFormatter.build_payload(documents)

        raise TypeError(f"unhandled document operation: {operation!r}")
