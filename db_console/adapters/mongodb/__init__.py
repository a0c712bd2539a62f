"""MongoDB adapter for the console."""

from db_console.adapters.mongodb.executor import MongoQueryExecutor
from db_console.adapters.mongodb.operations import parse_operation

__all__ = ["MongoQueryExecutor", "parse_operation"]
