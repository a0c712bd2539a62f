"""MySQL adapter for the console."""

from db_console.adapters.mysql.executor import MySQLQueryExecutor

__all__ = ["MySQLQueryExecutor"]
