"""PostgreSQL adapter for the console."""

from db_console.adapters.postgresql.executor import PostgresQueryExecutor

__all__ = ["PostgresQueryExecutor"]
