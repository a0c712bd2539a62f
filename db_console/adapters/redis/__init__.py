"""Redis adapter for the console."""

from db_console.adapters.redis.executor import RedisQueryExecutor

__all__ = ["RedisQueryExecutor"]
