"""
Database Console - run queries against PostgreSQL, MySQL, MongoDB and Redis.

Main entry point for dispatching queries to the engine executors.
"""

from db_console.execution.executor import QueryDispatcher

__all__ = ["QueryDispatcher"]
