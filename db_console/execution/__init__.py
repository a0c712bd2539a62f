"""Query dispatch and result formatting."""

from db_console.execution.executor import QueryDispatcher, default_executors
from db_console.execution.result_formatter import ResultFormatter

__all__ = ["QueryDispatcher", "ResultFormatter", "default_executors"]
