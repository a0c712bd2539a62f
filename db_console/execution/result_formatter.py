"""
Result formatting utilities.

Normalizes native driver output into JSON-safe records and renders query
results for export.
"""

import base64
import csv
import io
import json
import math
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import UUID

from db_console.core.models import ExecutionPayload, QueryResult


class ResultFormatter:
    """
    Formats query results into a consistent structure.

    Every executor funnels its native rows through here so the dispatcher
    only ever sees plain lists, dicts, strings, numbers, booleans and None.
    """

    @staticmethod
    def to_json_value(value: Any) -> Any:
        """
        Convert a native driver value into something JSON can carry.

        Args:
            value: Value produced by a database driver

        Returns:
            JSON-compatible value
        """
        if isinstance(value, float) and not math.isfinite(value):
            return str(value)
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, Mapping):
            return {str(k): ResultFormatter.to_json_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [ResultFormatter.to_json_value(v) for v in value]
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
            try:
                return raw.decode("utf-8")
            except UnicodeDecodeError:
                return base64.b64encode(raw).decode("ascii")
        if isinstance(value, UUID):
            return str(value)
        # ObjectId, Decimal128, asyncpg ranges and the like
        return str(value)

    @staticmethod
    def format_record(record: Mapping[str, Any]) -> Dict[str, Any]:
        return {str(k): ResultFormatter.to_json_value(v) for k, v in record.items()}

    @staticmethod
    def format_records(records: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return [ResultFormatter.format_record(r) for r in records]

    @staticmethod
    def build_payload(
        records: Iterable[Mapping[str, Any]],
        columns: Optional[List[str]] = None,
        row_count: Optional[int] = None,
    ) -> ExecutionPayload:
        """
        Assemble an executor payload.

        Args:
            records: Native rows as mappings
            columns: Column names in display order; defaults to the keys of
                     the first record, or an empty list
            row_count: Reported row count; defaults to the number of records

        Returns:
            Normalized payload
        """
        data = ResultFormatter.format_records(records)
        if columns is None:
            columns = list(data[0].keys()) if data else []
        if row_count is None:
            row_count = len(data)
        return ExecutionPayload(data=data, columns=columns, row_count=row_count)

    @staticmethod
    def to_csv(result: QueryResult) -> str:
        """
        Render a query result as CSV.

        The header row is ``columns``; each record is written in column
        order, nested mappings and lists as JSON text.
        """
        buffer = io.StringIO()
        columns = result.columns or []
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(columns)
        for record in result.data or []:
            writer.writerow([_csv_cell(record.get(c)) for c in columns])
        return buffer.getvalue()


def _csv_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return value
