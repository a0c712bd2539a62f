"""
Document query decoding.

Turns the JSON text typed in the console into one of six operations. The
precedence is first-match-wins:

1. ``createCollection``            -> CreateCollection
2. ``listCollections`` (truthy)    -> ListCollections
3. ``collection`` is then required, and among the remaining fields:
   a. ``delete`` (truthy)          -> Delete
   b. ``document``                 -> Insert
   c. ``update``                   -> Update
   d. anything else                -> Find

A ``query`` without ``delete``, ``document`` or ``update`` is a Find, never a
Delete, even though the console's delete template looks exactly like that.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from db_console.core.errors import QueryExecutionError


@dataclass(frozen=True)
class CreateCollection:
    name: str


@dataclass(frozen=True)
class ListCollections:
    pass


@dataclass(frozen=True)
class Delete:
    collection: str
    filter: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Insert:
    collection: str
    document: Dict[str, Any]


@dataclass(frozen=True)
class Update:
    collection: str
    update: Any
    filter: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Find:
    collection: str
    filter: Dict[str, Any] = field(default_factory=dict)


DocumentOperation = Union[CreateCollection, ListCollections, Delete, Insert, Update, Find]


def parse_operation(text: str) -> DocumentOperation:
    """
    Decode a JSON query string into a document operation.

    Args:
        text: Raw JSON typed by the user

    Returns:
        The matching operation

    Raises:
        QueryExecutionError: If the text is not a JSON object or names no collection
    """
    try:
        spec = json.loads(text)
    except json.JSONDecodeError as e:
        raise QueryExecutionError(f"invalid JSON query: {e}") from e

    if not isinstance(spec, dict):
        raise QueryExecutionError("document query must be a JSON object")

    return decode_operation(spec)


def decode_operation(spec: Dict[str, Any]) -> DocumentOperation:
    """Apply the precedence rules to an already parsed query object."""
    create = spec.get("createCollection")
    if create:
        if not isinstance(create, str):
            raise QueryExecutionError("createCollection must be a collection name")
        return CreateCollection(name=create)

    if spec.get("listCollections"):
        return ListCollections()

    collection = spec.get("collection")
    if not collection:
        raise QueryExecutionError("collection name required")

    query_filter = spec.get("query") or {}

    if spec.get("delete"):
        return Delete(collection=collection, filter=query_filter)
    # An empty object still counts as present for document and update.
    if spec.get("document") is not None:
        return Insert(collection=collection, document=spec["document"])
    if spec.get("update") is not None:
        return Update(collection=collection, update=spec["update"], filter=query_filter)
    return Find(collection=collection, filter=query_filter)
