"""
Starter queries offered by the console's template picker.
"""

from typing import Dict

from db_console.core.models import DatabaseType

SQL_TEMPLATES = {
    "select": "SELECT * FROM table_name LIMIT 10;",
    "insert": "INSERT INTO table_name (column1, column2) VALUES (value1, value2);",
    "update": "UPDATE table_name SET column1 = value1 WHERE condition;",
    "delete": "DELETE FROM table_name WHERE condition;",
    "create": "CREATE TABLE table_name (\n  id SERIAL PRIMARY KEY,\n  name VARCHAR(255) NOT NULL\n);",
}

DOCUMENT_TEMPLATES = {
    "find": '{"collection": "users", "query": {}}',
    "findOne": '{"collection": "users", "query": {"name": "..."}}',
    "insert": '{"collection": "users", "document": {"name": "John", "email": "john@example.com"}}',
    "update": '{"collection": "users", "query": {"name": "John"}, "update": {"$set": {"name": "Jane"}}}',
    "delete": '{"collection": "users", "query": {"name": "..."}, "delete": true}',
    "createCollection": '{"createCollection": "new_collection_name"}',
    "listCollections": '{"listCollections": true}',
}

KEY_VALUE_TEMPLATES = {
    "get": "GET key",
    "set": "SET key value",
    "del": "DEL key",
    "keys": "KEYS pattern",
    "hgetall": "HGETALL key",
    "hget": "HGET key field",
    "hset": "HSET key field value",
}


def templates_for(db_type: DatabaseType) -> Dict[str, str]:
    """Return the starter queries for an engine, keyed by template name."""
    if db_type.is_relational:
        return dict(SQL_TEMPLATES)
    if db_type is DatabaseType.MONGODB:
        return dict(DOCUMENT_TEMPLATES)
    return dict(KEY_VALUE_TEMPLATES)
