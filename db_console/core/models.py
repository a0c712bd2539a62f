"""
Shared data models for the database console.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DatabaseType(str, Enum):
    """Supported database engines."""

    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    REDIS = "redis"

    @property
    def default_port(self) -> int:
        return _DEFAULT_PORTS[self]

    @property
    def is_relational(self) -> bool:
        return self in (DatabaseType.POSTGRESQL, DatabaseType.MYSQL)

    @classmethod
    def _missing_(cls, value: object) -> Optional["DatabaseType"]:
        # The connect form sends "postgres" for PostgreSQL.
        if value == "postgres":
            return cls.POSTGRESQL
        return None


_DEFAULT_PORTS = {
    DatabaseType.POSTGRESQL: 5432,
    DatabaseType.MYSQL: 3306,
    DatabaseType.MONGODB: 27017,
    DatabaseType.REDIS: 6379,
}


class Connection(BaseModel):
    """
    Describes how to reach one database instance.

    Supplied by the UI for every request and discarded afterwards.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    type: DatabaseType
    host: str = Field(..., min_length=1)
    port: int = Field(..., gt=0)
    database: Optional[str] = None  # ignored by redis
    username: Optional[str] = None
    password: Optional[str] = None


class ExecutionPayload(BaseModel):
    """Normalized output of an engine executor."""

    data: List[Dict[str, Any]] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    row_count: int = Field(0, alias="rowCount", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class QueryResult(BaseModel):
    """Uniform outcome of a query execution, successful or not."""

    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    columns: Optional[List[str]] = None
    row_count: Optional[int] = Field(None, alias="rowCount", ge=0)
    error: Optional[str] = None
    execution_time: int = Field(0, alias="executionTime", ge=0)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def ok(cls, payload: ExecutionPayload, execution_time: int) -> "QueryResult":
        return cls(
            success=True,
            data=payload.data,
            columns=payload.columns,
            row_count=payload.row_count,
            execution_time=execution_time,
        )

    @classmethod
    def failure(cls, error: str, execution_time: int = 0) -> "QueryResult":
        return cls(success=False, error=error, execution_time=execution_time)

    def to_response(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, dropping absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ExecuteRequest(BaseModel):
    """
    Body of the execute endpoint.

    Both fields are optional and the connection stays a plain mapping at the
    schema level, so that a missing value or an unknown engine type is
    reported by the dispatcher rather than as a validation error.
    """

    connection: Optional[Dict[str, Any]] = None
    query: Optional[str] = None


class ConnectRequest(BaseModel):
    """Body of the connect-check endpoint."""

    type: str
    host: str = "localhost"
    port: Optional[int] = None
    user: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    uri: Optional[str] = None  # mongodb only

    def connection_fields(self, db_type: DatabaseType) -> Dict[str, Any]:
        """Connection descriptor fields, accepting either user or username."""
        return {
            "type": db_type.value,
            "host": self.host,
            "port": self.port or db_type.default_port,
            "database": self.database,
            "username": self.username or self.user,
            "password": self.password,
        }
