"""
FastAPI REST API for the Database Console.

Runs ad hoc queries against PostgreSQL, MySQL, MongoDB and Redis and returns
uniform tabular results.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse

from db_console import QueryDispatcher, config
from db_console.core.errors import RequestShapeError, error_message
from db_console.core.models import ConnectRequest, DatabaseType, ExecuteRequest, QueryResult
from db_console.execution.result_formatter import ResultFormatter
from db_console.templates import templates_for

logger = logging.getLogger(__name__)

ENGINE_LABELS = {
    DatabaseType.POSTGRESQL: "PostgreSQL",
    DatabaseType.MYSQL: "MySQL",
    DatabaseType.MONGODB: "MongoDB",
    DatabaseType.REDIS: "Redis",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    yield


app = FastAPI(
    title="Database Console API",
    description="Execute queries against relational, document and key-value databases",
    version="1.0.0",
    lifespan=lifespan,
)
start_time = time.time()

_dispatcher = QueryDispatcher.default()


def get_dispatcher() -> QueryDispatcher:
    """Dispatcher shared by all requests; it holds no per-request state."""
    return _dispatcher


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "healthy", "uptime_seconds": time.time() - start_time}


@app.get("/templates/{db_type}")
async def get_templates(db_type: str) -> Dict[str, str]:
    """Starter queries for the given engine."""
    try:
        return templates_for(DatabaseType(db_type))
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown database type: {db_type}")


@app.post("/connect")
async def connect(request: ConnectRequest, dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    """
    Verify a database is reachable by opening and closing a connection.

    Returns ``{success, message}`` on success and ``{error}`` with a 4xx/5xx
    status otherwise.
    """
    try:
        db_type = DatabaseType(request.type)
    except ValueError:
        return JSONResponse({"error": "unsupported database type"}, status_code=400)

    try:
        connection, executor = dispatcher.resolve(request.connection_fields(db_type))
    except RequestShapeError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    try:
        if db_type is DatabaseType.MONGODB and request.uri:
            await executor.check(connection, uri=request.uri)
        else:
            await executor.check(connection)
    except Exception as e:
        logger.error("Connection check for %s on %s:%s failed: %s", db_type.value, request.host, request.port, e)
        return JSONResponse({"error": error_message(e)}, status_code=500)

    return {"success": True, "message": f"Connected to {ENGINE_LABELS[db_type]}"}


@app.post("/execute")
async def execute(request: ExecuteRequest, dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    """
    Execute a query against the given connection.

    Missing parameters and unsupported engines are rejected with status 400.
    Failures while executing are reported in the body with status 200.
    """
    try:
        result = await dispatcher.dispatch(request.connection, request.query)
    except RequestShapeError as e:
        return JSONResponse(QueryResult.failure(str(e)).to_response(), status_code=400)
    return JSONResponse(result.to_response())


@app.post("/export/csv", response_class=PlainTextResponse)
async def export_csv(result: QueryResult) -> PlainTextResponse:
    """Render a query result as a CSV download."""
    filename = f"query-results-{int(time.time() * 1000)}.csv"
    return PlainTextResponse(
        ResultFormatter.to_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
