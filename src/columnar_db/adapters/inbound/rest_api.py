"""REST API adapter for the columnar database.

This module provides a FastAPI-based REST API that executes command
lines against a running ColumnarDatabase.

Endpoints:
    POST /execute - Execute one command line
    POST /execute/batch - Execute several command lines in order
    GET /health - Health check
    GET /stats - Database statistics

Usage:
    from columnar_db.adapters.inbound.rest_api import create_app
    from columnar_db.application import ColumnarDatabase

    db = ColumnarDatabase(data_dir="/path/to/data")
    db.start()

    app = create_app(db)
    # Run with uvicorn: uvicorn app:app --host 127.0.0.1 --port 8000
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from columnar_db import __version__
from columnar_db.application import ColumnarDatabase, ExecutionResult


class CommandRequest(BaseModel):
    """Request model for command execution."""

    command: str = Field(..., description="Command line to execute")


class BatchRequest(BaseModel):
    """Request model for batch execution."""

    commands: list[str] = Field(..., description="Command lines to execute in order")


class CommandResponse(BaseModel):
    """Response model for command execution."""

    success: bool = Field(..., description="Whether the command succeeded")
    message: str = Field("", description="Status or error message")
    error: str | None = Field(None, description="Error class name when the command failed")
    columns: list[str] = Field(default_factory=list, description="Column names")
    rows: list[dict[str, Any]] = Field(default_factory=list, description="Result rows")
    tables: list[str] = Field(default_factory=list, description="Table names (SHOW TABLES)")
    count: int | None = Field(None, description="Row count (COUNT)")
    affected_rows: int = Field(0, description="Number of affected rows")


class StatsResponse(BaseModel):
    """Response model for database statistics."""

    started: bool = Field(..., description="Whether database is started")
    data_dir: str = Field(..., description="Data directory path")
    tables: int = Field(0, description="Number of tables")
    row_counts: dict[str, int] = Field(default_factory=dict, description="Rows per table")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


def _result_to_response(result: ExecutionResult) -> CommandResponse:
    """Convert ExecutionResult to CommandResponse."""
    return CommandResponse(
        success=result.success,
        message=result.message,
        error=type(result.error).__name__ if result.error is not None else None,
        columns=result.columns,
        rows=[row.as_dict() for row in result.rows],
        tables=result.tables,
        count=result.count,
        affected_rows=result.affected_rows,
    )


def create_app(db: ColumnarDatabase) -> FastAPI:
    """Create a FastAPI application for the database.

    Args:
        db: The database to use.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="Columnar DB API",
        description="REST API for executing columnar database commands",
        version=__version__,
    )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy" if db.is_started else "unhealthy",
            version=__version__,
        )

    @app.get("/stats", response_model=StatsResponse, tags=["Stats"])
    async def get_stats() -> StatsResponse:
        """Get database statistics."""
        if not db.is_started:
            raise HTTPException(status_code=503, detail="Database not started")
        return StatsResponse(**db.get_stats())

    @app.post("/execute", response_model=CommandResponse, tags=["Commands"])
    async def execute_command(request: CommandRequest) -> CommandResponse:
        """Execute a single command line."""
        if not db.is_started:
            raise HTTPException(status_code=503, detail="Database not started")
        return _result_to_response(db.execute(request.command))

    @app.post("/execute/batch", response_model=list[CommandResponse], tags=["Commands"])
    async def execute_batch(request: BatchRequest) -> list[CommandResponse]:
        """Execute command lines in order; failures don't stop the batch."""
        if not db.is_started:
            raise HTTPException(status_code=503, detail="Database not started")
        return [_result_to_response(r) for r in db.execute_many(request.commands)]

    return app


def run_server(
    db: ColumnarDatabase,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Run the REST API server.

    Args:
        db: A started database.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(db)
    uvicorn.run(app, host=host, port=port)
