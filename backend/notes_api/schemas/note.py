"""
Notes API: Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract between clients and backend.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Response shapes:
    Status envelope  → {"status": "success", "data": {"notes": [...]}}
                       list, create, get-by-id
    Raw query result → {"command": "DELETE", "rowCount": 1, "rows": [...]}
                       delete success, and every 404
    Bare note row    → {"id": 1, "note": "...", ...}
                       update success

Request bodies carry no constraints: every field is optional and unknown
fields (e.g. "category") are ignored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /notes."""
    note: Optional[str] = Field(default=None, description="Note text")
    completed: Optional[bool] = Field(default=None, description="Completion flag")


class NoteUpdate(BaseModel):
    """
    Body of PATCH /notes/{id}.

    Both columns are written on every update; an omitted field is stored
    as null rather than left untouched.
    """
    note: Optional[str] = Field(default=None, description="Replacement note text")
    completed: Optional[bool] = Field(default=None, description="Replacement completion flag")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """One row of the notes table."""
    id: int = Field(description="Database-generated note identifier")
    note: Optional[str] = Field(default=None, description="Note text")
    category: str = Field(description="Note category (always 'General' on creation)")
    created_at: datetime = Field(description="When the row was inserted")
    updated_at: datetime = Field(description="Insertion timestamp; not refreshed by updates")
    completed: Optional[bool] = Field(default=None, description="Completion flag")

    model_config = {"from_attributes": True}


class NotesData(BaseModel):
    notes: List[NoteResponse] = Field(description="Rows returned by the statement")


class NoteEnvelope(BaseModel):
    """
    What:  Status envelope wrapping the rows of list, create and get responses.
    Why:   Existing clients read `data.notes` regardless of how many rows
           the statement returned.
    """
    status: str = Field(default="success", description="Always 'success'")
    data: NotesData

    @classmethod
    def of(cls, rows: List[NoteResponse]) -> "NoteEnvelope":
        return cls(data=NotesData(notes=rows))


class QueryResult(BaseModel):
    """
    What:  The outcome of one SQL statement, returned verbatim to the client.
    Who:   Built by NoteService for every statement; returned on DELETE success
           and as the body of every 404.

    Fields:
        command:   SQL verb that produced the result (SELECT, INSERT, UPDATE, DELETE)
        row_count: Rows the statement returned (serialized as `rowCount`)
        rows:      The returned rows themselves
    """
    command: str = Field(description="SQL verb of the executed statement")
    row_count: int = Field(
        serialization_alias="rowCount",
        description="Number of rows the statement matched or affected",
    )
    rows: List[NoteResponse] = Field(default_factory=list, description="Returned rows")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body for server-side failures (500).

    Example:
        {
            "error": "server_error",
            "message": "An internal error occurred. Please try again later.",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response for GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
