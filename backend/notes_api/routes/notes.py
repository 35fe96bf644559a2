"""
Notes API: Notes Route Handlers
==================================

What:  The five CRUD endpoints on /notes.
How:   Extracts the path id and JSON body, delegates to NoteService, and
       picks the success status code. Every non-success outcome is raised by
       the service and answered by the handlers in main.py.

Endpoints:
    GET    /notes        → 200 status envelope
    POST   /notes        → 201 status envelope with the inserted row
    GET    /notes/{id}   → 200 status envelope with the row
    DELETE /notes/{id}   → 200 raw query result
    PATCH  /notes/{id}   → 200 bare updated row
    Any keyed miss       → 404 raw query result
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteEnvelope,
    NoteResponse,
    NoteUpdate,
    QueryResult,
)
from notes_api.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_NOT_ONE_ROW = {"description": "Statement did not return exactly one row", "model": QueryResult}
_SERVER_ERROR = {"description": "Statement failed", "model": ErrorResponse}


@router.get(
    "/notes",
    response_model=NoteEnvelope,
    responses={500: _SERVER_ERROR},
    summary="List all notes",
)
async def list_notes(db: AsyncSession = Depends(get_db_session)) -> NoteEnvelope:
    """Returns every note in storage order, unpaginated."""
    return await note_service.list_notes(db)


@router.post(
    "/notes",
    response_model=NoteEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={404: _NOT_ONE_ROW, 500: _SERVER_ERROR},
    summary="Create a note",
    description=(
        "Inserts a note with category 'General' and database-generated id and "
        "timestamps. Only `note` and `completed` are read from the body."
    ),
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteEnvelope:
    return await note_service.create_note(db, payload)


@router.get(
    "/notes/{note_id}",
    response_model=NoteEnvelope,
    responses={404: _NOT_ONE_ROW, 500: _SERVER_ERROR},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteEnvelope:
    """
    Args:
        note_id: Integer path parameter. Non-integers return 422
                 Unprocessable Entity (FastAPI default).
    """
    return await note_service.get_note(db, note_id)


@router.delete(
    "/notes/{note_id}",
    response_model=QueryResult,
    responses={404: _NOT_ONE_ROW, 500: _SERVER_ERROR},
    summary="Delete a note by ID",
    description="Deletes the note and returns the raw statement result with the deleted row.",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> QueryResult:
    return await note_service.delete_note(db, note_id)


@router.patch(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={404: _NOT_ONE_ROW, 500: _SERVER_ERROR},
    summary="Update a note by ID",
    description=(
        "Overwrites both `note` and `completed`. A field left out of the body "
        "is written as null. `updated_at` is not changed."
    ),
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db, note_id, payload)
