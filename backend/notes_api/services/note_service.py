"""
Notes API: Note Service
==========================

What:  Maps each notes operation onto exactly one parameterized SQL statement.
How:   Builds the statement against the `notes` table, executes it on the
       request's session, and judges the outcome by the number of rows the
       statement returned.
Who:   Called by the route handlers in routes/notes.py.

Statement Map:
    list_notes   → SELECT * FROM notes
    create_note  → INSERT INTO notes (note, category, completed)
                   VALUES (:note, 'General', :completed) RETURNING *
    get_note     → SELECT * FROM notes WHERE id = :id
    delete_note  → DELETE FROM notes WHERE id = :id RETURNING *
    update_note  → UPDATE notes SET note = :note, completed = :completed
                   WHERE id = :id RETURNING *

    id, created_at and updated_at come from column defaults in the database.

Success Rule:
    Every operation except list_notes succeeds only when the statement
    returned exactly one row. Zero rows raises NotFoundError; any other
    count raises UnexpectedRowCountError. Both carry the raw QueryResult.

NoteService is stateless; the session is injected per call.
"""

import logging
from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from notes_api.exceptions import (
    DatabaseError,
    NotFoundError,
    UnexpectedRowCountError,
)
from notes_api.models.note import DEFAULT_CATEGORY, notes_table
from notes_api.schemas.note import (
    NoteCreate,
    NoteEnvelope,
    NoteResponse,
    NoteUpdate,
    QueryResult,
)

logger = logging.getLogger(__name__)


class NoteService:
    """
    Statement layer for note operations.

    Error Handling Strategy:
        Driver and SQL failures are logged and re-raised as DatabaseError
        (generic 500). Row-count outcomes other than one raise RowCountError
        subclasses (404 with the raw result). Nothing is retried.
    """

    async def _execute(
        self, db: AsyncSession, command: str, statement: Executable
    ) -> QueryResult:
        """
        Run one statement and capture its rows as a QueryResult.

        Args:
            db:        Request-scoped async session
            command:   SQL verb, reported back to the client in the raw result
            statement: The SELECT or the DML ... RETURNING statement

        DML is committed here, before any response is built, so a failed
        COMMIT surfaces as DatabaseError instead of a reported success.

        Raises:
            DatabaseError: The statement or its commit failed
        """
        try:
            result = await db.execute(statement)
            rows = result.mappings().all()
            if command != "SELECT":
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("%s on notes failed: %s", command, str(e), exc_info=True)
            raise DatabaseError(
                context={"command": command, "error_type": type(e).__name__},
            ) from e

        return QueryResult(
            command=command,
            row_count=len(rows),
            rows=[NoteResponse.model_validate(dict(row)) for row in rows],
        )

    @staticmethod
    def _expect_one(result: QueryResult, note_id: Optional[int] = None) -> None:
        """Raise unless the statement returned exactly one row."""
        if result.row_count == 1:
            return
        if result.row_count == 0:
            raise NotFoundError(result=result, resource_id=note_id)
        logger.warning(
            "%s returned %d rows (id=%s)", result.command, result.row_count, note_id
        )
        raise UnexpectedRowCountError(result=result, context={"resource_id": note_id})

    async def list_notes(self, db: AsyncSession) -> NoteEnvelope:
        """
        Return every row in storage order.

        No row-count check: an empty table is a successful empty list.
        """
        result = await self._execute(db, "SELECT", select(notes_table))
        return NoteEnvelope.of(result.rows)

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteEnvelope:
        """
        Insert a note with the fixed category and return the inserted row.

        Raises:
            NotFoundError / UnexpectedRowCountError: insert did not yield one row
            DatabaseError: insert failed
        """
        statement = (
            insert(notes_table)
            .values(
                note=payload.note,
                category=DEFAULT_CATEGORY,
                completed=payload.completed,
            )
            .returning(*notes_table.c)
        )
        result = await self._execute(db, "INSERT", statement)
        self._expect_one(result)
        logger.info("Note %s created", result.rows[0].id)
        return NoteEnvelope.of(result.rows)

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteEnvelope:
        """
        Fetch a single note by id.

        Query plan: primary key lookup on notes.id
        """
        statement = select(notes_table).where(notes_table.c.id == note_id)
        result = await self._execute(db, "SELECT", statement)
        self._expect_one(result, note_id)
        return NoteEnvelope.of(result.rows)

    async def delete_note(self, db: AsyncSession, note_id: int) -> QueryResult:
        """
        Delete a note by id.

        Returns:
            The raw QueryResult, carrying the deleted row
        """
        statement = (
            delete(notes_table)
            .where(notes_table.c.id == note_id)
            .returning(*notes_table.c)
        )
        result = await self._execute(db, "DELETE", statement)
        self._expect_one(result, note_id)
        logger.info("Note %s deleted", note_id)
        return result

    async def update_note(
        self, db: AsyncSession, note_id: int, payload: NoteUpdate
    ) -> NoteResponse:
        """
        Overwrite `note` and `completed` on one row and return the row.

        Both columns are always written, so a field missing from the payload
        is stored as null. updated_at is left as it was at insertion.
        """
        statement = (
            update(notes_table)
            .where(notes_table.c.id == note_id)
            .values(note=payload.note, completed=payload.completed)
            .returning(*notes_table.c)
        )
        result = await self._execute(db, "UPDATE", statement)
        self._expect_one(result, note_id)
        logger.info("Note %s updated", note_id)
        return result.rows[0]


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
