"""
Notes API: Note Service Unit Tests
=====================================

What:  Tests for NoteService statement building and the exactly-one-row rule.
How:   Uses mock DB sessions (no real database).

What we test:
    ✅ Each operation sends the expected statement and parameters
    ✅ Zero rows raises NotFoundError carrying the raw result
    ✅ Several rows raises UnexpectedRowCountError
    ✅ Driver failures surface as DatabaseError
    ✅ DML commits before the service returns; a failed commit is a DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from notes_api.exceptions import (
    DatabaseError,
    NotFoundError,
    RowCountError,
    UnexpectedRowCountError,
)
from notes_api.schemas.note import NoteCreate, NoteUpdate
from notes_api.services.note_service import NoteService


def result_with_rows(rows):
    """Mock Result whose .mappings().all() yields `rows`."""
    result = MagicMock()
    result.mappings.return_value.all.return_value = rows
    return result


def sent_statement(session):
    """The compiled statement passed to the last db.execute() call."""
    statement = session.execute.await_args.args[0]
    return statement.compile()


class TestNoteServiceList:
    """Tests for list_notes."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_db_session):
        """Empty table is a successful empty envelope."""
        mock_db_session.execute.return_value = result_with_rows([])

        result = await self.service.list_notes(mock_db_session)

        assert result.status == "success"
        assert result.data.notes == []

    @pytest.mark.asyncio
    async def test_list_notes_returns_every_row(self, mock_db_session, sample_note_row):
        rows = [dict(sample_note_row, id=i) for i in (1, 2, 3)]
        mock_db_session.execute.return_value = result_with_rows(rows)

        result = await self.service.list_notes(mock_db_session)

        assert [n.id for n in result.data.notes] == [1, 2, 3]
        assert "FROM notes" in str(sent_statement(mock_db_session))


class TestNoteServiceCreate:
    """Tests for create_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_note_inserts_fixed_category(self, mock_db_session, sample_note_row):
        mock_db_session.execute.return_value = result_with_rows([sample_note_row])

        result = await self.service.create_note(
            mock_db_session, NoteCreate(note="buy milk", completed=False)
        )

        compiled = sent_statement(mock_db_session)
        assert str(compiled).startswith("INSERT INTO notes")
        assert "RETURNING" in str(compiled)
        assert compiled.params["note"] == "buy milk"
        assert compiled.params["completed"] is False
        assert compiled.params["category"] == "General"
        assert result.data.notes[0].id == 1

    @pytest.mark.asyncio
    async def test_create_note_without_row_raises(self, mock_db_session):
        """An insert that returns nothing is reported through the 404 path."""
        mock_db_session.execute.return_value = result_with_rows([])

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.create_note(mock_db_session, NoteCreate(note="x"))

        assert exc_info.value.result.command == "INSERT"
        assert exc_info.value.result.row_count == 0


class TestNoteServiceGet:
    """Tests for get_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session, sample_note_row):
        mock_db_session.execute.return_value = result_with_rows([sample_note_row])

        result = await self.service.get_note(mock_db_session, 1)

        assert len(result.data.notes) == 1
        assert result.data.notes[0].note == "buy milk"
        assert 1 in sent_statement(mock_db_session).params.values()

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        """Non-existent note raises NotFoundError with the raw SELECT result."""
        mock_db_session.execute.return_value = result_with_rows([])

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(mock_db_session, 999)

        result = exc_info.value.result
        assert result.command == "SELECT"
        assert result.row_count == 0
        assert result.rows == []
        assert exc_info.value.context["resource_id"] == 999

    @pytest.mark.asyncio
    async def test_get_note_several_rows(self, mock_db_session, sample_note_row):
        """More than one row is a distinct error kind on the same 404 path."""
        mock_db_session.execute.return_value = result_with_rows(
            [sample_note_row, dict(sample_note_row, id=2)]
        )

        with pytest.raises(UnexpectedRowCountError) as exc_info:
            await self.service.get_note(mock_db_session, 1)

        assert isinstance(exc_info.value, RowCountError)
        assert not isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.result.row_count == 2


class TestNoteServiceDelete:
    """Tests for delete_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_note_returns_raw_result(self, mock_db_session, sample_note_row):
        mock_db_session.execute.return_value = result_with_rows([sample_note_row])

        result = await self.service.delete_note(mock_db_session, 1)

        assert result.command == "DELETE"
        assert result.row_count == 1
        assert result.rows[0].id == 1
        assert str(sent_statement(mock_db_session)).startswith("DELETE FROM notes")

    @pytest.mark.asyncio
    async def test_delete_note_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with_rows([])

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.delete_note(mock_db_session, 42)

        assert exc_info.value.result.command == "DELETE"


class TestNoteServiceUpdate:
    """Tests for update_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_note_writes_both_columns(self, mock_db_session, sample_note_row):
        """An omitted field is sent as NULL rather than left out of the SET clause."""
        updated = dict(sample_note_row, note=None, completed=True)
        mock_db_session.execute.return_value = result_with_rows([updated])

        result = await self.service.update_note(mock_db_session, 1, NoteUpdate(completed=True))

        compiled = sent_statement(mock_db_session)
        assert str(compiled).startswith("UPDATE notes SET note=:note, completed=:completed")
        assert "updated_at" not in str(compiled).split("RETURNING")[0]
        assert compiled.params["note"] is None
        assert compiled.params["completed"] is True
        assert result.completed is True
        assert result.note is None

    @pytest.mark.asyncio
    async def test_update_note_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with_rows([])

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_note(mock_db_session, 7, NoteUpdate(note="x"))

        assert exc_info.value.result.command == "UPDATE"


class TestNoteServiceErrors:
    """Driver failures are wrapped, never turned into 404s."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_statement_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_notes(mock_db_session)

        assert exc_info.value.context["command"] == "SELECT"
        assert exc_info.value.context["error_type"] == "OperationalError"
        assert "connection reset" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_commit_failure_raises_database_error(self, mock_db_session, sample_note_row):
        mock_db_session.execute.return_value = result_with_rows([sample_note_row])
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_note(mock_db_session, NoteCreate(note="ghost"))

        assert exc_info.value.context["command"] == "INSERT"


class TestNoteServiceCommit:
    """DML commits before returning; reads never commit."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_commits(self, mock_db_session, sample_note_row):
        mock_db_session.execute.return_value = result_with_rows([sample_note_row])

        await self.service.create_note(mock_db_session, NoteCreate(note="x"))

        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_and_update_commit(self, mock_db_session, sample_note_row):
        mock_db_session.execute.return_value = result_with_rows([sample_note_row])

        await self.service.delete_note(mock_db_session, 1)
        await self.service.update_note(mock_db_session, 1, NoteUpdate(note="y"))

        assert mock_db_session.commit.await_count == 2

    @pytest.mark.asyncio
    async def test_reads_do_not_commit(self, mock_db_session, sample_note_row):
        mock_db_session.execute.return_value = result_with_rows([sample_note_row])

        await self.service.list_notes(mock_db_session)
        await self.service.get_note(mock_db_session, 1)

        mock_db_session.commit.assert_not_awaited()
