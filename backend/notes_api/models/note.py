"""
Notes API: Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService to build statements and by Alembic for schema management.

Table Design:
    - id: database-generated integer, unique and immutable
    - note: caller-supplied text (nullable; update writes null when omitted)
    - category: fixed to 'General' on insert, never exposed for writing
    - created_at / updated_at: stamped by the database at insertion time;
      updated_at is not refreshed by updates
    - completed: caller-supplied flag (nullable, same reason as note)
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base

# Category stamped on every inserted row
DEFAULT_CATEGORY = "General"


class Note(Base):
    """
    Represents one note row.

    Lifecycle:
        1. Created by POST /notes
        2. Read by GET /notes and GET /notes/{id}
        3. Mutated in place by PATCH /notes/{id}
        4. Removed by DELETE /notes/{id}
    """

    __tablename__ = "notes"

    # BIGSERIAL on PostgreSQL; SQLite only autoincrements INTEGER primary keys
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    category: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=DEFAULT_CATEGORY,
        server_default=text(f"'{DEFAULT_CATEGORY}'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    completed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, category='{self.category}', completed={self.completed})>"


# Core table handle; statements are built against it so results come back as plain rows
notes_table = Note.__table__
