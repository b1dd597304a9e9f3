"""
Document ORM model.

The editor owns this table; the retrieval engine only reads it.

Dependencies: sqlalchemy, draftmind.boundary.db.base
System role: Document source persistence
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from draftmind.boundary.db.base import Base


class DocumentModel(Base):
    """
    Editor document row.

    Attributes:
        id: Document ID chosen by the editor
        content: Serialized rich-text tree (JSON) or legacy plain text
        updated_at: ISO-8601 timestamp string written by the editor
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[str | None] = mapped_column(Text, nullable=True)
