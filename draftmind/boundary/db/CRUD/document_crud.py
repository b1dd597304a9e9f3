"""
Document CRUD operations.

Read-only access to editor documents. The editor owns writes to this
table.

Dependencies: sqlalchemy, draftmind.boundary.db.models
System role: Document source persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from draftmind.boundary.db.CRUD.base_crud import BaseCRUD
from draftmind.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_content(self, session: AsyncSession, document_id: str) -> str:
        """
        Stored content of a document.

        Args:
            session: Async database session
            document_id: Document ID

        Returns:
            str: Content, or "" when the document is missing or empty
        """
        result = await session.execute(
            select(DocumentModel.content).where(DocumentModel.id == document_id)
        )
        return result.scalar_one_or_none() or ""

    async def get_latest_content(self, session: AsyncSession) -> str:
        """Content of the most recently updated document, or ""."""
        result = await session.execute(
            select(DocumentModel.content)
            .order_by(DocumentModel.updated_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none() or ""


document_crud = DocumentCRUD()
