"""
Document source.

Reads the editor's stored document and flattens it to plain text for
chunking. A missing document is an empty document.

Dependencies: draftmind.boundary.db.CRUD, draftmind.core.document_text
System role: Document text provider for embedding and status operations
"""

import logging

from draftmind.boundary.db.CRUD import document_crud
from draftmind.boundary.vdb.embedding_store import EmbeddingStore
from draftmind.core.document_text import extract_plain_text
from draftmind.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# IDs the editor has used for its single working document
FALLBACK_DOCUMENT_IDS = ("infinite-doc-v1", "main")


class DocumentSource:
    """Document text lookup with fallback to the editor's working document."""

    def __init__(
        self,
        store: EmbeddingStore,
        fallback_ids: tuple[str, ...] = FALLBACK_DOCUMENT_IDS,
    ) -> None:
        """
        Initialize document source.

        Args:
            store: Open embedding store (shares its database)
            fallback_ids: Document IDs tried when the requested one is missing
        """
        self.store = store
        self.fallback_ids = fallback_ids

    async def get_content(self, document_id: str) -> str:
        """
        Stored content of one document.

        Args:
            document_id: Document ID

        Returns:
            str: Serialized document content

        Raises:
            NotFoundError: If the document is missing or empty
        """
        async with self.store.session() as session:
            content = await document_crud.get_content(session, document_id)
        if not content:
            raise NotFoundError("document", document_id)
        return content

    async def get_raw_content(self, document_id: str | None = None) -> str:
        """
        Content of the requested document, else a fallback document, else
        the most recently updated one.

        Args:
            document_id: Requested document ID (optional)

        Returns:
            str: Serialized content, "" when no document exists
        """
        candidates = [document_id] if document_id else []
        candidates.extend(fid for fid in self.fallback_ids if fid != document_id)

        for candidate in candidates:
            try:
                return await self.get_content(candidate)
            except NotFoundError:
                if candidate == document_id:
                    logger.info(
                        "Requested document not found, using fallback",
                        extra={"document_id": document_id},
                    )

        async with self.store.session() as session:
            return await document_crud.get_latest_content(session)

    async def get_plain_text(self, document_id: str | None = None) -> str:
        """
        Plain text of the current document.

        Args:
            document_id: Requested document ID (optional)

        Returns:
            str: Extracted text, "" when no document exists
        """
        return extract_plain_text(await self.get_raw_content(document_id))
