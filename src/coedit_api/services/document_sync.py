"""Client side of the external document-sync service.

The sync service owns the real-time collaborative body of each document
(merging concurrent edits, steps and snapshots). This API only tells it which
document ids exist; it never inspects the service's internal formats.
"""

import abc
import logging

import httpx

from coedit_api.config import sync_settings

logger = logging.getLogger(__name__)


class DocumentSyncABC(metaclass=abc.ABCMeta):
    """Abstract base class for document-sync backends."""

    @abc.abstractmethod
    async def create_document(self, doc_id: str, content: str = "") -> None:
        """Create the collaborative body for a new document.

        Args:
            doc_id: Id of the document in this API
            content: Initial serialized body (empty for new documents)
        """


class HttpDocumentSync(DocumentSyncABC):
    """Registers documents with a sync service over HTTP."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def create_document(self, doc_id: str, content: str = "") -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{self.base_url}/documents",
                json={"id": doc_id, "content": content},
                timeout=self.timeout,
            )
            response.raise_for_status()
        logger.debug("Registered document %s with sync service", doc_id)


class InMemoryDocumentSync(DocumentSyncABC):
    """Keeps document bodies in process. Useful in testing and local dev."""

    def __init__(self):
        self.documents: dict[str, str] = {}

    async def create_document(self, doc_id: str, content: str = "") -> None:
        self.documents.setdefault(doc_id, content)


# Global instance (created lazily)
_document_sync: DocumentSyncABC | None = None


def get_document_sync() -> DocumentSyncABC:
    """Get the configured document-sync backend."""
    global _document_sync
    if _document_sync is None:
        if sync_settings.service_url:
            _document_sync = HttpDocumentSync(
                sync_settings.service_url,
                timeout=sync_settings.timeout_seconds,
            )
        else:
            logger.info("No sync service URL configured, using in-memory sync")
            _document_sync = InMemoryDocumentSync()
    return _document_sync
