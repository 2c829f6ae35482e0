"""Ingestion service: extract, chunk and store uploaded documents."""
import logging
from dataclasses import dataclass
from typing import Optional

from config import SUMMARY_MODEL, MAX_OUTPUT_TOKENS
from exceptions import InvalidArgumentError, StorageError
from models.document import Document
from services.chunking_engine import ChunkingEngine
from services.document_loader import DocumentLoader
from services.document_store import DocumentStore
from services.llm_client import LLMClient

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """Outcome of ingesting one document."""
    document: Document
    chunks_created: int


class IngestionService:
    """Turns uploaded PDFs into stored documents and chunks."""

    def __init__(
        self,
        document_store: DocumentStore,
        chunking_engine: ChunkingEngine,
        document_loader: Optional[DocumentLoader] = None,
        llm_client: Optional[LLMClient] = None,
        summary_model: str = SUMMARY_MODEL
    ):
        self.document_store = document_store
        self.chunking_engine = chunking_engine
        self.document_loader = document_loader or DocumentLoader()
        self.llm_client = llm_client
        self.summary_model = summary_model

    def ingest(self, user_id: str, file_name: str, pdf_bytes: bytes) -> IngestionResult:
        """
        Extract text from a PDF upload, then store it with its chunks.

        Raises:
            InvalidArgumentError: If the upload is empty or too large
            ExtractionError: If the PDF cannot be read
            StorageError: If writing the document or its chunks fails
        """
        full_text = self.document_loader.extract_text(pdf_bytes, file_name=file_name)
        return self.ingest_text(user_id, file_name, full_text)

    def ingest_text(self, user_id: str, file_name: str, full_text: str) -> IngestionResult:
        """
        Store already-extracted text and its chunks.

        A document without text is stored with no chunks.
        If the chunks cannot be written the document record is removed again.
        """
        document = self.document_store.create_document(user_id, file_name, full_text or "")
        chunks = self.chunking_engine.chunk_document(document)
        try:
            written = self.document_store.add_chunks(user_id, document.document_id, chunks)
        except StorageError:
            logger.error(f"Removing document {document.document_id} after its chunks failed to store")
            self.document_store.delete_document(user_id, document.document_id)
            raise

        logger.info(
            f"Ingested {file_name} for user {user_id}",
            extra={"user_id": user_id, "document_id": document.document_id, "chunks_created": written}
        )
        return IngestionResult(document=document, chunks_created=written)

    def summarize(self, user_id: str, document_id: str) -> str:
        """
        Generate and store a two-sentence summary of a document.

        Raises:
            DocumentNotFoundError: If the user has no such document
            InvalidArgumentError: If the document has no text to summarize
            LLMClientError: If generation fails
        """
        if self.llm_client is None:
            raise RuntimeError("IngestionService was created without an LLM client")

        document = self.document_store.get_document(user_id, document_id)
        if not document.full_text.strip():
            raise InvalidArgumentError(f"Document {document_id} has no text to summarize")

        prompt = LLMClient.build_summary_prompt(document.full_text)
        response = self.llm_client.generate(
            model=self.summary_model,
            prompt=prompt,
            max_tokens=MAX_OUTPUT_TOKENS
        )
        summary = response.text.strip()
        self.document_store.update_summary(user_id, document_id, summary)
        return summary
