"""Chunking engine: overlapping fixed-width windows over extracted text."""
import logging
from typing import List, Optional

from config import DEFAULT_RETRIEVAL_CONFIG, RetrievalConfig
from exceptions import InvalidArgumentError
from models.chunk import Chunk
from models.document import Document

logger = logging.getLogger(__name__)


def chunk_text(full_text: str, max_len: int, overlap: int) -> List[str]:
    """
    Split text into overlapping windows of at most max_len characters.

    Windows start at 0 and advance by max(1, max_len - overlap). Splitting
    stops at the first window that reaches the end of the text, so the
    last window may be shorter but is never empty or a repeat.

    Args:
        full_text: Extracted document text, may be empty
        max_len: Window width in characters
        overlap: Characters shared by consecutive windows

    Returns:
        Ordered list of non-empty windows, empty for empty text

    Raises:
        InvalidArgumentError: If max_len is not positive or overlap is negative
    """
    if max_len <= 0:
        raise InvalidArgumentError(f"max_len must be positive, got {max_len}")
    if overlap < 0:
        raise InvalidArgumentError(f"overlap must be non-negative, got {overlap}")

    windows = []
    length = len(full_text)
    # overlap >= max_len would stall; always move forward
    step = max(1, max_len - overlap)

    for start in range(0, length, step):
        end = min(length, start + max_len)
        windows.append(full_text[start:end])
        if end == length:
            break

    return windows


class ChunkingEngine:
    """Segments extracted document text into indexed chunks."""

    def __init__(self, config: Optional[RetrievalConfig] = None):
        """
        Initialize ChunkingEngine.

        Args:
            config: Chunking parameters (defaults to DEFAULT_RETRIEVAL_CONFIG)
        """
        self.config = (config or DEFAULT_RETRIEVAL_CONFIG).validate()

    def chunk(self, full_text: str, document_id: Optional[str] = None) -> List[Chunk]:
        """
        Chunk raw text into Chunk objects tagged with their sequence index.

        Args:
            full_text: Extracted text
            document_id: Owning document, if known

        Returns:
            Chunks in text order; page is always 0 for whole-document text
        """
        windows = chunk_text(full_text or "", self.config.max_len, self.config.overlap)
        return [
            Chunk(text=window, index=idx, page=0, document_id=document_id)
            for idx, window in enumerate(windows)
        ]

    def chunk_document(self, document: Document) -> List[Chunk]:
        """
        Chunk a document's full text.

        Args:
            document: Loaded document

        Returns:
            List of chunks owned by the document
        """
        chunks = self.chunk(document.full_text, document_id=document.document_id)
        logger.info(
            f"Chunked document {document.document_id} ({document.file_name}): "
            f"{len(document.full_text)} characters -> {len(chunks)} chunks"
        )
        return chunks
