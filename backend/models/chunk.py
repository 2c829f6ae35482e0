"""Chunk data models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from exceptions import InvalidArgumentError
from models.timestamps import parse_timestamp


@dataclass(frozen=True)
class Chunk:
    """A bounded window of a document's extracted text."""
    text: str
    index: int  # position in the document's split sequence, 0-based
    page: int = 0  # whole-document extraction never knows the page
    document_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "Chunk":
        """
        Build a Chunk from a stored `chunks` row.

        Args:
            row: Record with `text`, `idx` and optionally `page`,
                `document_id` and `created_at`

        Returns:
            Chunk built from the record

        Raises:
            InvalidArgumentError: If the record is missing text or carries a bad index
        """
        text = row.get("text")
        if not isinstance(text, str) or not text:
            raise InvalidArgumentError("chunk record has no text")

        index = row.get("idx")
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise InvalidArgumentError(f"chunk record has invalid idx: {index!r}")

        page = row.get("page") or 0
        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            raise InvalidArgumentError(f"chunk record has invalid page: {page!r}")

        return cls(
            text=text,
            index=index,
            page=page,
            document_id=row.get("document_id"),
            created_at=parse_timestamp(row.get("created_at"))
        )

    def to_record(self) -> dict:
        """Serialize to the stored `chunks` row shape (timestamp is server-assigned)."""
        return {
            "text": self.text,
            "idx": self.index,
            "page": self.page,
            "document_id": self.document_id,
        }


@dataclass(frozen=True)
class ScoredChunk:
    """Chunk with its lexical score for one query."""
    chunk: Chunk
    score: int

    @property
    def text(self) -> str:
        return self.chunk.text

    @property
    def index(self) -> int:
        return self.chunk.index

    @property
    def page(self) -> int:
        return self.chunk.page
