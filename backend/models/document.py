"""Document data models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from models.timestamps import parse_timestamp


@dataclass
class Document:
    """An uploaded PDF and its extracted text."""
    document_id: str
    user_id: str
    file_name: str
    full_text: str
    summary: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "Document":
        """Build a Document from a stored `nodes` row."""
        return cls(
            document_id=row["node_id"],
            user_id=row["user_id"],
            file_name=row.get("file_name") or "",
            full_text=row.get("full_content") or "",
            summary=row.get("summary"),
            created_at=parse_timestamp(row.get("created_at"))
        )
