"""Chat message data models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from models.timestamps import parse_timestamp

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


@dataclass
class ChatMessage:
    """A single message in a user's chat with their documents."""
    message_id: str
    user_id: str
    role: str  # "user" or "assistant"
    text: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "ChatMessage":
        """Build a ChatMessage from a stored `messages` row."""
        return cls(
            message_id=row["message_id"],
            user_id=row["user_id"],
            role=row["role"],
            text=row.get("text") or "",
            created_at=parse_timestamp(row.get("created_at"))
        )
