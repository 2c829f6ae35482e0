"""Data models for Cognistore."""
from .document import Document
from .chunk import Chunk, ScoredChunk
from .conversation import ChatMessage, USER_ROLE, ASSISTANT_ROLE
from .api import (
    TextDocumentRequest,
    DocumentResponse,
    DocumentSummary,
    SummaryResponse,
    ChatRequest,
    ChatResponse,
    MessageResponse,
    Source,
)

__all__ = [
    "Document",
    "Chunk",
    "ScoredChunk",
    "ChatMessage",
    "USER_ROLE",
    "ASSISTANT_ROLE",
    "TextDocumentRequest",
    "DocumentResponse",
    "DocumentSummary",
    "SummaryResponse",
    "ChatRequest",
    "ChatResponse",
    "MessageResponse",
    "Source",
]
