"""API request and response models."""
from typing import List, Optional
from pydantic import BaseModel, Field


class TextDocumentRequest(BaseModel):
    """Register a document whose text was already extracted."""
    file_name: str = Field(..., description="Name shown for the document")
    full_text: str = Field("", description="Extracted document text, may be empty")


class DocumentResponse(BaseModel):
    """Result of ingesting a document."""
    document_id: str
    file_name: str
    chunks_created: int
    characters: int


class DocumentSummary(BaseModel):
    """A stored document without its full text."""
    document_id: str
    file_name: str
    summary: Optional[str] = None
    created_at: Optional[str] = None


class SummaryResponse(BaseModel):
    """Generated two-sentence summary of a document."""
    document_id: str
    summary: str


class ChatRequest(BaseModel):
    """A user question against their uploaded documents."""
    question: str = Field(..., description="User question")


class Source(BaseModel):
    """Chunk used as context for an answer."""
    document_id: Optional[str] = None
    index: int
    page: int
    score: int


class ChatResponse(BaseModel):
    """Answer to a user question."""
    answer: str
    sources: List[Source]
    chunks_considered: int
    model_used: str
    latency_ms: int


class MessageResponse(BaseModel):
    """A stored chat message."""
    message_id: str
    role: str
    text: str
    created_at: Optional[str] = None
