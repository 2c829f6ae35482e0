"""Main entry point for the Cognistore API."""
import logging
from typing import List

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from config import PORT, CORS_ORIGINS, DEFAULT_RETRIEVAL_CONFIG
from exceptions import (
    DocumentNotFoundError,
    ExtractionError,
    InvalidArgumentError,
    StorageError,
)
from models.api import (
    ChatRequest,
    ChatResponse,
    DocumentResponse,
    DocumentSummary,
    MessageResponse,
    Source,
    SummaryResponse,
    TextDocumentRequest,
)
from services.chat_service import ChatService
from services.chunking_engine import ChunkingEngine
from services.document_loader import DocumentLoader
from services.document_store import DocumentStore
from services.ingestion_service import IngestionService, IngestionResult
from services.llm_client import LLMClient, LLMClientError
from services.retrieval_engine import RetrievalEngine

# Initialize logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Cognistore",
    description="Chat with your uploaded PDF documents",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services (will be done on startup)
document_store: DocumentStore = None
ingestion_service: IngestionService = None
chat_service: ChatService = None


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global document_store, ingestion_service, chat_service

    logger.info("Initializing Cognistore services...")

    try:
        document_store = DocumentStore()
        logger.info("Initialized DocumentStore")
        llm_client = LLMClient()

        ingestion_service = IngestionService(
            document_store=document_store,
            chunking_engine=ChunkingEngine(DEFAULT_RETRIEVAL_CONFIG),
            document_loader=DocumentLoader(),
            llm_client=llm_client
        )
        logger.info("Initialized IngestionService")

        chat_service = ChatService(
            document_store=document_store,
            retrieval_engine=RetrievalEngine(DEFAULT_RETRIEVAL_CONFIG),
            llm_client=llm_client
        )
        logger.info("Initialized ChatService")

        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise


def _to_http_exception(error: Exception) -> HTTPException:
    """Map a service error to the HTTP response the client sees."""
    if isinstance(error, HTTPException):
        return error
    if isinstance(error, InvalidArgumentError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, DocumentNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ExtractionError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, LLMClientError):
        logger.error(f"LLM client error: {error.error.message}")
        return HTTPException(
            status_code=503,
            detail={
                "error": {
                    "code": error.error.code,
                    "message": error.error.message,
                    "details": error.error.details
                }
            }
        )
    if isinstance(error, StorageError):
        return HTTPException(status_code=502, detail=str(error))

    logger.error(f"Unexpected error: {error}", exc_info=error)
    return HTTPException(status_code=500, detail=f"Internal server error: {str(error)}")


def _document_response(result: IngestionResult) -> DocumentResponse:
    return DocumentResponse(
        document_id=result.document.document_id,
        file_name=result.document.file_name,
        chunks_created=result.chunks_created,
        characters=len(result.document.full_text)
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Cognistore API"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "cognistore",
        "version": "1.0.0"
    }


@app.post("/users/{user_id}/documents", response_model=DocumentResponse)
async def upload_document(user_id: str, file: UploadFile = File(...)) -> DocumentResponse:
    """
    Upload a PDF, extract its text, and store it as chunks.

    Args:
        user_id: Owner of the document
        file: PDF upload

    Returns:
        DocumentResponse with document ID and chunk count
    """
    try:
        pdf_bytes = await file.read()
        result = ingestion_service.ingest(user_id, file.filename or "document.pdf", pdf_bytes)
        return _document_response(result)
    except Exception as e:
        raise _to_http_exception(e)


@app.post("/users/{user_id}/documents/text", response_model=DocumentResponse)
async def add_text_document(user_id: str, request: TextDocumentRequest) -> DocumentResponse:
    """Store a document whose text was extracted by the client."""
    try:
        if not request.file_name or not request.file_name.strip():
            raise HTTPException(status_code=400, detail="file_name is required")
        result = ingestion_service.ingest_text(user_id, request.file_name, request.full_text)
        return _document_response(result)
    except Exception as e:
        raise _to_http_exception(e)


@app.get("/users/{user_id}/documents", response_model=List[DocumentSummary])
async def list_documents(user_id: str) -> List[DocumentSummary]:
    """List the user's documents."""
    try:
        documents = document_store.list_documents(user_id)
    except Exception as e:
        raise _to_http_exception(e)

    return [
        DocumentSummary(
            document_id=doc.document_id,
            file_name=doc.file_name,
            summary=doc.summary,
            created_at=doc.created_at.isoformat() if doc.created_at else None
        )
        for doc in documents
    ]


@app.post("/users/{user_id}/documents/{document_id}/summary", response_model=SummaryResponse)
async def summarize_document(user_id: str, document_id: str) -> SummaryResponse:
    """Generate a two-sentence summary of a document."""
    try:
        summary = ingestion_service.summarize(user_id, document_id)
        return SummaryResponse(document_id=document_id, summary=summary)
    except Exception as e:
        raise _to_http_exception(e)


@app.post("/users/{user_id}/chat", response_model=ChatResponse)
async def chat_endpoint(user_id: str, request: ChatRequest) -> ChatResponse:
    """
    Answer a question using the user's uploaded documents as context.

    Args:
        user_id: Asking user
        request: ChatRequest with the question

    Returns:
        ChatResponse with answer and ranked sources
    """
    try:
        logger.info(f"Processing question for user {user_id}: {request.question[:100]}...")
        answer = chat_service.answer(user_id, request.question)
    except Exception as e:
        raise _to_http_exception(e)

    return ChatResponse(
        answer=answer.text,
        sources=[
            Source(
                document_id=source.chunk.document_id,
                index=source.index,
                page=source.page,
                score=source.score
            )
            for source in answer.sources
        ],
        chunks_considered=answer.chunks_considered,
        model_used=answer.model_used,
        latency_ms=answer.latency_ms
    )


@app.get("/users/{user_id}/messages", response_model=List[MessageResponse])
async def list_messages(user_id: str, limit: int = 50) -> List[MessageResponse]:
    """Return the user's chat history, oldest first."""
    try:
        messages = chat_service.history(user_id, limit=limit)
    except Exception as e:
        raise _to_http_exception(e)

    return [
        MessageResponse(
            message_id=message.message_id,
            role=message.role,
            text=message.text,
            created_at=message.created_at.isoformat() if message.created_at else None
        )
        for message in messages
    ]


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Cognistore API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
