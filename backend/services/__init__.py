"""Services for Cognistore."""
from .text_utils import extract_keywords, tokenize, normalize
from .chunking_engine import ChunkingEngine, chunk_text
from .retrieval_engine import RetrievalEngine, rank
from .document_loader import DocumentLoader
from .document_store import DocumentStore
from .llm_client import LLMClient, LLMResponse, LLMError, LLMClientError
from .ingestion_service import IngestionService, IngestionResult
from .chat_service import ChatService, ChatAnswer

__all__ = [
    'extract_keywords', 'tokenize', 'normalize',
    'ChunkingEngine', 'chunk_text',
    'RetrievalEngine', 'rank',
    'DocumentLoader', 'DocumentStore',
    'LLMClient', 'LLMResponse', 'LLMError', 'LLMClientError',
    'IngestionService', 'IngestionResult',
    'ChatService', 'ChatAnswer',
]
