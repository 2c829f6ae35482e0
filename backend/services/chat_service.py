"""Chat service: answer questions from a user's uploaded documents."""
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from config import CHAT_MODEL, MAX_OUTPUT_TOKENS
from exceptions import InvalidArgumentError
from models.chunk import ScoredChunk
from models.conversation import ChatMessage, USER_ROLE, ASSISTANT_ROLE
from services.document_store import DocumentStore
from services.llm_client import LLMClient
from services.retrieval_engine import RetrievalEngine

logger = logging.getLogger(__name__)


@dataclass
class ChatAnswer:
    """Assistant reply with the chunks it was grounded on."""
    text: str
    sources: List[ScoredChunk] = field(default_factory=list)
    chunks_considered: int = 0
    model_used: str = ""
    latency_ms: int = 0
    message: Optional[ChatMessage] = None


class ChatService:
    """Retrieves context for a question and asks the LLM for an answer."""

    def __init__(
        self,
        document_store: DocumentStore,
        retrieval_engine: RetrievalEngine,
        llm_client: LLMClient,
        model: str = CHAT_MODEL
    ):
        self.document_store = document_store
        self.retrieval_engine = retrieval_engine
        self.llm_client = llm_client
        self.model = model

    def answer(self, user_id: str, question: str) -> ChatAnswer:
        """
        Answer a user question from every chunk the user owns.

        The question and the reply are both recorded in the user's
        message history. Failures propagate to the caller.

        Args:
            user_id: Asking user
            question: Question text

        Returns:
            ChatAnswer with the reply and ranked sources

        Raises:
            InvalidArgumentError: If the question is empty
            StorageError: If reading chunks or writing messages fails
            LLMClientError: If generation fails
        """
        if not question or not question.strip():
            raise InvalidArgumentError("Question is required and cannot be empty")

        start_time = time.time()
        self.document_store.add_message(user_id, USER_ROLE, question)

        chunks = self.document_store.get_chunks(user_id)
        logger.info(f"Collected {len(chunks)} chunks for user {user_id}")

        sources = self.retrieval_engine.retrieve(question, chunks)
        context = LLMClient.build_context(sources)
        prompt = LLMClient.build_chat_prompt(question, context)

        response = self.llm_client.generate(
            model=self.model,
            prompt=prompt,
            max_tokens=MAX_OUTPUT_TOKENS
        )

        message = self.document_store.add_message(user_id, ASSISTANT_ROLE, response.text)
        latency_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Answered question for user {user_id} in {latency_ms}ms",
            extra={"user_id": user_id, "chunks_retrieved": len(sources), "latency_ms": latency_ms}
        )
        return ChatAnswer(
            text=response.text,
            sources=sources,
            chunks_considered=len(chunks),
            model_used=response.model_used,
            latency_ms=latency_ms,
            message=message
        )

    def history(self, user_id: str, limit: Optional[int] = 50) -> List[ChatMessage]:
        """Return the user's most recent messages, oldest first."""
        if limit is not None and limit <= 0:
            raise InvalidArgumentError(f"limit must be positive, got {limit}")
        return self.document_store.list_messages(user_id, limit=limit)
