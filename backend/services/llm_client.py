"""LLM Client for Groq API integration."""
import time
from dataclasses import dataclass
from typing import List, Optional, Dict, Any
from groq import Groq
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError
import logging

from config import GROQ_API_KEY, CONTEXT_SEPARATOR, NO_CONTEXT_MESSAGE
from models.chunk import ScoredChunk

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM generation."""
    text: str
    tokens_input: int
    tokens_output: int
    latency_ms: int
    model_used: str


@dataclass
class LLMError:
    """Structured error response from LLM operations."""
    code: str
    message: str
    details: Dict[str, Any]


class LLMClientError(Exception):
    """Custom exception for LLM client errors with structured error information."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)


class LLMClient:
    """Client for interfacing with Groq API for text generation."""

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize LLM client with Groq API key.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY from environment)
        """
        self.api_key = api_key or GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY must be provided or set in environment")

        self.client = Groq(api_key=self.api_key)
        logger.info("LLMClient initialized successfully")

    def generate(
        self,
        model: str,
        prompt: str,
        max_tokens: int = 500
    ) -> LLMResponse:
        """
        Generate response using Groq API.

        Args:
            model: Model name
            prompt: Complete prompt with context and question
            max_tokens: Maximum tokens to generate

        Returns:
            LLMResponse with text, token counts, and latency

        Raises:
            LLMClientError: Structured error with code, message, and details
        """
        start_time = time.time()

        try:
            logger.debug(f"Generating response with model: {model}")

            response = self.client.chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": prompt
                    }
                ],
                max_tokens=max_tokens,
                temperature=0.3
            )

            latency_ms = int((time.time() - start_time) * 1000)
            text = response.choices[0].message.content or ""
            tokens_input = response.usage.prompt_tokens
            tokens_output = response.usage.completion_tokens

            logger.info(
                f"Generated response: model={model}, "
                f"input_tokens={tokens_input}, output_tokens={tokens_output}, "
                f"latency={latency_ms}ms"
            )

            return LLMResponse(
                text=text,
                tokens_input=tokens_input,
                tokens_output=tokens_output,
                latency_ms=latency_ms,
                model_used=model
            )

        except RateLimitError as e:
            raise self._error(
                "RATE_LIMIT_ERROR",
                "Rate limit exceeded. Please try again in a few moments.",
                model, start_time, e,
                retry_after=60
            )
        except AuthenticationError as e:
            raise self._error(
                "AUTHENTICATION_ERROR",
                "Authentication failed. Please check your API key.",
                model, start_time, e
            )
        except APITimeoutError as e:
            raise self._error(
                "TIMEOUT_ERROR",
                "Request timed out. Please try again.",
                model, start_time, e
            )
        except APIError as e:
            raise self._error(
                "API_ERROR",
                f"Groq API error: {str(e)}",
                model, start_time, e
            )
        except Exception as e:
            raise self._error(
                "UNKNOWN_ERROR",
                f"Unexpected error during generation: {str(e)}",
                model, start_time, e,
                error_type=type(e).__name__
            )

    @staticmethod
    def _error(
        code: str,
        message: str,
        model: str,
        start_time: float,
        original: Exception,
        **extra_details: Any
    ) -> LLMClientError:
        """Log a generation failure and wrap it as an LLMClientError."""
        latency_ms = int((time.time() - start_time) * 1000)
        error = LLMError(
            code=code,
            message=message,
            details={
                **extra_details,
                "model": model,
                "latency_ms": latency_ms,
                "original_error": str(original)
            }
        )
        logger.error(
            f"{code}: model={model}, latency={latency_ms}ms, error={original}",
            exc_info=True,
            extra={"error_code": error.code, "error_details": error.details}
        )
        return LLMClientError(error)

    @staticmethod
    def build_context(
        scored_chunks: List[ScoredChunk],
        separator: str = CONTEXT_SEPARATOR
    ) -> str:
        """
        Join ranked chunk texts into a context block.

        Args:
            scored_chunks: Ranked chunks, best first
            separator: Text placed between chunks

        Returns:
            Joined chunk texts, or NO_CONTEXT_MESSAGE when there are none
        """
        if not scored_chunks:
            return NO_CONTEXT_MESSAGE
        return separator.join(chunk.text for chunk in scored_chunks)

    @staticmethod
    def build_chat_prompt(question: str, context: str) -> str:
        """
        Build the chat prompt from retrieved context and the user question.

        Args:
            question: User question
            context: Output of build_context

        Returns:
            Complete prompt string
        """
        return (
            "You are Cognistore AI. Use the provided context to answer the user's question. "
            "If the context is empty or the answer isn't there, politely say you don't know "
            "based on the uploaded documents.\n\n"
            f"Context: {context}\n\n"
            f"User: {question}"
        )

    @staticmethod
    def build_summary_prompt(full_text: str) -> str:
        """
        Build the prompt for a short document summary.

        Args:
            full_text: Extracted document text

        Returns:
            Complete prompt string
        """
        return f"""You are a highly intelligent corporate assistant. Please read the following document text and provide a concise, 2-sentence summary of the main decisions, trade-offs, or insights.

Document Text:
{full_text}
"""
