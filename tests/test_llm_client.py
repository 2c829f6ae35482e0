"""Unit tests for LLMClient."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock, patch
from services.llm_client import LLMClient, LLMResponse, LLMClientError
from models.chunk import Chunk, ScoredChunk
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError


def _mock_groq(mock_groq_class, content="Answer", prompt_tokens=100, completion_tokens=10):
    mock_response = Mock()
    mock_response.choices = [Mock(message=Mock(content=content))]
    mock_response.usage = Mock(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)

    mock_client = Mock()
    mock_client.chat.completions.create.return_value = mock_response
    mock_groq_class.return_value = mock_client
    return mock_client


def _failing_groq(mock_groq_class, error):
    mock_client = Mock()
    mock_client.chat.completions.create.side_effect = error
    mock_groq_class.return_value = mock_client
    return mock_client


class TestPromptBuilding:
    """Test suite for the static prompt helpers."""

    def test_build_context_joins_with_separator(self):
        chunks = [
            ScoredChunk(chunk=Chunk(text="First chunk", index=0), score=3),
            ScoredChunk(chunk=Chunk(text="Second chunk", index=1), score=1),
        ]
        assert LLMClient.build_context(chunks) == "First chunk\n---\nSecond chunk"

    def test_build_context_empty(self):
        assert LLMClient.build_context([]) == "No documents found."

    def test_build_context_custom_separator(self):
        chunks = [ScoredChunk(chunk=Chunk(text=t, index=i), score=0) for i, t in enumerate("ab")]
        assert LLMClient.build_context(chunks, separator=" | ") == "a | b"

    def test_build_chat_prompt(self):
        prompt = LLMClient.build_chat_prompt("When is the launch?", "Launch is in May")

        assert "Cognistore AI" in prompt
        assert "Context: Launch is in May" in prompt
        assert "User: When is the launch?" in prompt
        assert "don't know" in prompt

    def test_build_summary_prompt(self):
        prompt = LLMClient.build_summary_prompt("We chose vendor B over vendor A.")

        assert "2-sentence summary" in prompt
        assert "We chose vendor B over vendor A." in prompt


class TestLLMClient:
    """Test suite for LLMClient class."""

    @patch('services.llm_client.Groq')
    def test_initialization_with_api_key(self, mock_groq_class):
        """Test LLMClient initializes with provided API key."""
        client = LLMClient(api_key="test_key")
        assert client.api_key == "test_key"
        mock_groq_class.assert_called_once_with(api_key="test_key")

    def test_initialization_without_api_key_raises_error(self):
        """Test LLMClient raises error when no API key provided."""
        with patch('services.llm_client.GROQ_API_KEY', None):
            with pytest.raises(ValueError, match="GROQ_API_KEY must be provided"):
                LLMClient()

    @patch('services.llm_client.Groq')
    def test_generate_success(self, mock_groq_class):
        """Test successful response generation."""
        mock_client = _mock_groq(mock_groq_class, "The launch is in May.", 150, 12)

        client = LLMClient(api_key="test_key")
        response = client.generate(model="llama-3.3-70b-versatile", prompt="When is the launch?")

        assert isinstance(response, LLMResponse)
        assert response.text == "The launch is in May."
        assert response.tokens_input == 150
        assert response.tokens_output == 12
        assert response.model_used == "llama-3.3-70b-versatile"
        assert isinstance(response.latency_ms, int)
        assert response.latency_ms >= 0

        call_kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert call_kwargs["messages"] == [{"role": "user", "content": "When is the launch?"}]
        assert call_kwargs["max_tokens"] == 500

    @patch('services.llm_client.Groq')
    def test_generate_empty_content(self, mock_groq_class):
        """Test that a null completion becomes an empty string."""
        _mock_groq(mock_groq_class, content=None)
        response = LLMClient(api_key="test_key").generate(model="m", prompt="p")
        assert response.text == ""

    @patch('services.llm_client.Groq')
    def test_generate_handles_unexpected_error(self, mock_groq_class):
        """Test that unknown errors are raised with a structured error."""
        _failing_groq(mock_groq_class, Exception("API Error"))
        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            client.generate(model="llama-3.1-8b-instant", prompt="Test prompt")

        error = exc_info.value.error
        assert error.code == "UNKNOWN_ERROR"
        assert "Unexpected error" in error.message
        assert error.details["model"] == "llama-3.1-8b-instant"
        assert error.details["error_type"] == "Exception"

    @patch('services.llm_client.Groq')
    def test_generate_handles_rate_limit_error(self, mock_groq_class):
        """Test that rate limit errors are handled with retry suggestion."""
        _failing_groq(mock_groq_class, RateLimitError(
            message="Rate limit exceeded",
            response=Mock(status_code=429),
            body=None
        ))
        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            client.generate(model="llama-3.1-8b-instant", prompt="Test prompt")

        error = exc_info.value.error
        assert error.code == "RATE_LIMIT_ERROR"
        assert "Rate limit exceeded" in error.message
        assert error.details["retry_after"] == 60
        assert error.details["model"] == "llama-3.1-8b-instant"
        assert isinstance(error.details["latency_ms"], int)

    @patch('services.llm_client.Groq')
    def test_generate_handles_authentication_error(self, mock_groq_class):
        """Test that authentication errors are handled properly."""
        _failing_groq(mock_groq_class, AuthenticationError(
            message="Invalid API key",
            response=Mock(status_code=401),
            body=None
        ))
        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            client.generate(model="llama-3.1-8b-instant", prompt="Test prompt")

        error = exc_info.value.error
        assert error.code == "AUTHENTICATION_ERROR"
        assert "Authentication failed" in error.message

    @patch('services.llm_client.Groq')
    def test_generate_handles_timeout_error(self, mock_groq_class):
        """Test that timeout errors are handled properly."""
        _failing_groq(mock_groq_class, APITimeoutError(request=Mock()))
        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            client.generate(model="llama-3.1-8b-instant", prompt="Test prompt")

        error = exc_info.value.error
        assert error.code == "TIMEOUT_ERROR"
        assert "timed out" in error.message

    @patch('services.llm_client.Groq')
    def test_generate_handles_generic_api_error(self, mock_groq_class):
        """Test that generic API errors are handled properly."""
        _failing_groq(mock_groq_class, APIError(
            message="Service unavailable",
            request=Mock(),
            body=None
        ))
        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            client.generate(model="llama-3.1-8b-instant", prompt="Test prompt")

        error = exc_info.value.error
        assert error.code == "API_ERROR"
        assert "Groq API error" in error.message
        assert str(exc_info.value) == error.message
