"""Configuration management for Cognistore."""
import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv

from exceptions import InvalidArgumentError

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173"
).split(",")

# Model Configuration
CHAT_MODEL = os.getenv("CHAT_MODEL", "llama-3.3-70b-versatile")
SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "llama-3.1-8b-instant")
MAX_OUTPUT_TOKENS = int(os.getenv("MAX_OUTPUT_TOKENS", "500"))

# Chunking Configuration
CHUNK_MAX_LEN = int(os.getenv("CHUNK_MAX_LEN", "1200"))  # characters
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "200"))  # characters

# Retrieval Configuration
RETRIEVAL_TOP_K = int(os.getenv("RETRIEVAL_TOP_K", "6"))
CONTEXT_SEPARATOR = "\n---\n"
NO_CONTEXT_MESSAGE = "No documents found."

# Upload Configuration
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))


@dataclass(frozen=True)
class RetrievalConfig:
    """Chunking and ranking parameters shared by ingestion and chat."""
    max_len: int = 1200  # window width in characters
    overlap: int = 200  # characters shared by consecutive windows
    k: int = 6  # number of chunks handed to the prompt

    def validate(self) -> "RetrievalConfig":
        """
        Check the parameters and return self.

        Raises:
            InvalidArgumentError: If max_len or k is not positive, or overlap is negative
        """
        if self.max_len <= 0:
            raise InvalidArgumentError(f"max_len must be positive, got {self.max_len}")
        if self.overlap < 0:
            raise InvalidArgumentError(f"overlap must be non-negative, got {self.overlap}")
        if self.k <= 0:
            raise InvalidArgumentError(f"k must be positive, got {self.k}")
        return self


DEFAULT_RETRIEVAL_CONFIG = RetrievalConfig(
    max_len=CHUNK_MAX_LEN,
    overlap=CHUNK_OVERLAP,
    k=RETRIEVAL_TOP_K
)

# Logging Configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
