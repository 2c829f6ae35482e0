"""Retrieval engine: lexical keyword ranking of stored chunks."""
import logging
from typing import List, Optional, Sequence

from config import DEFAULT_RETRIEVAL_CONFIG, RetrievalConfig
from exceptions import InvalidArgumentError
from models.chunk import Chunk, ScoredChunk
from services.text_utils import (
    count_occurrences,
    extract_keywords,
    keyword_pattern,
    normalize,
)

logger = logging.getLogger(__name__)


def score_chunk(text: str, patterns: Sequence) -> int:
    """Sum whole-word occurrences of every keyword pattern in text."""
    lowered = normalize(text)
    return sum(count_occurrences(pattern, lowered) for pattern in patterns)


def rank(query: str, chunks: Sequence[Chunk], k: int) -> List[ScoredChunk]:
    """
    Rank chunks by keyword occurrence count and keep the top k.

    Keywords are the first 12 query tokens of 3+ characters, duplicates
    included. Every chunk is scored, including those scoring 0, and ties
    keep their input order.

    Args:
        query: User question
        chunks: Candidate chunks, in storage order
        k: Maximum number of results

    Returns:
        At most min(k, len(chunks)) scored chunks, highest score first

    Raises:
        InvalidArgumentError: If k is not positive
    """
    if k <= 0:
        raise InvalidArgumentError(f"k must be positive, got {k}")

    # One compiled pattern per keyword occurrence, reused across chunks
    patterns = [keyword_pattern(keyword) for keyword in extract_keywords(query)]

    scored = [ScoredChunk(chunk=chunk, score=score_chunk(chunk.text, patterns)) for chunk in chunks]
    # sorted() is stable, so equal scores keep input order
    scored = sorted(scored, key=lambda item: item.score, reverse=True)
    return scored[:k]


class RetrievalEngine:
    """Select the chunks most relevant to a question for prompting."""

    def __init__(self, config: Optional[RetrievalConfig] = None):
        """
        Initialize the retrieval engine.

        Args:
            config: Ranking parameters (defaults to DEFAULT_RETRIEVAL_CONFIG)
        """
        self.config = (config or DEFAULT_RETRIEVAL_CONFIG).validate()
        logger.info(f"Initialized RetrievalEngine (k={self.config.k})")

    def retrieve(self, query: str, chunks: Sequence[Chunk], top_k: Optional[int] = None) -> List[ScoredChunk]:
        """
        Retrieve the top chunks for a query.

        Args:
            query: User question
            chunks: All chunks available to the user
            top_k: Override for the configured k

        Returns:
            Scored chunks, empty if there are no chunks
        """
        k = top_k if top_k is not None else self.config.k
        results = rank(query, chunks, k)

        top_score = results[0].score if results else 0
        logger.info(
            f"Retrieved {len(results)} of {len(chunks)} chunks (top score: {top_score})"
        )
        return results
