"""Text normalization helpers shared by chunking and lexical ranking."""
import re
from typing import List, Optional

# Anything that is not an ASCII letter or digit separates tokens
_TOKEN_SEPARATOR = re.compile(r"[^a-z0-9]+")

MIN_KEYWORD_LENGTH = 3
MAX_KEYWORDS = 12


def normalize(text: Optional[str]) -> str:
    """Lower-case text for matching; None becomes an empty string."""
    return (text or "").lower()


def tokenize(text: Optional[str]) -> List[str]:
    """Split normalized text on runs of non-alphanumeric ASCII characters."""
    return [token for token in _TOKEN_SEPARATOR.split(normalize(text)) if token]


def extract_keywords(
    query: Optional[str],
    min_length: int = MIN_KEYWORD_LENGTH,
    max_keywords: int = MAX_KEYWORDS
) -> List[str]:
    """
    Extract query keywords in their original order.

    Repeated words are kept, so each occurrence contributes to scoring
    on its own.

    Args:
        query: Raw user question
        min_length: Shortest token kept
        max_keywords: Maximum number of keywords returned

    Returns:
        Up to max_keywords tokens of at least min_length characters
    """
    keywords = [token for token in tokenize(query) if len(token) >= min_length]
    return keywords[:max_keywords]


def keyword_pattern(keyword: str) -> re.Pattern:
    """Compile a whole-word pattern for a keyword (ASCII word boundaries)."""
    return re.compile(rf"\b{re.escape(keyword)}\b", re.ASCII)


def count_occurrences(pattern: re.Pattern, text: str) -> int:
    """Count non-overlapping matches of pattern in text."""
    return sum(1 for _ in pattern.finditer(text))
