"""
Snowball Stemmer for English (via NLTK).

Uses the Snowball stemming algorithm (improved Porter2 stemmer):
https://snowballstem.org/

The stemmer is an owned resource: the entry point creates one instance,
passes it into every tokenization call and closes it on exit. Workers that
tokenize concurrently must each own their own instance.

Examples:
- "strategies" → "strategi"
- "deployment" → "deploy"
- "running" → "run"
"""

import logging
from typing import Optional

from nltk.stem.snowball import SnowballStemmer

logger = logging.getLogger(__name__)

# Matches the tokenizer's word buffer (127 letters + terminator)
DEFAULT_CAPACITY = 128


class Stemmer:
    """
    Porter2 English stemmer with an explicit lifecycle.

    Usage:
        >>> with Stemmer() as stemmer:
        ...     stemmer.stem("searching")
        'search'

    After close() the instance is released and stem() passes words through
    unchanged. Short words (< 3 chars) are never stemmed.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        """
        Args:
            capacity: Word buffer size; stems that would not fit
                (len >= capacity) are discarded and the input kept
        """
        self.capacity = capacity
        self._stemmer: Optional[SnowballStemmer] = SnowballStemmer("english")
        logger.debug("Snowball English stemmer created")

    @property
    def available(self) -> bool:
        return self._stemmer is not None

    def stem(self, word: str) -> str:
        """
        Stem a single lowercase word.

        Args:
            word: Lowercase word to stem

        Returns:
            Stemmed word, or the input unchanged when the stemmer is closed,
            the word is shorter than 3 characters, or the stem does not fit
            the buffer capacity

        Examples:
            >>> stemmer.stem("architectures")
            'architectur'
            >>> stemmer.stem("run")
            'run'
        """
        if self._stemmer is None or len(word) < 3:
            return word

        stemmed = self._stemmer.stem(word)
        if 0 < len(stemmed) < self.capacity:
            return stemmed
        return word

    def close(self) -> None:
        """Release the underlying Snowball instance (idempotent)."""
        if self._stemmer is not None:
            self._stemmer = None
            logger.debug("Snowball English stemmer released")

    def __enter__(self) -> "Stemmer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
