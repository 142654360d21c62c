"""
BM25 index builder - term frequencies for a single document.

A TermFrequencyMap is built once when a document is indexed and never
changes afterwards; rescoring against other queries or corpora reuses it.
"""

import logging
from collections import Counter
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .stemmer import Stemmer
from .tokenizer import MAX_TOKENS, MAX_TOKEN_LENGTH, tokenize

logger = logging.getLogger(__name__)


class TermFrequencyMap:
    """
    Read-only stem → count mapping plus document length.

    total_tokens counts every indexed token occurrence (repeats included)
    and is the document length used for BM25 normalization.
    """

    __slots__ = ("_counts", "total_tokens")

    def __init__(self, counts: Mapping[str, int], total_tokens: int):
        self._counts = MappingProxyType(dict(counts))
        self.total_tokens = total_tokens

    def get(self, term: str) -> int:
        """Occurrence count of term; 0 when absent."""
        return self._counts.get(term, 0)

    @property
    def terms(self) -> Mapping[str, int]:
        return self._counts

    def __contains__(self, term: object) -> bool:
        return term in self._counts

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"TermFrequencyMap({dict(self._counts)!r}, total_tokens={self.total_tokens})"


def build_term_frequencies(tokens: Iterable[str]) -> TermFrequencyMap:
    """
    Build a term frequency map from a token sequence.

    Args:
        tokens: Stems as produced by tokenize()

    Returns:
        TermFrequencyMap with exact counts and total token count

    Example:
        >>> tf = build_term_frequencies(["pod", "deploy", "pod"])
        >>> tf.get("pod"), tf.get("missing"), tf.total_tokens
        (2, 0, 3)
    """
    token_list = list(tokens)
    counts = Counter(token_list)
    return TermFrequencyMap(counts, total_tokens=len(token_list))


def index_text(
    text: str,
    stemmer: Stemmer,
    max_tokens: int = MAX_TOKENS,
    max_token_length: int = MAX_TOKEN_LENGTH,
) -> TermFrequencyMap:
    """Tokenize text and build its term frequency map."""
    tf = build_term_frequencies(tokenize(text, stemmer, max_tokens, max_token_length))
    logger.debug(f"Indexed {tf.total_tokens} tokens ({len(tf)} unique terms)")
    return tf
