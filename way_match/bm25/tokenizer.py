"""
Tokenizer for BM25 text processing.

Tokenization pipeline:
1. Extract maximal runs of ASCII letters (digits, hyphens, punctuation split)
2. Lowercase conversion
3. Filter short words (< 3 chars) and stopwords, before stemming
4. Apply stemming (reduce to root form: "architectures" → "architectur")
5. Filter stems that ended up shorter than 3 chars

Both the word buffer and the output are bounded: letters past
max_token_length are dropped from a word, and once max_tokens tokens have
been produced the rest of the text is ignored.
"""

import re
from typing import Iterator, List, NamedTuple

from .stemmer import Stemmer

MAX_TOKENS = 4096
MAX_TOKEN_LENGTH = 127
MIN_TOKEN_LENGTH = 3

# Common English function words that don't help with ranking
STOPWORDS = frozenset([
    'the', 'a', 'an', 'is', 'are', 'was', 'were', 'be', 'been', 'being',
    'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would', 'could',
    'should', 'may', 'might', 'must', 'shall', 'can', 'this', 'that',
    'these', 'those', 'it', 'its', 'what', 'how', 'why', 'when', 'where',
    'who', 'let', 'lets', 'just', 'to', 'for', 'of', 'in', 'on', 'at',
    'by', 'and', 'or', 'but', 'not', 'with', 'from', 'into', 'about',
    'than', 'then', 'so', 'if', 'up', 'out', 'no', 'yes', 'all', 'some',
    'any', 'each', 'my', 'your', 'our', 'me', 'we', 'you', 'i',
])

_WORD_PATTERN = re.compile(r'[A-Za-z]+')


class TokenPair(NamedTuple):
    """Stem alongside the lowercased word it came from."""

    stem: str
    original: str


def _scan(
    text: str,
    stemmer: Stemmer,
    max_tokens: int,
    max_token_length: int,
) -> Iterator[TokenPair]:
    if not text or max_tokens <= 0:
        return

    produced = 0
    for match in _WORD_PATTERN.finditer(text):
        word = match.group(0)[:max_token_length].lower()

        if len(word) < MIN_TOKEN_LENGTH or word in STOPWORDS:
            continue

        stemmed = stemmer.stem(word)
        if len(stemmed) < MIN_TOKEN_LENGTH:
            continue

        yield TokenPair(stemmed, word)
        produced += 1
        if produced >= max_tokens:
            return


def tokenize(
    text: str,
    stemmer: Stemmer,
    max_tokens: int = MAX_TOKENS,
    max_token_length: int = MAX_TOKEN_LENGTH,
) -> List[str]:
    """
    Tokenize text for BM25 scoring with stopword removal and stemming.

    Args:
        text: Input text to tokenize
        stemmer: Owned Snowball stemmer instance
        max_tokens: Maximum number of tokens returned
        max_token_length: Maximum letters kept per word

    Returns:
        List of stems, in text order, repeats included

    Examples:
        >>> tokenize("Kubernetes deployment strategies!", stemmer)
        ['kubernet', 'deploy', 'strategi']

        >>> tokenize("the quick fox", stemmer)
        ['quick', 'fox']

        >>> tokenize("   ", stemmer)
        []
    """
    return [pair.stem for pair in _scan(text, stemmer, max_tokens, max_token_length)]


def tokenize_pairs(
    text: str,
    stemmer: Stemmer,
    max_tokens: int = MAX_TOKENS,
    max_token_length: int = MAX_TOKEN_LENGTH,
) -> List[TokenPair]:
    """
    Tokenize text keeping each stem's lowercased surface form.

    Same filtering as tokenize(); used where readable words are reported
    back to the user (vocabulary suggestions).

    Examples:
        >>> tokenize_pairs("Deploying services", stemmer)
        [TokenPair(stem='deploy', original='deploying'), TokenPair(stem='servic', original='services')]
    """
    return list(_scan(text, stemmer, max_tokens, max_token_length))
