"""
Okapi BM25 scorer over a small in-memory corpus.

BM25 (Best Match 25) is a probabilistic ranking function used for information retrieval.

Formula:
    score(q, d) = Σ over distinct query terms t present in d:
        IDF(t) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl))

    IDF(t) = max(0, ln((N - df(t) + 0.5) / (df(t) + 0.5) + 1))

Where:
    tf = term frequency in document
    df = number of documents containing the term
    N = number of documents in the corpus
    k1 = term frequency saturation parameter (default: 1.2)
    b = length normalization parameter (default: 0.75)
    dl = document length (number of indexed tokens)
    avgdl = average document length across the corpus
"""

import math
from typing import Iterable

from .corpus import Corpus, Document

DEFAULT_K1 = 1.2
DEFAULT_B = 0.75


class BM25Scorer:
    """
    BM25 scoring against corpus-wide IDF statistics.

    Query terms missing from a document contribute nothing (no penalty),
    so scores are always finite and non-negative.
    """

    def __init__(self, corpus: Corpus, k1: float = DEFAULT_K1, b: float = DEFAULT_B):
        """
        Initialize BM25 scorer.

        Args:
            corpus: Documents providing N, df(t) and avgdl

            k1: Term frequency saturation parameter
                Higher = more weight to term frequency
                Default: 1.2 (standard)

            b: Length normalization parameter
                0.0 = no length normalization, 1.0 = full normalization
                Default: 0.75 (standard)
        """
        self.corpus = corpus
        self.k1 = k1
        self.b = b

    def idf(self, term: str) -> float:
        """Robertson-Sparck Jones IDF with +1 smoothing, floored at 0."""
        n = self.corpus.n
        df = self.corpus.doc_freq(term)
        value = math.log((n - df + 0.5) / (df + 0.5) + 1.0)
        return max(0.0, value)

    def _length_norm(self, doc: Document) -> float:
        return 1.0 - self.b + self.b * doc.length / self.corpus.avgdl

    def score_term(self, term: str, doc: Document) -> float:
        """BM25 contribution of one query term to one document."""
        tf = doc.term_freq.get(term)
        if tf == 0:
            return 0.0

        numerator = tf * (self.k1 + 1.0)
        denominator = tf + self.k1 * self._length_norm(doc)
        return self.idf(term) * numerator / denominator

    def score(self, query_terms: Iterable[str], doc: Document) -> float:
        """
        Compute BM25 score for a document given query terms.

        Args:
            query_terms: Tokenized query (stems); order and repeats are ignored
            doc: Indexed document from this scorer's corpus

        Returns:
            BM25 score (higher = more relevant), 0.0 for an empty query
        """
        score = 0.0
        # dict.fromkeys keeps first-seen order so float summation is reproducible
        for term in dict.fromkeys(query_terms):
            score += self.score_term(term, doc)
        return score
