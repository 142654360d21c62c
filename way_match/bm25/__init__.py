"""
BM25 (Best Match 25) ranking for way matching.

Components:
- stemmer: Owned Snowball (Porter2) English stemmer
- tokenizer: Text tokenization for term extraction
- index_builder: Per-document term frequency maps
- corpus: Documents plus N, df(t) and avgdl statistics
- scorer: Okapi BM25 with floored IDF
"""

from .stemmer import Stemmer
from .tokenizer import STOPWORDS, TokenPair, tokenize, tokenize_pairs
from .index_builder import TermFrequencyMap, build_term_frequencies, index_text
from .corpus import Corpus, Document
from .scorer import BM25Scorer

__all__ = [
    "Stemmer",
    "STOPWORDS",
    "TokenPair",
    "tokenize",
    "tokenize_pairs",
    "TermFrequencyMap",
    "build_term_frequencies",
    "index_text",
    "Corpus",
    "Document",
    "BM25Scorer",
]
