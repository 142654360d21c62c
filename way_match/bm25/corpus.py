"""Documents and the corpus statistics BM25 needs (N, df, avgdl)."""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .index_builder import TermFrequencyMap, index_text
from .stemmer import Stemmer
from .tokenizer import MAX_TOKENS, MAX_TOKEN_LENGTH

logger = logging.getLogger(__name__)

MAX_DOCUMENTS = 256


@dataclass(frozen=True)
class Document:
    """
    A way indexed for BM25.

    term_freq is built from "description vocabulary" when the document is
    created and never changes afterwards.
    """

    id: str
    description: str
    vocabulary: str
    term_freq: TermFrequencyMap
    threshold: Optional[float] = None

    @classmethod
    def index(
        cls,
        doc_id: str,
        description: str,
        vocabulary: str = "",
        stemmer: Optional[Stemmer] = None,
        threshold: Optional[float] = None,
        max_tokens: int = MAX_TOKENS,
        max_token_length: int = MAX_TOKEN_LENGTH,
    ) -> "Document":
        """Tokenize description and vocabulary together and build the document."""
        if stemmer is None:
            raise ValueError("A stemmer is required to index a document")
        combined = f"{description} {vocabulary}"
        term_freq = index_text(combined, stemmer, max_tokens, max_token_length)
        return cls(
            id=doc_id,
            description=description,
            vocabulary=vocabulary,
            term_freq=term_freq,
            threshold=threshold,
        )

    @property
    def length(self) -> int:
        return self.term_freq.total_tokens


class Corpus:
    """
    Ordered collection of documents with aggregate statistics.

    avgdl is recomputed on every membership change and is 1.0 when the
    corpus holds no tokens, so length normalization never divides by zero.

    doc_freq() scans every document. That is fine for a few hundred ways;
    larger corpora would want an inverted index built once per load.
    """

    def __init__(self, documents: Iterable[Document] = (), max_documents: int = MAX_DOCUMENTS):
        self.max_documents = max_documents
        self._documents: List[Document] = []
        self.avgdl = 1.0
        self.extend(documents)

    @property
    def n(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> List[Document]:
        return list(self._documents)

    def add(self, document: Document) -> bool:
        """Append a document; returns False when the corpus is full."""
        if not self._append(document):
            return False
        self._recompute_avgdl()
        return True

    def extend(self, documents: Iterable[Document]) -> int:
        """Append documents until the corpus is full; returns how many were added."""
        added = 0
        for document in documents:
            if not self._append(document):
                break
            added += 1
        self._recompute_avgdl()
        return added

    def _append(self, document: Document) -> bool:
        if len(self._documents) >= self.max_documents:
            logger.debug(f"Corpus full ({self.max_documents} documents), dropping '{document.id}'")
            return False
        self._documents.append(document)
        return True

    def _recompute_avgdl(self) -> None:
        total = sum(doc.length for doc in self._documents)
        # Guard against division by zero for empty corpora or empty documents
        self.avgdl = total / len(self._documents) if total > 0 else 1.0

    def doc_freq(self, term: str) -> int:
        """Number of documents containing term at least once."""
        return sum(1 for doc in self._documents if doc.term_freq.get(term) > 0)

    def find_by_description(self, description: str) -> Optional[Document]:
        """First document whose description matches exactly."""
        for doc in self._documents:
            if doc.description == description:
                return doc
        return None

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)
