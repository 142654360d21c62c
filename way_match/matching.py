"""
Ranking modes built on the BM25 scorer.

pair:  score one description + vocabulary against a query, using the
       built-in ways as background corpus for IDF statistics
score: rank every way in a loaded corpus against a query

Both return result objects with a status; mapping statuses to exit codes is
left to the caller.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .bm25 import BM25Scorer, Corpus, Document, Stemmer, tokenize
from .config import MatchSettings

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 56
TARGET_ID = "target"

# Reference ways for pair mode: enough documents for meaningful IDF
# without requiring a corpus file.
BUILTIN_WAYS: Tuple[Tuple[str, str, str], ...] = (
    ("testing",
     "writing unit tests, test coverage, mocking dependencies, test-driven development",
     "unittest coverage mock tdd assertion jest pytest rspec testcase spec fixture describe expect verify"),
    ("api",
     "designing REST APIs, HTTP endpoints, API versioning, request response structure",
     "endpoint api rest route http status pagination versioning graphql request response header payload crud webhook"),
    ("debugging",
     "debugging code issues, troubleshooting errors, investigating broken behavior, fixing bugs",
     "debug breakpoint stacktrace investigate troubleshoot regression bisect crash error fail bug log trace exception segfault hang timeout"),
    ("security",
     "application security, authentication, secrets management, input validation, vulnerability prevention",
     "authentication secrets password credentials owasp injection xss sql sanitize vulnerability bcrypt hash encrypt token cert ssl tls csrf cors rotate login expose"),
    ("design",
     "software system design architecture patterns database schema component modeling",
     "architecture pattern database schema modeling interface component modules factory observer strategy monolith microservice domain layer coupling cohesion abstraction singleton"),
    ("config",
     "application configuration, environment variables, dotenv files, config file management",
     "dotenv environment configuration envvar config.json config.yaml connection port host url setting variable"),
    ("adr-context",
     "planning how to implement a feature, deciding an approach, understanding existing project decisions, "
     "starting work on an item, investigating why something was built a certain way",
     "plan approach debate implement build work pick understand investigate why how decision context tradeoff evaluate option consider scope"),
)


class MatchStatus(str, Enum):
    """Outcome of a ranking command"""

    MATCH = "match"
    NO_MATCH = "no_match"
    EMPTY_CORPUS = "empty_corpus"


@dataclass
class PairResult:
    """Pair mode outcome for the target way"""
    target_id: str
    score: float
    threshold: float

    @property
    def matched(self) -> bool:
        return self.score >= self.threshold

    @property
    def status(self) -> MatchStatus:
        return MatchStatus.MATCH if self.matched else MatchStatus.NO_MATCH

    def diagnostic(self) -> str:
        return f"match: score={self.score:.4f} threshold={self.threshold:.4f}"


@dataclass
class RankedRow:
    """One way that cleared its threshold"""
    id: str
    score: float
    description: str

    @property
    def snippet(self) -> str:
        if len(self.description) > SNIPPET_LENGTH:
            return self.description[:SNIPPET_LENGTH] + "..."
        return self.description

    def format(self) -> str:
        return f"{self.id}\t{self.score:.4f}\t{self.snippet}"


@dataclass
class ScoreResult:
    """Score mode outcome: qualifying rows, best first"""
    rows: List[RankedRow] = field(default_factory=list)
    scored: int = 0

    @property
    def status(self) -> MatchStatus:
        if self.scored == 0:
            return MatchStatus.EMPTY_CORPUS
        return MatchStatus.MATCH if self.rows else MatchStatus.NO_MATCH


def build_builtin_corpus(stemmer: Stemmer, settings: Optional[MatchSettings] = None) -> Corpus:
    """Index the built-in reference ways."""
    settings = settings or MatchSettings()
    documents = [
        Document.index(
            way_id,
            description,
            vocabulary,
            stemmer=stemmer,
            max_tokens=settings.max_tokens,
            max_token_length=settings.max_token_length,
        )
        for way_id, description, vocabulary in BUILTIN_WAYS
    ]
    return Corpus(documents, max_documents=settings.max_documents)


def match_pair(
    description: str,
    vocabulary: str,
    query: str,
    stemmer: Stemmer,
    settings: Optional[MatchSettings] = None,
) -> PairResult:
    """
    Score a single way against a query.

    The target joins the built-in ways unless one of them has exactly the
    same description, in which case that built-in document is scored.

    Args:
        description: Way description text
        vocabulary: Space-separated domain keywords (may be empty)
        query: User prompt
        stemmer: Owned stemmer instance
        settings: k1, b, threshold and bounds

    Returns:
        PairResult; matched when score >= threshold
    """
    settings = settings or MatchSettings()
    corpus = build_builtin_corpus(stemmer, settings)

    target = corpus.find_by_description(description)
    if target is None:
        target = Document.index(
            TARGET_ID,
            description,
            vocabulary,
            stemmer=stemmer,
            max_tokens=settings.max_tokens,
            max_token_length=settings.max_token_length,
        )
        if not corpus.add(target):
            # Corpus bound reached: score against the built-ins only
            logger.warning("Corpus full, scoring target without adding it to IDF statistics")
    else:
        logger.debug(f"Target description matches built-in way '{target.id}'")

    query_terms = tokenize(query, stemmer, settings.max_tokens, settings.max_token_length)
    scorer = BM25Scorer(corpus, k1=settings.k1, b=settings.b)
    score = scorer.score(query_terms, target)

    logger.debug(f"Pair: {len(query_terms)} query terms, N={corpus.n}, avgdl={corpus.avgdl:.2f}")
    return PairResult(target_id=target.id, score=score, threshold=settings.threshold)


def _sort_key(item: Tuple[int, Document, float]):
    position, doc, score = item
    return (-score, doc.id, position)


def rank_corpus(
    corpus: Corpus,
    query: str,
    stemmer: Stemmer,
    settings: Optional[MatchSettings] = None,
) -> ScoreResult:
    """
    Rank every way in a corpus against a query.

    Sorted by score descending, then id ascending, then load order. A row
    is kept when its score reaches the way's own threshold, or the global
    threshold when the way has none.

    Args:
        corpus: Indexed ways
        query: User prompt
        stemmer: Owned stemmer instance
        settings: k1, b, global threshold and bounds

    Returns:
        ScoreResult with qualifying rows
    """
    settings = settings or MatchSettings()
    if len(corpus) == 0:
        return ScoreResult()

    query_terms = tokenize(query, stemmer, settings.max_tokens, settings.max_token_length)
    scorer = BM25Scorer(corpus, k1=settings.k1, b=settings.b)

    scored = [(position, doc, scorer.score(query_terms, doc)) for position, doc in enumerate(corpus)]
    scored.sort(key=_sort_key)

    rows: List[RankedRow] = []
    for _, doc, score in scored:
        threshold = doc.threshold if doc.threshold is not None and doc.threshold > 0 else settings.threshold
        if score >= threshold:
            rows.append(RankedRow(id=doc.id, score=score, description=doc.description))

    logger.info(f"Scored {len(scored)} ways, {len(rows)} above threshold")
    return ScoreResult(rows=rows, scored=len(scored))
