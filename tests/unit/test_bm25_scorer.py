"""
Unit tests for the BM25 scorer.
"""

import math

import pytest
from way_match.bm25.corpus import Corpus, Document
from way_match.bm25.index_builder import build_term_frequencies
from way_match.bm25.scorer import BM25Scorer


def make_doc(doc_id, tokens):
    return Document(id=doc_id, description=doc_id, vocabulary="", term_freq=build_term_frequencies(tokens))


@pytest.fixture
def corpus():
    return Corpus([
        make_doc("k8s", ["kubernet", "kubernet", "pod"]),
        make_doc("deploy", ["deploy"]),
    ])


class TestBM25Scorer:
    """Test BM25 scoring logic"""

    def test_formula(self, corpus):
        """Score matches the BM25 formula computed by hand"""
        scorer = BM25Scorer(corpus, k1=1.2, b=0.75)
        doc = corpus.documents[0]

        # N=2, df=1, dl=3, avgdl=2
        idf = math.log((2 - 1 + 0.5) / (1 + 0.5) + 1)
        norm = 1 - 0.75 + 0.75 * 3 / 2
        expected = idf * (2 * 2.2) / (2 + 1.2 * norm)

        assert scorer.idf("kubernet") == pytest.approx(idf)
        assert scorer.score(["kubernet"], doc) == pytest.approx(expected)

    def test_sum_over_terms(self, corpus):
        """Score is the sum of per-term contributions"""
        scorer = BM25Scorer(corpus)
        doc = corpus.documents[0]
        total = scorer.score(["kubernet", "pod"], doc)
        assert total == pytest.approx(scorer.score_term("kubernet", doc) + scorer.score_term("pod", doc))

    def test_zero_score_no_matches(self, corpus):
        """Query terms absent from the document contribute nothing"""
        scorer = BM25Scorer(corpus)
        assert scorer.score(["deploy", "nonexist"], corpus.documents[0]) == 0.0

    def test_absent_terms_no_penalty(self, corpus):
        """Adding unmatched terms to the query does not lower the score"""
        scorer = BM25Scorer(corpus)
        doc = corpus.documents[0]
        assert scorer.score(["kubernet", "nonexist"], doc) == scorer.score(["kubernet"], doc)

    def test_empty_query(self, corpus):
        """Empty query scores 0 for every document"""
        scorer = BM25Scorer(corpus)
        for doc in corpus:
            assert scorer.score([], doc) == 0.0

    def test_duplicate_query_terms_count_once(self, corpus):
        """Score sums over distinct query terms"""
        scorer = BM25Scorer(corpus)
        doc = corpus.documents[0]
        assert scorer.score(["kubernet", "kubernet"], doc) == scorer.score(["kubernet"], doc)

    def test_query_order_irrelevant(self, corpus):
        """Query term order does not change the score"""
        scorer = BM25Scorer(corpus)
        doc = corpus.documents[0]
        assert scorer.score(["kubernet", "pod"], doc) == pytest.approx(scorer.score(["pod", "kubernet"], doc))

    def test_idf_never_negative(self):
        """IDF stays >= 0 even for terms in every document"""
        corpus = Corpus([make_doc(str(i), ["pod"]) for i in range(5)])
        scorer = BM25Scorer(corpus)
        assert scorer.idf("pod") >= 0.0
        assert scorer.idf("missing") >= 0.0
        for doc in corpus:
            assert scorer.score(["pod"], doc) >= 0.0

    def test_deterministic(self, corpus):
        """Same corpus, query and parameters give the identical score"""
        doc = corpus.documents[0]
        first = BM25Scorer(corpus).score(["kubernet", "pod"], doc)
        second = BM25Scorer(corpus).score(["kubernet", "pod"], doc)
        assert first == second

    def test_monotonic_in_term_frequency(self):
        """Raising a query term's frequency never lowers the score"""
        previous = 0.0
        for tf in range(1, 8):
            doc = make_doc("target", ["kubernet"] * tf + ["filler"] * 3)
            corpus = Corpus([doc, make_doc("other", ["deploy", "filler"])])
            current = BM25Scorer(corpus).score(["kubernet"], doc)
            assert current >= previous
            previous = current

    def test_term_frequency_saturation(self):
        """High TF scores higher, but far from proportionally"""
        low = make_doc("low", ["kubernet"] + ["filler"] * 99)
        high = make_doc("high", ["kubernet"] * 100)
        corpus = Corpus([low, high, make_doc("other", ["deploy"])])
        scorer = BM25Scorer(corpus, k1=1.2, b=0.0)
        assert scorer.score(["kubernet"], high) > scorer.score(["kubernet"], low)
        assert scorer.score(["kubernet"], high) < scorer.score(["kubernet"], low) * 10

    def test_length_normalization(self):
        """With b > 0 longer-than-average documents are penalized"""
        short = make_doc("short", ["kubernet", "pod"])
        long = make_doc("long", ["kubernet"] + ["filler"] * 9)
        corpus = Corpus([short, long])
        scorer = BM25Scorer(corpus, b=0.75)
        assert scorer.score(["kubernet"], short) > scorer.score(["kubernet"], long)

    def test_no_length_normalization_when_b_zero(self):
        """With b = 0 document length does not matter"""
        short = make_doc("short", ["kubernet", "pod"])
        long = make_doc("long", ["kubernet"] + ["filler"] * 9)
        corpus = Corpus([short, long])
        scorer = BM25Scorer(corpus, b=0.0)
        assert scorer.score(["kubernet"], short) == scorer.score(["kubernet"], long)

    def test_empty_document(self):
        """Document without tokens scores 0"""
        empty = make_doc("empty", [])
        corpus = Corpus([empty])
        assert BM25Scorer(corpus).score(["kubernet"], empty) == 0.0
