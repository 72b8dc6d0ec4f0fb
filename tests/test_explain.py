#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Tests for rankfns.explain module."""

import pytest

from rankfns.bm25 import bm25_idf_plus1, bm25_tf
from rankfns.explain import BM25Explanation, explain_bm25, format_explanation
from rankfns.params import BM25Params
from rankfns.retriever import BM25Retriever, CorpusStats, DocumentStats, InMemoryCorpus, QueryStats, TermStats


@pytest.fixture
def corpus():
    return InMemoryCorpus.from_tokens([
        ["the", "cat", "sat", "on", "the", "mat"],
        ["the", "dog", "chased", "the", "cat"],
        ["hello", "world"],
    ])


@pytest.fixture
def scenario():
    """N=1000, df=10, tf=3, doc_len=120, avg_doc_len=100."""
    query = QueryStats((TermStats("rust", df=10),))
    document = DocumentStats("d", 120.0, {"rust": 3})
    stats = CorpusStats(n_docs=1000, avg_doc_len=100.0)
    return query, document, stats


class TestExplainBM25:
    def test_intermediate_values(self, scenario):
        query, document, stats = scenario
        e = explain_bm25(query, document, stats, BM25Params(k1=1.2, b=0.75))
        assert isinstance(e, BM25Explanation)
        (t,) = e.terms
        assert t.tf == 3.0
        assert t.idf == pytest.approx(bm25_idf_plus1(1000, 10))
        assert t.length_ratio == pytest.approx(1.2)
        assert t.length_norm == pytest.approx(1.15)
        assert t.tf_weight == pytest.approx(bm25_tf(3.0, 120.0, 100.0, 1.2, 0.75))
        assert t.score == pytest.approx(t.idf * t.tf_weight)
        assert e.total == pytest.approx(6.87, abs=0.01)

    def test_total_matches_retriever(self, corpus):
        query = corpus.query(["the", "cat", "unicorn"])
        retriever = BM25Retriever(k1=1.2, b=0.75)
        ranked = dict(retriever.rank(query, corpus))
        for document in corpus.documents():
            if document.doc_id not in ranked:
                continue
            e = explain_bm25(query, document, corpus.stats, retriever.params)
            assert e.total == ranked[document.doc_id]

    def test_total_matches_retriever_with_repeated_terms(self):
        """Query term weights are applied in the same order as the retriever."""
        corpus = InMemoryCorpus.from_tokens([
            ["a", "b", "c", "a"],
            ["a", "c", "c", "d", "e", "f", "a"],
            ["b", "d", "e"],
            ["a", "f", "f", "c", "b", "e", "d", "a", "c"],
        ])
        query = corpus.query(["a"] * 5 + ["c"] * 3)
        retriever = BM25Retriever(k1=1.2, b=0.75)
        ranked = dict(retriever.rank(query, corpus))
        assert set(ranked) == {0, 1, 3}
        for document in corpus.documents():
            if document.doc_id in ranked:
                e = explain_bm25(query, document, corpus.stats, retriever.params)
                assert e.total == ranked[document.doc_id]
                assert e.total == pytest.approx(sum(t.score for t in e.terms))

    def test_non_matching_document_scores_zero(self, corpus):
        query = corpus.query(["cat"])
        document = list(corpus.documents())[2]
        e = explain_bm25(query, document, corpus.stats)
        assert e.total == 0.0
        assert e.matched_terms == []

    def test_matched_terms(self, corpus):
        query = corpus.query(["cat", "unicorn"])
        document = next(iter(corpus.documents()))
        e = explain_bm25(query, document, corpus.stats)
        assert e.matched_terms == ["cat"]

    def test_default_params(self, scenario):
        query, document, stats = scenario
        e = explain_bm25(query, document, stats)
        assert (e.k1, e.b) == (1.2, 0.75)


class TestFormatExplanation:
    def test_contains_terms_and_total(self, scenario):
        query, document, stats = scenario
        text = format_explanation(explain_bm25(query, document, stats))
        assert "Document 'd': BM25 = 6.8" in text
        assert "[rust]" in text
        assert "idf = ln(1 + (1000 - 10 + 0.5) / (10 + 0.5)) = 4.5574" in text

    def test_missing_term(self, corpus):
        query = corpus.query(["unicorn"])
        document = next(iter(corpus.documents()))
        text = format_explanation(explain_bm25(query, document, corpus.stats))
        assert "[unicorn] not in document" in text
