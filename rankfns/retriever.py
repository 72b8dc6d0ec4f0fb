#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Top-k retrieval built from the scoring kernels.

``Retriever`` is the capability a ranking adapter exposes: given the
statistics of a query's terms and a corpus, return the k best
(doc_id, score) pairs in descending score order.  Document storage and
iteration belong to the corpus, which is supplied by the caller (an
inverted index, a database cursor, or ``InMemoryCorpus`` for small
collections).

Ties are broken by the order in which the corpus yields documents, so the
output is deterministic for a deterministic corpus.
"""

from __future__ import annotations

import heapq
import logging
from collections import Counter
from dataclasses import dataclass, field
from operator import itemgetter
from typing import Hashable, Iterable, Iterator, Mapping, Protocol, Sequence, runtime_checkable

import numpy as np

from rankfns.bm25 import bm25_score
from rankfns.params import DEFAULT_B, DEFAULT_K1, DEFAULT_TOP_K, BM25Params, check_k
from rankfns.smoothing import SmoothingMethod, collection_probability, lm_smoothed_p
from rankfns.tfidf import IdfVariant, TfVariant, _coerce, tfidf


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class DocumentStats:
    """Per-document statistics: length and term frequencies.

    Compared and hashed by identity, since ``term_freqs`` is a mutable
    mapping.
    """

    doc_id: Hashable
    doc_len: float
    term_freqs: Mapping[str, float] = field(default_factory=dict)

    @classmethod
    def from_tokens(cls, doc_id: Hashable, tokens: Sequence[str]) -> DocumentStats:
        return cls(doc_id=doc_id, doc_len=float(len(tokens)), term_freqs=Counter(tokens))


@dataclass(frozen=True)
class CorpusStats:
    """Corpus-level statistics shared by every document.

    Parameters
    ----------
    n_docs : int
        Number of documents (N).
    avg_doc_len : float
        Average document length.
    collection_len : float
        Total number of tokens in the collection.  Only needed by
        language-model scoring.
    """

    n_docs: int
    avg_doc_len: float
    collection_len: float = 0.0

    @classmethod
    def from_documents(cls, documents: Iterable[DocumentStats]) -> CorpusStats:
        n_docs = 0
        total = 0.0
        for doc in documents:
            n_docs += 1
            total += doc.doc_len
        avg = total / n_docs if n_docs else 0.0
        return cls(n_docs=n_docs, avg_doc_len=avg, collection_len=total)


@dataclass(frozen=True)
class TermStats:
    """Statistics of one query term.

    ``df`` is the number of documents containing the term,
    ``collection_tf`` its total number of occurrences in the collection
    and ``query_tf`` how often it occurs in the query.
    """

    term: str
    df: int
    collection_tf: float = 0.0
    query_tf: float = 1.0


@dataclass(frozen=True)
class QueryStats:
    """Statistics of every distinct term in a query."""

    terms: tuple[TermStats, ...] = ()

    def __iter__(self) -> Iterator[TermStats]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    @classmethod
    def from_documents(
        cls,
        query_terms: Iterable[str],
        documents: Iterable[DocumentStats],
    ) -> QueryStats:
        """Collect df and collection frequency for ``query_terms``.

        Repeated query terms are merged into a single entry whose
        ``query_tf`` counts the repetitions.
        """
        query_counts = Counter(query_terms)
        df = dict.fromkeys(query_counts, 0)
        cf = dict.fromkeys(query_counts, 0.0)
        for doc in documents:
            for term in query_counts:
                tf = doc.term_freqs.get(term, 0)
                if tf > 0:
                    df[term] += 1
                    cf[term] += tf
        return cls(
            terms=tuple(
                TermStats(term=t, df=df[t], collection_tf=cf[t], query_tf=float(q))
                for t, q in query_counts.items()
            )
        )


class Corpus(Protocol):
    """A source of documents together with their corpus statistics."""

    @property
    def stats(self) -> CorpusStats: ...

    def documents(self) -> Iterable[DocumentStats]: ...


class InMemoryCorpus:
    """Corpus over a list of ``DocumentStats`` held in memory.

    Statistics are computed once on construction.  Intended for small
    collections, tests and examples; large collections should come from
    an index that implements ``Corpus``.
    """

    def __init__(self, documents: Iterable[DocumentStats]) -> None:
        self._documents = list(documents)
        self._stats = CorpusStats.from_documents(self._documents)

    @classmethod
    def from_tokens(
        cls,
        corpus_tokens: Sequence[Sequence[str]],
        doc_ids: Sequence[Hashable] | None = None,
    ) -> InMemoryCorpus:
        """Build from tokenised documents; ids default to list positions."""
        if doc_ids is None:
            doc_ids = range(len(corpus_tokens))
        elif len(doc_ids) != len(corpus_tokens):
            raise ValueError(
                f"doc_ids has {len(doc_ids)} entries for "
                f"{len(corpus_tokens)} documents"
            )
        return cls(
            DocumentStats.from_tokens(doc_id, tokens)
            for doc_id, tokens in zip(doc_ids, corpus_tokens)
        )

    @property
    def stats(self) -> CorpusStats:
        return self._stats

    def documents(self) -> Iterator[DocumentStats]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def query(self, query_terms: Iterable[str]) -> QueryStats:
        """Term statistics for ``query_terms`` over this corpus."""
        return QueryStats.from_documents(query_terms, self._documents)


# ---------------------------------------------------------------------------
# Retriever capability
# ---------------------------------------------------------------------------

@runtime_checkable
class Retriever(Protocol):
    """Ranks the documents of a corpus for a query.

    ``rank`` returns at most ``k`` (doc_id, score) pairs sorted by
    descending score.  ``k`` is part of the adapter's configuration.
    """

    k: int

    def rank(self, query: QueryStats, corpus: Corpus) -> list[tuple[Hashable, float]]: ...


def top_k(
    scored: Iterable[tuple[Hashable, float]],
    k: int,
) -> list[tuple[Hashable, float]]:
    """The ``k`` highest-scoring pairs, descending; ties keep input order."""
    k = check_k(k)
    if k == 0:
        return []
    return heapq.nlargest(k, scored, key=itemgetter(1))


class _DocumentAtATimeRetriever:
    """Scores each document independently and keeps the top k.

    Subclasses implement ``score``; returning None leaves the document
    out of the ranking.  Kernel errors propagate to the caller.
    """

    def __init__(self, k: int = DEFAULT_TOP_K) -> None:
        self.k = check_k(k)

    def score(
        self, query: QueryStats, document: DocumentStats, stats: CorpusStats
    ) -> float | None:
        raise NotImplementedError

    def rank(self, query: QueryStats, corpus: Corpus) -> list[tuple[Hashable, float]]:
        stats = corpus.stats
        n_seen = 0
        n_scored = 0

        def _scored() -> Iterator[tuple[Hashable, float]]:
            nonlocal n_seen, n_scored
            for document in corpus.documents():
                n_seen += 1
                value = self.score(query, document, stats)
                if value is None:
                    continue
                n_scored += 1
                yield document.doc_id, value

        results = top_k(_scored(), self.k)
        logger.debug(
            "%s ranked %d/%d documents for %d query terms, returning %d",
            type(self).__name__, n_scored, n_seen, len(query), len(results),
        )
        return results


def _query_arrays(
    query: QueryStats, document: DocumentStats
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    tfs = np.array(
        [document.term_freqs.get(t.term, 0) for t in query], dtype=np.float64
    )
    dfs = np.array([t.df for t in query], dtype=np.float64)
    qtfs = np.array([t.query_tf for t in query], dtype=np.float64)
    return tfs, dfs, qtfs


class BM25Retriever(_DocumentAtATimeRetriever):
    """Okapi BM25 ranking with the non-negative (+1) IDF.

    Documents that contain none of the query terms are not returned.

    Parameters
    ----------
    k1 : float
        BM25 k1 parameter (term frequency saturation).
    b : float
        BM25 b parameter (document length normalisation).
    k : int
        Number of documents to return.
    """

    def __init__(
        self,
        k1: float = DEFAULT_K1,
        b: float = DEFAULT_B,
        k: int = DEFAULT_TOP_K,
    ) -> None:
        super().__init__(k)
        self.params = BM25Params(k1=k1, b=b)

    def score(
        self, query: QueryStats, document: DocumentStats, stats: CorpusStats
    ) -> float | None:
        tfs, dfs, qtfs = _query_arrays(query, document)
        if not np.any(tfs > 0.0):
            return None
        weights = bm25_score(
            tfs,
            document.doc_len,
            stats.avg_doc_len,
            stats.n_docs,
            dfs,
            self.params.k1,
            self.params.b,
        )
        return float(np.sum(qtfs * weights))


class TfIdfRetriever(_DocumentAtATimeRetriever):
    """Sum of TF-IDF weights over the query terms.

    Query terms absent from the corpus (df = 0) are skipped, since no
    document can match them.  Documents that contain none of the
    remaining terms are not returned.
    """

    def __init__(
        self,
        tf_variant: TfVariant | str = TfVariant.LOG,
        idf_variant: IdfVariant | str = IdfVariant.STANDARD,
        k: int = DEFAULT_TOP_K,
    ) -> None:
        super().__init__(k)
        self.tf_variant = _coerce(TfVariant, tf_variant)
        self.idf_variant = _coerce(IdfVariant, idf_variant)

    def score(
        self, query: QueryStats, document: DocumentStats, stats: CorpusStats
    ) -> float | None:
        tfs, dfs, qtfs = _query_arrays(query, document)
        known = dfs > 0.0
        tfs, dfs, qtfs = tfs[known], dfs[known], qtfs[known]
        if not np.any(tfs > 0.0):
            return None
        max_tf = max(document.term_freqs.values(), default=0.0)
        weights = tfidf(
            tfs,
            stats.n_docs,
            dfs,
            tf_variant=self.tf_variant,
            idf_variant=self.idf_variant,
            max_tf=max_tf,
        )
        return float(np.sum(qtfs * weights))


class QueryLikelihoodRetriever(_DocumentAtATimeRetriever):
    """Query-likelihood ranking: sum of log P(t|D) over the query terms.

    Scores are log-probabilities and therefore <= 0; higher is still
    better.  Query terms that never occur in the collection are skipped.
    A document whose smoothed probability is 0 for some term (possible
    with ``JelinekMercer(lam=0)``) cannot generate the query and is not
    returned.
    """

    def __init__(
        self,
        method: SmoothingMethod | None = None,
        k: int = DEFAULT_TOP_K,
    ) -> None:
        super().__init__(k)
        self.method = method

    def score(
        self, query: QueryStats, document: DocumentStats, stats: CorpusStats
    ) -> float | None:
        terms = [t for t in query if t.collection_tf > 0]
        if not terms:
            return None
        tfs = np.array(
            [document.term_freqs.get(t.term, 0) for t in terms], dtype=np.float64
        )
        qtfs = np.array([t.query_tf for t in terms], dtype=np.float64)
        p_corpus = collection_probability(
            np.array([t.collection_tf for t in terms], dtype=np.float64),
            stats.collection_len,
        )
        probs = np.asarray(
            lm_smoothed_p(tfs, document.doc_len, p_corpus, self.method),
            dtype=np.float64,
        )
        if np.any(probs <= 0.0):
            return None
        return float(np.sum(qtfs * np.log(probs)))
