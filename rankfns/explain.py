#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Explanations of BM25 scores.

Records every intermediate value of a document's BM25 score -- idf,
length ratio, length normalisation, saturated tf -- per query term, so
that the final score can be fully accounted for.  The total matches the
score ``BM25Retriever`` assigns to the same document.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from rankfns.bm25 import bm25_idf_plus1, bm25_tf
from rankfns.normalization import length_norm, length_ratio
from rankfns.params import BM25Params
from rankfns.retriever import CorpusStats, DocumentStats, QueryStats, _query_arrays


@dataclass
class BM25TermTrace:
    """Trace of one query term's contribution to a BM25 score."""

    # Input
    term: str
    tf: float
    df: int
    query_tf: float

    # Intermediate
    idf: float
    length_ratio: float
    length_norm: float
    tf_weight: float

    # Output
    score: float


@dataclass
class BM25Explanation:
    """Complete trace of a document's BM25 score."""

    doc_id: object
    doc_len: float
    avg_doc_len: float
    n_docs: int
    k1: float
    b: float
    terms: list[BM25TermTrace] = field(default_factory=list)
    total: float = 0.0

    @property
    def matched_terms(self) -> list[str]:
        return [t.term for t in self.terms if t.tf > 0]


def explain_bm25(
    query: QueryStats,
    document: DocumentStats,
    corpus_stats: CorpusStats,
    params: BM25Params | None = None,
) -> BM25Explanation:
    """Break a document's BM25 score down by query term."""
    if params is None:
        params = BM25Params()

    ratio = length_ratio(document.doc_len, corpus_stats.avg_doc_len)
    norm = length_norm(document.doc_len, corpus_stats.avg_doc_len, params.b)

    # Same array arithmetic as BM25Retriever.score, so the totals agree exactly.
    tfs, dfs, qtfs = _query_arrays(query, document)
    idf = np.asarray(bm25_idf_plus1(corpus_stats.n_docs, dfs), dtype=np.float64)
    tf_weight = np.asarray(
        bm25_tf(tfs, document.doc_len, corpus_stats.avg_doc_len, params.k1, params.b),
        dtype=np.float64,
    )
    scores = qtfs * (idf * tf_weight)

    traces = [
        BM25TermTrace(
            term=term.term,
            tf=float(tfs[i]),
            df=term.df,
            query_tf=term.query_tf,
            idf=float(idf[i]),
            length_ratio=ratio,
            length_norm=norm,
            tf_weight=float(tf_weight[i]),
            score=float(scores[i]),
        )
        for i, term in enumerate(query)
    ]

    total = float(np.sum(scores)) if traces else 0.0
    return BM25Explanation(
        doc_id=document.doc_id,
        doc_len=document.doc_len,
        avg_doc_len=corpus_stats.avg_doc_len,
        n_docs=corpus_stats.n_docs,
        k1=params.k1,
        b=params.b,
        terms=traces,
        total=total,
    )


def format_explanation(explanation: BM25Explanation) -> str:
    """Format an explanation as human-readable text."""
    e = explanation
    lines = [
        f"Document {e.doc_id!r}: BM25 = {e.total:.4f}",
        f"  k1={e.k1:g}, b={e.b:g}, N={e.n_docs},"
        f" doc_len={e.doc_len:g}, avg_doc_len={e.avg_doc_len:.2f}",
    ]
    for t in e.terms:
        if t.tf <= 0:
            lines.append(f"  [{t.term}] not in document")
            continue
        lines.extend([
            f"  [{t.term}]",
            f"    idf = ln(1 + ({e.n_docs} - {t.df} + 0.5) / ({t.df} + 0.5))"
            f" = {t.idf:.4f}",
            f"    norm = 1 - b + b * {t.length_ratio:.3f} = {t.length_norm:.4f}",
            f"    tf = {t.tf:g} * {e.k1 + 1:g} / ({t.tf:g} + {e.k1:g} * {t.length_norm:.4f})"
            f" = {t.tf_weight:.4f}",
            f"    score = {t.query_tf:g} * {t.idf:.4f} * {t.tf_weight:.4f}"
            f" = {t.score:.4f}",
        ])
    return "\n".join(lines)
