#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""BM25 scoring kernels.

A BM25 term score is the product of an inverse document frequency weight
and a saturating, length-normalised term frequency:

    score(t, d) = idf(t) * tf(t, d) * (k1 + 1)
                  / (tf(t, d) + k1 * (1 - b + b * |d| / avgdl))

All functions operate on numpy arrays (vectorized) and scalars.
"""

from __future__ import annotations

import numpy as np

from rankfns.normalization import length_norm
from rankfns.params import DEFAULT_B, DEFAULT_K1, check_k1


def _clamped_df(
    n_docs: np.ndarray | int, df: np.ndarray | int
) -> tuple[np.ndarray, np.ndarray]:
    n = np.asarray(n_docs, dtype=np.float64)
    # df > n_docs is inconsistent input; clamp so the log argument stays valid.
    d = np.minimum(np.asarray(df, dtype=np.float64), n)
    return n, d


def bm25_idf(
    n_docs: np.ndarray | int,
    df: np.ndarray | int,
) -> np.ndarray | float:
    """Robertson-Sparck Jones IDF: ln((N - df + 0.5) / (df + 0.5)).

    Negative for terms occurring in more than half of the corpus.  Use
    ``bm25_idf_plus1`` when scores must stay non-negative.
    """
    n, d = _clamped_df(n_docs, df)
    result = np.log((n - d + 0.5) / (d + 0.5))
    return float(result) if result.ndim == 0 else result


def bm25_idf_plus1(
    n_docs: np.ndarray | int,
    df: np.ndarray | int,
) -> np.ndarray | float:
    """Okapi/BM25 IDF with a +1 inside the log: ln(1 + (N - df + 0.5) / (df + 0.5)).

    Always finite and >= 0.  df = 0 gives the largest weight for a given
    N; df = N still gives a small positive weight.  df > N is clamped
    to N.
    """
    n, d = _clamped_df(n_docs, df)
    result = np.log1p((n - d + 0.5) / (d + 0.5))
    return float(result) if result.ndim == 0 else result


def bm25_tf(
    tf: np.ndarray | float,
    doc_len: np.ndarray | float,
    avg_doc_len: np.ndarray | float,
    k1: float = DEFAULT_K1,
    b: float = DEFAULT_B,
) -> np.ndarray | float:
    """BM25 term-frequency normalisation (the TF part of BM25).

        tf * (k1 + 1) / (tf + k1 * (1 - b + b * doc_len / avg_doc_len))

    tf <= 0 yields exactly 0.  The value grows with tf and saturates at
    k1 + 1.  Raises DomainError when avg_doc_len <= 0 and
    InvalidParameter for k1 < 0 or b outside [0, 1].
    """
    k1 = check_k1(k1)
    tf = np.asarray(tf, dtype=np.float64)
    norm = np.asarray(length_norm(doc_len, avg_doc_len, b), dtype=np.float64)

    # tf = 0 with k1 = 0 is 0 / 0; the where() below discards that branch.
    with np.errstate(divide="ignore", invalid="ignore"):
        saturated = tf * (k1 + 1.0) / (tf + k1 * norm)
    result = np.where(tf > 0.0, saturated, 0.0)
    return float(result) if result.ndim == 0 else result


def bm25_tf_upper_bound(k1: float = DEFAULT_K1) -> float:
    """Limit of ``bm25_tf`` as tf grows without bound: k1 + 1."""
    return check_k1(k1) + 1.0


def bm25_score(
    tf: np.ndarray | float,
    doc_len: np.ndarray | float,
    avg_doc_len: np.ndarray | float,
    n_docs: np.ndarray | int,
    df: np.ndarray | int,
    k1: float = DEFAULT_K1,
    b: float = DEFAULT_B,
) -> np.ndarray | float:
    """Single-term BM25 score: bm25_idf_plus1(N, df) * bm25_tf(...)."""
    idf = np.asarray(bm25_idf_plus1(n_docs, df), dtype=np.float64)
    tf_weight = np.asarray(bm25_tf(tf, doc_len, avg_doc_len, k1, b), dtype=np.float64)
    result = idf * tf_weight
    return float(result) if result.ndim == 0 else result
