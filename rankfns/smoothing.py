#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Language-model smoothing for query-likelihood retrieval.

Estimates P(t|D), the probability that a document's language model
generates term t, by mixing the document's maximum-likelihood estimate
tf / |D| with the collection estimate P(t|C) = cf / |C|.  Smoothing keeps
unseen terms from zeroing out a document's query likelihood.

All functions operate on numpy arrays (vectorized) and scalars.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from rankfns.errors import DomainError, InvalidParameter
from rankfns.params import DEFAULT_LAMBDA, DEFAULT_MU, check_lambda, check_mu


def collection_probability(
    collection_tf: np.ndarray | float,
    collection_len: np.ndarray | float,
) -> np.ndarray | float:
    """Collection language model P(t|C) = collection_tf / collection_len.

    Raises DomainError when collection_len <= 0.
    """
    clen = np.asarray(collection_len, dtype=np.float64)
    if np.any(clen <= 0.0):
        raise DomainError(f"collection_len must be > 0, got {collection_len}")
    result = np.asarray(collection_tf, dtype=np.float64) / clen
    return float(result) if result.ndim == 0 else result


def _check_p_corpus(p_corpus: np.ndarray | float) -> np.ndarray:
    p = np.asarray(p_corpus, dtype=np.float64)
    if np.any((p < 0.0) | (p > 1.0)):
        raise InvalidParameter(f"p_corpus must be in [0, 1], got {p_corpus}")
    return p


def _jelinek_mercer(tf, doc_len, p_corpus, lam: float) -> np.ndarray | float:
    tf = np.asarray(tf, dtype=np.float64)
    doc_len = np.asarray(doc_len, dtype=np.float64)
    # An empty document has no document-level evidence.
    with np.errstate(divide="ignore", invalid="ignore"):
        p_doc = np.where(doc_len > 0.0, tf / doc_len, 0.0)
    result = (1.0 - lam) * p_doc + lam * p_corpus
    return float(result) if result.ndim == 0 else result


def _dirichlet(tf, doc_len, p_corpus, mu: float) -> np.ndarray | float:
    tf = np.asarray(tf, dtype=np.float64)
    denom = np.asarray(doc_len, dtype=np.float64) + mu
    if np.any(denom <= 0.0):
        raise DomainError(
            "doc_len + mu must be > 0, got an empty document with mu = 0"
        )
    result = (tf + mu * p_corpus) / denom
    return float(result) if result.ndim == 0 else result


def jelinek_mercer(
    tf: np.ndarray | float,
    doc_len: np.ndarray | float,
    collection_tf: np.ndarray | float,
    collection_len: np.ndarray | float,
    lam: float = DEFAULT_LAMBDA,
) -> np.ndarray | float:
    """Jelinek-Mercer smoothing (linear interpolation).

        P(t|D) = (1 - lam) * tf / doc_len + lam * collection_tf / collection_len

    lam = 0 gives the document maximum-likelihood estimate, lam = 1 the
    collection estimate.  A zero-length document contributes 0 to the
    document term.
    """
    lam = check_lambda(lam)
    p_corpus = np.asarray(
        collection_probability(collection_tf, collection_len), dtype=np.float64
    )
    return _jelinek_mercer(tf, doc_len, p_corpus, lam)


def dirichlet(
    tf: np.ndarray | float,
    doc_len: np.ndarray | float,
    collection_tf: np.ndarray | float,
    collection_len: np.ndarray | float,
    mu: float = DEFAULT_MU,
) -> np.ndarray | float:
    """Bayesian smoothing with a Dirichlet prior.

        P(t|D) = (tf + mu * collection_tf / collection_len) / (doc_len + mu)

    mu is the prior's strength in pseudo-tokens; mu = 0 gives
    tf / doc_len.  Raises DomainError when doc_len + mu = 0.
    """
    mu = check_mu(mu)
    p_corpus = np.asarray(
        collection_probability(collection_tf, collection_len), dtype=np.float64
    )
    return _dirichlet(tf, doc_len, p_corpus, mu)


@dataclass(frozen=True)
class JelinekMercer:
    """Jelinek-Mercer interpolation; ``lam`` is the collection weight."""

    lam: float = DEFAULT_LAMBDA

    def __post_init__(self) -> None:
        check_lambda(self.lam)

    def smooth(self, tf, doc_len, p_corpus) -> np.ndarray | float:
        """Smoothed P(t|D) from tf, doc_len and the collection probability."""
        return _jelinek_mercer(tf, doc_len, _check_p_corpus(p_corpus), self.lam)


@dataclass(frozen=True)
class Dirichlet:
    """Dirichlet-prior smoothing with prior strength ``mu``."""

    mu: float = DEFAULT_MU

    def __post_init__(self) -> None:
        check_mu(self.mu)

    def smooth(self, tf, doc_len, p_corpus) -> np.ndarray | float:
        """Smoothed P(t|D) from tf, doc_len and the collection probability.

        Raises DomainError for an empty document when mu = 0.
        """
        return _dirichlet(tf, doc_len, _check_p_corpus(p_corpus), self.mu)


SmoothingMethod = JelinekMercer | Dirichlet


def lm_smoothed_p(
    tf: np.ndarray | float,
    doc_len: np.ndarray | float,
    p_corpus: np.ndarray | float,
    method: SmoothingMethod | None = None,
) -> np.ndarray | float:
    """Smoothed P(t|D) from a precomputed collection probability P(t|C).

    Parameters
    ----------
    tf : float or array
        Term frequency in the document.
    doc_len : float or array
        Document length.
    p_corpus : float or array
        Collection probability of the term, in [0, 1].
    method : JelinekMercer, Dirichlet, or None
        Smoothing method.  Defaults to ``Dirichlet(mu=1000)``.
    """
    if method is None:
        method = Dirichlet()
    return method.smooth(tf, doc_len, p_corpus)
