#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""TF-IDF primitives.

The term-frequency and inverse-document-frequency transforms are
independent so callers can mix and match them; ``tfidf`` is only the
product of the two.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from rankfns.bm25 import _clamped_df, bm25_idf_plus1
from rankfns.errors import DomainError, InvalidParameter


class TfVariant(str, Enum):
    """Term-frequency transforms."""

    RAW = "raw"
    """Linear TF: ``tf``."""

    LOG = "log"
    """Log-scaled TF: ``1 + ln(tf)`` for tf > 0, else 0."""

    AUGMENTED = "augmented"
    """Augmented TF: ``0.5 + 0.5 * tf / max_tf`` for tf > 0, else 0."""


class IdfVariant(str, Enum):
    """Inverse-document-frequency transforms."""

    STANDARD = "standard"
    """``ln(N / df)``."""

    SMOOTHED = "smoothed"
    """``ln(1 + N / df)``."""

    BM25 = "bm25"
    """``ln(1 + (N - df + 0.5) / (df + 0.5))``, defined for df = 0."""


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(repr(v.value) for v in enum_cls)
        raise InvalidParameter(
            f"{enum_cls.__name__} must be one of {valid}, got {value!r}"
        ) from None


def tf_transform(
    tf: np.ndarray | float,
    variant: TfVariant | str = TfVariant.RAW,
    max_tf: np.ndarray | float | None = None,
) -> np.ndarray | float:
    """Apply a term-frequency transform.

    Parameters
    ----------
    tf : float or array
        Raw term frequency, >= 0.
    variant : TfVariant or str
        Which transform to apply.
    max_tf : float or array or None
        Largest term frequency in the document.  Required for
        ``TfVariant.AUGMENTED``, ignored otherwise.
    """
    variant = _coerce(TfVariant, variant)
    tf = np.asarray(tf, dtype=np.float64)

    if variant is TfVariant.RAW:
        result = tf
    elif variant is TfVariant.LOG:
        with np.errstate(divide="ignore"):
            result = np.where(tf > 0.0, 1.0 + np.log(tf), 0.0)
    else:
        if max_tf is None:
            raise InvalidParameter("max_tf is required for augmented tf")
        max_tf = np.asarray(max_tf, dtype=np.float64)
        if np.any(max_tf <= 0.0):
            raise DomainError(f"max_tf must be > 0, got {max_tf}")
        result = np.where(tf > 0.0, 0.5 + 0.5 * tf / max_tf, 0.0)

    return float(result) if result.ndim == 0 else result


def idf_transform(
    n_docs: np.ndarray | int,
    df: np.ndarray | int,
    variant: IdfVariant | str = IdfVariant.STANDARD,
) -> np.ndarray | float:
    """Apply an inverse-document-frequency transform.

    ``STANDARD`` and ``SMOOTHED`` divide by df and raise DomainError for
    df = 0 or n_docs = 0.  df > n_docs is clamped to n_docs, as in the
    BM25 kernels.  ``BM25`` is defined for every df.
    """
    variant = _coerce(IdfVariant, variant)

    if variant is IdfVariant.BM25:
        return bm25_idf_plus1(n_docs, df)

    if np.any(np.asarray(df, dtype=np.float64) <= 0.0):
        raise DomainError(
            f"df must be > 0 for {variant.value} idf, got {df}"
        )
    if np.any(np.asarray(n_docs, dtype=np.float64) <= 0.0):
        raise DomainError(
            f"n_docs must be > 0 for {variant.value} idf, got {n_docs}"
        )
    n, d = _clamped_df(n_docs, df)

    if variant is IdfVariant.STANDARD:
        result = np.log(n / d)
    else:
        result = np.log1p(n / d)
    return float(result) if result.ndim == 0 else result


def tfidf(
    tf: np.ndarray | float,
    n_docs: np.ndarray | int,
    df: np.ndarray | int,
    tf_variant: TfVariant | str = TfVariant.RAW,
    idf_variant: IdfVariant | str = IdfVariant.STANDARD,
    max_tf: np.ndarray | float | None = None,
) -> np.ndarray | float:
    """TF-IDF weight: tf_transform(tf) * idf_transform(N, df)."""
    tf_weight = np.asarray(tf_transform(tf, tf_variant, max_tf), dtype=np.float64)
    idf = np.asarray(idf_transform(n_docs, df, idf_variant), dtype=np.float64)
    result = tf_weight * idf
    return float(result) if result.ndim == 0 else result
