#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Document-length normalisation.

Long documents accumulate term occurrences simply by being long.  These
factors rescale term frequency by a document's length relative to the
corpus average.
"""

from __future__ import annotations

import numpy as np

from rankfns.errors import DomainError
from rankfns.params import check_b


def _length_ratio(
    doc_len: np.ndarray | float, avg_doc_len: np.ndarray | float
) -> np.ndarray:
    avg = np.asarray(avg_doc_len, dtype=np.float64)
    if np.any(avg <= 0.0):
        raise DomainError(f"avg_doc_len must be > 0, got {avg_doc_len}")
    return np.asarray(doc_len, dtype=np.float64) / avg


def length_ratio(
    doc_len: np.ndarray | float,
    avg_doc_len: np.ndarray | float,
) -> np.ndarray | float:
    """Normalised document length: doc_len / avg_doc_len.

    Raises DomainError when avg_doc_len <= 0.
    """
    result = _length_ratio(doc_len, avg_doc_len)
    return float(result) if result.ndim == 0 else result


def length_norm(
    doc_len: np.ndarray | float,
    avg_doc_len: np.ndarray | float,
    b: float,
) -> np.ndarray | float:
    """BM25 length normalisation factor: 1 - b + b * (doc_len / avg_doc_len).

    Equals 1 for a document of average length and for b = 0.
    """
    b = check_b(b)
    result = 1.0 - b + b * _length_ratio(doc_len, avg_doc_len)
    return float(result) if result.ndim == 0 else result
