#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Tunable parameters, their defaults and domain checks."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from rankfns.errors import InvalidParameter


DEFAULT_K1 = 1.2
DEFAULT_B = 0.75
DEFAULT_LAMBDA = 0.1
# Conventional "large-ish" value used in many IR baselines.
DEFAULT_MU = 1000.0
DEFAULT_TOP_K = 10


def _check_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite, got {value}")
    return value


def check_k1(k1: float) -> float:
    """Validate BM25 k1 (term frequency saturation), k1 >= 0."""
    k1 = _check_finite("k1", k1)
    if k1 < 0.0:
        raise InvalidParameter(f"k1 must be >= 0, got {k1}")
    return k1


def check_b(b: float) -> float:
    """Validate BM25 b (length normalisation), 0 <= b <= 1."""
    b = _check_finite("b", b)
    if not (0.0 <= b <= 1.0):
        raise InvalidParameter(f"b must be in [0, 1], got {b}")
    return b


def check_lambda(lam: float) -> float:
    """Validate the Jelinek-Mercer interpolation weight, 0 <= lambda <= 1."""
    lam = _check_finite("lambda", lam)
    if not (0.0 <= lam <= 1.0):
        raise InvalidParameter(f"lambda must be in [0, 1], got {lam}")
    return lam


def check_mu(mu: float) -> float:
    """Validate the Dirichlet prior strength, mu >= 0."""
    mu = _check_finite("mu", mu)
    if mu < 0.0:
        raise InvalidParameter(f"mu must be >= 0, got {mu}")
    return mu


def check_k(k: int) -> int:
    """Validate a result count, an integer k >= 0."""
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise InvalidParameter(f"k must be an integer, got {k!r}")
    if k < 0:
        raise InvalidParameter(f"k must be >= 0, got {k}")
    return int(k)


@dataclass(frozen=True)
class BM25Params:
    """BM25 tuning parameters.

    Parameters
    ----------
    k1 : float
        Term frequency saturation.  0 turns BM25 into binary term
        matching; larger values let repeated terms keep contributing.
    b : float
        Document length normalisation.  0 disables it, 1 normalises fully
        by ``doc_len / avg_doc_len``.
    """

    k1: float = DEFAULT_K1
    b: float = DEFAULT_B

    def __post_init__(self) -> None:
        check_k1(self.k1)
        check_b(self.b)
