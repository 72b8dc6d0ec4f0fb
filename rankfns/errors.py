#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Exceptions raised by the ranking kernels."""


class RankingError(ValueError):
    """Base class for all errors raised by rankfns."""


class DomainError(RankingError):
    """A required divisor is zero and the formula has no valid fallback.

    Raised instead of returning 0, inf or NaN, e.g. for unsmoothed IDF
    with df = 0 or Dirichlet smoothing with doc_len + mu = 0.
    """


class InvalidParameter(RankingError):
    """A tunable parameter lies outside its documented domain."""
