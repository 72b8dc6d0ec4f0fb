#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Tests for rankfns.params and the package surface."""

import numpy as np
import pytest

from rankfns.errors import DomainError, InvalidParameter, RankingError
from rankfns.params import BM25Params, check_b, check_k, check_k1, check_lambda, check_mu


class TestChecks:
    @pytest.mark.parametrize("value", [0.0, 1.2, 100.0])
    def test_valid_k1(self, value):
        assert check_k1(value) == value

    @pytest.mark.parametrize(
        "check, value",
        [
            (check_k1, -0.01),
            (check_b, -0.01),
            (check_b, 1.01),
            (check_lambda, -0.5),
            (check_lambda, 1.5),
            (check_mu, -1.0),
            (check_mu, float("inf")),
            (check_k, -1),
            (check_k, 2.7),
            (check_k, 3.0),
            (check_k, "3"),
            (check_k, True),
        ],
    )
    def test_out_of_domain_raises(self, check, value):
        with pytest.raises(InvalidParameter):
            check(value)

    def test_k_accepts_numpy_integers(self):
        assert check_k(np.int64(5)) == 5
        assert isinstance(check_k(np.int64(5)), int)

    def test_boundaries_are_valid(self):
        assert check_b(0.0) == 0.0
        assert check_b(1.0) == 1.0
        assert check_lambda(0.0) == 0.0
        assert check_lambda(1.0) == 1.0
        assert check_mu(0.0) == 0.0
        assert check_k(0) == 0


class TestBM25Params:
    def test_defaults(self):
        params = BM25Params()
        assert params.k1 == 1.2
        assert params.b == 0.75

    def test_validated(self):
        with pytest.raises(InvalidParameter, match="b must be"):
            BM25Params(b=1.5)

    def test_frozen(self):
        params = BM25Params()
        with pytest.raises(AttributeError):
            params.k1 = 2.0


class TestErrorHierarchy:
    def test_errors_are_value_errors(self):
        assert issubclass(DomainError, RankingError)
        assert issubclass(InvalidParameter, RankingError)
        assert issubclass(RankingError, ValueError)

    def test_distinguishable(self):
        assert not issubclass(DomainError, InvalidParameter)
        assert not issubclass(InvalidParameter, DomainError)


class TestMainPackageExport:
    def test_import_from_main_package(self):
        """Kernels and retrievers are importable from rankfns directly."""
        import rankfns

        for name in [
            "bm25_idf",
            "bm25_idf_plus1",
            "bm25_tf",
            "length_norm",
            "jelinek_mercer",
            "dirichlet",
            "Retriever",
            "BM25Retriever",
        ]:
            assert hasattr(rankfns, name)
