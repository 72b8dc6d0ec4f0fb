#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Tests for rankfns.normalization module."""

import numpy as np
import pytest

from rankfns.errors import DomainError, InvalidParameter
from rankfns.normalization import length_norm, length_ratio


class TestLengthRatio:
    def test_ratio(self):
        assert length_ratio(120.0, 100.0) == pytest.approx(1.2)

    def test_empty_document(self):
        assert length_ratio(0.0, 100.0) == 0.0

    def test_array(self):
        result = length_ratio(np.array([50.0, 100.0, 200.0]), 100.0)
        np.testing.assert_allclose(result, [0.5, 1.0, 2.0])

    def test_zero_average_raises(self):
        with pytest.raises(DomainError, match="avg_doc_len"):
            length_ratio(10.0, 0.0)

    def test_negative_average_raises(self):
        with pytest.raises(DomainError):
            length_ratio(10.0, -5.0)


class TestLengthNorm:
    def test_reference_value(self):
        assert length_norm(120.0, 100.0, 0.75) == pytest.approx(0.25 + 0.75 * 1.2)

    def test_average_document_is_one(self):
        for b in [0.0, 0.3, 0.75, 1.0]:
            assert length_norm(100.0, 100.0, b) == pytest.approx(1.0)

    def test_b_zero_is_one(self):
        assert length_norm(5000.0, 100.0, 0.0) == pytest.approx(1.0)

    def test_b_one_is_ratio(self):
        assert length_norm(30.0, 100.0, 1.0) == pytest.approx(0.3)

    def test_increasing_in_doc_len(self):
        result = length_norm(np.array([0.0, 10.0, 100.0, 1000.0]), 100.0, 0.5)
        assert np.all(np.diff(result) > 0)

    def test_invalid_b_raises(self):
        with pytest.raises(InvalidParameter):
            length_norm(10.0, 100.0, -0.1)

    def test_zero_average_raises(self):
        with pytest.raises(DomainError):
            length_norm(10.0, 0.0, 0.75)
