"""
Unit tests for cosine similarity and stored-embedding decoding.
"""
import json
import math

import pytest

from core.matcher.similarity import cosine_similarity, coerce_embedding


class TestCosineSimilarity:

    def test_identical_vectors(self):
        v = [0.3, -1.2, 4.0]
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_zero_vector(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0

    @pytest.mark.parametrize("a, b", [
        (None, [1.0]),
        ([1.0], None),
        ([], []),
        ([1.0, 2.0], [1.0, 2.0, 3.0]),
    ])
    def test_missing_or_mismatched(self, a, b):
        assert cosine_similarity(a, b) == 0.0

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 1.0], [5.0, 5.0]) == pytest.approx(1.0)
        assert cosine_similarity([1.0, 0.0], [1.0, 1.0]) == pytest.approx(1 / math.sqrt(2))


class TestCoerceEmbedding:

    def test_list_of_right_dimension(self):
        assert coerce_embedding([1, 2, 3], 3) == [1.0, 2.0, 3.0]

    def test_json_string(self):
        assert coerce_embedding(json.dumps([0.5, 0.25]), 2) == [0.5, 0.25]

    def test_tuple_like_sequence(self):
        assert coerce_embedding((1.0, 2.0), 2) == [1.0, 2.0]

    @pytest.mark.parametrize("value", [
        None,
        [1.0, 2.0],
        "not json",
        ["a", "b", "c"],
        [1.0, float("nan"), 2.0],
        42,
    ])
    def test_undecodable_values_are_no_embedding(self, value):
        assert coerce_embedding(value, 3) is None
