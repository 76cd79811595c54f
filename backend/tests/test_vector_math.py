import pytest
from backend.cabshare.vector_math import cosine_similarity


def test_identical_vectors_score_one():
    assert cosine_similarity([0.3, 0.4, 0.5], [0.3, 0.4, 0.5]) == pytest.approx(1.0)


def test_orthogonal_and_opposite_vectors():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)


def test_mismatched_lengths_use_common_prefix():
    # trailing 5.0 is ignored
    assert cosine_similarity([1.0, 0.0, 5.0], [1.0, 0.0]) == pytest.approx(1.0)


def test_empty_and_zero_vectors_score_zero():
    assert cosine_similarity([], [1.0, 2.0]) == 0.0
    assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0
    assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0


def test_similarity_is_symmetric():
    a, b = [0.2, -1.5, 3.0], [1.0, 0.5, -0.25]
    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))
