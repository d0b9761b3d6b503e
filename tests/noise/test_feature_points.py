import numpy as np
import pytest

from nimbus.noise import InvalidParameterError, generate_feature_points


def test_same_seed_produces_identical_points() -> None:
    first = generate_feature_points(7, 32)
    second = generate_feature_points(7, 32)
    assert first.tobytes() == second.tobytes()


@pytest.mark.parametrize("seed", [0, 1, 2, 99, 2**32 - 1])
def test_points_lie_in_unit_cube(seed: int) -> None:
    points = generate_feature_points(seed, 64)
    assert points.shape == (64, 3)
    assert points.dtype == np.float64
    assert np.all(points >= 0.0)
    assert np.all(points < 1.0)


def test_different_seeds_produce_different_points() -> None:
    assert not np.array_equal(
        generate_feature_points(1, 16), generate_feature_points(2, 16)
    )


def test_smaller_count_is_prefix_of_larger_count() -> None:
    small = generate_feature_points(3, 4)
    large = generate_feature_points(3, 16)
    np.testing.assert_array_equal(small, large[:4])


def test_zero_count_is_empty() -> None:
    points = generate_feature_points(1, 0)
    assert points.shape == (0, 3)


def test_negative_count_rejected() -> None:
    with pytest.raises(InvalidParameterError):
        generate_feature_points(1, -1)
