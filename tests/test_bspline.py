import numpy as np
import pytest

from ritk.bspline import BSplineTransform


def _zero_transform_2d(spacing=(10.0, 10.0)):
    return BSplineTransform((4, 4), [0.0, 0.0], spacing, np.eye(2), np.zeros((16, 2)))


def test_bspline_transform_creation():
    grid_size = (4, 4, 4)
    transform = BSplineTransform(
        grid_size, np.zeros(3), [1.0, 1.0, 1.0], np.eye(3), np.zeros((64, 3))
    )
    assert transform.grid_size == grid_size


def test_bspline_transform_from_spatial():
    grid_size = (4, 4, 4)
    transform = BSplineTransform.from_spatial(
        grid_size, [0.0, 0.0, 0.0], [10.0, 10.0, 10.0], np.eye(3), np.zeros((64, 3))
    )
    assert transform.grid_size == grid_size
    np.testing.assert_allclose(transform.spacing, [10.0, 10.0, 10.0])


def test_from_spatial_transposes_direction():
    direction = np.array([[0.0, -1.0], [1.0, 0.0]])
    transform = BSplineTransform.from_spatial(
        (4, 4), [0.0, 0.0], [1.0, 1.0], direction, np.zeros((16, 2))
    )
    np.testing.assert_allclose(transform.direction, direction.T)


def test_bspline_transform_2d():
    coeffs = np.zeros((16, 2))
    coeffs[5] = [1.0, 1.0]
    transform = BSplineTransform((4, 4), [0.0, 0.0], [10.0, 10.0], np.eye(2), coeffs)
    result = transform.transform_points([[10.0, 10.0]])
    expected = 10.0 + 4.0 / 9.0
    assert result[0, 0] == pytest.approx(expected, abs=1e-5)
    assert result[0, 1] == pytest.approx(expected, abs=1e-5)


def test_bspline_transform_out_of_bounds():
    transform = _zero_transform_2d()
    result = transform.transform_points([[100.0, 100.0]])
    np.testing.assert_allclose(result, [[100.0, 100.0]], atol=1e-5)


def test_out_of_bounds_ignores_nonzero_coefficients():
    coeffs = np.ones((16, 2))
    transform = BSplineTransform((4, 4), [0.0, 0.0], [10.0, 10.0], np.eye(2), coeffs)
    result = transform.transform_points([[-5.0, 10.0], [100.0, 10.0]])
    np.testing.assert_allclose(result, [[-5.0, 10.0], [100.0, 10.0]])


def test_constant_coefficients_give_constant_displacement_inside_grid():
    coeffs = np.tile([2.0, -3.0], (16, 1))
    transform = BSplineTransform((4, 4), [0.0, 0.0], [10.0, 10.0], np.eye(2), coeffs)
    points = np.array([[0.0, 0.0], [5.0, 12.5], [29.0, 30.0], [17.3, 4.1]])
    result = transform.transform_points(points)
    np.testing.assert_allclose(result - points, np.tile([2.0, -3.0], (4, 1)), atol=1e-12)


def test_zero_coefficients_leave_points_unchanged():
    transform = _zero_transform_2d()
    points = np.array([[1.0, 2.0], [15.0, 25.0]])
    np.testing.assert_allclose(transform.transform_points(points), points)


def test_bspline_transform_3d_single_control_point():
    coeffs = np.zeros((64, 3))
    coeffs[1 * 16 + 1 * 4 + 1] = [1.0, 2.0, 3.0]
    transform = BSplineTransform((4, 4, 4), [0.0, 0.0, 0.0], [1.0, 1.0, 1.0], np.eye(3), coeffs)
    result = transform.transform_points([[1.0, 1.0, 1.0]])
    weight = 8.0 / 27.0
    np.testing.assert_allclose(result[0], [1.0 + weight, 1.0 + 2 * weight, 1.0 + 3 * weight])


def test_world_to_grid_uses_origin_and_spacing():
    transform = BSplineTransform(
        (4, 4), [5.0, -5.0], [10.0, 5.0], np.eye(2), np.zeros((16, 2))
    )
    indices = transform.world_to_grid([[15.0, 5.0]])
    np.testing.assert_allclose(indices, [[1.0, 2.0]])


def test_grid_too_small_raises():
    with pytest.raises(ValueError):
        BSplineTransform((3, 4), [0.0, 0.0], [1.0, 1.0], np.eye(2), np.zeros((12, 2)))


def test_coefficient_shape_mismatch_raises():
    with pytest.raises(ValueError):
        BSplineTransform((4, 4), [0.0, 0.0], [1.0, 1.0], np.eye(2), np.zeros((15, 2)))


def test_unsupported_dimension_raises_on_transform():
    transform = BSplineTransform(
        (4, 4, 4, 4), np.zeros(4), np.ones(4), np.eye(4), np.zeros((256, 4))
    )
    with pytest.raises(ValueError):
        transform.transform_points(np.zeros((1, 4)))


def test_points_shape_checked():
    transform = _zero_transform_2d()
    with pytest.raises(ValueError):
        transform.transform_points([[1.0, 2.0, 3.0]])