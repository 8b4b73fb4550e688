import numpy as np
import pytest

from ritk.versor import VersorRigid3DTransform


def test_versor_transform_3d_identity():
    transform = VersorRigid3DTransform([0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 1.0], [0.0, 0.0, 0.0])
    result = transform.transform_points([[1.0, 2.0, 3.0]])
    np.testing.assert_allclose(result, [[1.0, 2.0, 3.0]], atol=1e-9)


def test_versor_transform_3d_rotation_x_90():
    q = [0.70710678, 0.0, 0.0, 0.70710678]
    transform = VersorRigid3DTransform([0.0, 0.0, 0.0], q, [0.0, 0.0, 0.0])
    result = transform.transform_points([[0.0, 1.0, 0.0]])
    np.testing.assert_allclose(result, [[0.0, 0.0, 1.0]], atol=1e-4)


def test_unnormalised_quaternion_is_normalised():
    a = VersorRigid3DTransform([0.0, 0.0, 0.0], [0.0, 0.0, 1.0, 1.0])
    b = VersorRigid3DTransform([0.0, 0.0, 0.0], [0.0, 0.0, 5.0, 5.0])
    np.testing.assert_allclose(a.rotation_matrix(), b.rotation_matrix(), atol=1e-9)
    result = a.transform_points([[1.0, 0.0, 0.0]])
    np.testing.assert_allclose(result, [[0.0, 1.0, 0.0]], atol=1e-9)


def test_rotation_matrix_is_proper_orthogonal():
    mat = VersorRigid3DTransform([0.0, 0.0, 0.0], [0.1, -0.4, 0.7, 0.5]).rotation_matrix()
    np.testing.assert_allclose(mat @ mat.T, np.eye(3), atol=1e-9)
    assert np.linalg.det(mat) == pytest.approx(1.0)


def test_center_and_translation():
    center = [1.0, 1.0, 1.0]
    transform = VersorRigid3DTransform([1.0, 2.0, 3.0], [0.3, 0.2, 0.1, 0.9], center)
    result = transform.transform_points([center])
    np.testing.assert_allclose(result, [[2.0, 3.0, 4.0]], atol=1e-9)


def test_wrong_quaternion_length_raises():
    with pytest.raises(ValueError):
        VersorRigid3DTransform([0.0, 0.0, 0.0], [0.0, 0.0, 1.0])


def test_wrong_point_shape_raises():
    transform = VersorRigid3DTransform([0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 1.0])
    with pytest.raises(ValueError):
        transform.transform_points([[1.0, 2.0]])