"""
Tests for transform helpers and axis normalization.
"""

import numpy as np
import pytest

from trimesh import transformations as tf

from urdfkin import transforms
from urdfkin.bodies import rotate_inertia


def random_axes(count=50):
    rng = np.random.default_rng(7)
    axes = rng.normal(size=(count, 3))
    return axes / np.linalg.norm(axes, axis=1).reshape((-1, 1))


CARDINAL = [[1, 0, 0], [0, 1, 0], [0, 0, 1],
            [-1, 0, 0], [0, -1, 0], [0, 0, -1]]


class TestNormalizeAxis:

    @pytest.mark.parametrize('axis', CARDINAL + list(random_axes()))
    def test_basis_is_orthonormal(self, axis):
        basis = transforms.normalize_axis(axis)
        assert np.allclose(np.dot(basis.T, basis), np.eye(3))

    @pytest.mark.parametrize('axis', CARDINAL + list(random_axes()))
    def test_first_column_is_axis(self, axis):
        basis = transforms.normalize_axis(axis)
        assert np.allclose(basis[:, 0], axis, atol=1e-15)

    @pytest.mark.parametrize('axis', CARDINAL + list(random_axes()))
    def test_basis_is_right_handed(self, axis):
        basis = transforms.normalize_axis(axis)
        assert np.isclose(np.linalg.det(basis), 1.0)

    def test_smallest_component_seeds_second_column(self):
        # Z axis: X is the first smallest component
        basis = transforms.normalize_axis([0, 0, 1])
        assert np.allclose(basis, [[0, 1, 0],
                                   [0, 0, 1],
                                   [1, 0, 0]])

    def test_non_unit_axis_is_unitized(self):
        basis = transforms.normalize_axis([0, 0, 5])
        assert np.allclose(basis[:, 0], [0, 0, 1])

    def test_nearly_cardinal_axis(self):
        axis = np.array([1.0, 1e-9, -1e-9])
        axis /= np.linalg.norm(axis)
        basis = transforms.normalize_axis(axis)
        assert np.allclose(np.dot(basis.T, basis), np.eye(3))

    def test_zero_axis_raises(self):
        with pytest.raises(ValueError):
            transforms.normalize_axis([0, 0, 0])

    def test_normalization_matrix(self):
        matrix = transforms.normalization_matrix([0, 1, 0])
        assert matrix.shape == (4, 4)
        assert np.allclose(matrix[:3, 3], 0.0)
        assert np.allclose(matrix[3], [0, 0, 0, 1])
        assert np.allclose(matrix[:3, 0], [0, 1, 0])


class TestPoseAlgebra:

    def test_pose_to_matrix_identity_rotation(self):
        matrix = transforms.pose_to_matrix([1, 2, 3])
        assert np.allclose(matrix[:3, :3], np.eye(3))
        assert np.allclose(matrix[:3, 3], [1, 2, 3])

    def test_pose_to_matrix_quaternion(self):
        # half turn about Z, quaternion is (w, x, y, z)
        matrix = transforms.pose_to_matrix([0, 0, 0], [0, 0, 0, 1])
        assert np.allclose(matrix[:3, :3], np.diag([-1, -1, 1]))

    def test_rpy_matches_fixed_axis_euler(self):
        rpy = [0.1, -0.4, 1.2]
        quaternion = transforms.quaternion_from_rpy(rpy)
        matrix = transforms.pose_to_matrix([0, 0, 0], quaternion)
        # roll about X first, then pitch about Y, then yaw about Z
        expected = np.dot(tf.rotation_matrix(rpy[2], [0, 0, 1]),
                          np.dot(tf.rotation_matrix(rpy[1], [0, 1, 0]),
                                 tf.rotation_matrix(rpy[0], [1, 0, 0])))
        assert np.allclose(matrix, expected)

    def test_inverse(self):
        matrix = tf.random_rotation_matrix()
        matrix[:3, 3] = [1, -2, 3]
        assert np.allclose(np.dot(transforms.inverse(matrix), matrix),
                           np.eye(4))
        assert np.allclose(transforms.inverse(matrix),
                           np.linalg.inv(matrix))

    def test_compose_order(self):
        a = tf.translation_matrix([1, 0, 0])
        b = tf.rotation_matrix(np.pi / 2, [0, 0, 1])
        # rotate first then translate
        composed = transforms.compose(a, b)
        assert np.allclose(composed, np.dot(a, b))
        assert np.allclose(transforms.transform_point(composed, [1, 0, 0]),
                           [1, 1, 0])

    def test_compose_empty(self):
        assert np.allclose(transforms.compose(), np.eye(4))

    def test_normalize_denormalize(self):
        matrix = tf.translation_matrix([0, 1, 2])
        axis = random_axes(1)[0]
        normalized = transforms.normalize(matrix, axis)
        assert np.allclose(transforms.denormalize(normalized, axis), matrix)


class TestInertiaRotation:

    @pytest.mark.parametrize('axis', random_axes(10))
    def test_round_trip(self, axis):
        inertia = np.array([[2.0, 0.1, -0.3],
                            [0.1, 1.5, 0.2],
                            [-0.3, 0.2, 1.0]])
        rotation = transforms.normalize_axis(axis)
        rotated = rotate_inertia(inertia, rotation)
        assert np.allclose(rotate_inertia(rotated, rotation.T), inertia)

    @pytest.mark.parametrize('axis', random_axes(10))
    def test_symmetry_and_trace_kept(self, axis):
        inertia = np.diag([1.0, 2.0, 3.0])
        rotated = rotate_inertia(inertia, transforms.normalize_axis(axis))
        assert np.allclose(rotated, rotated.T)
        assert np.isclose(np.trace(rotated), 6.0)
