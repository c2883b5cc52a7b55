"""
transforms.py
--------------

Homogeneous transform helpers and the axis normalization which
rotates an actuated joint frame so its motion axis is local X.

Quaternions are `(w, x, y, z)`, as in `trimesh.transformations`.
"""
import numpy as np

from trimesh import transformations as tf

from .constants import tol


def normalize_axis(axis):
    """
    Get an orthonormal basis whose first column is `axis`.

    The second column is seeded with the cardinal axis along which
    `axis` has the smallest component, which keeps the cross products
    away from degenerate cases when `axis` is nearly cardinal.

    Parameters
    ------------
    axis : (3,) float
      Motion axis of a joint, should be a unit vector

    Returns
    ------------
    basis : (3, 3) float
      Columns are `[x, y, z]` with `x == axis`
    """
    x = np.array(axis, dtype=np.float64).reshape(3)
    norm = np.linalg.norm(x)
    if norm < tol.zero:
        raise ValueError('can not normalize a zero axis!')
    if abs(norm - 1.0) > tol.merge:
        x /= norm

    # first index wins ties
    smallest = int(np.argmin(np.abs(x)))
    y = np.zeros(3)
    y[smallest] = 1.0

    z = np.cross(x, y)
    z /= np.linalg.norm(z)
    y = np.cross(z, x)

    return np.column_stack((x, y, z))


def normalization_matrix(axis):
    """
    Get the normalization transform for a joint axis.

    Parameters
    ------------
    axis : (3,) float
      Motion axis of a joint

    Returns
    ------------
    matrix : (4, 4) float
      Rotation from `normalize_axis` with zero translation
    """
    matrix = np.eye(4)
    matrix[:3, :3] = normalize_axis(axis)
    return matrix


def compose(*matrices):
    """
    Multiply transforms left to right.

    Parameters
    ------------
    matrices : (4, 4) float
      Any number of homogeneous transforms

    Returns
    ------------
    matrix : (4, 4) float
      `matrices[0] . matrices[1] . ...`
    """
    result = np.eye(4)
    for matrix in matrices:
        result = np.dot(result, matrix)
    return result


def inverse(matrix):
    """
    Invert a rigid transform using the transposed rotation.

    Parameters
    ------------
    matrix : (4, 4) float
      Rotation and translation only

    Returns
    ------------
    inverted : (4, 4) float
      Inverse of `matrix`
    """
    matrix = np.asanyarray(matrix, dtype=np.float64)
    rotation = matrix[:3, :3].T
    inverted = np.eye(4)
    inverted[:3, :3] = rotation
    inverted[:3, 3] = -np.dot(rotation, matrix[:3, 3])
    return inverted


def pose_to_matrix(position, rotation=None):
    """
    Convert a position and quaternion into a transform.

    Parameters
    ------------
    position : (3,) float
      Translation
    rotation : None or (4,) float
      Quaternion as `(w, x, y, z)`

    Returns
    ------------
    matrix : (4, 4) float
      Homogeneous transform
    """
    if rotation is None:
        matrix = np.eye(4)
    else:
        matrix = tf.quaternion_matrix(rotation)
    matrix[:3, 3] = np.asanyarray(position, dtype=np.float64).reshape(3)
    return matrix


def quaternion_from_rpy(rpy):
    """
    Convert URDF roll, pitch, yaw into a quaternion.

    URDF rotates about the fixed X axis by roll, then fixed Y by pitch,
    then fixed Z by yaw.

    Parameters
    ------------
    rpy : (3,) float
      Roll, pitch, yaw in radians

    Returns
    ------------
    quaternion : (4,) float
      As `(w, x, y, z)`
    """
    roll, pitch, yaw = np.asanyarray(rpy, dtype=np.float64).reshape(3)
    return tf.quaternion_from_euler(roll, pitch, yaw, axes='sxyz')


def normalize(matrix, axis):
    """
    Right-multiply a joint transform by its normalization.
    """
    return np.dot(matrix, normalization_matrix(axis))


def denormalize(matrix, axis):
    """
    Right-multiply a normalized joint transform by the inverse
    normalization, recovering the frame the document declared.
    """
    return np.dot(matrix, inverse(normalization_matrix(axis)))


def transform_point(matrix, point):
    """
    Apply a transform to a single (3,) point.
    """
    return tf.transform_points(
        np.reshape(point, (1, 3)), matrix)[0]
