"""
bodies.py
-----------

Re-express link mass properties in the frame of the joint
that carries the link.
"""
import numpy as np

from . import transforms


def express_inertial(inertial, axis=None):
    """
    Get center of mass and inertia tensor in a joint frame.

    When the joint frame was normalized the link data, declared in
    the document's joint frame, goes through the inverse of the same
    normalization the joint placement went through.

    Parameters
    ------------
    inertial : document.Inertial
      Mass properties in the document's link frame
    axis : None or (3,) float
      Axis of the joint if its frame was normalized

    Returns
    ------------
    com : (3,) float
      Center of mass in the joint frame
    inertia : (3, 3) float
      Inertia tensor in the joint frame
    """
    com = np.array(inertial.origin.position, dtype=np.float64)
    inertia = inertial.matrix
    if axis is None:
        return com, inertia

    normalization = transforms.normalization_matrix(axis)
    inverted = transforms.inverse(normalization)

    com = transforms.transform_point(inverted, com)
    inertia = rotate_inertia(inertia, inverted[:3, :3])
    return com, inertia


def rotate_inertia(inertia, rotation):
    """
    Conjugate an inertia tensor by a rotation.

    Parameters
    ------------
    inertia : (3, 3) float
      Symmetric inertia tensor
    rotation : (3, 3) float
      Rotation taking the old frame to the new one

    Returns
    ------------
    rotated : (3, 3) float
      `rotation . inertia . rotation^T`
    """
    rotation = np.asanyarray(rotation, dtype=np.float64)
    return np.dot(np.dot(rotation, inertia), rotation.T)
