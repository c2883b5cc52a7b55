"""
constants.py
--------------

Tolerances, the package logger and the defaults a `Parser`
falls back on when it is not told otherwise.
"""
import logging

import numpy as np

log = logging.getLogger('urdfkin')
log.addHandler(logging.NullHandler())


class ToleranceKinematic(object):
    """
    Tolerances used while resolving a kinematic tree.

    Parameters
    ------------
    tol.zero : float
      Floating point numbers smaller than this are considered zero
    tol.merge : float
      Vectors whose norm differs from one by less than this
      are treated as already being unit vectors
    """

    def __init__(self, **kwargs):
        self.zero = np.finfo(np.float64).resolution * 100
        self.merge = 1e-10
        self.__dict__.update(kwargs)


tol = ToleranceKinematic()

# name of the joint created to carry the root link
ROOT_JOINT_NAME = 'base_joint'

# document joint kinds which get a normalized frame
ACTUATED_KINDS = ('revolute', 'continuous', 'prismatic')

# semantic role -> link name, `None` is the document root link
SPECIAL_LINKS = {
    'waist': None,
    'chest': 'torso',
    'left_wrist': 'l_wrist',
    'right_wrist': 'r_wrist',
    'left_hand': 'l_gripper',
    'right_hand': 'r_gripper',
    'left_ankle': 'l_ankle',
    'right_ankle': 'r_ankle',
    'left_foot': 'l_sole',
    'right_foot': 'r_sole',
    'gaze': 'gaze'}

# (lower, upper) for the six free-flyer dofs: x, y, z, rx, ry, rz
# `None` leaves the dof unbounded
FREEFLYER_BOUNDS = (
    None,
    None,
    None,
    (-np.pi / 6, np.pi / 6),
    (-np.pi / 6, np.pi / 6),
    None)
