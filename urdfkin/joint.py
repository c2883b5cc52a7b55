"""
joint.py
-----------

Resolved joints: one object per document joint, tagged
with its kind rather than subclassed by it.

Every actuated joint moves about (or along) its local X axis,
which `transforms.normalize_axis` guarantees.
"""
import enum

import numpy as np
import sympy as sp

from .exceptions import UnsupportedJointError


class JointKind(enum.Enum):
    FLOATING = 'floating'
    REVOLUTE = 'revolute'
    CONTINUOUS = 'continuous'
    PRISMATIC = 'prismatic'
    FIXED = 'fixed'
    PLANAR = 'planar'

    @classmethod
    def from_string(cls, value):
        """
        Get a kind from a URDF joint type.

        Parameters
        ------------
        value : str or JointKind
          URDF type such as 'revolute'

        Returns
        ------------
        kind : JointKind
          Matching kind
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedJointError(
                'unknown joint kind `{}`'.format(value))

    @property
    def dof(self):
        """
        Number of degrees of freedom of a joint of this kind.
        """
        return _DOF[self]

    @property
    def actuated(self):
        """
        Does a joint of this kind get a normalized frame.
        """
        return self in (JointKind.REVOLUTE,
                        JointKind.CONTINUOUS,
                        JointKind.PRISMATIC)


_DOF = {JointKind.FLOATING: 6,
        JointKind.REVOLUTE: 1,
        JointKind.CONTINUOUS: 1,
        JointKind.PRISMATIC: 1,
        JointKind.FIXED: 0,
        JointKind.PLANAR: 3}


class ResolvedJoint(object):
    def __init__(self, name, kind, matrix, taken=None):
        """
        A joint placed in the reference frame.

        Parameters
        -------------
        name : str
          Name of the joint, unique in its model
        kind : JointKind
          What sort of motion the joint allows
        matrix : (4, 4) float
          Initial placement in the reference frame, with
          the motion axis as local X for actuated kinds
        taken : None or set
          Symbol names already used by other joints in the model
        """
        self.name = name
        self.kind = JointKind.from_string(kind)
        if self.kind == JointKind.PLANAR:
            raise UnsupportedJointError(
                'planar joint `{}` is not supported'.format(name))
        self.matrix = np.array(matrix, dtype=np.float64).reshape((4, 4))

        dof = self.kind.dof
        self.bounded = np.zeros(dof, dtype=bool)
        self.lower = np.full(dof, -np.inf)
        self.upper = np.full(dof, np.inf)
        self.velocity = np.tile([-np.inf, np.inf], (dof, 1))
        self.effort = np.tile([-np.inf, np.inf], (dof, 1))

        # names of connected joints, the model owns the objects
        self.parent = None
        self.children = []

        self.body = None
        self.solids = []

        self._parameters = _symbols(name, dof, taken)

    @property
    def dof(self):
        return self.kind.dof

    def bound(self, index, lower, upper):
        """
        Bound the position of one degree of freedom.
        """
        self.bounded[index] = True
        self.lower[index] = lower
        self.upper[index] = upper

    def unbound(self, index):
        self.bounded[index] = False
        self.lower[index] = -np.inf
        self.upper[index] = np.inf

    def apply_limits(self, limits):
        """
        Set position, velocity and effort bounds of the
        first degree of freedom from document limits.

        Parameters
        ------------
        limits : document.Limits
          Lower, upper, velocity and effort limits
        """
        self.bound(0, limits.lower, limits.upper)
        self.velocity[0] = [-limits.velocity, limits.velocity]
        self.effort[0] = [-limits.effort, limits.effort]

    @property
    def parameters(self):
        """
        Symbols representing the position of each degree of freedom.

        Returns
        -----------
        parameters : (dof,) sympy.Symbol
          Ordered parameters
        """
        return list(self._parameters)

    @property
    def motion(self):
        """
        The symbolic transform this joint applies in its own frame.

        Returns
        -----------
        motion : (4, 4) sympy.Matrix
          Transform with `self.parameters` as variables
        """
        params = self.parameters
        if self.kind in (JointKind.REVOLUTE, JointKind.CONTINUOUS):
            return _rotation_x(params[0])
        elif self.kind == JointKind.PRISMATIC:
            motion = sp.eye(4)
            motion[0, 3] = params[0]
            return motion
        elif self.kind == JointKind.FLOATING:
            # translate then rotate about fixed X, Y, Z
            motion = sp.eye(4)
            motion[0, 3], motion[1, 3], motion[2, 3] = params[:3]
            return (motion *
                    _rotation_z(params[5]) *
                    _rotation_y(params[4]) *
                    _rotation_x(params[3]))
        return sp.eye(4)


def _symbols(name, dof, taken=None):
    """
    Create one symbol per degree of freedom, named after the
    joint and padded with underscores until no name is in `taken`.

    Parameters
    ------------
    name : str
      Joint name
    dof : int
      Number of symbols to create
    taken : None or set
      Names which can not be used

    Returns
    ------------
    symbols : (dof,) sympy.Symbol
      Symbols with unique names
    """
    if dof == 1:
        names = [name]
    else:
        names = ['{}_{}'.format(name, i) for i in range(dof)]
    used = set() if taken is None else set(taken)
    symbols = []
    for candidate in names:
        while candidate in used:
            candidate += '_'
        used.add(candidate)
        symbols.append(sp.Symbol(candidate))
    return symbols


def _rotation_x(angle):
    c, s = sp.cos(angle), sp.sin(angle)
    return sp.Matrix([[1, 0, 0, 0],
                      [0, c, -s, 0],
                      [0, s, c, 0],
                      [0, 0, 0, 1]])


def _rotation_y(angle):
    c, s = sp.cos(angle), sp.sin(angle)
    return sp.Matrix([[c, 0, s, 0],
                      [0, 1, 0, 0],
                      [-s, 0, c, 0],
                      [0, 0, 0, 1]])


def _rotation_z(angle):
    c, s = sp.cos(angle), sp.sin(angle)
    return sp.Matrix([[c, -s, 0, 0],
                      [s, c, 0, 0],
                      [0, 0, 1, 0],
                      [0, 0, 0, 1]])
