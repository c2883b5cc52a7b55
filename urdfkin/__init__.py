"""
urdfkin
----------

Resolve a URDF link and joint tree into a kinematic model:
joint placements in a reference frame, motion axes normalized
to local X, inertial frames re-expressed to match, and hand,
foot and gaze descriptors derived from named joints.
"""
from . import exchange
from .constants import log, tol
from .exceptions import (StructuralError,
                         DuplicateNameError,
                         UnsupportedJointError)
from .document import (Document, Link, Joint, Pose,
                       Limits, Inertial, Geometry)
from .joint import JointKind, ResolvedJoint
from .chain import KinematicModel
from .parser import Parser


def load(file_obj, **kwargs):
    """
    Read a URDF file and resolve it into a kinematic model.

    Parameters
    ------------
    file_obj : str
      Path to URDF file or ZIP with URDF inside
    kwargs : dict
      Passed to `Parser`

    Returns
    ------------
    model : KinematicModel
      Resolved model
    """
    document = exchange.load_urdf(file_obj)
    return Parser(**kwargs).parse(document)


__all__ = ['load',
           'exchange',
           'log',
           'tol',
           'StructuralError',
           'DuplicateNameError',
           'UnsupportedJointError',
           'Document',
           'Link',
           'Joint',
           'Pose',
           'Limits',
           'Inertial',
           'Geometry',
           'JointKind',
           'ResolvedJoint',
           'KinematicModel',
           'Parser']
