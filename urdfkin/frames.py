"""
frames.py
-----------

Compose the chain of parent-to-joint transforms from a joint
back up to a reference joint.
"""
import numpy as np

from .constants import log
from .exceptions import StructuralError
from . import transforms


def pose_in_reference_frame(document, reference, target, _seen=None):
    """
    Get the origin of `target` expressed in the frame of `reference`.

    The chain is composed right to left:
    `T(reference, target) = T(reference, parent) . T(parent, target)`
    If `reference` is not an ancestor of `target` the chain runs
    up to the root link.

    Parameters
    ------------
    document : document.Document
      Link and joint records
    reference : None or str
      Name of the reference joint, None for the root link frame
    target : str
      Name of the joint to locate

    Returns
    ------------
    matrix : (4, 4) float
      Transform from the target frame to the reference frame
    """
    if target == reference:
        return np.eye(4)

    joint = document.get_joint(target)
    if joint is None:
        log.error('failed to retrieve joint `%s` '
                  'while computing its position', target)
        return np.eye(4)

    if _seen is None:
        _seen = set()
    if target in _seen:
        raise StructuralError(
            'joint `{}` is its own ancestor'.format(target))
    _seen.add(target)

    local = joint.parent_to_joint_origin_transform.matrix

    parent_link = document.get_link(joint.parent_link_name)
    if parent_link is None or parent_link.parent_joint is None:
        return local

    parent = pose_in_reference_frame(document=document,
                                     reference=reference,
                                     target=parent_link.parent_joint.name,
                                     _seen=_seen)
    return transforms.compose(parent, local)
