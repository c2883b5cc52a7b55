"""
effectors.py
--------------

Name joints by the role they play (waist, wrists, ankles...)
and derive hand, foot and gaze descriptors from their placements.
"""
import numpy as np

from .constants import log, SPECIAL_LINKS
from . import transforms


class Hand(object):
    def __init__(self, wrist, center, thumb_axis,
                 forefinger_axis, palm_normal):
        """
        A hand expressed in the frame of its wrist joint.

        Parameters
        ------------
        wrist : str
          Name of the associated wrist joint
        center : (3,) float
          Hand center in the wrist frame
        thumb_axis : (3,) float
          Thumb direction in the wrist frame
        forefinger_axis : (3,) float
          Index finger direction in the wrist frame
        palm_normal : (3,) float
          Palm normal in the wrist frame
        """
        self.wrist = wrist
        self.center = np.asanyarray(center, dtype=np.float64)
        self.thumb_axis = np.asanyarray(thumb_axis, dtype=np.float64)
        self.forefinger_axis = np.asanyarray(
            forefinger_axis, dtype=np.float64)
        self.palm_normal = np.asanyarray(palm_normal, dtype=np.float64)


class Foot(object):
    def __init__(self, ankle, ankle_position, sole_size=(0.0, 0.0)):
        """
        A foot expressed relative to its ankle joint.

        Parameters
        ------------
        ankle : str
          Name of the associated ankle joint
        ankle_position : (3,) float
          Ankle origin in the foot frame
        sole_size : (2,) float
          Sole depth and width
        """
        self.ankle = ankle
        self.ankle_position = np.asanyarray(
            ankle_position, dtype=np.float64)
        self.sole_size = tuple(float(i) for i in sole_size)


class Gaze(object):
    def __init__(self, joint):
        # looks along the joint's local X from the joint origin
        self.joint = joint
        self.direction = np.array([1.0, 0.0, 0.0])
        self.origin = np.zeros(3)


def find_special_joints(document, root_name, roles=None):
    """
    Find the joint playing each semantic role.

    The joint of a role is the parent joint of the role's link,
    the root link belongs to the synthetic root joint.

    Parameters
    ------------
    document : document.Document
      Link and joint records
    root_name : str
      Name of the joint carrying the root link
    roles : None or dict
      Role name to link name, None meaning the root link.
      Defaults to `constants.SPECIAL_LINKS`

    Returns
    ------------
    found : dict
      Role name to joint name, unresolved roles are omitted
    """
    if roles is None:
        roles = SPECIAL_LINKS
    root = document.get_root()

    found = {}
    for role, link_name in roles.items():
        if link_name is None:
            link = root
        else:
            link = document.get_link(link_name)

        if link is None:
            log.info('no %s joint found: no link `%s`', role, link_name)
        elif root is not None and link.name == root.name:
            found[role] = root_name
        elif link.parent_joint is None:
            log.info('no %s joint found: link `%s` has no parent',
                     role, link.name)
        else:
            found[role] = link.parent_joint.name
    return found


def hand_descriptor(hand, wrist):
    """
    Describe a hand in the frame of its wrist.

    Parameters
    ------------
    hand : joint.ResolvedJoint
      Hand joint
    wrist : joint.ResolvedJoint
      Wrist joint the hand hangs from

    Returns
    ------------
    descriptor : Hand
      Center and axes from `wrist^-1 . hand`
    """
    local = transforms.compose(transforms.inverse(wrist.matrix), hand.matrix)
    return Hand(wrist=wrist.name,
                center=local[:3, 3],
                thumb_axis=local[:3, 0],
                forefinger_axis=local[:3, 1],
                palm_normal=local[:3, 2])


def foot_descriptor(foot, ankle):
    """
    Describe a foot by the ankle position in the foot frame.

    Parameters
    ------------
    foot : joint.ResolvedJoint
      Sole joint
    ankle : joint.ResolvedJoint
      Ankle joint

    Returns
    ------------
    descriptor : Foot
      Sole size is left at zero
    """
    local = transforms.compose(transforms.inverse(foot.matrix), ankle.matrix)
    return Foot(ankle=ankle.name, ankle_position=local[:3, 3])


def gaze_descriptor(joint):
    return Gaze(joint=joint.name)
