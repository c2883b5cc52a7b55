"""
document.py
-------------

Records of an already parsed robot description: links
connected by joints, as a URDF reader hands them over.

Links keep back references to their parent joint and child joints,
which `Document` wires when it is created. Nothing in here owns
anything else: the document owns every record through its two
name-keyed tables.
"""
import collections

import numpy as np

from .constants import log
from .exceptions import StructuralError, DuplicateNameError
from . import transforms


class Pose(object):
    def __init__(self, position=None, rotation=None):
        """
        A position and orientation relative to a parent frame.

        Parameters
        ------------
        position : None or (3,) float
          Translation, zero if not passed
        rotation : None or (4,) float
          Quaternion as `(w, x, y, z)`, identity if not passed
        """
        if position is None:
            position = np.zeros(3)
        if rotation is None:
            rotation = [1.0, 0.0, 0.0, 0.0]
        self.position = np.array(position, dtype=np.float64).reshape(3)
        self.rotation = np.array(rotation, dtype=np.float64).reshape(4)

    @classmethod
    def from_xyz_rpy(cls, xyz=None, rpy=None):
        """
        Create a pose from the `xyz` and `rpy` attributes
        of a URDF `origin` element.
        """
        if rpy is None:
            return cls(position=xyz)
        return cls(position=xyz,
                   rotation=transforms.quaternion_from_rpy(rpy))

    @property
    def matrix(self):
        """
        The pose as a homogeneous transform.

        Returns
        ----------
        matrix : (4, 4) float
          Transform from the child frame to the parent frame
        """
        return transforms.pose_to_matrix(self.position, self.rotation)


class Limits(object):
    def __init__(self, lower=0.0, upper=0.0, velocity=0.0, effort=0.0):
        self.lower = float(lower)
        self.upper = float(upper)
        self.velocity = float(velocity)
        self.effort = float(effort)


class Inertial(object):
    def __init__(self,
                 mass=0.0,
                 origin=None,
                 ixx=0.0,
                 ixy=0.0,
                 ixz=0.0,
                 iyy=0.0,
                 iyz=0.0,
                 izz=0.0):
        """
        Mass properties of a link.

        Parameters
        ------------
        mass : float
          Mass of the link
        origin : None or Pose
          Center of mass relative to the link frame
        ixx, ixy, ixz, iyy, iyz, izz : float
          Independent entries of the symmetric inertia tensor
        """
        self.mass = float(mass)
        self.origin = origin if origin is not None else Pose()
        self.ixx = float(ixx)
        self.ixy = float(ixy)
        self.ixz = float(ixz)
        self.iyy = float(iyy)
        self.iyz = float(iyz)
        self.izz = float(izz)

    @property
    def matrix(self):
        """
        The full symmetric inertia tensor.

        Returns
        ----------
        matrix : (3, 3) float
          Inertia tensor in the link frame
        """
        return np.array([[self.ixx, self.ixy, self.ixz],
                         [self.ixy, self.iyy, self.iyz],
                         [self.ixz, self.iyz, self.izz]],
                        dtype=np.float64)


class Geometry(object):
    # shape kinds a URDF can describe
    kinds = ('box', 'cylinder', 'sphere', 'mesh')

    def __init__(self,
                 kind,
                 origin=None,
                 size=None,
                 radius=None,
                 length=None,
                 filename=None,
                 scale=None):
        """
        A visual or collision shape attached to a link.

        Parameters
        ------------
        kind : str
          One of `Geometry.kinds`
        origin : None or Pose
          Shape frame relative to the link frame
        size : None or (3,) float
          Box extents
        radius : None or float
          Cylinder or sphere radius
        length : None or float
          Cylinder length along its Z axis
        filename : None or str
          Mesh resource name
        scale : None or (3,) float
          Mesh scale, ones if not passed
        """
        kind = str(kind).strip().lower()
        if kind not in self.kinds:
            raise ValueError('unknown geometry kind `{}`'.format(kind))
        self.kind = kind
        self.origin = origin if origin is not None else Pose()
        self.size = None if size is None else np.array(
            size, dtype=np.float64).reshape(3)
        self.radius = None if radius is None else float(radius)
        self.length = None if length is None else float(length)
        self.filename = filename
        if scale is None:
            scale = np.ones(3)
        self.scale = np.array(scale, dtype=np.float64).reshape(3)


class Link(object):
    def __init__(self,
                 name,
                 inertial=None,
                 visual=None,
                 collision=None):
        """
        A rigid body of the robot description.

        Parameters
        ------------
        name : str
          Unique name of the link
        inertial : None or Inertial
          Mass properties
        visual : None or Geometry
          Shape used for display
        collision : None or Geometry
          Shape used for collision checking
        """
        self.name = name
        self.inertial = inertial
        self.visual = visual
        self.collision = collision

        # back references set by `Document`
        self.parent_joint = None
        self.child_joints = []


class Joint(object):
    def __init__(self,
                 name,
                 kind,
                 parent_link_name,
                 child_link_name,
                 origin=None,
                 axis=None,
                 limits=None):
        """
        A connection between two links of the robot description.

        Parameters
        ------------
        name : str
          Unique name of the joint
        kind : str
          URDF joint type, i.e. 'revolute' or 'fixed'
        parent_link_name : str
          Name of the link this joint hangs from
        child_link_name : str
          Name of the link this joint moves
        origin : None or Pose
          Joint frame relative to the parent link frame
        axis : None or (3,) float
          Motion axis in the joint frame, URDF defaults to X
        limits : None or Limits
          Position, velocity and effort limits
        """
        self.name = name
        self.kind = str(kind).strip().lower()
        self.parent_link_name = parent_link_name
        self.child_link_name = child_link_name
        self.parent_to_joint_origin_transform = (
            origin if origin is not None else Pose())
        if axis is None:
            axis = [1.0, 0.0, 0.0]
        self.axis = np.array(axis, dtype=np.float64).reshape(3)
        self.limits = limits


class Document(object):
    def __init__(self, links, joints, name='', resolver=None):
        """
        An already parsed link and joint tree.

        Parameters
        ------------
        links : (n,) Link
          Every link of the description
        joints : (m,) Joint
          Every joint of the description
        name : str
          Name of the robot
        resolver : None or trimesh.resolvers.Resolver
          Loads mesh files referenced by geometry
        """
        self.name = name
        self.resolver = resolver

        self.links = collections.OrderedDict()
        for link in links:
            if link.name in self.links:
                raise DuplicateNameError(
                    'duplicate link `{}`'.format(link.name))
            self.links[link.name] = link

        self.joints = collections.OrderedDict()
        for joint in joints:
            if joint.name in self.joints:
                raise DuplicateNameError(
                    'duplicate joint `{}`'.format(joint.name))
            self.joints[joint.name] = joint

        self._init_tree()

    def _init_tree(self):
        """
        Wire the parent and child back references of every link.
        """
        for link in self.links.values():
            link.parent_joint = None
            link.child_joints = []

        for joint in self.joints.values():
            parent = self.links.get(joint.parent_link_name)
            child = self.links.get(joint.child_link_name)
            if parent is None:
                raise StructuralError(
                    'joint `{}` has missing parent link `{}`'.format(
                        joint.name, joint.parent_link_name))
            if child is None:
                raise StructuralError(
                    'joint `{}` has missing child link `{}`'.format(
                        joint.name, joint.child_link_name))
            if child.parent_joint is not None:
                raise StructuralError(
                    'link `{}` has two parent joints: `{}` and `{}`'.format(
                        child.name, child.parent_joint.name, joint.name))
            child.parent_joint = joint
            parent.child_joints.append(joint)

        roots = [link.name for link in self.links.values()
                 if link.parent_joint is None]
        if len(roots) > 1:
            raise StructuralError(
                'multiple root links: {}'.format(roots))
        if len(roots) == 0 and len(self.links) > 0:
            log.warning('no root link in `%s`: tree is cyclic', self.name)

    def get_root(self):
        """
        Get the one link without a parent joint.

        Returns
        ----------
        root : Link or None
          Root link, None if there is no such link
        """
        for link in self.links.values():
            if link.parent_joint is None:
                return link
        return None

    def get_link(self, name):
        return self.links.get(name)

    def get_joint(self, name):
        return self.joints.get(name)
