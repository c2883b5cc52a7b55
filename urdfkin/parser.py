"""
parser.py
------------

Resolve a parsed robot description into a `KinematicModel`.

A synthetic root joint carries the root link, every document joint
becomes a resolved joint placed in the reference frame, and actuated
joints have their frame rotated so the motion axis is local X. The
same rotation is undone when link data declared in the document's
joint frame (inertia, geometry) is moved onto the resolved joint.
"""
import numpy as np

from .constants import log, tol, ROOT_JOINT_NAME, FREEFLYER_BOUNDS
from .exceptions import (StructuralError,
                         DuplicateNameError,
                         UnsupportedJointError)
from .joint import JointKind
from .link import Body
from .chain import KinematicModel
from .backend import TrimeshBackend
from .frames import pose_in_reference_frame
from .bodies import express_inertial
from . import effectors
from . import transforms


class Parser(object):
    def __init__(self,
                 root_kind='floating',
                 root_name=ROOT_JOINT_NAME,
                 reference=None,
                 roles=None,
                 backend=None,
                 root_bounds=FREEFLYER_BOUNDS):
        """
        Create a parser, which can be reused for many documents.

        Parameters
        ------------
        root_kind : str
          Kind of the synthetic root joint: 'floating' or 'fixed'
        root_name : str
          Name of the synthetic root joint
        reference : None or str
          Joint whose frame placements are expressed in,
          None for the root link frame
        roles : None or dict
          Role name to link name, see `constants.SPECIAL_LINKS`
        backend : None or TrimeshBackend
          Builds solids from link geometry
        root_bounds : None or (6,) tuple
          Bounds applied to a floating root after parsing
        """
        root_kind = JointKind.from_string(root_kind)
        if root_kind not in (JointKind.FLOATING, JointKind.FIXED):
            raise UnsupportedJointError(
                'root joint can not be `{}`'.format(root_kind.value))
        self.root_kind = root_kind
        self.root_name = root_name
        self.reference = reference
        self.roles = roles
        if backend is None:
            backend = TrimeshBackend()
        self.backend = backend
        self.root_bounds = root_bounds

        self.reset()

    def reset(self):
        """
        Forget everything about the last parsed document.
        """
        self.document = None
        self.model = None
        self.special = {}

    def parse(self, document):
        """
        Resolve a document into a kinematic model.

        Parameters
        ------------
        document : document.Document
          Parsed link and joint records

        Returns
        ------------
        model : KinematicModel
          Fully resolved model

        Raises
        ------------
        StructuralError
          If the document can not form a kinematic tree,
          in which case the parser keeps no model
        """
        self.reset()
        self.document = document
        self.model = KinematicModel(name=document.name)
        try:
            self.build_tree()
            self.connect(self.model.joints[self.root_name])
            self.set_special_joints()
            self.attach_bodies()
            self.model.set_actuated(self.actuated_joints())
            self.fill_gaze()
            self.fill_hands_and_feet()
            self.set_root_bounds()
        except StructuralError as E:
            log.error('could not parse `%s`: %s', document.name, E)
            self.reset()
            raise
        return self.model

    def create_joint(self, kind, name, matrix, limits=None):
        """
        Create a resolved joint and register it in the model.

        Parameters
        ------------
        kind : JointKind or str
          Kind of joint to create
        name : str
          Unique joint name
        matrix : (4, 4) float
          Placement in the reference frame
        limits : None or document.Limits
          Bounds for revolute and prismatic joints

        Returns
        ------------
        joint : joint.ResolvedJoint
          Registered joint
        """
        kind = JointKind.from_string(kind)
        if name in self.model.joints:
            raise DuplicateNameError(
                'duplicate {} joint `{}`'.format(kind.value, name))

        if kind == JointKind.FLOATING:
            joint = self.model.create_floating_joint(name, matrix)
        elif kind == JointKind.REVOLUTE:
            joint = self.model.create_revolute_joint(name, matrix)
        elif kind == JointKind.CONTINUOUS:
            joint = self.model.create_continuous_joint(name, matrix)
        elif kind == JointKind.PRISMATIC:
            joint = self.model.create_prismatic_joint(name, matrix)
        elif kind == JointKind.FIXED:
            joint = self.model.create_fixed_joint(name, matrix)
        else:
            raise UnsupportedJointError(
                '{} joint `{}` is not supported'.format(kind.value, name))

        if limits is not None and kind in (JointKind.REVOLUTE,
                                           JointKind.PRISMATIC):
            joint.apply_limits(limits)
        return joint

    def joint_matrix(self, joint):
        """
        Get the placement of a document joint.

        Parameters
        ------------
        joint : document.Joint
          Joint record

        Returns
        ------------
        matrix : (4, 4) float
          Pose in the reference frame, normalized if actuated
        """
        matrix = pose_in_reference_frame(
            self.document, self.reference, joint.name)
        if JointKind.from_string(joint.kind).actuated:
            if np.linalg.norm(joint.axis) < tol.zero:
                raise StructuralError(
                    'joint `{}` has a zero axis'.format(joint.name))
            matrix = transforms.normalize(matrix, joint.axis)
        return matrix

    def build_tree(self):
        """
        Create the root joint and one resolved joint per document joint.
        """
        if (self.reference not in (None, self.root_name) and
                self.document.get_joint(self.reference) is None):
            raise StructuralError(
                'reference joint `{}` is not in the document'.format(
                    self.reference))
        root = self.create_joint(self.root_kind, self.root_name, np.eye(4))
        self.model.set_root(root)

        for name, joint in self.document.joints.items():
            kind = JointKind.from_string(joint.kind)
            if kind == JointKind.PLANAR:
                raise UnsupportedJointError(
                    'planar joint `{}` is not supported'.format(name))
            self.create_joint(kind=kind,
                              name=name,
                              matrix=self.joint_matrix(joint),
                              limits=joint.limits)

    def child_link(self, name):
        """
        Get the document link carried by a resolved joint.

        Parameters
        ------------
        name : str
          Resolved joint name

        Returns
        ------------
        link : document.Link
          The root link for the root joint
        """
        if name == self.root_name:
            link = self.document.get_root()
            if link is None:
                raise StructuralError('document is missing a root link')
            return link

        joint = self.document.get_joint(name)
        if joint is None:
            raise StructuralError(
                'joint `{}` is not in the document'.format(name))
        link = self.document.get_link(joint.child_link_name)
        if link is None:
            raise StructuralError(
                'link `{}` of joint `{}` not found'.format(
                    joint.child_link_name, name))
        return link

    def connect(self, joint, _seen=None):
        """
        Attach the children of a joint, then theirs, recursively.

        Parameters
        ------------
        joint : joint.ResolvedJoint
          Joint already in the model
        """
        if _seen is None:
            _seen = set()
        if joint.name in _seen:
            raise StructuralError(
                'joint `{}` reached twice: cycle in document'.format(
                    joint.name))
        _seen.add(joint.name)

        for child_joint in self.child_link(joint.name).child_joints:
            child = self.model.joints.get(child_joint.name)
            if child is None:
                raise StructuralError(
                    'failed to connect joint `{}`'.format(child_joint.name))
            self.model.add_child(joint, child)
            self.connect(child, _seen=_seen)

    def set_special_joints(self):
        """
        Record the joint playing each semantic role.
        """
        self.special = effectors.find_special_joints(
            self.document, self.root_name, self.roles)
        for role, name in self.special.items():
            joint = self.model.joints.get(name)
            if joint is None:
                log.info('no %s joint found', role)
                continue
            self.model.set_role(role, joint)

    def actuated_axis(self, name):
        """
        Get the axis a resolved joint was normalized with.

        Returns
        ------------
        axis : None or (3,) float
          None for the root and joints which are not actuated
        """
        joint = self.document.get_joint(name)
        if name == self.root_name or joint is None:
            return None
        if JointKind.from_string(joint.kind).actuated:
            return joint.axis
        return None

    def link_frame(self, joint):
        """
        Get the frame of the document link carried by a joint.

        Parameters
        ------------
        joint : joint.ResolvedJoint
          Resolved joint

        Returns
        ------------
        matrix : (4, 4) float
          Link frame, with the normalization undone
        """
        axis = self.actuated_axis(joint.name)
        if axis is None:
            return joint.matrix
        return transforms.denormalize(joint.matrix, axis)

    def attach_bodies(self):
        """
        Build the body and solids of every resolved joint.
        """
        for name, joint in self.model.joints.items():
            link = self.child_link(name)

            mass = 0.0
            com = None
            inertia = None
            if link.inertial is not None:
                mass = link.inertial.mass
                com, inertia = express_inertial(
                    link.inertial, self.actuated_axis(name))
            else:
                log.info('missing inertial information in link `%s`',
                         link.name)
            self.model.attach_body(
                joint, Body(name=link.name,
                            mass=mass,
                            com=com,
                            inertia=inertia))

            if link.visual is not None and link.collision is not None:
                solids = self.backend.solids(
                    link=link,
                    frame=self.link_frame(joint),
                    resolver=self.document.resolver)
                for solid in solids:
                    self.model.attach_solid(joint, solid)

    def actuated_joints(self):
        """
        Get resolved joints with a document kind which moves.

        Returns
        ------------
        actuated : (n,) joint.ResolvedJoint
          In document order
        """
        actuated = []
        for name, joint in self.document.joints.items():
            if not JointKind.from_string(joint.kind).actuated:
                continue
            resolved = self.model.joints.get(name)
            if resolved is None:
                raise StructuralError(
                    'failed to compute actuated joints: `{}`'.format(name))
            actuated.append(resolved)
        return actuated

    def fill_gaze(self):
        joint = self.model.joint('gaze')
        if joint is None:
            log.info('no gaze joint found')
            return
        self.model.set_gaze(effectors.gaze_descriptor(joint))

    def fill_hands_and_feet(self):
        """
        Derive hand and foot descriptors for both sides
        from joint placements.
        """
        for side in ('left', 'right'):
            hand = self.model.joint(side + '_hand')
            wrist = self.model.joint(side + '_wrist')
            if hand is not None and wrist is not None:
                self.model.set_hand(
                    side, effectors.hand_descriptor(hand, wrist))
            else:
                log.info('could not set %s hand', side)

            foot = self.model.joint(side + '_foot')
            ankle = self.model.joint(side + '_ankle')
            if foot is not None and ankle is not None:
                self.model.set_foot(
                    side, effectors.foot_descriptor(foot, ankle))
            else:
                log.info('could not set %s foot', side)

    def set_root_bounds(self):
        """
        Bound the degrees of freedom of a floating root.
        """
        root = self.model.joints[self.root_name]
        if root.kind != JointKind.FLOATING or self.root_bounds is None:
            return
        for index, bounds in enumerate(self.root_bounds):
            if bounds is None:
                root.unbound(index)
            else:
                root.bound(index, *bounds)
