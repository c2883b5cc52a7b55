"""
chain.py
-----------

The resolved kinematic model: joints placed in the reference frame
and connected by name, the bodies and solids they carry, and the
semantic roles, hands, feet and gaze derived from them.

`Parser` populates a `KinematicModel` through its `create_*`,
`attach_*` and `set_*` methods, which is also the protocol a
different model runtime would implement.

Uses sympy to produce numpy-lambdas for forward kinematics, which once
computed are quite fast (for Python anyway) to execute.
"""
import collections

import numpy as np
import sympy as sp
import networkx as nx

from .joint import JointKind, ResolvedJoint
from . import transforms


class KinematicModel(object):
    """
    A tree of resolved joints carrying bodies and solids.
    """

    def __init__(self, name=''):
        """
        Create an empty model.

        Parameters
        --------------
        name : str
          Name of the robot
        """
        self.name = name
        # joint name to `ResolvedJoint`, in creation order
        self.joints = collections.OrderedDict()
        self.root = None

        # role name to joint name
        self.roles = {}
        # side ('left' or 'right') to descriptor
        self.hands = {}
        self.feet = {}
        self.gaze = None
        # names of joints which are actuated
        self.actuated = []
        # every parameter symbol name in use
        self._symbols = set()

    def _create(self, kind, name, matrix):
        joint = ResolvedJoint(name=name,
                              kind=kind,
                              matrix=matrix,
                              taken=self._symbols)
        self.joints[name] = joint
        self._symbols.update(str(p) for p in joint.parameters)
        return joint

    def create_floating_joint(self, name, matrix):
        return self._create(JointKind.FLOATING, name, matrix)

    def create_revolute_joint(self, name, matrix):
        return self._create(JointKind.REVOLUTE, name, matrix)

    def create_continuous_joint(self, name, matrix):
        return self._create(JointKind.CONTINUOUS, name, matrix)

    def create_prismatic_joint(self, name, matrix):
        return self._create(JointKind.PRISMATIC, name, matrix)

    def create_fixed_joint(self, name, matrix):
        return self._create(JointKind.FIXED, name, matrix)

    def set_root(self, joint):
        self.root = joint.name

    def add_child(self, parent, child):
        """
        Make `child` a kinematic child of `parent`.

        Parameters
        ------------
        parent : joint.ResolvedJoint
          Joint higher in the tree
        child : joint.ResolvedJoint
          Joint moved by `parent`
        """
        child.parent = parent.name
        parent.children.append(child.name)

    def attach_body(self, joint, body):
        joint.body = body

    def attach_solid(self, joint, solid):
        joint.solids.append(solid)

    def set_role(self, role, joint):
        self.roles[role] = joint.name

    def set_actuated(self, joints):
        self.actuated = [j.name for j in joints]

    def set_hand(self, side, hand):
        self.hands[side] = hand

    def set_foot(self, side, foot):
        self.feet[side] = foot

    def set_gaze(self, gaze):
        self.gaze = gaze

    def joint(self, role):
        """
        Get the joint playing a role.

        Parameters
        ------------
        role : str
          Role name such as 'chest'

        Returns
        ------------
        joint : joint.ResolvedJoint or None
          Joint with that role
        """
        name = self.roles.get(role)
        if name is None:
            return None
        return self.joints.get(name)

    @property
    def parameters(self):
        """
        What are the variables that define the state of the model.

        Returns
        ---------
        parameters : (n,) sympy.Symbol
          Ordered parameters
        """
        return [p for j in self.joints.values() for p in j.parameters]

    @property
    def limits(self):
        """
        Position bounds of every parameter.

        Returns
        ---------
        limits : (n, 2) float
          Lower and upper bound, infinite when unbounded
        """
        limits = [np.column_stack((j.lower, j.upper))
                  for j in self.joints.values() if j.dof > 0]
        if len(limits) == 0:
            return np.zeros((0, 2))
        return np.vstack(limits)

    def graph(self):
        """
        Get a directed graph where edges go from parent
        joint to child joint.

        Returns
        ----------
        graph : networkx.DiGraph
          Graph containing connectivity information
        """
        graph = nx.DiGraph()
        graph.add_nodes_from(self.joints.keys())
        for name, joint in self.joints.items():
            for child in joint.children:
                graph.add_edge(name, child)
        return graph

    def paths(self):
        """
        Find the route from the root joint to every joint.

        Returns
        ---------
        paths : dict
          Keys are joint names, values are a list of joint
          names starting with the root and ending with the key
        """
        if self.root is None:
            return {}
        return dict(nx.single_source_shortest_path(
            self.graph(), self.root))

    def forward_kinematics(self):
        """
        Get the symbolic sympy forward kinematics.

        Returns
        -----------
        symbolic : dict
          Keyed by joint name to a sympy matrix which
          equals the joint placement with every parameter zero
        """
        def product(L):
            if len(L) == 0:
                return sp.eye(4)
            cum = L[0]
            for i in L[1:]:
                cum = cum * i
            return cum

        # each joint's transform relative to its parent
        local = {}
        for name, joint in self.joints.items():
            if joint.parent is None:
                offset = joint.matrix
            else:
                parent = self.joints[joint.parent].matrix
                offset = transforms.compose(
                    transforms.inverse(parent), joint.matrix)
            local[name] = sp.Matrix(offset) * joint.motion

        return {k: product([local[i] for i in path])
                for k, path in self.paths().items()}

    def forward_kinematics_lambda(self):
        """
        Get a numpy-lambda for evaluating forward kinematics relatively
        quickly.

        Returns
        -----------
        lambdas : dict
          Joint name to function which takes float values
          corresponding to self.parameters.
        """
        # a symbolic equation for every joint
        combined = self.forward_kinematics()
        parameters = self.parameters
        return {k: sp.lambdify(parameters, c, 'numpy')
                for k, c in combined.items()}

    def report(self):
        """
        Describe end effectors and actuated joints.

        Returns
        ----------
        text : str
          One line per item
        """
        lines = []
        for side, hand in sorted(self.hands.items()):
            lines.append('{} hand (wrist {})'.format(side, hand.wrist))
            lines.append('  center: {}'.format(hand.center))
            lines.append('  thumb axis: {}'.format(hand.thumb_axis))
            lines.append('  forefinger axis: {}'.format(
                hand.forefinger_axis))
            lines.append('  palm normal: {}'.format(hand.palm_normal))
        for side, foot in sorted(self.feet.items()):
            lines.append('{} foot (ankle {})'.format(side, foot.ankle))
            lines.append('  ankle position in local frame: {}'.format(
                foot.ankle_position))
            lines.append('  sole depth: {} width: {}'.format(
                *foot.sole_size))
        if self.gaze is not None:
            lines.append('gaze (joint {}) direction: {} origin: {}'.format(
                self.gaze.joint, self.gaze.direction, self.gaze.origin))
        lines.append('actuated joints: {}'.format(' '.join(self.actuated)))
        return '\n'.join(lines)
