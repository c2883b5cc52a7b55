"""
Tests for re-expressing inertial data in normalized joint frames.
"""

import numpy as np

from urdfkin import Parser
from urdfkin.bodies import express_inertial
from urdfkin.document import Inertial, Pose
from urdfkin import transforms


def test_revolute_body(arm):
    model = Parser().parse(arm)
    body = model.joints['shoulder'].body
    assert body.name == 'arm'
    assert body.mass == 2.0
    # the declared Z axis is local X after normalization
    assert np.allclose(body.com, [1, 0, 0])
    assert np.allclose(body.inertia, np.diag([3.0, 1.0, 2.0]))


def test_root_body_without_inertial(arm):
    body = Parser().parse(arm).joints['base_joint'].body
    assert body.name == 'base_link'
    assert body.mass == 0.0
    assert np.allclose(body.com, 0.0)
    assert np.allclose(body.inertia, 0.0)


def test_fixed_joint_body_is_not_rotated(humanoid):
    body = Parser().parse(humanoid).joints['torso_joint'].body
    assert body.name == 'torso'
    assert body.mass == 5.0
    assert np.allclose(body.inertia, np.diag([0, 0, 1.0]))


def test_every_joint_has_a_body(humanoid):
    model = Parser().parse(humanoid)
    for joint in model.joints.values():
        assert joint.body is not None


def test_express_without_axis():
    inertial = Inertial(mass=1.0, origin=Pose([1, 2, 3]),
                        ixx=1.0, ixy=0.5, iyy=2.0, izz=3.0)
    com, inertia = express_inertial(inertial)
    assert np.allclose(com, [1, 2, 3])
    assert np.allclose(inertia, inertia.T)
    assert inertia[0, 1] == 0.5


def test_world_center_of_mass_is_unchanged():
    # the center of mass in world must not depend on normalization
    axis = np.array([2.0, -1.0, 0.5])
    axis /= np.linalg.norm(axis)
    inertial = Inertial(mass=1.0, origin=Pose([0.3, -0.2, 0.7]),
                        ixx=1.0, ixy=0.1, ixz=0.2,
                        iyy=2.0, iyz=-0.3, izz=3.0)
    joint_frame = transforms.pose_to_matrix(
        [1, 2, 3], transforms.quaternion_from_rpy([0.1, 0.2, 0.3]))
    placement = transforms.normalize(joint_frame, axis)

    com, inertia = express_inertial(inertial, axis)
    world = transforms.transform_point(placement, com)
    expected = transforms.transform_point(
        joint_frame, inertial.origin.position)
    assert np.allclose(world, expected)

    # same for the inertia tensor expressed in world axes
    rotation = placement[:3, :3]
    declared = joint_frame[:3, :3]
    assert np.allclose(
        np.dot(np.dot(rotation, inertia), rotation.T),
        np.dot(np.dot(declared, inertial.matrix), declared.T))
