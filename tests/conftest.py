"""
Pytest configuration and fixtures for urdfkin tests.
"""

import pytest

from urdfkin.document import (Document, Link, Joint, Pose,
                              Limits, Inertial, Geometry)


@pytest.fixture
def humanoid():
    """
    A small humanoid-like tree:

    base_link
      torso_joint (fixed)          -> torso
        l_wrist_joint (revolute Y) -> l_wrist
          l_gripper_joint (fixed)  -> l_gripper
        r_wrist_joint (continuous) -> r_wrist
        gaze_joint (fixed)         -> gaze
      l_ankle_joint (revolute X)   -> l_ankle
        l_sole_joint (fixed)       -> l_sole
    """
    links = [Link('base_link'),
             Link('torso', inertial=Inertial(mass=5.0, izz=1.0)),
             Link('l_wrist'),
             Link('l_gripper'),
             Link('r_wrist'),
             Link('gaze'),
             Link('l_ankle'),
             Link('l_sole')]
    joints = [
        Joint('torso_joint', 'fixed', 'base_link', 'torso',
              origin=Pose([0, 0, 0.5])),
        Joint('l_wrist_joint', 'revolute', 'torso', 'l_wrist',
              origin=Pose([0, 0.3, 0]),
              axis=[0, 1, 0],
              limits=Limits(lower=-1, upper=1, velocity=2, effort=3)),
        Joint('l_gripper_joint', 'fixed', 'l_wrist', 'l_gripper',
              origin=Pose([0.1, 0, 0])),
        Joint('r_wrist_joint', 'continuous', 'torso', 'r_wrist',
              origin=Pose([0, -0.3, 0]),
              axis=[0, 0, 1]),
        Joint('gaze_joint', 'fixed', 'torso', 'gaze',
              origin=Pose([0.1, 0, 0.2])),
        Joint('l_ankle_joint', 'revolute', 'base_link', 'l_ankle',
              origin=Pose([0, 0.1, -0.5]),
              axis=[1, 0, 0]),
        Joint('l_sole_joint', 'fixed', 'l_ankle', 'l_sole',
              origin=Pose([0, 0, -0.05]))]
    return Document(links=links, joints=joints, name='humanoid')


@pytest.fixture
def arm():
    """
    A root link and one revolute child about Z carrying mass.
    """
    links = [Link('base_link'),
             Link('arm', inertial=Inertial(
                 mass=2.0,
                 origin=Pose([0, 0, 1]),
                 ixx=1.0, iyy=2.0, izz=3.0))]
    joints = [Joint('shoulder', 'revolute', 'base_link', 'arm',
                    origin=Pose([1, 0, 0]),
                    axis=[0, 0, 1])]
    return Document(links=links, joints=joints, name='arm')


@pytest.fixture
def make_geometry_document():
    """
    Build a one-joint document whose child link has the passed shapes.
    """
    def make(visual, collision):
        links = [Link('base_link'),
                 Link('body', visual=visual, collision=collision)]
        joints = [Joint('hinge', 'revolute', 'base_link', 'body',
                        origin=Pose([1, 0, 0]),
                        axis=[0, 0, 1])]
        return Document(links=links, joints=joints, name='shapes')
    return make


@pytest.fixture
def box():
    return Geometry('box', origin=Pose([0, 0, 0.1]), size=[1, 2, 3])


@pytest.fixture
def urdf_text():
    """
    URDF for a two joint arm with geometry and inertia.
    """
    return """<?xml version="1.0"?>
<robot name="tiny">
  <!-- root -->
  <link name="base_link">
    <inertial>
      <origin xyz="0 0 0.05"/>
      <mass value="4.0"/>
      <inertia ixx="0.1" ixy="0" ixz="0" iyy="0.1" iyz="0" izz="0.2"/>
    </inertial>
    <visual>
      <geometry><box size="0.2 0.2 0.1"/></geometry>
    </visual>
    <collision>
      <geometry><box size="0.2 0.2 0.1"/></geometry>
    </collision>
  </link>
  <link name="upper">
    <inertial>
      <origin xyz="0 0 0.25" rpy="0 0 0"/>
      <mass value="1.5"/>
      <inertia ixx="0.02" ixy="0.001" ixz="0" iyy="0.02" iyz="0" izz="0.005"/>
    </inertial>
    <visual>
      <origin xyz="0 0 0.25"/>
      <geometry><cylinder radius="0.05" length="0.5"/></geometry>
    </visual>
    <collision>
      <origin xyz="0 0 0.25"/>
      <geometry><cylinder radius="0.05" length="0.5"/></geometry>
    </collision>
  </link>
  <link name="tool"/>
  <joint name="shoulder" type="revolute">
    <parent link="base_link"/>
    <child link="upper"/>
    <origin xyz="0 0 0.1" rpy="0 0 1.5707963267948966"/>
    <axis xyz="0 1 0"/>
    <limit lower="-1.57" upper="1.57" velocity="1.0" effort="30"/>
  </joint>
  <joint name="slide" type="prismatic">
    <parent link="upper"/>
    <child link="tool"/>
    <origin xyz="0 0 0.5"/>
    <axis xyz="0 0 1"/>
    <limit lower="0" upper="0.2" velocity="0.1" effort="10"/>
  </joint>
</robot>
"""

