"""
link.py
----------

What a resolved joint carries: the dynamic `Body` built from
a link's inertial data, and the `Solid` geometry built from its
visual and collision shapes.
"""
import numpy as np


class Body(object):
    def __init__(self, name, mass=0.0, com=None, inertia=None):
        """
        Mass properties expressed in the owning joint's frame.

        Parameters
        ------------
        name : str
          Name of the link the body was built from
        mass : float
          Mass of the body
        com : None or (3,) float
          Center of mass in the joint frame
        inertia : None or (3, 3) float
          Symmetric inertia tensor in the joint frame
        """
        self.name = name
        self.mass = float(mass)
        if com is None:
            com = np.zeros(3)
        if inertia is None:
            inertia = np.zeros((3, 3))
        self.com = np.array(com, dtype=np.float64).reshape(3)
        self.inertia = np.array(inertia, dtype=np.float64).reshape((3, 3))


class Solid(object):
    def __init__(self, name, kind, geometry, transform):
        """
        Collision geometry of a link placed in the world frame.

        Parameters
        ------------
        name : str
          Name of the link the solid was built from
        kind : str
          Shape kind, i.e. 'box' or 'capsule'
        geometry : trimesh.Trimesh, trimesh.primitives.Primitive or Path3D
          Geometry with `transform` already applied
        transform : (4, 4) float
          Placement of the shape frame in the world frame
        """
        self.name = name
        self.kind = kind
        self.geometry = geometry
        self.transform = np.array(transform, dtype=np.float64)
