"""
backend.py
------------

Build collision solids from link geometry using trimesh.

A link only gets a solid when it declares both visual and
collision geometry, and the pair of shapes decides what is built.
"""
import os

import numpy as np
import trimesh

from .constants import log
from .exceptions import StructuralError
from .link import Solid
from . import transforms


class TrimeshBackend(object):
    def __init__(self, resolver=None):
        """
        Turns link geometry into placed trimesh geometry.

        Parameters
        ------------
        resolver : None or trimesh.resolvers.Resolver
          Used for mesh files when the document has no resolver
        """
        self.resolver = resolver

    def solids(self, link, frame, resolver=None):
        """
        Build the solids of a link.

        Parameters
        ------------
        link : document.Link
          Link with `visual` and `collision` geometry
        frame : (4, 4) float
          Link frame in the world frame
        resolver : None or trimesh.resolvers.Resolver
          Loads mesh files, `self.resolver` if not passed

        Returns
        ------------
        solids : (n,) link.Solid
          Placed geometry, empty if the shapes are not handled
        """
        if resolver is None:
            resolver = self.resolver
        visual = link.visual
        collision = link.collision
        pair = (visual.kind, collision.kind)

        if pair == ('mesh', 'mesh'):
            # visual and collision meshes are assumed to be the same
            if visual.filename != collision.filename:
                raise StructuralError(
                    'visual and collision meshes differ for `{}`'.format(
                        link.name))
            transform = transforms.compose(frame, visual.origin.matrix)
            mesh = load_mesh(visual.filename, visual.scale, resolver)
            mesh.apply_transform(transform)
            return [Solid(link.name, 'mesh', mesh, transform)]

        elif pair == ('cylinder', 'cylinder'):
            transform = transforms.compose(frame, visual.origin.matrix)
            cylinder = trimesh.primitives.Cylinder(
                radius=visual.radius,
                height=visual.length,
                transform=transform)
            return [Solid(link.name, 'cylinder', cylinder, transform)]

        elif pair == ('box', 'box'):
            transform = transforms.compose(frame, visual.origin.matrix)
            box = trimesh.primitives.Box(
                extents=visual.size,
                transform=transform)
            return [Solid(link.name, 'box', box, transform)]

        elif pair == ('sphere', 'sphere'):
            transform = transforms.compose(frame, visual.origin.matrix)
            sphere = trimesh.primitives.Sphere(
                radius=visual.radius,
                center=transform[:3, 3])
            return [Solid(link.name, 'sphere', sphere, transform)]

        elif pair == ('mesh', 'cylinder'):
            # a mesh wrapped by a collision cylinder is a capsule
            transform = transforms.compose(frame, collision.origin.matrix)
            capsule = trimesh.primitives.Capsule(
                radius=collision.radius,
                height=collision.length,
                transform=transform)
            return [Solid(link.name, 'capsule', capsule, transform),
                    Solid(link.name, 'segment',
                          capsule_segment(collision.length, transform),
                          transform)]

        log.info('no solid for `%s`: visual %s with collision %s',
                 link.name, *pair)
        return []


def capsule_segment(length, transform):
    """
    Get the axis of a capsule as a single line segment, which
    distance queries can use in place of the capsule surface.

    Parameters
    ------------
    length : float
      Distance between the centers of the capsule caps
    transform : (4, 4) float
      Capsule frame in the world frame, axis along local Z

    Returns
    ------------
    segment : trimesh.path.Path3D
      One line between the cap centers in the world frame
    """
    half = length / 2.0
    ends = trimesh.transformations.transform_points(
        [[0.0, 0.0, -half], [0.0, 0.0, half]], transform)
    return trimesh.load_path(ends.reshape((1, 2, 3)))


def load_mesh(filename, scale=None, resolver=None):
    """
    Load a mesh file from a resolver.

    Parameters
    -----------
    filename : str
      Resource name, `package://` and `file://` prefixes are stripped
    scale : None or (3,) float
      Scale applied per axis
    resolver : trimesh.resolvers.Resolver
      Resolver which can load files

    Returns
    -----------
    mesh : trimesh.Trimesh
      Loaded and scaled mesh
    """
    if resolver is None:
        raise StructuralError(
            'no resolver to load mesh `{}`'.format(filename))
    name = resource_name(filename)
    try:
        loaded = trimesh.load(
            file_obj=trimesh.util.wrap_as_stream(resolver.get(name)),
            file_type=os.path.splitext(name)[1].lstrip('.'))
    except Exception as E:
        raise StructuralError(
            'could not load mesh `{}`: {}'.format(filename, E))

    if isinstance(loaded, trimesh.Scene):
        loaded = trimesh.util.concatenate(loaded.dump())
    if not isinstance(loaded, trimesh.Trimesh):
        raise StructuralError(
            'mesh `{}` is not a known geometry type'.format(filename))

    if scale is not None:
        scaling = np.eye(4)
        scaling[:3, :3] = np.diag(scale)
        loaded.apply_transform(scaling)
    return loaded


def resource_name(filename):
    """
    Strip a URL scheme and ROS package name from a resource.

    Parameters
    ------------
    filename : str
      i.e. 'package://robot/meshes/arm.stl'

    Returns
    ------------
    name : str
      i.e. 'meshes/arm.stl'
    """
    if filename.startswith('package://'):
        # drop the package name as well as the scheme
        return filename[len('package://'):].split('/', 1)[-1]
    if filename.startswith('file://'):
        return filename[len('file://'):]
    return filename
