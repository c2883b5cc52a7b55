"""
Tests for turning link geometry into placed solids.
"""

import numpy as np
import pytest
import trimesh

from urdfkin import Parser, StructuralError
from urdfkin.backend import resource_name, load_mesh
from urdfkin.document import Geometry, Pose


def test_box_solid(make_geometry_document, box):
    model = Parser().parse(make_geometry_document(box, box))
    solids = model.joints['hinge'].solids
    assert len(solids) == 1
    solid = solids[0]
    assert solid.kind == 'box'
    assert solid.name == 'body'
    # the normalization is undone for geometry
    assert np.allclose(solid.transform[:3, :3], np.eye(3))
    assert np.allclose(solid.transform[:3, 3], [1, 0, 0.1])
    assert np.allclose(solid.geometry.primitive.extents, [1, 2, 3])
    assert np.allclose(solid.geometry.primitive.transform, solid.transform)


def test_cylinder_solid(make_geometry_document):
    cylinder = Geometry('cylinder', origin=Pose([0, 0.5, 0]),
                        radius=0.1, length=2.0)
    model = Parser().parse(make_geometry_document(cylinder, cylinder))
    solid = model.joints['hinge'].solids[0]
    assert solid.kind == 'cylinder'
    assert np.isclose(solid.geometry.primitive.radius, 0.1)
    assert np.isclose(solid.geometry.primitive.height, 2.0)
    assert np.allclose(solid.transform[:3, 3], [1, 0.5, 0])


def test_capsule_uses_collision_origin(make_geometry_document):
    visual = Geometry('mesh', origin=Pose([0, 0, 5]), filename='arm.stl')
    collision = Geometry('cylinder', origin=Pose([0, 0, 0.25]),
                         radius=0.05, length=0.5)
    model = Parser().parse(make_geometry_document(visual, collision))
    capsule, segment = model.joints['hinge'].solids
    assert capsule.kind == 'capsule'
    assert np.allclose(capsule.transform[:3, 3], [1, 0, 0.25])

    # the capsule axis between the cap centers
    assert segment.kind == 'segment'
    assert np.allclose(segment.transform, capsule.transform)
    ends = segment.geometry.vertices
    assert np.allclose(ends[np.argsort(ends[:, 2])],
                       [[1, 0, 0], [1, 0, 0.5]])


def test_sphere_solid(make_geometry_document):
    sphere = Geometry('sphere', origin=Pose([0, 0, 1]), radius=0.5)
    model = Parser().parse(make_geometry_document(sphere, sphere))
    solid = model.joints['hinge'].solids[0]
    assert solid.kind == 'sphere'
    assert np.allclose(solid.geometry.primitive.center, [1, 0, 1])


def test_unhandled_pair_has_no_solid(make_geometry_document, box):
    sphere = Geometry('sphere', radius=0.5)
    model = Parser().parse(make_geometry_document(box, sphere))
    assert model.joints['hinge'].solids == []


def test_visual_only_has_no_solid(make_geometry_document, box):
    model = Parser().parse(make_geometry_document(box, None))
    assert model.joints['hinge'].solids == []


def test_different_meshes_fail(make_geometry_document):
    visual = Geometry('mesh', filename='a.stl')
    collision = Geometry('mesh', filename='b.stl')
    parser = Parser()
    with pytest.raises(StructuralError, match='body'):
        parser.parse(make_geometry_document(visual, collision))
    assert parser.model is None


def test_mesh_without_resolver_fails(make_geometry_document):
    mesh = Geometry('mesh', filename='a.stl')
    with pytest.raises(StructuralError):
        Parser().parse(make_geometry_document(mesh, mesh))


def test_load_mesh_missing_file(tmp_path):
    resolver = trimesh.resolvers.FilePathResolver(str(tmp_path))
    with pytest.raises(StructuralError):
        load_mesh('package://robot/meshes/missing.stl', resolver=resolver)


def test_load_mesh_scaled(tmp_path):
    trimesh.creation.box(extents=[1, 1, 1]).export(
        str(tmp_path / 'cube.stl'))
    resolver = trimesh.resolvers.FilePathResolver(str(tmp_path))
    mesh = load_mesh('file://cube.stl', scale=[2, 1, 1],
                     resolver=resolver)
    assert np.allclose(mesh.extents, [2, 1, 1])


def test_resource_name():
    assert resource_name('package://robot/meshes/a.stl') == 'meshes/a.stl'
    assert resource_name('file://meshes/a.stl') == 'meshes/a.stl'
    assert resource_name('meshes/a.stl') == 'meshes/a.stl'
