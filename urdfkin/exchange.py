"""
exchange.py
--------------

Read URDF into a `Document` of link and joint records.
"""
import numpy as np
import trimesh

try:
    import lxml.etree as etree
except BaseException as E:
    etree = trimesh.exceptions.ExceptionModule(E)

from .exceptions import StructuralError
from .document import (Document, Link, Joint, Pose,
                       Limits, Inertial, Geometry)


def _parse_file(file_obj, ext):
    """
    Load an XML file from a file path or ZIP archive.

    Parameters
    ----------
    file_obj : str
      Path to an XML file or ZIP archive
    ext : str
      Desired extension of XML-like file

    Returns
    -----------
    tree : lxml.etree.ElementTree
      Parsed XML
    resolver : trimesh.resolvers.Resolver
      Can load files referenced by the XML
    """
    # make sure extension is in the format '.extension'
    ext = '.' + ext.lower().strip().lstrip('.')

    # load our file into an etree and a resolver
    if isinstance(file_obj, str):
        if file_obj.lower().endswith(ext):
            # path was passed to actual XML file so resolver can use that path
            resolver = trimesh.resolvers.FilePathResolver(file_obj)
            tree = etree.parse(file_obj)
        elif file_obj.lower().endswith('.zip'):
            # load the ZIP archive
            with open(file_obj, 'rb') as f:
                archive = trimesh.util.decompress(f, 'zip')
            # find the first key in the archive that matches our extension
            # this will be screwey if there are multiple XML files
            key = next(k for k in archive.keys()
                       if k.lower().endswith(ext))
            # load the XML file into an etree
            tree = etree.parse(archive[key])
            # create a resolver from the archive
            resolver = trimesh.resolvers.ZipResolver(archive)
        else:
            raise ValueError(f'must be {ext} or ZIP with {ext} inside!')
    else:
        raise NotImplementedError('must load by file name')

    return tree, resolver


def _floats(text, count=None):
    values = np.array(str(text).split(), dtype=np.float64)
    if count is not None and len(values) != count:
        raise ValueError('expected {} values, got `{}`'.format(count, text))
    return values


def parse_origin(node):
    """
    Find the `origin` subelement of an XML node and
    convert it into a pose.

    Parameters
    ----------
    node : lxml.etree.Element
      An XML node which optionally has an `origin` child node

    Returns
    -------
    pose : Pose
      Identity if there is no origin
    """
    origin = node.find('{*}origin')
    if origin is None:
        return Pose()
    xyz = origin.attrib.get('xyz')
    rpy = origin.attrib.get('rpy')
    return Pose.from_xyz_rpy(
        xyz=None if xyz is None else _floats(xyz, 3),
        rpy=None if rpy is None else _floats(rpy, 3))


def parse_geometry(element):
    """
    Parse a `visual` or `collision` element.

    Returns
    ---------
    geometry : None or Geometry
      None if the element is absent or has no shape
    """
    if element is None:
        return None
    geom = element.find('{*}geometry')
    if geom is None:
        return None
    # the first element inside `geometry` is the shape
    shapes = [c for c in geom if isinstance(c.tag, str)]
    if len(shapes) == 0:
        return None
    shape = shapes[0]
    kind = str(shape.tag).split('}')[-1].lower()
    origin = parse_origin(element)
    attrib = shape.attrib
    if kind == 'box':
        return Geometry(kind, origin=origin,
                        size=_floats(attrib['size'], 3))
    elif kind == 'cylinder':
        return Geometry(kind, origin=origin,
                        radius=float(attrib['radius']),
                        length=float(attrib['length']))
    elif kind == 'sphere':
        return Geometry(kind, origin=origin,
                        radius=float(attrib['radius']))
    elif kind == 'mesh':
        scale = attrib.get('scale')
        return Geometry(kind, origin=origin,
                        filename=attrib['filename'],
                        scale=None if scale is None else _floats(scale, 3))
    raise ValueError('unknown geometry `{}`'.format(kind))


def parse_inertial(element):
    if element is None:
        return None
    mass = element.find('{*}mass')
    tensor = element.find('{*}inertia')
    values = {}
    if tensor is not None:
        values = {k: float(tensor.attrib.get(k, 0.0))
                  for k in ('ixx', 'ixy', 'ixz', 'iyy', 'iyz', 'izz')}
    return Inertial(
        mass=0.0 if mass is None else float(mass.attrib['value']),
        origin=parse_origin(element),
        **values)


def parse_link(element):
    return Link(name=element.attrib['name'],
                inertial=parse_inertial(element.find('{*}inertial')),
                visual=parse_geometry(element.find('{*}visual')),
                collision=parse_geometry(element.find('{*}collision')))


def parse_joint(element):
    name = element.attrib['name']
    if 'type' not in element.attrib:
        raise ValueError('joint `{}` has no type'.format(name))

    axis = None
    axis_node = element.find('{*}axis')
    if axis_node is not None and 'xyz' in axis_node.attrib:
        axis = _floats(axis_node.attrib['xyz'], 3)

    limits = None
    lim = element.find('{*}limit')
    if lim is not None:
        limits = Limits(**{k: float(lim.attrib.get(k, 0.0))
                           for k in ('lower', 'upper', 'velocity', 'effort')})

    connects = {}
    for tag in ('parent', 'child'):
        node = element.find('{*}' + tag)
        if node is None or 'link' not in node.attrib:
            raise StructuralError(
                'joint `{}` has no {} link'.format(name, tag))
        connects[tag] = node.attrib['link']

    return Joint(name=name,
                 kind=element.attrib['type'],
                 parent_link_name=connects['parent'],
                 child_link_name=connects['child'],
                 origin=parse_origin(element),
                 axis=axis,
                 limits=limits)


def _document(root, resolver=None):
    """
    Build a document from the `robot` element.
    """
    links = [parse_link(L) for L in root.findall('{*}link')]
    joints = [parse_joint(j) for j in root.findall('{*}joint')]
    return Document(links=links,
                    joints=joints,
                    name=root.attrib.get('name', ''),
                    resolver=resolver)


def load_urdf(file_obj):
    """
    Load a URDF file from a ZIP or file path.

    Parameters
    ------------
    file_obj : str
      Path to URDF file or ZIP with URDF inside

    Returns
    ------------
    document : Document
      Links and joints of the robot
    """
    tree, resolver = _parse_file(file_obj=file_obj, ext='.urdf')
    return _document(tree.getroot(), resolver=resolver)


def load_urdf_string(text, resolver=None):
    """
    Load URDF from a string.

    Parameters
    ------------
    text : str or bytes
      URDF XML
    resolver : None or trimesh.resolvers.Resolver
      Loads mesh files the URDF references

    Returns
    ------------
    document : Document
      Links and joints of the robot
    """
    if isinstance(text, str):
        text = text.encode('utf-8')
    return _document(etree.fromstring(text), resolver=resolver)
