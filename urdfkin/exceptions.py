"""
exceptions.py
---------------

Errors which abort resolving a kinematic tree.
"""


class StructuralError(ValueError):
    """
    The document can not be turned into a kinematic tree:
    a missing link, a broken parent chain, a cycle, etc.
    """


class DuplicateNameError(StructuralError):
    """
    Two joints (or two links) share a name.
    """


class UnsupportedJointError(StructuralError):
    """
    A joint kind is unknown or is known but not supported.
    """
