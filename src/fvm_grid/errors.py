# -*- coding: utf-8 -*-
"""
Exceptions raised while building structured mesh geometry.

Every error is a construction-time error: it is raised as soon as an invalid
input or a degenerate piece of geometry is detected, and it never leaves a
partially built mesh behind.
"""


class StructuredMeshError(Exception):
    """Base class for all errors raised by the package."""


class DivisionByZero(StructuredMeshError, ZeroDivisionError):
    """A vector was divided by an exact zero scalar."""


class DegenerateFace(StructuredMeshError, ValueError):
    """A face has zero area or its normal has zero magnitude."""


class InvalidDimensions(StructuredMeshError, ValueError):
    """A grid dimension is not a positive integer."""


class VertexCountMismatch(StructuredMeshError, ValueError):
    """The vertex lattice does not match the declared grid dimensions."""


class FieldShapeMismatch(StructuredMeshError, ValueError):
    """A cell or face value array does not match the mesh it is defined on."""


class DegenerateCellWarning(UserWarning):
    """A cell with zero volume was found while building a mesh."""
