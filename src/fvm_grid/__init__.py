"""
FVM-Grid

A Python package for building the geometry of structured Finite Volume
Method (FVM) meshes: cell volumes and centroids, and face areas, normals
and centroids.
"""

from . import geometry
from . import meshgen
from . import structmesh
from .errors import (
    StructuredMeshError,
    DivisionByZero,
    DegenerateFace,
    InvalidDimensions,
    VertexCountMismatch,
    FieldShapeMismatch,
    DegenerateCellWarning,
)
from .structmesh import MeshKind, MeshStructure, dimensions

__all__ = [
    "geometry",
    "meshgen",
    "structmesh",
    "StructuredMeshError",
    "DivisionByZero",
    "DegenerateFace",
    "InvalidDimensions",
    "VertexCountMismatch",
    "FieldShapeMismatch",
    "DegenerateCellWarning",
    "MeshKind",
    "MeshStructure",
    "dimensions",
]
