# -*- coding: utf-8 -*-
"""
This package provides the geometric description of structured, logically
rectangular finite volume meshes in 1D, 2D and 3D.

Key modules:
- mesh_structure: The MeshStructure class tying dimensions, vertices, cells
                  and faces together.
- cells:          Cell volumes and centroids (CellBlock).
- faces:          Face areas, normals and centroids per axis (FaceBlock).
- fields:         Cell/face value containers and boundary condition records.
- quality:        Functions to compute mesh quality metrics.
"""

from .mesh_kind import MeshKind
from .cells import CellBlock
from .faces import FaceArray, FaceBlock
from .mesh_structure import MeshStructure, dimensions
from .quality import MeshQuality
from .fields import (
    CellValue,
    CellVector,
    FaceValue,
    FaceVector,
    BorderValue,
    BoundaryCondition,
)

__all__ = [
    "MeshKind",
    "CellBlock",
    "FaceArray",
    "FaceBlock",
    "MeshStructure",
    "dimensions",
    "MeshQuality",
    "CellValue",
    "CellVector",
    "FaceValue",
    "FaceVector",
    "BorderValue",
    "BoundaryCondition",
]
