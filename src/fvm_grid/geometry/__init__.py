# -*- coding: utf-8 -*-
"""
Elementary geometry for structured finite volume meshes.

Key modules:
- vector: The immutable `Vector3` point/vector type and its products.
- face:   Area, unit normal and centroid of point, edge and quad faces.
"""

from .vector import Vector3, dot, cross, norm, isapprox, centroid
from .face import (
    FaceGeometry,
    create_face,
    create_point_face,
    create_edge_face,
    create_quad_face,
)

__all__ = [
    "Vector3",
    "dot",
    "cross",
    "norm",
    "isapprox",
    "centroid",
    "FaceGeometry",
    "create_face",
    "create_point_face",
    "create_edge_face",
    "create_quad_face",
]
