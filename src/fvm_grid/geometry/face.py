# -*- coding: utf-8 -*-
"""
Face geometry for structured finite volume meshes.

A face is described by its scalar area, its unit normal and its centroid
(`location`). The routines in this module compute these from the vertices
bounding the face:

- `create_point_face`: a lattice point bounding a 1D cell.
- `create_edge_face`: an edge bounding a 2D cell.
- `create_quad_face`: a (possibly non-planar) quad bounding a 3D cell.

The normal of every face is oriented with a caller-supplied reference
direction `nd`: the returned normal always satisfies `dot(normal, nd) >= 0`.
When the raw normal is exactly perpendicular to `nd` its sign is kept as is.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..errors import DegenerateFace
from .vector import Vector3, centroid, parallelogram_area, scalar_isapprox


@dataclass(frozen=True, eq=False)
class FaceGeometry:
    """
    Geometric data of one face.

    Attributes:
        area (float): The area (3D), length (2D) or cross-section (1D) of the face.
        normal (Vector3): The unit normal, oriented with the reference direction.
        location (Vector3): The face centroid.
    """

    area: float
    normal: Vector3
    location: Vector3

    def isapprox(
        self, other: "FaceGeometry", rtol: float | None = None, atol: float = 0.0
    ) -> bool:
        """Checks that area, normal and location all match within tolerance."""
        if not self.normal.isapprox(other.normal, rtol=rtol, atol=atol):
            return False
        if not self.location.isapprox(other.location, rtol=rtol, atol=atol):
            return False
        return scalar_isapprox(self.area, other.area, rtol=rtol, atol=atol)


def orient_normal(normal: Vector3, nd: Vector3) -> Vector3:
    """Flips `normal` if it points away from the reference direction `nd`."""
    if normal.dot(nd) < 0:
        return -normal
    return normal


def create_point_face(
    p: Vector3, direction: Vector3, nd: Vector3, area: float = 1.0
) -> FaceGeometry:
    """
    Creates the face of a 1D cell located at lattice point `p`.

    Args:
        p: The lattice point.
        direction: The direction of the 1D lattice line at `p`.
        nd: The reference direction used to orient the normal.
        area: The cross-section of the bar (unit by default).
    """
    length = direction.norm()
    if length == 0:
        raise DegenerateFace(f"Point face at {p!r} has no defined direction.")
    normal = orient_normal(direction / length, nd)
    return FaceGeometry(area, normal, p)


def create_edge_face(a: Vector3, b: Vector3, nd: Vector3) -> FaceGeometry:
    """
    Creates the face of a 2D cell bounded by the edge from `a` to `b`.

    The raw normal is the edge vector rotated by 90 degrees in the xy plane.

    Raises:
        DegenerateFace: If `a` and `b` coincide, or if the edge has no
            extent in the xy plane.
    """
    loc = (a + b) / 2.0
    p = a - b
    area = p.norm()
    if area == 0:
        raise DegenerateFace(f"Edge face between {a!r} and {b!r} has zero length.")
    n = Vector3(p.y, -p.x, 0.0)
    magnitude = n.norm()
    if magnitude == 0:
        raise DegenerateFace(
            f"Edge face between {a!r} and {b!r} has no normal in the xy plane."
        )
    n = n / magnitude
    return FaceGeometry(area, orient_normal(n, nd), loc)


def split_quad_metrics(
    a: Vector3, b: Vector3, c: Vector3, d: Vector3
) -> tuple[float, float, Vector3, Vector3]:
    """
    Splits the quad `a, b, c, d` into triangles `(d, a, b)` and `(b, c, d)`.

    Returns:
        The two triangle areas followed by the two triangle centroids.
    """
    c1 = centroid(d, a, b)
    c2 = centroid(b, c, d)
    a1 = parallelogram_area(b - a, d - a) / 2.0
    a2 = parallelogram_area(b - c, d - c) / 2.0
    return a1, a2, c1, c2


def create_quad_face(
    a: Vector3, b: Vector3, c: Vector3, d: Vector3, nd: Vector3
) -> FaceGeometry:
    """
    Creates the face of a 3D cell bounded by the quad `a, b, c, d`.

    The vertices must trace the quad boundary. The quad need not be planar:
    it is split along the `b-d` diagonal into two triangles and the face
    centroid is the area-weighted average of the triangle centroids.

    Raises:
        DegenerateFace: If the total area or the raw normal is zero.
    """
    a1, a2, c1, c2 = split_quad_metrics(a, b, c, d)
    area = a1 + a2
    if area == 0:
        raise DegenerateFace(
            f"Quad face {a!r}, {b!r}, {c!r}, {d!r} has zero area."
        )
    loc = (a1 / area) * c1 + (a2 / area) * c2

    p = (b - a).cross(d - a)
    magnitude = p.norm()
    if magnitude == 0:
        raise DegenerateFace(
            f"Quad face {a!r}, {b!r}, {c!r}, {d!r} has no defined normal."
        )
    return FaceGeometry(area, orient_normal(p / magnitude, nd), loc)


def create_face(*vertices: Vector3, nd: Vector3) -> FaceGeometry:
    """
    Creates a face from 2 (edge) or 4 (quad) bounding vertices.

    A single vertex is treated as a 1D point face whose direction is `nd`.
    """
    if len(vertices) == 1:
        return create_point_face(vertices[0], nd, nd)
    if len(vertices) == 2:
        return create_edge_face(vertices[0], vertices[1], nd)
    if len(vertices) == 4:
        return create_quad_face(*vertices, nd)
    raise ValueError(f"A face needs 1, 2 or 4 vertices, got {len(vertices)}.")
