# -*- coding: utf-8 -*-
"""
Cell volumes and centroids of a structured mesh.

This module provides the `CellBlock` class, which stores the volume and the
centroid of every cell of an `Nx x Ny x Nz` structured grid, together with the
per-cell routines that compute them from the bounding vertices:

- 1D cells (segments) are bars of unit cross-section.
- 2D cells (quads) are slabs of unit thickness. The quad is split into the
  same two triangles used for 3D faces.
- 3D cells (hexahedra) are decomposed into twelve tetrahedra, one per face
  triangle, sharing the mean of the eight corners as apex. Sub-volumes are
  signed.

Degenerate (zero-volume) cells are stored as they are. Flagging them is left
to the code that builds the mesh.
"""
from __future__ import annotations

from typing import List, Tuple

import numpy as np

from ..geometry.face import split_quad_metrics
from ..geometry.vector import Vector3, centroid
from .mesh_kind import MeshKind

# --- Constants for magic numbers ---
GEOMETRY_TOLERANCE = 1e-12

# Local corner offsets (di, dj, dk) of the quad a, b, c, d bounding a face
# normal to each axis. The raw normal (b - a) x (d - a) points along +axis.
QUAD_FACE_OFFSETS = {
    0: ((0, 0, 0), (0, 1, 0), (0, 1, 1), (0, 0, 1)),
    1: ((0, 0, 0), (0, 0, 1), (1, 0, 1), (1, 0, 0)),
    2: ((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)),
}


def _span(points: List[Vector3]) -> float:
    """Largest extent of the bounding box of `points`."""
    coords = np.array([p.to_array() for p in points])
    return float(np.max(np.ptp(coords, axis=0)))


def segment_cell_metrics(a: Vector3, b: Vector3) -> Tuple[float, Vector3]:
    """Returns the length and the midpoint of the segment from `a` to `b`."""
    return (b - a).norm(), (a + b) / 2.0


def quad_cell_metrics(
    v00: Vector3, v10: Vector3, v11: Vector3, v01: Vector3
) -> Tuple[float, Vector3]:
    """
    Returns the area and the area-weighted centroid of a quad cell.

    The corners are given counter-clockwise in lattice order:
    `(i, j), (i+1, j), (i+1, j+1), (i, j+1)`.
    """
    a1, a2, c1, c2 = split_quad_metrics(v00, v10, v11, v01)
    area = a1 + a2
    if area <= GEOMETRY_TOLERANCE * _span([v00, v10, v11, v01]) ** 2:
        return 0.0, centroid(v00, v10, v11, v01)
    return area, (a1 / area) * c1 + (a2 / area) * c2


def hexahedron_cell_metrics(corners: np.ndarray) -> Tuple[float, Vector3]:
    """
    Returns the volume and the volume-weighted centroid of a hexahedral cell.

    Args:
        corners (np.ndarray): The eight cell corners indexed by local lattice
            offset.
            - Shape: `(2, 2, 2, 3)`

    Returns:
        The (non-negative) volume and the centroid. A degenerate cell has
        volume 0 and the mean of its corners as centroid.
    """
    points = {
        offset: Vector3.from_array(corners[offset]) for offset in np.ndindex(2, 2, 2)
    }
    apex = centroid(*points.values())

    volume = 0.0
    moment = Vector3.zero()
    for axis, offsets in QUAD_FACE_OFFSETS.items():
        # The low face is traversed against its outward normal.
        for side, sign in ((0, -1.0), (1, 1.0)):
            shifted = [list(offset) for offset in offsets]
            for offset in shifted:
                offset[axis] += side
            a, b, c, d = (points[tuple(offset)] for offset in shifted)

            for t0, t1, t2 in ((d, a, b), (b, c, d)):
                tet_volume = sign * (t1 - t0).cross(t2 - t0).dot(t0 - apex) / 6.0
                volume += tet_volume
                moment = moment + tet_volume * centroid(apex, t0, t1, t2)

    if abs(volume) <= GEOMETRY_TOLERANCE * _span(list(points.values())) ** 3:
        return 0.0, apex
    return abs(volume), moment / volume


class CellBlock:
    """
    Volumes and centroids of all cells of a structured grid.

    Attributes:
        volumes (np.ndarray): The volume (3D), area (2D) or length (1D) of
            each cell.
            - Shape: `(Nx, Ny, Nz)`
        centroids (np.ndarray): The centroid of each cell.
            - Shape: `(Nx, Ny, Nz, 3)`
    """

    def __init__(self, volumes: np.ndarray, centroids: np.ndarray) -> None:
        if volumes.ndim != 3:
            raise ValueError(f"Cell volumes must be 3D, got shape {volumes.shape}.")
        if centroids.shape != volumes.shape + (3,):
            raise ValueError(
                f"Cell centroids must have shape {volumes.shape + (3,)}, "
                f"got {centroids.shape}."
            )
        self.volumes = volumes
        self.centroids = centroids

    @classmethod
    def empty(
        cls, nx: int, ny: int = 1, nz: int = 1, dtype: np.dtype = np.float64
    ) -> "CellBlock":
        """Allocates a block of uninitialized (zero-volume) cells."""
        return cls(np.zeros((nx, ny, nz), dtype), np.zeros((nx, ny, nz, 3), dtype))

    @classmethod
    def from_vertices(
        cls, vertices: np.ndarray, kind: MeshKind, dtype: np.dtype = np.float64
    ) -> "CellBlock":
        """
        Computes all cells of a vertex lattice.

        Args:
            vertices (np.ndarray): The vertex lattice. Collapsed axes hold a
                single vertex layer.
                - Shape: `(Nx+1, Ny+1 or 1, Nz+1 or 1, 3)`
            kind (MeshKind): The dimensionality of the mesh.
        """
        shape = tuple(
            n - 1 if axis < kind.n_axes else 1
            for axis, n in enumerate(vertices.shape[:3])
        )
        block = cls.empty(*shape, dtype=dtype)

        for i, j, k in np.ndindex(shape):
            if kind is MeshKind.LINE:
                volume, center = segment_cell_metrics(
                    Vector3.from_array(vertices[i, 0, 0]),
                    Vector3.from_array(vertices[i + 1, 0, 0]),
                )
            elif kind is MeshKind.PLANAR:
                volume, center = quad_cell_metrics(
                    Vector3.from_array(vertices[i, j, 0]),
                    Vector3.from_array(vertices[i + 1, j, 0]),
                    Vector3.from_array(vertices[i + 1, j + 1, 0]),
                    Vector3.from_array(vertices[i, j + 1, 0]),
                )
            else:
                volume, center = hexahedron_cell_metrics(
                    vertices[i : i + 2, j : j + 2, k : k + 2]
                )
            block.volumes[i, j, k] = volume
            block.centroids[i, j, k] = center.to_array()

        return block

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.volumes.shape

    @property
    def dtype(self) -> np.dtype:
        return self.volumes.dtype

    def centroid(self, i: int, j: int = 0, k: int = 0) -> Vector3:
        """Returns the centroid of cell `(i, j, k)`."""
        return Vector3.from_array(self.centroids[i, j, k])

    def degenerate_cells(self) -> List[Tuple[int, int, int]]:
        """Returns the indices of all cells with zero volume."""
        return [
            tuple(int(n) for n in index) for index in np.argwhere(self.volumes == 0)
        ]

    def lock(self) -> None:
        """Makes the stored arrays read-only."""
        self.volumes.setflags(write=False)
        self.centroids.setflags(write=False)
