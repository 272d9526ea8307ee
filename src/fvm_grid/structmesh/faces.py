# -*- coding: utf-8 -*-
"""
Face geometry of a structured mesh, stored per grid axis.

`FaceBlock` holds three `FaceArray` objects, one per axis. The faces normal to
axis `a` form an array that is one longer than the cell grid along `a`, since
`N + 1` faces bound `N` cells. Faces are ordered i-faces first, then j-faces,
then k-faces, each row-major over its own shape; `flat_index` and
`iter_faces` expose this ordering to code that aligns per-face data.

Faces normal to a collapsed axis (the k-faces of a 2D mesh, the j- and
k-faces of a 1D mesh) are the sides of the unit-thickness slab or the
unit-section bar: their area is the volume measure of the adjacent cell and
their location is its centroid.
"""
from __future__ import annotations

from typing import Iterator, Tuple, Union

import numpy as np

from ..geometry.face import (
    FaceGeometry,
    create_edge_face,
    create_point_face,
    create_quad_face,
)
from ..geometry.vector import Vector3, centroid
from .cells import QUAD_FACE_OFFSETS, CellBlock
from .mesh_kind import MeshKind

AXIS_NAMES = ("i", "j", "k")

UNIT_AXES = (
    Vector3(1.0, 0.0, 0.0),
    Vector3(0.0, 1.0, 0.0),
    Vector3(0.0, 0.0, 1.0),
)

Index = Tuple[int, int, int]


class FaceArray:
    """
    Geometry of all faces normal to one grid axis.

    Attributes:
        areas (np.ndarray): Face areas.
            - Shape: `(n, m, l)`
        normals (np.ndarray): Unit face normals.
            - Shape: `(n, m, l, 3)`
        locations (np.ndarray): Face centroids.
            - Shape: `(n, m, l, 3)`
    """

    def __init__(self, shape: Index, dtype: np.dtype = np.float64) -> None:
        shape = tuple(shape)
        self.areas = np.zeros(shape, dtype)
        self.normals = np.zeros(shape + (3,), dtype)
        self.locations = np.zeros(shape + (3,), dtype)

    @property
    def shape(self) -> Index:
        return self.areas.shape

    @property
    def size(self) -> int:
        return self.areas.size

    def __getitem__(self, index: Index) -> FaceGeometry:
        return FaceGeometry(
            float(self.areas[index]),
            Vector3.from_array(self.normals[index]),
            Vector3.from_array(self.locations[index]),
        )

    def __setitem__(self, index: Index, face: FaceGeometry) -> None:
        self.areas[index] = face.area
        self.normals[index] = face.normal.to_array()
        self.locations[index] = face.location.to_array()

    def lock(self) -> None:
        """Makes the stored arrays read-only."""
        for array in (self.areas, self.normals, self.locations):
            array.setflags(write=False)


class FaceBlock:
    """
    The i-, j- and k-faces of an `Nx x Ny x Nz` structured grid.

    Attributes:
        ifaces (FaceArray): Faces normal to the i axis, shape `(Nx+1, Ny, Nz)`.
        jfaces (FaceArray): Faces normal to the j axis, shape `(Nx, Ny+1, Nz)`.
        kfaces (FaceArray): Faces normal to the k axis, shape `(Nx, Ny, Nz+1)`.
    """

    def __init__(self, ifaces: FaceArray, jfaces: FaceArray, kfaces: FaceArray) -> None:
        self.ifaces = ifaces
        self.jfaces = jfaces
        self.kfaces = kfaces

    @classmethod
    def empty(
        cls, nx: int, ny: int = 1, nz: int = 1, dtype: np.dtype = np.float64
    ) -> "FaceBlock":
        """Allocates zero-filled face arrays for an `nx x ny x nz` grid."""
        return cls(
            FaceArray((nx + 1, ny, nz), dtype),
            FaceArray((nx, ny + 1, nz), dtype),
            FaceArray((nx, ny, nz + 1), dtype),
        )

    @classmethod
    def from_vertices(
        cls, vertices: np.ndarray, kind: MeshKind, cells: CellBlock
    ) -> "FaceBlock":
        """
        Computes all faces of a vertex lattice.

        The normal of face `m` along an axis is oriented toward the centroid
        of cell `m`; the last face (`m == N`) is oriented toward cell `N - 1`.
        Boundary normals therefore point into the domain.

        Args:
            vertices (np.ndarray): The vertex lattice.
                - Shape: `(Nx+1, Ny+1 or 1, Nz+1 or 1, 3)`
            kind (MeshKind): The dimensionality of the mesh.
            cells (CellBlock): The cells of the same lattice, used for the
                reference directions.

        Raises:
            DegenerateFace: If any face has zero area or no defined normal.
        """
        block = cls.empty(*cells.shape, dtype=cells.dtype)

        for axis in range(3):
            faces = block.axis(axis)
            n_cells = cells.shape[axis]
            for index in np.ndindex(faces.shape):
                cell_index = list(index)
                cell_index[axis] = min(index[axis], n_cells - 1)
                cell_center = cells.centroid(*cell_index)

                if axis >= kind.n_axes:
                    nd = UNIT_AXES[axis] if index[axis] == 0 else -UNIT_AXES[axis]
                    faces[index] = create_point_face(
                        cell_center,
                        UNIT_AXES[axis],
                        nd,
                        area=float(cells.volumes[tuple(cell_index)]),
                    )
                else:
                    faces[index] = _lattice_face(
                        vertices, kind, axis, index, cell_center
                    )

        return block

    def axis(self, key: Union[int, str]) -> FaceArray:
        """Returns the face array of an axis, given as 0-2 or 'i', 'j', 'k'."""
        if isinstance(key, str):
            if key not in AXIS_NAMES:
                raise KeyError(f"Unknown face axis '{key}'.")
            key = AXIS_NAMES.index(key)
        return (self.ifaces, self.jfaces, self.kfaces)[key]

    def counts(self) -> Tuple[int, int, int]:
        """Returns the number of i-, j- and k-faces."""
        return self.ifaces.size, self.jfaces.size, self.kfaces.size

    def total_count(self) -> int:
        return sum(self.counts())

    def flat_index(self, axis: Union[int, str], i: int, j: int, k: int) -> int:
        """
        Returns the position of a face in the global face ordering.

        Faces are numbered i-faces first, then j-faces, then k-faces, each in
        row-major order over its own array shape.
        """
        faces = self.axis(axis)
        axis = AXIS_NAMES.index(axis) if isinstance(axis, str) else axis
        offset = sum(self.counts()[:axis])
        return offset + int(np.ravel_multi_index((i, j, k), faces.shape))

    def iter_faces(self) -> Iterator[Tuple[str, Index, FaceGeometry]]:
        """Yields `(axis name, index, face)` in the global face ordering."""
        for name in AXIS_NAMES:
            faces = self.axis(name)
            for index in np.ndindex(faces.shape):
                yield name, index, faces[index]

    def lock(self) -> None:
        for faces in (self.ifaces, self.jfaces, self.kfaces):
            faces.lock()


def _lattice_face(
    vertices: np.ndarray,
    kind: MeshKind,
    axis: int,
    index: Index,
    cell_center: Vector3,
) -> FaceGeometry:
    """Builds the face at `index` normal to an active `axis` of the lattice."""
    i, j, k = index

    if kind is MeshKind.LINE:
        p = Vector3.from_array(vertices[i, 0, 0])
        if i + 1 < vertices.shape[0]:
            direction = Vector3.from_array(vertices[i + 1, 0, 0]) - p
        else:
            direction = p - Vector3.from_array(vertices[i - 1, 0, 0])
        return create_point_face(p, direction, cell_center - p)

    if kind is MeshKind.PLANAR:
        a = Vector3.from_array(vertices[i, j, 0])
        if axis == 0:
            b = Vector3.from_array(vertices[i, j + 1, 0])
        else:
            b = Vector3.from_array(vertices[i + 1, j, 0])
        return create_edge_face(a, b, cell_center - (a + b) / 2.0)

    a, b, c, d = (
        Vector3.from_array(vertices[i + di, j + dj, k + dk])
        for di, dj, dk in QUAD_FACE_OFFSETS[axis]
    )
    return create_quad_face(a, b, c, d, cell_center - centroid(a, b, c, d))
