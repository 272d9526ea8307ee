# -*- coding: utf-8 -*-
"""
This module defines the MeshStructure class, the geometric description of a
structured, logically rectangular finite volume mesh in 1D, 2D or 3D.

A MeshStructure is built once from a dimension triple and a vertex lattice.
Construction computes the volume and centroid of every cell (`CellBlock`) and
the area, unit normal and centroid of every face (`FaceBlock`). The mesh is
immutable afterwards: all stored arrays are read-only, and geometry is only
recomputed by building a new mesh.
"""
from __future__ import annotations

import logging
import numbers
import time
import warnings
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from ..errors import DegenerateCellWarning, InvalidDimensions, VertexCountMismatch
from ..geometry.vector import Vector3
from ..meshgen.lattice import tensor_lattice, uniform_coordinates
from .cells import GEOMETRY_TOLERANCE, CellBlock
from .faces import FaceBlock
from .mesh_kind import MeshKind
from .quality import MeshQuality
from .reporting import format_quality_summary

logger = logging.getLogger(__name__)

# Boundary sides as (axis, position); position 0 is the low end of the axis.
BOUNDARY_SIDES: Dict[str, Tuple[int, int]] = {
    "left": (0, 0),
    "right": (0, 1),
    "bottom": (1, 0),
    "top": (1, 1),
    "back": (2, 0),
    "front": (2, 1),
}


class MeshStructure:
    """
    Geometry of a structured finite volume mesh.

    Attributes:
        dims (Tuple[int, int, int]): The number of cells along each axis.
            Collapsed axes of 1D and 2D meshes have one cell.
        kind (MeshKind): The dimensionality of the mesh.
        vertices (np.ndarray): The vertex lattice. Collapsed axes hold a
            single vertex layer.
            - Shape: `(Nx+1, Ny+1 or 1, Nz+1 or 1, 3)`
        cells (CellBlock): Volumes and centroids of all cells.
        faces (FaceBlock): Areas, normals and centroids of all faces.
    """

    def __init__(
        self,
        dims: Sequence[int],
        vertices: Any,
        kind: Optional[MeshKind] = None,
        dtype: np.dtype = np.float64,
    ) -> None:
        """
        Builds a mesh from its grid dimensions and vertex lattice.

        Args:
            dims (Sequence[int]): 1 to 3 positive cell counts. Missing
                trailing axes have one cell.
            vertices: The vertex coordinates, either an array of shape
                `(Nx+1, [Ny+1, [Nz+1,]] d)` with `d` in {1, 2, 3}, an array of
                shape `(Nx+1,)` of x coordinates for 1D meshes, or a nested
                sequence of `Vector3` with shape `(Nx+1, [Ny+1, [Nz+1]])`.
            kind (MeshKind, optional): The dimensionality. Defaults to the
                number of supplied dimensions.
            dtype: The floating point type of all stored arrays.

        Raises:
            InvalidDimensions: If a dimension is not a positive integer or
                does not agree with `kind`.
            VertexCountMismatch: If the vertex lattice does not match `dims`.
            DegenerateFace: If a face has zero area or no defined normal.
        """
        self.kind, self.dims = _validate_dims(dims, kind)
        self.vertices = _as_lattice(vertices, self.dims, self.kind, dtype)
        self._quality: Optional[MeshQuality] = None

        logger.debug("Building %s mesh with dims %s", self.kind.name, self.dims)
        start = time.perf_counter()
        self.cells = CellBlock.from_vertices(self.vertices, self.kind, dtype)
        logger.debug(
            "Computed %d cells in %.3fs", self.n_cells, time.perf_counter() - start
        )

        start = time.perf_counter()
        self.faces = FaceBlock.from_vertices(self.vertices, self.kind, self.cells)
        logger.debug(
            "Computed %d faces in %.3fs", self.n_faces, time.perf_counter() - start
        )

        degenerate = self.cells.degenerate_cells()
        if degenerate:
            message = (
                f"Found {len(degenerate)} degenerate cells, first at {degenerate[0]}."
            )
            logger.warning(message)
            warnings.warn(message, DegenerateCellWarning, stacklevel=2)

        self.vertices.setflags(write=False)
        self.cells.lock()
        self.faces.lock()

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def from_coordinates(
        cls,
        x: Sequence[float],
        y: Optional[Sequence[float]] = None,
        z: Optional[Sequence[float]] = None,
        dtype: np.dtype = np.float64,
    ) -> "MeshStructure":
        """
        Creates a rectilinear mesh from the vertex coordinates along each axis.

        The mesh kind follows the number of coordinate arrays given.
        """
        axes = [np.asarray(c, dtype=float) for c in (x, y, z) if c is not None]
        if z is not None and y is None:
            raise InvalidDimensions("z coordinates need y coordinates.")
        dims = [c.size - 1 for c in axes]
        lattice = tensor_lattice(*axes)
        return cls(dims, lattice, kind=MeshKind(len(axes)), dtype=dtype)

    @classmethod
    def create_uniform(
        cls,
        nx: int,
        ny: Optional[int] = None,
        nz: Optional[int] = None,
        lengths: Optional[Sequence[float]] = None,
        origin: Optional[Sequence[float]] = None,
    ) -> "MeshStructure":
        """
        Creates a uniformly spaced rectilinear mesh.

        Args:
            nx, ny, nz (int): Cell counts. Omitted axes are not part of the mesh.
            lengths (Sequence[float], optional): Domain length per axis.
                Defaults to the cell count, giving unit-sized cells.
            origin (Sequence[float], optional): Lowest corner of the domain.
        """
        counts = [n for n in (nx, ny, nz) if n is not None]
        if nz is not None and ny is None:
            raise InvalidDimensions("nz needs ny.")
        _validate_dims(counts, None)
        lengths = list(lengths) if lengths is not None else [float(n) for n in counts]
        origin = list(origin) if origin is not None else [0.0] * len(counts)
        if len(lengths) != len(counts) or len(origin) != len(counts):
            raise InvalidDimensions(
                f"Expected {len(counts)} lengths and origin values."
            )
        axes = [
            uniform_coordinates(n, length, start)
            for n, length, start in zip(counts, lengths, origin)
        ]
        return cls.from_coordinates(*axes)

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def n_cells(self) -> int:
        return int(np.prod(self.dims))

    @property
    def n_vertices(self) -> int:
        return int(np.prod(self.vertices.shape[:3]))

    @property
    def n_faces(self) -> int:
        return self.faces.total_count()

    def vertex(self, i: int, j: int = 0, k: int = 0) -> Vector3:
        return Vector3.from_array(self.vertices[i, j, k])

    def cell_vertices(self, i: int, j: int = 0, k: int = 0) -> np.ndarray:
        """
        Returns the corners of cell `(i, j, k)` indexed by local lattice offset.

        Collapsed axes have a single corner layer, so the shape is
        `(2, 2, 2, 3)` in 3D, `(2, 2, 1, 3)` in 2D and `(2, 1, 1, 3)` in 1D.
        """
        stops = [
            index + (2 if axis < self.kind.n_axes else 1)
            for axis, index in enumerate((i, j, k))
        ]
        return self.vertices[i : stops[0], j : stops[1], k : stops[2]]

    def boundary_slice(self, side: str) -> Tuple[int, Tuple[Any, Any, Any]]:
        """
        Locates the faces of a boundary side in the face arrays.

        Args:
            side (str): One of 'left', 'right', 'bottom', 'top', 'back', 'front'.

        Returns:
            The face axis and the index tuple selecting the boundary faces
            from the arrays of `faces.axis(axis)`.
        """
        if side not in BOUNDARY_SIDES:
            raise KeyError(f"Unknown boundary side '{side}'.")
        axis, position = BOUNDARY_SIDES[side]
        index = [slice(None)] * 3
        index[axis] = position * self.dims[axis]
        return axis, tuple(index)

    def boundary_shape(self, side: str) -> Tuple[int, int]:
        """Returns the shape of the face array of a boundary side."""
        axis, _ = self.boundary_slice(side)
        return tuple(n for a, n in enumerate(self.dims) if a != axis)

    def isapprox(
        self, other: "MeshStructure", rtol: float = 1e-9, atol: float = 1e-12
    ) -> bool:
        """Checks that two meshes have matching dimensions and geometry."""
        if self.kind is not other.kind or self.dims != other.dims:
            return False
        pairs = [
            (self.vertices, other.vertices),
            (self.cells.volumes, other.cells.volumes),
            (self.cells.centroids, other.cells.centroids),
        ]
        for axis in range(3):
            mine, theirs = self.faces.axis(axis), other.faces.axis(axis)
            pairs.extend(
                [
                    (mine.areas, theirs.areas),
                    (mine.normals, theirs.normals),
                    (mine.locations, theirs.locations),
                ]
            )
        return all(np.allclose(a, b, rtol=rtol, atol=atol) for a, b in pairs)

    def analyze(self) -> MeshQuality:
        """Computes the mesh quality metrics once and caches them."""
        if self._quality is None:
            self._quality = MeshQuality.from_mesh(self)
        return self._quality

    def print_summary(self) -> None:
        """Prints a formatted summary report of the mesh."""
        print("\n" + "=" * 80)
        print(f"{'Mesh Structure Report':^80}")
        print("=" * 80)
        self._print_general_info()
        self._print_geometric_properties()
        self._print_cell_geometry()
        print(format_quality_summary(self.analyze()))
        print("\n" + "=" * 80)

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _print_general_info(self) -> None:
        print(f"\n{'--- General Information ---':^80}\n")
        print(f"  {'Dimension:':<25} {self.kind.n_axes}D ({self.kind.name})")
        print(f"  {'Cells per Axis:':<25} {' x '.join(str(n) for n in self.dims)}")
        print(f"  {'Number of Vertices:':<25} {self.n_vertices}")
        print(f"  {'Number of Cells:':<25} {self.n_cells}")
        print(f"  {'Number of Faces:':<25} {self.n_faces}")

    def _print_geometric_properties(self) -> None:
        """Prints the geometric bounds of the mesh."""
        points = self.vertices.reshape(-1, 3)
        min_coords = np.min(points, axis=0)
        max_coords = np.max(points, axis=0)
        print(f"\n{'--- Geometric Bounding Box ---':^80}\n")
        for axis, label in enumerate("XYZ"):
            print(
                f"  {label + ' Range:':<25} "
                f"{min_coords[axis]:.4f} to {max_coords[axis]:.4f}"
            )

    def _print_cell_geometry(self) -> None:
        print(f"\n{'--- Cell Geometry ---':^80}\n")
        print(f"  {'Metric':<25} {'Min':>15} {'Max':>15} {'Average':>15}")
        print(f"  {'-'*24} {'-'*15} {'-'*15} {'-'*15}")
        self._print_stat_line("Cell Volume", self.cells.volumes)
        for name in ("i", "j", "k"):
            self._print_stat_line(f"{name}-Face Area", self.faces.axis(name).areas)

    def _print_stat_line(self, name: str, data: np.ndarray) -> None:
        """Helper to print a formatted statistics line for a given dataset."""
        valid_data = data[data > 0]
        if valid_data.size == 0:
            return
        print(
            f"  {name:<25} {np.min(valid_data):>15.4e} "
            f"{np.max(valid_data):>15.4e} {np.mean(valid_data):>15.4e}"
        )


def dimensions(mesh: MeshStructure) -> Tuple[int, int, int]:
    """Returns the number of cells along each axis of `mesh`."""
    return mesh.dims


def _validate_dims(
    dims: Sequence[int], kind: Optional[MeshKind]
) -> Tuple[MeshKind, Tuple[int, int, int]]:
    """Checks the grid dimensions and pads them to three axes."""
    dims = list(dims)
    if kind is None:
        kind = MeshKind.from_dims(dims)
    if not 1 <= len(dims) <= 3:
        raise InvalidDimensions(f"Expected 1 to 3 grid dimensions, got {len(dims)}.")

    for n in dims:
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
            raise InvalidDimensions(
                f"Grid dimensions must be positive integers, got {dims}."
            )

    full = tuple(int(n) for n in dims) + (1,) * (3 - len(dims))
    if any(n != 1 for n in full[kind.n_axes :]):
        raise InvalidDimensions(
            f"A {kind.name} mesh cannot have more than one cell along "
            f"collapsed axes, got {full}."
        )
    return kind, full


def _as_lattice(
    vertices: Any, dims: Tuple[int, int, int], kind: MeshKind, dtype: np.dtype
) -> np.ndarray:
    """Converts the supplied vertices to a `(Nx+1, Ny+1|1, Nz+1|1, 3)` array."""
    n_axes = kind.n_axes
    lattice_shape = tuple(n + 1 if a < n_axes else 1 for a, n in enumerate(dims))

    try:
        points = np.asarray(vertices)
    except ValueError as ex:
        raise VertexCountMismatch(
            f"Vertices do not form a regular lattice: {ex}"
        ) from ex
    if points.dtype == object:
        points = _vector_array(points)
    if kind is MeshKind.LINE and points.ndim == 1:
        points = points[:, np.newaxis]

    if points.ndim == n_axes + 1 and points.shape[-1] in (1, 2, 3):
        found = points.shape[:n_axes]
    elif points.ndim == 4 and points.shape[-1] in (1, 2, 3):
        found = points.shape[:3]
    else:
        found = None

    if found is None or tuple(found) + (1,) * (3 - len(found)) != lattice_shape:
        raise VertexCountMismatch(
            f"Expected a vertex lattice of shape {lattice_shape[:n_axes]} "
            f"with 1-3 coordinates per vertex, got array of shape {points.shape}."
        )

    lattice = np.zeros(lattice_shape + (3,), dtype=dtype)
    n_coords = points.shape[-1]
    lattice[..., :n_coords] = points.reshape(lattice_shape + (n_coords,))

    if kind is MeshKind.PLANAR:
        flat = lattice.reshape(-1, 3)
        span = float(np.max(np.ptp(flat, axis=0)))
        if float(np.ptp(flat[:, 2])) > GEOMETRY_TOLERANCE * span:
            raise VertexCountMismatch(
                "The vertices of a planar mesh must lie in a plane of constant z."
            )
    return lattice


def _vector_array(points: np.ndarray) -> np.ndarray:
    """Converts an object array of `Vector3` to a float array of points."""
    flat = points.ravel()
    if not all(isinstance(p, Vector3) for p in flat):
        raise VertexCountMismatch("Vertex sequences must contain only Vector3 points.")
    return np.array([p.to_array() for p in flat]).reshape(points.shape + (3,))
