# -*- coding: utf-8 -*-
"""
Computes and stores quality metrics for a MeshStructure object.

This module provides the `MeshQuality` class, which calculates per-cell
metrics to assess a structured mesh before it is handed to a solver.

Key Features:
- Ratio of the smallest to the largest cell volume.
- Non-orthogonality: the angle between an interior face normal and the line
  joining the centroids of the two cells sharing the face.
- Skewness: how far the centroid-to-centroid line misses the face centroid.
- Aspect ratio from the cell extents along the active axes.
- Detection of degenerate (zero-volume) cells.

Classes:
    MeshQuality: A class for computing and storing mesh quality metrics.
"""
from __future__ import annotations
from typing import List, Tuple, TYPE_CHECKING
from dataclasses import dataclass
import numpy as np

from .cells import GEOMETRY_TOLERANCE

if TYPE_CHECKING:
    from .mesh_structure import MeshStructure


def _take(array: np.ndarray, axis: int, start: int, stop: int) -> np.ndarray:
    """Returns a view of `array` restricted to `start:stop` along `axis`."""
    index = [slice(None)] * 3
    index[axis] = slice(start, stop)
    return array[tuple(index)]


@dataclass(frozen=True)
class MeshQuality:
    """
    Stores quality metrics for a MeshStructure object.

    This is a data-centric class that holds the results of a quality analysis.
    Instances of this class are created via the `from_mesh` class method.

    Attributes:
        min_max_volume_ratio (float): Ratio of the smallest to the largest cell volume.
        cell_skewness_values (np.ndarray): Skewness values for each cell.
            - Shape: `(Nx, Ny, Nz)`
        cell_non_orthogonality_values (np.ndarray): Non-orthogonality values
            (in degrees) for each cell.
            - Shape: `(Nx, Ny, Nz)`
        cell_aspect_ratio_values (np.ndarray): Aspect ratio values for each cell.
            - Shape: `(Nx, Ny, Nz)`
        degenerate_cells (List[Tuple[int, int, int]]): Indices of cells with
            zero volume.
    """

    min_max_volume_ratio: float
    cell_skewness_values: np.ndarray
    cell_non_orthogonality_values: np.ndarray
    cell_aspect_ratio_values: np.ndarray
    degenerate_cells: List[Tuple[int, int, int]]

    @classmethod
    def from_mesh(cls, mesh: "MeshStructure") -> "MeshQuality":
        """
        Computes all mesh quality metrics from a MeshStructure object and
        returns a new instance.
        """
        skewness, non_orthogonality = cls._compute_face_metrics(mesh)
        return cls(
            min_max_volume_ratio=cls._compute_volume_ratio(mesh),
            cell_skewness_values=skewness,
            cell_non_orthogonality_values=non_orthogonality,
            cell_aspect_ratio_values=cls._compute_aspect_ratio(mesh),
            degenerate_cells=mesh.cells.degenerate_cells(),
        )

    @staticmethod
    def _compute_volume_ratio(mesh: "MeshStructure") -> float:
        """Calculates the ratio of the smallest to the largest cell volume."""
        min_vol = np.min(mesh.cells.volumes)
        max_vol = np.max(mesh.cells.volumes)
        return float(min_vol / max_vol) if max_vol > GEOMETRY_TOLERANCE else 0.0

    @staticmethod
    def _compute_face_metrics(
        mesh: "MeshStructure",
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Computes skewness and non-orthogonality over all interior faces.

        Each interior face contributes to both cells that share it; a cell
        keeps the worst value of its faces.
        """
        centroids = mesh.cells.centroids
        skewness = np.zeros(mesh.dims)
        non_orthogonality = np.zeros(mesh.dims)

        for axis in range(mesh.kind.n_axes):
            n = mesh.dims[axis]
            if n < 2:
                continue
            faces = mesh.faces.axis(axis)
            normals = _take(faces.normals, axis, 1, n)
            locations = _take(faces.locations, axis, 1, n)
            left = _take(centroids, axis, 0, n - 1)
            d = _take(centroids, axis, 1, n) - left

            dist = np.linalg.norm(d, axis=-1)
            valid = dist > GEOMETRY_TOLERANCE
            safe_dist = np.where(valid, dist, 1.0)

            n_dot_d = np.sum(normals * d, axis=-1)
            cos_angle = np.clip(np.abs(n_dot_d) / safe_dist, 0.0, 1.0)
            angle = np.where(valid, np.degrees(np.arccos(cos_angle)), 90.0)

            # Point where the centroid-to-centroid line crosses the face plane
            crosses = np.abs(n_dot_d) > GEOMETRY_TOLERANCE
            t = np.sum(normals * (locations - left), axis=-1) / np.where(
                crosses, n_dot_d, 1.0
            )
            crossing = left + t[..., np.newaxis] * d
            skew = np.linalg.norm(locations - crossing, axis=-1) / safe_dist
            skew = np.where(valid & crosses, skew, 1.0)

            for start, stop in ((0, n - 1), (1, n)):
                view = _take(non_orthogonality, axis, start, stop)
                np.maximum(view, angle, out=view)
                view = _take(skewness, axis, start, stop)
                np.maximum(view, skew, out=view)

        return skewness, non_orthogonality

    @staticmethod
    def _compute_aspect_ratio(mesh: "MeshStructure") -> np.ndarray:
        """
        Computes the ratio of the largest to the smallest cell extent.

        The extent along an axis is the distance between the centroids of the
        two faces bounding the cell along that axis.
        """
        extents = []
        for axis in range(mesh.kind.n_axes):
            n = mesh.dims[axis]
            locations = mesh.faces.axis(axis).locations
            extents.append(
                np.linalg.norm(
                    _take(locations, axis, 1, n + 1) - _take(locations, axis, 0, n),
                    axis=-1,
                )
            )
        extents = np.stack(extents, axis=-1)
        min_extent = np.min(extents, axis=-1)
        max_extent = np.max(extents, axis=-1)
        ratio = np.full(mesh.dims, np.inf)
        np.divide(
            max_extent, min_extent, out=ratio, where=min_extent > GEOMETRY_TOLERANCE
        )
        return ratio
