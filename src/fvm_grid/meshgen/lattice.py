# -*- coding: utf-8 -*-
"""
Vertex lattice generators for structured meshes.

The functions in this module produce vertex coordinates only; building the
cell and face geometry is left to `MeshStructure`.
"""
from typing import Optional, Sequence

import numpy as np


def uniform_coordinates(
    n: int, length: float = 1.0, origin: float = 0.0
) -> np.ndarray:
    """
    Returns `n + 1` equally spaced vertex coordinates.

    Args:
        n (int): Number of cells.
        length (float): Length of the covered interval.
        origin (float): Coordinate of the first vertex.
    """
    if n <= 0:
        raise ValueError("The number of cells must be positive.")
    return origin + np.linspace(0.0, length, n + 1)


def graded_coordinates(
    n: int, length: float = 1.0, ratio: float = 1.0, origin: float = 0.0
) -> np.ndarray:
    """
    Returns `n + 1` vertex coordinates with geometrically growing spacing.

    Each cell is `ratio` times as long as the previous one; `ratio=1` gives
    uniform spacing.
    """
    if n <= 0:
        raise ValueError("The number of cells must be positive.")
    if ratio <= 0:
        raise ValueError("The grading ratio must be positive.")
    spacing = ratio ** np.arange(n)
    edges = np.concatenate(([0.0], np.cumsum(spacing)))
    return origin + length * edges / edges[-1]


def tensor_lattice(
    x: Sequence[float],
    y: Optional[Sequence[float]] = None,
    z: Optional[Sequence[float]] = None,
) -> np.ndarray:
    """
    Builds the vertex lattice of a rectilinear grid from axis coordinates.

    Axes that are not given are collapsed to a single vertex layer at
    coordinate 0.

    Returns:
        np.ndarray: The vertex lattice.
            - Shape: `(len(x), len(y) or 1, len(z) or 1, 3)`
    """
    axes = [
        np.asarray(c, dtype=float) if c is not None else np.zeros(1)
        for c in (x, y, z)
    ]
    grids = np.meshgrid(*axes, indexing="ij")
    return np.stack(grids, axis=-1)


def skew_lattice(vertices: np.ndarray, shear: float) -> np.ndarray:
    """
    Applies the shear `x += shear * y` to a vertex lattice.

    Useful for building non-orthogonal meshes from a rectilinear one.
    """
    skewed = np.array(vertices, dtype=float, copy=True)
    skewed[..., 0] += shear * skewed[..., 1]
    return skewed
