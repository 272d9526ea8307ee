"""
Vertex lattice generation for structured meshes.
"""

from .lattice import (
    uniform_coordinates,
    graded_coordinates,
    tensor_lattice,
    skew_lattice,
)

__all__ = [
    "uniform_coordinates",
    "graded_coordinates",
    "tensor_lattice",
    "skew_lattice",
]
