# -*- coding: utf-8 -*-
"""
Value containers defined on the cells and faces of a MeshStructure.

These are thin records tying an array to the mesh it lives on. Every
container checks at construction that its arrays match the cell or face
counts of the mesh, so a mismatch is reported where the data is created
rather than where it is first used.

Classes:
    CellValue, CellVector: Scalar and vector quantities per cell.
    FaceValue, FaceVector: Scalar and vector quantities per i-, j- and k-face.
    BorderValue: Prescribed value or flux on the faces of one boundary side.
    BoundaryCondition: The border values of all six boundary sides.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Tuple

import numpy as np

from ..errors import FieldShapeMismatch
from .mesh_structure import BOUNDARY_SIDES, MeshStructure, dimensions


def _check_shape(name: str, array: np.ndarray, expected: Tuple[int, ...]) -> None:
    if array.shape != tuple(expected):
        raise FieldShapeMismatch(
            f"'{name}' must have shape {tuple(expected)}, got {array.shape}."
        )


def _face_shapes(mesh: MeshStructure) -> Tuple[Tuple[int, ...], ...]:
    return tuple(mesh.faces.axis(axis).shape for axis in range(3))


@dataclass(eq=False)
class CellValue:
    """A scalar (or any per-cell item) defined on every cell of `domain`."""

    domain: MeshStructure
    value: np.ndarray

    def __post_init__(self) -> None:
        self.value = np.asarray(self.value)
        _check_shape("value", self.value, dimensions(self.domain))

    @classmethod
    def zeros(cls, mesh: MeshStructure, dtype: Any = np.float64) -> "CellValue":
        return cls(mesh, np.zeros(dimensions(mesh), dtype))


@dataclass(eq=False)
class CellVector:
    """A vector defined on every cell of `domain`."""

    domain: MeshStructure
    vector: np.ndarray

    def __post_init__(self) -> None:
        self.vector = np.asarray(self.vector)
        _check_shape("vector", self.vector, dimensions(self.domain) + (3,))


@dataclass(eq=False)
class FaceValue:
    """
    A scalar defined on every face of `domain`.

    `ivalue`, `jvalue` and `kvalue` hold the values on the faces normal to
    the i, j and k axes, with the shapes of the corresponding face arrays.
    """

    domain: MeshStructure
    ivalue: np.ndarray
    jvalue: np.ndarray
    kvalue: np.ndarray

    def __post_init__(self) -> None:
        self.ivalue, self.jvalue, self.kvalue = (
            np.asarray(v) for v in (self.ivalue, self.jvalue, self.kvalue)
        )
        names = ("ivalue", "jvalue", "kvalue")
        for name, shape in zip(names, _face_shapes(self.domain)):
            _check_shape(name, getattr(self, name), shape)

    @classmethod
    def zeros(cls, mesh: MeshStructure, dtype: Any = np.float64) -> "FaceValue":
        return cls(mesh, *(np.zeros(shape, dtype) for shape in _face_shapes(mesh)))


@dataclass(eq=False)
class FaceVector:
    """A vector defined on every face of `domain`."""

    domain: MeshStructure
    ivalue: np.ndarray
    jvalue: np.ndarray
    kvalue: np.ndarray

    def __post_init__(self) -> None:
        self.ivalue, self.jvalue, self.kvalue = (
            np.asarray(v) for v in (self.ivalue, self.jvalue, self.kvalue)
        )
        names = ("ivalue", "jvalue", "kvalue")
        for name, shape in zip(names, _face_shapes(self.domain)):
            _check_shape(name, getattr(self, name), shape + (3,))


@dataclass(eq=False)
class BorderValue:
    """
    Boundary data on the faces of one side of the domain.

    Attributes:
        isflux (np.ndarray): True where a flux is prescribed, False where a
            value is prescribed.
        value (np.ndarray): The prescribed values, or fluxes multiplied by
            the face area.
    """

    isflux: np.ndarray
    value: np.ndarray

    def __post_init__(self) -> None:
        self.isflux = np.asarray(self.isflux, dtype=bool)
        self.value = np.asarray(self.value)
        _check_shape("value", self.value, self.isflux.shape)

    @classmethod
    def uniform(
        cls, shape: Tuple[int, ...], value: float, isflux: bool = False
    ) -> "BorderValue":
        """Creates a border value with the same value and type on every face."""
        return cls(np.full(shape, isflux, dtype=bool), np.full(shape, value))

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.isflux.shape


@dataclass(eq=False)
class BoundaryCondition:
    """
    Border values on all six sides of a structured domain.

    Every side is required and checked against the boundary face layout of
    `domain` when the record is created.
    """

    domain: MeshStructure
    left: BorderValue
    right: BorderValue
    bottom: BorderValue
    top: BorderValue
    back: BorderValue
    front: BorderValue

    def __post_init__(self) -> None:
        for name in BOUNDARY_SIDES:
            border = getattr(self, name)
            if not isinstance(border, BorderValue):
                raise TypeError(f"Side '{name}' must be a BorderValue.")
            _check_shape(name, border.value, self.domain.boundary_shape(name))

    @classmethod
    def uniform(
        cls, mesh: MeshStructure, value: float = 0.0, isflux: bool = True
    ) -> "BoundaryCondition":
        """Creates the same condition on every boundary face of `mesh`."""
        borders = [
            BorderValue.uniform(mesh.boundary_shape(name), value, isflux)
            for name in BOUNDARY_SIDES
        ]
        return cls(mesh, *borders)

    def side(self, name: str) -> BorderValue:
        """Returns the border value of a side by name."""
        if name not in BOUNDARY_SIDES:
            raise KeyError(f"Unknown boundary side '{name}'.")
        return getattr(self, name)

    def sides(self) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(self) if f.name != "domain")
