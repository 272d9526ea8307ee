# -*- coding: utf-8 -*-
"""
Three-component point/vector value type used by all geometric routines.

`Vector3` is immutable: every operation returns a new instance. Component-wise
arithmetic is expressed through a single `broadcast` operation that applies an
arbitrary unary or binary scalar function over the three components, with
scalars broadcast to every component.

Equality of geometric quantities is only ever approximate, so `Vector3` does
not define `==` by value; use `isapprox` instead.
"""
from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence, Union

import numpy as np

from ..errors import DivisionByZero

Scalar = Union[int, float, np.floating]

# Default relative tolerance for approximate comparisons (sqrt of float64 eps).
DEFAULT_RTOL = math.sqrt(np.finfo(np.float64).eps)


@dataclass(frozen=True, eq=False)
class Vector3:
    """
    A point or vector in 3D space.

    Attributes:
        x (float): The x component.
        y (float): The y component.
        z (float): The z component. Defaults to 0 so 2D points can be written
            as `Vector3(x, y)`.
    """

    x: float
    y: float
    z: float = 0.0

    # -------------------------------------------------------------------------
    # Construction and conversion
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "Vector3":
        """Returns the zero vector."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values: Sequence[Scalar]) -> "Vector3":
        """
        Creates a vector from a sequence of 2 or 3 numbers.

        A missing z component is set to zero.
        """
        values = np.asarray(values, dtype=float).ravel()
        if values.size == 2:
            return cls(float(values[0]), float(values[1]), 0.0)
        if values.size == 3:
            return cls(float(values[0]), float(values[1]), float(values[2]))
        raise ValueError(f"Expected 2 or 3 components, got {values.size}.")

    def to_array(self) -> np.ndarray:
        """Returns the components as a float64 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"

    # -------------------------------------------------------------------------
    # Broadcasting
    # -------------------------------------------------------------------------

    @staticmethod
    def broadcast(
        func: Callable[..., Scalar], *operands: Union["Vector3", Scalar]
    ) -> "Vector3":
        """
        Applies a scalar function component-wise over vectors and scalars.

        Scalars are repeated for every component, so `broadcast(f, v, 2.0)`
        evaluates `f(v.x, 2.0)`, `f(v.y, 2.0)` and `f(v.z, 2.0)`.

        Args:
            func: A function of one or two scalar arguments.
            *operands: One or two operands, at least one of them a `Vector3`.

        Returns:
            A new vector holding the three results.
        """
        if not 1 <= len(operands) <= 2:
            raise TypeError("broadcast expects one or two operands.")
        if not any(isinstance(op, Vector3) for op in operands):
            raise TypeError("broadcast needs at least one Vector3 operand.")

        columns = [
            tuple(op) if isinstance(op, Vector3) else (op, op, op)
            for op in operands
        ]
        return Vector3(*(func(*args) for args in zip(*columns)))

    def map(self, func: Callable[[Scalar], Scalar]) -> "Vector3":
        """Applies a unary scalar function to every component."""
        return Vector3.broadcast(func, self)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3.broadcast(operator.add, self, other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3.broadcast(operator.sub, self, other)

    def __neg__(self) -> "Vector3":
        return self.map(operator.neg)

    def __mul__(self, factor: Scalar) -> "Vector3":
        if isinstance(factor, Vector3):
            return NotImplemented
        return Vector3.broadcast(operator.mul, self, factor)

    def __rmul__(self, factor: Scalar) -> "Vector3":
        if isinstance(factor, Vector3):
            return NotImplemented
        return Vector3.broadcast(operator.mul, factor, self)

    def __truediv__(self, divisor: Scalar) -> "Vector3":
        if isinstance(divisor, Vector3):
            return NotImplemented
        if divisor == 0:
            raise DivisionByZero(f"Cannot divide {self!r} by zero.")
        return Vector3.broadcast(operator.truediv, self, divisor)

    # -------------------------------------------------------------------------
    # Products and norms
    # -------------------------------------------------------------------------

    def dot(self, other: "Vector3") -> float:
        """Returns the dot product with `other`."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Returns the cross product `self × other`."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        """Returns the Euclidean length, without overflow or underflow."""
        return math.hypot(self.x, self.y, self.z)

    def normalized(self) -> "Vector3":
        """Returns the unit vector in the same direction."""
        return self / self.norm()

    def isapprox(
        self, other: "Vector3", rtol: float | None = None, atol: float = 0.0
    ) -> bool:
        """
        Checks approximate equality component by component.

        Two components `a` and `b` match when
        `|a - b| <= atol + rtol * max(|a|, |b|)`.

        Args:
            other: The vector to compare against.
            rtol: Relative tolerance. Defaults to `sqrt(eps)` of float64.
            atol: Absolute tolerance. Needed when comparing against zero.
        """
        return all(
            scalar_isapprox(a, b, rtol=rtol, atol=atol) for a, b in zip(self, other)
        )


def scalar_isapprox(
    a: Scalar, b: Scalar, rtol: float | None = None, atol: float = 0.0
) -> bool:
    """Approximate equality of two scalars, with the semantics of `Vector3.isapprox`."""
    rtol = DEFAULT_RTOL if rtol is None else rtol
    return abs(a - b) <= atol + rtol * max(abs(a), abs(b))


def dot(p: Vector3, q: Vector3) -> float:
    return p.dot(q)


def cross(p: Vector3, q: Vector3) -> Vector3:
    return p.cross(q)


def norm(p: Vector3) -> float:
    return p.norm()


def isapprox(
    p: Vector3, q: Vector3, rtol: float | None = None, atol: float = 0.0
) -> bool:
    return p.isapprox(q, rtol=rtol, atol=atol)


def centroid(*points: Vector3) -> Vector3:
    """Returns the arithmetic mean of the given points."""
    if not points:
        raise ValueError("centroid() needs at least one point.")
    total = points[0]
    for p in points[1:]:
        total = total + p
    return total / len(points)


def parallelogram_area(u: Vector3, v: Vector3) -> float:
    """Returns the area of the parallelogram spanned by `u` and `v`."""
    return u.cross(v).norm()
