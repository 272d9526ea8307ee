# -*- coding: utf-8 -*-
"""
Explicit dimensionality tag of a structured mesh.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from ..errors import InvalidDimensions


class MeshKind(Enum):
    """The number of active axes of a structured mesh."""

    LINE = 1
    PLANAR = 2
    VOLUME = 3

    @property
    def n_axes(self) -> int:
        return self.value

    @classmethod
    def from_dims(cls, dims: Sequence[int]) -> "MeshKind":
        """Picks the kind matching the number of supplied dimensions."""
        if not 1 <= len(dims) <= 3:
            raise InvalidDimensions(
                f"Expected 1 to 3 grid dimensions, got {len(dims)}."
            )
        return cls(len(dims))
