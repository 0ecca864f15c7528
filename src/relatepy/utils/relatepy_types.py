"""
Defines types commonly used in RelatePy.
"""

from typing import Sequence, Union

import numpy as np

import relatepy as rp

__all__ = [
    "number",
    "PointLike",
    "LinearGeometry",
    "GeometryLike",
]

number = Union[float, int]
"""Type for numbers."""

PointLike = Union[np.ndarray, Sequence[number]]
"""Type for a single point, either an array of ``shape=(2,)`` or a pair of numbers."""

LinearGeometry = Union["rp.Linestring", "rp.MultiLinestring"]
"""Type for the linear geometries the relate operation works on."""

GeometryLike = Union[
    LinearGeometry,
    np.ndarray,
    Sequence[Sequence[number]],
    Sequence[Sequence[Sequence[number]]],
]
"""Type for objects that can be converted to a linear geometry, see
:func:`~relatepy.geometry.linear.as_linear_geometry`."""
