"""
GeoGrid Type Definitions and Data Classes

This module defines all data structures and type aliases used throughout the codebase
for better type safety and code clarity.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union, Dict, Sequence
import warnings

import numpy as np

from .config import DEFAULT_PROJECTION_LAT, DEFAULT_PROJECTION_LON

# ============================================================================
# Type Aliases
# ============================================================================

CoordinateRange = Tuple[float, float]
LonLatPoint = Tuple[float, float]
Dims = Tuple[int, ...]
VectorField = Tuple[np.ndarray, ...]
FieldValue = Union[np.ndarray, VectorField]
FieldMap = Dict[str, FieldValue]
Extent = Tuple[CoordinateRange, CoordinateRange, CoordinateRange]

# ============================================================================
# Validation Utilities (Module Level)
# ============================================================================

def _validate_coordinate_range(name: str, range_val: Optional[CoordinateRange]) -> None:
    """Validate a (min, max) coordinate range."""
    if range_val is not None:
        if len(range_val) != 2:
            raise ValueError(f"{name} must contain exactly 2 values")
        if range_val[0] > range_val[1]:
            raise ValueError(f"{name}[0] must be <= {name}[1]")

def _validate_dims(name: str, dims: Sequence[int], length: Optional[int] = None) -> None:
    """Validate a resolution tuple."""
    if length is not None and len(dims) < length:
        raise ValueError(f"{name} must contain at least {length} values")
    if any(int(n) < 1 for n in dims):
        raise ValueError(f"{name} values must be positive")

# ============================================================================
# Dataset Shape Classification
# ============================================================================

class ShapeClass(str, Enum):
    """Kind of dataset implied by the coordinate array shape."""
    POINT = "point"
    SURFACE = "surface"
    VOLUME = "volume"


@dataclass(frozen=True)
class DatasetShape:
    """
    Shape class together with the array shape it was derived from.

    Attributes:
        kind: Point, surface or volume
        shape: Coordinate array shape
    """
    kind: ShapeClass
    shape: Tuple[int, ...]

    @classmethod
    def classify(cls, shape: Sequence[int]) -> "DatasetShape":
        """
        Derive the shape class from a coordinate array shape.

        1-D arrays are point sets. 2-D arrays, and 3-D arrays with exactly
        one length-1 axis, are surfaces. Everything else is a volume, so a
        single (1, 1, N) column is a volume.
        """
        shape = tuple(int(n) for n in shape)
        if len(shape) <= 1:
            kind = ShapeClass.POINT
        elif len(shape) == 2 or sum(n == 1 for n in shape) == 1:
            kind = ShapeClass.SURFACE
        else:
            kind = ShapeClass.VOLUME
        return cls(kind=kind, shape=shape)

    @property
    def is_point(self) -> bool:
        return self.kind is ShapeClass.POINT

    @property
    def is_surface(self) -> bool:
        return self.kind is ShapeClass.SURFACE

    @property
    def is_volume(self) -> bool:
        return self.kind is ShapeClass.VOLUME

# ============================================================================
# Vote Map Result Kinds
# ============================================================================

class VoteMode(str, Enum):
    """
    Result kind of the statistical vote map.

    ABSOLUTE yields integer vote counts; RELATIVE yields the fraction of
    datasets with coverage that voted for a cell.
    """
    ABSOLUTE = "absolute"
    RELATIVE = "relative"

# ============================================================================
# Projection Anchor
# ============================================================================

@dataclass(frozen=True)
class ProjectionPoint:
    """
    Anchor binding a geographic location to its UTM projection.

    One ProjectionPoint is used for all geographic <-> local Cartesian
    conversions of an analysis. Use ``ProjectionPoint.from_latlon`` or
    ``ProjectionPoint.from_utm`` rather than filling the fields by hand.

    Attributes:
        lat: Latitude in degrees
        lon: Longitude in degrees
        ew: UTM easting in m
        ns: UTM northing in m
        zone: UTM zone number
        isnorth: True on the northern hemisphere
    """
    lat: float
    lon: float
    ew: float
    ns: float
    zone: int
    isnorth: bool

    def __post_init__(self):
        """Validate projection point parameters."""
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"lat must be within [-90, 90], got {self.lat}")
        if not 1 <= self.zone <= 60:
            raise ValueError(f"zone must be within [1, 60], got {self.zone}")

    @classmethod
    def from_latlon(cls, lat: float = DEFAULT_PROJECTION_LAT,
                    lon: float = DEFAULT_PROJECTION_LON) -> "ProjectionPoint":
        """Create a projection point from latitude/longitude."""
        from ..coordinates.projection import projection_point
        return projection_point(lat=lat, lon=lon)

    @classmethod
    def from_utm(cls, ew: float, ns: float, zone: int, isnorth: bool) -> "ProjectionPoint":
        """Create a projection point from UTM coordinates."""
        from ..coordinates.projection import projection_point_from_utm
        return projection_point_from_utm(ew, ns, zone, isnorth)

# ============================================================================
# Regular Cartesian Grid Descriptor
# ============================================================================

@dataclass
class CartGrid:
    """
    Regular, axis-aligned Cartesian grid described by 1-D vectors.

    Spacing is constant per axis. In 2-D the second axis is the vertical (z).

    Attributes:
        n: Number of vertices per axis
        spacing: Grid spacing per axis
        length: Domain length per axis
        min: Start of the grid per axis
        max: End of the grid per axis
        coord1d: Vertex coordinates per axis
        coord1d_cen: Cell-centre coordinates per axis
        constant_spacing: Always True in this package
    """
    n: Tuple[int, ...]
    spacing: Tuple[float, ...]
    length: Tuple[float, ...]
    min: Tuple[float, ...]
    max: Tuple[float, ...]
    coord1d: Tuple[np.ndarray, ...] = field(repr=False)
    coord1d_cen: Tuple[np.ndarray, ...] = field(repr=False)
    constant_spacing: bool = True

    def __post_init__(self):
        """Validate grid descriptor."""
        if not (len(self.n) == len(self.spacing) == len(self.length) == len(self.coord1d)):
            raise ValueError("CartGrid axis descriptors must all have the same length")
        for idim, (lo, hi) in enumerate(zip(self.min, self.max)):
            _validate_coordinate_range(f"axis {idim}", (lo, hi))
        if any(n_i < 2 for n_i in self.n):
            warnings.warn("CartGrid has an axis with fewer than 2 points; spacing is undefined there.")

    @property
    def ndim(self) -> int:
        return len(self.n)

    def domain_string(self) -> str:
        """Human readable description of the grid domain."""
        names = ("x", "z") if self.ndim == 2 else ("x", "y", "z")[:self.ndim]
        return ", ".join(
            f"{name} ∈ [{vec[0]}, {vec[-1]}]" for name, vec in zip(names, self.coord1d)
        )

    def coordinate_grids(self, cell: bool = False) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Get 3-D X, Y, Z arrays of the grid vertices (or cell centres).

        Args:
            cell: Return cell-centre coordinates instead of vertices

        Returns:
            Tuple: X, Y, Z arrays
        """
        from ..grids.builders import xyz_grid

        vectors = self.coord1d_cen if cell else self.coord1d
        if self.ndim == 3:
            return xyz_grid(*vectors)
        if self.ndim == 2:
            return xyz_grid(vectors[0], 0.0, vectors[1])
        raise ValueError("coordinate_grids requires a 2-D or 3-D CartGrid")

    def __str__(self) -> str:
        return (
            f"CartGrid{{{self.ndim}}}\n"
            f"           size: {self.n}\n"
            f"         length: {self.length}\n"
            f"         domain: {self.domain_string()}\n"
            f" grid spacing Δ: {self.spacing}"
        )
