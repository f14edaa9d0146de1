"""
GeoGrid Grid Variants

This module provides the four concrete dataset types:

- GeoData: longitude/latitude in degrees, depth in km (positive up)
- UTMData: easting/northing in m, depth in m, with per-point zone and hemisphere
- CartData: local Cartesian x/y/z in km
- ECEFData: Earth-centred Earth-fixed x/y/z in km

Coordinates may be 1-D (point sets) or 3-D (structured grids) and may be
given bare or as unyt arrays; bare values are assumed to be in the variant's
canonical unit.
"""

from typing import Any, Optional, Sequence, Tuple

import numpy as np

from ..core import units
from ..core.config import KM_UNIT, M_UNIT
from ..core.exceptions import ShapeMismatchError
from .base import BaseGrid

# ============================================================================
# Geographic Data
# ============================================================================

class GeoData(BaseGrid):
    """
    Geographic dataset: lon/lat in degrees, depth in km.

    Args:
        lon: Longitudes, 1-D or 3-D array ordered (lon, lat, depth)
        lat: Latitudes, same shape as ``lon``
        depth: Depth in km (negative below the surface)
        fields: Field map, a single array, or None (stores depth as "Z")
        atts: Attribute mapping

    Examples:
        >>> from geogrid import GeoData, lonlatdepth_grid
        >>> lon, lat, depth = lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), np.arange(-300, 1, 25))
        >>> data = GeoData(lon, lat, depth, {"Depthdata": 2 * depth})
    """

    coord_names = ("lon", "lat", "depth")

    def __init__(self, lon, lat, depth, fields: Any = None, atts: Any = None):
        self._init_grid(
            units.as_angle(lon),
            units.as_angle(lat),
            units.as_length(depth, KM_UNIT, KM_UNIT),
            fields, atts,
        )

    @classmethod
    def from_grid(cls, grid: Sequence[np.ndarray], fields: Any = None, atts: Any = None) -> "GeoData":
        """Create from a (lon, lat, depth) triple as returned by lonlatdepth_grid."""
        lon, lat, depth = grid
        return cls(lon, lat, depth, fields, atts)

    @property
    def lon(self):
        return self._coords[0]

    @property
    def lat(self):
        return self._coords[1]

    @property
    def depth(self):
        return self._coords[2]

# ============================================================================
# UTM Data
# ============================================================================

class UTMData(BaseGrid):
    """
    UTM dataset: easting/northing in m, depth in m.

    Zone and hemisphere are stored per point, so a dataset may span zones.

    Args:
        ew: Easting
        ns: Northing
        depth: Depth in m (negative below the surface)
        zone: UTM zone, scalar or array of the coordinate shape
        northern: Hemisphere flag, scalar or array of the coordinate shape
        fields: Field map
        atts: Attribute mapping
    """

    coord_names = ("ew", "ns", "depth")

    def __init__(self, ew, ns, depth, zone, northern=True, fields: Any = None, atts: Any = None):
        ew = units.as_length(ew, M_UNIT, M_UNIT)
        self._zone = self._broadcast_tag("zone", zone, np.shape(ew), np.int64)
        self._northern = self._broadcast_tag("northern", northern, np.shape(ew), bool)
        self._init_grid(
            ew,
            units.as_length(ns, M_UNIT, M_UNIT),
            units.as_length(depth, M_UNIT, M_UNIT),
            fields, atts,
        )

    @staticmethod
    def _broadcast_tag(name: str, value: Any, shape: Tuple[int, ...], dtype) -> np.ndarray:
        value = np.asarray(value, dtype=dtype)
        if value.ndim == 0:
            return np.full(shape, value, dtype=dtype)
        if value.shape != tuple(shape):
            raise ShapeMismatchError(name, shape, value.shape)
        return value.copy()

    def _rebuild(self, c1, c2, c3, fields, atts) -> "UTMData":
        zone, northern = self._zone, self._northern
        if np.shape(c1) != zone.shape:
            zone, northern = zone.flat[0], northern.flat[0]
        return UTMData(c1, c2, c3, zone, northern, fields, atts)

    @property
    def ew(self):
        return self._coords[0]

    @property
    def ns(self):
        return self._coords[1]

    @property
    def depth(self):
        return self._coords[2]

    @property
    def zone(self) -> np.ndarray:
        return self._zone.copy()

    @property
    def northern(self) -> np.ndarray:
        return self._northern.copy()

# ============================================================================
# Cartesian Data
# ============================================================================

class _KilometreGrid(BaseGrid):
    """Grid with three length coordinates in km."""

    coord_names = ("x", "y", "z")

    def __init__(self, x, y, z, fields: Any = None, atts: Any = None):
        self._init_grid(
            units.as_length(x, KM_UNIT, KM_UNIT),
            units.as_length(y, KM_UNIT, KM_UNIT),
            units.as_length(z, KM_UNIT, KM_UNIT),
            fields, atts,
        )

    @classmethod
    def from_grid(cls, grid: Sequence[np.ndarray], fields: Any = None, atts: Any = None):
        """Create from an (x, y, z) triple as returned by xyz_grid."""
        x, y, z = grid
        return cls(x, y, z, fields, atts)

    @property
    def x(self):
        return self._coords[0]

    @property
    def y(self):
        return self._coords[1]

    @property
    def z(self):
        return self._coords[2]


class CartData(_KilometreGrid):
    """
    Local Cartesian dataset in km.

    Usually obtained with ``convert2cart_data`` relative to a ProjectionPoint,
    or built directly on a CartGrid with ``cart_data_from_grid``.
    """


class ECEFData(_KilometreGrid):
    """Earth-centred Earth-fixed dataset in km (WGS84)."""


GRID_VARIANTS = (GeoData, UTMData, CartData, ECEFData)
