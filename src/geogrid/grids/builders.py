"""
GeoGrid Grid Builders

This module creates coordinate grids and regular Cartesian grid descriptors:
lon/lat/depth and x/y/z grids from vectors or scalars, MATLAB-style
meshgrids, corner averaging, flipping and the CartGrid helpers.
"""

from typing import Any, Mapping, Optional, Sequence, Tuple, Union
import logging

import numpy as np

from ..core import units
from ..core.config import KM_UNIT
from ..core.core_types import CartGrid, CoordinateRange, _validate_dims
from ..core.exceptions import ParameterError, ShapeMismatchError
from .fields import map_fields

logger = logging.getLogger('geogrid.grids.builders')

# ============================================================================
# Coordinate Grids
# ============================================================================

def _as_vector(name: str, value: Any) -> np.ndarray:
    """Turn a scalar or 1-D input (plain or unit-tagged) into a float vector."""
    vector = np.atleast_1d(units.strip(value))
    if vector.ndim != 1:
        raise ParameterError(name, f"{vector.ndim}-D array", "Expected a scalar or a 1-D vector")
    return vector


def _ndgrid(names: Sequence[str], values: Sequence[Any]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    if all(np.ndim(units.strip(v)) == 0 for v in values):
        raise ParameterError(
            ", ".join(names), "all scalars",
            "At least one coordinate must be a vector"
        )
    vectors = [_as_vector(name, value) for name, value in zip(names, values)]
    return tuple(np.meshgrid(*vectors, indexing='ij'))


def lonlatdepth_grid(lon, lat, depth) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Create 3-D lon/lat/depth arrays from vectors or scalars.

    The result is always 3-D with shape (nLon, nLat, nDepth); a scalar input
    gives an axis of length 1, so a single scalar input gives a surface.
    Depth may be unit-tagged; all returned arrays are plain floats, with
    depth in km.

    Args:
        lon: Longitude vector or scalar
        lat: Latitude vector or scalar
        depth: Depth vector or scalar (bare values are taken as km)

    Returns:
        Tuple: (Lon, Lat, Depth) arrays

    Raises:
        ParameterError: If all three inputs are scalars

    Examples:
        >>> lon, lat, depth = lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), -50.0)
        >>> lon.shape
        (11, 11, 1)
    """
    depth_km = units.as_length(depth, KM_UNIT, KM_UNIT)
    return _ndgrid(("lon", "lat", "depth"), (lon, lat, depth_km))


def xyz_grid(x, y, z) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Create 3-D x/y/z arrays (km) from vectors or scalars.

    Same conventions as ``lonlatdepth_grid``; all three results are plain
    float arrays of shape (nx, ny, nz).
    """
    return _ndgrid(("x", "y", "z"), (x, y, z))


def meshgrid(vx, vy, vz=None) -> Tuple[np.ndarray, ...]:
    """
    MATLAB-style meshgrid: arrays are shaped (len(vy), len(vx)[, len(vz)]).

    Use ``lonlatdepth_grid``/``xyz_grid`` for the (x, y, z) axis order
    expected by the grid variants.
    """
    vectors = [_as_vector("vx", vx), _as_vector("vy", vy)]
    if vz is not None:
        vectors.append(_as_vector("vz", vz))
    return tuple(np.meshgrid(*vectors))


def average_q1(values: np.ndarray) -> np.ndarray:
    """
    Average an n-D array over the corners of each cell.

    The result has one entry fewer along every axis; in 3-D each entry is
    the mean of the 8 surrounding vertices.
    """
    values = np.asarray(values, dtype=np.float64)
    out = np.zeros(tuple(n - 1 for n in values.shape))
    for corner in np.ndindex(*(2,) * values.ndim):
        index = tuple(slice(c, c + n - 1) for c, n in zip(corner, values.shape))
        out += values[index]
    return out / 2 ** values.ndim


def flip(data, axis: int = 2):
    """
    Reverse a grid and all its fields along one axis.

    Args:
        data: Any grid variant
        axis: Axis to reverse (default: the vertical axis)

    Returns:
        Grid of the same variant
    """
    coords = tuple(np.flip(c, axis=axis) for c in data.coords)
    fields = map_fields(data.fields, lambda a: np.flip(a, axis=axis))
    return data.copy_with(coords=coords, fields=fields)

# ============================================================================
# Regular Cartesian Grids
# ============================================================================

def create_cart_grid(size: Union[int, Sequence[int]],
                     x: Optional[CoordinateRange] = None,
                     y: Optional[CoordinateRange] = None,
                     z: Optional[CoordinateRange] = None,
                     extent: Optional[Union[float, Sequence[float]]] = None) -> CartGrid:
    """
    Create a 1-D, 2-D or 3-D regular Cartesian grid.

    The grid is defined either by ``extent`` (domain length per direction) or by
    start/end tuples. In 2-D the second axis is the vertical (z). With
    ``extent`` the domain is x = (0, e0), z = (-e1, 0), y = (0, e2).

    Args:
        size: Number of vertices per axis
        x: (start, end) of x
        y: (start, end) of y (3-D only)
        z: (start, end) of z (2-D and 3-D)
        extent: Domain length per axis

    Returns:
        CartGrid: Grid descriptor with vertex and cell-centre vectors

    Examples:
        >>> grid = create_cart_grid(size=(10, 20), x=(0.0, 10.0), z=(2.0, 10.0))
        >>> grid.spacing
        (1.1111111111111112, 0.42105263157894735)
    """
    n = (int(size),) if np.ndim(size) == 0 else tuple(int(s) for s in size)
    ndim = len(n)
    if ndim not in (1, 2, 3):
        raise ParameterError("size", str(size), "Only 1-D, 2-D and 3-D grids are supported")
    _validate_dims("size", n)

    if extent is not None:
        extent = (float(extent),) if np.ndim(extent) == 0 else tuple(float(e) for e in extent)
        if len(extent) < ndim:
            raise ParameterError("extent", str(extent), f"Need {ndim} values")
        x = (0.0, extent[0])
        z = (-extent[1], 0.0) if ndim > 1 else None
        y = (0.0, extent[2]) if ndim > 2 else None

    if ndim == 1:
        ranges = (x,)
    elif ndim == 2:
        ranges = (x, z)
    else:
        ranges = (x, y, z)
    for name, axis_range in zip(("x", "y", "z") if ndim == 3 else ("x", "z"), ranges):
        if axis_range is None:
            raise ParameterError(name, "None", "Give start/end of every axis or an extent")

    start = tuple(float(r[0]) for r in ranges)
    length = tuple(float(r[1]) - float(r[0]) for r in ranges)
    end = tuple(s + l for s, l in zip(start, length))
    spacing = tuple(l / (ni - 1) if ni > 1 else 0.0 for l, ni in zip(length, n))

    coord1d = tuple(np.linspace(s, e, ni) for s, e, ni in zip(start, end, n))
    coord1d_cen = tuple(
        np.linspace(s + d / 2, e - d / 2, ni - 1) for s, e, d, ni in zip(start, end, spacing, n)
    )

    logger.debug("Created %d-D CartGrid of size %s", ndim, n)
    return CartGrid(n=n, spacing=spacing, length=length, min=start, max=end,
                    coord1d=coord1d, coord1d_cen=coord1d_cen, constant_spacing=True)


def cart_data_from_grid(grid: CartGrid, fields: Mapping[str, Any], y_val: float = 0.0,
                        atts: Any = None):
    """
    Build a CartData set on a CartGrid.

    For 2-D grids the data are placed in the x-z plane at ``y = y_val`` and
    2-D fields are reshaped to (nx, 1, nz).

    Args:
        grid: 2-D or 3-D CartGrid
        fields: Field map on the grid vertices
        y_val: y coordinate of a 2-D grid
        atts: Attribute mapping

    Returns:
        CartData: Dataset on the grid
    """
    from .variants import CartData

    if grid.ndim == 3:
        x, y, z = xyz_grid(*grid.coord1d)
        shaped = dict(fields)
    elif grid.ndim == 2:
        x, y, z = xyz_grid(grid.coord1d[0], y_val, grid.coord1d[1])
        target = (grid.n[0], 1, grid.n[1])

        def _reshape(values):
            values = np.asarray(values)
            if values.size != int(np.prod(target)):
                raise ShapeMismatchError("field on 2-D grid", grid.n, values.shape)
            return values.reshape(target)

        shaped = map_fields(dict(fields), _reshape)
    else:
        raise ParameterError("grid", f"{grid.ndim}-D", "CartData needs a 2-D or 3-D grid")

    return CartData(x, y, z, shaped, atts)
