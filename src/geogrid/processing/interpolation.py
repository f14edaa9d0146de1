"""
GeoGrid Field Interpolation

This module interpolates field maps of structured grids onto new points:
trilinear in volumes and bilinear on horizontal surfaces, with either flat
(clamped) extrapolation or NaN fill outside the data.
"""

from typing import Sequence, Tuple

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from ..core.core_types import FieldMap
from ..core.exceptions import UnsupportedDatasetShapeError
from ..core.logging_config import get_logger
from ..coordinates.spatial import ascending_order, grid_axis_vectors
from ..grids.fields import map_fields

logger = get_logger('processing.interpolation')

# Outside-data behaviour
FILL_FLAT = "flat"
FILL_NAN = "nan"

# ============================================================================
# Interpolator Construction
# ============================================================================

def _prepare_axes(vectors: Sequence[np.ndarray]) -> Tuple[list, list, list]:
    """
    Decide which axes take part in the interpolation.

    Length-1 axes are dropped; descending axes are reversed.

    Returns:
        Tuple: (kept axis numbers, ascending vectors, reversed flags)
    """
    keep, ascending, flipped = [], [], []
    for axis, vector in enumerate(vectors):
        if np.size(vector) < 2:
            continue
        keep.append(axis)
        vector, reversed_axis = ascending_order(vector)
        ascending.append(vector)
        flipped.append(reversed_axis)
    return keep, ascending, flipped


class GridInterpolator:
    """
    Linear interpolation on a rectilinear grid given by 1-D axis vectors.

    Args:
        vectors: One 1-D vector per array axis
        fill: "flat" clamps queries to the grid (constant extrapolation),
              "nan" returns NaN outside the grid
    """

    def __init__(self, vectors: Sequence[np.ndarray], fill: str = FILL_FLAT):
        self.shape = tuple(len(v) for v in vectors)
        self.keep, self.vectors, self.flipped = _prepare_axes(vectors)
        self.fill = fill

    def _values(self, values: np.ndarray) -> np.ndarray:
        values = np.asarray(values, dtype=np.float64).reshape(self.shape)
        index = tuple(0 if n < 2 else slice(None) for n in self.shape)
        values = values[index]
        for iaxis, flipped in enumerate(self.flipped):
            if flipped:
                values = np.flip(values, axis=iaxis)
        return values

    def _points(self, query: Sequence[np.ndarray]) -> np.ndarray:
        columns = []
        for axis, vector in zip(self.keep, self.vectors):
            column = np.asarray(query[axis], dtype=np.float64).ravel()
            if self.fill == FILL_FLAT:
                column = np.clip(column, vector[0], vector[-1])
            columns.append(column)
        return np.column_stack(columns)

    def __call__(self, values: np.ndarray, query: Sequence[np.ndarray]) -> np.ndarray:
        """
        Interpolate ``values`` (grid-shaped) at the query coordinates.

        Args:
            values: Array on the grid
            query: One coordinate array per grid axis, all of the same shape

        Returns:
            np.ndarray: Interpolated values with the query shape
        """
        out_shape = np.shape(query[0])
        data = self._values(values)
        if not self.keep:
            return np.full(out_shape, float(data))

        points = self._points(query)
        interpolator = RegularGridInterpolator(
            tuple(self.vectors), data, method='linear',
            bounds_error=False, fill_value=np.nan if self.fill == FILL_NAN else None
        )
        return interpolator(points).reshape(out_shape)

    def fields(self, fields: FieldMap, query: Sequence[np.ndarray]) -> FieldMap:
        """Interpolate every field (and vector component) of a field map."""
        return map_fields(fields, lambda values: self(values, query))

# ============================================================================
# Volume Interpolation
# ============================================================================

def interpolate_datafields(grid, x, y, z):
    """
    Interpolate all fields of a structured 3-D grid onto new points.

    Trilinear interpolation with flat extrapolation; the vertical axis may be
    ascending or descending.

    Args:
        grid: Structured GeoData, UTMData or CartData
        x: First coordinate of the new points (lon, ew or x)
        y: Second coordinate of the new points
        z: Vertical coordinate of the new points

    Returns:
        Grid of the same variant on the new points
    """
    vectors = grid_axis_vectors(grid)
    x, y, z = (np.asarray(c, dtype=np.float64) for c in (x, y, z))
    interpolator = GridInterpolator(vectors, fill=FILL_FLAT)
    fields = interpolator.fields(grid.fields, (x, y, z))
    logger.debug("Interpolated %d fields onto %s points", len(fields), x.shape)
    return grid.copy_with(coords=(x, y, z), fields=fields)


def interpolate_data_on_surface(volume, surface):
    """
    Interpolate a 3-D dataset onto the points of a surface.

    Returns:
        Grid of the volume's variant on the surface points
    """
    return interpolate_datafields(volume, *surface.coordinate_grids())

# ============================================================================
# Horizontal Interpolation
# ============================================================================

def _horizontal_layer(values: np.ndarray) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    return values[:, :, 0] if values.ndim == 3 else values


def interpolate_horizontal(grid, x, y, fill: str = FILL_FLAT) -> Tuple[np.ndarray, FieldMap]:
    """
    Bilinear interpolation of the top layer of a grid in the horizontal.

    Args:
        grid: Structured grid (surface or volume)
        x: First horizontal coordinate of the new points
        y: Second horizontal coordinate of the new points
        fill: "flat" or "nan" outside the data

    Returns:
        Tuple: (vertical coordinate, field map) at the new points
    """
    if grid.ndim not in (2, 3):
        raise UnsupportedDatasetShapeError(
            "horizontal interpolation", grid.shape_class.kind.value, "A structured grid is required"
        )
    c1, c2, c3 = grid.coordinate_grids()
    if grid.ndim == 3:
        vectors = (c1[:, 0, 0], c2[0, :, 0])
    else:
        vectors = (c1[:, 0], c2[0, :])

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    interpolator = GridInterpolator(vectors, fill=fill)
    query = (x, y)

    vertical = interpolator(_horizontal_layer(c3), query)
    fields = map_fields(grid.fields, lambda values: interpolator(_horizontal_layer(values), query))
    return vertical, fields


def interpolate_datafields_2d(grid, x, y) -> Tuple[np.ndarray, FieldMap]:
    """
    Interpolate a horizontal surface onto new horizontal points.

    Bilinear with flat extrapolation; typically used for horizontal surfaces.

    Args:
        grid: Structured GeoData, UTMData or CartData
        x: First horizontal coordinate of the new points
        y: Second horizontal coordinate of the new points

    Returns:
        Tuple: (vertical coordinate, field map)
    """
    return interpolate_horizontal(grid, x, y, fill=FILL_FLAT)
