"""
GeoGrid Coordinate Conversion

This module converts between coordinate-based and index-based selections on
structured grids, whose axes follow the (first, second, vertical) order.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from ...core.core_types import CoordinateRange
from ...core.exceptions import ParameterError, UnsupportedDatasetShapeError
from .slicing import nearest_index


# ============================================================================
# Axis Vectors
# ============================================================================

def grid_axis_vectors(grid) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Get the 1-D axis vectors of a structured 3-D grid.

    The vectors are taken along the edges of the grid (X[:, 0, 0],
    Y[0, :, 0], Z[0, 0, :]).

    Raises:
        UnsupportedDatasetShapeError: If the grid is not 3-D
    """
    if grid.ndim != 3:
        raise UnsupportedDatasetShapeError(
            "axis vector extraction", grid.shape_class.kind.value, "A 3-D grid is required"
        )
    x, y, z = grid.coordinate_grids()
    return x[:, 0, 0], y[0, :, 0], z[0, 0, :]


# ============================================================================
# Coordinate/Index Conversion
# ============================================================================

def convert_coordinates_to_indices(
    vectors: Sequence[np.ndarray],
    ranges: Sequence[Optional[CoordinateRange]]
) -> Tuple[Optional[Tuple[int, int]], ...]:
    """
    Convert coordinate ranges to (nearest) index ranges, per axis.

    Args:
        vectors: 1-D axis vectors
        ranges: (start, end) coordinates per axis, or None

    Returns:
        Tuple: (start_index, end_index) per axis, or None where no range was given
    """
    return tuple(
        None if r is None else (nearest_index(v, r[0]), nearest_index(v, r[1]))
        for v, r in zip(vectors, ranges)
    )


def convert_indices_to_coordinates(
    vectors: Sequence[np.ndarray],
    index_ranges: Sequence[Optional[Tuple[int, int]]]
) -> Tuple[Optional[CoordinateRange], ...]:
    """Convert index ranges back to coordinate ranges, per axis."""
    return tuple(
        None if r is None else (float(v[r[0]]), float(v[r[1]]))
        for v, r in zip(vectors, index_ranges)
    )


def validate_region_bounds(name: str, region: Optional[CoordinateRange]) -> Optional[CoordinateRange]:
    """
    Validate a (start, end) pair; reversed pairs are allowed.

    Raises:
        ParameterError: If the pair does not have exactly 2 finite values
    """
    if region is None:
        return None
    if len(region) != 2 or not np.all(np.isfinite(np.asarray(region, dtype=np.float64))):
        raise ParameterError(name, str(region), "Expected a (start, end) pair of finite numbers")
    return float(region[0]), float(region[1])
