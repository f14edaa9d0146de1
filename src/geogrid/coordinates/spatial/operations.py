"""
GeoGrid Grid Selection Operations

This module applies index selections (slices or point masks) to any grid
variant, carrying coordinates, fields and per-point UTM tags along.
"""

from typing import Any, Tuple

import numpy as np

from ...grids.fields import map_fields
from ...grids.variants import UTMData


# ============================================================================
# Grid Operations
# ============================================================================

def apply_index_selection(grid, index: Any):
    """
    Select part of a grid with a numpy index (slices, integer or boolean arrays).

    Args:
        grid: Any grid variant
        index: Index applied identically to coordinates and fields

    Returns:
        Grid of the same variant
    """
    coords = tuple(c[index] for c in grid.coords)
    fields = map_fields(grid.fields, lambda a: np.asanyarray(a)[index])

    if isinstance(grid, UTMData):
        return UTMData(*coords, grid.zone[index], grid.northern[index], fields, grid.atts)
    return grid.copy_with(coords=coords, fields=fields)


def select_points(grid, mask: np.ndarray):
    """
    Keep the points where ``mask`` is True, flattening to a 1-D point set.

    Returns:
        Tuple: (selected grid, flat indices of the kept points)
    """
    indices = np.flatnonzero(np.asarray(mask).ravel())
    flat = reshape_grid(grid, (grid.size,))
    return apply_index_selection(flat, indices), indices


def reshape_grid(grid, shape: Tuple[int, ...]):
    """Reshape coordinates and fields of a grid (same number of entries)."""
    coords = tuple(c.reshape(shape) for c in grid.coords)
    fields = map_fields(grid.fields, lambda a: np.asanyarray(a).reshape(shape))
    if isinstance(grid, UTMData):
        return UTMData(*coords, grid.zone.reshape(shape), grid.northern.reshape(shape),
                       fields, grid.atts)
    return grid.copy_with(coords=coords, fields=fields)
