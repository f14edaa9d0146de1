"""
GeoGrid Spatial Index Handling

This package provides index-based selection on structured grids: axis
vectors, coordinate/index conversion, slice computation and grid selection.
"""

# Conversion functions
from .conversion import (
    grid_axis_vectors,
    convert_coordinates_to_indices,
    convert_indices_to_coordinates,
    validate_region_bounds,
)

# Slicing functions
from .slicing import (
    ascending_order,
    nearest_index,
    index_range_slice,
    compute_level_slices,
)

# Grid operations
from .operations import (
    apply_index_selection,
    select_points,
    reshape_grid,
)

__all__ = [
    # Conversion functions
    "grid_axis_vectors",
    "convert_coordinates_to_indices",
    "convert_indices_to_coordinates",
    "validate_region_bounds",
    # Slicing functions
    "ascending_order",
    "nearest_index",
    "index_range_slice",
    "compute_level_slices",
    # Grid operations
    "apply_index_selection",
    "select_points",
    "reshape_grid",
]
