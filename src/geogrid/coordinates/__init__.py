"""
GeoGrid Coordinate Handling

This package provides coordinate system conversions (geographic, UTM, local
Cartesian, ECEF) and index-based spatial selection on structured grids.
"""

# Projection functions
from .projection import (
    utm_zone,
    projection_point,
    projection_point_from_utm,
    lonlat_to_fixed_utm,
    fixed_utm_to_lonlat,
    convert_to_utm,
    convert_to_geo,
    convert2utm_zone,
    convert2cart_data,
    convert_to_ecef,
    rotate_vectors,
)

# Spatial index functions
from .spatial import (
    grid_axis_vectors,
    convert_coordinates_to_indices,
    convert_indices_to_coordinates,
    validate_region_bounds,
    nearest_index,
    index_range_slice,
    compute_level_slices,
    apply_index_selection,
    select_points,
    reshape_grid,
)

__all__ = [
    # Projection
    "utm_zone",
    "projection_point",
    "projection_point_from_utm",
    "lonlat_to_fixed_utm",
    "fixed_utm_to_lonlat",
    "convert_to_utm",
    "convert_to_geo",
    "convert2utm_zone",
    "convert2cart_data",
    "convert_to_ecef",
    "rotate_vectors",
    # Spatial - Coordinate conversion
    "grid_axis_vectors",
    "convert_coordinates_to_indices",
    "convert_indices_to_coordinates",
    "validate_region_bounds",
    # Spatial - Slicing operations
    "nearest_index",
    "index_range_slice",
    "compute_level_slices",
    # Spatial - Grid operations
    "apply_index_selection",
    "select_points",
    "reshape_grid",
]
