"""
GeoGrid Subvolume Extraction

This module cuts a box out of a structured grid, either by nearest-index
extraction or by resampling onto a regular grid of given resolution.
"""

from typing import Optional, Sequence

import numpy as np

from ..core.config import DEFAULT_SUBVOLUME_DIMS
from ..core.core_types import CoordinateRange, _validate_dims
from ..core.exceptions import ParameterError, UnsupportedDatasetShapeError
from ..core.logging_config import get_logger
from ..coordinates.spatial import (
    grid_axis_vectors, convert_coordinates_to_indices, convert_indices_to_coordinates,
    index_range_slice, apply_index_selection, validate_region_bounds
)
from ..grids.builders import lonlatdepth_grid, xyz_grid
from ..grids.variants import GeoData, CartData
from .interpolation import interpolate_datafields

logger = get_logger('processing.subvolume')


def _resolve_alias(name: str, value, alias: str, alias_value):
    if value is not None and alias_value is not None:
        raise ParameterError(name, str(value), f"Give either '{name}' or '{alias}', not both")
    return value if value is not None else alias_value


def extract_subvolume(
    grid,
    interpolate: bool = False,
    lon_level: Optional[CoordinateRange] = None,
    lat_level: Optional[CoordinateRange] = None,
    depth_level: Optional[CoordinateRange] = None,
    dims: Sequence[int] = DEFAULT_SUBVOLUME_DIMS,
    x_level: Optional[CoordinateRange] = None,
    y_level: Optional[CoordinateRange] = None,
    z_level: Optional[CoordinateRange] = None
):
    """
    Extract ("cut out") a box of a 2-D or 3-D structured grid.

    Each range is a (start, end) pair along the respective axis; missing
    ranges use the full extent. Without interpolation the entries closest to
    the bounds are kept (inclusive), so the box does not go exactly from start
    to end; a reversed pair gives a reversed axis. With interpolation the data
    are resampled onto a regular grid of resolution ``dims``, which is useful
    for comparing datasets of different resolution.

    Args:
        grid: Structured GeoData or CartData
        interpolate: Resample instead of extracting the nearest entries
        lon_level: (start, end) along the first axis
        lat_level: (start, end) along the second axis
        depth_level: (start, end) along the vertical axis
        dims: Resolution of the resampled grid
        x_level: Alias of ``lon_level`` for CartData
        y_level: Alias of ``lat_level`` for CartData
        z_level: Alias of ``depth_level`` for CartData

    Returns:
        Grid of the same variant

    Examples:
        >>> sub = extract_subvolume(data, lon_level=(10, 12), lat_level=(35, 40))
        >>> sub.shape
        (3, 6, 13)
        >>> sub = extract_subvolume(data, lon_level=(10, 12), lat_level=(35, 40),
        ...                         interpolate=True, dims=(50, 51, 52))
        >>> sub.shape
        (50, 51, 52)
    """
    if not isinstance(grid, (GeoData, CartData)):
        raise UnsupportedDatasetShapeError(
            "extract_subvolume", type(grid).__name__, "Only GeoData and CartData are supported"
        )
    if grid.shape_class.is_point:
        raise UnsupportedDatasetShapeError("extract_subvolume", "point", "A structured grid is required")

    ranges = [
        validate_region_bounds("lon_level", _resolve_alias("lon_level", lon_level, "x_level", x_level)),
        validate_region_bounds("lat_level", _resolve_alias("lat_level", lat_level, "y_level", y_level)),
        validate_region_bounds("depth_level", _resolve_alias("depth_level", depth_level, "z_level", z_level)),
    ]
    if interpolate:
        ranges = [full if r is None else r for r, full in zip(ranges, grid.extent())]
        _validate_dims("dims", dims, length=3)
        build = lonlatdepth_grid if isinstance(grid, GeoData) else xyz_grid
        query = build(*(np.linspace(lo, hi, int(n)) for (lo, hi), n in zip(ranges, dims)))
        logger.debug("Resampling subvolume onto %s grid", tuple(int(n) for n in dims))
        return interpolate_datafields(grid, *query)

    # Missing ranges keep the axis as it is, including its direction
    vectors = grid_axis_vectors(grid)
    index_ranges = [
        (0, len(v) - 1) if r is None else r
        for v, r in zip(vectors, convert_coordinates_to_indices(vectors, ranges))
    ]
    logger.debug(
        "Extracting subvolume over %s",
        convert_indices_to_coordinates(vectors, index_ranges)
    )
    index = tuple(index_range_slice(i_start, i_end) for i_start, i_end in index_ranges)
    return apply_index_selection(grid, index)
