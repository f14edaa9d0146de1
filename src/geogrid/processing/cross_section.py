"""
GeoGrid Cross-Section Engine

This module extracts horizontal, fixed-latitude, fixed-longitude and diagonal
cross-sections from volumes, surfaces and point clouds. The kind of section
is chosen from the dataset's shape class:

- Volume: nearest-index extraction or trilinear interpolation on a new grid
- Surface: bilinear profile along a line (NaN outside the surface)
- Points: all points within a band around the section, projected onto it
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from ..core.config import (
    DEFAULT_VOLUME_SECTION_DIMS, DEFAULT_SURFACE_SECTION_DIMS, DEFAULT_SECTION_WIDTH_KM,
    DEFAULT_POINT_SECTION_WIDTH_KM, DIAGONAL_PLANE_DEPTH_KM, METERS_PER_KM, PROJECTED_FIELD_NAMES
)
from ..core.core_types import DatasetShape, LonLatPoint, _validate_dims
from ..core.exceptions import (
    ParameterError, UnsupportedDatasetShapeError, check_level_in_bounds, check_paired
)
from ..core.logging_config import get_logger
from ..coordinates.projection import projection_point, lonlat_to_fixed_utm, fixed_utm_to_lonlat
from ..coordinates.spatial import (
    grid_axis_vectors, nearest_index, compute_level_slices, apply_index_selection, select_points
)
from ..grids.builders import lonlatdepth_grid, xyz_grid
from ..grids.variants import GeoData, CartData
from .interpolation import interpolate_datafields, interpolate_horizontal, FILL_NAN

logger = get_logger('processing.cross_section')

DEPTH_SECTION = "depth"
LAT_SECTION = "lat"
LON_SECTION = "lon"
DIAGONAL_SECTION = "diagonal"

# ============================================================================
# Parameter Validation
# ============================================================================

def resolve_section_kind(
    depth_level: Optional[float] = None,
    lat_level: Optional[float] = None,
    lon_level: Optional[float] = None,
    start: Optional[LonLatPoint] = None,
    end: Optional[LonLatPoint] = None
) -> str:
    """
    Determine which section is requested; exactly one geometry must be given.

    Raises:
        MissingPairedParameterError: If only one of start/end is given
        ParameterError: If no geometry or more than one geometry is given
    """
    given = []
    if depth_level is not None:
        given.append(DEPTH_SECTION)
    if lat_level is not None:
        given.append(LAT_SECTION)
    if lon_level is not None:
        given.append(LON_SECTION)
    if check_paired(start, end, "start", "end"):
        given.append(DIAGONAL_SECTION)

    if len(given) != 1:
        raise ParameterError(
            "section geometry", ", ".join(given) or "none",
            "Give exactly one of depth_level, lat_level, lon_level or start/end"
        )
    return given[0]


def _require_shape(grid, expected: str, operation: str) -> DatasetShape:
    shape_class = grid.shape_class
    if shape_class.kind.value != expected:
        raise UnsupportedDatasetShapeError(
            operation, shape_class.kind.value, f"The input dataset has to be a {expected}"
        )
    if not isinstance(grid, (GeoData, CartData)):
        raise UnsupportedDatasetShapeError(
            operation, type(grid).__name__, "Only GeoData and CartData are supported"
        )
    return shape_class


def _grid_builder(grid):
    return lonlatdepth_grid if isinstance(grid, GeoData) else xyz_grid

# ============================================================================
# Volume Sections
# ============================================================================

def cross_section_volume(
    grid,
    dims: Sequence[int] = DEFAULT_VOLUME_SECTION_DIMS,
    interpolate: bool = False,
    depth_level: Optional[float] = None,
    lat_level: Optional[float] = None,
    lon_level: Optional[float] = None,
    start: Optional[LonLatPoint] = None,
    end: Optional[LonLatPoint] = None
):
    """
    Create a cross-section through a volume.

    Without interpolation the nearest level is extracted and the result has a
    length-1 axis. With interpolation the data are resampled onto a new grid:
    (dims0, dims1, 1) for horizontal and diagonal sections, (dims0, 1, dims1)
    at fixed latitude and (1, dims0, dims1) at fixed longitude. Diagonal
    sections are always interpolated.

    Args:
        grid: 3-D GeoData or CartData volume
        dims: Resolution of the interpolated section
        interpolate: Interpolate instead of extracting the nearest level
        depth_level: Depth of a horizontal section
        lat_level: Latitude (y) of a vertical section
        lon_level: Longitude (x) of a vertical section
        start: (lon, lat) start of a diagonal section
        end: (lon, lat) end of a diagonal section

    Returns:
        Grid of the same variant

    Raises:
        UnsupportedDatasetShapeError: If the input is not a volume
        OutOfBoundsError: If a level lies outside the data
        MissingPairedParameterError: If start is given without end (or vice versa)

    Examples:
        >>> section = cross_section_volume(data, depth_level=-100.0)
        >>> section.shape
        (11, 11, 1)
    """
    _require_shape(grid, "volume", "cross_section_volume")
    kind = resolve_section_kind(depth_level, lat_level, lon_level, start, end)
    _validate_dims("dims", dims, length=2)

    names = grid.coord_names
    X, Y, Z = grid.coordinate_grids()
    x_vec, y_vec, z_vec = grid_axis_vectors(grid)
    build = _grid_builder(grid)

    if kind == DIAGONAL_SECTION and not interpolate:
        logger.info("Diagonal cross-sections are always interpolated")
        interpolate = True

    x_range = np.linspace(np.nanmin(X), np.nanmax(X), dims[0])

    if kind == DEPTH_SECTION:
        check_level_in_bounds(names[2], Z, depth_level)
        if interpolate:
            query = build(x_range, np.linspace(np.nanmin(Y), np.nanmax(Y), dims[1]), depth_level)
        else:
            index = compute_level_slices(2, nearest_index(z_vec, depth_level))

    elif kind == LAT_SECTION:
        check_level_in_bounds(names[1], Y, lat_level)
        if interpolate:
            query = build(x_range, lat_level, np.linspace(np.nanmin(Z), np.nanmax(Z), dims[1]))
        else:
            index = compute_level_slices(1, nearest_index(y_vec, lat_level))

    elif kind == LON_SECTION:
        check_level_in_bounds(names[0], X, lon_level)
        if interpolate:
            query = build(lon_level, np.linspace(np.nanmin(Y), np.nanmax(Y), dims[0]),
                          np.linspace(np.nanmin(Z), np.nanmax(Z), dims[1]))
        else:
            index = compute_level_slices(0, nearest_index(x_vec, lon_level))

    else:
        path_x = np.linspace(start[0], end[0], dims[0])
        path_y = np.linspace(start[1], end[1], dims[0])
        path_z = np.linspace(np.nanmin(Z), np.nanmax(Z), dims[1])
        shape = (dims[0], dims[1], 1)
        query = (
            np.broadcast_to(path_x[:, None, None], shape).copy(),
            np.broadcast_to(path_y[:, None, None], shape).copy(),
            np.broadcast_to(path_z[None, :, None], shape).copy(),
        )

    logger.debug("Volume %s section (interpolate=%s)", kind, interpolate)
    if interpolate:
        return interpolate_datafields(grid, *query)
    return apply_index_selection(grid, index)

# ============================================================================
# Surface Sections
# ============================================================================

def cross_section_surface(
    grid,
    dims: Sequence[int] = DEFAULT_SURFACE_SECTION_DIMS,
    depth_level: Optional[float] = None,
    lat_level: Optional[float] = None,
    lon_level: Optional[float] = None,
    start: Optional[LonLatPoint] = None,
    end: Optional[LonLatPoint] = None
):
    """
    Create a profile along a surface.

    The surface depth and all fields are bilinearly interpolated along the
    profile; points outside the surface (or where it holds NaN) give NaN.

    Args:
        grid: GeoData or CartData surface of shape (nx, ny, 1)
        dims: Number of samples along the profile
        depth_level: Not supported for surfaces
        lat_level: Latitude (y) of the profile
        lon_level: Longitude (x) of the profile
        start: (lon, lat) start of a diagonal profile
        end: (lon, lat) end of a diagonal profile

    Returns:
        1-D grid of the same variant

    Raises:
        UnsupportedDatasetShapeError: For a horizontal (depth) section or a non-surface input
    """
    _require_shape(grid, "surface", "cross_section_surface")
    kind = resolve_section_kind(depth_level, lat_level, lon_level, start, end)
    _validate_dims("dims", dims, length=1)

    if kind == DEPTH_SECTION:
        raise UnsupportedDatasetShapeError(
            "Horizontal cross-section", "surface",
            "This requires the intersection of two surfaces"
        )

    x_vec, y_vec, _ = grid_axis_vectors(grid)
    n = int(dims[0])

    if kind == LAT_SECTION:
        x = np.linspace(np.nanmin(x_vec), np.nanmax(x_vec), n)
        y = np.full(n, float(lat_level))
    elif kind == LON_SECTION:
        y = np.linspace(np.nanmin(y_vec), np.nanmax(y_vec), n)
        x = np.full(n, float(lon_level))
    else:
        x = np.linspace(start[0], end[0], n)
        y = np.linspace(start[1], end[1], n)

    logger.debug("Surface %s profile with %d samples", kind, n)
    vertical, fields = interpolate_horizontal(grid, x, y, fill=FILL_NAN)
    return grid.copy_with(coords=(x, y, vertical), fields=fields)

# ============================================================================
# Point Sections
# ============================================================================

def _plane_projection(points: np.ndarray, plane: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Distance of points to the plane through three points, and their projections.

    Args:
        points: (N, 3) array
        plane: (3, 3) array with the points P1, P2, P3 spanning the plane

    Returns:
        Tuple: (distance, projected points)
    """
    a = plane[1] - plane[0]
    b = plane[2] - plane[0]
    normal = np.cross(a, b)
    t = (normal @ plane[0] - points @ normal) / (normal @ normal)
    distance = np.abs(t) * np.sqrt(normal @ normal)
    projected = points + t[:, None] * normal[None, :]
    return distance, projected


def _geo_point_band(grid: GeoData, kind: str, level, start, end, width_km: float):
    """Band mask and projected coordinates for geographic point data."""
    lon, lat, depth = grid.coordinate_grids()
    half_width_m = 0.5 * width_km * METERS_PER_KM

    if kind == DEPTH_SECTION:
        mask = np.abs(depth - level) < 0.5 * width_km
        return mask, (np.full(depth.shape, float(level)), lat, lon)

    if kind == LAT_SECTION:
        proj = projection_point(lat=level, lon=float(np.mean(lon)))
        _, ns = lonlat_to_fixed_utm(lon, lat, proj)
        mask = np.abs(ns - proj.ns) < half_width_m
        return mask, (depth, np.full(lat.shape, float(level)), lon)

    if kind == LON_SECTION:
        proj = projection_point(lat=float(np.mean(lat)), lon=level)
        ew, _ = lonlat_to_fixed_utm(lon, lat, proj)
        mask = np.abs(ew - proj.ew) < half_width_m
        return mask, (depth, lat, np.full(lon.shape, float(level)))

    # Plane through the profile line and a point straight below its start
    proj = projection_point(lat=0.5 * (start[1] + end[1]), lon=0.5 * (start[0] + end[0]))
    plane_ew, plane_ns = lonlat_to_fixed_utm(
        np.array([start[0], start[0], end[0]]), np.array([start[1], start[1], end[1]]), proj
    )
    plane_depth = np.array([0.0, DIAGONAL_PLANE_DEPTH_KM, 0.0]) * METERS_PER_KM
    plane = np.column_stack([plane_ew, plane_ns, plane_depth])

    ew, ns = lonlat_to_fixed_utm(lon, lat, proj)
    points = np.column_stack([ew, ns, depth * METERS_PER_KM])
    distance, projected = _plane_projection(points, plane)
    mask = distance < half_width_m

    plon, plat = fixed_utm_to_lonlat(projected[:, 0], projected[:, 1], proj)
    return mask, (projected[:, 2] / METERS_PER_KM, np.asarray(plat), np.asarray(plon))


def _cart_point_band(grid: CartData, kind: str, level, start, end, width_km: float):
    """Band mask and projected coordinates for Cartesian point data (km)."""
    x, y, z = grid.coordinate_grids()
    half_width = 0.5 * width_km

    if kind == DEPTH_SECTION:
        return np.abs(z - level) < half_width, (np.full(z.shape, float(level)), y, x)
    if kind == LAT_SECTION:
        return np.abs(y - level) < half_width, (z, np.full(y.shape, float(level)), x)
    if kind == LON_SECTION:
        return np.abs(x - level) < half_width, (z, y, np.full(x.shape, float(level)))

    plane = np.array([
        [start[0], start[1], 0.0],
        [start[0], start[1], DIAGONAL_PLANE_DEPTH_KM],
        [end[0], end[1], 0.0],
    ])
    distance, projected = _plane_projection(np.column_stack([x, y, z]), plane)
    return distance < half_width, (projected[:, 2], projected[:, 1], projected[:, 0])


def cross_section_points(
    grid,
    depth_level: Optional[float] = None,
    lat_level: Optional[float] = None,
    lon_level: Optional[float] = None,
    start: Optional[LonLatPoint] = None,
    end: Optional[LonLatPoint] = None,
    section_width: float = DEFAULT_POINT_SECTION_WIDTH_KM
):
    """
    Select the points within a band around a section and project them onto it.

    Geographic lat/lon bands are measured in the UTM zone of a projection
    point on the section; diagonal sections use the vertical plane through
    the start/end line. The result keeps all fields of the retained points
    and adds the projected coordinates ``depth_proj``, ``lat_proj`` and
    ``lon_proj``.

    Args:
        grid: 1-D GeoData or CartData point set
        depth_level: Depth of a horizontal band
        lat_level: Latitude (y) of a vertical band
        lon_level: Longitude (x) of a vertical band
        start: (lon, lat) start of a diagonal section
        end: (lon, lat) end of a diagonal section
        section_width: Full band width in km

    Returns:
        1-D grid of the same variant with the retained points
    """
    _require_shape(grid, "point", "cross_section_points")
    kind = resolve_section_kind(depth_level, lat_level, lon_level, start, end)
    if section_width <= 0:
        raise ParameterError("section_width", str(section_width), "Must be positive")

    level = {DEPTH_SECTION: depth_level, LAT_SECTION: lat_level, LON_SECTION: lon_level}.get(kind)
    band = _geo_point_band if isinstance(grid, GeoData) else _cart_point_band
    mask, projected = band(grid, kind, level, start, end, float(section_width))

    selected, indices = select_points(grid, mask)
    logger.debug("Point %s section keeps %d of %d points", kind, indices.size, grid.size)

    projected_fields = {
        name: np.asarray(values)[indices] for name, values in zip(PROJECTED_FIELD_NAMES, projected)
    }
    return selected.addfield(projected_fields)

# ============================================================================
# Dispatcher
# ============================================================================

def cross_section(
    grid,
    dims: Optional[Sequence[int]] = None,
    interpolate: bool = False,
    depth_level: Optional[float] = None,
    lat_level: Optional[float] = None,
    lon_level: Optional[float] = None,
    start: Optional[LonLatPoint] = None,
    end: Optional[LonLatPoint] = None,
    section_width: float = DEFAULT_SECTION_WIDTH_KM
):
    """
    Create a cross-section through a volume, surface or point dataset.

    The engine is chosen from the dataset's shape class, which is determined
    once on entry. ``interpolate`` and ``dims`` only apply to volumes and
    surfaces; ``section_width`` only applies to point data.

    Args:
        grid: GeoData or CartData
        dims: Section resolution (default (100, 100) for volumes, (100,) for surfaces)
        interpolate: Interpolate volume sections
        depth_level: Depth of a horizontal section
        lat_level: Latitude (y) of a vertical section
        lon_level: Longitude (x) of a vertical section
        start: (lon, lat) start of a diagonal section
        end: (lon, lat) end of a diagonal section
        section_width: Band width for point data in km

    Returns:
        Grid of the same variant

    Examples:
        >>> section = cross_section(volume, lon_level=15.0)
        >>> profile = cross_section(moho, start=(10, 30), end=(20, 40), dims=(101,))
        >>> picked = cross_section(quakes, depth_level=-20.0, section_width=10.0)
    """
    shape_class = grid.shape_class
    levels = dict(depth_level=depth_level, lat_level=lat_level, lon_level=lon_level,
                  start=start, end=end)
    logger.debug("Dispatching cross-section for %s data of shape %s",
                 shape_class.kind.value, shape_class.shape)

    if shape_class.is_point:
        return cross_section_points(grid, section_width=section_width, **levels)
    if shape_class.is_surface:
        return cross_section_surface(
            grid, dims=DEFAULT_SURFACE_SECTION_DIMS if dims is None else dims, **levels
        )
    return cross_section_volume(
        grid, dims=DEFAULT_VOLUME_SECTION_DIMS if dims is None else dims,
        interpolate=interpolate, **levels
    )
