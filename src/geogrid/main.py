"""
GeoGrid Main Interface

This module provides the main API functions: cross sections, subvolume
extraction and vote maps. The engines live in the processing package;
the functions here validate the input type and log what is being done.
"""

import logging
from typing import Mapping, Optional, Sequence, Union

from .core.config import (
    DEFAULT_SECTION_WIDTH_KM, DEFAULT_SUBVOLUME_DIMS, DEFAULT_VOTEMAP_DIMS, MODELSIZE_OVERLAPPING
)
from .core.core_types import CoordinateRange, LonLatPoint, VoteMode
from .core.exceptions import ParameterError
from .grids.base import BaseGrid
from .grids.variants import GeoData
from .processing.cross_section import cross_section as _cross_section
from .processing.subvolume import extract_subvolume as _extract_subvolume
from .processing.votemap import votemap as _votemap, votemap_statistical as _votemap_statistical

# Get logger for this module
logger = logging.getLogger('geogrid.main')

# Import utility functions for convenience
from .utils import get_grid_info, print_grid_info


def _require_grid(grid) -> None:
    if not isinstance(grid, BaseGrid):
        raise ParameterError("grid", type(grid).__name__, "Expected a GeoGrid dataset")


# ============================================================================
# Cross Sections
# ============================================================================

def cross_section(
    grid,
    *,
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

    Exactly one geometry must be given: ``depth_level``, ``lat_level``,
    ``lon_level`` or the ``start``/``end`` pair of a diagonal section.

    Args:
        grid: GeoData or CartData
        dims: Section resolution (volumes and surfaces)
        interpolate: Interpolate volume sections instead of taking the nearest level
        depth_level: Depth of a horizontal section
        lat_level: Latitude (y) of a vertical section
        lon_level: Longitude (x) of a vertical section
        start: (lon, lat) start of a diagonal section
        end: (lon, lat) end of a diagonal section
        section_width: Band width in km (point data)

    Returns:
        Section grid of the same variant

    Examples:
        # Horizontal section at the nearest depth level
        >>> section = cross_section(tomography, depth_level=-100.0)

        # Vertical section between two points
        >>> section = cross_section(tomography, start=(10, 30), end=(20, 40), dims=(200, 100))

        # Earthquakes within 10 km of a vertical plane
        >>> picked = cross_section(quakes, lon_level=15.0, section_width=10.0)
    """
    _require_grid(grid)
    logger.info("Cross-section of %s data (%s)", type(grid).__name__, grid.shape_class.kind.value)
    return _cross_section(
        grid, dims=dims, interpolate=interpolate,
        depth_level=depth_level, lat_level=lat_level, lon_level=lon_level,
        start=start, end=end, section_width=section_width
    )


# ============================================================================
# Subvolumes
# ============================================================================

def extract_subvolume(
    grid,
    *,
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
    Extract a box from a structured grid.

    Args:
        grid: GeoData or CartData
        interpolate: Resample onto a regular ``dims`` grid
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
        >>> sub = extract_subvolume(tomography, lon_level=(10, 12), lat_level=(35, 40))
        >>> sub = extract_subvolume(model, x_level=(0, 50), z_level=(-30, 0),
        ...                         interpolate=True, dims=(51, 21, 32))
    """
    _require_grid(grid)
    logger.info("Extracting subvolume of %s data (interpolate=%s)", type(grid).__name__, interpolate)
    return _extract_subvolume(
        grid, interpolate=interpolate,
        lon_level=lon_level, lat_level=lat_level, depth_level=depth_level, dims=dims,
        x_level=x_level, y_level=y_level, z_level=z_level
    )


# ============================================================================
# Vote Maps
# ============================================================================

def votemap(
    datasets: Union[GeoData, Sequence[GeoData]],
    criteria: Union[str, Sequence[str]],
    *,
    dims: Sequence[int] = DEFAULT_VOTEMAP_DIMS
) -> GeoData:
    """
    Count how many datasets satisfy their criterion in every cell.

    Args:
        datasets: GeoData volume(s)
        criteria: One criterion per dataset, e.g. "Vs>4.5"
        dims: Resolution of the vote map

    Returns:
        GeoData: Vote map with the field "votemap"

    Examples:
        >>> vm = votemap([tomo_a, tomo_b, tomo_c], ["dVp<-1", "dVs<-1.5", "Vs<4.2"])
    """
    count = len(datasets) if isinstance(datasets, (list, tuple)) else 1
    logger.info("Vote map of %d datasets on a %s grid", count, tuple(dims))
    return _votemap(datasets, criteria, dims=dims)


def votemap_statistical(
    datasets: Union[GeoData, Sequence[GeoData]],
    fields: Union[str, Sequence[str]],
    *,
    dims: Sequence[int] = DEFAULT_VOTEMAP_DIMS,
    threshold_stadev: float = 1.0,
    meancorrection: bool = True,
    modelsize: Union[str, Mapping] = MODELSIZE_OVERLAPPING,
    votes: Union[VoteMode, str] = VoteMode.ABSOLUTE,
    mindepth: float = 0.0
) -> GeoData:
    """
    Vote map of anomalies beyond ``threshold_stadev`` standard deviations.

    See ``geogrid.processing.votemap.votemap_statistical`` for the details of
    outlier removal, mean correction and coverage normalisation.

    Examples:
        >>> vm = votemap_statistical([model_a, model_b], ["dVp_perc", "dVp_perc"],
        ...                          threshold_stadev=-1.0, votes="relative")
    """
    count = len(datasets) if isinstance(datasets, (list, tuple)) else 1
    logger.info("Statistical vote map of %d datasets (threshold %s std, votes=%s)",
                count, threshold_stadev, votes)
    return _votemap_statistical(
        datasets, fields, dims=dims, threshold_stadev=threshold_stadev,
        meancorrection=meancorrection, modelsize=modelsize, votes=votes, mindepth=mindepth
    )


# ============================================================================
# Export List
# ============================================================================

__all__ = [
    # Main API
    'cross_section',
    'extract_subvolume',
    'votemap',
    'votemap_statistical',

    # Utility functions (re-exported from utils)
    'get_grid_info',
    'print_grid_info',
]
