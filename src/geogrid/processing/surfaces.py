"""
GeoGrid Surface Operations

This module relates datasets to surfaces (3-D grids with a single vertical
layer such as topography or a Moho map):

- ``above_surface`` / ``below_surface``: boolean masks of points relative to a surface
- ``drape_on_topo``: transfer fields of a dataset onto a topography by nearest-neighbour lookup
"""

from typing import Tuple, Union

import numpy as np
from scipy.spatial import cKDTree

from ..core.core_types import CartGrid
from ..core.exceptions import ParameterError, UnsupportedDatasetShapeError
from ..core.logging_config import get_logger
from ..grids.fields import map_fields
from ..grids.variants import GeoData, CartData, ECEFData
from .interpolation import GridInterpolator, FILL_NAN

logger = get_logger('processing.surfaces')

# ============================================================================
# Surface Helpers
# ============================================================================

def _surface_depth(surface) -> Tuple[Tuple[np.ndarray, np.ndarray], np.ndarray]:
    """
    Get the horizontal axis vectors and the depth layer of a surface.

    Raises:
        UnsupportedDatasetShapeError: If ``surface`` is not an (nx, ny, 1) grid
    """
    if surface.ndim != 3 or surface.shape[2] != 1:
        raise UnsupportedDatasetShapeError(
            "above_surface", surface.shape_class.kind.value,
            f"The surface must have shape (nx, ny, 1), got {surface.shape}"
        )
    c1, c2, c3 = surface.coordinate_grids()
    return (c1[:, 0, 0], c2[0, :, 0]), c3[:, :, 0]


def _point_coordinates(data) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    if isinstance(data, (GeoData, CartData, ECEFData, CartGrid)):
        return data.coordinate_grids()
    raise ParameterError(
        "data", type(data).__name__, "Expected GeoData, CartData, ECEFData or a CartGrid"
    )

# ============================================================================
# Above / Below
# ============================================================================

def above_surface(data, surface, above: bool = True) -> np.ndarray:
    """
    Determine which points of a dataset lie above (or below) a surface.

    The surface depth is bilinearly interpolated at the horizontal positions of
    the data. Points outside the horizontal footprint of the surface are
    neither above nor below it.

    Args:
        data: GeoData, CartData, ECEFData or CartGrid
        surface: Surface of the matching coordinate system, shape (nx, ny, 1)
        above: Return points above the surface (False: below)

    Returns:
        np.ndarray: Boolean array of the data's shape

    Raises:
        UnsupportedDatasetShapeError: If ``surface`` is not a surface

    Examples:
        >>> mask = above_surface(tomography, moho)
        >>> crust = tomography["Vs"][mask]
    """
    x, y, z = _point_coordinates(data)
    vectors, depth = _surface_depth(surface)

    interpolator = GridInterpolator(vectors, fill=FILL_NAN)
    surface_depth = interpolator(depth, (x, y))
    logger.debug("Comparing %s points against surface of shape %s", x.shape, surface.shape)

    if above:
        return z > surface_depth
    return z < surface_depth


def below_surface(data, surface) -> np.ndarray:
    """Determine which points of a dataset lie below a surface."""
    return above_surface(data, surface, above=False)

# ============================================================================
# Draping
# ============================================================================

def drape_on_topo(topo: Union[GeoData, CartData], data: Union[GeoData, CartData]):
    """
    Drape the fields of a dataset onto a topography surface.

    Every topography point takes the field values of the horizontally nearest
    data point (KD-tree lookup). Points outside the horizontal bounds of the
    data get NaN in every draped field. Existing topography fields are kept
    unless a draped field of the same name replaces them.

    Args:
        topo: Topography surface (GeoData or CartData)
        data: Dataset of the same variant whose fields are draped

    Returns:
        Topography of the same variant with the draped fields added

    Examples:
        >>> topo = drape_on_topo(topo, tomography_slice)
        >>> topo.field_names
        ('Topography', 'Vs')
    """
    if not isinstance(topo, (GeoData, CartData)) or type(topo) is not type(data):
        raise ParameterError(
            "data", f"{type(topo).__name__}/{type(data).__name__}",
            "Topography and data must both be GeoData or both CartData"
        )

    d1, d2, _ = data.coordinate_grids()
    t1, t2, _ = topo.coordinate_grids()
    d1, d2 = d1.ravel(), d2.ravel()

    tree = cKDTree(np.column_stack([d1, d2]))
    _, nearest = tree.query(np.column_stack([t1.ravel(), t2.ravel()]))

    outside = (
        (t1 < np.nanmin(d1)) | (t1 > np.nanmax(d1))
        | (t2 < np.nanmin(d2)) | (t2 > np.nanmax(d2))
    )

    def _drape(values):
        draped = np.asarray(values, dtype=np.float64).ravel()[nearest].reshape(topo.shape)
        draped[outside] = np.nan
        return draped

    draped = map_fields(data.fields, _drape)
    logger.debug("Draped %d fields onto topography (%d points outside data)",
                 len(draped), int(np.count_nonzero(outside)))

    fields = topo.fields
    fields.update(draped)
    return topo.copy_with(fields=fields)
