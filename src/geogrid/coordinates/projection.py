"""
GeoGrid Projection Engine

This module converts grids between geographic, UTM, local Cartesian and
ECEF coordinates on the WGS84 ellipsoid using pyproj, and builds the
ProjectionPoint anchors used for local Cartesian frames.
"""

from functools import lru_cache
from typing import Optional, Tuple, Union

import numpy as np
import pyproj
from pyproj.exceptions import ProjError

from ..core import units
from ..core.config import (
    GEODETIC_CRS, ECEF_CRS, GEOGRAPHIC_2D_CRS, METERS_PER_KM,
    DEFAULT_PROJECTION_LAT, DEFAULT_PROJECTION_LON, utm_epsg_code
)
from ..core.core_types import FieldMap, ProjectionPoint
from ..core.exceptions import ProjectionError, ParameterError
from ..core.logging_config import get_logger
from ..grids.fields import is_rotatable_vector
from ..grids.variants import GeoData, UTMData, CartData, ECEFData

logger = get_logger('coordinates.projection')

# ============================================================================
# UTM Zones
# ============================================================================

def utm_zone(lat, lon) -> Tuple[np.ndarray, np.ndarray]:
    """
    Get the standard UTM zone and hemisphere of each point.

    Includes the Norway (zone 32V) and Svalbard (31X-37X) exceptions.

    Args:
        lat: Latitude(s) in degrees
        lon: Longitude(s) in degrees

    Returns:
        Tuple: (zone, northern) arrays of the input shape
    """
    lat = np.asarray(lat, dtype=np.float64)
    lon = np.asarray(lon, dtype=np.float64)
    lon_wrapped = (lon + 180.0) % 360.0 - 180.0

    zone = np.floor((lon_wrapped + 180.0) / 6.0).astype(np.int64) + 1
    zone = np.clip(zone, 1, 60)

    norway = (lat >= 56.0) & (lat < 64.0) & (lon_wrapped >= 3.0) & (lon_wrapped < 12.0)
    zone = np.where(norway, 32, zone)

    svalbard = (lat >= 72.0) & (lat < 84.0)
    for lo, hi, z in ((0.0, 9.0, 31), (9.0, 21.0, 33), (21.0, 33.0, 35), (33.0, 42.0, 37)):
        zone = np.where(svalbard & (lon_wrapped >= lo) & (lon_wrapped < hi), z, zone)

    northern = lat >= 0.0
    return zone, northern


@lru_cache(maxsize=None)
def _utm_transformer(zone: int, northern: bool) -> pyproj.Transformer:
    """Transformer from geographic lon/lat to one UTM zone."""
    return pyproj.Transformer.from_crs(
        GEOGRAPHIC_2D_CRS, f"EPSG:{utm_epsg_code(zone, northern)}", always_xy=True
    )


@lru_cache(maxsize=None)
def _ecef_transformer() -> pyproj.Transformer:
    return pyproj.Transformer.from_crs(GEODETIC_CRS, ECEF_CRS, always_xy=True)


def _transform(transformer: pyproj.Transformer, operation: str, *args, direction: str = "FORWARD"):
    try:
        return transformer.transform(*args, direction=direction, errcheck=True)
    except ProjError as e:
        raise ProjectionError(operation, str(e)) from e


def _lonlat_to_utm(lon: np.ndarray, lat: np.ndarray, zone: np.ndarray,
                   northern: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Forward UTM transform, grouping points by (zone, hemisphere)."""
    ew = np.empty(lon.shape)
    ns = np.empty(lon.shape)
    for z, north in set(zip(zone.ravel().tolist(), northern.ravel().tolist())):
        mask = (zone == z) & (northern == north)
        ew[mask], ns[mask] = _transform(
            _utm_transformer(int(z), bool(north)), "lon/lat -> UTM", lon[mask], lat[mask]
        )
    return ew, ns


def _utm_to_lonlat(ew: np.ndarray, ns: np.ndarray, zone: np.ndarray,
                   northern: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Inverse UTM transform, grouping points by (zone, hemisphere)."""
    lon = np.empty(ew.shape)
    lat = np.empty(ew.shape)
    for z, north in set(zip(zone.ravel().tolist(), northern.ravel().tolist())):
        mask = (zone == z) & (northern == north)
        lon[mask], lat[mask] = _transform(
            _utm_transformer(int(z), bool(north)), "UTM -> lon/lat",
            ew[mask], ns[mask], direction="INVERSE"
        )
    return lon, lat


def lonlat_to_fixed_utm(lon, lat, proj: ProjectionPoint) -> Tuple[np.ndarray, np.ndarray]:
    """Project lon/lat into the (fixed) UTM zone of a ProjectionPoint."""
    return _transform(_utm_transformer(proj.zone, proj.isnorth), "lon/lat -> UTM",
                      np.asarray(lon, dtype=np.float64), np.asarray(lat, dtype=np.float64))


def fixed_utm_to_lonlat(ew, ns, proj: ProjectionPoint) -> Tuple[np.ndarray, np.ndarray]:
    """Inverse of ``lonlat_to_fixed_utm``."""
    return _transform(_utm_transformer(proj.zone, proj.isnorth), "UTM -> lon/lat",
                      np.asarray(ew, dtype=np.float64), np.asarray(ns, dtype=np.float64),
                      direction="INVERSE")

# ============================================================================
# Projection Points
# ============================================================================

def projection_point(lat: float = DEFAULT_PROJECTION_LAT,
                     lon: float = DEFAULT_PROJECTION_LON) -> ProjectionPoint:
    """
    Create a ProjectionPoint from latitude/longitude.

    The UTM zone is the standard zone of the point.

    Examples:
        >>> p = projection_point(lat=37.0, lon=15.0)
        >>> p.zone
        33
    """
    zone, northern = utm_zone(lat, lon)
    zone, northern = int(zone), bool(northern)
    ew, ns = _transform(_utm_transformer(zone, northern), "projection point", float(lon), float(lat))
    return ProjectionPoint(lat=float(lat), lon=float(lon), ew=float(ew), ns=float(ns),
                           zone=zone, isnorth=northern)


def projection_point_from_utm(ew: float, ns: float, zone: int, isnorth: bool) -> ProjectionPoint:
    """Create a ProjectionPoint from UTM coordinates."""
    lon, lat = _transform(_utm_transformer(int(zone), bool(isnorth)), "projection point",
                          float(ew), float(ns), direction="INVERSE")
    return ProjectionPoint(lat=float(lat), lon=float(lon), ew=float(ew), ns=float(ns),
                           zone=int(zone), isnorth=bool(isnorth))


def _default_proj(proj: Optional[ProjectionPoint]) -> ProjectionPoint:
    if proj is None:
        logger.debug("No ProjectionPoint given, using the default anchor")
        return projection_point()
    return proj

# ============================================================================
# Geographic <-> UTM
# ============================================================================

def convert_to_utm(data: GeoData) -> UTMData:
    """
    Convert GeoData to UTMData, using the standard zone of every point.

    Depth is converted from km to m.

    Raises:
        ProjectionError: If the transform fails
    """
    if not isinstance(data, GeoData):
        raise ParameterError("data", type(data).__name__, "convert_to_utm expects GeoData")
    lon, lat, depth = data.coordinate_grids()
    zone, northern = utm_zone(lat, lon)
    ew, ns = _lonlat_to_utm(lon, lat, zone, northern)
    logger.debug("Converted %d points to UTM (zones %s)", lon.size, sorted(set(zone.ravel().tolist())))
    return UTMData(ew, ns, depth * METERS_PER_KM, zone, northern, data.fields, data.atts)


def convert_to_geo(data: Union[UTMData, CartData], proj: Optional[ProjectionPoint] = None) -> GeoData:
    """
    Convert UTMData (per-point zones) or CartData (via a ProjectionPoint) to GeoData.

    Args:
        data: UTMData or CartData
        proj: Anchor of the Cartesian frame (CartData only)

    Returns:
        GeoData: Dataset with depth in km
    """
    if isinstance(data, CartData):
        data = convert2utm_zone(data, _default_proj(proj))
    if not isinstance(data, UTMData):
        raise ParameterError("data", type(data).__name__, "convert_to_geo expects UTMData or CartData")

    ew, ns, depth = data.coordinate_grids()
    lon, lat = _utm_to_lonlat(ew, ns, data.zone, data.northern)
    return GeoData(lon, lat, depth / METERS_PER_KM, data.fields, data.atts)


def convert2utm_zone(data: Union[GeoData, CartData], proj: ProjectionPoint) -> UTMData:
    """
    Convert GeoData or CartData to UTM in the fixed zone of ``proj``.

    Close to the projection point the coordinates are rectilinear and in m;
    the distortion grows with distance.

    Args:
        data: GeoData or CartData (km, relative to ``proj``)
        proj: Anchor point

    Returns:
        UTMData: Dataset with a single zone
    """
    if isinstance(data, GeoData):
        lon, lat, depth = data.coordinate_grids()
        ew, ns = lonlat_to_fixed_utm(lon, lat, proj)
        depth_m = depth * METERS_PER_KM
    elif isinstance(data, CartData):
        x, y, z = data.coordinate_grids()
        ew = x * METERS_PER_KM + proj.ew
        ns = y * METERS_PER_KM + proj.ns
        depth_m = z * METERS_PER_KM
    else:
        raise ParameterError("data", type(data).__name__, "convert2utm_zone expects GeoData or CartData")

    return UTMData(ew, ns, depth_m, proj.zone, proj.isnorth, data.fields, data.atts)


def convert2cart_data(data: Union[UTMData, GeoData], proj: ProjectionPoint) -> CartData:
    """
    Convert UTMData or GeoData to CartData in km relative to ``proj``.

    GeoData is first projected into the fixed UTM zone of ``proj``.

    Examples:
        >>> p = projection_point(lat=40.0, lon=10.0)
        >>> cart = convert2cart_data(geo_data, p)
    """
    if isinstance(data, GeoData):
        data = convert2utm_zone(data, proj)
    if not isinstance(data, UTMData):
        raise ParameterError("data", type(data).__name__, "convert2cart_data expects UTMData or GeoData")

    ew, ns, depth = data.coordinate_grids()
    return CartData(
        (ew - proj.ew) / METERS_PER_KM,
        (ns - proj.ns) / METERS_PER_KM,
        depth / METERS_PER_KM,
        data.fields, data.atts,
    )

# ============================================================================
# Earth-Centred Earth-Fixed
# ============================================================================

def rotation_matrices(lon, lat) -> np.ndarray:
    """
    Local (east, north, up) -> ECEF rotation matrices.

    Returns:
        np.ndarray: Array of shape lon.shape + (3, 3)
    """
    az = np.deg2rad(np.asarray(lon, dtype=np.float64))
    el = np.deg2rad(np.asarray(lat, dtype=np.float64))
    sin_az, cos_az = np.sin(az), np.cos(az)
    sin_el, cos_el = np.sin(el), np.cos(el)
    zero = np.zeros_like(az)

    return np.stack([
        np.stack([-sin_az, -sin_el * cos_az, cos_el * cos_az], axis=-1),
        np.stack([cos_az, -sin_el * sin_az, cos_el * sin_az], axis=-1),
        np.stack([zero, cos_el, sin_el], axis=-1),
    ], axis=-2)


def rotate_vectors(lon, lat, fields: FieldMap) -> FieldMap:
    """
    Rotate 3-component vector fields from local (east, north, up) to ECEF axes.

    Fields named "colors" and scalar fields are returned unchanged. The
    input map is not modified.

    Args:
        lon: Longitudes of the field points
        lat: Latitudes of the field points
        fields: Field map

    Returns:
        FieldMap: New field map with rotated vectors
    """
    rotated = {}
    matrices = None
    for name, value in fields.items():
        if not is_rotatable_vector(name, value):
            rotated[name] = value
            continue
        if matrices is None:
            matrices = rotation_matrices(lon, lat)
        local = np.stack([np.asarray(c, dtype=np.float64) for c in value], axis=-1)
        ecef = np.einsum('...ij,...j->...i', matrices, local)
        rotated[name] = tuple(ecef[..., i] for i in range(3))
        logger.info("Rotated vector field '%s' to ECEF axes", name)
    return rotated


def convert_to_ecef(data: GeoData) -> ECEFData:
    """
    Convert GeoData to ECEFData (km) on WGS84, rotating vector fields.

    Depth is used as ellipsoidal height.

    Raises:
        ProjectionError: If the transform fails
    """
    if not isinstance(data, GeoData):
        raise ParameterError("data", type(data).__name__, "convert_to_ecef expects GeoData")
    lon, lat, depth = data.coordinate_grids()
    x, y, z = _transform(_ecef_transformer(), "lon/lat/height -> ECEF", lon, lat, depth * METERS_PER_KM)
    fields = rotate_vectors(lon, lat, data.fields)
    return ECEFData(
        units.as_length(np.asarray(x), "m"),
        units.as_length(np.asarray(y), "m"),
        units.as_length(np.asarray(z), "m"),
        fields, data.atts,
    )
