"""
GeoGrid Configuration and Constants

This module centralizes all configuration parameters, constants, and default values
for better maintainability and consistency across the codebase.
"""

import os

# ============================================================================
# Projection Defaults
# ============================================================================

# Default anchor used when no ProjectionPoint is supplied (Mainz)
DEFAULT_PROJECTION_LAT = 49.9929
DEFAULT_PROJECTION_LON = 8.2473

# Geodetic (lat/lon/ellipsoidal height) and Earth-centred Earth-fixed frames on WGS84
GEODETIC_CRS = "EPSG:4979"
ECEF_CRS = "EPSG:4978"
GEOGRAPHIC_2D_CRS = "EPSG:4326"

# UTM EPSG code bases (zone number is added)
UTM_NORTH_EPSG_BASE = 32600
UTM_SOUTH_EPSG_BASE = 32700

# ============================================================================
# Units
# ============================================================================

ANGLE_UNIT = "degree"
KM_UNIT = "km"
M_UNIT = "m"
METERS_PER_KM = 1.0e3

# ============================================================================
# Field Map Defaults
# ============================================================================

DEFAULT_FIELD_NAME = "DataSet1"
DEFAULT_VERTICAL_FIELD_NAME = "Z"
DEFAULT_ATTRIBUTES_NOTE = "No attributes were given to this dataset"

# 3-component fields with this name hold RGB colours, not directions
COLORS_FIELD_NAME = "colors"
VECTOR_COMPONENTS = 3

# ============================================================================
# Cross-Section Parameters
# ============================================================================

DEFAULT_VOLUME_SECTION_DIMS = (100, 100)
DEFAULT_SURFACE_SECTION_DIMS = (100,)

# Band width for point data; users can override the dispatcher default
# via the GEOGRID_SECTION_WIDTH_KM environment variable
DEFAULT_SECTION_WIDTH_KM = float(os.environ.get("GEOGRID_SECTION_WIDTH_KM", "50.0"))
DEFAULT_POINT_SECTION_WIDTH_KM = 10.0

# Depth of the second point that spans a diagonal profile plane
DIAGONAL_PLANE_DEPTH_KM = -200.0

# Names of the projected coordinates added to point cross-sections
PROJECTED_FIELD_NAMES = ("depth_proj", "lat_proj", "lon_proj")

# ============================================================================
# Subvolume and Vote Map Parameters
# ============================================================================

DEFAULT_SUBVOLUME_DIMS = (50, 50, 50)
DEFAULT_VOTEMAP_DIMS = (50, 50, 50)

VOTEMAP_FIELD_NAME = "votemap"
VOTEMAP_FRACTION_FIELD_NAME = "votemap_fraction"

# Values beyond this many standard deviations are outliers in the statistical vote
OUTLIER_STADEV = 5.0

MODELSIZE_OVERLAPPING = "overlapping"
MODELSIZE_MAXIMUM = "maximum"

# ============================================================================
# Physical Constants
# ============================================================================

GRAVITY = 9.81

# ============================================================================
# xarray Export
# ============================================================================

GRID_DIMS = ("i", "j", "k")
POINT_DIM = "point"
DEFAULT_CHUNKS = os.environ.get("GEOGRID_CHUNKS", "auto")

# ============================================================================
# Helper Functions
# ============================================================================

def utm_epsg_code(zone: int, northern: bool) -> int:
    """Get the WGS84 UTM EPSG code for a zone and hemisphere."""
    base = UTM_NORTH_EPSG_BASE if northern else UTM_SOUTH_EPSG_BASE
    return base + int(zone)

def default_attributes() -> dict:
    """Get a fresh default attribute map."""
    return {"note": DEFAULT_ATTRIBUTES_NOTE}
