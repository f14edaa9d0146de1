"""
GeoGrid - A Python package for geoscientific grid data.

This package provides unit-aware geographic, UTM, local Cartesian and ECEF
datasets together with tools to compare them: cross sections, subvolume
extraction and vote maps across several models.

Key Features:
- Four grid variants sharing one interface (GeoData, UTMData, CartData, ECEFData)
- Unit-tagged coordinates (unyt) and pyproj-backed projections
- Cross sections through volumes, surfaces and point clouds
- Subvolume extraction with or without resampling
- Boolean and statistical vote maps
- Export to xarray, optionally chunked with Dask

Quick Start:
    >>> import numpy as np
    >>> import geogrid as gg
    >>> lon, lat, depth = gg.lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41),
    ...                                      np.arange(-300, 1, 25))
    >>> data = gg.GeoData(lon, lat, depth, {"Depthdata": 2 * depth})
    >>>
    >>> # Vertical section at 15 degrees longitude
    >>> section = gg.cross_section(data, lon_level=15.0)
    >>>
    >>> # Cut out a box
    >>> sub = gg.extract_subvolume(data, lon_level=(10, 12), lat_level=(35, 40))
"""

__version__ = "1.0.0"
__author__ = "GeoGrid Development Team"

# Import main interface functions
from .main import (
    # Primary interface
    cross_section,
    extract_subvolume,
    votemap,
    votemap_statistical,

    # Utility functions
    get_grid_info,
    print_grid_info,
)

# Import grid variants and builders
from .grids import (
    GeoData,
    UTMData,
    CartData,
    ECEFData,
    lonlatdepth_grid,
    xyz_grid,
    meshgrid,
    average_q1,
    flip,
    create_cart_grid,
    cart_data_from_grid,
)

# Import coordinate conversions
from .coordinates import (
    utm_zone,
    projection_point,
    convert_to_utm,
    convert_to_geo,
    convert2utm_zone,
    convert2cart_data,
    convert_to_ecef,
)

# Import supplementary processing functions
from .processing import (
    interpolate_datafields,
    interpolate_datafields_2d,
    interpolate_data_on_surface,
    above_surface,
    below_surface,
    drape_on_topo,
    subtract_horizontal_mean,
    lithostatic_pressure,
    rotate_translate_scale,
)

# Import parameter classes
from .core.core_types import (
    ProjectionPoint,
    CartGrid,
    ShapeClass,
    DatasetShape,
    VoteMode,
)

# Import exceptions for error handling
from .core.exceptions import (
    GeoGridError,
    GridConstructionError,
    ShapeMismatchError,
    AmbiguousFieldsError,
    InvalidAttributesError,
    IncompatibleUnitsError,
    ProjectionError,
    SectionError,
    OutOfBoundsError,
    MissingPairedParameterError,
    UnsupportedDatasetShapeError,
    InvalidCriterionError,
    ParameterError,
    AxisOrderWarning,
)

# Import logging configuration
from .core.logging_config import setup_logging, set_log_level

# Define what gets imported with "from geogrid import *"
__all__ = [
    # Version info
    '__version__',

    # Main interface functions
    'cross_section',
    'extract_subvolume',
    'votemap',
    'votemap_statistical',

    # Utility functions
    'get_grid_info',
    'print_grid_info',

    # Grid variants and builders
    'GeoData',
    'UTMData',
    'CartData',
    'ECEFData',
    'lonlatdepth_grid',
    'xyz_grid',
    'meshgrid',
    'average_q1',
    'flip',
    'create_cart_grid',
    'cart_data_from_grid',

    # Coordinate conversions
    'utm_zone',
    'projection_point',
    'convert_to_utm',
    'convert_to_geo',
    'convert2utm_zone',
    'convert2cart_data',
    'convert_to_ecef',

    # Supplementary processing
    'interpolate_datafields',
    'interpolate_datafields_2d',
    'interpolate_data_on_surface',
    'above_surface',
    'below_surface',
    'drape_on_topo',
    'subtract_horizontal_mean',
    'lithostatic_pressure',
    'rotate_translate_scale',

    # Parameter classes
    'ProjectionPoint',
    'CartGrid',
    'ShapeClass',
    'DatasetShape',
    'VoteMode',

    # Exception classes
    'GeoGridError',
    'GridConstructionError',
    'ShapeMismatchError',
    'AmbiguousFieldsError',
    'InvalidAttributesError',
    'IncompatibleUnitsError',
    'ProjectionError',
    'SectionError',
    'OutOfBoundsError',
    'MissingPairedParameterError',
    'UnsupportedDatasetShapeError',
    'InvalidCriterionError',
    'ParameterError',
    'AxisOrderWarning',

    # Logging configuration
    'setup_logging',
    'set_log_level',
]


def print_package_info():
    """Print package information and usage examples."""
    print(f"""
GeoGrid v{__version__}
======================

Unit-aware geoscientific grids with cross sections, subvolumes and vote maps.

Quick Examples:
--------------

1. Build a geographic volume:
   >>> import geogrid as gg
   >>> lon, lat, depth = gg.lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41),
   ...                                      np.arange(-300, 1, 25))
   >>> data = gg.GeoData(lon, lat, depth, {{"Vs": vs}})

2. Horizontal section (nearest level or interpolated):
   >>> section = gg.cross_section(data, depth_level=-100.0)
   >>> section = gg.cross_section(data, depth_level=-110.0, interpolate=True, dims=(50, 50))

3. Diagonal section:
   >>> section = gg.cross_section(data, start=(10, 30), end=(20, 40), dims=(100, 50))

4. Subvolume:
   >>> sub = gg.extract_subvolume(data, lon_level=(10, 12), lat_level=(35, 40))

5. Vote map:
   >>> vm = gg.votemap([model_a, model_b], ["Vs<4.2", "dVp<-1"], dims=(50, 50, 50))

6. Local Cartesian coordinates:
   >>> proj = gg.projection_point(lat=40.0, lon=15.0)
   >>> cart = gg.convert2cart_data(data, proj)

For more information, see the documentation or use help(gg.cross_section).
""")

