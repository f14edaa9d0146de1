"""
GeoGrid Grid Data Model

This package provides the grid variants (GeoData, UTMData, CartData,
ECEFData), field map handling and grid builders.
"""

from .base import BaseGrid, check_axis_order
from .variants import GeoData, UTMData, CartData, ECEFData, GRID_VARIANTS
from .builders import (
    lonlatdepth_grid,
    xyz_grid,
    meshgrid,
    average_q1,
    flip,
    create_cart_grid,
    cart_data_from_grid,
)
from .fields import is_vector_field, is_rotatable_vector

__all__ = [
    # Grid variants
    "BaseGrid",
    "GeoData",
    "UTMData",
    "CartData",
    "ECEFData",
    "GRID_VARIANTS",
    "check_axis_order",
    # Builders
    "lonlatdepth_grid",
    "xyz_grid",
    "meshgrid",
    "average_q1",
    "flip",
    "create_cart_grid",
    "cart_data_from_grid",
    # Fields
    "is_vector_field",
    "is_rotatable_vector",
]
