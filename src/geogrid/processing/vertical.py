"""
GeoGrid Per-Level Processing

This module handles statistics along the vertical (last) axis of structured
arrays: horizontal-mean removal per level and lithostatic pressure.
"""

import warnings

import numpy as np

from ..core.config import GRAVITY
from ..core.exceptions import ParameterError

# ============================================================================
# Horizontal Mean
# ============================================================================

def subtract_horizontal_mean(array: np.ndarray, percentage: bool = False) -> np.ndarray:
    """
    Subtract the horizontal average of every level of a 2-D or 3-D array.

    The last axis is the vertical; NaNs are ignored when averaging.

    Args:
        array: 2-D (x, z) or 3-D (x, y, z) array
        percentage: Return the deviation in percent of the level mean

    Returns:
        np.ndarray: New array of the same shape

    Raises:
        ParameterError: If the array is not 2-D or 3-D

    Examples:
        >>> dv = subtract_horizontal_mean(data["Vp"], percentage=True)
    """
    array = np.asarray(array, dtype=np.float64)
    if array.ndim not in (2, 3):
        raise ParameterError("array", f"{array.ndim}-D", "Expected a 2-D or 3-D array")

    horizontal_axes = tuple(range(array.ndim - 1))
    with warnings.catch_warnings():
        # All-NaN levels give a NaN mean
        warnings.simplefilter("ignore", category=RuntimeWarning)
        average = np.nanmean(array, axis=horizontal_axes, keepdims=True)

    if percentage:
        return (array - average) / average * 100.0
    return array - average

# ============================================================================
# Lithostatic Pressure
# ============================================================================

def lithostatic_pressure(density: np.ndarray, dz: float, g: float = GRAVITY) -> np.ndarray:
    """
    Integrate density into lithostatic pressure.

    The last axis is the vertical, ordered from the bottom to the top; the
    top level has zero pressure and the pressure increases downwards.

    Args:
        density: Density array (kg/m^3)
        dz: Vertical grid spacing (m)
        g: Gravitational acceleration (m/s^2)

    Returns:
        np.ndarray: Pressure in Pa, same shape as ``density``
    """
    pressure = np.asarray(density, dtype=np.float64) * dz * g
    pressure[..., -1] = 0.0
    return np.flip(np.cumsum(np.flip(pressure, axis=-1), axis=-1), axis=-1)
