"""
GeoGrid Rigid Transforms

This module scales, rotates and translates Cartesian datasets.
"""

from typing import Sequence, Union

import numpy as np

from ..core.exceptions import ParameterError
from ..core.logging_config import get_logger
from ..grids.variants import CartData, ECEFData

logger = get_logger('processing.transform')


def _as_triple(name: str, value) -> np.ndarray:
    values = np.asarray(value, dtype=np.float64)
    if values.ndim == 0:
        return np.full(3, float(values))
    if values.shape != (3,):
        raise ParameterError(name, str(value), "Expected a scalar or 3 values")
    return values


def rotate_translate_scale(
    data: Union[CartData, ECEFData],
    rotate: float = 0.0,
    translate: Sequence[float] = (0.0, 0.0, 0.0),
    scale: Union[float, Sequence[float]] = 1.0
):
    """
    Scale, rotate and translate a Cartesian dataset, in that order.

    The rotation is about the vertical axis through the mean x/y of the
    scaled coordinates; positive angles rotate counter-clockwise.

    Args:
        data: CartData or ECEFData
        rotate: Rotation angle in degrees
        translate: Shift in x, y, z (km)
        scale: Scale factor, a scalar or one per axis

    Returns:
        Dataset of the same variant with unchanged fields

    Examples:
        >>> moved = rotate_translate_scale(model, rotate=30, translate=(100, 0, 0), scale=1e-3)
    """
    if not isinstance(data, (CartData, ECEFData)):
        raise ParameterError("data", type(data).__name__, "Expected CartData or ECEFData")

    scale = _as_triple("scale", scale)
    translate = _as_triple("translate", translate)

    x, y, z = data.coordinate_grids()
    x, y, z = x * scale[0], y * scale[1], z * scale[2]
    x_centre, y_centre = np.mean(x), np.mean(y)

    theta = np.deg2rad(rotate)
    cos_t, sin_t = np.cos(theta), np.sin(theta)
    dx, dy = x - x_centre, y - y_centre
    x = cos_t * dx - sin_t * dy + x_centre
    y = sin_t * dx + cos_t * dy + y_centre

    logger.debug("Rotated by %s deg, translated by %s, scaled by %s", rotate, translate, scale)
    return data.copy_with(coords=(x + translate[0], y + translate[1], z + translate[2]))
