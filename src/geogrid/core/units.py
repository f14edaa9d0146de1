"""
GeoGrid Unit-Tagged Coordinates

This module binds coordinate arrays to physical units using unyt. Lengths are
kept in a canonical unit per grid variant (km for geographic depth and
Cartesian axes, m for UTM); angles are tagged as degrees and never converted.
"""

from typing import Any

import numpy as np
import unyt
from unyt.exceptions import UnitConversionError, UnitOperationError, UnitParseError

from .config import ANGLE_UNIT, KM_UNIT
from .exceptions import IncompatibleUnitsError
from .logging_config import get_logger

logger = get_logger('core.units')

# ============================================================================
# Unit Inspection
# ============================================================================

def has_units(values: Any) -> bool:
    """Check whether values carry a unit tag."""
    return isinstance(values, unyt.unyt_array)


def unit_of(values: Any) -> str:
    """Get the unit string of values ('dimensionless' for bare arrays)."""
    if has_units(values):
        return str(values.units)
    return 'dimensionless'


def strip(values: Any) -> np.ndarray:
    """Return the plain float array behind (possibly unit-tagged) values."""
    if has_units(values):
        return np.asarray(values.d, dtype=np.float64)
    return np.asarray(values, dtype=np.float64)

# ============================================================================
# Construction and Conversion
# ============================================================================

def convert(values: unyt.unyt_array, target_unit: str) -> unyt.unyt_array:
    """
    Convert unit-tagged values to another unit.

    Args:
        values: Unit-tagged array
        target_unit: Unit to convert to

    Returns:
        unyt.unyt_array: Converted copy

    Raises:
        IncompatibleUnitsError: If the units have different dimensions
    """
    try:
        return values.to(target_unit)
    except (UnitConversionError, UnitParseError) as e:
        raise IncompatibleUnitsError(unit_of(values), target_unit) from e


def as_length(values: Any, default_unit: str = KM_UNIT, target_unit: str = KM_UNIT) -> unyt.unyt_array:
    """
    Wrap a length coordinate into the canonical unit.

    Bare arrays are assumed to be in ``default_unit``.

    Args:
        values: Bare or unit-tagged array
        default_unit: Unit assumed for bare arrays
        target_unit: Canonical unit of the result

    Returns:
        unyt.unyt_array: Float array in ``target_unit``
    """
    if has_units(values):
        return convert(values.astype(np.float64), target_unit)

    logger.debug("No unit given, assuming %s", default_unit)
    tagged = unyt.unyt_array(np.asarray(values, dtype=np.float64), default_unit)
    if default_unit == target_unit:
        return tagged
    return convert(tagged, target_unit)


def as_angle(values: Any) -> unyt.unyt_array:
    """Tag longitude or latitude values as degrees."""
    if has_units(values):
        return convert(values.astype(np.float64), ANGLE_UNIT)
    return unyt.unyt_array(np.asarray(values, dtype=np.float64), ANGLE_UNIT)


def like(template: Any, values: np.ndarray) -> Any:
    """Attach the unit of ``template`` to ``values`` if the template has one."""
    if has_units(template):
        return unyt.unyt_array(values, template.units)
    return values

# ============================================================================
# Checked Arithmetic
# ============================================================================

def add(left: unyt.unyt_array, right: unyt.unyt_array) -> unyt.unyt_array:
    """
    Add two unit-tagged arrays; the result is in the left operand's unit.

    Raises:
        IncompatibleUnitsError: If the units have different dimensions
    """
    try:
        return left + convert(right, str(left.units))
    except UnitOperationError as e:
        raise IncompatibleUnitsError(unit_of(left), unit_of(right)) from e


def subtract(left: unyt.unyt_array, right: unyt.unyt_array) -> unyt.unyt_array:
    """
    Subtract two unit-tagged arrays; the result is in the left operand's unit.

    Raises:
        IncompatibleUnitsError: If the units have different dimensions
    """
    try:
        return left - convert(right, str(left.units))
    except UnitOperationError as e:
        raise IncompatibleUnitsError(unit_of(left), unit_of(right)) from e
