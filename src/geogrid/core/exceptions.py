"""
GeoGrid Custom Exception Classes

This module defines all custom exception classes for better error handling
and more informative error messages.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

# ============================================================================
# Base Exception
# ============================================================================

class GeoGridError(Exception):
    """Base exception class for all GeoGrid related errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        full_message = f"{message}\nDetails: {details}" if details else message
        super().__init__(full_message)

# ============================================================================
# Grid Construction Errors
# ============================================================================

class GridConstructionError(GeoGridError):
    """Base class for errors raised while building a grid variant."""

class ShapeMismatchError(GridConstructionError):
    """Coordinate and field arrays disagree in shape."""

    def __init__(self, item: str, expected_shape: Tuple[int, ...], actual_shape: Tuple[int, ...]):
        super().__init__(
            f"Shape mismatch for {item}: {tuple(actual_shape)}",
            f"Expected shape: {tuple(expected_shape)}"
        )
        self.item = item
        self.expected_shape = tuple(expected_shape)
        self.actual_shape = tuple(actual_shape)

class AmbiguousFieldsError(GridConstructionError):
    """Several unnamed fields were given, so they cannot be named."""

    def __init__(self, count: int):
        super().__init__(
            f"Cannot name {count} unnamed fields",
            "Pass a mapping of field name to array instead of a tuple"
        )
        self.count = count

class InvalidAttributesError(GridConstructionError):
    """Attributes are not a key-value mapping."""

    def __init__(self, actual_type: str):
        super().__init__(
            f"Attributes must be a mapping, got {actual_type}"
        )
        self.actual_type = actual_type

# ============================================================================
# Unit Errors
# ============================================================================

class IncompatibleUnitsError(GeoGridError):
    """Arithmetic or conversion between incompatible units."""

    def __init__(self, left: str, right: str):
        super().__init__(f"Incompatible units: '{left}' and '{right}'")
        self.left = left
        self.right = right

# ============================================================================
# Projection Errors
# ============================================================================

class ProjectionError(GeoGridError):
    """Geodetic transform failures."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Projection failed during {operation}", reason)
        self.operation = operation

# ============================================================================
# Section and Selection Errors
# ============================================================================

class SectionError(GeoGridError):
    """Base class for cross-section and subvolume misuse."""

class OutOfBoundsError(SectionError):
    """Requested level lies outside the data extent."""

    def __init__(self, coordinate: str, value: float, valid_range: Tuple[float, float]):
        super().__init__(
            f"{coordinate} level {value} is outside bounds",
            f"Valid range: [{valid_range[0]} : {valid_range[1]}]"
        )
        self.coordinate = coordinate
        self.value = value
        self.valid_range = valid_range

class MissingPairedParameterError(SectionError):
    """One of a start/end pair was given without the other."""

    def __init__(self, given: str, missing: str):
        super().__init__(f"'{missing}' must be given together with '{given}'")
        self.given = given
        self.missing = missing

class UnsupportedDatasetShapeError(SectionError):
    """Operation is not defined for this kind of dataset."""

    def __init__(self, operation: str, shape_class: str, reason: Optional[str] = None):
        super().__init__(f"{operation} is not supported for {shape_class} data", reason)
        self.operation = operation
        self.shape_class = shape_class

# ============================================================================
# Vote Map Errors
# ============================================================================

class InvalidCriterionError(GeoGridError):
    """Vote map criterion cannot be parsed or names an unknown field."""

    def __init__(self, criterion: str, reason: str, available_fields: Optional[Sequence[str]] = None):
        details = reason
        if available_fields is not None:
            details = f"{reason}. Available fields: {', '.join(available_fields)}"
        super().__init__(f"Invalid criterion: '{criterion}'", details)
        self.criterion = criterion
        self.available_fields = list(available_fields) if available_fields is not None else None

# ============================================================================
# Parameter Errors
# ============================================================================

class ParameterError(GeoGridError):
    """Parameter validation errors."""

    def __init__(self, parameter: str, value: str, reason: str):
        super().__init__(f"Invalid parameter '{parameter}': {value}", reason)
        self.parameter = parameter
        self.value = value

# ============================================================================
# Warnings
# ============================================================================

class AxisOrderWarning(UserWarning):
    """Coordinate arrays do not appear to follow the lon/lat/depth axis order."""

# ============================================================================
# Utility Functions
# ============================================================================

def check_level_in_bounds(coordinate: str, values, level: float) -> None:
    """
    Validate that a section level lies within the coordinate extent.

    Args:
        coordinate: Coordinate name used in the error message
        values: Coordinate values (any shape)
        level: Requested level

    Raises:
        OutOfBoundsError: If level is outside [min, max]
    """
    lo, hi = float(np.nanmin(values)), float(np.nanmax(values))
    if level < lo or level > hi:
        raise OutOfBoundsError(coordinate, level, (lo, hi))

def check_paired(start, end, start_name: str = "start", end_name: str = "end") -> bool:
    """
    Check that a start/end pair is either fully given or fully absent.

    Returns:
        bool: True if the pair is given

    Raises:
        MissingPairedParameterError: If only one of the two is given
    """
    if start is None and end is None:
        return False
    if end is None:
        raise MissingPairedParameterError(start_name, end_name)
    if start is None:
        raise MissingPairedParameterError(end_name, start_name)
    return True
