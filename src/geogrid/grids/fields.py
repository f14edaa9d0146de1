"""
GeoGrid Field Map Handling

This module normalizes user input into the ordered field map carried by every
grid variant, and validates field shapes and attributes.
"""

from typing import Any, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..core.config import (
    DEFAULT_FIELD_NAME, DEFAULT_VERTICAL_FIELD_NAME, COLORS_FIELD_NAME,
    VECTOR_COMPONENTS, default_attributes
)
from ..core.core_types import FieldMap, FieldValue
from ..core.exceptions import (
    ShapeMismatchError, AmbiguousFieldsError, InvalidAttributesError, ParameterError
)

# ============================================================================
# Field Classification
# ============================================================================

def is_vector_field(value: FieldValue) -> bool:
    """Check whether a field value is a tuple of component arrays."""
    return isinstance(value, tuple)


def is_rotatable_vector(name: str, value: FieldValue) -> bool:
    """
    Check whether a field should be rotated as a direction vector.

    Only 3-component fields qualify, and a field named "colors" holds RGB
    values rather than directions.
    """
    return (is_vector_field(value) and len(value) == VECTOR_COMPONENTS
            and name != COLORS_FIELD_NAME)


def map_field(value: FieldValue, func) -> FieldValue:
    """Apply ``func`` to a scalar field or to each component of a vector field."""
    if is_vector_field(value):
        return tuple(func(component) for component in value)
    return func(value)


def map_fields(fields: FieldMap, func) -> FieldMap:
    """Apply ``func`` to every array in a field map, keeping names and order."""
    return {name: map_field(value, func) for name, value in fields.items()}

# ============================================================================
# Normalization
# ============================================================================

def _as_field_value(value: Any) -> FieldValue:
    if isinstance(value, tuple):
        return tuple(np.asanyarray(component) for component in value)
    return np.asanyarray(value)


def normalize_fields(fields: Any, vertical: Optional[np.ndarray] = None) -> FieldMap:
    """
    Turn user input into an ordered field map.

    - mapping: kept (order preserved)
    - bare array: single field named "DataSet1"
    - tuple/list of length 1: its element becomes "DataSet1"
    - None: a single field "Z" holding the vertical coordinate

    Args:
        fields: Field input
        vertical: Vertical coordinate values used when ``fields`` is None

    Returns:
        FieldMap: Normalized field map

    Raises:
        AmbiguousFieldsError: If an unnamed tuple of several arrays is given
    """
    if fields is None:
        if vertical is None:
            return {}
        return {DEFAULT_VERTICAL_FIELD_NAME: np.array(vertical, copy=True)}

    if isinstance(fields, Mapping):
        return {str(name): _as_field_value(value) for name, value in fields.items()}

    if isinstance(fields, tuple):
        if len(fields) == 1:
            return {DEFAULT_FIELD_NAME: _as_field_value(fields[0])}
        raise AmbiguousFieldsError(len(fields))

    return {DEFAULT_FIELD_NAME: _as_field_value(fields)}


def validate_field_shapes(fields: FieldMap, shape: Tuple[int, ...]) -> None:
    """
    Check that every field (and every vector component) has the coordinate shape.

    Raises:
        ShapeMismatchError: If any array has a different shape
    """
    for name, value in fields.items():
        if is_vector_field(value):
            for icomp, component in enumerate(value):
                if np.shape(component) != tuple(shape):
                    raise ShapeMismatchError(f"field '{name}'[{icomp}]", shape, np.shape(component))
        elif np.shape(value) != tuple(shape):
            raise ShapeMismatchError(f"field '{name}'", shape, np.shape(value))


def normalize_attributes(atts: Any) -> dict:
    """
    Validate the attribute map, substituting the default note when absent.

    Raises:
        InvalidAttributesError: If ``atts`` is not a mapping
    """
    if atts is None:
        return default_attributes()
    if not isinstance(atts, Mapping):
        raise InvalidAttributesError(type(atts).__name__)
    return dict(atts)

# ============================================================================
# Field Map Editing
# ============================================================================

def add_fields(fields: FieldMap, new_fields: Mapping[str, Any]) -> FieldMap:
    """Return a new field map with ``new_fields`` appended (or replaced in place)."""
    merged = dict(fields)
    for name, value in new_fields.items():
        merged[str(name)] = _as_field_value(value)
    return merged


def remove_fields(fields: FieldMap, names: Union[str, Sequence[str]]) -> FieldMap:
    """
    Return a new field map without ``names``.

    Raises:
        ParameterError: If a name is not present
    """
    if isinstance(names, str):
        names = (names,)
    missing = [name for name in names if name not in fields]
    if missing:
        raise ParameterError("names", ", ".join(missing),
                             f"Available fields: {', '.join(fields)}")
    return {name: value for name, value in fields.items() if name not in names}


def merge_fields(left: FieldMap, right: FieldMap) -> FieldMap:
    """Merge two field maps; fields of ``left`` take precedence."""
    merged = dict(left)
    for name, value in right.items():
        merged.setdefault(name, value)
    return merged
