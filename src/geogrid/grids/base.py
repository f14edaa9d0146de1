"""
GeoGrid Base Grid

This module defines the capability interface shared by all grid variants:
coordinate access, the field map, shape/extent queries, field editing,
surface arithmetic and export to xarray.
"""

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union
import warnings

import numpy as np
import unyt
import xarray as xr

from ..core import units
from ..core.config import DEFAULT_CHUNKS, GRID_DIMS, POINT_DIM
from ..core.core_types import DatasetShape, Extent, FieldMap
from ..core.exceptions import (
    AxisOrderWarning, ShapeMismatchError, UnsupportedDatasetShapeError, ParameterError
)
from ..core.logging_config import get_logger
from .fields import (
    normalize_fields, validate_field_shapes, normalize_attributes,
    add_fields, remove_fields, merge_fields, is_vector_field
)

logger = get_logger('grids.base')

# ============================================================================
# Axis Order Heuristic
# ============================================================================

def _max_abs_diff(values: np.ndarray, axis: int) -> float:
    diffs = np.abs(np.diff(values, axis=axis))
    return float(np.nanmax(diffs)) if diffs.size else 0.0


def check_axis_order(name: str, values: np.ndarray, primary_axis: int) -> bool:
    """
    Check that a coordinate varies mostly along its own axis.

    Only applied to 3-D arrays with more than one entry along every axis.
    Emits an AxisOrderWarning (and a log warning) if another axis shows a
    larger variation than ``primary_axis``. Data are never reordered.

    Returns:
        bool: True if the ordering looks right (or the check does not apply)
    """
    if values.ndim != 3 or sum(n > 1 for n in values.shape) != 3:
        return True

    primary = _max_abs_diff(values, primary_axis)
    others = [_max_abs_diff(values, axis) for axis in range(3) if axis != primary_axis]
    if any(other > primary for other in others):
        message = f"It appears that the {name} array has a wrong ordering"
        logger.warning(message)
        warnings.warn(message, AxisOrderWarning, stacklevel=4)
        return False
    return True

# ============================================================================
# Base Grid
# ============================================================================

class BaseGrid:
    """
    Common behaviour of the four grid variants.

    Subclasses normalize their coordinates into unit-tagged arrays and call
    ``_init_grid``. Coordinates, fields and attributes are treated as
    read-only; every operation returns a new grid.
    """

    #: Names of the three coordinates, in axis order
    coord_names: Tuple[str, str, str] = ("x", "y", "z")

    def _init_grid(self, c1: unyt.unyt_array, c2: unyt.unyt_array, c3: unyt.unyt_array,
                   fields: Any, atts: Any) -> None:
        shape = np.shape(c1)
        for name, coord in zip(self.coord_names[1:], (c2, c3)):
            if np.shape(coord) != shape:
                raise ShapeMismatchError(f"coordinate '{name}'", shape, np.shape(coord))

        check_axis_order(self.coord_names[0], units.strip(c1), primary_axis=0)
        check_axis_order(self.coord_names[1], units.strip(c2), primary_axis=1)

        field_map = normalize_fields(fields, vertical=units.strip(c3))
        validate_field_shapes(field_map, shape)

        self._coords = (c1, c2, c3)
        self._fields = field_map
        self._atts = normalize_attributes(atts)

    # ------------------------------------------------------------------
    # Rebuilding
    # ------------------------------------------------------------------

    def _rebuild(self, c1, c2, c3, fields, atts) -> "BaseGrid":
        """Create a grid of the same variant from new coordinates."""
        return type(self)(c1, c2, c3, fields, atts)

    def copy_with(self, coords: Optional[Sequence[Any]] = None, fields: Optional[FieldMap] = None,
                  atts: Optional[Mapping[str, str]] = None) -> "BaseGrid":
        """
        Return a new grid of the same variant with some parts replaced.

        Args:
            coords: Replacement coordinate triple
            fields: Replacement field map
            atts: Replacement attributes

        Returns:
            BaseGrid: New grid
        """
        c1, c2, c3 = coords if coords is not None else self._coords
        return self._rebuild(
            c1, c2, c3,
            dict(self._fields) if fields is None else fields,
            dict(self._atts) if atts is None else atts,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def coords(self) -> Tuple[unyt.unyt_array, unyt.unyt_array, unyt.unyt_array]:
        """Unit-tagged coordinate triple."""
        return self._coords

    @property
    def fields(self) -> FieldMap:
        """Ordered field map (a copy; grids are not mutated in place)."""
        return dict(self._fields)

    @property
    def atts(self) -> Dict[str, str]:
        return dict(self._atts)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self._fields)

    @property
    def shape(self) -> Tuple[int, ...]:
        return np.shape(self._coords[0])

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        return int(np.prod(self.shape))

    @property
    def shape_class(self) -> DatasetShape:
        """Point/surface/volume classification of the current coordinate shape."""
        return DatasetShape.classify(self.shape)

    def is_surface(self) -> bool:
        """Check whether this grid is a surface (3-D with one axis of length 1)."""
        return self.shape_class.is_surface

    def __getitem__(self, name: str):
        return self._fields[name]

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def coordinate_grids(self, cell: bool = False) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Get the plain coordinate arrays.

        Args:
            cell: Return cell-centre averages (one fewer entry per axis)

        Returns:
            Tuple: Three float arrays in the variant's canonical units
        """
        arrays = tuple(units.strip(c) for c in self._coords)
        if cell:
            from .builders import average_q1
            arrays = tuple(average_q1(a) for a in arrays)
        return arrays

    def extent(self) -> Extent:
        """Get (min, max) of each coordinate in canonical units."""
        return tuple(
            (float(np.nanmin(a)), float(np.nanmax(a))) for a in self.coordinate_grids()
        )

    # ------------------------------------------------------------------
    # Field editing
    # ------------------------------------------------------------------

    def addfield(self, name_or_fields: Union[str, Mapping[str, Any]], value: Any = None) -> "BaseGrid":
        """
        Return a new grid with extra fields.

        Args:
            name_or_fields: Field name, or a mapping of several new fields
            value: Field array (when a single name is given)

        Returns:
            BaseGrid: New grid with the added fields
        """
        if isinstance(name_or_fields, str):
            if value is None:
                raise ParameterError("value", "None", f"No data given for field '{name_or_fields}'")
            new_fields = {name_or_fields: value}
        else:
            new_fields = dict(name_or_fields)
        return self.copy_with(fields=add_fields(self._fields, new_fields))

    def removefield(self, names: Union[str, Sequence[str]]) -> "BaseGrid":
        """Return a new grid without the given field(s)."""
        return self.copy_with(fields=remove_fields(self._fields, names))

    # ------------------------------------------------------------------
    # Surface arithmetic
    # ------------------------------------------------------------------

    def _check_surface_operand(self, other: Any, operation: str) -> None:
        if type(other) is not type(self):
            raise UnsupportedDatasetShapeError(
                operation, type(other).__name__, f"Both operands must be {type(self).__name__}"
            )
        for grid in (self, other):
            if not grid.is_surface():
                raise UnsupportedDatasetShapeError(operation, grid.shape_class.kind.value,
                                                   "Both operands must be surfaces")
        if other.shape != self.shape:
            raise ShapeMismatchError("surface operand", self.shape, other.shape)

    def _combine_surface(self, other: "BaseGrid", vertical: unyt.unyt_array) -> "BaseGrid":
        c1, c2, _ = self._coords
        return self._rebuild(c1, c2, vertical, merge_fields(self._fields, other._fields), dict(self._atts))

    def __add__(self, other: "BaseGrid") -> "BaseGrid":
        self._check_surface_operand(other, "surface addition")
        return self._combine_surface(other, units.add(self._coords[2], other._coords[2]))

    def __sub__(self, other: "BaseGrid") -> "BaseGrid":
        self._check_surface_operand(other, "surface subtraction")
        return self._combine_surface(other, units.subtract(self._coords[2], other._coords[2]))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_xarray(self, chunks: Optional[Union[bool, str, Dict[str, int]]] = None) -> xr.Dataset:
        """
        Export the grid to an xarray Dataset.

        Coordinates become 2-D/3-D auxiliary coordinates with a ``units``
        attribute; vector fields are split into ``<name>_<i>`` variables.

        Args:
            chunks: Optional dask chunking (e.g. "auto" or {"k": 10}); True uses
                the package default (``GEOGRID_CHUNKS``, "auto" unless set)

        Returns:
            xr.Dataset: Dataset view of the grid
        """
        if self.ndim == 1:
            dims = (POINT_DIM,)
        else:
            dims = GRID_DIMS[:self.ndim]

        coords = {
            name: (dims, units.strip(coord), {"units": units.unit_of(coord)})
            for name, coord in zip(self.coord_names, self._coords)
        }

        data_vars = {}
        for name, value in self._fields.items():
            if is_vector_field(value):
                for icomp, component in enumerate(value):
                    data_vars[f"{name}_{icomp}"] = (dims, np.asarray(component), {"vector_field": name})
            else:
                data_vars[name] = (dims, np.asarray(value), {"units": units.unit_of(value)})

        attrs = {str(k): str(v) for k, v in self._atts.items()}
        attrs["grid_variant"] = type(self).__name__

        ds = xr.Dataset(data_vars=data_vars, coords=coords, attrs=attrs)
        if chunks is True:
            chunks = DEFAULT_CHUNKS
        if chunks is not None and chunks is not False:
            ds = ds.chunk(chunks)
        return ds

    def __repr__(self) -> str:
        from ..utils.info import format_grid_info
        return format_grid_info(self)
