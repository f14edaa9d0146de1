"""
GeoGrid Index Slicing

This module computes index positions and slices on the 1-D axis vectors of
structured grids, for level extraction and index-box selection.
"""

from typing import Tuple

import numpy as np


# ============================================================================
# Index Lookup
# ============================================================================

def ascending_order(vector: np.ndarray) -> Tuple[np.ndarray, bool]:
    """
    Get ``vector`` in ascending order.

    Returns:
        Tuple: (ascending vector, whether it was reversed)
    """
    vector = np.asarray(vector, dtype=np.float64)
    if vector.size > 1 and vector[0] > vector[-1]:
        return vector[::-1], True
    return vector, False


def nearest_index(vector: np.ndarray, value: float) -> int:
    """
    Get the index of the entry closest to ``value``.

    The search runs over the ascending axis, so a value halfway between two
    entries resolves to the lower coordinate whatever the storage direction.
    The returned index refers to ``vector`` as stored.
    """
    ascending, flipped = ascending_order(vector)
    index = int(np.nanargmin(np.abs(ascending - value)))
    return ascending.size - 1 - index if flipped else index


def index_range_slice(i_start: int, i_end: int) -> slice:
    """
    Get the inclusive slice from index ``i_start`` to ``i_end``.

    The slice runs backwards (step -1) when the end index lies before the
    start index, e.g. for reversed bounds on an ascending axis.

    Args:
        i_start: Index of the first entry to keep
        i_end: Index of the last entry to keep

    Returns:
        slice: Inclusive index slice
    """
    if i_end >= i_start:
        return slice(i_start, i_end + 1, 1)

    # Backwards slice; a stop of -1 would wrap around
    stop = i_end - 1 if i_end > 0 else None
    return slice(i_start, stop, -1)


def compute_level_slices(axis: int, index: int, ndim: int = 3) -> Tuple[slice, ...]:
    """Get slices that keep a single level (length-1 axis) along ``axis``."""
    slices = [slice(None)] * ndim
    slices[axis] = slice(index, index + 1)
    return tuple(slices)
