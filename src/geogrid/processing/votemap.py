"""
GeoGrid Vote Maps

This module combines several geographic datasets into a vote map: each
dataset is resampled onto a shared grid, and every cell counts how many
datasets satisfy a criterion there.

- ``votemap``: boolean criteria such as "Vs > 4.5"
- ``votemap_statistical``: anomalies beyond a multiple of the standard
  deviation, with outlier removal and optional mean correction
"""

import operator
import re
from typing import Callable, List, Mapping, Sequence, Tuple, Union

import numpy as np

from ..core.config import (
    DEFAULT_VOTEMAP_DIMS, VOTEMAP_FIELD_NAME, VOTEMAP_FRACTION_FIELD_NAME, OUTLIER_STADEV,
    MODELSIZE_OVERLAPPING, MODELSIZE_MAXIMUM
)
from ..core.core_types import Extent, VoteMode, _validate_dims
from ..core.exceptions import InvalidCriterionError, ParameterError
from ..core.logging_config import get_logger
from ..grids.variants import GeoData
from .subvolume import extract_subvolume

logger = get_logger('processing.votemap')

# ============================================================================
# Criterion Parsing
# ============================================================================

# Longer operators first so that ">=" is not read as ">"
_OPERATORS = {
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    "<": operator.lt,
}

_CRITERION_PATTERN = re.compile(
    r"^\s*(?P<field>[A-Za-z_]\w*)\s*(?P<op>>=|<=|==|!=|>|<)\s*"
    r"(?P<value>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*$"
)


def parse_criterion(criterion: str) -> Tuple[str, Callable, float]:
    """
    Parse a criterion of the form ``<field> <op> <number>``.

    Supported operators are >, >=, <, <=, == and !=.

    Returns:
        Tuple: (field name, comparison function, threshold)

    Raises:
        InvalidCriterionError: If the expression cannot be parsed

    Examples:
        >>> name, op, value = parse_criterion("Vs>4.5")
        >>> name, value
        ('Vs', 4.5)
    """
    match = _CRITERION_PATTERN.match(criterion)
    if match is None:
        raise InvalidCriterionError(criterion, "Expected '<field> <op> <number>'")
    return match.group("field"), _OPERATORS[match.group("op")], float(match.group("value"))


def evaluate_criterion(grid, criterion: str) -> np.ndarray:
    """
    Evaluate a criterion on a grid.

    Returns:
        np.ndarray: Boolean array of the grid shape

    Raises:
        InvalidCriterionError: If the criterion is malformed or names an unknown field
    """
    name, compare, value = parse_criterion(criterion)
    if name not in grid.field_names:
        raise InvalidCriterionError(criterion, f"Unknown field '{name}'", grid.field_names)
    values = grid[name]
    if isinstance(values, tuple):
        raise InvalidCriterionError(criterion, f"Field '{name}' is a vector field")
    return compare(np.asarray(values, dtype=np.float64), value)

# ============================================================================
# Shared Extent
# ============================================================================

def _as_list(datasets, items) -> Tuple[List, List]:
    if isinstance(datasets, GeoData):
        datasets = [datasets]
    if isinstance(items, str):
        items = [items]
    datasets, items = list(datasets), list(items)
    if not datasets:
        raise ParameterError("datasets", "[]", "At least one dataset is required")
    for data in datasets:
        if not isinstance(data, GeoData):
            raise ParameterError("datasets", type(data).__name__, "Vote maps require GeoData")
    if len(items) != len(datasets):
        raise ParameterError(
            "criteria", str(len(items)),
            f"Need the same number of criteria as datasets ({len(datasets)})"
        )
    return datasets, items


def overlapping_extent(datasets: Sequence[GeoData]) -> Extent:
    """Extent covered by all datasets."""
    extents = [data.extent() for data in datasets]
    return tuple(
        (max(e[axis][0] for e in extents), min(e[axis][1] for e in extents)) for axis in range(3)
    )


def maximum_extent(datasets: Sequence[GeoData]) -> Extent:
    """Extent covered by any dataset."""
    extents = [data.extent() for data in datasets]
    return tuple(
        (min(e[axis][0] for e in extents), max(e[axis][1] for e in extents)) for axis in range(3)
    )


def resolve_modelsize(datasets: Sequence[GeoData], modelsize: Union[str, Mapping]) -> Extent:
    """
    Resolve the vote map extent.

    Args:
        datasets: Input datasets
        modelsize: "overlapping", "maximum" or a mapping with "lon", "lat"
                   and "depth" ranges (depth positive down)

    Raises:
        ParameterError: For any other value
    """
    if isinstance(modelsize, Mapping):
        try:
            lon, lat, depth = (np.asarray(modelsize[key], dtype=np.float64)
                               for key in ("lon", "lat", "depth"))
        except KeyError as e:
            raise ParameterError("modelsize", str(dict(modelsize)),
                                 f"Missing entry {e}; need 'lon', 'lat' and 'depth'") from e
        return (
            (float(lon.min()), float(lon.max())),
            (float(lat.min()), float(lat.max())),
            (float((-depth).min()), float((-depth).max())),
        )
    if modelsize == MODELSIZE_OVERLAPPING:
        return overlapping_extent(datasets)
    if modelsize == MODELSIZE_MAXIMUM:
        return maximum_extent(datasets)
    raise ParameterError(
        "modelsize", str(modelsize),
        "Should be 'overlapping', 'maximum' or a mapping with entries 'lon', 'lat', 'depth'"
    )


def _resample(data: GeoData, extent: Extent, dims: Sequence[int]) -> GeoData:
    return extract_subvolume(
        data, interpolate=True, lon_level=extent[0], lat_level=extent[1],
        depth_level=extent[2], dims=dims
    )

# ============================================================================
# Vote Maps
# ============================================================================

def votemap(
    datasets: Union[GeoData, Sequence[GeoData]],
    criteria: Union[str, Sequence[str]],
    dims: Sequence[int] = DEFAULT_VOTEMAP_DIMS
) -> GeoData:
    """
    Create a vote map that counts how many datasets satisfy their criterion.

    All datasets are resampled onto a regular grid over their common
    (overlapping) extent. Cell values range from 0 to the number of datasets.

    Args:
        datasets: GeoData volume(s)
        criteria: One criterion per dataset, e.g. "Vs>4.5"
        dims: Resolution of the vote map

    Returns:
        GeoData: Shared grid with the int64 field "votemap"

    Raises:
        ParameterError: If the number of criteria and datasets differ
        InvalidCriterionError: If a criterion is malformed or names an unknown field

    Examples:
        >>> vm = votemap([tomo_a, tomo_b], ["dVp_perc<-1", "dVs>0.5"], dims=(50, 50, 50))
        >>> vm["votemap"].max() <= 2
        True
    """
    datasets, criteria = _as_list(datasets, criteria)
    _validate_dims("dims", dims, length=3)
    dims = tuple(int(n) for n in dims[:3])

    # Fail on malformed criteria before resampling anything
    for data, criterion in zip(datasets, criteria):
        name, _, _ = parse_criterion(criterion)
        if name not in data.field_names:
            raise InvalidCriterionError(criterion, f"Unknown field '{name}'", data.field_names)

    extent = overlapping_extent(datasets)
    logger.debug("Vote map over %s with %d datasets", extent, len(datasets))

    votes = np.zeros(dims, dtype=np.int64)
    reference = None
    for data, criterion in zip(datasets, criteria):
        resampled = _resample(data, extent, dims)
        votes += evaluate_criterion(resampled, criterion).astype(np.int64)
        if reference is None:
            reference = resampled

    lon, lat, depth = reference.coordinate_grids()
    return GeoData(lon, lat, depth, {VOTEMAP_FIELD_NAME: votes})


def _valid_stadev(values: np.ndarray, valid: np.ndarray) -> float:
    if np.count_nonzero(valid) < 2:
        return np.nan
    return float(np.std(values[valid], ddof=1))


def votemap_statistical(
    datasets: Union[GeoData, Sequence[GeoData]],
    fields: Union[str, Sequence[str]],
    dims: Sequence[int] = DEFAULT_VOTEMAP_DIMS,
    threshold_stadev: float = 1.0,
    meancorrection: bool = True,
    modelsize: Union[str, Mapping] = MODELSIZE_OVERLAPPING,
    votes: Union[VoteMode, str] = VoteMode.ABSOLUTE,
    mindepth: float = 0.0
) -> GeoData:
    """
    Create a vote map of statistically significant anomalies.

    For each dataset the named field is resampled onto the vote grid and set
    to 0 outside the dataset's own bounding box. Cells that are nonzero,
    deeper than ``mindepth`` and within 5 standard deviations form the valid
    set, from which the mean (optional correction) and standard deviation
    are taken. A dataset votes for a cell where the (corrected) value exceeds
    ``threshold_stadev`` standard deviations: above it for a positive
    threshold, below it for a negative one.

    Args:
        datasets: GeoData volume(s)
        fields: One field name per dataset
        dims: Resolution of the vote map
        threshold_stadev: Threshold in standard deviations (sign selects the side)
        meancorrection: Subtract the mean of the valid values first
        modelsize: "overlapping", "maximum" or a mapping with lon/lat/depth ranges
        votes: ABSOLUTE (vote counts) or RELATIVE (fraction of covering datasets)
        mindepth: Cells shallower than -|mindepth| are excluded from the statistics

    Returns:
        GeoData: Shared grid with the int64 field "votemap" (ABSOLUTE) or the
        float64 field "votemap_fraction" (RELATIVE)

    Examples:
        >>> vm = votemap_statistical([model_a, model_b, model_c],
        ...                          ["dVp_perc", "dVp_Percentage", "dVp_perc"],
        ...                          threshold_stadev=1.5, modelsize="maximum",
        ...                          votes=VoteMode.RELATIVE, mindepth=100.0)
    """
    datasets, fields = _as_list(datasets, fields)
    try:
        votes = VoteMode(votes)
    except ValueError as e:
        raise ParameterError("votes", str(votes), "Should be 'absolute' or 'relative'") from e
    _validate_dims("dims", dims, length=3)
    dims = tuple(int(n) for n in dims[:3])

    for data, name in zip(datasets, fields):
        if name not in data.field_names:
            raise InvalidCriterionError(name, f"Unknown field '{name}'", data.field_names)

    extent = resolve_modelsize(datasets, modelsize)
    min_depth = -abs(float(mindepth))
    logger.debug("Statistical vote map over %s (modelsize=%s, votes=%s)",
                 extent, modelsize, votes.value)

    vote_count = np.zeros(dims, dtype=np.int64)
    valid_counts = np.zeros(dims, dtype=np.int64)
    reference = None

    for data, name in zip(datasets, fields):
        resampled = _resample(data, extent, dims)
        if reference is None:
            reference = resampled
        X, Y, Z = resampled.coordinate_grids()
        values = np.array(resampled[name], dtype=np.float64)

        # Zero everything outside the dataset's own area
        (lon0, lon1), (lat0, lat1), (z0, z1) = data.extent()
        outside = (X > lon1) | (X < lon0) | (Y > lat1) | (Y < lat0) | (Z > z1) | (Z < z0)
        values[outside] = 0.0

        covered = values != 0.0
        valid_counts += covered

        valid = covered & (Z < min_depth)
        valid &= np.abs(values) < OUTLIER_STADEV * _valid_stadev(values, valid)

        if meancorrection and np.any(valid):
            values = values - np.mean(values[valid])

        stadev = _valid_stadev(values, valid)
        if np.isnan(stadev):
            logger.warning("Dataset field '%s' has too few valid cells for statistics; no votes", name)
            continue

        if threshold_stadev > 0:
            selected = values > threshold_stadev * stadev
        else:
            selected = values < threshold_stadev * stadev
        vote_count += selected

    lon, lat, depth = reference.coordinate_grids()
    if votes is VoteMode.RELATIVE:
        fraction = np.zeros(dims, dtype=np.float64)
        np.divide(vote_count, valid_counts, out=fraction, where=valid_counts > 0)
        return GeoData(lon, lat, depth, {VOTEMAP_FRACTION_FIELD_NAME: fraction})
    return GeoData(lon, lat, depth, {VOTEMAP_FIELD_NAME: vote_count})
