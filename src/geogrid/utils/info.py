"""
GeoGrid Information Utilities

This module provides summaries of grids: variant, shape, shape class,
coordinate extents, units, field names and attributes.
"""

from typing import Dict

from ..core import units
from ..core.logging_config import get_logger

logger = get_logger('utils.info')


# ============================================================================
# Grid Information
# ============================================================================

def get_grid_info(grid) -> Dict:
    """
    Get summary information about a grid.

    Args:
        grid: Any grid variant

    Returns:
        Dict: Grid information

    Examples:
        >>> info = get_grid_info(data)
        >>> print(f"{info['variant']} {info['shape']} ({info['shape_class']})")
        >>> print(f"Depth range: {info['extent']['depth']}")
    """
    extents = grid.extent()
    info = {
        'variant': type(grid).__name__,
        'shape': tuple(grid.shape),
        'shape_class': grid.shape_class.kind.value,
        'extent': dict(zip(grid.coord_names, extents)),
        'units': {name: units.unit_of(coord) for name, coord in zip(grid.coord_names, grid.coords)},
        'fields': grid.field_names,
        'attributes': tuple(grid.atts),
    }

    # UTMData carries its zone and hemisphere per point
    zone = getattr(grid, 'zone', None)
    if zone is not None:
        info['zones'] = tuple(int(z) for z in sorted(set(zone.ravel().tolist())))
        info['northern'] = tuple(bool(n) for n in sorted(set(grid.northern.ravel().tolist())))

    return info


def format_grid_info(grid) -> str:
    """Compact multi-line description of a grid."""
    info = get_grid_info(grid)
    lines = [f"{info['variant']}", f"  size      : {info['shape']} ({info['shape_class']})"]
    for name, (lo, hi) in info['extent'].items():
        lines.append(f"  {name:<10}: [ {lo:g} : {hi:g} ] {info['units'][name]}")
    if 'zones' in info:
        lines.append(f"  zone      : {info['zones']}")
        lines.append(f"  northern  : {info['northern']}")
    lines.append(f"  fields    : {info['fields']}")
    if info['attributes']:
        lines.append(f"  attributes: {info['attributes']}")
    return "\n".join(lines)


def print_grid_info(grid) -> None:
    """Log and print a description of a grid."""
    text = format_grid_info(grid)
    logger.info("Grid summary:\n%s", text)
    print(text)
