"""
GeoGrid Data Processing

This package provides the processing engines: interpolation, cross sections,
subvolume extraction, vote maps, surface operations, per-level statistics
and rigid transforms.
"""

# Interpolation functions
from .interpolation import (
    GridInterpolator,
    interpolate_datafields,
    interpolate_datafields_2d,
    interpolate_data_on_surface,
    FILL_FLAT,
    FILL_NAN,
)

# Cross sections
from .cross_section import (
    cross_section,
    cross_section_volume,
    cross_section_surface,
    cross_section_points,
    resolve_section_kind,
)

# Subvolumes and vote maps
from .subvolume import extract_subvolume
from .votemap import (
    votemap,
    votemap_statistical,
    parse_criterion,
    evaluate_criterion,
    overlapping_extent,
    maximum_extent,
)

# Surfaces, levels and transforms
from .surfaces import above_surface, below_surface, drape_on_topo
from .vertical import subtract_horizontal_mean, lithostatic_pressure
from .transform import rotate_translate_scale

__all__ = [
    # Interpolation
    "GridInterpolator",
    "interpolate_datafields",
    "interpolate_datafields_2d",
    "interpolate_data_on_surface",
    "FILL_FLAT",
    "FILL_NAN",
    # Cross sections
    "cross_section",
    "cross_section_volume",
    "cross_section_surface",
    "cross_section_points",
    "resolve_section_kind",
    # Subvolumes and vote maps
    "extract_subvolume",
    "votemap",
    "votemap_statistical",
    "parse_criterion",
    "evaluate_criterion",
    "overlapping_extent",
    "maximum_extent",
    # Surfaces
    "above_surface",
    "below_surface",
    "drape_on_topo",
    # Per-level statistics
    "subtract_horizontal_mean",
    "lithostatic_pressure",
    # Transforms
    "rotate_translate_scale",
]
