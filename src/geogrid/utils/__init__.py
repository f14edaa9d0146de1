"""
GeoGrid Utilities

This package provides grid summaries.
"""

from .info import get_grid_info, format_grid_info, print_grid_info

__all__ = [
    "get_grid_info",
    "format_grid_info",
    "print_grid_info",
]
