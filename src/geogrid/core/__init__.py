"""
GeoGrid Core

Configuration constants, shared types, exceptions, unit handling and logging.
"""
