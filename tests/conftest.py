"""Shared fixtures: reference volumes, a Moho-like surface, a point cloud and a Cartesian volume."""

import numpy as np
import pytest

from geogrid import GeoData, CartData, lonlatdepth_grid, xyz_grid, create_cart_grid


def _reference_volume(depth_vector):
    lon, lat, depth = lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), depth_vector)
    data = 2 * depth
    velocity = (3 * data, 4 * data, 5 * data)
    return GeoData(lon, lat, depth, {"Depthdata": data, "LonData": lon, "Velocity": velocity})


@pytest.fixture
def volume():
    """11 x 11 x 13 volume, depth ascending from -300 to 0 km."""
    return _reference_volume(np.arange(-300, 1, 25))


@pytest.fixture
def volume_reversed():
    """Same volume with depth descending from 0 to -300 km."""
    return _reference_volume(np.arange(0, -301, -25))


@pytest.fixture
def moho():
    """Surface at -40 km + lon, shape (11, 11, 1)."""
    lon, lat, depth = lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), -40.0)
    depth = depth + lon
    return GeoData(lon, lat, depth, {"MohoDepth": depth, "LonData": lon,
                                     "TestData": (depth, depth, depth)})


@pytest.fixture
def earthquakes():
    """Seeded cloud of 10 000 points with depth varying with longitude."""
    rng = np.random.default_rng(42)
    lon, lat, depth = lonlatdepth_grid(np.linspace(15, 17, 100), np.linspace(35, 37, 100), 280.0)
    depth = depth - 20 * lon
    magnitude = rng.random(lon.shape) * 6
    return GeoData(
        lon.ravel(), lat.ravel(), depth.ravel(),
        {"depth": depth.ravel(), "Magnitude": magnitude.ravel(),
         "VecField": (magnitude.ravel(), magnitude.ravel(), magnitude.ravel())}
    )


@pytest.fixture
def cart_volume():
    """100^3 Cartesian volume with the field Depthdata = z."""
    grid = create_cart_grid(size=(100, 100, 100), x=(0.0, 99.9), y=(-10.0, 20.0), z=(-40.0, 4.0))
    x, y, z = xyz_grid(*grid.coord1d)
    return CartData(x, y, z, {"Depthdata": z})
