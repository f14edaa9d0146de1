"""Tests for above/below-surface masks and draping onto topography."""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from geogrid import (
    CartData, GeoData, above_surface, below_surface, create_cart_grid, cross_section, drape_on_topo,
    lonlatdepth_grid, xyz_grid,
)
from geogrid.core.exceptions import ParameterError, UnsupportedDatasetShapeError


class TestAboveSurface:

    def test_volume_against_moho(self, volume, moho):
        above = above_surface(volume, moho)
        assert above.shape == volume.shape
        assert above[0, 0, 11]
        assert not above[0, 0, 10]

        below = below_surface(volume, moho)
        assert below[0, 0, 10]
        assert not below[0, 0, 11]

    def test_reversed_volume(self, volume_reversed, moho):
        above = above_surface(volume_reversed, moho)
        assert above[0, 0, 1]
        assert not above[0, 0, 2]

    def test_cart_grid(self):
        grid = create_cart_grid(size=(10, 20, 30), x=(0.0, 10.0), y=(0.0, 10.0), z=(-10.0, 2.0))
        surface = CartData(*xyz_grid(np.arange(-1, 20.01, 0.2), np.arange(-12, 13.01, 0.2), 0.0))

        above = above_surface(grid, surface)
        below = below_surface(grid, surface)
        assert above.shape == (10, 20, 30)
        assert np.sum(above[0, 0, :]) == 5
        assert np.sum(below[0, 0, :]) == 25

    def test_outside_footprint(self, moho):
        points = GeoData([5.0, 15.0], [35.0, 35.0], [0.0, 0.0])
        assert_array_equal(above_surface(points, moho), [False, True])
        assert_array_equal(below_surface(points, moho), [False, False])

    def test_requires_surface(self, volume):
        with pytest.raises(UnsupportedDatasetShapeError):
            above_surface(volume, volume)

    def test_requires_dataset(self, moho):
        with pytest.raises(ParameterError):
            above_surface(np.zeros((3, 3, 3)), moho)


class TestDrapeOnTopo:

    @pytest.fixture
    def topo(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(8, 23), np.arange(30, 41), 0.0)
        return GeoData(lon, lat, depth, {"Topography": np.zeros(lon.shape), "LonData": -lon})

    def test_nearest_values(self, topo, volume):
        section = cross_section(volume, depth_level=-100.0)
        draped = drape_on_topo(topo, section)

        assert draped.shape == topo.shape
        assert draped.field_names == ("Topography", "LonData", "Depthdata", "Velocity")
        assert_allclose(draped["Depthdata"][2:13, :, 0], -200.0)
        assert_allclose(draped["LonData"][2:13, 0, 0], np.arange(10, 21))
        assert_allclose(draped["Velocity"][0][4, 4, 0], -600.0)
        assert_array_equal(draped["Topography"], 0.0)

    def test_outside_is_nan(self, topo, volume):
        draped = drape_on_topo(topo, cross_section(volume, depth_level=-100.0))
        for index in (0, 1, 13, 14):
            assert np.all(np.isnan(draped["Depthdata"][index]))
            assert np.all(np.isnan(draped["Velocity"][2][index]))

    def test_topography_is_not_modified(self, topo, volume):
        drape_on_topo(topo, cross_section(volume, depth_level=-100.0))
        assert topo.field_names == ("Topography", "LonData")
        assert topo["LonData"][2, 0, 0] == -10

    def test_cartesian(self, cart_volume):
        surface = CartData(*xyz_grid(np.linspace(0, 50, 11), np.linspace(0, 10, 6), 0.0))
        section = cross_section(cart_volume, depth_level=-20.0)
        draped = drape_on_topo(surface, section)
        assert np.all(np.abs(draped["Depthdata"] + 20.0) < 0.5)

    def test_mixed_variants(self, topo, cart_volume):
        with pytest.raises(ParameterError):
            drape_on_topo(topo, cart_volume)
