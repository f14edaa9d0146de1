"""Tests for per-level statistics and rigid transforms."""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from geogrid import (
    CartData, GeoData, convert_to_ecef, lithostatic_pressure, lonlatdepth_grid,
    rotate_translate_scale, subtract_horizontal_mean,
)
from geogrid.core.exceptions import ParameterError


class TestHorizontalMean:

    def test_constant_levels(self, volume):
        assert_array_equal(subtract_horizontal_mean(volume["Depthdata"]), 0.0)

    def test_percentage(self, volume):
        deviation = subtract_horizontal_mean(volume["LonData"], percentage=True)
        assert deviation[0, 0, 0] == pytest.approx(-100.0 / 3.0)
        assert deviation[5, 3, 7] == pytest.approx(0.0)

    def test_two_dimensional(self):
        result = subtract_horizontal_mean(np.array([[1.0, 2.0], [3.0, 4.0]]))
        assert_array_equal(result, [[-1.0, -1.0], [1.0, 1.0]])

    def test_nan_levels(self):
        result = subtract_horizontal_mean(np.array([[1.0, np.nan], [3.0, np.nan]]))
        assert_array_equal(result[:, 0], [-1.0, 1.0])
        assert np.all(np.isnan(result[:, 1]))

    def test_rejects_1d(self):
        with pytest.raises(ParameterError):
            subtract_horizontal_mean(np.arange(5.0))


class TestLithostaticPressure:

    def test_cumulative(self):
        pressure = lithostatic_pressure(np.ones((2, 5)), dz=1000.0, g=10.0)
        assert_array_equal(pressure[0], [40000.0, 30000.0, 20000.0, 10000.0, 0.0])
        assert_array_equal(pressure[0], pressure[1])

    def test_input_unchanged(self):
        density = np.full((2, 2, 3), 3300.0)
        lithostatic_pressure(density, dz=100.0)
        assert np.all(density == 3300.0)


class TestRotateTranslateScale:

    @pytest.fixture
    def box(self):
        x, y, z = lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), np.arange(-50, -9))
        return CartData(x, y, z, {"Z": z})

    def test_rotation(self, box):
        rotated = rotate_translate_scale(box, rotate=30)
        x_extent, y_extent, z_extent = rotated.extent()
        assert x_extent == pytest.approx((8.169872981077807, 21.83012701892219))
        assert y_extent == pytest.approx((28.169872981077805, 41.83012701892219))
        assert z_extent == (-50.0, -10.0)

    def test_scale_and_translate(self, box):
        moved = rotate_translate_scale(box, translate=(0, 0, 3), scale=10)
        assert_allclose(moved.extent(), [[100.0, 200.0], [300.0, 400.0], [-497.0, -97.0]])
        assert_array_equal(moved["Z"], box["Z"])

    def test_per_axis_scale(self, box):
        moved = rotate_translate_scale(box, scale=(1, 1, 2))
        assert moved.extent()[2] == (-100.0, -20.0)
        assert_allclose(moved.extent()[0], (10.0, 20.0))

    def test_ecef(self):
        lon, lat, depth = lonlatdepth_grid([0.0, 1.0], [0.0, 1.0], 0.0)
        ecef = convert_to_ecef(GeoData(lon, lat, depth))
        moved = rotate_translate_scale(ecef, translate=(1, 0, 0))
        assert_allclose(moved.coordinate_grids()[0], ecef.coordinate_grids()[0] + 1.0)
        assert type(moved) is type(ecef)

    def test_invalid(self, box, volume):
        with pytest.raises(ParameterError):
            rotate_translate_scale(volume, rotate=10)
        with pytest.raises(ParameterError):
            rotate_translate_scale(box, translate=(1, 2))
