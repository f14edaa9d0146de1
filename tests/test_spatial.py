"""Tests for index search, coordinate/index conversion and grid selection."""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from geogrid import convert_to_utm
from geogrid.coordinates.spatial import (
    apply_index_selection, ascending_order, compute_level_slices,
    convert_coordinates_to_indices, convert_indices_to_coordinates, grid_axis_vectors,
    index_range_slice, nearest_index, reshape_grid, select_points, validate_region_bounds,
)
from geogrid.core.core_types import DatasetShape, ShapeClass
from geogrid.core.exceptions import ParameterError, UnsupportedDatasetShapeError


class TestSlicing:

    def test_nearest_index(self):
        assert nearest_index(np.array([0.0, 10.0, 20.0]), 14.0) == 1
        # ties resolve to the lower coordinate
        assert nearest_index(np.array([0.0, 10.0, 20.0]), 5.0) == 0

    def test_nearest_index_descending(self):
        vector = np.array([20.0, 10.0, 0.0])
        assert nearest_index(vector, 14.0) == 1
        assert nearest_index(vector, 5.0) == 2
        assert nearest_index(vector, 15.0) == 1

    def test_ascending_order(self):
        ascending, flipped = ascending_order(np.array([3.0, 2.0, 1.0]))
        assert flipped
        assert_array_equal(ascending, [1.0, 2.0, 3.0])
        ascending, flipped = ascending_order(np.array([4.0]))
        assert not flipped

    def test_forward_slice(self):
        vector = np.arange(5.0)
        assert index_range_slice(1, 3) == slice(1, 4, 1)
        assert index_range_slice(0, 4) == slice(0, 5, 1)
        assert_array_equal(vector[index_range_slice(2, 2)], [2.0])

    def test_backward_slice(self):
        vector = np.arange(5.0)
        assert_array_equal(vector[index_range_slice(3, 1)], [3.0, 2.0, 1.0])
        # a stop of -1 would wrap around to the last entry
        assert_array_equal(vector[index_range_slice(3, 0)], [3.0, 2.0, 1.0, 0.0])

    def test_descending_axis(self):
        vector = np.arange(0.0, -301.0, -25.0)
        index = index_range_slice(nearest_index(vector, -300.0), nearest_index(vector, 0.0))
        assert_array_equal(vector[index], vector[::-1])

    def test_level_slices(self):
        assert compute_level_slices(1, 4) == (slice(None), slice(4, 5), slice(None))


class TestConversion:

    def test_round_trip(self):
        vectors = [np.arange(10.0, 21.0), np.arange(30.0, 41.0)]
        indices = convert_coordinates_to_indices(vectors, [(12.0, 14.6), None])
        assert indices == ((2, 5), None)
        assert convert_indices_to_coordinates(vectors, indices) == ((12.0, 15.0), None)

    def test_region_bounds(self):
        assert validate_region_bounds("lon_level", (12, 10)) == (12.0, 10.0)
        assert validate_region_bounds("lon_level", None) is None
        with pytest.raises(ParameterError):
            validate_region_bounds("lon_level", (1.0, np.nan))

    def test_axis_vectors(self, volume):
        lon, lat, depth = grid_axis_vectors(volume)
        assert_array_equal(lon, np.arange(10, 21))
        assert_array_equal(lat, np.arange(30, 41))
        assert_array_equal(depth, np.arange(-300, 1, 25))

    def test_axis_vectors_of_points(self, earthquakes):
        with pytest.raises(UnsupportedDatasetShapeError):
            grid_axis_vectors(earthquakes)


class TestSelection:

    def test_utm_tags_follow_selection(self, volume):
        utm = convert_to_utm(volume)
        sub = apply_index_selection(utm, (slice(0, 2), slice(None), slice(None)))
        assert sub.shape == (2, 11, 13)
        assert sub.zone.shape == (2, 11, 13)
        assert_array_equal(sub.zone, utm.zone[:2])

    def test_select_points(self, volume):
        mask = np.asarray(volume["Depthdata"]) == -600.0
        picked, indices = select_points(volume, mask)
        assert picked.shape == (121,)
        assert indices.size == 121
        assert np.all(picked["Depthdata"] == -600.0)
        assert picked["Velocity"][0].shape == (121,)

    def test_reshape(self, volume):
        flat = reshape_grid(volume, (volume.size,))
        assert flat.shape_class.is_point
        assert_array_equal(flat["LonData"], np.asarray(volume["LonData"]).ravel())


class TestShapeClass:

    @pytest.mark.parametrize("shape, kind", [
        ((3, 4, 5), ShapeClass.VOLUME),
        ((3, 4, 1), ShapeClass.SURFACE),
        ((1, 4, 5), ShapeClass.SURFACE),
        ((1, 1, 6), ShapeClass.VOLUME),
        ((6, 1, 1), ShapeClass.VOLUME),
        ((3, 4), ShapeClass.SURFACE),
        ((7,), ShapeClass.POINT),
    ])
    def test_classify(self, shape, kind):
        shape_class = DatasetShape.classify(shape)
        assert shape_class.kind is kind
        assert shape_class.is_volume == (kind is ShapeClass.VOLUME)
        assert shape_class.is_surface == (kind is ShapeClass.SURFACE)
        assert shape_class.is_point == (kind is ShapeClass.POINT)
