"""Tests for the grid variants, field handling and grid builders."""

import numpy as np
import pytest
import unyt
from numpy.testing import assert_allclose

from geogrid import (
    GeoData, CartData, UTMData, ECEFData, ShapeClass, AxisOrderWarning,
    lonlatdepth_grid, xyz_grid, meshgrid, average_q1, flip, create_cart_grid, cart_data_from_grid,
)
from geogrid.core.exceptions import (
    AmbiguousFieldsError, InvalidAttributesError, ParameterError, ShapeMismatchError,
    UnsupportedDatasetShapeError, IncompatibleUnitsError,
)


# ============================================================================
# Construction
# ============================================================================

class TestConstruction:

    def test_default_field_is_vertical(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), np.arange(-300, 1, 25))
        data = GeoData(lon, lat, depth)
        assert data.field_names == ("Z",)
        assert_allclose(data["Z"], depth)

    def test_single_unnamed_field(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(3), np.arange(4), np.arange(5))
        data = GeoData(lon, lat, depth, (2 * depth,))
        assert data.field_names == ("DataSet1",)

        data = GeoData(lon, lat, depth, 2 * depth)
        assert data.field_names == ("DataSet1",)

    def test_several_unnamed_fields_are_ambiguous(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(3), np.arange(4), np.arange(5))
        with pytest.raises(AmbiguousFieldsError):
            GeoData(lon, lat, depth, (depth, depth))

    def test_shape_mismatch(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(3), np.arange(4), np.arange(5))
        with pytest.raises(ShapeMismatchError):
            GeoData(lon, lat[:, :, :2], depth)
        with pytest.raises(ShapeMismatchError):
            GeoData(lon, lat, depth, {"bad": np.zeros((3, 4))})
        with pytest.raises(ShapeMismatchError):
            GeoData(lon, lat, depth, {"vec": (depth, depth[:, :, :1], depth)})

    def test_attributes(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(3), np.arange(4), np.arange(5))
        data = GeoData(lon, lat, depth)
        assert "note" in data.atts

        data = GeoData(lon, lat, depth, atts={"source": "synthetic"})
        assert data.atts == {"source": "synthetic"}

        with pytest.raises(InvalidAttributesError):
            GeoData(lon, lat, depth, atts=["source"])

    def test_depth_units_are_converted(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(3), np.arange(4), np.arange(-10, 1, 5))
        data = GeoData(lon, lat, unyt.unyt_array(depth * 1000, "m"))
        assert str(data.depth.units) == "km"
        assert_allclose(data.coordinate_grids()[2], depth)

    def test_incompatible_units(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(3), np.arange(4), np.arange(5))
        with pytest.raises(IncompatibleUnitsError):
            GeoData(lon, lat, unyt.unyt_array(depth, "s"))

    def test_utm_data_tags(self):
        ew, ns, depth = xyz_grid(np.linspace(4e5, 5e5, 4), np.linspace(4e6, 4.1e6, 3), 0.0)
        data = UTMData(ew, ns, depth, zone=33)
        assert data.zone.shape == data.shape
        assert np.all(data.zone == 33)
        assert np.all(data.northern)
        assert str(data.ew.units) == "m"

    def test_axis_order_warning(self):
        # numpy's default "xy" indexing puts longitude along the second axis
        lon, lat, depth = np.meshgrid(np.arange(10, 21), np.arange(30, 35), np.arange(-30, 1, 10))
        with pytest.warns(AxisOrderWarning):
            GeoData(lon, lat, depth)


# ============================================================================
# Shape Classification
# ============================================================================

class TestShapeClass:

    def test_volume(self, volume):
        assert volume.shape == (11, 11, 13)
        assert volume.shape_class.kind is ShapeClass.VOLUME
        assert not volume.is_surface()

    def test_surface(self, moho):
        assert moho.shape_class.kind is ShapeClass.SURFACE
        assert moho.is_surface()

    def test_single_column_is_volume(self):
        column = GeoData(*lonlatdepth_grid(10.0, 30.0, np.arange(-50, 1, 10)))
        assert column.shape == (1, 1, 6)
        assert column.shape_class.kind is ShapeClass.VOLUME
        assert not column.is_surface()

    def test_points(self, earthquakes):
        assert earthquakes.ndim == 1
        assert earthquakes.size == 10000
        assert earthquakes.shape_class.is_point


# ============================================================================
# Field Editing
# ============================================================================

class TestFieldEditing:

    def test_addfield(self, volume):
        lon, lat, _ = volume.coordinate_grids()
        data = volume.addfield("Lat", lat)
        assert data.field_names == ("Depthdata", "LonData", "Velocity", "Lat")

        data = data.addfield({"Lat": lat, "Lon": lon})
        assert data.field_names == ("Depthdata", "LonData", "Velocity", "Lat", "Lon")
        # Grids are never modified in place
        assert volume.field_names == ("Depthdata", "LonData", "Velocity")

    def test_addfield_without_value(self, volume):
        with pytest.raises(ParameterError):
            volume.addfield("Lat")

    def test_removefield(self, volume):
        data = volume.addfield({"Lat": volume.coordinate_grids()[1], "Lon": volume.coordinate_grids()[0]})
        assert data.removefield("Lon").field_names == ("Depthdata", "LonData", "Velocity", "Lat")
        assert data.removefield(("Lon", "Lat")).field_names == ("Depthdata", "LonData", "Velocity")
        with pytest.raises(ParameterError):
            data.removefield("missing")


# ============================================================================
# Surface Arithmetic
# ============================================================================

class TestSurfaceArithmetic:

    def test_add_and_subtract(self, moho):
        doubled = moho + moho
        assert_allclose(doubled.coordinate_grids()[2], 2 * moho.coordinate_grids()[2])
        zero = moho - moho
        assert_allclose(zero.coordinate_grids()[2], 0.0)
        assert doubled.field_names == moho.field_names

    def test_only_surfaces(self, moho, volume):
        with pytest.raises(UnsupportedDatasetShapeError):
            volume + volume
        with pytest.raises(UnsupportedDatasetShapeError):
            moho + volume

    def test_shape_must_match(self, moho):
        lon, lat, depth = lonlatdepth_grid(np.arange(10, 15), np.arange(30, 41), -40.0)
        other = GeoData(lon, lat, depth)
        with pytest.raises(ShapeMismatchError):
            moho - other


# ============================================================================
# Export
# ============================================================================

class TestXarrayExport:

    def test_structured(self, volume):
        ds = volume.to_xarray()
        assert set(ds.data_vars) == {"Depthdata", "LonData", "Velocity_0", "Velocity_1", "Velocity_2"}
        assert ds["Depthdata"].dims == ("i", "j", "k")
        assert ds["depth"].attrs["units"] == "km"
        assert ds.attrs["grid_variant"] == "GeoData"
        assert_allclose(ds["Velocity_1"].values, volume["Velocity"][1])

    def test_points_and_chunks(self, earthquakes):
        ds = earthquakes.to_xarray(chunks={"point": 1000})
        assert ds["Magnitude"].dims == ("point",)
        assert ds["Magnitude"].chunks == ((1000,) * 10,)

    def test_default_chunks(self, volume, monkeypatch):
        assert volume.to_xarray()["Depthdata"].chunks is None
        assert volume.to_xarray(chunks=True)["Depthdata"].chunks is not None

        monkeypatch.setattr("geogrid.grids.base.DEFAULT_CHUNKS", {"k": 5})
        ds = volume.to_xarray(chunks=True)
        assert ds["Depthdata"].chunks == ((11,), (11,), (5, 5, 3))


# ============================================================================
# Builders
# ============================================================================

class TestBuilders:

    def test_lonlatdepth_grid(self):
        lon, lat, depth = lonlatdepth_grid(np.arange(10, 21), np.arange(30, 41), -50.0)
        assert lon.shape == (11, 11, 1)
        assert_allclose(lon[:, 0, 0], np.arange(10, 21))
        assert_allclose(lat[0, :, 0], np.arange(30, 41))
        assert np.all(depth == -50.0)

    def test_lonlatdepth_grid_depth_units(self):
        _, _, depth = lonlatdepth_grid([1, 2], [3, 4], unyt.unyt_array([-2000.0, 0.0], "m"))
        assert not isinstance(depth, unyt.unyt_array)
        assert_allclose(depth[0, 0, :], [-2.0, 0.0])

    def test_all_scalars(self):
        with pytest.raises(ParameterError):
            lonlatdepth_grid(10, 30, -5)
        with pytest.raises(ParameterError):
            xyz_grid(1.0, 2.0, 3.0)

    def test_multidimensional_input(self):
        with pytest.raises(ParameterError):
            xyz_grid(np.zeros((2, 2)), [1, 2], 0.0)

    def test_meshgrid(self):
        x, y = meshgrid([1, 2, 3], [4, 5, 6, 7])
        assert x.shape == (4, 3)
        x, y, z = meshgrid([1, 2, 3], [4, 5, 6, 7], [0, 1])
        assert z.shape == (4, 3, 2)

    def test_average_q1(self):
        x, _, _ = xyz_grid([0.0, 1.0, 2.0], [0.0, 1.0], [0.0, 1.0])
        centres = average_q1(x)
        assert centres.shape == (2, 1, 1)
        assert_allclose(centres[:, 0, 0], [0.5, 1.5])

    def test_flip(self, volume):
        flipped = flip(volume)
        assert_allclose(flipped.coordinate_grids()[2][0, 0, :], np.arange(0, -301, -25))
        assert flipped["Depthdata"][0, 0, 0] == 0.0
        assert_allclose(flipped["Velocity"][2][0, 0, -1], -3000.0)

    def test_cell_coordinates(self, volume):
        lon, _, depth = volume.coordinate_grids(cell=True)
        assert lon.shape == (10, 10, 12)
        assert_allclose(depth[0, 0, 0], -287.5)


class TestCartGrid:

    def test_spacing(self):
        grid = create_cart_grid(size=(10, 20, 30), x=(0.0, 10.0), y=(0.0, 10.0), z=(-10.0, 2.0))
        assert grid.ndim == 3
        assert grid.spacing[1] == pytest.approx(0.5263157894736842)
        assert grid.length == (10.0, 10.0, 12.0)
        assert len(grid.coord1d_cen[2]) == 29

    def test_extent_2d(self):
        grid = create_cart_grid(size=(11, 21), extent=(10.0, 20.0))
        assert grid.min == (0.0, -20.0)
        assert grid.max == (10.0, 0.0)
        assert grid.spacing == pytest.approx((1.0, 1.0))

    def test_missing_axis(self):
        with pytest.raises(ParameterError):
            create_cart_grid(size=(10, 10, 10), x=(0.0, 1.0), z=(0.0, 1.0))

    def test_coordinate_grids(self):
        grid = create_cart_grid(size=(4, 5, 6), x=(0.0, 3.0), y=(0.0, 4.0), z=(-5.0, 0.0))
        x, y, z = grid.coordinate_grids()
        assert x.shape == (4, 5, 6)
        xc, _, _ = grid.coordinate_grids(cell=True)
        assert xc.shape == (3, 4, 5)

    def test_cart_data_from_2d_grid(self):
        grid = create_cart_grid(size=(11, 21), x=(0.0, 10.0), z=(-20.0, 0.0))
        temperature = np.ones(grid.n) * 1350.0
        data = cart_data_from_grid(grid, {"T": temperature}, y_val=5.0)
        assert isinstance(data, CartData)
        assert data.shape == (11, 1, 21)
        assert np.all(data.coordinate_grids()[1] == 5.0)
        assert data["T"].shape == (11, 1, 21)

    def test_cart_data_from_3d_grid(self):
        grid = create_cart_grid(size=(3, 4, 5), x=(0.0, 2.0), y=(0.0, 3.0), z=(-4.0, 0.0))
        data = cart_data_from_grid(grid, {"phase": np.zeros(grid.n, dtype=np.int32)})
        assert data.shape == (3, 4, 5)


def test_ecef_data_is_kilometre_grid():
    data = ECEFData([6378.137], [0.0], [0.0])
    assert data.coord_names == ("x", "y", "z")
    assert str(data.x.units) == "km"
