"""Tests for the unit-tagged coordinate wrapper."""

import numpy as np
import pytest
import unyt
from numpy.testing import assert_allclose

from geogrid.core import units
from geogrid.core.exceptions import IncompatibleUnitsError


def test_bare_length_gets_default_unit():
    depth = units.as_length([-1.0, -2.0], "km", "m")
    assert str(depth.units) == "m"
    assert_allclose(depth.d, [-1000.0, -2000.0])


def test_tagged_length_is_converted():
    depth = units.as_length(unyt.unyt_array([500.0], "m"), "km", "km")
    assert depth.d[0] == pytest.approx(0.5)


def test_angles_are_degrees():
    lon = units.as_angle(np.array([10, 20]))
    assert str(lon.units) == "degree"
    assert lon.dtype == np.float64


def test_strip_and_unit_of():
    tagged = unyt.unyt_array([1.0, 2.0], "km")
    assert isinstance(units.strip(tagged), np.ndarray)
    assert not units.has_units(units.strip(tagged))
    assert units.unit_of(tagged) == "km"
    assert units.unit_of(np.zeros(2)) == "dimensionless"


def test_like():
    template = unyt.unyt_array([1.0], "m")
    assert str(units.like(template, np.array([3.0])).units) == "m"
    bare = units.like(np.zeros(1), np.array([3.0]))
    assert not units.has_units(bare)


def test_checked_arithmetic():
    left = unyt.unyt_array([1.0], "km")
    total = units.add(left, unyt.unyt_array([500.0], "m"))
    assert str(total.units) == "km"
    assert total.d[0] == pytest.approx(1.5)
    assert units.subtract(left, unyt.unyt_array([500.0], "m")).d[0] == pytest.approx(0.5)

    with pytest.raises(IncompatibleUnitsError):
        units.add(left, unyt.unyt_array([1.0], "s"))
