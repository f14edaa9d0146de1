"""Tests for boolean and statistical vote maps."""

import logging
import operator

import numpy as np
import pytest

from geogrid import CartData, VoteMode, votemap, votemap_statistical
from geogrid.core.exceptions import InvalidCriterionError, ParameterError
from geogrid.processing.votemap import (
    evaluate_criterion, maximum_extent, overlapping_extent, parse_criterion, resolve_modelsize,
)


@pytest.fixture
def anomaly(volume):
    """Reference volume with the field Anom = lon - 15."""
    return volume.addfield("Anom", np.asarray(volume["LonData"], dtype=np.float64) - 15.0)


@pytest.fixture
def anomaly_reversed(volume_reversed):
    return volume_reversed.addfield(
        "Anom", np.asarray(volume_reversed["LonData"], dtype=np.float64) - 15.0
    )


# ============================================================================
# Criteria
# ============================================================================

class TestCriteria:

    @pytest.mark.parametrize("text, expected", [
        ("Vs>4.5", ("Vs", operator.gt, 4.5)),
        (" dVp_perc <= -1e-2 ", ("dVp_perc", operator.le, -0.01)),
        ("Depthdata<-560", ("Depthdata", operator.lt, -560.0)),
        ("T>=.5", ("T", operator.ge, 0.5)),
        ("flag==1", ("flag", operator.eq, 1.0)),
        ("flag != 0", ("flag", operator.ne, 0.0)),
    ])
    def test_parse(self, text, expected):
        assert parse_criterion(text) == expected

    @pytest.mark.parametrize("text", ["Vs=>4", "4>Vs", "Vs>abc", "Vs", "", "Vs>4 and T<1"])
    def test_malformed(self, text):
        with pytest.raises(InvalidCriterionError):
            parse_criterion(text)

    def test_evaluate(self, volume):
        mask = evaluate_criterion(volume, "LonData>=19")
        assert mask.dtype == bool
        assert mask.shape == volume.shape
        assert np.count_nonzero(mask[:, 0, 0]) == 2

    def test_unknown_field(self, volume):
        with pytest.raises(InvalidCriterionError) as info:
            evaluate_criterion(volume, "Vs>4.5")
        assert "Depthdata" in str(info.value)

    def test_vector_field(self, volume):
        with pytest.raises(InvalidCriterionError):
            evaluate_criterion(volume, "Velocity>0")


# ============================================================================
# Extents
# ============================================================================

class TestExtents:

    def test_overlap_and_maximum(self, volume, moho):
        assert overlapping_extent([volume, moho]) == ((10.0, 20.0), (30.0, 40.0), (-30.0, -20.0))
        assert maximum_extent([volume, moho]) == ((10.0, 20.0), (30.0, 40.0), (-300.0, 0.0))

    def test_modelsize_mapping(self, volume):
        extent = resolve_modelsize([volume], {"lon": (11, 12), "lat": (31, 33), "depth": (0, 100)})
        assert extent == ((11.0, 12.0), (31.0, 33.0), (-100.0, 0.0))

    def test_modelsize_invalid(self, volume):
        with pytest.raises(ParameterError):
            resolve_modelsize([volume], "huge")
        with pytest.raises(ParameterError):
            resolve_modelsize([volume], {"lon": (11, 12)})


# ============================================================================
# Boolean Vote Maps
# ============================================================================

class TestVotemap:

    @pytest.mark.parametrize("fixture", ["volume", "volume_reversed"])
    def test_single_dataset(self, request, fixture):
        data = request.getfixturevalue(fixture)
        vm = votemap(data, "Depthdata<-560", dims=(10, 10, 10))
        assert vm.shape == (10, 10, 10)
        assert vm["votemap"].dtype == np.int64
        assert vm["votemap"][9, 9, 0] == 1
        assert vm["votemap"][0, 0, 1] == 0

    def test_two_datasets(self, volume, volume_reversed):
        vm = votemap([volume, volume_reversed], ["Depthdata<-560", "LonData>19"], dims=(10, 10, 10))
        assert vm["votemap"][9, 8, 0] == 2
        assert vm["votemap"][8, 8, 0] == 1
        assert vm["votemap"][8, 8, 1] == 0
        assert vm["votemap"].max() == 2

    def test_order_of_datasets_does_not_matter(self, volume, volume_reversed):
        forward = votemap([volume, volume_reversed], ["Depthdata<-560", "LonData>19"], dims=(10, 10, 10))
        backward = votemap([volume_reversed, volume], ["LonData>19", "Depthdata<-560"], dims=(10, 10, 10))
        assert forward.extent() == backward.extent()
        np.testing.assert_array_equal(forward["votemap"], backward["votemap"])

    def test_always_true_criteria_vote_everywhere(self, volume, volume_reversed, anomaly):
        datasets = [volume, volume_reversed, anomaly]
        criteria = ["Depthdata<=0", "LonData>=9", "Anom>-100"]
        vm = votemap(datasets, criteria, dims=(8, 9, 10))
        assert np.all(vm["votemap"] == len(datasets))

    def test_grid_spans_overlap(self, volume):
        vm = votemap(volume, "Depthdata<-560", dims=(10, 10, 10))
        assert vm.extent() == ((10.0, 20.0), (30.0, 40.0), (-300.0, 0.0))

    def test_count_mismatch(self, volume, volume_reversed):
        with pytest.raises(ParameterError):
            votemap([volume, volume_reversed], ["Depthdata<-560"])

    def test_unknown_field(self, volume):
        with pytest.raises(InvalidCriterionError):
            votemap(volume, "Vs>4.5", dims=(5, 5, 5))

    def test_requires_geodata(self, volume):
        cart = CartData(*volume.coordinate_grids(), volume.fields)
        with pytest.raises(ParameterError):
            votemap(cart, "Depthdata<-560", dims=(5, 5, 5))

    def test_empty(self):
        with pytest.raises(ParameterError):
            votemap([], [])


# ============================================================================
# Statistical Vote Maps
# ============================================================================

class TestVotemapStatistical:

    def test_positive_threshold(self, anomaly):
        vm = votemap_statistical(anomaly, "Anom", dims=(11, 11, 13))
        assert vm["votemap"].dtype == np.int64
        # std of lon - 15 over the valid cells is just above 3.3
        assert vm["votemap"][9, 0, 0] == 1
        assert vm["votemap"][10, 5, 6] == 1
        assert vm["votemap"][8, 0, 0] == 0
        assert vm["votemap"][0, 0, 0] == 0

    def test_negative_threshold(self, anomaly):
        vm = votemap_statistical(anomaly, "Anom", dims=(11, 11, 13), threshold_stadev=-1.0)
        assert vm["votemap"][0, 3, 3] == 1
        assert vm["votemap"][1, 3, 3] == 1
        assert vm["votemap"][2, 3, 3] == 0
        assert vm["votemap"][10, 3, 3] == 0

    def test_absolute_votes_add_up(self, anomaly, anomaly_reversed):
        vm = votemap_statistical([anomaly, anomaly_reversed], ["Anom", "Anom"], dims=(11, 11, 13))
        assert vm["votemap"][9, 0, 0] == 2
        assert vm["votemap"][5, 0, 0] == 0

    def test_relative_votes(self, anomaly, anomaly_reversed):
        vm = votemap_statistical([anomaly, anomaly_reversed], ["Anom", "Anom"], dims=(11, 11, 13),
                                 votes=VoteMode.RELATIVE)
        fraction = vm["votemap_fraction"]
        assert "votemap" not in vm.field_names
        assert fraction.dtype == np.float64
        assert fraction[9, 0, 0] == pytest.approx(1.0)
        # no dataset covers lon = 15, where the anomaly is exactly zero
        assert fraction[5, 0, 0] == 0.0
        assert np.all((fraction >= 0.0) & (fraction <= 1.0))

    def test_votes_as_string(self, anomaly):
        vm = votemap_statistical(anomaly, "Anom", dims=(11, 11, 13), votes="relative")
        assert vm.field_names == ("votemap_fraction",)

    def test_too_few_valid_cells(self, anomaly, caplog):
        with caplog.at_level(logging.WARNING, logger="geogrid"):
            vm = votemap_statistical(anomaly, "Anom", dims=(11, 11, 13), mindepth=400.0)
        assert "too few valid cells" in caplog.text
        assert vm["votemap"].sum() == 0

    def test_modelsize_mapping(self, anomaly):
        vm = votemap_statistical(anomaly, "Anom", dims=(5, 5, 5),
                                 modelsize={"lon": (12, 18), "lat": (32, 38), "depth": (50, 250)})
        assert vm.extent() == ((12.0, 18.0), (32.0, 38.0), (-250.0, -50.0))

    def test_invalid_arguments(self, anomaly):
        with pytest.raises(ParameterError):
            votemap_statistical(anomaly, "Anom", dims=(5, 5, 5), modelsize="huge")
        with pytest.raises(ParameterError):
            votemap_statistical(anomaly, "Anom", dims=(5, 5, 5), votes="bogus")
        with pytest.raises(InvalidCriterionError):
            votemap_statistical(anomaly, "Vs", dims=(5, 5, 5))
