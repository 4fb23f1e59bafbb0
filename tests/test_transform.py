"""Tests for flattening nested metrics into points."""

from unittest.mock import patch

import pytest

from wf_reporter.core.errors import MalformedMetricsError
from wf_reporter.metrics.transform import Point, flatten

TS = 1_700_000_000


class TestFlatten:
    """Tests for flatten."""

    def test_single_metric(self):
        points = flatten({"resources": {"total": ("applied", "desc", 5)}}, "puppet", TS)
        assert points == [Point(path="puppet.resources.applied", value=5, timestamp=TS)]

    def test_one_point_per_entry_in_insertion_order(self):
        metrics = {
            "time": {"config_retrieval": ("config_retrieval", "Config retrieval", 1.25)},
            "resources": {
                "total": ("total", "Total", 12),
                "changed": ("changed", "Changed", 2),
            },
            "events": {},
        }

        points = flatten(metrics, "puppet", TS)

        assert [p.path for p in points] == [
            "puppet.time.config_retrieval",
            "puppet.resources.total",
            "puppet.resources.changed",
        ]
        assert [p.value for p in points] == [1.25, 12, 2]
        assert {p.timestamp for p in points} == {TS}

    def test_path_uses_label_not_key(self):
        points = flatten({"catalog": {"changed": ("n", "-", 0)}}, "puppet", TS)
        assert points[0].path == "puppet.catalog.n"
        assert points[0].value == 0

    def test_distinct_category_label_pairs_give_distinct_paths(self):
        metrics = {
            "resources": {"a": ("total", "", 1)},
            "events": {"a": ("total", "", 2)},
        }
        paths = [p.path for p in flatten(metrics, "puppet", TS)]
        assert len(set(paths)) == 2

    def test_deterministic(self):
        metrics = {"b": {"x": ("x", "", 1)}, "a": {"y": ("y", "", 2)}}
        assert flatten(metrics, "p", TS) == flatten(metrics, "p", TS)

    def test_empty(self):
        assert flatten({}, "puppet", TS) == []

    def test_default_timestamp_is_now(self):
        with patch("wf_reporter.metrics.transform.time.time", return_value=1234.9):
            points = flatten({"c": {"m": ("m", "", 1)}}, "puppet")
        assert points[0].timestamp == 1234

    @pytest.mark.parametrize(
        "entry",
        [("m", "", "five"), ("m", "", None), ("m", "", True), ("m", "", float("nan"))],
    )
    def test_non_numeric_value(self, entry):
        with pytest.raises(MalformedMetricsError, match="non-numeric"):
            flatten({"c": {"m": entry}}, "puppet", TS)

    @pytest.mark.parametrize("entry", [("m", 1), "m,,1", 5])
    def test_not_a_triple(self, entry):
        with pytest.raises(MalformedMetricsError, match="triple"):
            flatten({"c": {"m": entry}}, "puppet", TS)

    def test_category_not_a_mapping(self):
        with pytest.raises(MalformedMetricsError):
            flatten({"c": [("m", "", 1)]}, "puppet", TS)


class TestPoint:
    """Tests for Point."""

    def test_with_tags_merges(self):
        point = Point("p.c.m", 1, TS, {"a": "1"})
        tagged = point.with_tags({"b": "2"})

        assert tagged.tags == {"a": "1", "b": "2"}
        assert point.tags == {"a": "1"}

    def test_frozen(self):
        point = Point("p.c.m", 1, TS)
        with pytest.raises(AttributeError):
            point.value = 2
