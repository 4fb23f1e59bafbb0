"""Tests for point writers."""

from unittest.mock import patch

import pytest

from wf_reporter.core.errors import SubmissionError
from wf_reporter.metrics.transform import Point
from wf_reporter.metrics.writer import RecordingWriter, WavefrontProxyWriter, format_point

TS = 1_700_000_000


class TestFormatPoint:
    """Tests for the proxy line format."""

    def test_integer_point(self):
        point = Point("puppet.catalog.n", 0, TS, {"run_by": "cron"})
        assert format_point(point, "web01") == (
            '"puppet.catalog.n" 0 1700000000 source="web01" "run_by"="cron"'
        )

    def test_float_point_without_tags(self):
        point = Point("puppet.time.total", 1.5, TS)
        assert format_point(point, "web01") == '"puppet.time.total" 1.5 1700000000 source="web01"'

    def test_quotes_are_escaped(self):
        point = Point("p.c.m", 1, TS, {"run_by": 'sh -c "x"'})
        assert format_point(point, "h").endswith('"run_by"="sh -c \\"x\\""')


class TestWavefrontProxyWriter:
    """Tests for WavefrontProxyWriter."""

    def test_render_applies_tags_to_every_point(self):
        writer = WavefrontProxyWriter("wf", source="web01")
        points = [Point("p.a.x", 1, TS), Point("p.a.y", 2, TS)]

        payload = writer.render(points, {"status": "changed"})

        lines = payload.splitlines()
        assert len(lines) == 2
        assert all(line.endswith('"status"="changed"') for line in lines)
        assert payload.endswith("\n")

    def test_write_sends_one_payload(self):
        writer = WavefrontProxyWriter("wf.example.com", 2878, source="web01")
        points = [Point("p.a.x", 1, TS)]

        with patch("wf_reporter.metrics.writer.socket.create_connection") as connect:
            writer.write(points, {})

        connect.assert_called_once_with(("wf.example.com", 2878), timeout=10.0)
        sock = connect.return_value.__enter__.return_value
        sock.sendall.assert_called_once_with(b'"p.a.x" 1 1700000000 source="web01"\n')

    def test_connection_failure_is_submission_error(self):
        writer = WavefrontProxyWriter("wf", source="web01")

        with patch(
            "wf_reporter.metrics.writer.socket.create_connection",
            side_effect=ConnectionRefusedError("refused"),
        ):
            with pytest.raises(SubmissionError, match="wf:2878"):
                writer.write([Point("p.a.x", 1, TS)], {})

    def test_default_source_is_hostname(self):
        with patch("wf_reporter.metrics.writer.socket.gethostname", return_value="box"):
            assert WavefrontProxyWriter("wf").source == "box"


class TestRecordingWriter:
    """Tests for RecordingWriter."""

    def test_records_tagged_batches(self):
        writer = RecordingWriter()
        writer.write([Point("p.a.x", 1, TS)], {"run_no": "3"})
        writer.write([Point("p.a.y", 2, TS)], {})

        assert len(writer.batches) == 2
        assert writer.points[0].tags == {"run_no": "3"}
        assert writer.points[1].path == "p.a.y"
