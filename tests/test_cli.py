"""Tests for the gtfs-layers command line."""

import json
from pathlib import Path

import pytest

from gtfs_layers.cli import main


@pytest.fixture
def feed_dir(tmp_path: Path) -> Path:
    """Create a small two-route GTFS directory."""
    gtfs_dir = tmp_path / "gtfs"
    gtfs_dir.mkdir()
    (gtfs_dir / "routes.txt").write_text(
        "route_id,route_short_name,route_long_name,route_type,route_color\n"
        "A,1,Main Line,3,FF0000\n"
        "B,,Crosstown,3,\n"
    )
    (gtfs_dir / "trips.txt").write_text(
        "route_id,service_id,trip_id,shape_id\nA,WK,t1,s1\nB,WK,t2,s2\n"
    )
    (gtfs_dir / "shapes.txt").write_text(
        "shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence\n"
        "s1,0,0,1\ns1,1,1,2\n"
        "s2,0,1,1\ns2,1,0,2\n"
    )
    (gtfs_dir / "stops.txt").write_text(
        "stop_id,stop_name,stop_lat,stop_lon\nS1,Main,0,0\nS2,Corner,1,0\n"
    )
    (gtfs_dir / "stop_times.txt").write_text(
        "trip_id,stop_id,stop_sequence\nt1,S1,1\nt2,S1,1\nt2,S2,2\n"
    )
    return gtfs_dir


class TestBuildCommand:
    """Tests for `gtfs-layers build`."""

    def test_all_layers(self, feed_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["build", str(feed_dir)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert len(output["routes"]["features"]) == 2
        assert len(output["stops"]["features"]) == 2
        assert output["stop_routes"] == {"S1": ["A", "B"], "S2": ["B"]}

    def test_routes_filtered_by_stop(
        self, feed_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["build", str(feed_dir), "--layer", "routes", "--stop", "S2"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert [f["properties"]["route_id"] for f in output["features"]] == ["B"]

    def test_stops_layer(self, feed_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["build", str(feed_dir), "--layer", "stops", "--fast"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["type"] == "FeatureCollection"
        assert output["features"][0]["geometry"]["coordinates"] == [0.0, 0.0]

    def test_missing_feed(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["build", str(tmp_path / "nope")]) == 1
        assert "GTFS path not found" in capsys.readouterr().err

    def test_negative_tolerance(self, feed_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["build", str(feed_dir), "--tolerance", "-1"]) == 1
        assert "tolerance" in capsys.readouterr().err


class TestRoutesAtStopCommand:
    """Tests for `gtfs-layers routes-at-stop`."""

    def test_lists_routes_with_labels(
        self, feed_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["routes-at-stop", str(feed_dir), "S1"]) == 0
        out = capsys.readouterr().out
        assert "A: 1" in out
        assert "B: Crosstown" in out

    def test_unknown_stop(self, feed_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["routes-at-stop", str(feed_dir), "NOPE"]) == 0
        assert "No routes serve stop NOPE" in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "gtfs-layers" in capsys.readouterr().out
