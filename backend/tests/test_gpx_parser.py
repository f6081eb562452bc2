import pytest

from app.core.errors import NoValidDataError
from app.services.gpx_parser import parse_gpx


def test_trackpoint_extension_heart_rates(write_file, make_gpx):
    path = write_file("ride.gpx", make_gpx([120, 150, 100]))
    series = parse_gpx(path)
    assert series.heart_rates == [120.0, 150.0, 100.0]
    assert series.rr_intervals == [500.0, 400.0, 600.0]


def test_ns3_prefix(write_file, make_gpx):
    path = write_file("garmin.gpx", make_gpx([60, 75], tag="ns3:hr"))
    series = parse_gpx(path)
    assert series.rr_intervals == [1000.0, 800.0]


def test_generic_heartrate_tag_fallback(write_file, make_gpx):
    path = write_file("generic.gpx", make_gpx([100, 120], tag="heartrate"))
    series = parse_gpx(path)
    assert series.heart_rates == [100.0, 120.0]


def test_fallback_unused_when_primary_matches(write_file, make_gpx):
    content = make_gpx([100]).replace("</trkseg>", "<heartrate>50</heartrate></trkseg>")
    series = parse_gpx(write_file("mixed.gpx", content))
    assert series.heart_rates == [100.0]


def test_zero_heart_rate_is_skipped(write_file, make_gpx):
    series = parse_gpx(write_file("zero.gpx", make_gpx([0, 120])))
    assert series.heart_rates == [120.0]
    assert series.rr_intervals == [500.0]


def test_track_without_heart_rate(write_file):
    content = '<gpx><trk><trkseg><trkpt lat="1" lon="2"><ele>10</ele></trkpt></trkseg></trk></gpx>'
    with pytest.raises(NoValidDataError, match="heart rate extensions"):
        parse_gpx(write_file("plain.gpx", content))
