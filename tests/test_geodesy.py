"""Tests for spherical bearing, projection and bisector math."""

import math

import pytest

from task_geojson.geodesy import (
    EARTH_MEAN_RADIUS_M,
    MissingOrientationReference,
    SPHERE,
    bearing,
    bisect_angles,
    bisector,
    destination,
    destinations,
    leg_bearings,
    normalize_angle,
)
from task_geojson.models import Location


def angle_diff(a, b):
    """Smallest absolute difference between two angles in degrees."""
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


ORIGIN = Location(longitude=0.0, latitude=0.0)


class TestNormalizeAngle:
    @pytest.mark.parametrize(
        "angle, expected",
        [(0.0, 0.0), (360.0, 0.0), (370.0, 10.0), (-10.0, 350.0), (-720.0, 0.0), (180.0, 180.0)],
    )
    def test_wraps_into_range(self, angle, expected):
        assert normalize_angle(angle) == pytest.approx(expected)

    def test_tiny_negative_stays_below_360(self):
        assert 0.0 <= normalize_angle(-1e-17) < 360.0


class TestBearing:
    @pytest.mark.parametrize(
        "target, expected",
        [
            (Location(longitude=0.0, latitude=1.0), 0.0),
            (Location(longitude=1.0, latitude=0.0), 90.0),
            (Location(longitude=0.0, latitude=-1.0), 180.0),
            (Location(longitude=-1.0, latitude=0.0), 270.0),
        ],
    )
    def test_cardinal_directions(self, target, expected):
        assert angle_diff(bearing(ORIGIN, target), expected) < 1e-9

    def test_always_in_range(self):
        b = bearing(Location(longitude=10.0, latitude=50.0), Location(longitude=9.0, latitude=49.0))
        assert 0.0 <= b < 360.0
        assert 180.0 < b < 270.0

    def test_coincident_points_bear_north(self):
        airfield = Location(longitude=6.0, latitude=50.0)
        assert bearing(airfield, airfield) == 0.0

    def test_great_circle_not_rhumb(self):
        # Heading due "east" at high latitude starts north of east on a great circle
        b = bearing(Location(longitude=0.0, latitude=60.0), Location(longitude=20.0, latitude=60.0))
        assert 75.0 < b < 90.0


class TestDestination:
    def test_one_degree_along_equator(self):
        one_degree_m = EARTH_MEAN_RADIUS_M * math.pi / 180.0
        loc = destination(ORIGIN, 90.0, one_degree_m)
        assert loc.longitude == pytest.approx(1.0, abs=1e-9)
        assert loc.latitude == pytest.approx(0.0, abs=1e-9)

    def test_zero_distance_returns_origin(self):
        start = Location(longitude=6.2, latitude=50.8)
        loc = destination(start, 123.0, 0.0)
        assert loc.longitude == pytest.approx(start.longitude)
        assert loc.latitude == pytest.approx(start.latitude)

    def test_distance_is_preserved(self):
        start = Location(longitude=-1.03, latitude=51.19)
        loc = destination(start, 37.0, 12_345.0)
        az, _, dist = SPHERE.inv(start.longitude, start.latitude, loc.longitude, loc.latitude)
        assert dist == pytest.approx(12_345.0, rel=1e-9)
        assert angle_diff(az, 37.0) < 1e-6

    def test_destinations_matches_single_projection(self):
        center = Location(longitude=10.0, latitude=48.0)
        positions = destinations(center, [0.0, 90.0, 200.0], 5000.0)
        assert len(positions) == 3
        for (lon, lat), b in zip(positions, [0.0, 90.0, 200.0]):
            single = destination(center, b, 5000.0)
            assert lon == pytest.approx(single.longitude)
            assert lat == pytest.approx(single.latitude)

    def test_destinations_empty(self):
        assert destinations(ORIGIN, [], 100.0) == []


class TestBisector:
    def test_incoming_only(self):
        assert bisector(90.0, None) == pytest.approx(90.0)

    def test_outgoing_only_is_reversed(self):
        assert bisector(None, 90.0) == pytest.approx(270.0)

    def test_straight_through(self):
        # incoming 0, outgoing reversed 0
        assert bisector(0.0, 180.0) == pytest.approx(0.0)

    def test_right_angle_turn(self):
        # flying east, then north: zone faces south-east, away from both legs
        assert bisector(90.0, 0.0) == pytest.approx(135.0)

    def test_wraparound(self):
        assert angle_diff(bisect_angles(350.0, 10.0), 0.0) < 1e-9
        assert angle_diff(bisect_angles(10.0, 350.0), 0.0) < 1e-9

    def test_result_in_range(self):
        for b_in in range(0, 360, 30):
            for b_out in range(0, 360, 45):
                assert 0.0 <= bisector(float(b_in), float(b_out)) < 360.0

    def test_no_bearing_raises(self):
        with pytest.raises(MissingOrientationReference):
            bisector(None, None)

    def test_missing_reference_is_value_error(self):
        assert issubclass(MissingOrientationReference, ValueError)


class TestLegBearings:
    def test_three_points(self):
        locs = [
            Location(longitude=0.0, latitude=0.0),
            Location(longitude=1.0, latitude=0.0),
            Location(longitude=1.0, latitude=1.0),
        ]
        legs = leg_bearings(locs)
        assert len(legs) == 3
        assert legs[0][0] is None
        assert legs[0][1] == pytest.approx(90.0)
        assert legs[1][0] == pytest.approx(90.0)
        assert angle_diff(legs[1][1], 0.0) < 1e-9
        assert legs[2][1] is None

    def test_start_and_turn_at_same_airfield(self):
        airfield = Location(longitude=6.0, latitude=50.0)
        east = Location(longitude=7.0, latitude=50.0)
        legs = leg_bearings([airfield, airfield, east])
        assert legs[1][0] == 0.0
        # incoming 0, outgoing reversed ~270
        assert angle_diff(bisector(*legs[1]), 315.0) < 1.0

    def test_single_point_has_no_legs(self):
        assert leg_bearings([ORIGIN]) == [(None, None)]

    def test_empty(self):
        assert leg_bearings([]) == []
