"""Spherical-Earth bearing, forward projection and bisector math.

All computations use a sphere of Earth's mean radius. The output feeds map
rendering, not scoring, so ellipsoidal accuracy is not needed.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pyproj import Geod

from .models import Location, Position

EARTH_MEAN_RADIUS_M = 6371008.8

SPHERE = Geod(a=EARTH_MEAN_RADIUS_M, b=EARTH_MEAN_RADIUS_M)


class MissingOrientationReference(ValueError):
    """Raised when a bisector is requested without any adjacent leg bearing."""


def normalize_angle(angle: float) -> float:
    """Wrap an angle in degrees into ``[0, 360)``."""
    a = angle % 360.0
    # -1e-17 % 360 rounds up to 360.0
    return 0.0 if a == 360.0 else a


def bearing(origin: Location, target: Location) -> float:
    """Initial great-circle bearing from ``origin`` to ``target``, degrees in [0, 360).

    Coincident points have no direction and give 0.
    """
    az12, _, dist = SPHERE.inv(origin.longitude, origin.latitude, target.longitude, target.latitude)
    if dist == 0.0:
        return 0.0
    return normalize_angle(az12)


def destination(origin: Location, bearing_deg: float, distance_m: float) -> Location:
    """Point reached by travelling ``distance_m`` from ``origin`` along ``bearing_deg``."""
    lon, lat, _ = SPHERE.fwd(origin.longitude, origin.latitude, bearing_deg, distance_m)
    return Location(longitude=lon, latitude=lat)


def destinations(center: Location, bearings: Sequence[float], distance_m: float) -> list[Position]:
    """Project every bearing from ``center`` at the same distance.

    Returns ``(lon, lat)`` positions in the order of ``bearings``.
    """
    if not bearings:
        return []
    n = len(bearings)
    lons, lats, _ = SPHERE.fwd(
        [center.longitude] * n,
        [center.latitude] * n,
        list(bearings),
        [distance_m] * n,
    )
    return [(float(lon), float(lat)) for lon, lat in zip(lons, lats)]


def bisect_angles(a: float, b: float) -> float:
    """Angular bisector of two bearings, safe across the 0/360 wrap."""
    a_rad = math.radians(a)
    b_rad = math.radians(b)
    x = math.cos(a_rad) + math.cos(b_rad)
    y = math.sin(a_rad) + math.sin(b_rad)
    return normalize_angle(math.degrees(math.atan2(y, x)))


def bisector(bearing_in: float | None, bearing_out: float | None) -> float:
    """Orientation angle for zones centred on a turn.

    The result points to the outside of the turn, away from both legs. With a
    single leg it points straight away from that leg.

    Raises:
        MissingOrientationReference: if neither bearing is given.
    """
    if bearing_in is not None and bearing_out is not None:
        return bisect_angles(bearing_in, normalize_angle(bearing_out + 180.0))
    if bearing_in is not None:
        return normalize_angle(bearing_in)
    if bearing_out is not None:
        return normalize_angle(bearing_out + 180.0)
    raise MissingOrientationReference(
        "Cannot orient an observation zone without an incoming or outgoing leg"
    )


def leg_bearings(locations: Sequence[Location]) -> list[tuple[float | None, float | None]]:
    """(bearing_in, bearing_out) for every location in a course."""
    legs = [bearing(locations[i], locations[i + 1]) for i in range(len(locations) - 1)]
    result: list[tuple[float | None, float | None]] = []
    for i in range(len(locations)):
        bearing_in = legs[i - 1] if i > 0 else None
        bearing_out = legs[i] if i < len(legs) else None
        result.append((bearing_in, bearing_out))
    return result
