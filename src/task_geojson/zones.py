"""Observation zone tessellation.

Each zone variant is turned into a closed polygon ring or a two-point line
around the turnpoint. Asymmetric shapes are centred on the turn bisector.
"""

from __future__ import annotations

from .geodesy import destinations, normalize_angle
from .models import (
    BGAEnhancedOptionZone,
    BGAFixedCourseZone,
    BGAStartSectorZone,
    CustomKeyholeZone,
    CylinderZone,
    FAISectorZone,
    KeyholeZone,
    LineStringGeometry,
    LineZone,
    Location,
    MatCylinderZone,
    ObservationZone,
    PolygonGeometry,
    Position,
    SectorZone,
    SymmetricQuadrantZone,
)

CIRCLE_POINTS = 64
ARC_POINTS = CIRCLE_POINTS // 2

MAT_CYLINDER_RADIUS_M = 1609.34  # one statute mile
FAI_SECTOR_RADIUS_M = 20000.0  # infinite in theory, bounded for display
FAI_SECTOR_ANGLE = 90.0

SYMMETRIC_QUADRANT_RADIUS_M = 10000.0
SYMMETRIC_QUADRANT_ANGLE = 90.0

KEYHOLE_RADIUS_M = 10000.0
KEYHOLE_INNER_RADIUS_M = 500.0
KEYHOLE_ANGLE = 90.0

BGA_START_SECTOR_RADIUS_M = 5000.0
BGA_START_SECTOR_ANGLE = 180.0

BGA_FIXED_COURSE_RADIUS_M = 20000.0
BGA_FIXED_COURSE_ANGLE = 90.0

BGA_ENHANCED_OPTION_RADIUS_M = 10000.0
BGA_ENHANCED_OPTION_ANGLE = 180.0


def zone_geometry(
    zone: ObservationZone,
    center: Location,
    bisector: float,
) -> PolygonGeometry | LineStringGeometry | None:
    """Build the boundary geometry of ``zone`` around ``center``.

    Args:
        zone: The observation zone variant.
        center: Turnpoint location.
        bisector: Orientation angle in degrees, used by every shape except
            cylinders and absolute-radial sectors.

    Returns ``None`` for zones with no drawable boundary. No current variant
    takes that path.
    """
    if isinstance(zone, CylinderZone):
        return circle_geometry(center, zone.radius)
    if isinstance(zone, MatCylinderZone):
        return circle_geometry(center, MAT_CYLINDER_RADIUS_M)
    if isinstance(zone, LineZone):
        return line_geometry(center, zone.length, bisector)
    if isinstance(zone, FAISectorZone):
        return sector_geometry(center, FAI_SECTOR_RADIUS_M, bisector, FAI_SECTOR_ANGLE)
    if isinstance(zone, SectorZone):
        ring = sector_ring(center, zone.radius, zone.start_radial, zone.end_radial, zone.inner_radius)
        return PolygonGeometry(coordinates=[ring])
    if isinstance(zone, SymmetricQuadrantZone):
        radius = zone.radius if zone.radius is not None else SYMMETRIC_QUADRANT_RADIUS_M
        angle = zone.angle if zone.angle is not None else SYMMETRIC_QUADRANT_ANGLE
        return sector_geometry(center, radius, bisector, angle)
    if isinstance(zone, KeyholeZone):
        return keyhole_geometry(center, KEYHOLE_RADIUS_M, KEYHOLE_INNER_RADIUS_M, KEYHOLE_ANGLE, bisector)
    if isinstance(zone, CustomKeyholeZone):
        radius = zone.radius if zone.radius is not None else KEYHOLE_RADIUS_M
        angle = zone.angle if zone.angle is not None else KEYHOLE_ANGLE
        inner_radius = zone.inner_radius if zone.inner_radius is not None else KEYHOLE_INNER_RADIUS_M
        return keyhole_geometry(center, radius, inner_radius, angle, bisector)
    if isinstance(zone, BGAStartSectorZone):
        return sector_geometry(center, BGA_START_SECTOR_RADIUS_M, bisector, BGA_START_SECTOR_ANGLE)
    if isinstance(zone, BGAFixedCourseZone):
        return keyhole_geometry(
            center, BGA_FIXED_COURSE_RADIUS_M, KEYHOLE_INNER_RADIUS_M, BGA_FIXED_COURSE_ANGLE, bisector
        )
    if isinstance(zone, BGAEnhancedOptionZone):
        return keyhole_geometry(
            center, BGA_ENHANCED_OPTION_RADIUS_M, KEYHOLE_INNER_RADIUS_M, BGA_ENHANCED_OPTION_ANGLE, bisector
        )
    return None


def circle_geometry(center: Location, radius: float) -> PolygonGeometry:
    return PolygonGeometry(coordinates=[circle_ring(center, radius)])


def circle_ring(center: Location, radius: float) -> list[Position]:
    """Closed ring of ``CIRCLE_POINTS`` vertices plus the repeated first one."""
    bearings = [i * 360.0 / CIRCLE_POINTS for i in range(CIRCLE_POINTS)]
    ring = destinations(center, bearings, radius)
    ring.append(ring[0])
    return ring


def line_geometry(center: Location, length: float, bisector: float) -> LineStringGeometry:
    """Gate of ``length`` metres through ``center``, perpendicular to the bisector."""
    half_length = length / 2.0
    left, right = destinations(
        center,
        [normalize_angle(bisector + 90.0), normalize_angle(bisector - 90.0)],
        half_length,
    )
    return LineStringGeometry(coordinates=[left, right])


def sector_geometry(
    center: Location,
    radius: float,
    bisector: float,
    angle: float,
    inner_radius: float | None = None,
) -> PolygonGeometry:
    """Sector of ``angle`` degrees centred on ``bisector``."""
    half_angle = angle / 2.0
    start = normalize_angle(bisector - half_angle)
    end = normalize_angle(bisector + half_angle)
    return PolygonGeometry(coordinates=[sector_ring(center, radius, start, end, inner_radius)])


def sector_ring(
    center: Location,
    radius: float,
    start_angle: float,
    end_angle: float,
    inner_radius: float | None = None,
) -> list[Position]:
    """Closed sector ring swept clockwise from ``start_angle`` to ``end_angle``.

    Without ``inner_radius`` the ring closes through the centre. With it, the
    ring comes back along the inner arc and forms an annular sector.
    """
    bearings = arc_bearings(start_angle, normalize_sweep(start_angle, end_angle), ARC_POINTS)

    # 33 arc samples, then the centre (35 vertices) or the inner arc (67)
    ring = destinations(center, bearings, radius)
    if inner_radius is not None:
        ring.extend(destinations(center, bearings[::-1], inner_radius))
    else:
        ring.append((center.longitude, center.latitude))
    ring.append(ring[0])
    return ring


def keyhole_geometry(
    center: Location,
    outer_radius: float,
    inner_radius: float,
    angle: float,
    bisector: float,
) -> PolygonGeometry:
    """Sector of ``angle`` degrees on the bisector, fused with an inner cylinder.

    The outer arc runs from start to end. The inner circle then carries on
    from the end the long way round, back to the start.
    """
    half_angle = angle / 2.0
    start = normalize_angle(bisector - half_angle)
    end = normalize_angle(bisector + half_angle)
    sweep = normalize_sweep(start, end)

    ring = destinations(center, arc_bearings(start, sweep, ARC_POINTS), outer_radius)
    ring.extend(destinations(center, arc_bearings(end, 360.0 - sweep, CIRCLE_POINTS), inner_radius))
    ring.append(ring[0])
    return PolygonGeometry(coordinates=[ring])


def normalize_sweep(start: float, end: float) -> float:
    """Clockwise angular distance from ``start`` to ``end``, in ``[0, 360]``."""
    sweep = end - start
    while sweep < 0.0:
        sweep += 360.0
    while sweep > 360.0:
        sweep -= 360.0
    return sweep


def arc_bearings(start: float, sweep: float, intervals: int) -> list[float]:
    """``intervals + 1`` evenly spaced bearings covering ``sweep`` from ``start``."""
    return [start + sweep * i / intervals for i in range(intervals + 1)]
