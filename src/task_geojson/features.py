"""Assemble a task into an ordered GeoJSON feature collection."""

from __future__ import annotations

import logging

from .geodesy import bisector, leg_bearings
from .models import (
    Feature,
    FeatureCollection,
    FeatureProperties,
    LineStringGeometry,
    PointGeometry,
    Task,
    TaskPoint,
)
from .zones import zone_geometry

logger = logging.getLogger(__name__)

NUMBERED_POINT_TYPES = frozenset({"Turn", "Area"})


def task_to_feature_collection(task: Task) -> FeatureCollection:
    """Render ``task`` as a course line, zone boundaries and waypoint markers.

    Features are ordered as the course line (tasks with two or more points),
    then the zone and marker of each point, in task order.

    Raises:
        MissingOrientationReference: if a point has no adjacent leg to orient
            its zone (a task with a single point).
    """
    features: list[Feature] = []

    course = course_line_feature(task)
    if course is not None:
        features.append(course)

    bearings = leg_bearings([p.waypoint.location for p in task.points])

    turnpoint_number = 0
    for point, (bearing_in, bearing_out) in zip(task.points, bearings):
        label_number = None
        if point.point_type in NUMBERED_POINT_TYPES:
            turnpoint_number += 1
            label_number = turnpoint_number

        zone = observation_zone_feature(point, bearing_in, bearing_out)
        if zone is not None:
            features.append(zone)
        features.append(waypoint_feature(point, label_number))

    logger.debug(
        "Rendered %s task with %d points into %d features",
        task.task_type,
        len(task.points),
        len(features),
    )
    return FeatureCollection(features=features)


def course_line_feature(task: Task) -> Feature | None:
    """Polyline through every point, or ``None`` when there is no leg."""
    if len(task.points) < 2:
        return None
    coordinates = [
        (p.waypoint.location.longitude, p.waypoint.location.latitude) for p in task.points
    ]
    return Feature(
        properties=FeatureProperties(feature_type="course_line"),
        geometry=LineStringGeometry(coordinates=coordinates),
    )


def observation_zone_feature(
    point: TaskPoint,
    bearing_in: float | None,
    bearing_out: float | None,
) -> Feature | None:
    orientation = bisector(bearing_in, bearing_out)
    geometry = zone_geometry(point.observation_zone, point.waypoint.location, orientation)
    if geometry is None:
        return None
    return Feature(
        properties=FeatureProperties(
            feature_type="observation_zone",
            name=point.waypoint.name,
            point_type=point.point_type,
        ),
        geometry=geometry,
    )


def waypoint_feature(point: TaskPoint, turnpoint_number: int | None = None) -> Feature:
    name = point.waypoint.name
    if turnpoint_number is not None:
        name = f"{turnpoint_number}. {name}"
    location = point.waypoint.location
    return Feature(
        properties=FeatureProperties(
            feature_type="waypoint",
            name=name,
            point_type=point.point_type,
        ),
        geometry=PointGeometry(coordinates=(location.longitude, location.latitude)),
    )
