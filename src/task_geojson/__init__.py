"""Render gliding competition tasks as map-ready GeoJSON features."""

from .exporter import collection_to_shapefile_zip
from .features import task_to_feature_collection
from .geodesy import MissingOrientationReference, bearing, bisector, destination
from .models import Feature, FeatureCollection, Location, Task, TaskPoint, Waypoint
from .tsk_reader import TaskFormatError, parse_task, read_task, write_task
from .zones import zone_geometry

__all__ = [
    "Feature",
    "FeatureCollection",
    "Location",
    "MissingOrientationReference",
    "Task",
    "TaskFormatError",
    "TaskPoint",
    "Waypoint",
    "bearing",
    "bisector",
    "collection_to_shapefile_zip",
    "destination",
    "parse_task",
    "read_task",
    "task_to_feature_collection",
    "write_task",
    "zone_geometry",
]
