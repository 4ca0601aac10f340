"""Reader and writer for XCSoar ``.tsk`` task files.

A ``.tsk`` file is a single ``<Task>`` XML element holding ``<Point>``
children. Each point has a ``<Waypoint>`` (with a nested ``<Location>``) and
an ``<ObservationZone>``. Every value is carried as an XML attribute string.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Callable

from pydantic import TypeAdapter, ValidationError

from .models import Location, ObservationZone, Task, TaskPoint, Waypoint

_ZONE_ADAPTER = TypeAdapter(ObservationZone)


class TaskFormatError(ValueError):
    """Raised when a ``.tsk`` document cannot be turned into a Task."""


def read_task(file: str | Path | bytes | BinaryIO) -> Task:
    """Read a ``.tsk`` file and return the parsed Task.

    Args:
        file: Path to a .tsk file, its raw bytes, or a binary file object.
    """
    data = _read_bytes(file)
    return parse_task(data.decode("utf-8", errors="replace"))


def parse_task(xml_text: str) -> Task:
    """Parse ``.tsk`` XML text into a Task."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise TaskFormatError(f"Invalid task XML: {e}") from e

    if root.tag != "Task":
        raise TaskFormatError(f"Expected <Task> root element, found <{root.tag}>")

    fields = {"task_type": _required(root, "type")}
    for attr, convert in _TASK_ATTRIBUTES.items():
        value = root.get(attr)
        if value is not None:
            fields[attr] = _convert(convert, value, attr)
    fields["points"] = [_parse_point(elem) for elem in root.findall("Point")]

    try:
        return Task(**fields)
    except ValidationError as e:
        raise TaskFormatError(f"Invalid task: {e}") from e


def write_task(task: Task, pretty: bool = True) -> str:
    """Serialize a Task to ``.tsk`` XML text.

    Absent optional attributes are omitted. ``parse_task(write_task(t)) == t``.
    """
    attrs = {"type": task.task_type}
    for attr in _TASK_ATTRIBUTES:
        value = getattr(task, attr)
        if value is not None:
            attrs[attr] = _format_value(value)
    root = ET.Element("Task", attrs)

    for point in task.points:
        point_attrs = {"type": point.point_type}
        if point.score_exit is not None:
            point_attrs["score_exit"] = _format_value(point.score_exit)
        point_elem = ET.SubElement(root, "Point", point_attrs)

        wp = point.waypoint
        wp_attrs = {"name": wp.name}
        if wp.altitude is not None:
            wp_attrs["altitude"] = _format_value(wp.altitude)
        if wp.id is not None:
            wp_attrs["id"] = wp.id
        if wp.comment is not None:
            wp_attrs["comment"] = wp.comment
        wp_elem = ET.SubElement(point_elem, "Waypoint", wp_attrs)
        ET.SubElement(
            wp_elem,
            "Location",
            {
                "longitude": _format_value(wp.location.longitude),
                "latitude": _format_value(wp.location.latitude),
            },
        )

        zone_attrs = {
            key: value if key == "type" else _format_value(value)
            for key, value in point.observation_zone.model_dump(exclude_none=True).items()
        }
        ET.SubElement(point_elem, "ObservationZone", zone_attrs)

    if pretty:
        ET.indent(root, space="    ")
    return ET.tostring(root, encoding="unicode")


def _read_bytes(file: str | Path | bytes | BinaryIO) -> bytes:
    if isinstance(file, bytes):
        return file
    if isinstance(file, (str, Path)):
        with open(file, "rb") as f:
            return f.read()
    return file.read()


def _parse_point(elem: ET.Element) -> TaskPoint:
    wp_elem = elem.find("Waypoint")
    if wp_elem is None:
        raise TaskFormatError("<Point> is missing its <Waypoint>")
    loc_elem = wp_elem.find("Location")
    if loc_elem is None:
        raise TaskFormatError(f"Waypoint {wp_elem.get('name')!r} is missing its <Location>")
    zone_elem = elem.find("ObservationZone")
    if zone_elem is None:
        raise TaskFormatError("<Point> is missing its <ObservationZone>")

    try:
        location = Location(
            longitude=_convert(float, _required(loc_elem, "longitude"), "longitude"),
            latitude=_convert(float, _required(loc_elem, "latitude"), "latitude"),
        )
    except ValidationError as e:
        raise TaskFormatError(f"Invalid location for {wp_elem.get('name')!r}: {e}") from e
    altitude = wp_elem.get("altitude")
    waypoint = Waypoint(
        name=_required(wp_elem, "name"),
        location=location,
        altitude=_convert(float, altitude, "altitude") if altitude is not None else None,
        id=wp_elem.get("id"),
        comment=wp_elem.get("comment"),
    )

    try:
        zone = _ZONE_ADAPTER.validate_python(dict(zone_elem.attrib))
    except ValidationError as e:
        raise TaskFormatError(f"Invalid observation zone for {waypoint.name!r}: {e}") from e

    score_exit = elem.get("score_exit")
    try:
        return TaskPoint(
            point_type=_required(elem, "type"),
            waypoint=waypoint,
            observation_zone=zone,
            score_exit=_convert(_parse_bool, score_exit, "score_exit") if score_exit is not None else None,
        )
    except ValidationError as e:
        raise TaskFormatError(f"Invalid point {waypoint.name!r}: {e}") from e


def _required(elem: ET.Element, attr: str) -> str:
    value = elem.get(attr)
    if value is None:
        raise TaskFormatError(f"<{elem.tag}> is missing required attribute {attr!r}")
    return value


def _convert(convert: Callable[[str], object], value: str, attr: str):
    try:
        return convert(value)
    except ValueError as e:
        raise TaskFormatError(f"Invalid value for {attr!r}: {value!r}") from e


def _parse_bool(value: str) -> bool:
    if value in ("1", "true"):
        return True
    if value in ("0", "false"):
        return False
    raise ValueError(f"invalid bool: {value}")


def _parse_altitude_reference(value: str) -> str:
    # XCSoar treats anything that isn't "MSL" as AGL
    return "MSL" if value == "MSL" else "AGL"


def _format_value(value: bool | int | float | str) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


_TASK_ATTRIBUTES: dict[str, Callable[[str], object]] = {
    "aat_min_time": int,
    "start_requires_arm": _parse_bool,
    "start_score_exit": _parse_bool,
    "start_max_speed": float,
    "start_max_height": int,
    "start_max_height_ref": _parse_altitude_reference,
    "start_open_time": int,
    "start_close_time": int,
    "finish_min_height": int,
    "finish_min_height_ref": _parse_altitude_reference,
    "fai_finish": _parse_bool,
    "pev_start_wait_time": int,
    "pev_start_window": int,
}
