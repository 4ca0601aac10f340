"""Pydantic data models for gliding tasks and their GeoJSON rendering."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

TaskType = Literal[
    "AAT", "RT", "FAIGeneral", "FAITriangle", "FAIOR", "FAIGoal", "MAT", "Mixed", "Touring"
]
PointType = Literal["Start", "Turn", "Area", "Finish", "OptionalStart"]
AltitudeReference = Literal["AGL", "MSL"]
FeatureType = Literal["course_line", "observation_zone", "waypoint"]

Position = tuple[float, float]  # (lon, lat)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Task input -------------------------------------------------------------


class Location(_Frozen):
    """A geographic position in degrees."""

    longitude: float = Field(ge=-180.0, le=180.0)
    latitude: float = Field(ge=-90.0, le=90.0)


class Waypoint(_Frozen):
    """A named waypoint. Only ``name`` and ``location`` matter for rendering."""

    name: str
    location: Location
    altitude: float | None = None
    id: str | None = None
    comment: str | None = None


class CylinderZone(_Frozen):
    type: Literal["Cylinder"] = "Cylinder"
    radius: float


class LineZone(_Frozen):
    type: Literal["Line"] = "Line"
    length: float


class KeyholeZone(_Frozen):
    """DAeC keyhole: 500 m cylinder or 10 km 90° sector."""

    type: Literal["Keyhole"] = "Keyhole"


class FAISectorZone(_Frozen):
    """FAI 90° sector with infinite sides."""

    type: Literal["FAISector"] = "FAISector"


class SectorZone(_Frozen):
    """Sector between two absolute radials; annular when ``inner_radius`` is set."""

    type: Literal["Sector"] = "Sector"
    radius: float
    start_radial: float
    end_radial: float
    inner_radius: float | None = None


class SymmetricQuadrantZone(_Frozen):
    type: Literal["SymmetricQuadrant"] = "SymmetricQuadrant"
    radius: float | None = None
    angle: float | None = None


class CustomKeyholeZone(_Frozen):
    type: Literal["CustomKeyhole"] = "CustomKeyhole"
    radius: float | None = None
    angle: float | None = None
    inner_radius: float | None = None


class MatCylinderZone(_Frozen):
    """Fixed one-mile cylinder used by Modified Area Tasks."""

    type: Literal["MatCylinder"] = "MatCylinder"


class BGAStartSectorZone(_Frozen):
    type: Literal["BGAStartSector"] = "BGAStartSector"


class BGAFixedCourseZone(_Frozen):
    type: Literal["BGAFixedCourse"] = "BGAFixedCourse"


class BGAEnhancedOptionZone(_Frozen):
    type: Literal["BGAEnhancedOption"] = "BGAEnhancedOption"


ObservationZone = Annotated[
    Union[
        CylinderZone,
        LineZone,
        KeyholeZone,
        FAISectorZone,
        SectorZone,
        SymmetricQuadrantZone,
        CustomKeyholeZone,
        MatCylinderZone,
        BGAStartSectorZone,
        BGAFixedCourseZone,
        BGAEnhancedOptionZone,
    ],
    Field(discriminator="type"),
]


class TaskPoint(_Frozen):
    """One turnpoint of a task: its role, waypoint and observation zone."""

    point_type: PointType
    waypoint: Waypoint
    observation_zone: ObservationZone
    score_exit: bool | None = None


class Task(_Frozen):
    """A competition task. ``points`` are in flight order."""

    task_type: TaskType
    points: list[TaskPoint] = Field(default_factory=list)
    aat_min_time: int | None = None
    start_requires_arm: bool | None = None
    start_score_exit: bool | None = None
    start_max_speed: float | None = None
    start_max_height: int | None = None
    start_max_height_ref: AltitudeReference | None = None
    start_open_time: int | None = None
    start_close_time: int | None = None
    finish_min_height: int | None = None
    finish_min_height_ref: AltitudeReference | None = None
    fai_finish: bool | None = None
    pev_start_wait_time: int | None = None
    pev_start_window: int | None = None


# --- GeoJSON output ---------------------------------------------------------


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: Position


class LineStringGeometry(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: list[Position]


class PolygonGeometry(BaseModel):
    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[Position]]

    @field_validator("coordinates")
    @classmethod
    def validate_closed_rings(cls, rings: list[list[Position]]):
        for ring in rings:
            if not ring or ring[0] != ring[-1]:
                raise ValueError("Polygon rings must be closed (first position repeated last)")
        return rings


Geometry = Annotated[
    Union[PointGeometry, LineStringGeometry, PolygonGeometry],
    Field(discriminator="type"),
]


class FeatureProperties(BaseModel):
    feature_type: FeatureType
    name: str | None = None
    point_type: PointType | None = None


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    properties: FeatureProperties
    geometry: Geometry


class FeatureCollection(BaseModel):
    """Rendered task, ready for ``model_dump(mode="json", exclude_none=True)``."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)
