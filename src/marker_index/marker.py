from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from campus_records import CourseRecord, FacultyRecord
from geo_document import ClassifiedFeature, FeatureCategory, GeoNode


class MarkerKind(StrEnum):
    FACULTY = "faculty"
    COURSE = "course"
    OSM_NODE = "osm_node"


class Marker(BaseModel):
    """
    Renderable point of interest.
    Attributes:
        id (str): Identifier of the marker, `<kind>:<source id>`; course markers
            are keyed by room.
        kind (MarkerKind): Source the marker was derived from.
        lat (float): Geographic latitude of the marker.
        lon (float): Geographic longitude of the marker.
        color (str): Display color as six hex digits.
        label (str): Text shown next to the marker.
        category (Optional[FeatureCategory]): Category of OSM node markers.
        source: Faculty record, representative course record or geo node.
    """

    FACULTY_COLOR: ClassVar[str] = "EF4444"
    COURSE_COLOR: ClassVar[str] = "8B5CF6"

    model_config = ConfigDict(frozen=True)

    id: str
    kind: MarkerKind
    lat: float
    lon: float
    color: str
    label: str
    category: FeatureCategory | None = None
    source: FacultyRecord | CourseRecord | GeoNode

    @staticmethod
    def make_id(kind: MarkerKind, source_id: str) -> str:
        return f"{kind.value}:{source_id}"

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.lat, self.lon)

    @classmethod
    def from_feature(cls, feature: ClassifiedFeature) -> "Marker":
        return cls(
            id=cls.make_id(MarkerKind.OSM_NODE, feature.node.id),
            kind=MarkerKind.OSM_NODE,
            lat=feature.node.lat,
            lon=feature.node.lon,
            color=feature.color,
            label=feature.label,
            category=feature.category,
            source=feature.node,
        )

    @classmethod
    def from_faculty(cls, faculty: FacultyRecord) -> "Marker | None":
        if (coordinates := faculty.coordinates) is None:
            return None

        lat, lon = coordinates
        return cls(
            id=cls.make_id(MarkerKind.FACULTY, faculty.id),
            kind=MarkerKind.FACULTY,
            lat=lat,
            lon=lon,
            color=cls.FACULTY_COLOR,
            label=faculty.name,
            source=faculty,
        )

    @classmethod
    def from_room(cls, room: str, course: CourseRecord) -> "Marker | None":
        if (coordinates := course.coordinates) is None:
            return None

        lat, lon = coordinates
        return cls(
            id=cls.make_id(MarkerKind.COURSE, room),
            kind=MarkerKind.COURSE,
            lat=lat,
            lon=lon,
            color=cls.COURSE_COLOR,
            label=room,
            source=course,
        )
