from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from campus_records import CourseRecord, FacultyRecord
from geo_document import GeoNode, classify_geo_node
from marker_index.marker import Marker, MarkerKind


class MarkerIndex(BaseModel):
    """
    Addressable collection of all markers shown on the campus map.

    The index merges classified OSM nodes, faculty members and course rooms.
    Courses are reduced to one marker per room: the first course of a room
    carrying coordinates becomes the representative of the marker, while all
    courses of the room are kept in `courses_by_room` for the detail view.

    Instances are immutable. Whenever any of the sources changes a new index is
    built from scratch with `build`, so records removed from a source never
    survive in the index.
    """

    model_config = ConfigDict(frozen=True)

    markers_by_id: dict[str, Marker] = Field(default_factory=dict)
    courses_by_room: dict[str, list[CourseRecord]] = Field(default_factory=dict)

    @classmethod
    def build(
        cls,
        geo_nodes: Iterable[GeoNode] = (),
        faculty: Iterable[FacultyRecord] = (),
        courses: Iterable[CourseRecord] = (),
    ) -> "MarkerIndex":
        markers_by_id: dict[str, Marker] = {}

        for node in geo_nodes:
            if (feature := classify_geo_node(node)) is not None:
                marker = Marker.from_feature(feature)
                markers_by_id[marker.id] = marker

        courses_by_room = cls._group_courses_by_room(courses)
        for room, room_courses in courses_by_room.items():
            representative = next(
                (course for course in room_courses if course.coordinates), None
            )
            if representative is None:
                continue

            if (marker := Marker.from_room(room, representative)) is not None:
                markers_by_id[marker.id] = marker

        for faculty_record in faculty:
            if (marker := Marker.from_faculty(faculty_record)) is not None:
                markers_by_id[marker.id] = marker

        return cls(markers_by_id=markers_by_id, courses_by_room=courses_by_room)

    @staticmethod
    def _group_courses_by_room(
        courses: Iterable[CourseRecord],
    ) -> dict[str, list[CourseRecord]]:
        courses_by_room: dict[str, list[CourseRecord]] = {}
        for course in courses:
            if course.room is None:
                continue

            courses_by_room.setdefault(course.room, []).append(course)

        return courses_by_room

    @property
    def markers(self) -> list[Marker]:
        return list(self.markers_by_id.values())

    def get(self, marker_id: str) -> Marker | None:
        return self.markers_by_id.get(marker_id)

    def by_kind(self, kind: MarkerKind) -> list[Marker]:
        return [marker for marker in self.markers_by_id.values() if marker.kind == kind]

    def courses_for_room(self, room: str) -> list[CourseRecord]:
        return list(self.courses_by_room.get(room, []))

    def as_mapping(self) -> Mapping[str, Marker]:
        return self.markers_by_id

    def __contains__(self, marker_id: object) -> bool:
        return marker_id in self.markers_by_id
