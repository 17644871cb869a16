from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from campus_records import CourseRecord, FacultyRecord
from geo_document import GeoNode
from map_view.selection import NoSelection, Selected, SelectedItem, SelectionState
from marker_index import MarkerIndex


class MapState(BaseModel):
    """
    Complete state of the map view. Every change produces a new instance;
    changes of any source rebuild the marker index from all current sources.
    """

    model_config = ConfigDict(frozen=True)

    geo_nodes: dict[str, GeoNode] = Field(default_factory=dict)
    faculty: list[FacultyRecord] = Field(default_factory=list)
    courses: list[CourseRecord] = Field(default_factory=list)
    marker_index: MarkerIndex = Field(default_factory=MarkerIndex)
    selection: SelectionState = Field(default_factory=NoSelection)

    def _rebuild(self, **update: object) -> "MapState":
        state = self.model_copy(update=update)
        marker_index = MarkerIndex.build(
            state.geo_nodes.values(), state.faculty, state.courses
        )
        return state.model_copy(update={"marker_index": marker_index})

    def with_geo_nodes(self, geo_nodes: dict[str, GeoNode]) -> "MapState":
        return self._rebuild(geo_nodes=dict(geo_nodes))

    def with_faculty(self, faculty: Iterable[FacultyRecord]) -> "MapState":
        return self._rebuild(faculty=list(faculty))

    def with_courses(self, courses: Iterable[CourseRecord]) -> "MapState":
        return self._rebuild(courses=list(courses))

    def with_selection(self, item: SelectedItem) -> "MapState":
        return self.model_copy(update={"selection": Selected(item=item)})

    @property
    def selected_item(self) -> SelectedItem | None:
        if isinstance(self.selection, Selected):
            return self.selection.item

        return None

    def find_faculty(self, faculty_id: str) -> FacultyRecord | None:
        return next((item for item in self.faculty if item.id == faculty_id), None)

    def find_course(self, course_id: str) -> CourseRecord | None:
        return next((item for item in self.courses if item.id == course_id), None)
