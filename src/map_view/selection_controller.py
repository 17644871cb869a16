import logging

from pydantic import BaseModel, ConfigDict

from campus_records import CourseRecord, EntityNotFoundError, FacultyRecord
from map_view.exceptions import UnselectableKindError
from map_view.map_configuration import MapConfiguration
from map_view.map_state import MapState
from map_view.marker_layer_adapter import MarkerLayerAdapter
from map_view.renderer import MapRenderer
from map_view.selection import SelectedItem
from map_view.view_animation import ViewAnimation
from marker_index import Marker, MarkerKind

logger = logging.getLogger(__name__)


class SelectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: MapState
    animation: ViewAnimation | None = None


class SelectionController:
    """
    Resolves clicks and list activations to the single selected item.

    There are two states, nothing selected and one item selected. Every
    successful selection replaces the previous one and there is no transition
    back to the empty state. Clicks which do not hit any selectable marker
    leave the state untouched. When the selected entity has coordinates the
    renderer animates the view to them.
    """

    def __init__(self, renderer: MapRenderer, configuration: MapConfiguration) -> None:
        self._renderer = renderer
        self._configuration = configuration

    def click(self, state: MapState, x: float, y: float) -> SelectionResult:
        marker_id = self._renderer.hit_test(
            x, y, layers=MarkerLayerAdapter.SELECTABLE_LAYERS
        )
        if marker_id is None:
            return SelectionResult(state=state)

        if (marker := state.marker_index.get(marker_id)) is None:
            logger.warning("Hit marker %s is missing in the marker index", marker_id)
            return SelectionResult(state=state)

        return self._select(state, self._get_item_for_marker(marker))

    def activate(
        self, state: MapState, kind: MarkerKind, entity_id: str
    ) -> SelectionResult:
        entity: FacultyRecord | CourseRecord | None
        match kind:
            case MarkerKind.FACULTY:
                entity = state.find_faculty(entity_id)
            case MarkerKind.COURSE:
                entity = state.find_course(entity_id)
            case _:
                raise UnselectableKindError(kind)

        if entity is None:
            raise EntityNotFoundError(kind.value, entity_id)

        marker_id = self._get_marker_id_for_entity(state, kind, entity)
        return self._select(
            state,
            SelectedItem(id=entity.id, kind=kind, entity=entity, marker_id=marker_id),
        )

    @staticmethod
    def _get_item_for_marker(marker: Marker) -> SelectedItem:
        entity = marker.source
        if not isinstance(entity, (FacultyRecord, CourseRecord)):
            raise UnselectableKindError(marker.kind)

        return SelectedItem(
            id=entity.id, kind=marker.kind, entity=entity, marker_id=marker.id
        )

    @staticmethod
    def _get_marker_id_for_entity(
        state: MapState, kind: MarkerKind, entity: FacultyRecord | CourseRecord
    ) -> str | None:
        if isinstance(entity, CourseRecord):
            if entity.room is None:
                return None
            marker_id = Marker.make_id(kind, entity.room)
        else:
            marker_id = Marker.make_id(kind, entity.id)

        return marker_id if marker_id in state.marker_index else None

    def _select(self, state: MapState, item: SelectedItem) -> SelectionResult:
        animation = None
        if (coordinates := item.coordinates) is not None:
            lat, lon = coordinates
            animation = ViewAnimation(
                center_lat=lat,
                center_lon=lon,
                zoom=self._configuration.selection_zoom,
                duration_ms=self._configuration.animation_duration_ms,
            )
            self._renderer.animate_view(animation)

        return SelectionResult(state=state.with_selection(item), animation=animation)
