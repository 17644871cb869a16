import asyncio
import logging
from typing import Self

from campus_records import (
    CampusRecordRepository,
    RemoteStoreClient,
    RemoteStoreError,
)
from geo_document import GeoDocumentFetchError, GeoDocumentLoader, GeoDocumentParser
from map_view.map_configuration import MapConfiguration
from map_view.map_state import MapState
from map_view.marker_layer_adapter import MarkerLayerAdapter
from map_view.renderer import SceneRenderer
from map_view.selection_controller import SelectionController, SelectionResult
from map_view.viewport import Viewport
from marker_index import MarkerKind

logger = logging.getLogger(__name__)


class MapService:
    """
    Owner of the map state.

    The base map document, faculty records and course records are fetched
    independently and may complete in any order. Blocking I/O runs in worker
    threads, while the state itself is only replaced on the event loop thread,
    once per completed fetch. A failed fetch is logged and keeps the previous
    state.
    """

    def __init__(
        self,
        configuration: MapConfiguration,
        repository: CampusRecordRepository,
        *,
        geo_document_loader: GeoDocumentLoader | None = None,
    ) -> None:
        self.configuration = configuration
        self.repository = repository
        self.renderer = SceneRenderer(
            configuration.initial_viewport(), configuration.hit_tolerance_px
        )

        self._geo_document_loader = geo_document_loader or GeoDocumentLoader()
        self._layer_adapter = MarkerLayerAdapter(
            self.renderer, configuration.tile_url_template
        )
        self._selection_controller = SelectionController(self.renderer, configuration)
        self._state = MapState()

    @classmethod
    def from_environment(cls) -> Self:
        return cls(
            MapConfiguration.load(),
            CampusRecordRepository(RemoteStoreClient.from_environment()),
        )

    @property
    def state(self) -> MapState:
        return self._state

    def _apply(self, state: MapState) -> None:
        self._state = state
        diff = self._layer_adapter.sync(state.marker_index)
        logger.debug(
            "Map markers synced: %d added, %d updated, %d removed",
            len(diff.added),
            len(diff.updated),
            len(diff.removed),
        )

    async def load_base_map(self) -> None:
        source = self.configuration.geo_document_source
        try:
            document = await asyncio.to_thread(self._geo_document_loader.fetch, source)
        except GeoDocumentFetchError as exc:
            logger.error("%s", exc)
            return

        geo_nodes = await asyncio.to_thread(GeoDocumentParser.parse, document)
        self._apply(self._state.with_geo_nodes(geo_nodes))

    async def load_faculty(self) -> None:
        try:
            faculty = await asyncio.to_thread(self.repository.fetch_public_faculty)
        except RemoteStoreError as exc:
            logger.error("Failed to fetch faculty members: %s", exc)
            return

        self._apply(self._state.with_faculty(faculty))

    async def load_courses(self) -> None:
        try:
            courses = await asyncio.to_thread(self.repository.fetch_courses)
        except RemoteStoreError as exc:
            logger.error("Failed to fetch courses: %s", exc)
            return

        self._apply(self._state.with_courses(courses))

    async def reload(self) -> None:
        await asyncio.gather(
            self.load_base_map(), self.load_faculty(), self.load_courses()
        )

    def click(
        self, x: float, y: float, viewport: Viewport | None = None
    ) -> SelectionResult:
        if viewport is not None:
            self.renderer.set_viewport(viewport)

        result = self._selection_controller.click(self._state, x, y)
        self._state = result.state
        return result

    def activate(self, kind: MarkerKind, entity_id: str) -> SelectionResult:
        result = self._selection_controller.activate(self._state, kind, entity_id)
        self._state = result.state
        return result
