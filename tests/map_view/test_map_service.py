import asyncio
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from campus_records import RemoteStoreError
from map_view import MapConfiguration, MapService, Viewport
from marker_index import MarkerKind


class TestMapService:
    def test_reload(self, map_service: MapService) -> None:
        # Act
        asyncio.run(map_service.reload())

        # Assert
        state = map_service.state
        assert len(state.geo_nodes) == 7
        assert len(state.faculty) == 2
        assert len(state.courses) == 3
        assert len(state.marker_index.markers) == 8

        assert len(map_service.renderer.features("campus_features")) == 5
        assert len(map_service.renderer.features("course_rooms")) == 2
        assert len(map_service.renderer.features("faculty")) == 1

    def test_load_order_does_not_matter(
        self, map_configuration: MapConfiguration, record_repository: MagicMock
    ) -> None:
        # Arrange
        first = MapService(map_configuration, record_repository)
        second = MapService(map_configuration, record_repository)

        async def load_in_order(service: MapService, reverse: bool) -> None:
            loaders = [service.load_base_map, service.load_faculty, service.load_courses]
            for loader in reversed(loaders) if reverse else loaders:
                await loader()

        # Act
        asyncio.run(load_in_order(first, reverse=False))
        asyncio.run(load_in_order(second, reverse=True))

        # Assert
        assert first.state.marker_index == second.state.marker_index

    def test_refetch_removes_deleted_records(
        self, map_service: MapService, record_repository: MagicMock
    ) -> None:
        # Arrange
        asyncio.run(map_service.reload())
        assert "faculty:f-1" in map_service.state.marker_index
        record_repository.fetch_public_faculty.return_value = []

        # Act
        asyncio.run(map_service.load_faculty())

        # Assert
        assert "faculty:f-1" not in map_service.state.marker_index
        assert map_service.renderer.features("faculty") == []

    def test_failed_fetch_keeps_previous_state(
        self,
        map_service: MapService,
        record_repository: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        # Arrange
        asyncio.run(map_service.reload())
        previous_state = map_service.state
        record_repository.fetch_public_faculty.side_effect = RemoteStoreError("down")
        record_repository.fetch_courses.side_effect = RemoteStoreError("down")

        # Act
        with caplog.at_level(logging.ERROR):
            asyncio.run(map_service.reload())

        # Assert
        assert map_service.state.faculty == previous_state.faculty
        assert map_service.state.courses == previous_state.courses
        assert map_service.state.marker_index == previous_state.marker_index
        assert "Failed to fetch faculty members" in caplog.text
        assert "Failed to fetch courses" in caplog.text

    def test_failed_fetch_from_empty_state(
        self, map_service: MapService, record_repository: MagicMock
    ) -> None:
        # Arrange
        record_repository.fetch_courses.side_effect = RemoteStoreError("down")

        # Act
        asyncio.run(map_service.load_courses())

        # Assert
        assert map_service.state.courses == []
        assert map_service.state.marker_index.markers == []

    def test_missing_geo_document_keeps_base_overlay(
        self,
        map_service: MapService,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        # Arrange
        asyncio.run(map_service.load_base_map())
        map_service.configuration = map_service.configuration.model_copy(
            update={"geo_document_source": str(tmp_path / "missing.osm")}
        )

        # Act
        with caplog.at_level(logging.ERROR):
            asyncio.run(map_service.load_base_map())

        # Assert
        assert len(map_service.state.geo_nodes) == 7
        assert "Unable to fetch geo document" in caplog.text

    def test_unparsable_geo_document_clears_base_overlay(
        self, map_service: MapService, tmp_path: Path
    ) -> None:
        # Arrange
        asyncio.run(map_service.load_base_map())
        broken_document = tmp_path / "broken.osm"
        broken_document.write_text("<osm><node", encoding="utf-8")
        map_service.configuration = map_service.configuration.model_copy(
            update={"geo_document_source": str(broken_document)}
        )

        # Act
        asyncio.run(map_service.load_base_map())

        # Assert
        assert map_service.state.geo_nodes == {}
        assert map_service.renderer.features("campus_features") == []

    def test_undecodable_geo_document_does_not_break_reload(
        self, map_service: MapService, tmp_path: Path
    ) -> None:
        # Arrange
        latin1_document = tmp_path / "latin1.osm"
        latin1_document.write_text(
            '<?xml version="1.0"?><osm version="0.6">'
            '<node id="1" lat="41.0" lon="29.0"><tag k="name" v="Kampüs"/></node>'
            "</osm>",
            encoding="latin-1",
        )
        map_service.configuration = map_service.configuration.model_copy(
            update={"geo_document_source": str(latin1_document)}
        )

        # Act
        asyncio.run(map_service.reload())

        # Assert
        assert map_service.state.geo_nodes == {}
        assert map_service.renderer.features("campus_features") == []
        assert len(map_service.state.marker_index.markers) == 3

    def test_click_with_client_viewport(self, map_service: MapService) -> None:
        # Arrange
        asyncio.run(map_service.reload())
        viewport = Viewport(
            center_lat=41.0262, center_lon=28.9735, zoom=18, width=400, height=400
        )

        # Act
        result = map_service.click(200, 200, viewport)

        # Assert
        assert map_service.state is result.state
        assert map_service.state.selected_item is not None
        assert map_service.state.selected_item.marker_id == "course:B2"

    def test_activate(self, map_service: MapService) -> None:
        # Arrange
        asyncio.run(map_service.reload())

        # Act
        result = map_service.activate(MarkerKind.FACULTY, "f-1")

        # Assert
        assert map_service.state.selected_item is not None
        assert map_service.state.selected_item.id == "f-1"
        assert result.animation is not None
