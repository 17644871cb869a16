from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from campus_records import EntityNotFoundError, FacultyRecord, RemoteStoreError
from map_view import MapService
from server import app, get_map_service


class TestServer:
    client = TestClient(app)

    @pytest.fixture(autouse=True)
    def override_map_service(
        self, map_service: MapService
    ) -> Generator[MapService, None, None]:
        app.dependency_overrides[get_map_service] = lambda: map_service
        yield map_service
        app.dependency_overrides.clear()

    def _reload(self) -> None:
        response = self.client.post("/map/reload")
        assert response.status_code == 200

    def test_map_before_reload(self) -> None:
        # Act
        response = self.client.get("/map")
        payload = response.json()

        # Assert
        assert response.status_code == 200
        assert payload["markers"] == []
        assert payload["selection"] == {"status": "none"}
        assert payload["viewport"]["zoom"] == 17
        assert "{z}" in payload["tile_url_template"]

    def test_reload(self) -> None:
        # Act
        response = self.client.post("/map/reload")
        markers = response.json()["markers"]

        # Assert
        assert response.status_code == 200
        assert len(markers) == 8
        assert {marker["kind"] for marker in markers} == {
            "faculty",
            "course",
            "osm_node",
        }

        for marker in markers:
            assert isinstance(marker["lat"], float)
            assert isinstance(marker["lon"], float)
            assert len(marker["color"]) == 6
            assert marker["id"].startswith(f"{marker['kind']}:")

    def test_get_markers(self) -> None:
        # Arrange
        self._reload()

        # Act
        response = self.client.get("/map/markers")

        # Assert
        assert response.status_code == 200
        assert len(response.json()) == 8

    def test_get_course_marker_detail(self) -> None:
        # Arrange
        self._reload()

        # Act
        response = self.client.get("/map/markers/course:A1")
        payload = response.json()

        # Assert
        assert response.status_code == 200
        assert payload["marker"]["label"] == "A1"
        assert [course["id"] for course in payload["courses"]] == ["c-1", "c-2"]
        assert payload["courses"][0]["schedule"] == {
            "day": "monday",
            "start_time": "09:00:00",
            "end_time": "10:50:00",
        }

    def test_get_faculty_marker_detail(self) -> None:
        # Arrange
        self._reload()

        # Act
        response = self.client.get("/map/markers/faculty:f-1")

        # Assert
        assert response.status_code == 200
        assert response.json()["courses"] == []
        assert response.json()["marker"]["source"]["name"] == "Ayse Yilmaz"

    def test_get_unknown_marker(self) -> None:
        # Act
        response = self.client.get("/map/markers/faculty:unknown")

        # Assert
        assert response.status_code == 404

    def test_click(self, map_service: MapService) -> None:
        # Arrange
        self._reload()
        x, y = map_service.renderer.viewport.coordinate_to_pixel(41.0257, 28.9745)

        # Act
        response = self.client.post("/map/click", json={"x": x, "y": y})
        payload = response.json()

        # Assert
        assert response.status_code == 200
        assert payload["selection"]["status"] == "selected"
        assert payload["selection"]["item"]["id"] == "f-1"
        assert payload["selection"]["item"]["kind"] == "faculty"
        assert payload["animation"] == {
            "center_lat": 41.0257,
            "center_lon": 28.9745,
            "zoom": 19.0,
            "duration_ms": 750,
        }

    def test_click_miss(self) -> None:
        # Arrange
        self._reload()

        # Act
        response = self.client.post(
            "/map/click",
            json={
                "x": 5,
                "y": 5,
                "viewport": {
                    "center_lat": 0.0,
                    "center_lon": 0.0,
                    "zoom": 10,
                    "width": 100,
                    "height": 100,
                },
            },
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"selection": {"status": "none"}, "animation": None}

    def test_select_and_get_selection(self) -> None:
        # Arrange
        self._reload()

        # Act
        select_response = self.client.post("/map/select/course/c-3")
        selection_response = self.client.get("/map/selection")

        # Assert
        assert select_response.status_code == 200
        assert select_response.json()["animation"]["center_lat"] == 41.0262
        assert selection_response.status_code == 200
        selection = selection_response.json()
        assert selection["status"] == "selected"
        assert selection["item"]["marker_id"] == "course:B2"

    @pytest.mark.parametrize(
        ("path", "expected_status_code"),
        [
            pytest.param("/map/select/faculty/f-404", 404, id="unknown_entity"),
            pytest.param("/map/select/osm_node/1001", 400, id="unselectable_kind"),
            pytest.param("/map/select/building/1001", 422, id="invalid_kind"),
        ],
    )
    def test_select_errors(self, path: str, expected_status_code: int) -> None:
        # Arrange
        self._reload()

        # Act
        response = self.client.post(path)

        # Assert
        assert response.status_code == expected_status_code

    def test_faculty_directory(self) -> None:
        # Act
        response = self.client.get("/faculty")
        directory = response.json()

        # Assert
        assert response.status_code == 200
        assert list(directory) == ["Lecturers", "Professors"]
        professor = directory["Professors"][0]
        assert professor["name"] == "Ayse Yilmaz"
        assert [field["key"] for field in professor["fields"]] == ["office", "email"]

    def test_faculty_directory_store_failure(
        self, record_repository: MagicMock
    ) -> None:
        # Arrange
        record_repository.fetch_public_faculty.side_effect = RemoteStoreError("down")

        # Act
        response = self.client.get("/faculty")

        # Assert
        assert response.status_code == 200
        assert response.json() == {}

    @pytest.mark.parametrize(
        ("query", "expected_ids"),
        [
            pytest.param("", ["c-1", "c-2", "c-3"], id="all"),
            pytest.param("?weekday=monday", ["c-1"], id="monday"),
            pytest.param("?weekday=sunday", [], id="sunday"),
        ],
    )
    def test_courses(self, query: str, expected_ids: list[str]) -> None:
        # Act
        response = self.client.get(f"/courses{query}")

        # Assert
        assert response.status_code == 200
        assert [course["id"] for course in response.json()] == expected_ids

    def test_courses_invalid_weekday(self) -> None:
        # Act
        response = self.client.get("/courses?weekday=someday")

        # Assert
        assert response.status_code == 422

    def test_admin_list_faculty(self) -> None:
        # Act
        response = self.client.get("/admin/faculty")

        # Assert
        assert response.status_code == 200
        assert [member["id"] for member in response.json()] == ["f-1", "f-2"]

    def test_admin_create_faculty(
        self, map_service: MapService, record_repository: MagicMock
    ) -> None:
        # Arrange
        created = FacultyRecord(
            id="f-3", name="Zeynep Kaya", title="Assoc. Prof.", lat=41.0249, lon=28.9755
        )
        record_repository.create_faculty.return_value = created
        record_repository.fetch_public_faculty.return_value = [
            *record_repository.fetch_public_faculty.return_value,
            created,
        ]

        # Act
        response = self.client.post(
            "/admin/faculty",
            json={"name": "Zeynep Kaya", "title": "Assoc. Prof.", "email": ""},
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["id"] == "f-3"
        member = record_repository.create_faculty.call_args.args[0]
        assert member.email is None
        assert "faculty:f-3" in map_service.state.marker_index

    def test_admin_update_missing_faculty(self, record_repository: MagicMock) -> None:
        # Arrange
        record_repository.update_faculty.side_effect = EntityNotFoundError(
            "faculty", "f-404"
        )

        # Act
        response = self.client.put(
            "/admin/faculty/f-404", json={"name": "Nobody", "title": "Dr."}
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["detail"] == "Faculty f-404 not found."

    def test_admin_update_store_failure(self, record_repository: MagicMock) -> None:
        # Arrange
        record_repository.update_faculty.side_effect = RemoteStoreError("down", 503)

        # Act
        response = self.client.put(
            "/admin/faculty/f-1", json={"name": "Ayse Yilmaz", "title": "Prof. Dr."}
        )

        # Assert
        assert response.status_code == 502

    def test_admin_delete_faculty_removes_marker(
        self, map_service: MapService, record_repository: MagicMock
    ) -> None:
        # Arrange
        self._reload()
        assert "faculty:f-1" in map_service.state.marker_index
        record_repository.fetch_public_faculty.return_value = []

        # Act
        response = self.client.delete("/admin/faculty/f-1")

        # Assert
        assert response.status_code == 204
        record_repository.delete_faculty.assert_called_once_with("f-1")
        assert "faculty:f-1" not in map_service.state.marker_index

    def test_admin_delete_missing_faculty(self, record_repository: MagicMock) -> None:
        # Arrange
        record_repository.delete_faculty.side_effect = EntityNotFoundError(
            "faculty", "f-404"
        )

        # Act
        response = self.client.delete("/admin/faculty/f-404")

        # Assert
        assert response.status_code == 404
