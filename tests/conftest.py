from pathlib import Path
from unittest.mock import MagicMock

import pytest

from campus_records import CampusRecordRepository, CourseRecord, FacultyRecord
from map_view import MapConfiguration, MapService

CAMPUS_OSM_PATH = Path("tests") / "assets" / "campus.osm"


@pytest.fixture
def campus_osm_text() -> str:
    return CAMPUS_OSM_PATH.read_text(encoding="utf-8")


@pytest.fixture
def faculty_records() -> list[FacultyRecord]:
    return [
        FacultyRecord(
            id="f-1",
            name="Ayse Yilmaz",
            title="Prof. Dr.",
            department="Management Information Systems",
            office="A-201",
            email="ayse.yilmaz@example.edu",
            category="Professors",
            lat=41.0257,
            lon=28.9745,
        ),
        FacultyRecord(
            id="f-2",
            name="Mehmet Demir",
            title="Dr.",
            department="Management Information Systems",
            office="B-105",
            category="Lecturers",
        ),
    ]


@pytest.fixture
def course_records() -> list[CourseRecord]:
    return [
        CourseRecord.model_validate(
            {
                "id": "c-1",
                "code": "MIS101",
                "name": "Introduction to Information Systems",
                "instructor": "Ayse Yilmaz",
                "room": "A1",
                "day": "monday",
                "start_time": "09:00",
                "end_time": "10:50",
                "lat": 41.0251,
                "lon": 28.9748,
            }
        ),
        CourseRecord.model_validate(
            {
                "id": "c-2",
                "code": "MIS202",
                "name": "Database Systems",
                "instructor": "Mehmet Demir",
                "room": "A1",
                "day": "wednesday",
                "start_time": "13:00",
                "end_time": "14:50",
                "lat": 41.0251,
                "lon": 28.9748,
            }
        ),
        CourseRecord.model_validate(
            {
                "id": "c-3",
                "code": "MIS303",
                "name": "Systems Analysis",
                "instructor": "Ayse Yilmaz",
                "room": "B2",
                "day": "friday",
                "start_time": "11:00",
                "end_time": "12:50",
                "lat": 41.0262,
                "lon": 28.9735,
            }
        ),
    ]


@pytest.fixture
def map_configuration() -> MapConfiguration:
    return MapConfiguration(
        geo_document_source=str(CAMPUS_OSM_PATH),
        center_lat=41.0256,
        center_lon=28.9744,
        default_zoom=17,
        selection_zoom=19,
        animation_duration_ms=750,
        viewport_width=800,
        viewport_height=600,
    )


@pytest.fixture
def record_repository(
    faculty_records: list[FacultyRecord], course_records: list[CourseRecord]
) -> MagicMock:
    repository = MagicMock(spec=CampusRecordRepository)
    repository.fetch_public_faculty.return_value = faculty_records
    repository.fetch_faculty.return_value = faculty_records
    repository.fetch_courses.return_value = course_records
    return repository


@pytest.fixture
def map_service(
    map_configuration: MapConfiguration, record_repository: MagicMock
) -> MapService:
    return MapService(map_configuration, record_repository)
