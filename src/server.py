import asyncio
import logging
import os
from contextlib import asynccontextmanager
from functools import cache
from typing import AsyncIterator

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.gzip import GZipMiddleware
from pydantic import BaseModel

from campus_records import (
    CourseRecord,
    EntityNotFoundError,
    FacultyMemberInput,
    FacultyRecord,
    RemoteStoreError,
    ResponseFacultyMember,
    Weekday,
    group_by_category,
)
from map_view import (
    MapService,
    SelectionResult,
    SelectionState,
    UnselectableKindError,
    ViewAnimation,
    Viewport,
)
from marker_index import Marker, MarkerKind

logger = logging.getLogger(__name__)


@cache
def get_map_service() -> MapService:
    return MapService.from_environment()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await get_map_service().reload()
    yield


app = FastAPI(lifespan=lifespan)
app.add_middleware(GZipMiddleware)


class ResponseMap(BaseModel):
    viewport: Viewport
    tile_url_template: str
    markers: list[Marker]
    selection: SelectionState


class ResponseMarkerDetail(BaseModel):
    marker: Marker
    courses: list[CourseRecord]


class ResponseSelection(BaseModel):
    selection: SelectionState
    animation: ViewAnimation | None = None

    @classmethod
    def from_result(cls, result: SelectionResult) -> "ResponseSelection":
        return cls(selection=result.state.selection, animation=result.animation)


class PixelClick(BaseModel):
    x: float
    y: float
    viewport: Viewport | None = None


def _get_response_map(map_service: MapService) -> ResponseMap:
    return ResponseMap(
        viewport=map_service.renderer.viewport,
        tile_url_template=map_service.configuration.tile_url_template,
        markers=map_service.state.marker_index.markers,
        selection=map_service.state.selection,
    )


@app.get("/map")
def get_map(map_service: MapService = Depends(get_map_service)) -> ResponseMap:
    """
    Returns current viewport, base tile layer and all markers of the campus map.
    """
    return _get_response_map(map_service)


@app.get("/map/markers")
def get_markers(map_service: MapService = Depends(get_map_service)) -> list[Marker]:
    return map_service.state.marker_index.markers


@app.get("/map/markers/{marker_id}")
def get_marker(
    marker_id: str, map_service: MapService = Depends(get_map_service)
) -> ResponseMarkerDetail:
    """
    Returns the marker with all courses held in its room for course markers.
    """
    marker_index = map_service.state.marker_index
    if (marker := marker_index.get(marker_id)) is None:
        raise HTTPException(404, f"Marker {marker_id} not found")

    courses = (
        marker_index.courses_for_room(marker.source.room)
        if isinstance(marker.source, CourseRecord) and marker.source.room
        else []
    )
    return ResponseMarkerDetail(marker=marker, courses=courses)


@app.post("/map/reload")
async def reload_map(
    map_service: MapService = Depends(get_map_service),
) -> ResponseMap:
    """
    Refetches the base map document, faculty members and courses.
    Sources which fail to load keep their previous data.
    """
    await map_service.reload()
    return _get_response_map(map_service)


@app.post("/map/click")
async def click_map(
    click: PixelClick, map_service: MapService = Depends(get_map_service)
) -> ResponseSelection:
    """
    Selects the faculty member or course room under the clicked pixel.
    Clicks outside of any marker leave the selection unchanged.
    """
    return ResponseSelection.from_result(
        map_service.click(click.x, click.y, click.viewport)
    )


@app.post("/map/select/{kind}/{entity_id}")
async def select_entity(
    kind: MarkerKind,
    entity_id: str,
    map_service: MapService = Depends(get_map_service),
) -> ResponseSelection:
    try:
        result = map_service.activate(kind, entity_id)
    except UnselectableKindError as exc:
        raise HTTPException(400, str(exc))
    except EntityNotFoundError as exc:
        raise HTTPException(404, str(exc))

    return ResponseSelection.from_result(result)


@app.get("/map/selection")
async def get_selection(
    map_service: MapService = Depends(get_map_service),
) -> SelectionState:
    return map_service.state.selection


@app.get("/faculty")
def get_faculty_directory(
    map_service: MapService = Depends(get_map_service),
) -> dict[str, list[ResponseFacultyMember]]:
    """
    Returns public faculty profiles grouped by category.
    """
    try:
        members = map_service.repository.fetch_public_faculty()
    except RemoteStoreError as exc:
        logger.error("Failed to fetch faculty directory: %s", exc)
        members = []

    return group_by_category(
        members, map_service.configuration.default_faculty_category
    )


@app.get("/courses")
def get_courses(
    weekday: Weekday | None = Query(None),
    map_service: MapService = Depends(get_map_service),
) -> list[CourseRecord]:
    """
    Returns all courses, or only those held on the given weekday.
    """
    try:
        courses = map_service.repository.fetch_courses()
    except RemoteStoreError as exc:
        logger.error("Failed to fetch courses: %s", exc)
        return []

    if weekday is None:
        return courses

    return [
        course
        for course in courses
        if course.schedule is not None and course.schedule.day == weekday
    ]


@app.get("/admin/faculty")
def list_faculty(
    map_service: MapService = Depends(get_map_service),
) -> list[FacultyRecord]:
    try:
        return map_service.repository.fetch_faculty()
    except RemoteStoreError as exc:
        logger.error("Failed to fetch faculty members: %s", exc)
        return []


@app.post("/admin/faculty", status_code=201)
async def create_faculty(
    member: FacultyMemberInput, map_service: MapService = Depends(get_map_service)
) -> FacultyRecord:
    try:
        created = await asyncio.to_thread(
            map_service.repository.create_faculty, member
        )
    except RemoteStoreError as exc:
        raise HTTPException(502, str(exc))

    await map_service.load_faculty()
    return created


@app.put("/admin/faculty/{faculty_id}")
async def update_faculty(
    faculty_id: str,
    member: FacultyMemberInput,
    map_service: MapService = Depends(get_map_service),
) -> FacultyRecord:
    try:
        updated = await asyncio.to_thread(
            map_service.repository.update_faculty, faculty_id, member
        )
    except EntityNotFoundError as exc:
        raise HTTPException(404, str(exc))
    except RemoteStoreError as exc:
        raise HTTPException(502, str(exc))

    await map_service.load_faculty()
    return updated


@app.delete("/admin/faculty/{faculty_id}", status_code=204)
async def delete_faculty(
    faculty_id: str, map_service: MapService = Depends(get_map_service)
) -> None:
    try:
        await asyncio.to_thread(map_service.repository.delete_faculty, faculty_id)
    except EntityNotFoundError as exc:
        raise HTTPException(404, str(exc))
    except RemoteStoreError as exc:
        raise HTTPException(502, str(exc))

    await map_service.load_faculty()


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("APP_HOST", "127.0.0.1"),
        port=int(os.environ.get("APP_PORT", 8000)),
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
    )
