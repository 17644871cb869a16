import logging
from typing import Any, ClassVar, TypeVar

from pydantic import ValidationError

from campus_records.exceptions import EntityNotFoundError
from campus_records.model import (
    BaseCampusRecord,
    CourseRecord,
    FacultyMemberInput,
    FacultyRecord,
)
from campus_records.remote_store import RemoteStoreClient

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseCampusRecord)


class CampusRecordRepository:
    FACULTY_TABLE: ClassVar[str] = "faculty_members"
    COURSES_TABLE: ClassVar[str] = "courses"
    PUBLIC_FACULTY_FUNCTION: ClassVar[str] = "get_public_faculty_members"

    def __init__(self, client: RemoteStoreClient) -> None:
        self._client = client

    @staticmethod
    def _parse_rows(
        record_type: type[RecordT], rows: list[dict[str, Any]]
    ) -> list[RecordT]:
        records: list[RecordT] = []
        for row in rows:
            try:
                records.append(record_type.model_validate(row))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed %s row %s: %s",
                    record_type.__name__,
                    row.get("id"),
                    exc,
                )

        return records

    def fetch_public_faculty(self) -> list[FacultyRecord]:
        rows = self._client.call(self.PUBLIC_FACULTY_FUNCTION)
        return self._parse_rows(FacultyRecord, rows)

    def fetch_faculty(self) -> list[FacultyRecord]:
        rows = self._client.select(
            self.FACULTY_TABLE, order=[("display_order", True), ("name", True)]
        )
        return self._parse_rows(FacultyRecord, rows)

    def fetch_courses(self) -> list[CourseRecord]:
        rows = self._client.select(self.COURSES_TABLE, order=[("room", True)])
        return self._parse_rows(CourseRecord, rows)

    def create_faculty(self, member: FacultyMemberInput) -> FacultyRecord:
        row = self._client.insert(self.FACULTY_TABLE, member.to_row())
        return FacultyRecord.model_validate(row)

    def update_faculty(
        self, faculty_id: str, member: FacultyMemberInput
    ) -> FacultyRecord:
        row = self._client.update(self.FACULTY_TABLE, faculty_id, member.to_row())
        if row is None:
            raise EntityNotFoundError("faculty", faculty_id)

        return FacultyRecord.model_validate(row)

    def delete_faculty(self, faculty_id: str) -> None:
        if not self._client.delete(self.FACULTY_TABLE, faculty_id):
            raise EntityNotFoundError("faculty", faculty_id)
