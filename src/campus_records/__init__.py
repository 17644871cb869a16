from .exceptions import EntityNotFoundError, RemoteStoreError
from .faculty_directory import (
    FacultyField,
    ResponseFacultyMember,
    group_by_category,
    visible_fields,
)
from .model import (
    CourseRecord,
    FacultyMemberInput,
    FacultyRecord,
    ScheduleSlot,
)
from .record_repository import CampusRecordRepository
from .remote_store import RemoteStoreClient
from .weekday import Weekday

__all__ = [
    "FacultyRecord",
    "CourseRecord",
    "ScheduleSlot",
    "FacultyMemberInput",
    "Weekday",
    "RemoteStoreClient",
    "CampusRecordRepository",
    "RemoteStoreError",
    "EntityNotFoundError",
    "FacultyField",
    "ResponseFacultyMember",
    "group_by_category",
    "visible_fields",
]
