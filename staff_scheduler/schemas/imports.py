from pydantic import BaseModel
from typing import Any, Optional
from staff_scheduler.schemas.staff import StaffResponse
from staff_scheduler.schemas.templates import TemplateResponse


class BaseScheduleImportRequest(BaseModel):
    rows: list[list[Any]]
    template_id: Optional[str] = None  # defaults to the configured base template id
    make_default: bool = True


class SkippedEntryResponse(BaseModel):
    row_number: int
    day_of_week: Optional[int]
    value: str
    reason: str

    class Config:
        from_attributes = True


class BaseScheduleImportResponse(BaseModel):
    template: TemplateResponse
    staff_ids: list[str]
    assignment_count: int
    availability_count: int
    skipped: list[SkippedEntryResponse]


class StaffImportRequest(BaseModel):
    rows: list[list[Any]]


class StaffImportResponse(BaseModel):
    staff: list[StaffResponse]
    availability_count: int
    duplicates: list[str]
    skipped: list[SkippedEntryResponse]
