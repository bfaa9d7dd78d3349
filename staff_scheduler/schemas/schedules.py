from pydantic import BaseModel, Field
from datetime import date, datetime, time
from typing import Optional
from staff_scheduler.core.enums import ChangeKind, ScheduleStatus, SlotCategory


class AssembleRequest(BaseModel):
    template_id: str
    week_starting: str  # ISO date, a Monday


class AssembleFromBaseRequest(BaseModel):
    week_starting: str


class AssembleResponse(BaseModel):
    schedule_id: str
    conflict_count: int

    class Config:
        from_attributes = True


class AssignmentCreate(BaseModel):
    staff_id: str
    day_of_week: int = Field(ge=0, le=6)
    category: SlotCategory = SlotCategory.FULL
    start_time: Optional[time] = None
    end_time: Optional[time] = None


class AssignmentResponse(BaseModel):
    assignment_id: Optional[int]
    schedule_id: str
    day_of_week: int
    staff_id: str
    role: str
    category: SlotCategory
    start_time: time
    end_time: time

    class Config:
        from_attributes = True


class ScheduleResponse(BaseModel):
    schedule_id: str
    template_id: str
    week_starting: date
    status: ScheduleStatus
    assignments: list[AssignmentResponse]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ShiftChangeNoticeResponse(BaseModel):
    recipient_contact: Optional[str]
    staff_id: str
    day_of_week: int
    shift_date: date
    start_time: time
    end_time: time
    position: str
    change_kind: ChangeKind

    class Config:
        from_attributes = True


class PublishResponse(BaseModel):
    schedule: ScheduleResponse
    notices: list[ShiftChangeNoticeResponse]
